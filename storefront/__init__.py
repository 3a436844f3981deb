"""Garutech storefront catalog service."""

__version__ = "0.1.0"
