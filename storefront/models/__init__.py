"""SQLAlchemy models for the storefront.

All models are READ-ONLY here. Products are written by the admin tooling.
"""

from storefront.models.base import Base, TimestampMixin
from storefront.models.product import ProductRecord

__all__ = [
    "Base",
    "TimestampMixin",
    "ProductRecord",
]
