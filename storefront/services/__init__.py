"""Storefront services."""

from storefront.services.checkout import (
    Cart,
    CartItem,
    CustomerDetails,
    build_order_message,
    build_whatsapp_url,
)

__all__ = [
    "Cart",
    "CartItem",
    "CustomerDetails",
    "build_order_message",
    "build_whatsapp_url",
]
