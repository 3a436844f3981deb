"""Checkout - cart totals and the order handoff message.

Orders are not stored or paid for here. The customer's cart and contact
details are rendered into a plain-text message and a WhatsApp deep link
that opens a chat with the store.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from storefront.catalog.types import Product
from storefront.errors import EmptyCartError
from storefront.infra.logging import get_logger

logger = get_logger(__name__)

WHATSAPP_BASE_URL = "https://wa.me"

# Characters browsers leave unescaped in URI components
URI_COMPONENT_SAFE = "!*'()"


@dataclass
class CartItem:
    product: Product
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.product.price * self.quantity


class Cart:
    """Ordered collection of cart lines keyed by product id."""

    def __init__(self) -> None:
        self._items: dict[str, CartItem] = {}

    def add(self, product: Product, quantity: int = 1) -> None:
        """Add a product; adding an existing product increases its quantity."""
        if quantity <= 0:
            return
        existing = self._items.get(product.id)
        if existing:
            existing.quantity += quantity
        else:
            self._items[product.id] = CartItem(product=product, quantity=quantity)

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(product_id)
            return
        item = self._items.get(product_id)
        if item:
            item.quantity = quantity

    def remove(self, product_id: str) -> None:
        self._items.pop(product_id, None)

    def clear(self) -> None:
        self._items.clear()

    @property
    def items(self) -> list[CartItem]:
        return list(self._items.values())

    @property
    def total(self) -> float:
        return sum(item.subtotal for item in self._items.values())

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self._items.values())

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self._items)


class CustomerDetails(BaseModel):
    """Contact and shipping details collected on the checkout form."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str | None = None
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = ""
    zip_code: str = ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Loose shape check; the store confirms by replying."""
        if not re.fullmatch(r"[^@\s]+@[^@\s]+\.[^@\s]+", v):
            raise ValueError("Invalid email address")
        return v


def format_amount(value: float, currency_symbol: str = "₦") -> str:
    """Format an amount with thousands separators, dropping zero decimals."""
    if float(value).is_integer():
        return f"{currency_symbol}{int(value):,}"
    return f"{currency_symbol}{value:,.2f}"


def build_order_message(
    customer: CustomerDetails,
    cart: Cart,
    store_name: str = "Garutech",
    currency_symbol: str = "₦",
) -> str:
    """Render the order as a chat message.

    Raises:
        EmptyCartError: If the cart has no items
    """
    if not len(cart):
        raise EmptyCartError("Cannot check out an empty cart")

    def money(value: float) -> str:
        return format_amount(value, currency_symbol)

    lines = [
        f"🛒 *New Order from {store_name}*",
        "",
        "👤 *Customer Information:*",
        f"Name: {customer.first_name} {customer.last_name}",
        f"Email: {customer.email}",
        f"Phone: {customer.phone or 'Not provided'}",
        "",
        "📍 *Shipping Address:*",
        customer.address,
        f"{customer.city}, {customer.state} {customer.zip_code}".rstrip(),
        "",
        "📦 *Order Items:*",
    ]

    for index, item in enumerate(cart.items, start=1):
        lines.extend([
            f"{index}. {item.product.name}",
            f"   Brand: {item.product.brand or 'N/A'}",
            f"   Qty: {item.quantity} × {money(item.product.price)} = {money(item.subtotal)}",
            "",
        ])

    lines.extend([
        "💰 *Order Summary:*",
        f"Subtotal ({cart.item_count} items): {money(cart.total)}",
        f"*Total: {money(cart.total)}*",
        "",
        "Please confirm this order and provide payment instructions. Thank you! 🙏",
    ])

    logger.info(
        "Order message built",
        items=len(cart),
        item_count=cart.item_count,
        total=cart.total,
    )
    return "\n".join(lines)


def build_whatsapp_url(phone_number: str, message: str) -> str:
    """Deep link that opens a chat with ``message`` prefilled.

    Non-digits are stripped from the phone number.
    """
    digits = re.sub(r"\D", "", phone_number)
    if not digits:
        raise ValueError("phone_number must contain digits")
    return f"{WHATSAPP_BASE_URL}/{digits}?text={quote(message, safe=URI_COMPONENT_SAFE)}"
