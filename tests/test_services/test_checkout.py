"""Tests for the cart and order handoff."""

from urllib.parse import parse_qs, urlparse

import pytest
from pydantic import ValidationError

from storefront.catalog.types import Product
from storefront.errors import EmptyCartError
from storefront.services.checkout import (
    Cart,
    CustomerDetails,
    build_order_message,
    build_whatsapp_url,
    format_amount,
)

from tests.factories import make_record


@pytest.fixture
def lift() -> Product:
    return Product.model_validate(
        make_record("two-post-lift", "garagetools", name="Two Post Lift", price=3_200_000)
    )


@pytest.fixture
def wrench() -> Product:
    return Product.model_validate(
        make_record("impact-wrench", "handtools", name="Impact Wrench", brand="", price=180_000)
    )


@pytest.fixture
def customer() -> CustomerDetails:
    return CustomerDetails.model_validate({
        "firstName": "Ada",
        "lastName": "Obi",
        "email": "ada@example.com",
        "address": "12 Marina Road",
        "city": "Lagos",
        "state": "LA",
        "zipCode": "100001",
    })


class TestCart:
    """Tests for cart bookkeeping."""

    def test_add_and_totals(self, lift: Product, wrench: Product):
        cart = Cart()
        cart.add(lift)
        cart.add(wrench, 2)

        assert len(cart) == 2
        assert cart.item_count == 3
        assert cart.total == 3_200_000 + 2 * 180_000

    def test_adding_existing_product_increments(self, lift: Product):
        cart = Cart()
        cart.add(lift)
        cart.add(lift, 2)

        assert len(cart) == 1
        assert cart.items[0].quantity == 3

    def test_non_positive_quantity_ignored(self, lift: Product):
        cart = Cart()
        cart.add(lift, 0)
        cart.add(lift, -1)

        assert len(cart) == 0

    def test_update_quantity(self, lift: Product, wrench: Product):
        cart = Cart()
        cart.add(lift)
        cart.add(wrench)

        cart.update_quantity("two-post-lift", 4)
        cart.update_quantity("impact-wrench", 0)
        cart.update_quantity("unknown", 2)

        assert [(i.product.id, i.quantity) for i in cart] == [("two-post-lift", 4)]

    def test_remove_and_clear(self, lift: Product, wrench: Product):
        cart = Cart()
        cart.add(lift)
        cart.add(wrench)

        cart.remove("two-post-lift")
        assert [i.product.id for i in cart] == ["impact-wrench"]

        cart.clear()
        assert cart.total == 0
        assert cart.item_count == 0


class TestCustomerDetails:
    def test_rejects_bad_email(self):
        with pytest.raises(ValidationError):
            CustomerDetails(
                first_name="Ada",
                last_name="Obi",
                email="not-an-email",
                address="12 Marina Road",
                city="Lagos",
            )

    def test_requires_name(self):
        with pytest.raises(ValidationError):
            CustomerDetails(
                first_name="",
                last_name="Obi",
                email="ada@example.com",
                address="12 Marina Road",
                city="Lagos",
            )


class TestFormatAmount:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (27_000_000, "₦27,000,000"),
            (0, "₦0"),
            (1234.5, "₦1,234.50"),
        ],
    )
    def test_format(self, value, expected):
        assert format_amount(value) == expected

    def test_custom_symbol(self):
        assert format_amount(1500, "$") == "$1,500"


class TestOrderMessage:
    """Tests for the rendered order message."""

    def test_message_contents(self, customer: CustomerDetails, lift: Product, wrench: Product):
        cart = Cart()
        cart.add(lift)
        cart.add(wrench, 2)

        message = build_order_message(customer, cart, store_name="Garutech")

        assert message.startswith("🛒 *New Order from Garutech*")
        assert "Name: Ada Obi" in message
        assert "Phone: Not provided" in message
        assert "Lagos, LA 100001" in message
        assert "1. Two Post Lift" in message
        assert "2. Impact Wrench" in message
        assert "   Brand: N/A" in message
        assert "   Qty: 2 × ₦180,000 = ₦360,000" in message
        assert "Subtotal (3 items): ₦3,560,000" in message
        assert "*Total: ₦3,560,000*" in message

    def test_empty_cart_rejected(self, customer: CustomerDetails):
        with pytest.raises(EmptyCartError):
            build_order_message(customer, Cart())


class TestWhatsAppUrl:
    def test_strips_phone_and_encodes_message(self):
        url = build_whatsapp_url("+234 (800) 000-0000", "Hello & welcome\n100%")

        parsed = urlparse(url)
        assert parsed.netloc == "wa.me"
        assert parsed.path == "/2348000000000"
        assert parse_qs(parsed.query)["text"] == ["Hello & welcome\n100%"]
        assert "%20" in url
        assert "%0A" in url

    def test_phone_without_digits_rejected(self):
        with pytest.raises(ValueError):
            build_whatsapp_url("call us", "hi")
