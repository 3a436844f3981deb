"""Checkout request/response schemas."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from storefront.services.checkout import CustomerDetails


class CheckoutLine(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    product_id: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)


class CheckoutRequest(BaseModel):
    """Cart contents and customer details submitted by the checkout page."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    items: list[CheckoutLine] = Field(min_length=1)
    customer: CustomerDetails


class CheckoutResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    message: str
    whatsapp_url: str
    item_count: int
    total: float
