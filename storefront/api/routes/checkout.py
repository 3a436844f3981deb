"""Checkout endpoint - turns a cart into an order message and chat link."""

from fastapi import APIRouter, HTTPException, status

from storefront.api.deps import QueryEngine
from storefront.config import settings
from storefront.schemas.checkout import CheckoutRequest, CheckoutResponse
from storefront.services.checkout import Cart, build_order_message, build_whatsapp_url

router = APIRouter()


@router.post("", response_model=CheckoutResponse)
async def checkout(request: CheckoutRequest, engine: QueryEngine) -> CheckoutResponse:
    """Resolve cart lines against the catalog and build the order handoff.

    Raises:
        HTTPException: 404 if a cart line references an unknown product
    """
    cart = Cart()
    for line in request.items:
        product = engine.by_id(line.product_id)
        if product is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Product not found: {line.product_id}",
            )
        cart.add(product, line.quantity)

    message = build_order_message(
        request.customer,
        cart,
        store_name=settings.store_name,
        currency_symbol=settings.currency_symbol,
    )
    return CheckoutResponse(
        message=message,
        whatsapp_url=build_whatsapp_url(settings.checkout_phone_number, message),
        item_count=cart.item_count,
        total=cart.total,
    )
