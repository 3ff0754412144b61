from fastapi import APIRouter, Depends, Request
import structlog

from storefront.api.deps import get_cart_store
from storefront.core.config import settings
from storefront.core.exceptions import EmptyCart
from storefront.core.rate_limiter import limiter
from storefront.schemas.checkout import WhatsAppCheckoutResponse
from storefront.services.cart_store import CartStore
from storefront.services.checkout_message import build_deep_link, build_order_message
from storefront.services.shipping import calculate_checkout_totals
from storefront.utils.response import success

router = APIRouter()
logger = structlog.get_logger()


@router.get("/whatsapp", response_model=dict)
@limiter.limit("30/minute")
def whatsapp_checkout(request: Request, store: CartStore = Depends(get_cart_store)):
    """
    Render the cart as a WhatsApp order message and deep link.

    Shipping is decided once here and passed to the message builder.
    """
    if store.is_empty:
        raise EmptyCart()

    totals = calculate_checkout_totals(store.subtotal)
    message = build_order_message(store.items, totals.subtotal, totals.shipping_cost)
    phone_number = settings.WHATSAPP_PHONE_NUMBER

    logger.info(
        "whatsapp_checkout_rendered",
        lines=len(store),
        total_items=store.total_item_count,
        total=totals.total,
    )

    payload = WhatsAppCheckoutResponse(
        message=message,
        whatsapp_url=build_deep_link(phone_number, message),
        phone_number=phone_number,
        totals=totals,
    )
    return success(data=payload, message="Checkout message generated")
