from typing import Optional

from storefront.core.config import settings
from storefront.schemas.checkout import CheckoutTotals


def calculate_shipping_cost(
    subtotal: int,
    free_threshold: Optional[int] = None,
    standard_fee: Optional[int] = None,
) -> int:
    """Flat standard fee, waived once the subtotal reaches the free-shipping threshold."""
    if free_threshold is None:
        free_threshold = settings.FREE_SHIPPING_THRESHOLD
    if standard_fee is None:
        standard_fee = settings.STANDARD_SHIPPING_COST

    if subtotal >= free_threshold:
        return 0
    return standard_fee


def calculate_checkout_totals(
    subtotal: int,
    free_threshold: Optional[int] = None,
    standard_fee: Optional[int] = None,
) -> CheckoutTotals:
    if free_threshold is None:
        free_threshold = settings.FREE_SHIPPING_THRESHOLD

    shipping_cost = calculate_shipping_cost(subtotal, free_threshold, standard_fee)
    return CheckoutTotals(
        subtotal=subtotal,
        shipping_cost=shipping_cost,
        total=subtotal + shipping_cost,
        is_free_shipping=shipping_cost == 0,
        free_shipping_threshold=free_threshold,
    )
