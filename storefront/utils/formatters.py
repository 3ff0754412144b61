from decimal import Decimal, ROUND_HALF_UP
from numbers import Real

from storefront.core.config import settings

# locale -> (thousands separator, symbol/amount separator)
LOCALE_GROUPING = {
    "id-ID": (".", "\u00a0"),
    "en-US": (",", ""),
    "en-IN": (",", ""),
}

CURRENCY_SYMBOLS = {
    "IDR": "Rp",
    "USD": "$",
    "INR": "₹",
}


def format_currency(amount, currency: str | None = None, locale: str | None = None) -> str:
    """
    Format a whole-unit amount for display, e.g. ``Rp 100.000`` for id-ID/IDR.

    The gap between symbol and amount is a non-breaking space (U+00A0), the
    same output browsers give for ``Intl.NumberFormat("id-ID")``.

    Only raw numbers are accepted; passing an already formatted string raises
    TypeError instead of formatting it twice.
    """
    if isinstance(amount, bool) or not isinstance(amount, (Real, Decimal)):
        raise TypeError(f"format_currency expects a number, got {type(amount).__name__}")

    currency = (currency or settings.CURRENCY_CODE).upper()
    locale = locale or settings.CURRENCY_LOCALE
    thousands, gap = LOCALE_GROUPING.get(locale, (",", ""))
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    if symbol == currency:
        gap = gap or "\u00a0"

    rounded = int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    digits = f"{abs(rounded):,}".replace(",", thousands)
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{gap}{digits}"
