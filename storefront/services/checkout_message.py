"""
WhatsApp checkout text and ``wa.me`` deep links.

Everything here is a pure function of its arguments: shipping is decided by
the caller (see ``storefront.services.shipping``) and passed in.
"""
from typing import Optional, Sequence
from urllib.parse import quote

from storefront.core.config import settings
from storefront.schemas.cart import CartLineItem
from storefront.schemas.product import ProductSnapshot
from storefront.utils.formatters import format_currency

ORDER_GREETING = "Halo, saya ingin memesan produk berikut:"
ORDER_CLOSING = "Mohon informasi selanjutnya untuk proses pembayaran. Terima kasih!"
INQUIRY_GREETING = "Halo, saya tertarik dengan produk:"
INQUIRY_CLOSING = "Apakah produk ini masih tersedia?"
CONSULTATION_MESSAGE = "Halo, saya tertarik dengan produk Anda"
FREE_SHIPPING_LABEL = "Gratis"

# characters encodeURIComponent leaves untouched besides quote()'s defaults
_URI_COMPONENT_SAFE = "!*'()"


def _format_line(line: CartLineItem) -> str:
    rows = [
        f"*{line.name}*",
        f"Harga: {format_currency(line.price)}",
        f"Jumlah: {line.quantity}",
    ]
    if line.selected_size:
        rows.append(f"Ukuran: {line.selected_size}")
    if line.selected_color:
        rows.append(f"Warna: {line.selected_color}")
    return "\n".join(rows)


def build_order_message(lines: Sequence[CartLineItem], subtotal: int, shipping_cost: int) -> str:
    """
    Render the cart as a WhatsApp order message.

    Returns an empty string for an empty cart; no checkout link should be
    built in that case.
    """
    if not lines:
        return ""

    shipping_text = FREE_SHIPPING_LABEL if shipping_cost == 0 else format_currency(shipping_cost)
    summary = "\n".join([
        f"Subtotal: {format_currency(subtotal)}",
        f"Ongkos Kirim: {shipping_text}",
        f"*Total: {format_currency(subtotal + shipping_cost)}*",
    ])
    items = "\n\n".join(_format_line(line) for line in lines)

    return f"{ORDER_GREETING}\n\n{items}\n\n{summary}\n\n{ORDER_CLOSING}"


def build_deep_link(phone_number: str, message: str, base_url: Optional[str] = None) -> str:
    """Build ``<base>/<phone>?text=<message>``. The phone number is used as given."""
    base_url = (base_url or settings.WHATSAPP_BASE_URL).rstrip("/")
    return f"{base_url}/{phone_number}?text={quote(message, safe=_URI_COMPONENT_SAFE)}"


def build_product_inquiry_message(product: ProductSnapshot, product_url: Optional[str] = None) -> str:
    parts = [
        INQUIRY_GREETING,
        f"*{product.name}*\nHarga: {format_currency(product.price)}",
    ]
    if product_url:
        parts.append(f"Link produk: {product_url}")
    parts.append(INQUIRY_CLOSING)
    return "\n\n".join(parts)


def build_consultation_link(phone_number: Optional[str] = None, message: Optional[str] = None) -> str:
    return build_deep_link(
        phone_number or settings.WHATSAPP_PHONE_NUMBER,
        message or CONSULTATION_MESSAGE,
    )
