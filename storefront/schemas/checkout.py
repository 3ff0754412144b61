from pydantic import BaseModel


class CheckoutTotals(BaseModel):
    subtotal: int
    shipping_cost: int
    total: int
    is_free_shipping: bool
    free_shipping_threshold: int


class WhatsAppCheckoutResponse(BaseModel):
    message: str
    whatsapp_url: str
    phone_number: str
    totals: CheckoutTotals
