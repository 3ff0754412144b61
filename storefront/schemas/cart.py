from pydantic import BaseModel, Field
from typing import List, NamedTuple, Optional, Tuple

from storefront.schemas.product import ProductSnapshot
from storefront.schemas.checkout import CheckoutTotals


class LineKey(NamedTuple):
    """Identity of a cart line. ``None`` is a value of its own, not a wildcard."""
    product_id: int
    selected_size: Optional[str] = None
    selected_color: Optional[str] = None


class CartLineItem(ProductSnapshot):
    quantity: int = Field(default=1, ge=1)
    selected_size: Optional[str] = None
    selected_color: Optional[str] = None

    @property
    def key(self) -> LineKey:
        return LineKey(self.id, self.selected_size, self.selected_color)

    @property
    def line_total(self) -> int:
        return self.price * self.quantity


class AddToCartResult(NamedTuple):
    accepted: bool
    missing_options: Tuple[str, ...] = ()
    line: Optional[CartLineItem] = None


class CartItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1, le=99)
    selected_size: Optional[str] = None
    selected_color: Optional[str] = None


class CartItemUpdate(BaseModel):
    quantity: int


class CartResponse(BaseModel):
    items: List[CartLineItem]
    total_items: int
    subtotal: int
    totals: Optional[CheckoutTotals] = None
