from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
import structlog

from storefront.api.deps import get_cart_store
from storefront.core.exceptions import APIError
from storefront.core.rate_limiter import limiter
from storefront.db.session import get_db
from storefront.schemas.cart import CartItemCreate, CartItemUpdate, CartResponse
from storefront.services.cart_store import CartStore
from storefront.services.catalog_service import CatalogService
from storefront.services.shipping import calculate_checkout_totals
from storefront.utils.response import success, error

router = APIRouter()
logger = structlog.get_logger()

OPTION_PROMPTS = {
    "size": "Please select a size",
    "color": "Please select a color",
}


def _cart_payload(store: CartStore) -> dict:
    subtotal = store.subtotal
    return CartResponse(
        items=store.items,
        total_items=store.total_item_count,
        subtotal=subtotal,
        totals=calculate_checkout_totals(subtotal) if not store.is_empty else None,
    ).model_dump(by_alias=True)


@router.get("", response_model=dict)
@router.get("/", response_model=dict)
@limiter.limit("120/minute")
def get_cart(request: Request, store: CartStore = Depends(get_cart_store)):
    """Get the session's cart with derived totals"""
    return success(data=_cart_payload(store), message="Cart retrieved")


@router.post("/items", status_code=status.HTTP_201_CREATED)
@limiter.limit("60/minute")
def add_to_cart(
    request: Request,
    cart_item: CartItemCreate,
    store: CartStore = Depends(get_cart_store),
    db: Session = Depends(get_db)
):
    """Add a catalog product (with its size/color selection) to the cart"""
    product = CatalogService.get_product(db, cart_item.product_id)

    result = store.add_to_cart(
        CatalogService.to_snapshot(product),
        quantity=cart_item.quantity,
        selected_size=cart_item.selected_size,
        selected_color=cart_item.selected_color,
    )

    if not result.accepted:
        missing = list(result.missing_options)
        message = " and ".join(OPTION_PROMPTS[option] for option in missing) or "Item could not be added"
        raise APIError(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message,
            errors={
                "missing_options": missing,
                "sizes": list(product.sizes or []),
                "colors": list(product.colors or []),
            },
        )

    return success(data=_cart_payload(store), message="Item added to cart")


@router.put("/items/{product_id}")
@limiter.limit("60/minute")
def update_cart_item(
    request: Request,
    product_id: int,
    update_data: CartItemUpdate,
    store: CartStore = Depends(get_cart_store)
):
    """Set the quantity of a product's cart lines"""
    if update_data.quantity < 1:
        raise APIError(
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Quantity must be at least 1",
            errors={"quantity": update_data.quantity},
        )

    if not store.update_quantity(product_id, update_data.quantity):
        return error(
            message="Cart item not found",
            status_code=status.HTTP_404_NOT_FOUND,
        )

    return success(data=_cart_payload(store), message="Cart item updated")


@router.delete("/items/{product_id}")
@limiter.limit("60/minute")
def remove_from_cart(
    request: Request,
    product_id: int,
    store: CartStore = Depends(get_cart_store)
):
    """Remove every line of a product from the cart"""
    removed = store.remove_from_cart(product_id)
    logger.info("cart_items_removed", product_id=product_id, removed=removed)
    return success(data=_cart_payload(store), message="Item removed from cart")


@router.delete("")
@router.delete("/")
@limiter.limit("30/minute")
def clear_cart(request: Request, store: CartStore = Depends(get_cart_store)):
    """Clear entire cart"""
    store.clear_cart()
    return success(data=_cart_payload(store), message="Cart cleared")
