from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import Optional

from storefront.core.config import settings
from storefront.core.rate_limiter import limiter
from storefront.db.session import get_db
from storefront.schemas.product import ProductInquiryResponse
from storefront.services.catalog_service import CatalogService
from storefront.services.checkout_message import build_deep_link, build_product_inquiry_message
from storefront.utils.response import success, paginated_response

router = APIRouter()


@router.get("", response_model=dict)
@router.get("/", response_model=dict)
@limiter.limit("100/minute")
def get_products(
    request: Request,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    category: Optional[str] = None,
    is_new: Optional[bool] = None,
    db: Session = Depends(get_db)
):
    """List active catalog products"""
    products, total = CatalogService.list_products(db, page=page, limit=limit, category=category, is_new=is_new)
    items = [CatalogService.to_response(product) for product in products]
    return paginated_response(items, total=total, page=page, limit=limit)


@router.get("/slug/{slug}", response_model=dict)
@limiter.limit("100/minute")
def get_product_by_slug(request: Request, slug: str, db: Session = Depends(get_db)):
    product = CatalogService.get_product_by_slug(db, slug)
    return success(data=CatalogService.to_response(product), message="Product retrieved")


@router.get("/{product_id}", response_model=dict)
@limiter.limit("100/minute")
def get_product(request: Request, product_id: int, db: Session = Depends(get_db)):
    product = CatalogService.get_product(db, product_id)
    return success(data=CatalogService.to_response(product), message="Product retrieved")


@router.get("/{product_id}/inquiry", response_model=dict)
@limiter.limit("60/minute")
def get_product_inquiry(request: Request, product_id: int, db: Session = Depends(get_db)):
    """WhatsApp link asking the store whether a product is still available"""
    product = CatalogService.get_product(db, product_id)
    product_url = f"{settings.FRONTEND_URL.rstrip('/')}/products/{product.slug or product.id}"
    message = build_product_inquiry_message(CatalogService.to_snapshot(product), product_url)
    payload = ProductInquiryResponse(
        product_id=product.id,
        message=message,
        whatsapp_url=build_deep_link(settings.WHATSAPP_PHONE_NUMBER, message),
    )
    return success(data=payload, message="Inquiry link generated")
