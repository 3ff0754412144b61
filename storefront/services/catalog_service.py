from sqlalchemy.orm import Session
from typing import List, Optional, Tuple

from storefront.models.product import Product
from storefront.schemas.product import ProductResponse, ProductSnapshot
from storefront.core.exceptions import ProductNotFound
from storefront.utils.formatters import format_currency


class CatalogService:

    @staticmethod
    def get_product(db: Session, product_id: int) -> Product:
        """Fetch an active product by id or raise ProductNotFound."""
        product = db.query(Product).filter(
            Product.id == product_id,
            Product.is_active == True
        ).first()
        if not product:
            raise ProductNotFound()
        return product

    @staticmethod
    def get_product_by_slug(db: Session, slug: str) -> Product:
        product = db.query(Product).filter(
            Product.slug == slug,
            Product.is_active == True
        ).first()
        if not product:
            raise ProductNotFound()
        return product

    @staticmethod
    def list_products(
        db: Session,
        page: int = 1,
        limit: int = 20,
        category: Optional[str] = None,
        is_new: Optional[bool] = None,
    ) -> Tuple[List[Product], int]:
        query = db.query(Product).filter(Product.is_active == True)
        if category:
            query = query.filter(Product.category == category)
        if is_new is not None:
            query = query.filter(Product.is_new == is_new)

        total = query.count()
        products = (
            query.order_by(Product.created_at.desc(), Product.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return products, total

    @staticmethod
    def to_snapshot(product: Product) -> ProductSnapshot:
        """Copy the fields the cart keeps; price is frozen at this point."""
        return ProductSnapshot(
            id=product.id,
            name=product.name,
            price=product.price,
            image=product.image,
            slug=product.slug,
            category=product.category,
            is_new=bool(product.is_new),
            sizes=list(product.sizes or []),
            colors=list(product.colors or []),
        )

    @staticmethod
    def to_response(product: Product) -> ProductResponse:
        return ProductResponse(
            id=product.id,
            name=product.name,
            slug=product.slug,
            price=product.price,
            formatted_price=format_currency(product.price),
            image=product.image,
            category=product.category,
            is_new=bool(product.is_new),
            sizes=list(product.sizes or []),
            colors=list(product.colors or []),
        )
