from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, Index
from datetime import datetime
from storefront.db.base_class import Base


class Product(Base):
    """Read-only catalog record; the cart copies a snapshot of it at add-time."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(200), nullable=False, index=True)
    slug = Column(String(250), unique=True, nullable=True, index=True)
    category = Column(String(100), nullable=True)
    image = Column(String(500), nullable=True)

    # Pricing (whole currency units, no subunits)
    price = Column(Integer, nullable=False)

    # Variant option lists, e.g. ["S", "M", "L"]
    sizes = Column(JSON, default=list, nullable=False)
    colors = Column(JSON, default=list, nullable=False)

    # Status
    is_new = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

Index('idx_product_category_active', Product.category, Product.is_active)
