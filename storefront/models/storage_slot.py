from sqlalchemy import Column, String, LargeBinary, DateTime
from datetime import datetime
from storefront.db.base_class import Base


class StorageSlot(Base):
    """Durable key-value slot; one row per persisted cart."""
    __tablename__ = "storage_slots"

    key = Column(String(200), primary_key=True)
    value = Column(LargeBinary, nullable=False)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
