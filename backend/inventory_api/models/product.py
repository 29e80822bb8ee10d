from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship, validates

from inventory_api.db import Base
from inventory_api.utils.time import utcnow

DEFAULT_LOW_STOCK_THRESHOLD = 10


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False, index=True)
    type = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=True)
    image_url = Column(String(512), nullable=True)
    quantity = Column(Integer, nullable=False, default=0, index=True)
    price = Column(Float, nullable=False, default=0, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    low_stock_threshold = Column(Integer, nullable=False, default=DEFAULT_LOW_STOCK_THRESHOLD)

    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    created_by = relationship("User", foreign_keys=[created_by_id], lazy="joined")
    updated_by = relationship("User", foreign_keys=[updated_by_id], lazy="joined")

    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_products_quantity_non_negative"),
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("low_stock_threshold >= 0", name="ck_products_threshold_non_negative"),
        Index("ix_products_type_active", "type", "is_active"),
        Index("ix_products_quantity_active", "quantity", "is_active"),
    )

    @validates("sku")
    def _normalize_sku(self, key, value):
        return value.strip().upper() if value is not None else value

    def __repr__(self):
        return f"<Product sku={self.sku} name={self.name}>"
