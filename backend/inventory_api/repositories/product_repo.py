from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from inventory_api.models.product import Product
from inventory_api.repositories.product_query import (
    ProductFilter,
    product_conditions,
    product_ordering,
)


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: int, active_only: bool = True) -> Optional[Product]:
        qry = self.db.query(Product).filter(Product.id == product_id)
        if active_only:
            qry = qry.filter(Product.is_active.is_(True))
        return qry.first()

    def get_by_sku(self, sku: str, exclude_id: Optional[int] = None) -> Optional[Product]:
        """
        Look up a SKU across active and soft-deleted products alike, since
        uniqueness covers both. The SKU is compared in its stored
        (uppercase) form.
        """
        qry = self.db.query(Product).filter(Product.sku == sku.strip().upper())
        if exclude_id is not None:
            qry = qry.filter(Product.id != exclude_id)
        return qry.first()

    def search(self, f: ProductFilter) -> Tuple[List[Product], int]:
        conditions = product_conditions(f)
        total = self.db.query(func.count(Product.id)).filter(*conditions).scalar() or 0
        items = (
            self.db.query(Product)
            .filter(*conditions)
            .order_by(*product_ordering(f))
            .offset(f.skip)
            .limit(f.limit)
            .all()
        )
        return items, total

    def list_active(self) -> List[Product]:
        # insertion order, which the aggregates rely on for tie-breaking
        return (
            self.db.query(Product)
            .filter(Product.is_active.is_(True))
            .order_by(Product.id)
            .all()
        )

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product
