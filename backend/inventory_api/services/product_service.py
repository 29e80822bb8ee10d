import logging
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session

from inventory_api.errors import DuplicateKey, NotFound
from inventory_api.models.product import Product
from inventory_api.models.user import User
from inventory_api.repositories.product_query import ProductFilter
from inventory_api.repositories.product_repo import ProductRepository
from inventory_api.schemas.product_schema import ProductCreate, ProductUpdate
from inventory_api.services import stock
from inventory_api.utils.transactions import committing

log = logging.getLogger(__name__)


def _duplicate_sku(sku: str) -> str:
    return f"Product with SKU '{sku}' already exists"


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepository(db)

    def _get_active(self, product_id: int) -> Product:
        p = self.repo.get(product_id)
        if not p:
            raise NotFound("Product not found")
        return p

    def _ensure_sku_free(self, sku: str, exclude_id: int = None):
        if self.repo.get_by_sku(sku, exclude_id=exclude_id):
            raise DuplicateKey(_duplicate_sku(sku))

    def list(self, f: ProductFilter) -> Tuple[List[Product], int]:
        return self.repo.search(f)

    def get(self, product_id: int) -> Product:
        return self._get_active(product_id)

    def create(self, data: ProductCreate, actor: User) -> Product:
        self._ensure_sku_free(data.sku)
        with committing(self.db, duplicate_message=_duplicate_sku(data.sku)):
            p = self.repo.add(Product(**data.model_dump(), created_by_id=actor.id))
        self.db.refresh(p)
        log.info("Product %s created by %s", p.sku, actor.username)
        return p

    def update(self, product_id: int, data: ProductUpdate, actor: User) -> Product:
        p = self._get_active(product_id)
        changes = data.changes()
        if "sku" in changes:
            self._ensure_sku_free(changes["sku"], exclude_id=p.id)
        with committing(self.db, duplicate_message=_duplicate_sku(changes.get("sku", p.sku))):
            for field, value in changes.items():
                setattr(p, field, value)
            p.updated_by_id = actor.id
        self.db.refresh(p)
        log.info("Product %s updated by %s: %s", p.sku, actor.username, sorted(changes))
        return p

    def update_quantity(self, product_id: int, quantity: int, actor: User) -> Tuple[Product, Dict]:
        p = self._get_active(product_id)
        old = p.quantity
        with committing(self.db):
            p.quantity = quantity
            p.updated_by_id = actor.id
        self.db.refresh(p)
        changes = {"oldQuantity": old, "newQuantity": quantity, "difference": quantity - old}
        log.info("Product %s quantity %d -> %d by %s", p.sku, old, quantity, actor.username)
        return p, changes

    def delete(self, product_id: int, actor: User) -> Product:
        """Soft delete: the row stays, flagged inactive."""
        p = self._get_active(product_id)
        with committing(self.db):
            p.is_active = False
            p.updated_by_id = actor.id
        log.info("Product %s deactivated by %s", p.sku, actor.username)
        return p

    def low_stock(self) -> List[Product]:
        return stock.low_stock(self.repo.list_active())

    def out_of_stock(self) -> List[Product]:
        return stock.out_of_stock(self.repo.list_active())
