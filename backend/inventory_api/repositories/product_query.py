"""
Translate a listing request into SQLAlchemy filter/sort/paging clauses.

``ProductFilter`` is a frozen value object; ``product_conditions`` turns it
into a list of conditions that are ANDed together by the repository.
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from sqlalchemy import asc, desc, or_

from inventory_api.models.product import Product

SortField = Literal["name", "price", "quantity", "createdAt"]
SortOrder = Literal["asc", "desc"]

DEFAULT_LIMIT = 10
MAX_LIMIT = 100

SORT_COLUMNS = {
    "name": Product.name,
    "price": Product.price,
    "quantity": Product.quantity,
    "createdAt": Product.created_at,
}


class ProductFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    search: Optional[str] = None
    type: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    min_quantity: Optional[int] = None
    max_quantity: Optional[int] = None
    page: int = 1
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    sort_by: SortField = "createdAt"
    sort_order: SortOrder = "desc"
    active_only: bool = True

    @field_validator("page", mode="before")
    @classmethod
    def clamp_page(cls, v):
        if v is None:
            return 1
        return max(1, int(v))

    @field_validator("search", "type", mode="before")
    @classmethod
    def empty_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def contains_text(column, term: str):
    # ilike with escaped wildcards: substring match, case-insensitive
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return column.ilike(f"%{escaped}%", escape="\\")


def product_conditions(f: ProductFilter) -> List:
    clauses = []
    if f.active_only:
        clauses.append(Product.is_active.is_(True))
    if f.search:
        clauses.append(
            or_(
                contains_text(Product.name, f.search),
                contains_text(Product.description, f.search),
                contains_text(Product.sku, f.search),
            )
        )
    if f.type:
        clauses.append(contains_text(Product.type, f.type))
    if f.min_price is not None:
        clauses.append(Product.price >= f.min_price)
    if f.max_price is not None:
        clauses.append(Product.price <= f.max_price)
    if f.min_quantity is not None:
        clauses.append(Product.quantity >= f.min_quantity)
    if f.max_quantity is not None:
        clauses.append(Product.quantity <= f.max_quantity)
    return clauses


def product_ordering(f: ProductFilter) -> List:
    column = SORT_COLUMNS[f.sort_by]
    direction = asc if f.sort_order == "asc" else desc
    # id breaks ties so consecutive pages never overlap
    return [direction(column), asc(Product.id)]
