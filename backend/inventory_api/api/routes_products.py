from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from inventory_api.api.deps import get_current_user
from inventory_api.db import get_db
from inventory_api.models.user import User
from inventory_api.repositories.product_query import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    ProductFilter,
    SortField,
    SortOrder,
)
from inventory_api.schemas.common import Pagination, ok
from inventory_api.schemas.product_schema import (
    ProductCreate,
    ProductOut,
    ProductUpdate,
    QuantityUpdate,
)
from inventory_api.services.analytics_service import AnalyticsService
from inventory_api.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


def _out(p):
    return ProductOut.model_validate(p).dump()


@router.get("", summary="List products")
def list_products(
    search: Optional[str] = Query(None, description="matches name, description or SKU"),
    type: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, alias="minPrice", ge=0),
    max_price: Optional[float] = Query(None, alias="maxPrice", ge=0),
    min_quantity: Optional[int] = Query(None, alias="minQuantity", ge=0),
    max_quantity: Optional[int] = Query(None, alias="maxQuantity", ge=0),
    page: int = Query(1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    sort_by: SortField = Query("createdAt", alias="sortBy"),
    sort_order: SortOrder = Query("desc", alias="sortOrder"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    f = ProductFilter(
        search=search,
        type=type,
        min_price=min_price,
        max_price=max_price,
        min_quantity=min_quantity,
        max_quantity=max_quantity,
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items, total = ProductService(db).list(f)
    return ok(
        {
            "products": [_out(p) for p in items],
            "pagination": Pagination.build(f.page, f.limit, total).dump(),
        }
    )


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create product")
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    p = ProductService(db).create(payload, user)
    return ok({"product": _out(p)}, "Product created successfully")


@router.get("/low-stock", summary="Products at or below their low-stock threshold")
def low_stock(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    products = ProductService(db).low_stock()
    return ok({"products": [_out(p) for p in products], "count": len(products)})


@router.get("/out-of-stock", summary="Products with zero quantity")
def out_of_stock(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    products = ProductService(db).out_of_stock()
    return ok({"products": [_out(p) for p in products], "count": len(products)})


@router.get("/analytics", summary="Catalogue analytics")
def analytics(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return ok(AnalyticsService(db).product_analytics())


@router.get("/{product_id}", summary="Get product by id")
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return ok({"product": _out(ProductService(db).get(product_id))})


@router.put("/{product_id}/quantity", summary="Set product quantity")
def update_quantity(
    product_id: int,
    payload: QuantityUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    p, changes = ProductService(db).update_quantity(product_id, payload.quantity, user)
    return ok({"product": _out(p), "changes": changes}, "Product quantity updated successfully")


@router.put("/{product_id}", summary="Update product")
def update_product(
    product_id: int,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    p = ProductService(db).update(product_id, payload, user)
    return ok({"product": _out(p)}, "Product updated successfully")


@router.delete("/{product_id}", summary="Soft-delete product")
def delete_product(
    product_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    ProductService(db).delete(product_id, user)
    return ok(message="Product deleted successfully")
