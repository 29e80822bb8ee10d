import re
from datetime import datetime
from typing import Optional

from pydantic import Field, computed_field, field_validator

from inventory_api.models.product import DEFAULT_LOW_STOCK_THRESHOLD
from inventory_api.schemas.common import CamelModel
from inventory_api.schemas.user_schema import UserRef
from inventory_api.services import stock

SKU_PATTERN = r"^[A-Z0-9_-]+$"
IMAGE_URL_RE = re.compile(r"^https?://.+\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)


def _normalize_sku(v):
    if isinstance(v, str):
        return v.strip().upper()
    return v


def _check_image_url(v):
    if v is None:
        return v
    if not IMAGE_URL_RE.match(v):
        raise ValueError("Please provide a valid image URL")
    return v


def _blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v


class ProductOut(CamelModel):
    id: int
    name: str
    type: str
    sku: str
    image_url: Optional[str] = None
    description: Optional[str] = None
    quantity: int
    price: float
    is_active: bool
    low_stock_threshold: int
    created_by: Optional[UserRef] = None
    updated_by: Optional[UserRef] = None
    created_at: datetime
    updated_at: datetime

    @computed_field(alias="isLowStock")
    @property
    def is_low_stock(self) -> bool:
        return stock.is_low_stock(self)

    @computed_field(alias="stockStatus")
    @property
    def stock_status(self) -> str:
        return stock.stock_status(self)


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    type: str = Field(..., min_length=1, max_length=50)
    sku: str = Field(..., min_length=1, max_length=50, pattern=SKU_PATTERN)
    image_url: Optional[str] = None
    description: Optional[str] = Field(None, max_length=500)
    quantity: int = Field(..., ge=0)
    price: float = Field(..., ge=0)
    low_stock_threshold: int = Field(DEFAULT_LOW_STOCK_THRESHOLD, ge=0)

    normalize_sku = field_validator("sku", mode="before")(_normalize_sku)
    blank_to_none = field_validator("image_url", "description", mode="before")(_blank_to_none)
    check_image_url = field_validator("image_url")(_check_image_url)


class ProductUpdate(CamelModel):
    """Partial update; only the fields present in the request are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    sku: Optional[str] = Field(None, min_length=1, max_length=50, pattern=SKU_PATTERN)
    image_url: Optional[str] = None
    description: Optional[str] = Field(None, max_length=500)
    quantity: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    low_stock_threshold: Optional[int] = Field(None, ge=0)

    normalize_sku = field_validator("sku", mode="before")(_normalize_sku)
    blank_to_none = field_validator("image_url", "description", mode="before")(_blank_to_none)
    check_image_url = field_validator("image_url")(_check_image_url)

    @field_validator("name", "type", "sku", "quantity", "price", "low_stock_threshold", mode="before")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class QuantityUpdate(CamelModel):
    quantity: int = Field(..., ge=0)
