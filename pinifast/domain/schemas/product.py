"""Pydantic schemas for the Product domain."""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from pinifast.domain.schemas.common import CamelModel


class ProductCreate(CamelModel):
    name: str = Field(min_length=1)
    description: str
    price: float = Field(ge=0)
    category: str
    sku: str = Field(min_length=1)
    stock_quantity: int = Field(ge=0)
    image_url: Optional[str] = None


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    category: Optional[str] = None
    sku: Optional[str] = Field(default=None, min_length=1)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    image_url: Optional[str] = None

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not self.model_fields_set:
            raise ValueError("at least one field must be provided")
        return self


class StockUpdate(CamelModel):
    quantity: int = Field(ge=0)


class ProductRead(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float
    category: str
    sku: str
    in_stock: bool
    stock_quantity: int
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
