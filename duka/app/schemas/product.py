from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, field_validator


def _name_required(v: str) -> str:
    if not v.strip():
        raise ValueError("Name is required")
    return v.strip()


def _blank_is_none(v: str | None) -> str | None:
    if v is None:
        return None
    return v.strip() or None


class ProductCreate(BaseModel):
    name: str
    description: str | None = None
    price: Decimal
    cost: Decimal | None = None
    quantity: int = 0
    barcode: str | None = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        return _name_required(v)

    @field_validator("price")
    @classmethod
    def price_positive(cls, v: Decimal) -> Decimal:
        if v <= 0:
            raise ValueError("Price must be greater than zero")
        return v

    @field_validator("cost")
    @classmethod
    def cost_non_negative(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("Cost must be non-negative")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Quantity must be non-negative")
        return v

    @field_validator("barcode")
    @classmethod
    def blank_barcode_is_none(cls, v: str | None) -> str | None:
        return _blank_is_none(v)


class ProductUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    cost: Decimal | None = None
    quantity: int | None = None
    barcode: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        return _name_required(v) if v is not None else None

    @field_validator("price")
    @classmethod
    def price_positive(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v <= 0:
            raise ValueError("Price must be greater than zero")
        return v

    @field_validator("cost")
    @classmethod
    def cost_non_negative(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("Cost must be non-negative")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_non_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Quantity must be non-negative")
        return v

    @field_validator("barcode")
    @classmethod
    def blank_barcode_is_none(cls, v: str | None) -> str | None:
        return _blank_is_none(v)


class ProductOut(BaseModel):
    id: UUID
    name: str
    description: str | None
    price: Decimal
    cost: Decimal | None
    quantity: int
    barcode: str | None
    created_at: datetime | None

    class Config:
        from_attributes = True


class ScanRequest(BaseModel):
    barcode: str
