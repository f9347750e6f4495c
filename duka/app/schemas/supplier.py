from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, field_validator

from duka.app.models.supplier import POStatus


# ─── Supplier ─────────────────────────────────────────────────────────────────


class SupplierCreate(BaseModel):
    name: str
    contact_person: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class SupplierUpdate(BaseModel):
    name: str | None = None
    contact_person: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Name is required")
        return v.strip() if v is not None else None


class SupplierOut(BaseModel):
    id: UUID
    name: str
    contact_person: str | None
    phone: str | None
    email: str | None
    address: str | None

    class Config:
        from_attributes = True


# ─── Purchase Order ───────────────────────────────────────────────────────────


class POItemCreate(BaseModel):
    product_id: UUID
    quantity: int = 1
    # Defaults to the product's cost, or its price when no cost is recorded
    unit_price: Decimal | None = None

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least one")
        return v

    @field_validator("unit_price")
    @classmethod
    def price_non_negative(cls, v: Decimal | None) -> Decimal | None:
        if v is not None and v < 0:
            raise ValueError("Unit price must be non-negative")
        return v


class PurchaseOrderCreate(BaseModel):
    supplier_id: UUID
    expected_delivery_date: datetime | None = None
    items: list[POItemCreate]

    @field_validator("items")
    @classmethod
    def at_least_one_item(cls, v: list[POItemCreate]) -> list[POItemCreate]:
        if len(v) == 0:
            raise ValueError("Purchase order must have at least one item")
        return v


class POItemQuantityUpdate(BaseModel):
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least one")
        return v


class POItemOut(BaseModel):
    id: UUID
    product_id: UUID | None
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    class Config:
        from_attributes = True


class PurchaseOrderOut(BaseModel):
    id: UUID
    supplier_id: UUID | None
    supplier_name: str
    order_date: datetime
    expected_delivery_date: datetime
    total_amount: Decimal
    status: POStatus
    items: list[POItemOut]

    class Config:
        from_attributes = True
