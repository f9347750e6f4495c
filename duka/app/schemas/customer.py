from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, field_validator


class CustomerCreate(BaseModel):
    name: str
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    loyalty_points: int = 0

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v.strip()

    @field_validator("loyalty_points")
    @classmethod
    def points_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Loyalty points must be non-negative")
        return v


class CustomerUpdate(BaseModel):
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    loyalty_points: int | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("Name is required")
        return v.strip() if v is not None else None

    @field_validator("loyalty_points")
    @classmethod
    def points_non_negative(cls, v: int | None) -> int | None:
        if v is not None and v < 0:
            raise ValueError("Loyalty points must be non-negative")
        return v


class CustomerOut(BaseModel):
    id: UUID
    name: str
    phone: str | None
    email: str | None
    address: str | None
    loyalty_points: int
    created_at: datetime | None

    class Config:
        from_attributes = True


class LoyaltyDiscountOut(BaseModel):
    customer_id: UUID
    loyalty_points: int
    discount_percent: int
