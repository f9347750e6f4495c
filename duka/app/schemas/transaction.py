from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, field_validator

from duka.app.models.transaction import WALK_IN_CUSTOMER, PaymentMethod


# ─── Stored transactions ─────────────────────────────────────────────────────


class TransactionItemIn(BaseModel):
    product_id: UUID | None
    quantity: int
    price: Decimal

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero")
        return v

    @field_validator("price")
    @classmethod
    def price_non_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price must be non-negative")
        return v


class TransactionCreate(BaseModel):
    customer_id: UUID | None = None
    customer_name: str = WALK_IN_CUSTOMER
    total_amount: Decimal
    discount_amount: Decimal = Decimal("0")
    tax_amount: Decimal = Decimal("0")
    payment_method: PaymentMethod | None = None
    status: str = "completed"
    items: list[TransactionItemIn]

    @field_validator("items")
    @classmethod
    def at_least_one_item(cls, v: list[TransactionItemIn]) -> list[TransactionItemIn]:
        if not v:
            raise ValueError("Cart is empty")
        return v


class TransactionUpdate(BaseModel):
    customer_name: str | None = None
    payment_method: PaymentMethod | None = None
    status: str | None = None


class TransactionItemOut(BaseModel):
    id: UUID
    product_id: UUID | None
    quantity: int
    price: Decimal

    class Config:
        from_attributes = True


class TransactionOut(BaseModel):
    id: UUID
    customer_id: UUID | None
    customer_name: str
    total_amount: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    payment_method: PaymentMethod | None
    status: str
    created_at: datetime
    items: list[TransactionItemOut]

    class Config:
        from_attributes = True


# ─── Checkout ────────────────────────────────────────────────────────────────


class CheckoutLine(BaseModel):
    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Quantity must be greater than zero")
        return v


class CheckoutRequest(BaseModel):
    # None checks out the session cart; an explicit empty list is an empty sale
    lines: list[CheckoutLine] | None = None
    customer_id: UUID | None = None
    # None means "use the customer's loyalty discount, if any"
    discount_percent: Decimal | None = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    amount_received: Decimal | None = None


class CheckoutOut(BaseModel):
    transaction: TransactionOut
    subtotal: Decimal
    discount_percent: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    change: Decimal | None
    message: str
