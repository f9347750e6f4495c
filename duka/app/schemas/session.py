from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel

from duka.app.services.session import Screen


class CartLineOut(BaseModel):
    product_id: UUID
    name: str
    unit_price: Decimal
    quantity: int
    total: Decimal

    class Config:
        from_attributes = True


class CartOut(BaseModel):
    lines: list[CartLineOut]
    total: Decimal

    class Config:
        from_attributes = True


class CartAddRequest(BaseModel):
    product_id: UUID
    quantity: int = 1


class CartQuantityChange(BaseModel):
    # Relative: +1 / -1 from the quantity buttons
    change: int


class NavigateRequest(BaseModel):
    screen: Screen


class SessionOut(BaseModel):
    screen: Screen
    # Loads the client should run for the screen just entered
    fetch: list[str] = []
    busy: list[Screen] = []
    cart: CartOut
