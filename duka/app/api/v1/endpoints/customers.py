from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from duka.app.api.deps import get_current_user, single_flight
from duka.app.core.database import get_db
from duka.app.models.customer import Customer
from duka.app.models.user import User
from duka.app.schemas.customer import (
    CustomerCreate,
    CustomerOut,
    CustomerUpdate,
    LoyaltyDiscountOut,
)
from duka.app.services.customers import CustomerRepository, loyalty_discount_percent
from duka.app.services.session import AppState, Screen

router = APIRouter()


@router.get("/", response_model=list[CustomerOut])
def list_customers(
    q: str | None = Query(None, description="Search by name, phone, or email"),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[Customer]:
    repo = CustomerRepository(db)
    return repo.search(q) if q else repo.list()


@router.post("/", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.SALES_CART)),
) -> Customer:
    return CustomerRepository(db).create(payload)


@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(
    customer_id: UUID,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> Customer:
    return CustomerRepository(db).get(customer_id)


@router.get("/{customer_id}/loyalty-discount", response_model=LoyaltyDiscountOut)
def customer_loyalty_discount(
    customer_id: UUID,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> LoyaltyDiscountOut:
    customer = CustomerRepository(db).get(customer_id)
    return LoyaltyDiscountOut(
        customer_id=customer.id,
        loyalty_points=customer.loyalty_points,
        discount_percent=loyalty_discount_percent(customer.loyalty_points),
    )


@router.patch("/{customer_id}", response_model=CustomerOut)
def update_customer(
    customer_id: UUID,
    payload: CustomerUpdate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.SALES_CART)),
) -> Customer:
    return CustomerRepository(db).update(customer_id, payload)


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    customer_id: UUID,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.SALES_CART)),
) -> Response:
    CustomerRepository(db).delete(customer_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
