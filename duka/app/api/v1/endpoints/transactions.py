from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from duka.app.api.deps import get_current_user, get_language, single_flight
from duka.app.core.database import get_db
from duka.app.core.i18n import translate
from duka.app.models.transaction import Transaction
from duka.app.models.user import User
from duka.app.schemas.transaction import (
    CheckoutOut,
    CheckoutRequest,
    TransactionCreate,
    TransactionOut,
    TransactionUpdate,
)
from duka.app.services.audit import log_action
from duka.app.services.cart import Cart, checkout
from duka.app.services.currency import format_currency
from duka.app.services.customers import CustomerRepository
from duka.app.services.products import ProductRepository
from duka.app.services.session import AppState, Screen
from duka.app.services.transactions import TransactionRepository

router = APIRouter()


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.get("/", response_model=list[TransactionOut])
def list_transactions(
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[Transaction]:
    return TransactionRepository(db).list()


@router.post("/", response_model=TransactionOut, status_code=status.HTTP_201_CREATED)
def create_transaction(
    payload: TransactionCreate,
    request: Request,
    db: Session = Depends(get_db),
    state: AppState = Depends(single_flight(Screen.SALES)),
) -> Transaction:
    txn = TransactionRepository(db).create(payload)
    log_action(
        db,
        user_id=state.user_id,
        action="CREATE",
        resource_type="transactions",
        resource_id=str(txn.id),
        changes={"total_amount": str(txn.total_amount), "items": len(payload.items)},
        ip_address=_client_ip(request),
    )
    db.commit()
    return txn


@router.post("/checkout", response_model=CheckoutOut, status_code=status.HTTP_201_CREATED)
def checkout_cart(
    payload: CheckoutRequest,
    request: Request,
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
    state: AppState = Depends(single_flight(Screen.SALES_CART)),
) -> CheckoutOut:
    """Check out the given lines, or the session cart when `lines` is omitted."""
    if payload.lines is not None:
        products = ProductRepository(db)
        cart = Cart()
        for line in payload.lines:
            cart.add(products.get(line.product_id), line.quantity)
    else:
        cart = state.cart

    customer = CustomerRepository(db).get(payload.customer_id) if payload.customer_id else None
    result = checkout(
        cart,
        TransactionRepository(db),
        customer=customer,
        discount_percent=payload.discount_percent,
        payment_method=payload.payment_method,
        amount_received=payload.amount_received,
    )
    log_action(
        db,
        user_id=state.user_id,
        action="CHECKOUT",
        resource_type="transactions",
        resource_id=str(result.transaction.id),
        changes={
            "total_amount": str(result.final_amount),
            "discount_percent": str(result.discount_percent),
            "customer": result.transaction.customer_name,
        },
        ip_address=_client_ip(request),
    )
    db.commit()
    if cart is state.cart:
        state.cart.clear()

    return CheckoutOut(
        transaction=TransactionOut.model_validate(result.transaction),
        subtotal=result.subtotal,
        discount_percent=result.discount_percent,
        discount_amount=result.discount_amount,
        final_amount=result.final_amount,
        change=result.change,
        message=translate(lang, "sales.checkout_success", amount=format_currency(result.final_amount)),
    )


@router.get("/{transaction_id}", response_model=TransactionOut)
def get_transaction(
    transaction_id: UUID,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> Transaction:
    return TransactionRepository(db).get(transaction_id)


@router.patch("/{transaction_id}", response_model=TransactionOut)
def update_transaction(
    transaction_id: UUID,
    payload: TransactionUpdate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.SALES)),
) -> Transaction:
    return TransactionRepository(db).update(transaction_id, payload)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(
    transaction_id: UUID,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.SALES)),
) -> Response:
    TransactionRepository(db).delete(transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
