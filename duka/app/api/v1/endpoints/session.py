"""Screen navigation and the sales cart held in the operator's session."""
from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from duka.app.api.deps import get_app_state, single_flight
from duka.app.core.database import get_db
from duka.app.schemas.session import (
    CartAddRequest,
    CartOut,
    CartQuantityChange,
    NavigateRequest,
    SessionOut,
)
from duka.app.services.products import ProductRepository
from duka.app.services.session import AppState, Screen

router = APIRouter()


def _session_out(state: AppState, fetch: tuple[str, ...] = ()) -> SessionOut:
    return SessionOut(
        screen=state.screen,
        fetch=list(fetch),
        busy=sorted(state.in_flight, key=lambda s: s.value),
        cart=CartOut.model_validate(state.cart),
    )


@router.get("/", response_model=SessionOut)
def get_session(state: AppState = Depends(get_app_state)) -> SessionOut:
    return _session_out(state)


@router.post("/navigate", response_model=SessionOut)
def navigate(payload: NavigateRequest, state: AppState = Depends(get_app_state)) -> SessionOut:
    return _session_out(state, state.navigate(payload.screen))


@router.post("/back", response_model=SessionOut)
def back(state: AppState = Depends(get_app_state)) -> SessionOut:
    return _session_out(state, state.back())


# ── Cart ────────────────────────────────────────────────────────────────────


@router.get("/cart", response_model=CartOut)
def get_cart(state: AppState = Depends(get_app_state)) -> CartOut:
    return CartOut.model_validate(state.cart)


@router.post("/cart/items", response_model=CartOut)
def add_to_cart(
    payload: CartAddRequest,
    db: Session = Depends(get_db),
    state: AppState = Depends(single_flight(Screen.SALES_CART)),
) -> CartOut:
    product = ProductRepository(db).get(payload.product_id)
    state.cart.add(product, payload.quantity)
    return CartOut.model_validate(state.cart)


@router.patch("/cart/items/{product_id}", response_model=CartOut)
def change_cart_quantity(
    product_id: UUID,
    payload: CartQuantityChange,
    state: AppState = Depends(single_flight(Screen.SALES_CART)),
) -> CartOut:
    state.cart.update_quantity(product_id, payload.change)
    return CartOut.model_validate(state.cart)


@router.delete("/cart/items/{product_id}", response_model=CartOut)
def remove_from_cart(
    product_id: UUID,
    state: AppState = Depends(single_flight(Screen.SALES_CART)),
) -> CartOut:
    state.cart.remove(product_id)
    return CartOut.model_validate(state.cart)


@router.delete("/cart", response_model=CartOut)
def clear_cart(state: AppState = Depends(single_flight(Screen.SALES_CART))) -> CartOut:
    state.cart.clear()
    return CartOut.model_validate(state.cart)
