from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from duka.app.api.deps import get_current_user, single_flight
from duka.app.core.database import get_db
from duka.app.models.supplier import PurchaseOrder
from duka.app.models.user import User
from duka.app.schemas.supplier import POItemQuantityUpdate, PurchaseOrderCreate, PurchaseOrderOut
from duka.app.services.audit import log_action
from duka.app.services.purchases import PurchaseOrderRepository
from duka.app.services.session import AppState, Screen

router = APIRouter()


@router.get("/", response_model=list[PurchaseOrderOut])
def list_purchase_orders(
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[PurchaseOrder]:
    return PurchaseOrderRepository(db).list()


@router.post("/", response_model=PurchaseOrderOut, status_code=status.HTTP_201_CREATED)
def create_purchase_order(
    payload: PurchaseOrderCreate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.PURCHASE)),
) -> PurchaseOrder:
    return PurchaseOrderRepository(db).create(payload)


@router.get("/{po_id}", response_model=PurchaseOrderOut)
def get_purchase_order(
    po_id: UUID,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> PurchaseOrder:
    return PurchaseOrderRepository(db).get(po_id)


@router.patch("/{po_id}/items/{item_id}", response_model=PurchaseOrderOut)
def update_purchase_order_item(
    po_id: UUID,
    item_id: UUID,
    payload: POItemQuantityUpdate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.PURCHASE)),
) -> PurchaseOrder:
    return PurchaseOrderRepository(db).update_item_quantity(po_id, item_id, payload.quantity)


@router.patch("/{po_id}/receive", response_model=PurchaseOrderOut)
def receive_purchase_order(
    po_id: UUID,
    db: Session = Depends(get_db),
    state: AppState = Depends(single_flight(Screen.PURCHASE)),
) -> PurchaseOrder:
    """Mark a pending order received and add its quantities to stock."""
    po = PurchaseOrderRepository(db).receive(po_id)
    log_action(
        db,
        user_id=state.user_id,
        action="RECEIVE",
        resource_type="purchase_orders",
        resource_id=str(po.id),
        changes={"total_amount": str(po.total_amount)},
    )
    db.commit()
    return po


@router.patch("/{po_id}/cancel", response_model=PurchaseOrderOut)
def cancel_purchase_order(
    po_id: UUID,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.PURCHASE)),
) -> PurchaseOrder:
    return PurchaseOrderRepository(db).cancel(po_id)


@router.delete("/{po_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_purchase_order(
    po_id: UUID,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.PURCHASE)),
) -> Response:
    PurchaseOrderRepository(db).delete(po_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
