from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from duka.app.api.deps import get_current_user, single_flight
from duka.app.core.database import get_db
from duka.app.models.supplier import Supplier
from duka.app.models.user import User
from duka.app.schemas.supplier import SupplierCreate, SupplierOut, SupplierUpdate
from duka.app.services.session import AppState, Screen
from duka.app.services.suppliers import SupplierRepository

router = APIRouter()


@router.get("/", response_model=list[SupplierOut])
def list_suppliers(
    q: str | None = Query(None, description="Search by name, contact, or phone"),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[Supplier]:
    repo = SupplierRepository(db)
    return repo.search(q) if q else repo.list()


@router.post("/", response_model=SupplierOut, status_code=status.HTTP_201_CREATED)
def create_supplier(
    payload: SupplierCreate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.PURCHASE)),
) -> Supplier:
    return SupplierRepository(db).create(payload)


@router.get("/{supplier_id}", response_model=SupplierOut)
def get_supplier(
    supplier_id: UUID,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> Supplier:
    return SupplierRepository(db).get(supplier_id)


@router.patch("/{supplier_id}", response_model=SupplierOut)
def update_supplier(
    supplier_id: UUID,
    payload: SupplierUpdate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.PURCHASE)),
) -> Supplier:
    return SupplierRepository(db).update(supplier_id, payload)


@router.delete("/{supplier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_supplier(
    supplier_id: UUID,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.PURCHASE)),
) -> Response:
    SupplierRepository(db).delete(supplier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
