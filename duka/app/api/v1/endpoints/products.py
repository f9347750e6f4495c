from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from duka.app.api.deps import get_current_user, single_flight
from duka.app.core.database import get_db
from duka.app.core.errors import NotFoundError
from duka.app.models.product import Product
from duka.app.models.user import User
from duka.app.schemas.product import ProductCreate, ProductOut, ProductUpdate, ScanRequest
from duka.app.services.products import ProductRepository
from duka.app.services.session import AppState, Screen

router = APIRouter()


@router.get("/", response_model=list[ProductOut])
def list_products(
    q: str | None = Query(None, description="Search by name or barcode"),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[Product]:
    repo = ProductRepository(db)
    return repo.search(q) if q else repo.list()


@router.post("/", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.INVENTORY)),
) -> Product:
    return ProductRepository(db).create(payload)


@router.post("/scan", response_model=ProductOut)
def scan_product(
    payload: ScanRequest,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> Product:
    product = ProductRepository(db).find_by_barcode(payload.barcode.strip())
    if product is None:
        raise NotFoundError(
            f"No product with barcode {payload.barcode}",
            key="products.barcode_not_found",
            barcode=payload.barcode,
        )
    return product


@router.get("/{product_id}", response_model=ProductOut)
def get_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> Product:
    return ProductRepository(db).get(product_id)


@router.patch("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: UUID,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.INVENTORY)),
) -> Product:
    return ProductRepository(db).update(product_id, payload)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    _state: AppState = Depends(single_flight(Screen.INVENTORY)),
) -> Response:
    ProductRepository(db).delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
