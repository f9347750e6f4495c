"""Shared test fixtures.

Every test gets a fresh in-memory SQLite schema, created before and dropped
after the test, so tests never see each other's rows.
"""

from __future__ import annotations

import os

# Must be set before the app modules build their engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("STORE_API_KEY", "YOUR_STORE_API_KEY")

from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import duka.app.models  # noqa: F401
from duka.app.api.v1.endpoints.auth import _login_limiter
from duka.app.core.database import Base, SessionLocal, engine, get_db
from duka.app.core.security import create_access_token, get_password_hash
from duka.app.main import app
from duka.app.models.customer import Customer
from duka.app.models.product import Product
from duka.app.models.supplier import Supplier
from duka.app.models.user import User
from duka.app.services.session import sessions

PASSWORD = "Secret123"


# ─── DB session on a fresh schema ────────────────────────────────────────────


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test session."""

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    sessions.clear()
    _login_limiter.reset()


# ─── Auth helpers ─────────────────────────────────────────────────────────────


@pytest.fixture()
def operator(db: Session) -> User:
    user = User(email="cashier@duka.test", hashed_password=get_password_hash(PASSWORD))
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture()
def operator_token(operator: User) -> str:
    sessions.sign_in(operator.id)
    return create_access_token(subject=str(operator.id))


def auth(token: str, lang: str | None = None) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {token}"}
    if lang:
        headers["Accept-Language"] = lang
    return headers


# ─── Store data ──────────────────────────────────────────────────────────────


@pytest.fixture()
def soap(db: Session) -> Product:
    product = Product(
        name="Soap", price=Decimal("2500"), cost=Decimal("1800"), quantity=50, barcode="6201000000011"
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture()
def matches(db: Session) -> Product:
    product = Product(name="Matches", price=Decimal("1000"), cost=Decimal("700"), quantity=60)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@pytest.fixture()
def loyal_customer(db: Session) -> Customer:
    customer = Customer(name="Amina Juma", phone="+255712000001", loyalty_points=1250)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


@pytest.fixture()
def supplier(db: Session) -> Supplier:
    s = Supplier(name="Kariakoo Wholesale", contact_person="Hassan Ali", phone="+255222000100")
    db.add(s)
    db.commit()
    db.refresh(s)
    return s
