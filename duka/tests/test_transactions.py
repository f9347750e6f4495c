"""Tests for transaction storage, including the partial-write failure."""
from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from duka.app.core.errors import RemoteError
from duka.app.models.transaction import Transaction, TransactionItem
from duka.app.schemas.transaction import TransactionCreate, TransactionItemIn
from duka.app.services.repository import store_call
from duka.app.services.transactions import TransactionRepository
from duka.tests.conftest import auth


def _header(soap, quantity: int = 2) -> TransactionCreate:
    return TransactionCreate(
        total_amount=soap.price * quantity,
        items=[TransactionItemIn(product_id=soap.id, quantity=quantity, price=soap.price)],
    )


def _failing_items(self, transaction_id, items):
    with store_call(self.db, "create transaction items"):
        raise OperationalError("INSERT INTO transaction_items", {}, Exception("disk I/O error"))


# ── Repository ───────────────────────────────────────────────────────────────


class TestTransactionRepository:
    def test_header_and_items_written(self, db, soap):
        txn = TransactionRepository(db).create(_header(soap))
        assert txn.customer_name == "Walk-in Customer"
        assert [(i.quantity, i.price) for i in txn.items] == [(2, Decimal("2500"))]
        assert db.query(TransactionItem).count() == 1

    def test_item_failure_leaves_header_behind(self, db, soap, monkeypatch):
        monkeypatch.setattr(TransactionRepository, "_insert_items", _failing_items)

        with pytest.raises(RemoteError) as exc:
            TransactionRepository(db).create(_header(soap))

        assert exc.value.key == "errors.remote"
        assert exc.value.message == "disk I/O error"
        [orphan] = db.query(Transaction).all()
        assert orphan.total_amount == Decimal("5000")
        assert db.query(TransactionItem).count() == 0

    def test_list_newest_first(self, db, soap):
        repo = TransactionRepository(db)
        first = repo.create(_header(soap, 1))
        second = repo.create(_header(soap, 3))
        listed = repo.list()
        assert {t.id for t in listed} == {first.id, second.id}
        assert listed[0].created_at >= listed[1].created_at

    def test_total_amount(self, db, soap):
        repo = TransactionRepository(db)
        assert repo.total_amount() == Decimal("0")
        repo.create(_header(soap, 1))
        repo.create(_header(soap, 2))
        assert repo.total_amount() == Decimal("7500")


# ── Endpoints ────────────────────────────────────────────────────────────────


class TestTransactionEndpoints:
    def test_create_and_fetch(self, client, operator_token, soap):
        headers = auth(operator_token)
        res = client.post(
            "/api/v1/transactions/",
            json={
                "total_amount": "2500",
                "payment_method": "card",
                "items": [{"product_id": str(soap.id), "quantity": 1, "price": "2500"}],
            },
            headers=headers,
        )
        assert res.status_code == 201
        txn_id = res.json()["id"]

        fetched = client.get(f"/api/v1/transactions/{txn_id}", headers=headers).json()
        assert fetched["payment_method"] == "card"
        assert len(fetched["items"]) == 1

        listed = client.get("/api/v1/transactions/", headers=headers).json()
        assert [t["id"] for t in listed] == [txn_id]

    def test_no_items_rejected(self, client, operator_token):
        res = client.post(
            "/api/v1/transactions/",
            json={"total_amount": "100", "items": []},
            headers=auth(operator_token),
        )
        assert res.status_code == 422

    def test_store_failure_reports_backend_message(self, client, operator_token, soap, monkeypatch):
        monkeypatch.setattr(TransactionRepository, "_insert_items", _failing_items)

        res = client.post(
            "/api/v1/transactions/checkout",
            json={"lines": [{"product_id": str(soap.id), "quantity": 1}]},
            headers=auth(operator_token),
        )
        assert res.status_code == 502
        assert res.json() == {
            "detail": "The store rejected the request: disk I/O error",
            "key": "errors.remote",
        }

    def test_update_and_delete(self, client, db, operator_token, soap):
        txn = TransactionRepository(db).create(_header(soap))
        headers = auth(operator_token)

        res = client.patch(
            f"/api/v1/transactions/{txn.id}", json={"status": "refunded"}, headers=headers
        )
        assert res.json()["status"] == "refunded"

        assert client.delete(f"/api/v1/transactions/{txn.id}", headers=headers).status_code == 204
        assert client.get(f"/api/v1/transactions/{txn.id}", headers=headers).status_code == 404
