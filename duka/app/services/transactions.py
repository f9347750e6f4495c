from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import selectinload

from duka.app.core.errors import RemoteError
from duka.app.models.transaction import Transaction, TransactionItem
from duka.app.schemas.transaction import TransactionCreate, TransactionItemIn
from duka.app.services.repository import Repository, store_call

logger = logging.getLogger(__name__)


class TransactionRepository(Repository[Transaction]):
    model = Transaction
    entity = "transaction"

    def _order_by(self) -> list[Any]:
        return [Transaction.created_at.desc()]

    def list(self) -> list[Transaction]:
        with store_call(self.db, "list transaction"):
            return (
                self.db.query(Transaction)
                .options(selectinload(Transaction.items))
                .order_by(*self._order_by())
                .all()
            )

    def list_between(self, start: datetime, end: datetime) -> list[Transaction]:
        """Transactions created in ``[start, end]`` with their items, oldest first."""
        with store_call(self.db, "list transaction range"):
            return (
                self.db.query(Transaction)
                .options(selectinload(Transaction.items))
                .filter(Transaction.created_at >= start, Transaction.created_at <= end)
                .order_by(Transaction.created_at)
                .all()
            )

    def total_amount(self) -> Decimal:
        with store_call(self.db, "sum transaction totals"):
            total = self.db.query(func.coalesce(func.sum(Transaction.total_amount), 0)).scalar()
        return Decimal(str(total))

    def create(self, data: TransactionCreate) -> Transaction:  # type: ignore[override]
        """Write the header, then its items.

        The two writes are separate commits. If the item write fails the
        header stays in the store without items and the RemoteError
        propagates; nothing compensates for it.
        """
        header = Transaction(**data.model_dump(exclude={"items"}))
        with store_call(self.db, "create transaction header"):
            self.db.add(header)
            self.db.commit()
            self.db.refresh(header)

        try:
            self._insert_items(header.id, data.items)
        except RemoteError:
            logger.error("Transaction %s was stored without its items", header.id)
            raise

        self.db.refresh(header)
        logger.info("Created transaction %s (%s items)", header.id, len(data.items))
        return header

    def _insert_items(self, transaction_id: UUID, items: list[TransactionItemIn]) -> None:
        with store_call(self.db, "create transaction items"):
            self.db.add_all(
                TransactionItem(
                    transaction_id=transaction_id,
                    product_id=item.product_id,
                    position=position,
                    quantity=item.quantity,
                    price=item.price,
                )
                for position, item in enumerate(items)
            )
            self.db.commit()
