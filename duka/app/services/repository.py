"""Shared plumbing for the per-entity repositories."""
from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from duka.app.core.database import Base
from duka.app.core.errors import NotFoundError, RemoteError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def _backend_message(exc: SQLAlchemyError) -> str | None:
    orig = getattr(exc, "orig", None)
    if orig is not None and str(orig):
        return str(orig)
    return str(exc) or None


@contextmanager
def store_call(db: Session, operation: str) -> Iterator[None]:
    """Roll back and re-raise store failures as :class:`RemoteError`."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Store call failed: %s", operation)
        message = _backend_message(exc)
        raise RemoteError(message, key="errors.remote" if message else "errors.remote_generic") from exc


class Repository(Generic[ModelT]):
    """CRUD against one table.

    Subclasses set ``model``, ``entity`` (used in messages and logs) and
    the ``list()`` ordering. Inputs are trusted: validation already ran.
    """

    model: ClassVar[type[Base]]
    entity: ClassVar[str]

    def __init__(self, db: Session) -> None:
        self.db = db

    def _order_by(self) -> list[Any]:
        return [self.model.name]  # type: ignore[attr-defined]

    def list(self) -> list[ModelT]:
        with store_call(self.db, f"list {self.entity}"):
            return self.db.query(self.model).order_by(*self._order_by()).all()

    def get(self, record_id: UUID) -> ModelT:
        with store_call(self.db, f"get {self.entity}"):
            record = self.db.get(self.model, record_id)
        if record is None:
            raise NotFoundError(
                f"{self.entity.capitalize()} not found",
                key="errors.not_found",
                entity=self.entity,
            )
        return record  # type: ignore[return-value]

    def create(self, data: BaseModel | dict[str, Any]) -> ModelT:
        values = data.model_dump() if isinstance(data, BaseModel) else dict(data)
        record = self.model(**values)
        with store_call(self.db, f"create {self.entity}"):
            self.db.add(record)
            self.db.commit()
            self.db.refresh(record)
        logger.info("Created %s %s", self.entity, record.id)  # type: ignore[attr-defined]
        return record  # type: ignore[return-value]

    def update(self, record_id: UUID, data: BaseModel | dict[str, Any]) -> ModelT:
        record = self.get(record_id)
        values = (
            data.model_dump(exclude_unset=True) if isinstance(data, BaseModel) else dict(data)
        )
        with store_call(self.db, f"update {self.entity}"):
            for field, value in values.items():
                setattr(record, field, value)
            self.db.commit()
            self.db.refresh(record)
        return record

    def delete(self, record_id: UUID) -> None:
        record = self.get(record_id)
        with store_call(self.db, f"delete {self.entity}"):
            self.db.delete(record)
            self.db.commit()
        logger.info("Deleted %s %s", self.entity, record_id)
