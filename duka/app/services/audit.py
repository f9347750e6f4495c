from __future__ import annotations

from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from duka.app.models.audit import AuditLog


def log_action(
    db: Session,
    *,
    user_id: UUID | None,
    action: str,
    resource_type: str,
    resource_id: str,
    changes: dict[str, Any] | None = None,
    ip_address: str | None = None,
) -> None:
    """Queue one audit_logs row.

    Does not commit; the row goes out with the caller's next commit.
    """
    db.add(
        AuditLog(
            table_name=resource_type,
            record_id=resource_id,
            action=action,
            changed_by=user_id,
            new_values=changes,
            ip_address=ip_address,
        )
    )
