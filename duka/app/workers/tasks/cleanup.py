"""Periodic cleanup tasks."""

from __future__ import annotations

import logging

from duka.app.workers.celery_app import celery

logger = logging.getLogger(__name__)


@celery.task(name="duka.app.workers.tasks.cleanup.cleanup_revoked_tokens")
def cleanup_revoked_tokens() -> dict:
    """Drop signed-out tokens whose ``exp`` has passed; they are unusable anyway."""
    from duka.app.core.security import cleanup_expired_tokens

    removed = cleanup_expired_tokens()
    logger.info("Removed %d expired revoked tokens", removed)
    return {"removed": removed}
