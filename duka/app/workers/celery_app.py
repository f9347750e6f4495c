"""Celery app for report exports and housekeeping.

PDF exports run on their own ``exports`` queue so a slow render never holds
up token cleanup. Start a worker for both queues plus the scheduler::

    celery -A duka.app.workers.celery_app worker -Q celery,exports --loglevel=info
    celery -A duka.app.workers.celery_app beat --loglevel=info
"""

from __future__ import annotations

from celery import Celery
from celery.schedules import crontab

from duka.app.core.config import settings

celery = Celery(
    "duka",
    broker=settings.CELERY_BROKER_URL,
    backend=settings.CELERY_RESULT_BACKEND,
)

celery.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="Africa/Dar_es_Salaam",
    enable_utc=True,
    task_track_started=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    # Export job results are dropped after six hours
    result_expires=6 * 60 * 60,
    task_routes={
        "duka.app.workers.tasks.exports.*": {"queue": "exports"},
    },
)

celery.autodiscover_tasks(["duka.app.workers.tasks"])

celery.conf.beat_schedule = {
    "cleanup-revoked-tokens-hourly": {
        "task": "duka.app.workers.tasks.cleanup.cleanup_revoked_tokens",
        "schedule": crontab(minute=0),
    },
}
