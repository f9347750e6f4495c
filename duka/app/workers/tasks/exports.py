"""Background export of the financial report as PDF."""

from __future__ import annotations

import logging
from pathlib import Path

from duka.app.workers.celery_app import celery

logger = logging.getLogger(__name__)


@celery.task(name="duka.app.workers.tasks.exports.generate_report_pdf")
def generate_report_pdf(time_range: str, lang: str = "en") -> dict:
    """Render the financial report for *time_range* into ``EXPORT_DIR``.

    Returns ``{"status": "done", "file_path": "..."}``.
    """
    from duka.app.core.config import settings
    from duka.app.core.database import SessionLocal, utcnow
    from duka.app.services.export_pdf import export_report_pdf
    from duka.app.services.reports import (
        TimeRange,
        get_balance_sheet,
        get_cash_flow,
        get_financial_report,
    )

    try:
        selected = TimeRange(time_range)
    except ValueError:
        return {"status": "error", "detail": f"Unknown time range: {time_range}"}

    db = SessionLocal()
    try:
        buf = export_report_pdf(
            get_financial_report(db, selected),
            get_balance_sheet(db),
            get_cash_flow(db),
            lang=lang,
        )
    finally:
        db.close()

    out_dir = Path(settings.EXPORT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"financial-report-{selected.value}-{utcnow():%Y%m%d%H%M%S}.pdf"
    path.write_bytes(buf.getvalue())
    logger.info("Wrote financial report export %s", path)
    return {"status": "done", "file_path": str(path)}
