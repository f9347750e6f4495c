from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse, PlainTextResponse, StreamingResponse
from sqlalchemy.orm import Session

from duka.app.api.deps import get_current_user, get_language
from duka.app.core.database import get_db, utcnow
from duka.app.models.user import User
from duka.app.schemas.reports import (
    BalanceSheetOut,
    CashFlowOut,
    ExportJobOut,
    FinancialPeriodOut,
    FinancialReportOut,
    ReportTotalsOut,
)
from duka.app.services.audit import log_action
from duka.app.services.export_pdf import export_report_pdf
from duka.app.services.report_render import render_html_report, render_print_page, render_text_report
from duka.app.services.reports import (
    BalanceSheet,
    CashFlow,
    FinancialPeriod,
    TimeRange,
    get_balance_sheet,
    get_cash_flow,
    get_financial_report,
    report_window,
    summarize,
)

router = APIRouter()

_PDF_MIME = "application/pdf"


def _statements(
    db: Session, time_range: TimeRange
) -> tuple[list[FinancialPeriod], BalanceSheet, CashFlow]:
    return get_financial_report(db, time_range), get_balance_sheet(db), get_cash_flow(db)


def _log_export(db: Session, user: User, fmt: str, time_range: TimeRange) -> None:
    log_action(
        db,
        user_id=user.id,
        action="REPORT_EXPORTED",
        resource_type="reports",
        resource_id="financial",
        changes={"format": fmt, "time_range": time_range.value},
    )
    db.commit()


# ── Statements ──────────────────────────────────────────────────────────────


@router.get("/financial", response_model=FinancialReportOut)
def financial_report(
    time_range: TimeRange = Query(TimeRange.MONTH),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> FinancialReportOut:
    now = utcnow()
    start, end = report_window(time_range, now)
    periods = get_financial_report(db, time_range, now)
    return FinancialReportOut(
        time_range=time_range,
        start=start,
        end=end,
        periods=[FinancialPeriodOut.model_validate(p) for p in periods],
        totals=ReportTotalsOut.model_validate(summarize(periods)),
    )


@router.get("/balance-sheet", response_model=BalanceSheetOut)
def balance_sheet(
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> BalanceSheetOut:
    return BalanceSheetOut.model_validate(get_balance_sheet(db))


@router.get("/cash-flow", response_model=CashFlowOut)
def cash_flow(
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> CashFlowOut:
    return CashFlowOut.model_validate(get_cash_flow(db))


# ── Exports ─────────────────────────────────────────────────────────────────


@router.get("/export/text", response_class=PlainTextResponse)
def export_text(
    time_range: TimeRange = Query(TimeRange.MONTH),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
    current_user: User = Depends(get_current_user),
) -> PlainTextResponse:
    text = render_text_report(*_statements(db, time_range), lang=lang)
    _log_export(db, current_user, "text", time_range)
    return PlainTextResponse(text)


@router.get("/export/html", response_class=HTMLResponse)
def export_html(
    time_range: TimeRange = Query(TimeRange.MONTH),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
    current_user: User = Depends(get_current_user),
) -> HTMLResponse:
    markup = render_html_report(*_statements(db, time_range), lang=lang)
    _log_export(db, current_user, "html", time_range)
    return HTMLResponse(markup)


@router.get("/export/pdf")
def export_pdf(
    time_range: TimeRange = Query(TimeRange.MONTH),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
    current_user: User = Depends(get_current_user),
) -> StreamingResponse:
    buf = export_report_pdf(*_statements(db, time_range), lang=lang)
    _log_export(db, current_user, "pdf", time_range)
    return StreamingResponse(
        buf,
        media_type=_PDF_MIME,
        headers={"Content-Disposition": f'attachment; filename="financial-report-{time_range.value}.pdf"'},
    )


@router.post("/export/pdf/jobs", response_model=ExportJobOut, status_code=202)
def queue_pdf_export(
    time_range: TimeRange = Query(TimeRange.MONTH),
    lang: str = Depends(get_language),
    _current_user: User = Depends(get_current_user),
) -> ExportJobOut:
    """Render the PDF in the Celery worker; the file lands in EXPORT_DIR."""
    from duka.app.workers.tasks.exports import generate_report_pdf

    result = generate_report_pdf.delay(time_range.value, lang)
    return ExportJobOut(task_id=result.id)


@router.get("/print", response_class=HTMLResponse)
def print_report(
    time_range: TimeRange = Query(TimeRange.MONTH),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
    current_user: User = Depends(get_current_user),
) -> HTMLResponse:
    markup = render_print_page(*_statements(db, time_range), lang=lang)
    _log_export(db, current_user, "print", time_range)
    return HTMLResponse(markup)
