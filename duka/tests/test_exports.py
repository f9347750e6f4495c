"""Tests for the PDF export and the export endpoints."""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace

from duka.app.core.config import settings
from duka.app.models.audit import AuditLog
from duka.app.models.transaction import Transaction, TransactionItem
from duka.app.services.export_pdf import export_report_pdf
from duka.app.services.reports import get_balance_sheet, get_cash_flow
from duka.app.workers.tasks import exports
from duka.tests.conftest import auth


def _sale(db, total: str = "5000") -> None:
    db.add(
        Transaction(
            total_amount=Decimal(total),
            created_at=datetime.now(timezone.utc),
            items=[TransactionItem(position=0, quantity=2, price=Decimal("2000"))],
        )
    )
    db.commit()


# ── PDF builder ──────────────────────────────────────────────────────────────


class TestPdf:
    def test_empty_report_is_a_pdf(self, db):
        buf = export_report_pdf([], get_balance_sheet(db), get_cash_flow(db))
        assert buf.getvalue().startswith(b"%PDF-")

    def test_report_with_sales(self, db):
        _sale(db)
        buf = export_report_pdf([], get_balance_sheet(db), get_cash_flow(db), lang="sw", subtitle="2024-03")
        data = buf.getvalue()
        assert data.startswith(b"%PDF-")
        assert len(data) > 500

    def test_arabic_without_font_still_renders(self, db, monkeypatch, tmp_path):
        from duka.app.services import export_pdf

        monkeypatch.setattr(export_pdf, "_FONT_DIR", tmp_path)
        buf = export_report_pdf([], get_balance_sheet(db), get_cash_flow(db), lang="ar")
        assert buf.getvalue().startswith(b"%PDF-")


# ── Endpoints ────────────────────────────────────────────────────────────────


class TestExportEndpoints:
    def test_pdf_download(self, client, db, operator_token):
        _sale(db)
        res = client.get("/api/v1/reports/export/pdf", headers=auth(operator_token))
        assert res.status_code == 200
        assert res.headers["content-type"] == "application/pdf"
        assert "financial-report-month.pdf" in res.headers["content-disposition"]
        assert res.content.startswith(b"%PDF-")

    def test_text_download_is_translated(self, client, db, operator_token):
        _sale(db)
        res = client.get("/api/v1/reports/export/text", headers=auth(operator_token, "sw"))
        assert res.status_code == 200
        assert res.headers["content-language"] == "sw"
        assert "FINANCIAL REPORT" not in res.text

    def test_html_and_print(self, client, operator_token):
        html = client.get("/api/v1/reports/export/html", headers=auth(operator_token, "ar"))
        assert html.status_code == 200
        assert 'dir="rtl"' in html.text

        page = client.get("/api/v1/reports/print", headers=auth(operator_token))
        assert 'onload="window.print()"' in page.text

    def test_exports_are_audited(self, client, db, operator, operator_token):
        client.get("/api/v1/reports/export/text", params={"time_range": "week"}, headers=auth(operator_token))
        entry = db.query(AuditLog).filter(AuditLog.action == "REPORT_EXPORTED").one()
        assert entry.changed_by == operator.id
        assert entry.new_values == {"format": "text", "time_range": "week"}

    def test_queue_pdf_job(self, client, operator_token, monkeypatch):
        queued = []

        def fake_delay(time_range, lang):
            queued.append((time_range, lang))
            return SimpleNamespace(id="job-123")

        monkeypatch.setattr(exports.generate_report_pdf, "delay", fake_delay)
        res = client.post(
            "/api/v1/reports/export/pdf/jobs",
            params={"time_range": "year"},
            headers=auth(operator_token, "sw"),
        )
        assert res.status_code == 202
        assert res.json() == {"task_id": "job-123"}
        assert queued == [("year", "sw")]


# ── Worker task ──────────────────────────────────────────────────────────────


class TestExportTask:
    def test_writes_pdf_to_export_dir(self, db, monkeypatch, tmp_path):
        _sale(db)
        monkeypatch.setattr(settings, "EXPORT_DIR", str(tmp_path / "exports"))

        result = exports.generate_report_pdf("month")

        assert result["status"] == "done"
        written = tmp_path / "exports"
        [pdf] = list(written.iterdir())
        assert str(pdf) == result["file_path"]
        assert pdf.read_bytes().startswith(b"%PDF-")

    def test_unknown_range(self):
        assert exports.generate_report_pdf("decade")["status"] == "error"
