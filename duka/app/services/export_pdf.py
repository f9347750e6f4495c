"""PDF export of the financial report using fpdf2."""
from __future__ import annotations

import io
import logging
from collections.abc import Sequence
from pathlib import Path

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from duka.app.core.i18n import translate
from duka.app.services.report_render import ReportRow, report_sections
from duka.app.services.reports import BalanceSheet, CashFlow, FinancialPeriod

logger = logging.getLogger(__name__)


# ── Shared helpers ──────────────────────────────────────────────────────────

_SEC_BG = (214, 228, 240)  # light blue section
_LINE_H = 7
_LABEL_W, _VALUE_W = 110, 70

_FONT_DIR = Path(__file__).resolve().parent.parent / "fonts"
_ARABIC_FONT = "NotoSansArabic"


def _setup_font(pdf: FPDF, lang: str) -> tuple[str, str]:
    """Register fonts for *lang*. Returns (font family, language actually used).

    Arabic needs the bundled Noto font; without it the report is written in
    English with the built-in Helvetica.
    """
    if lang == "ar":
        regular = _FONT_DIR / "NotoSansArabic-Regular.ttf"
        bold = _FONT_DIR / "NotoSansArabic-Bold.ttf"
        if regular.exists() and bold.exists():
            pdf.add_font(_ARABIC_FONT, "", str(regular))
            pdf.add_font(_ARABIC_FONT, "B", str(bold))
            pdf.set_text_shaping(True)
            return _ARABIC_FONT, lang
        logger.warning("Arabic font not found in %s, exporting PDF in English", _FONT_DIR)
        return "Helvetica", "en"
    return "Helvetica", lang


def _safe_text(text: str, lang: str = "en") -> str:
    """Replace non-latin-1 characters for PDF built-in fonts. Skips for Arabic (Unicode font)."""
    if lang == "ar":
        return text
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _section_header(pdf: FPDF, text: str, font: str) -> None:
    pdf.set_fill_color(*_SEC_BG)
    pdf.set_font(font, "B", 10)
    pdf.cell(_LABEL_W + _VALUE_W, _LINE_H, text, fill=True, new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _row(pdf: FPDF, row: ReportRow, font: str, lang: str) -> None:
    label = _safe_text(row.label, lang)
    if row.kind == "heading":
        pdf.set_font(font, "B", 9)
        pdf.cell(_LABEL_W + _VALUE_W, _LINE_H, label, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        return
    value = _safe_text(row.value, lang)
    if row.kind == "deduction":
        value = f"({value})"
    bold = row.kind == "total"
    pdf.set_font(font, "B" if bold else "", 9)
    pdf.cell(_LABEL_W, _LINE_H, label, border="T" if bold else "B")
    pdf.cell(_VALUE_W, _LINE_H, value, border="T" if bold else "B", align="R",
             new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _to_bytes(pdf: FPDF) -> io.BytesIO:
    """Output PDF to BytesIO."""
    buf = io.BytesIO()
    pdf.output(buf)
    buf.seek(0)
    return buf


# ── Financial report ────────────────────────────────────────────────────────


def export_report_pdf(
    periods: Sequence[FinancialPeriod],
    balance_sheet: BalanceSheet,
    cash_flow: CashFlow,
    lang: str = "en",
    subtitle: str = "",
) -> io.BytesIO:
    pdf = FPDF()
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    font, lang = _setup_font(pdf, lang)

    totals, sections = report_sections(periods, balance_sheet, cash_flow, lang)
    pdf.set_font(font, "B", 16)
    pdf.cell(0, 10, _safe_text(translate(lang, "report.title"), lang),
             new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_font(font, "", 9)
    periods_line = subtitle or ", ".join(totals.periods)
    if periods_line:
        pdf.cell(0, 6, _safe_text(f"{translate(lang, 'report.periods')}: {periods_line}", lang),
                 new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(4)

    for section in sections:
        _section_header(pdf, _safe_text(section.title, lang), font)
        for row in section.rows:
            _row(pdf, row, font, lang)
        pdf.ln(4)

    return _to_bytes(pdf)
