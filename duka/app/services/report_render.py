"""Text and HTML renderings of the financial report.

Both formats share one section layout built by :func:`report_sections`;
the PDF export in :mod:`duka.app.services.export_pdf` reuses it too.
Totals are printed as given and not cross-checked.
"""
from __future__ import annotations

import html
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from duka.app.core.i18n import normalize_language, text_direction, translate
from duka.app.services.currency import format_currency
from duka.app.services.reports import BalanceSheet, CashFlow, FinancialPeriod, ReportTotals, summarize

_LABEL_WIDTH = 28
_RULE = " " * (_LABEL_WIDTH - 1) + "-" * 18


@dataclass(frozen=True)
class ReportRow:
    label: str
    value: str = ""
    # "line", "deduction", "total" or "heading"
    kind: str = "line"


@dataclass(frozen=True)
class ReportSection:
    title: str
    rows: list[ReportRow]


def _pct(value: Decimal) -> str:
    return f"{value:.2f}"


def report_sections(
    periods: Sequence[FinancialPeriod],
    balance_sheet: BalanceSheet,
    cash_flow: CashFlow,
    lang: str = "en",
) -> tuple[ReportTotals, list[ReportSection]]:
    lang = normalize_language(lang)

    def _(key: str, **kwargs: object) -> str:
        return translate(lang, key, **kwargs)

    totals = summarize(periods)
    assets = balance_sheet.assets
    eq = balance_sheet.equity_liabilities
    gross_pct = _pct(totals.gross_margin)
    net_pct = _pct(totals.net_margin)

    income = ReportSection(_("report.income_statement"), [
        ReportRow(_("report.revenue"), format_currency(totals.revenue)),
        ReportRow(_("report.cost_of_sales"), format_currency(totals.cost_of_sales), "deduction"),
        ReportRow(
            _("report.gross_profit"),
            f"{format_currency(totals.gross_profit)} ({_('report.of_revenue', margin=gross_pct)})",
            "total",
        ),
        ReportRow(_("report.operating_expenses"), format_currency(totals.operating_expenses), "deduction"),
        ReportRow(
            _("report.net_profit"),
            f"{format_currency(totals.net_profit)} ({_('report.of_revenue', margin=net_pct)})",
            "total",
        ),
        ReportRow(_("report.tax_paid"), format_currency(totals.tax_paid), "deduction"),
        ReportRow(_("report.drawings"), format_currency(abs(totals.drawings)), "deduction"),
        ReportRow(_("report.retained_earnings"), format_currency(totals.retained_earnings), "total"),
    ])
    balance = ReportSection(_("report.balance_sheet"), [
        ReportRow(_("report.assets"), kind="heading"),
        ReportRow(_("report.non_current_assets"), format_currency(assets.non_current)),
        ReportRow(_("report.current_assets"), format_currency(assets.current)),
        ReportRow(_("report.total_assets"), format_currency(assets.total), "total"),
        ReportRow(_("report.equity_liabilities"), kind="heading"),
        ReportRow(_("report.owners_capital"), format_currency(eq.owners_capital)),
        ReportRow(_("report.retained_earnings"), format_currency(eq.retained_earnings)),
        ReportRow(_("report.current_liabilities"), format_currency(eq.current_liabilities)),
        ReportRow(_("report.total_equity_liabilities"), format_currency(eq.total), "total"),
    ])
    cash = ReportSection(_("report.cash_flow"), [
        ReportRow(_("report.cash_operations"), format_currency(cash_flow.operations)),
        ReportRow(_("report.cash_investing"), format_currency(cash_flow.investing)),
        ReportRow(_("report.cash_financing"), format_currency(cash_flow.financing)),
        ReportRow(_("report.closing_cash"), format_currency(cash_flow.closing_cash), "total"),
    ])
    ratios = ReportSection(_("report.financial_ratios"), [
        ReportRow(_("report.gross_margin"), f"{gross_pct}%"),
        ReportRow(_("report.net_margin"), f"{net_pct}%"),
    ])
    return totals, [income, balance, cash, ratios]


# ── Text ─────────────────────────────────────────────────────────────────────


def _text_row(row: ReportRow) -> list[str]:
    if row.kind == "heading":
        return [row.label.upper()]
    if row.kind == "deduction":
        return [f"{row.label}:".ljust(_LABEL_WIDTH - 1) + f"({row.value})"]
    label = f"{row.label}:".ljust(_LABEL_WIDTH)
    if row.kind == "total":
        return [_RULE, f"{label}{row.value}"]
    return [f"{label}{row.value}"]


def render_text_report(
    periods: Sequence[FinancialPeriod],
    balance_sheet: BalanceSheet,
    cash_flow: CashFlow,
    lang: str = "en",
) -> str:
    """Monospaced plain-text report."""
    _, sections = report_sections(periods, balance_sheet, cash_flow, lang)
    title = translate(lang, "report.title").upper()
    lines = [title, "=" * len(title), ""]
    for section in sections:
        heading = section.title.upper()
        lines += [heading, "-" * len(heading)]
        for row in section.rows:
            lines += _text_row(row)
        lines.append("")
    return "\n".join(lines)


# ── HTML ─────────────────────────────────────────────────────────────────────

_STYLE = """
    body { font-family: Arial, sans-serif; margin: 40px; }
    h1, h2 { color: #333; }
    table { width: 100%; border-collapse: collapse; margin-bottom: 20px; }
    th, td { border: 1px solid #ddd; padding: 8px; text-align: start; }
    th { background-color: #f2f2f2; }
    .number { text-align: end; }
    .total { font-weight: bold; }
    .section { margin-bottom: 30px; }
"""


def _html_row(row: ReportRow) -> str:
    label = html.escape(row.label)
    if row.kind == "heading":
        return f'<tr><th colspan="2">{label}</th></tr>'
    value = html.escape(row.value)
    if row.kind == "deduction":
        value = f"({value})"
    cls = " total" if row.kind == "total" else ""
    return f'<tr><td class="{cls.strip()}">{label}</td><td class="number{cls}">{value}</td></tr>'


def render_html_report(
    periods: Sequence[FinancialPeriod],
    balance_sheet: BalanceSheet,
    cash_flow: CashFlow,
    lang: str = "en",
    *,
    onload: str | None = None,
) -> str:
    """Standalone HTML document with inline CSS; right-to-left for Arabic."""
    lang = normalize_language(lang)
    _, sections = report_sections(periods, balance_sheet, cash_flow, lang)
    title = html.escape(translate(lang, "report.title"))
    body_attr = f' onload="{html.escape(onload)}"' if onload else ""

    parts = [
        "<!DOCTYPE html>",
        f'<html lang="{lang}" dir="{text_direction(lang)}">',
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{title}</title>",
        f"<style>{_STYLE}</style>",
        "</head>",
        f"<body{body_attr}>",
        f"<h1>{title}</h1>",
    ]
    for section in sections:
        parts.append('<div class="section">')
        parts.append(f"<h2>{html.escape(section.title)}</h2>")
        parts.append("<table>")
        parts.extend(_html_row(row) for row in section.rows)
        parts.append("</table>")
        parts.append("</div>")
    parts += ["</body>", "</html>"]
    return "\n".join(parts)


def render_print_page(
    periods: Sequence[FinancialPeriod],
    balance_sheet: BalanceSheet,
    cash_flow: CashFlow,
    lang: str = "en",
) -> str:
    """The HTML report, opening the browser's print dialog once loaded."""
    return render_html_report(periods, balance_sheet, cash_flow, lang, onload="window.print()")
