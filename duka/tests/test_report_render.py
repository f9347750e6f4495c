"""Tests for the text, HTML and print renderings of the financial report."""
from __future__ import annotations

from decimal import Decimal

import pytest

from duka.app.services.report_render import (
    render_html_report,
    render_print_page,
    render_text_report,
    report_sections,
)
from duka.app.services.reports import (
    Assets,
    BalanceSheet,
    CashFlow,
    EquityLiabilities,
    FinancialPeriod,
)


@pytest.fixture()
def statements() -> tuple[list[FinancialPeriod], BalanceSheet, CashFlow]:
    periods = [
        FinancialPeriod(
            period="2024-03",
            revenue=Decimal("10000"),
            cost_of_sales=Decimal("6000"),
            gross_profit=Decimal("4000"),
            operating_expenses=Decimal("400"),
            net_profit=Decimal("2600"),
            tax_paid=Decimal("200"),
            drawings=Decimal("800"),
        )
    ]
    sheet = BalanceSheet(
        assets=Assets(
            non_current=Decimal("1759375"), current=Decimal("10000"), total=Decimal("1769375")
        ),
        equity_liabilities=EquityLiabilities(
            owners_capital=Decimal("19875000"),
            retained_earnings=Decimal("-2215225"),
            current_liabilities=Decimal("3250000"),
            total=Decimal("20909775"),
        ),
    )
    flow = CashFlow(
        operations=Decimal("10000"),
        investing=Decimal("0"),
        financing=Decimal("0"),
        closing_cash=Decimal("10000"),
    )
    return periods, sheet, flow


class TestSections:
    def test_four_sections_in_order(self, statements):
        _, sections = report_sections(*statements)
        assert [s.title for s in sections] == [
            "Income Statement",
            "Balance Sheet",
            "Cash Flow",
            "Financial Ratios",
        ]

    def test_margins_shown_with_two_decimals(self, statements):
        totals, sections = report_sections(*statements)
        ratios = {row.label: row.value for row in sections[-1].rows}
        assert ratios == {"Gross Profit Margin": "40.00%", "Net Profit Margin": "26.00%"}
        assert totals.retained_earnings == Decimal("1600")

    def test_translated_labels(self, statements):
        _, sections = report_sections(*statements, lang="sw")
        _, english = report_sections(*statements, lang="en")
        assert sections[0].title != english[0].title

    def test_unsupported_language_uses_english(self, statements):
        _, sections = report_sections(*statements, lang="fr")
        assert sections[0].title == "Income Statement"


class TestTextReport:
    def test_headings_and_figures(self, statements):
        text = render_text_report(*statements)
        lines = text.splitlines()

        assert lines[0] == "FINANCIAL REPORT"
        assert lines[1] == "=" * len("FINANCIAL REPORT")
        assert "INCOME STATEMENT" in lines
        assert "BALANCE SHEET" in lines
        assert "Revenue:".ljust(28) + "TSh 10,000" in lines
        assert "Gross Profit:".ljust(28) + "TSh 4,000 (40.00% of revenue)" in lines

    def test_deductions_in_parentheses(self, statements):
        text = render_text_report(*statements)
        assert "Cost of Sales:".ljust(27) + "(TSh 6,000)" in text.splitlines()

    def test_negative_retained_earnings(self, statements):
        assert "-TSh 2,215,225" in render_text_report(*statements)


class TestHtmlReport:
    def test_standalone_document(self, statements):
        markup = render_html_report(*statements)
        assert markup.startswith("<!DOCTYPE html>")
        assert '<html lang="en" dir="ltr">' in markup
        assert "<style>" in markup
        assert "<h2>Cash Flow</h2>" in markup
        assert "onload" not in markup

    def test_arabic_is_right_to_left(self, statements):
        markup = render_html_report(*statements, lang="ar")
        assert '<html lang="ar" dir="rtl">' in markup

    def test_labels_are_escaped(self, statements):
        # "Owner's Capital" carries a quote
        assert "Owner&#x27;s Capital" in render_html_report(*statements)

    def test_print_page_opens_print_dialog(self, statements):
        markup = render_print_page(*statements)
        assert '<body onload="window.print()">' in markup
        assert "<h1>Financial Report</h1>" in markup
