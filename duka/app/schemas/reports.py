"""Pydantic response schemas for the financial dashboard."""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from duka.app.services.reports import TimeRange


# ── Income Statement ─────────────────────────────────────────────────────────


class FinancialPeriodOut(BaseModel):
    period: str
    revenue: Decimal
    cost_of_sales: Decimal
    gross_profit: Decimal
    operating_expenses: Decimal
    net_profit: Decimal
    tax_paid: Decimal
    drawings: Decimal

    class Config:
        from_attributes = True


class ReportTotalsOut(BaseModel):
    revenue: Decimal
    cost_of_sales: Decimal
    gross_profit: Decimal
    operating_expenses: Decimal
    net_profit: Decimal
    tax_paid: Decimal
    drawings: Decimal
    gross_margin: Decimal
    net_margin: Decimal
    retained_earnings: Decimal

    class Config:
        from_attributes = True


class FinancialReportOut(BaseModel):
    time_range: TimeRange
    start: datetime
    end: datetime
    periods: list[FinancialPeriodOut]
    totals: ReportTotalsOut


# ── Balance Sheet ────────────────────────────────────────────────────────────


class AssetsOut(BaseModel):
    non_current: Decimal
    current: Decimal
    total: Decimal

    class Config:
        from_attributes = True


class EquityLiabilitiesOut(BaseModel):
    owners_capital: Decimal
    retained_earnings: Decimal
    current_liabilities: Decimal
    total: Decimal

    class Config:
        from_attributes = True


class BalanceSheetOut(BaseModel):
    assets: AssetsOut
    equity_liabilities: EquityLiabilitiesOut

    class Config:
        from_attributes = True


# ── Cash Flow ────────────────────────────────────────────────────────────────


class CashFlowOut(BaseModel):
    operations: Decimal
    investing: Decimal
    financing: Decimal
    closing_cash: Decimal

    class Config:
        from_attributes = True


class ExportJobOut(BaseModel):
    task_id: str
