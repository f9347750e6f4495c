"""Tests for financial report aggregation and the report endpoints."""
from __future__ import annotations

import random
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from duka.app.models.transaction import Transaction, TransactionItem
from duka.app.services.reports import (
    DRAWINGS_RATIO,
    OPERATING_EXPENSE_RATIO,
    TAX_RATIO,
    TimeRange,
    aggregate,
    get_balance_sheet,
    get_cash_flow,
    get_financial_report,
    period_key,
    report_window,
    summarize,
)
from duka.tests.conftest import auth

ZERO = Decimal("0")


# ── Helpers ──────────────────────────────────────────────────────────────────


def _txn(
    created_at: datetime, total: str, items: list[tuple[int, str]] | None = None
) -> Transaction:
    """Unsaved transaction with (quantity, unit price) lines."""
    return Transaction(
        customer_name="Walk-in Customer",
        total_amount=Decimal(total),
        discount_amount=ZERO,
        tax_amount=ZERO,
        created_at=created_at,
        items=[
            TransactionItem(position=i, quantity=q, price=Decimal(p))
            for i, (q, p) in enumerate(items or [])
        ],
    )


def _at(*args: int) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


# ── Aggregation ──────────────────────────────────────────────────────────────


class TestAggregate:
    def test_gross_and_net_are_exact(self):
        txns = [
            _txn(_at(2024, 3, 5, 9), "6000", [(2, "2000")]),
            _txn(_at(2024, 3, 5, 15), "4000", [(1, "2000")]),
        ]
        [period] = aggregate(txns, TimeRange.DAY)

        assert period.period == "2024-03-05"
        assert period.revenue == Decimal("10000")
        assert period.cost_of_sales == Decimal("6000")
        assert period.gross_profit == Decimal("10000") - Decimal("6000")
        assert period.operating_expenses == Decimal("400")
        assert period.tax_paid == Decimal("200")
        assert period.drawings == Decimal("800")
        assert period.net_profit == period.gross_profit * (
            1 - OPERATING_EXPENSE_RATIO - TAX_RATIO - DRAWINGS_RATIO
        )
        assert period.net_profit == Decimal("2600")

    def test_same_day_shares_a_bucket(self):
        txns = [
            _txn(_at(2024, 3, 5, 0, 1), "100"),
            _txn(_at(2024, 3, 5, 23, 59), "200"),
        ]
        periods = aggregate(txns, TimeRange.DAY)
        assert len(periods) == 1
        assert periods[0].revenue == Decimal("300")

    def test_different_months_split(self):
        txns = [
            _txn(_at(2024, 1, 31, 12), "100"),
            _txn(_at(2024, 2, 1, 12), "200"),
        ]
        periods = aggregate(txns, TimeRange.MONTH)
        assert [p.period for p in periods] == ["2024-01", "2024-02"]
        assert [p.revenue for p in periods] == [Decimal("100"), Decimal("200")]

    def test_output_order_independent_of_input_order(self):
        txns = [
            _txn(_at(2024, m, 10), str(m * 100), [(1, "10")]) for m in range(1, 7)
        ]
        shuffled = txns[:]
        random.Random(7).shuffle(shuffled)
        assert aggregate(shuffled, TimeRange.MONTH) == aggregate(txns, TimeRange.MONTH)
        assert [p.period for p in aggregate(shuffled, TimeRange.MONTH)] == [
            f"2024-0{m}" for m in range(1, 7)
        ]

    def test_empty_input_gives_no_periods(self):
        assert aggregate([], TimeRange.YEAR) == []

    def test_naive_timestamps_read_as_utc(self):
        [period] = aggregate([_txn(datetime(2024, 3, 5, 23, 30), "50")], TimeRange.DAY)
        assert period.period == "2024-03-05"


class TestPeriodKey:
    def test_day(self):
        assert period_key(_at(2024, 3, 5, 8), TimeRange.DAY) == "2024-03-05"

    def test_week_counts_within_month(self):
        assert period_key(_at(2024, 3, 1), TimeRange.WEEK) == "2024-W1"
        assert period_key(_at(2024, 3, 7), TimeRange.WEEK) == "2024-W1"
        assert period_key(_at(2024, 3, 8), TimeRange.WEEK) == "2024-W2"
        assert period_key(_at(2024, 3, 29), TimeRange.WEEK) == "2024-W5"

    def test_month_and_year(self):
        assert period_key(_at(2024, 11, 30), TimeRange.MONTH) == "2024-11"
        assert period_key(_at(2024, 11, 30), TimeRange.YEAR) == "2024"

    def test_keys_use_utc(self):
        from datetime import timedelta

        eat = timezone(timedelta(hours=3))
        # 01:00 in Dar es Salaam is still the previous day in UTC
        assert period_key(datetime(2024, 3, 6, 1, 0, tzinfo=eat), TimeRange.DAY) == "2024-03-05"


class TestReportWindow:
    def test_day_and_week(self):
        now = _at(2024, 3, 10, 12)
        assert report_window(TimeRange.DAY, now) == (_at(2024, 3, 9, 12), now)
        assert report_window(TimeRange.WEEK, now) == (_at(2024, 3, 3, 12), now)

    def test_month_clamps_day(self):
        now = _at(2024, 3, 31, 12)
        assert report_window(TimeRange.MONTH, now)[0] == _at(2024, 2, 29, 12)

    def test_year_from_leap_day(self):
        now = _at(2024, 2, 29)
        assert report_window(TimeRange.YEAR, now)[0] == _at(2023, 2, 28)


class TestSummarize:
    def test_margins_and_retained_earnings(self):
        periods = aggregate([_txn(_at(2024, 3, 5), "10000", [(3, "2000")])], TimeRange.DAY)
        totals = summarize(periods)

        assert totals.gross_margin == Decimal("40")
        assert totals.net_margin == Decimal("26")
        # net - tax - |drawings| = 2600 - 200 - 800
        assert totals.retained_earnings == Decimal("1600")
        assert totals.periods == ["2024-03-05"]

    def test_zero_revenue_margins_are_zero(self):
        periods = aggregate([_txn(_at(2024, 3, 5), "0")], TimeRange.DAY)
        totals = summarize(periods)
        assert totals.revenue == ZERO
        assert totals.gross_margin == ZERO
        assert totals.net_margin == ZERO
        assert totals.gross_margin.is_finite()

    def test_no_periods(self):
        totals = summarize([])
        assert totals.gross_margin == ZERO
        assert totals.retained_earnings == ZERO


# ── Store-backed statements ──────────────────────────────────────────────────


def _store(db: Session, *txns: Transaction) -> None:
    db.add_all(txns)
    db.commit()


class TestStatements:
    def test_financial_report_only_includes_window(self, db):
        now = _at(2024, 3, 10, 12)
        _store(
            db,
            _txn(_at(2024, 3, 10, 9), "5000", [(2, "1500")]),
            _txn(_at(2024, 3, 9, 18), "1000", [(1, "600")]),
            _txn(_at(2024, 3, 1, 9), "7000", [(1, "7000")]),
        )

        periods = get_financial_report(db, TimeRange.DAY, now)
        assert [p.period for p in periods] == ["2024-03-09", "2024-03-10"]
        assert sum((p.revenue for p in periods), ZERO) == Decimal("6000")

        monthly = get_financial_report(db, TimeRange.MONTH, now)
        assert sum((p.revenue for p in monthly), ZERO) == Decimal("13000")

    def test_balance_sheet_current_assets_from_sales(self, db):
        _store(db, _txn(_at(2024, 3, 1), "6000"), _txn(_at(2024, 3, 2), "3000"))

        sheet = get_balance_sheet(db)
        assert sheet.assets.non_current == Decimal("1759375")
        assert sheet.assets.current == Decimal("9000")
        assert sheet.assets.total == Decimal("1768375")
        assert sheet.equity_liabilities.owners_capital == Decimal("19875000")
        assert sheet.equity_liabilities.retained_earnings == Decimal("-2215225")
        assert sheet.equity_liabilities.current_liabilities == Decimal("3250000")
        assert sheet.equity_liabilities.total == Decimal("20909775")

    def test_cash_flow(self, db):
        _store(db, _txn(_at(2024, 3, 1), "6000"))
        flow = get_cash_flow(db)
        assert flow.operations == Decimal("6000")
        assert flow.investing == ZERO
        assert flow.financing == ZERO
        assert flow.closing_cash == Decimal("6000")

    def test_empty_store(self, db):
        assert get_balance_sheet(db).assets.current == ZERO
        assert get_cash_flow(db).closing_cash == ZERO


# ── Endpoints ────────────────────────────────────────────────────────────────


class TestReportEndpoints:
    def test_financial_report_endpoint(self, client, db, operator_token):
        _store(db, _txn(datetime.now(timezone.utc), "10000", [(3, "2000")]))

        res = client.get(
            "/api/v1/reports/financial",
            params={"time_range": "month"},
            headers=auth(operator_token),
        )
        assert res.status_code == 200
        data = res.json()
        assert data["time_range"] == "month"
        assert len(data["periods"]) == 1
        assert Decimal(data["totals"]["gross_profit"]) == Decimal("4000")
        assert Decimal(data["totals"]["net_margin"]) == Decimal("26")

    def test_unknown_time_range_rejected(self, client, operator_token):
        res = client.get(
            "/api/v1/reports/financial",
            params={"time_range": "decade"},
            headers=auth(operator_token),
        )
        assert res.status_code == 422

    def test_balance_sheet_and_cash_flow_endpoints(self, client, db, operator_token):
        _store(db, _txn(_at(2024, 3, 1), "2500"))

        sheet = client.get("/api/v1/reports/balance-sheet", headers=auth(operator_token)).json()
        assert Decimal(sheet["assets"]["current"]) == Decimal("2500")

        flow = client.get("/api/v1/reports/cash-flow", headers=auth(operator_token)).json()
        assert Decimal(flow["closing_cash"]) == Decimal("2500")

    def test_reports_require_auth(self, client):
        assert client.get("/api/v1/reports/financial").status_code == 401
