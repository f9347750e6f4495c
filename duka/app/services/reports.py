"""Service layer for the financial dashboard reports."""
from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from sqlalchemy.orm import Session

from duka.app.core.database import as_utc, utcnow
from duka.app.models.transaction import Transaction
from duka.app.services.transactions import TransactionRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

# Placeholder ratios applied to gross profit until real expense data exists
OPERATING_EXPENSE_RATIO = Decimal("0.10")
TAX_RATIO = Decimal("0.05")
DRAWINGS_RATIO = Decimal("0.20")

# Fixed balance-sheet figures
NON_CURRENT_ASSETS = Decimal("1759375")
OWNERS_CAPITAL = Decimal("19875000")
CURRENT_LIABILITIES = Decimal("3250000")
RETAINED_EARNINGS = Decimal("-2215225")


class TimeRange(str, enum.Enum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


# ── Records ──────────────────────────────────────────────────────────────────


@dataclass
class FinancialPeriod:
    period: str
    revenue: Decimal = ZERO
    cost_of_sales: Decimal = ZERO
    gross_profit: Decimal = ZERO
    operating_expenses: Decimal = ZERO
    net_profit: Decimal = ZERO
    tax_paid: Decimal = ZERO
    drawings: Decimal = ZERO


@dataclass
class Assets:
    non_current: Decimal
    current: Decimal
    total: Decimal


@dataclass
class EquityLiabilities:
    owners_capital: Decimal
    retained_earnings: Decimal
    current_liabilities: Decimal
    total: Decimal


@dataclass
class BalanceSheet:
    assets: Assets
    equity_liabilities: EquityLiabilities


@dataclass
class CashFlow:
    operations: Decimal
    investing: Decimal
    financing: Decimal
    closing_cash: Decimal


@dataclass
class ReportTotals:
    revenue: Decimal = ZERO
    cost_of_sales: Decimal = ZERO
    gross_profit: Decimal = ZERO
    operating_expenses: Decimal = ZERO
    net_profit: Decimal = ZERO
    tax_paid: Decimal = ZERO
    drawings: Decimal = ZERO
    gross_margin: Decimal = ZERO
    net_margin: Decimal = ZERO
    retained_earnings: Decimal = ZERO
    periods: list[str] = field(default_factory=list)


# ── Periods ──────────────────────────────────────────────────────────────────


def report_window(time_range: TimeRange, now: datetime | None = None) -> tuple[datetime, datetime]:
    end = as_utc(now or utcnow())
    if time_range is TimeRange.DAY:
        start = end - timedelta(days=1)
    elif time_range is TimeRange.WEEK:
        start = end - timedelta(days=7)
    elif time_range is TimeRange.MONTH:
        start = end - relativedelta(months=1)
    else:
        start = end - relativedelta(years=1)
    return start, end


def period_key(created_at: datetime, time_range: TimeRange) -> str:
    """Bucket key for a timestamp.

    Weeks are counted within the month (days 1-7 are W1, 8-14 are W2 and
    so on), not ISO weeks.
    """
    ts = as_utc(created_at)
    if time_range is TimeRange.DAY:
        return ts.strftime("%Y-%m-%d")
    if time_range is TimeRange.WEEK:
        return f"{ts.year}-W{(ts.day + 6) // 7}"
    if time_range is TimeRange.MONTH:
        return ts.strftime("%Y-%m")
    return str(ts.year)


def _sort_key(key: str) -> tuple[int, ...]:
    # "2024-W3" must sort before "2024-W10" should a key ever reach two digits
    return tuple(int(part.lstrip("W")) for part in key.split("-"))


# ── Aggregation ──────────────────────────────────────────────────────────────


def _cost_of_sales(transaction: Transaction) -> Decimal:
    return sum(
        (Decimal(str(item.price)) * item.quantity for item in transaction.items), ZERO
    )


def aggregate(transactions: Iterable[Transaction], time_range: TimeRange) -> list[FinancialPeriod]:
    """Group transactions by period and reduce each group to one record.

    Records come back in ascending period order regardless of input order.
    Periods with no transactions produce no record.
    """
    buckets: dict[str, list[Decimal]] = {}
    for txn in transactions:
        sums = buckets.setdefault(period_key(txn.created_at, time_range), [ZERO, ZERO])
        sums[0] += Decimal(str(txn.total_amount))
        sums[1] += _cost_of_sales(txn)

    periods: list[FinancialPeriod] = []
    for key in sorted(buckets, key=_sort_key):
        revenue, cost = buckets[key]
        gross = revenue - cost
        opex = gross * OPERATING_EXPENSE_RATIO
        tax = gross * TAX_RATIO
        drawings = gross * DRAWINGS_RATIO
        periods.append(
            FinancialPeriod(
                period=key,
                revenue=revenue,
                cost_of_sales=cost,
                gross_profit=gross,
                operating_expenses=opex,
                net_profit=gross - opex - tax - drawings,
                tax_paid=tax,
                drawings=drawings,
            )
        )
    return periods


def margin(part: Decimal, revenue: Decimal) -> Decimal:
    """Percentage of revenue; zero when there is no revenue."""
    if not revenue:
        return ZERO
    return part / revenue * HUNDRED


def summarize(periods: Iterable[FinancialPeriod]) -> ReportTotals:
    totals = ReportTotals()
    for p in periods:
        totals.revenue += p.revenue
        totals.cost_of_sales += p.cost_of_sales
        totals.gross_profit += p.gross_profit
        totals.operating_expenses += p.operating_expenses
        totals.net_profit += p.net_profit
        totals.tax_paid += p.tax_paid
        totals.drawings += p.drawings
        totals.periods.append(p.period)
    totals.gross_margin = margin(totals.gross_profit, totals.revenue)
    totals.net_margin = margin(totals.net_profit, totals.revenue)
    totals.retained_earnings = totals.net_profit - totals.tax_paid - abs(totals.drawings)
    return totals


# ── Statements ───────────────────────────────────────────────────────────────


def get_financial_report(
    db: Session, time_range: TimeRange, now: datetime | None = None
) -> list[FinancialPeriod]:
    start, end = report_window(time_range, now)
    transactions = TransactionRepository(db).list_between(start, end)
    logger.debug(
        "Aggregating %d transactions for %s window %s..%s",
        len(transactions), time_range.value, start.isoformat(), end.isoformat(),
    )
    return aggregate(transactions, time_range)


def get_balance_sheet(db: Session) -> BalanceSheet:
    current = TransactionRepository(db).total_amount()
    return BalanceSheet(
        assets=Assets(
            non_current=NON_CURRENT_ASSETS,
            current=current,
            total=NON_CURRENT_ASSETS + current,
        ),
        equity_liabilities=EquityLiabilities(
            owners_capital=OWNERS_CAPITAL,
            retained_earnings=RETAINED_EARNINGS,
            current_liabilities=CURRENT_LIABILITIES,
            total=OWNERS_CAPITAL + RETAINED_EARNINGS + CURRENT_LIABILITIES,
        ),
    )


def get_cash_flow(db: Session) -> CashFlow:
    operations = TransactionRepository(db).total_amount()
    investing = ZERO
    financing = ZERO
    return CashFlow(
        operations=operations,
        investing=investing,
        financing=financing,
        closing_cash=operations + investing + financing,
    )
