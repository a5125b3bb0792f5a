"""Pure functions for dashboard analytics and aggregations.

This module contains the functional core for the dashboard:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

Every function recomputes from its arguments in full and is total over
well-formed input: empty collections and zero income give zeros, never errors.

All monetary amounts are in cents (Money type).
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from finvue.dates import month_label, trend_window
from finvue.domain.models import CategoryName, Money, Taxonomy, TransactionType
from finvue.domain.transactions import Transaction, filter_transactions

TOP_CATEGORY_LIMIT = 5
SPARKLINE_POINTS = 3

SparklineMetric = Literal["income", "outflow", "surplus"]


@dataclass(frozen=True)
class MonthlyStats:
    """Immutable per-month totals by transaction type."""

    income: Money = Money(0)
    expenses: Money = Money(0)
    savings: Money = Money(0)
    debts: Money = Money(0)
    bills: Money = Money(0)


@dataclass(frozen=True)
class SummaryMetrics:
    """Immutable headline figures derived from monthly stats."""

    total_income: Money
    total_expenses: Money  # expenses + bills
    total_savings: Money
    total_debts: Money
    net_balance: Money  # can be negative
    expense_ratio: float  # percentage of income
    efficiency_rate: int  # whole percentage of income left after outflow


@dataclass(frozen=True)
class TrendPoint:
    """Immutable trend bucket for one calendar month."""

    label: str
    year: int
    month: int
    net: Money
    income: Money
    categories: dict[CategoryName, Money] = field(default_factory=dict)


@dataclass(frozen=True)
class AllocationSlice:
    """Immutable slice of the capital allocation breakdown."""

    label: str
    value: Money


@dataclass(frozen=True)
class Dashboard:
    """Immutable result of one full dashboard recompute."""

    transactions: list[Transaction]
    stats: MonthlyStats
    metrics: SummaryMetrics
    allocation: list[AllocationSlice]
    trend: list[TrendPoint]
    top_categories: list[CategoryName]


def compute_monthly_stats(transactions: Sequence[Transaction]) -> MonthlyStats:
    """Sum amounts by transaction type.

    Args:
        transactions: Transactions already filtered to one month.

    Returns:
        MonthlyStats with one running total per type.
    """
    totals = {txn_type: 0 for txn_type in TransactionType}
    for txn in transactions:
        totals[txn.type] += txn.amount

    return MonthlyStats(
        income=Money(totals[TransactionType.INCOME]),
        expenses=Money(totals[TransactionType.EXPENSE]),
        savings=Money(totals[TransactionType.SAVING]),
        debts=Money(totals[TransactionType.DEBT]),
        bills=Money(totals[TransactionType.BILL]),
    )


def calculate_percentage(part: int, whole: int) -> float:
    """Calculate part as a percentage of whole, 0 when whole is not positive."""
    if whole <= 0:
        return 0.0
    return (part / whole) * 100


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return math.floor(value + 0.5)


def compute_summary_metrics(stats: MonthlyStats) -> SummaryMetrics:
    """Derive headline metrics from monthly stats.

    Args:
        stats: Monthly totals.

    Returns:
        SummaryMetrics. Ratios are 0 when there is no income.
    """
    total_expenses = Money(stats.expenses + stats.bills)
    net_balance = Money(stats.income - total_expenses - stats.savings - stats.debts)

    expense_ratio = calculate_percentage(total_expenses, stats.income)
    efficiency_rate = round_half_up(calculate_percentage(stats.income - total_expenses, stats.income))

    return SummaryMetrics(
        total_income=stats.income,
        total_expenses=total_expenses,
        total_savings=stats.savings,
        total_debts=stats.debts,
        net_balance=net_balance,
        expense_ratio=expense_ratio,
        efficiency_rate=efficiency_rate,
    )


def tracked_categories(taxonomy: Taxonomy) -> list[CategoryName]:
    """List the category keys seeded into every trend bucket.

    The union of the expense and bill groups, in taxonomy order, without duplicates.
    """
    seen: set[CategoryName] = set()
    keys: list[CategoryName] = []
    for txn_type in (TransactionType.EXPENSE, TransactionType.BILL):
        for name in taxonomy.get(txn_type, []):
            if name not in seen:
                seen.add(name)
                keys.append(name)
    return keys


def compute_trend_series(
    transactions: Sequence[Transaction],
    taxonomy: Taxonomy,
    today: date,
) -> list[TrendPoint]:
    """Build the rolling six-month trend series ending at today's month.

    Buckets are keyed by (year, month), so the same month in another year
    never lands in the window.

    Args:
        transactions: Full, unfiltered transaction collection.
        taxonomy: Category taxonomy; expense and bill names become per-category keys.
        today: Reference date for the end of the window.

    Returns:
        Exactly six TrendPoints, oldest first. Months without data are zero-filled.
    """
    keys = tracked_categories(taxonomy)
    window = trend_window(today)

    buckets: dict[tuple[int, int], dict[str, int]] = {}
    categories: dict[tuple[int, int], dict[CategoryName, int]] = {}
    for year_month in window:
        buckets[year_month] = {"net": 0, "income": 0}
        categories[year_month] = {name: 0 for name in keys}

    for txn in transactions:
        year_month = (txn.date.year, txn.date.month)
        bucket = buckets.get(year_month)
        if bucket is None:
            continue

        if txn.type == TransactionType.INCOME:
            bucket["income"] += txn.amount
            bucket["net"] += txn.amount
        else:
            bucket["net"] -= txn.amount
            if txn.category in categories[year_month]:
                categories[year_month][txn.category] += txn.amount

    return [
        TrendPoint(
            label=month_label(month - 1),
            year=year,
            month=month,
            net=Money(buckets[(year, month)]["net"]),
            income=Money(buckets[(year, month)]["income"]),
            categories={name: Money(amount) for name, amount in categories[(year, month)].items()},
        )
        for year, month in window
    ]


def top_categories(
    transactions: Sequence[Transaction],
    limit: int = TOP_CATEGORY_LIMIT,
) -> list[CategoryName]:
    """Rank non-income categories by total amount.

    Args:
        transactions: Transactions to rank.
        limit: Maximum number of categories to return.

    Returns:
        Category names, largest total first. Ties keep first-encounter order.
    """
    totals: dict[CategoryName, int] = {}
    for txn in transactions:
        if txn.type != TransactionType.INCOME:
            totals[txn.category] = totals.get(txn.category, 0) + txn.amount

    ranked = sorted(totals.items(), key=lambda x: x[1], reverse=True)
    return [name for name, _ in ranked[:limit]]


def capital_allocation(stats: MonthlyStats) -> list[AllocationSlice]:
    """Break outflow down into bills, expenses, debts and savings.

    Args:
        stats: Monthly totals.

    Returns:
        AllocationSlices in fixed order, omitting zero values.
    """
    slices = [
        AllocationSlice(label="Bills", value=stats.bills),
        AllocationSlice(label="Expenses", value=stats.expenses),
        AllocationSlice(label="Debts", value=stats.debts),
        AllocationSlice(label="Savings", value=stats.savings),
    ]
    return [s for s in slices if s.value != 0]


def sparkline(
    trend: Sequence[TrendPoint],
    metric: SparklineMetric,
    points: int = SPARKLINE_POINTS,
) -> list[Money]:
    """Project the most recent trend points onto a single metric.

    Args:
        trend: Trend series, oldest first.
        metric: "income", "outflow" (sum of tracked categories) or "surplus" (net, floored at zero).
        points: Number of trailing points to keep.

    Returns:
        Values oldest first.
    """
    tail = list(trend)[-points:] if points > 0 else []

    if metric == "income":
        return [p.income for p in tail]
    elif metric == "outflow":
        return [Money(sum(p.categories.values())) for p in tail]
    else:
        return [Money(max(p.net, 0)) for p in tail]


def build_dashboard(
    transactions: Sequence[Transaction],
    taxonomy: Taxonomy,
    month_index: int,
    today: date,
    query: str = "",
    year: int | None = None,
) -> Dashboard:
    """Recompute every dashboard structure from a snapshot.

    The trend series always uses the unfiltered collection; everything else
    uses the month/query selection.

    Args:
        transactions: Full transaction collection.
        taxonomy: Category taxonomy.
        month_index: Selected month (0-11).
        today: Reference date for the trend window.
        query: Free-text search.
        year: Optional calendar year for the month selection.

    Returns:
        Dashboard with all derived data.
    """
    selected = filter_transactions(transactions, month_index, query, year)
    stats = compute_monthly_stats(selected)

    return Dashboard(
        transactions=selected,
        stats=stats,
        metrics=compute_summary_metrics(stats),
        allocation=capital_allocation(stats),
        trend=compute_trend_series(transactions, taxonomy, today),
        top_categories=top_categories(selected),
    )
