"""Dashboard command: monthly summary, allocation and trend views."""

import sqlite3
import sys
from datetime import date

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finvue.commands.common import (
    currency_symbol,
    format_money,
    format_transaction_amount,
    open_store,
    render_sparkline,
    resolve_month,
)
from finvue.domain.analytics import AllocationSlice, Dashboard, TrendPoint, build_dashboard, sparkline
from finvue.domain.models import MONTHS, CategoryName, Money

console = Console()

BAR_WIDTH = 30


def calculate_bar_length(value: Money, max_value: Money, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        value: Amount to display.
        max_value: Largest amount in the dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_value <= 0:
        return 0
    return int((abs(value) / max_value) * bar_width)


def render_summary_cards(dashboard: Dashboard, symbol: str) -> None:
    """Render the inflow / outflow / savings / debt cards with sparklines."""
    metrics = dashboard.metrics
    trend = dashboard.trend

    table = Table(title="Summary", show_header=True)
    table.add_column("")
    table.add_column("Amount", justify="right")
    table.add_column("Last 3 months", justify="left")

    table.add_row("+ Inflow", format_money(metrics.total_income, symbol), render_sparkline(sparkline(trend, "income")))
    table.add_row(
        "- Outflow", format_money(metrics.total_expenses, symbol), render_sparkline(sparkline(trend, "outflow"))
    )
    table.add_row(
        "↑ Allocated Savings",
        format_money(metrics.total_savings, symbol),
        render_sparkline(sparkline(trend, "surplus")),
    )
    table.add_row("↓ Debt Serviced", format_money(metrics.total_debts, symbol), "")

    console.print(table)


def render_net_focus(dashboard: Dashboard, symbol: str) -> None:
    """Render net balance with expense ratio and efficiency rate."""
    metrics = dashboard.metrics
    net_display = format_money(metrics.net_balance, symbol)
    if metrics.net_balance < 0:
        console.print(f"\n[bold]Net balance:[/bold] [red]{net_display}[/red] [dim](deficit)[/dim]")
    else:
        console.print(f"\n[bold]Net balance:[/bold] [green]{net_display}[/green]")

    console.print(f"  Expense ratio: {metrics.expense_ratio:.1f}%")
    console.print(f"  Efficiency rate: {metrics.efficiency_rate}%\n")


def render_allocation(allocation: list[AllocationSlice], symbol: str) -> None:
    """Render the capital allocation breakdown as horizontal bars."""
    if not allocation:
        console.print("[dim]No outflow allocated this month[/dim]\n")
        return

    console.print("[bold]Capital allocation:[/bold]\n")
    max_value = Money(max(s.value for s in allocation))
    total = sum(s.value for s in allocation)

    for s in allocation:
        bar = "█" * calculate_bar_length(s.value, max_value, BAR_WIDTH)
        share = s.value / total * 100
        console.print(f"  {s.label:10} {format_money(s.value, symbol):>12} {share:5.1f}% {bar}")
    console.print()


def render_trend(trend: list[TrendPoint], top: list[CategoryName], symbol: str) -> None:
    """Render the six-month trend with income, net and the top categories."""
    table = Table(title="Six-month trend")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right")
    table.add_column("Net", justify="right")
    for name in top:
        table.add_column(escape(name), justify="right")

    for point in trend:
        net_display = format_money(point.net, symbol)
        if point.net < 0:
            net_display = f"[red]{net_display}[/red]"

        cells = [f"{point.label} {point.year}", format_money(point.income, symbol), net_display]
        for name in top:
            # Only expense and bill categories are tracked per month
            value = point.categories.get(name)
            cells.append(format_money(value, symbol) if value is not None else "[dim]-[/dim]")
        table.add_row(*cells)

    console.print(table)


def render_activity(dashboard: Dashboard, symbol: str, query: str) -> None:
    """Render the filtered transaction list."""
    title = f"Search Results ({len(dashboard.transactions)})" if query else "Recent Activity"

    if not dashboard.transactions:
        console.print(f"[dim]{title}: {'No matches found' if query else 'No records found for this period'}[/dim]")
        return

    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Reference", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Value", justify="right")

    for txn in dashboard.transactions:
        table.add_row(
            txn.date.strftime("%m/%d"),
            escape(txn.description),
            f"{escape(txn.category)} • {txn.type}",
            format_transaction_amount(txn, symbol),
        )

    console.print(table)


def dashboard_command(
    month: str | None = None,
    year: int | None = None,
    search: str = "",
) -> None:
    """Show the dashboard for a month."""
    today = date.today()

    try:
        month_index = resolve_month(month, today)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    try:
        store = open_store()
        symbol = currency_symbol()
    except (sqlite3.Error, ValueError) as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    # Functional core: one full recompute from a snapshot
    dashboard = build_dashboard(store.list(), store.categories, month_index, today, search, year)

    # Imperative shell: display results
    period = MONTHS[month_index] + (f" {year}" if year is not None else "")
    console.print(f"[bold cyan]{period}[/bold cyan]")
    if search:
        console.print(f"[dim]Filtered by '{escape(search)}'[/dim]")
    console.print()

    render_summary_cards(dashboard, symbol)
    render_net_focus(dashboard, symbol)
    render_allocation(dashboard.allocation, symbol)
    render_trend(dashboard.trend, dashboard.top_categories, symbol)
    render_activity(dashboard, symbol, search)
