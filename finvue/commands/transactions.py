"""Transaction management commands (add, delete, list, export)."""

import sqlite3
import sys
from datetime import date
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from finvue.commands.common import currency_symbol, format_transaction_amount, open_store, resolve_month
from finvue.config import load_config, resolve_export_dir
from finvue.dates import normalize_date
from finvue.domain.categories import categories_for
from finvue.domain.export import export_filename, format_csv
from finvue.domain.models import MONTHS, TransactionType, to_money
from finvue.domain.transactions import (
    filter_transactions,
    matches_query,
    new_transaction,
    validate_transaction_input,
)

console = Console()


def add_command(
    txn_date: str | None,
    description: str,
    amount: str,
    txn_type: TransactionType = TransactionType.EXPENSE,
    category: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        txn_date: Transaction date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to today.
        description: Transaction description.
        amount: Positive amount in major units.
        txn_type: Transaction type.
        category: Category name. Defaults to the first category for the type.
    """
    try:
        store = open_store()
        symbol = currency_symbol()
    except (sqlite3.Error, ValueError) as e:
        console.print(f"[red]Error opening store: {e}[/red]", style="bold")
        sys.exit(1)

    allowed = categories_for(store.categories, txn_type)
    if category is None:
        category = allowed[0] if allowed else ""
    date_input = txn_date if txn_date is not None else date.today().isoformat()

    errors = validate_transaction_input(amount, description, date_input, category)
    if not errors and category not in allowed:
        errors["category"] = f"'{category}' is not a {txn_type} category (see 'finvue categories list')"

    if errors:
        console.print("[red]Transaction not added:[/red]", style="bold")
        for field_name, message in errors.items():
            console.print(f"  [red]{field_name}:[/red] {escape(message)}")
        sys.exit(1)

    txn = new_transaction(normalize_date(date_input), to_money(amount), txn_type, category, description)

    try:
        store.add(txn)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  ID: {txn.id}")
    console.print(f"  Date: {txn.date.isoformat()}")
    console.print(f"  Description: {escape(txn.description)}")
    console.print(f"  Type: {txn.type}")
    console.print(f"  Category: {escape(txn.category)}")
    console.print(f"  Amount: {format_transaction_amount(txn, symbol)}")


def delete_command(txn_id: str) -> None:
    """Delete a transaction by id."""
    try:
        store = open_store()
        txn = store.get(txn_id)
        if txn is None or not store.remove(txn_id):
            console.print(f"[red]Transaction {escape(txn_id)} not found[/red]")
            sys.exit(1)
    except (sqlite3.Error, ValueError) as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(
        f"[green]✓[/green] Deleted transaction {escape(txn_id)}: {txn.date.isoformat()} {escape(txn.description)}"
    )


def list_command(
    month: str | None = None,
    year: int | None = None,
    search: str = "",
    all: bool = False,
) -> None:
    """List transactions for a month, optionally filtered by a search query."""
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

    if all:
        transactions = [t for t in store.list() if matches_query(t, search)]
        period = "All Time"
    else:
        transactions = filter_transactions(store.list(), month_index, search, year)
        period = MONTHS[month_index] + (f" {year}" if year is not None else "")

    if not transactions:
        if search:
            console.print(f"[yellow]No matches found for '{escape(search)}' ({period})[/yellow]")
        else:
            console.print(f"[yellow]No records found for {period}[/yellow]")
        return

    title = f"Search Results ({len(transactions)})" if search else f"Recent Activity - {period}"
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Type", style="dim")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        table.add_row(
            txn.id,
            txn.date.isoformat(),
            escape(txn.description),
            escape(txn.category),
            txn.type.value,
            format_transaction_amount(txn, symbol),
        )

    console.print(table)


def export_command(output: str | None = None) -> None:
    """Export all transactions to CSV."""
    try:
        store = open_store()
        transactions = store.list()
        export_dir = resolve_export_dir(load_config())
    except (sqlite3.Error, ValueError) as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    if not transactions:
        console.print("[yellow]No transactions to export[/yellow]")
        return

    output_path = Path(output).expanduser() if output else export_dir / export_filename(date.today().isoformat())

    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(format_csv(transactions), encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(transactions)} transactions to: {output_path}")
