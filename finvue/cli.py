"""CLI entry point for finvue."""

import typer

from finvue.commands.admin import backup_command, init_command
from finvue.commands.categories import (
    add_category_command,
    delete_category_command,
    list_categories_command,
    rename_category_command,
)
from finvue.commands.dashboard import dashboard_command
from finvue.commands.transactions import add_command, delete_command, export_command, list_command
from finvue.domain.models import TransactionType
from finvue.logging_setup import configure_logging

app = typer.Typer(
    name="finvue",
    help="FinVue - Personal finance tracking dashboard",
    add_completion=False,
)

categories_app = typer.Typer(help="Manage the category taxonomy.", add_completion=False)
app.add_typer(categories_app, name="categories")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """FinVue - Personal finance tracking dashboard."""
    configure_logging("DEBUG" if verbose else None)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: next to the database)"),
) -> None:
    """Backup your database and configuration files."""
    backup_command(output_dir)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing data"),
    sample: bool = typer.Option(False, "--sample", help="Load three months of sample transactions"),
) -> None:
    """Initialize finvue database and configuration."""
    init_command(force, sample)


@app.command()
def add(
    description: str,
    amount: str,
    txn_type: TransactionType = typer.Option(TransactionType.EXPENSE, "--type", "-t", help="Transaction type"),
    category: str = typer.Option(None, "--category", "-c", help="Category (default: first for the type)"),
    date: str = typer.Option(None, "--date", "-d", help="Date, e.g. 2025-01-31 (default: today)"),
) -> None:
    """Add a transaction."""
    add_command(date, description, amount, txn_type, category)


@app.command()
def delete(txn_id: str) -> None:
    """Delete a transaction by ID."""
    delete_command(txn_id)


@app.command(name="list")
def list_transactions(
    month: str = typer.Option(None, "--month", "-m", help="Month as number or name (default: current)"),
    year: int = typer.Option(None, "--year", "-y", help="Only this calendar year (default: any year)"),
    search: str = typer.Option("", "--search", "-s", help="Match description or category"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all months"),
) -> None:
    """List your transactions."""
    list_command(month, year, search, all)


@app.command()
def dashboard(
    month: str = typer.Option(None, "--month", "-m", help="Month as number or name (default: current)"),
    year: int = typer.Option(None, "--year", "-y", help="Only this calendar year (default: any year)"),
    search: str = typer.Option("", "--search", "-s", help="Match description or category"),
) -> None:
    """Show your monthly summary, allocation and six-month trend."""
    dashboard_command(month, year, search)


@app.command()
def export(
    output: str = typer.Option(None, "--output", "-o", help="Output CSV file"),
) -> None:
    """Export all transactions to CSV."""
    export_command(output)


@categories_app.command(name="list")
def categories_list(
    txn_type: TransactionType = typer.Option(None, "--type", "-t", help="Only this type"),
) -> None:
    """List categories."""
    list_categories_command(txn_type)


@categories_app.command(name="add")
def categories_add(txn_type: TransactionType, name: str) -> None:
    """Add a category."""
    add_category_command(txn_type, name)


@categories_app.command(name="rename")
def categories_rename(txn_type: TransactionType, old_name: str, new_name: str) -> None:
    """Rename a category."""
    rename_category_command(txn_type, old_name, new_name)


@categories_app.command(name="delete")
def categories_delete(txn_type: TransactionType, name: str) -> None:
    """Delete a category."""
    delete_category_command(txn_type, name)


if __name__ == "__main__":
    app()
