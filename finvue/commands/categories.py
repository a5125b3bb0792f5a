"""Category management commands."""

import sqlite3
import sys

from rich.columns import Columns
from rich.console import Console
from rich.markup import escape

from finvue.commands.common import open_store
from finvue.domain.categories import add_category, delete_category, rename_category
from finvue.domain.models import Taxonomy, TransactionType
from finvue.store.ledger import TransactionStore

console = Console()


def _open() -> TransactionStore:
    try:
        return open_store()
    except (sqlite3.Error, ValueError) as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def _save(store: TransactionStore, taxonomy: Taxonomy, error: str | None) -> None:
    if error:
        console.print(f"[red]{escape(error)}[/red]")
        sys.exit(1)
    try:
        store.set_categories(taxonomy)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)


def list_categories_command(txn_type: TransactionType | None = None) -> None:
    """List categories, optionally for a single type."""
    store = _open()
    taxonomy = store.categories

    types = [txn_type] if txn_type else list(TransactionType)
    for t in types:
        names = taxonomy.get(t, [])
        console.print(f"[bold]{t.value.title()}[/bold] [dim]({len(names)})[/dim]")
        if names:
            items = [f"[cyan]{i}.[/cyan] {escape(name)}" for i, name in enumerate(names, 1)]
            console.print(Columns(items, equal=True, expand=False, column_first=True))
        else:
            console.print("[dim]  No categories[/dim]")
        console.print()


def add_category_command(txn_type: TransactionType, name: str) -> None:
    """Add a category to a type."""
    store = _open()
    taxonomy, error = add_category(store.categories, txn_type, name)
    _save(store, taxonomy, error)
    console.print(f"[green]✓[/green] Added {txn_type} category: {escape(name.strip())}")


def rename_category_command(txn_type: TransactionType, old_name: str, new_name: str) -> None:
    """Rename a category. Existing transactions keep the old name."""
    store = _open()
    taxonomy, error = rename_category(store.categories, txn_type, old_name, new_name)
    _save(store, taxonomy, error)
    console.print(f"[green]✓[/green] Renamed {txn_type} category: {escape(old_name)} → {escape(new_name.strip())}")
    console.print("[dim]Existing transactions keep their original category[/dim]")


def delete_category_command(txn_type: TransactionType, name: str) -> None:
    """Delete a category. Existing transactions keep the name."""
    store = _open()
    taxonomy, error = delete_category(store.categories, txn_type, name)
    _save(store, taxonomy, error)
    console.print(f"[green]✓[/green] Deleted {txn_type} category: {escape(name)}")
    console.print("[dim]Existing transactions keep their original category[/dim]")
