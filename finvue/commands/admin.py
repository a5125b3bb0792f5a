"""Admin commands for backup and init."""

import shutil
import sqlite3
import sys
from datetime import date, datetime
from pathlib import Path

from rich.console import Console

from finvue.config import create_default_config, get_config_path, load_config, resolve_db_path
from finvue.dates import shift_month
from finvue.domain.models import TransactionType, to_money
from finvue.domain.transactions import Transaction, new_transaction
from finvue.store.ledger import TransactionStore
from finvue.store.queries import CATEGORIES_KEY, TRANSACTIONS_KEY, delete_value
from finvue.store.schema import init_database

console = Console()

# (months before current, day, amount, type, category, description)
SAMPLE_ENTRIES: list[tuple[int, int, str, TransactionType, str, str]] = [
    (0, 1, "4800", TransactionType.INCOME, "Salary", "Tech Corp Monthly"),
    (0, 1, "1500", TransactionType.BILL, "Rent/Mortgage", "Apartment Rent"),
    (0, 5, "80", TransactionType.BILL, "Utilities", "City Power & Water"),
    (0, 10, "600", TransactionType.SAVING, "Retirement", "401k Contribution"),
    (0, 12, "145.50", TransactionType.EXPENSE, "Groceries", "Whole Foods Market"),
    (0, 15, "350", TransactionType.DEBT, "Personal Loan", "Bank Loan Payment"),
    (0, 18, "220", TransactionType.EXPENSE, "Dining", "Sushi Dinner"),
    (0, 22, "90", TransactionType.EXPENSE, "Transport", "Uber Rides"),
    (1, 1, "4800", TransactionType.INCOME, "Salary", "Tech Corp Monthly"),
    (1, 1, "1500", TransactionType.BILL, "Rent/Mortgage", "Apartment Rent"),
    (1, 5, "110", TransactionType.BILL, "Utilities", "City Power & Water"),
    (1, 10, "500", TransactionType.SAVING, "Retirement", "401k Contribution"),
    (1, 12, "180.20", TransactionType.EXPENSE, "Groceries", "Traders Joes"),
    (1, 15, "350", TransactionType.DEBT, "Personal Loan", "Bank Loan Payment"),
    (1, 20, "1200", TransactionType.EXPENSE, "Shopping", "New Laptop"),
    (2, 1, "4800", TransactionType.INCOME, "Salary", "Tech Corp Monthly"),
    (2, 1, "1500", TransactionType.BILL, "Rent/Mortgage", "Apartment Rent"),
    (2, 5, "75", TransactionType.BILL, "Utilities", "City Power & Water"),
    (2, 10, "1000", TransactionType.SAVING, "Emergency Fund", "Initial Savings"),
    (2, 15, "350", TransactionType.DEBT, "Personal Loan", "Bank Loan Payment"),
    (2, 20, "300", TransactionType.EXPENSE, "Health", "Gym Membership Annual"),
]


def build_sample_transactions(today: date) -> list[Transaction]:
    """Sample data spread over the three months ending at today's month, most recent first."""
    transactions = []
    for months_back, day, amount, txn_type, category, description in SAMPLE_ENTRIES:
        year, month = shift_month(today.year, today.month, -months_back)
        transactions.append(
            new_transaction(date(year, month, day), to_money(amount), txn_type, category, description)
        )
    return transactions


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup database and configuration files."""
    config_path = get_config_path()

    try:
        db_path = resolve_db_path(load_config(config_path))
    except ValueError as e:
        console.print(f"[red]Config error: {e}[/red]", style="bold")
        sys.exit(1)

    # Check if files exist
    if not db_path.exists():
        console.print("[red]Database not found. Run 'finvue init' first.[/red]", style="bold")
        sys.exit(1)

    if not config_path.exists():
        console.print("[red]Config not found. Run 'finvue init' first.[/red]", style="bold")
        sys.exit(1)

    # Determine backup directory
    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = db_path.parent / "backups"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    db_backup = backup_dir / f"finvue_{timestamp}.db"
    config_backup = backup_dir / f"config_{timestamp}.toml"

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        shutil.copy2(db_path, db_backup)
        console.print(f"[green]✓[/green] Database backed up to: {db_backup}")

        shutil.copy2(config_path, config_backup)
        console.print(f"[green]✓[/green] Config backed up to: {config_backup}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {backup_dir}[/dim]")

    except OSError as e:
        console.print(f"[red]Backup failed: {e}[/red]", style="bold")
        sys.exit(1)


def run_full_init(db_path: Path, config_path: Path, sample: bool) -> None:
    """Initialize new database and config, clearing any stored state."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    delete_value(TRANSACTIONS_KEY, db_path)
    delete_value(CATEGORIES_KEY, db_path)
    console.print("[green]✓[/green] Database initialized")

    if config_path.exists():
        console.print(f"[dim]Keeping existing config file at {config_path}[/dim]")
    else:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

    store = TransactionStore(db_path)
    store.set_categories(store.categories)
    if sample:
        transactions = build_sample_transactions(date.today())
        store.replace_all(transactions)
        console.print(f"[green]✓[/green] Loaded {len(transactions)} sample transactions")
    else:
        store.replace_all([])

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False, sample: bool = False) -> None:
    """Initialize finvue database and configuration."""
    config_path = get_config_path()

    try:
        db_path = resolve_db_path(load_config(config_path))
        db_exists = db_path.exists()
        config_exists = config_path.exists()

        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'finvue init --force' to overwrite[/yellow]")
            sys.exit(1)

        run_full_init(db_path, config_path, sample)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except (OSError, ValueError) as e:
        console.print(f"[red]Initialization error: {e}[/red]", style="bold")
        sys.exit(1)
