"""Helpers shared by the CLI commands."""

from datetime import date

from finvue.config import get_currency_symbol, load_config, resolve_db_path
from finvue.dates import parse_month
from finvue.domain.models import Money, TransactionType
from finvue.domain.transactions import Transaction
from finvue.store.ledger import TransactionStore

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"


def open_store() -> TransactionStore:
    """Open the store at the configured database path.

    Raises:
        sqlite3.Error: If the database can't be opened.
        ValueError: If the config or stored data is malformed.
    """
    config = load_config()
    return TransactionStore(resolve_db_path(config))


def currency_symbol() -> str:
    return get_currency_symbol(load_config())


def format_money(amount: Money, symbol: str, include_sign: bool = False) -> str:
    """Format cents for display (e.g., "$1,234.50" or "-$12.00")."""
    formatted = f"{symbol}{abs(amount) / 100:,.2f}"
    if amount < 0:
        return f"-{formatted}"
    if include_sign:
        return f"+{formatted}"
    return formatted


def format_transaction_amount(txn: Transaction, symbol: str) -> str:
    """Signed, coloured amount: income positive, everything else negative."""
    if txn.type == TransactionType.INCOME:
        return f"[green]+{format_money(txn.amount, symbol)}[/green]"
    return f"[red]-{format_money(txn.amount, symbol)}[/red]"


def resolve_month(month: str | None, today: date) -> int:
    """Month option to a 0-11 index, defaulting to today's month.

    Raises:
        ValueError: If the month can't be parsed.
    """
    if month is None:
        return today.month - 1
    return parse_month(month)


def render_sparkline(values: list[Money]) -> str:
    """Render values as a row of unicode block characters."""
    if not values:
        return ""
    peak = max(values)
    if peak <= 0:
        return SPARK_BLOCKS[0] * len(values)
    top = len(SPARK_BLOCKS) - 1
    return "".join(SPARK_BLOCKS[int(max(v, 0) / peak * top)] for v in values)
