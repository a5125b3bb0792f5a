"""Pure functions for CSV export."""

from collections.abc import Sequence

from finvue.domain.models import Money
from finvue.domain.transactions import Transaction

CSV_HEADERS = ["Date", "Description", "Type", "Category", "Amount"]


def format_plain_amount(amount: Money) -> str:
    """Format cents in major units without trailing zeros (e.g., 14550 -> "145.5")."""
    text = f"{amount / 100:.2f}"
    return text.rstrip("0").rstrip(".")


def quote_field(value: str) -> str:
    """Wrap value in double quotes, doubling embedded quotes."""
    escaped = value.replace('"', '""')
    return f'"{escaped}"'


def format_csv_row(transaction: Transaction) -> str:
    """Format one transaction as a CSV line. Only the description is quoted."""
    return ",".join(
        [
            transaction.date.isoformat(),
            quote_field(transaction.description),
            transaction.type.value,
            transaction.category,
            format_plain_amount(transaction.amount),
        ]
    )


def format_csv(transactions: Sequence[Transaction]) -> str:
    """Format transactions as CSV with a header row.

    Args:
        transactions: Transactions in store order.

    Returns:
        CSV text, lines joined by newlines, no trailing newline.
    """
    lines = [",".join(CSV_HEADERS)]
    lines.extend(format_csv_row(t) for t in transactions)
    return "\n".join(lines)


def export_filename(date_str: str) -> str:
    """Default export file name for a YYYY-MM-DD date."""
    return f"finvue_export_{date_str}.csv"
