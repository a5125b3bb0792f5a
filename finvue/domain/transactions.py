"""Pure functions for transaction records, filtering and validation.

This module contains the functional core for transaction operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All monetary amounts are in cents (Money type).
"""

import math
import random
import string
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any, TypedDict

from finvue.dates import normalize_date
from finvue.domain.models import CategoryName, Description, Money, TransactionType, from_money, to_money

ID_ALPHABET = string.ascii_lowercase + string.digits
ID_LENGTH = 9
MIN_DESCRIPTION_LENGTH = 2


class TransactionRecord(TypedDict):
    """Serialized transaction as stored in the key-value store."""

    id: str
    date: str
    amount: float
    type: str
    category: str
    description: str


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction data. Edits replace the whole record."""

    id: str
    date: date
    amount: Money
    type: TransactionType
    category: CategoryName
    description: Description


def generate_transaction_id() -> str:
    """Generate a fresh opaque transaction id."""
    return "".join(random.choices(ID_ALPHABET, k=ID_LENGTH))


def new_transaction(
    txn_date: date,
    amount: Money,
    txn_type: TransactionType,
    category: str,
    description: str,
    txn_id: str | None = None,
) -> Transaction:
    """Create a transaction from validated input.

    Args:
        txn_date: Transaction date.
        amount: Amount in cents (positive).
        txn_type: Transaction type.
        category: Category name.
        description: Description (trimmed on creation).
        txn_id: Explicit id. If None, a fresh one is generated.

    Returns:
        New Transaction.
    """
    return Transaction(
        id=txn_id or generate_transaction_id(),
        date=txn_date,
        amount=amount,
        type=txn_type,
        category=CategoryName(category),
        description=Description(description.strip()),
    )


def validate_transaction_input(
    amount: str | None,
    description: str | None,
    txn_date: str | None,
    category: str | None,
) -> dict[str, str]:
    """Validate raw entry form input.

    Args:
        amount: Amount in major units as entered.
        description: Description as entered.
        txn_date: Date as entered.
        category: Selected category.

    Returns:
        Dictionary of field name to error message. Empty if input is valid.
    """
    errors: dict[str, str] = {}

    # Amount validation
    try:
        numeric = float(amount) if amount else math.nan
    except ValueError:
        numeric = math.nan
    if not math.isfinite(numeric * 100):
        errors["amount"] = "Please enter a valid amount"
    elif to_money(numeric) <= 0:
        errors["amount"] = "Amount must be greater than zero"

    # Description validation
    trimmed = (description or "").strip()
    if not trimmed:
        errors["description"] = "Description is required"
    elif len(trimmed) < MIN_DESCRIPTION_LENGTH:
        errors["description"] = "Description is too short"

    # Date validation
    if not txn_date:
        errors["date"] = "Date is required"
    else:
        try:
            normalize_date(txn_date)
        except ValueError:
            errors["date"] = "Invalid date format"

    if not category:
        errors["category"] = "Please select a category"

    return errors


def in_month(transaction: Transaction, month_index: int, year: int | None = None) -> bool:
    """Check if transaction falls in a calendar month.

    Args:
        transaction: Transaction to check.
        month_index: Month of year (0-11).
        year: Optional calendar year. If None, any year matches.

    Returns:
        True if the transaction date is in that month.
    """
    if transaction.date.month - 1 != month_index:
        return False
    return year is None or transaction.date.year == year


def matches_query(transaction: Transaction, query: str) -> bool:
    """Check if query is a case-insensitive substring of description or category.

    An empty query matches everything. The query is not trimmed.
    """
    needle = query.lower()
    return needle in transaction.description.lower() or needle in transaction.category.lower()


def filter_transactions(
    transactions: Sequence[Transaction],
    month_index: int,
    query: str = "",
    year: int | None = None,
) -> list[Transaction]:
    """Select transactions in a month that match a free-text query.

    Args:
        transactions: Full transaction collection (most recent first).
        month_index: Month of year (0-11).
        query: Free-text search. Empty matches all.
        year: Optional calendar year. If None, the month matches in every year.

    Returns:
        Matching transactions in input order.
    """
    return [t for t in transactions if in_month(t, month_index, year) and matches_query(t, query)]


def prepend_transaction(transactions: Sequence[Transaction], transaction: Transaction) -> list[Transaction]:
    """Insert transaction at the head of the collection (most recent first)."""
    return [transaction, *transactions]


def remove_transaction(transactions: Sequence[Transaction], txn_id: str) -> list[Transaction]:
    """Drop every transaction with the given id."""
    return [t for t in transactions if t.id != txn_id]


def replace_transaction(transactions: Sequence[Transaction], transaction: Transaction) -> list[Transaction]:
    """Replace the transaction sharing the given transaction's id, keeping its position."""
    return [transaction if t.id == transaction.id else t for t in transactions]


def transaction_to_record(transaction: Transaction) -> TransactionRecord:
    """Serialize a transaction for JSON storage (amount in major units)."""
    return TransactionRecord(
        id=transaction.id,
        date=transaction.date.isoformat(),
        amount=from_money(transaction.amount),
        type=transaction.type.value,
        category=transaction.category,
        description=transaction.description,
    )


def transaction_from_record(record: dict[str, Any]) -> Transaction:
    """Deserialize a stored transaction record.

    Raises:
        ValueError: If the record has an unknown type, bad date or bad amount.
        KeyError: If a required field is missing.
    """
    return Transaction(
        id=str(record["id"]),
        date=date.fromisoformat(str(record["date"])[:10]),
        amount=to_money(record["amount"]),
        type=TransactionType(record["type"]),
        category=CategoryName(str(record.get("category", ""))),
        description=Description(str(record.get("description", ""))),
    )
