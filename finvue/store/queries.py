"""Key-value store query functions.

Two independent entries hold the application state, each a JSON document
replaced in full on every write (last write wins).
"""

import json
import sqlite3
from pathlib import Path
from typing import Any

from finvue.domain.categories import taxonomy_from_record, taxonomy_to_record
from finvue.domain.models import Taxonomy
from finvue.domain.transactions import Transaction, transaction_from_record, transaction_to_record
from finvue.logging_setup import get_logger
from finvue.store.schema import get_db_path

logger = get_logger(__name__)

TRANSACTIONS_KEY = "finvue_simple_data"
CATEGORIES_KEY = "finvue_categories"


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection with row factory.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection with row_factory configured.
    """
    if db_path is None:
        db_path = get_db_path()
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def get_value(key: str, db_path: Path | None = None) -> Any | None:
    """Read and decode a JSON entry.

    Args:
        key: Entry key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Decoded JSON value, or None if the key is absent.

    Raises:
        sqlite3.Error: If database operation fails.
        ValueError: If the stored value is not valid JSON.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cursor.fetchone()

    if row is None:
        return None

    try:
        return json.loads(row["value"])
    except json.JSONDecodeError as e:
        raise ValueError(f"Stored value for '{key}' is not valid JSON: {e}") from e


def set_value(key: str, value: Any, db_path: Path | None = None) -> None:
    """Encode and write a JSON entry, replacing any previous value.

    Args:
        key: Entry key.
        value: JSON-serializable value.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    payload = json.dumps(value)
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, payload),
            )
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def delete_value(key: str, db_path: Path | None = None) -> None:
    """Remove an entry if present.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    with _connect(db_path) as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("DELETE FROM kv WHERE key = ?", (key,))
            conn.commit()
        except sqlite3.Error:
            conn.rollback()
            raise


def load_transactions(db_path: Path | None = None) -> list[Transaction] | None:
    """Load the stored transaction list.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Transactions in stored order, or None if nothing has been saved yet.

    Raises:
        sqlite3.Error: If database operation fails.
        ValueError: If the stored list is malformed.
    """
    raw = get_value(TRANSACTIONS_KEY, db_path)
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise ValueError("Stored transactions must be a JSON list")

    try:
        transactions = [transaction_from_record(record) for record in raw]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Malformed transaction record: {e}") from e

    logger.debug("Loaded %d transactions", len(transactions))
    return transactions


def save_transactions(transactions: list[Transaction], db_path: Path | None = None) -> None:
    """Replace the stored transaction list.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    set_value(TRANSACTIONS_KEY, [transaction_to_record(t) for t in transactions], db_path)
    logger.debug("Saved %d transactions", len(transactions))


def load_categories(db_path: Path | None = None) -> Taxonomy | None:
    """Load the stored category taxonomy.

    Returns:
        Taxonomy, or None if nothing has been saved yet.

    Raises:
        sqlite3.Error: If database operation fails.
        ValueError: If the stored taxonomy is malformed.
    """
    raw = get_value(CATEGORIES_KEY, db_path)
    if raw is None:
        return None
    return taxonomy_from_record(raw)


def save_categories(taxonomy: Taxonomy, db_path: Path | None = None) -> None:
    """Replace the stored category taxonomy.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    set_value(CATEGORIES_KEY, taxonomy_to_record(taxonomy), db_path)
    logger.debug("Saved category taxonomy")
