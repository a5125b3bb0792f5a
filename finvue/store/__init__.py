"""Store layer - provides persistence for the application.

This module re-exports the public store functions for easy importing.
"""

from finvue.store.ledger import TransactionStore
from finvue.store.queries import (
    CATEGORIES_KEY,
    TRANSACTIONS_KEY,
    delete_value,
    get_value,
    load_categories,
    load_transactions,
    save_categories,
    save_transactions,
    set_value,
)
from finvue.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "CATEGORIES_KEY",
    "TRANSACTIONS_KEY",
    "delete_value",
    "get_value",
    "load_categories",
    "load_transactions",
    "save_categories",
    "save_transactions",
    "set_value",
    # Store
    "TransactionStore",
]
