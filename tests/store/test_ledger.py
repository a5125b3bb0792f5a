"""Tests for the key-value store and TransactionStore."""

import sqlite3
from datetime import date
from pathlib import Path

import pytest

from finvue.domain.models import CategoryName, Description, Money, TransactionType, default_taxonomy
from finvue.domain.transactions import Transaction
from finvue.store.ledger import TransactionStore
from finvue.store.queries import (
    CATEGORIES_KEY,
    TRANSACTIONS_KEY,
    get_value,
    load_categories,
    load_transactions,
    set_value,
)
from finvue.store.schema import database_exists, init_database


def make_txn(txn_id: str, amount: int = 1000, description: str = "Lunch") -> Transaction:
    return Transaction(
        id=txn_id,
        date=date(2025, 1, 15),
        amount=Money(amount),
        type=TransactionType.EXPENSE,
        category=CategoryName("Dining"),
        description=Description(description),
    )


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    path = tmp_path / "data" / "finvue.db"
    init_database(path)
    return path


class TestKeyValueQueries:
    """Tests for get_value and set_value."""

    def test_missing_key_is_none(self, db_path: Path) -> None:
        """Absent keys read as None."""
        assert get_value("nothing", db_path) is None
        assert load_transactions(db_path) is None
        assert load_categories(db_path) is None

    def test_last_write_wins(self, db_path: Path) -> None:
        """A second write replaces the first."""
        set_value("k", {"a": 1}, db_path)
        set_value("k", [1, 2, 3], db_path)

        assert get_value("k", db_path) == [1, 2, 3]

    def test_corrupt_json_raises_valueerror(self, db_path: Path) -> None:
        """Malformed stored JSON surfaces as ValueError."""
        conn = sqlite3.connect(db_path)
        conn.execute("INSERT INTO kv (key, value) VALUES (?, ?)", (TRANSACTIONS_KEY, "{not json"))
        conn.commit()
        conn.close()

        with pytest.raises(ValueError):
            load_transactions(db_path)

    def test_non_list_transactions_raise(self, db_path: Path) -> None:
        """The transaction entry must be a list."""
        set_value(TRANSACTIONS_KEY, {"id": "x"}, db_path)

        with pytest.raises(ValueError):
            load_transactions(db_path)

    def test_init_creates_parent_directory(self, tmp_path: Path) -> None:
        """Should create the database and its directory."""
        path = tmp_path / "nested" / "dir" / "finvue.db"

        init_database(path)

        assert database_exists(path)


class TestTransactionStore:
    """Tests for TransactionStore."""

    def test_fresh_store_defaults(self, db_path: Path) -> None:
        """A new store is empty with the default taxonomy."""
        store = TransactionStore(db_path)

        assert store.list() == []
        assert store.categories == default_taxonomy()

    def test_add_prepends_and_persists(self, db_path: Path) -> None:
        """New transactions go first and survive a reload."""
        store = TransactionStore(db_path)
        store.add(make_txn("1"))
        store.add(make_txn("2"))

        assert [t.id for t in store.list()] == ["2", "1"]
        assert [t.id for t in TransactionStore(db_path).list()] == ["2", "1"]

    def test_stored_layout(self, db_path: Path) -> None:
        """Transactions are stored as a JSON list with amounts in major units."""
        store = TransactionStore(db_path)
        store.add(make_txn("1", amount=14550))

        assert get_value(TRANSACTIONS_KEY, db_path) == [
            {
                "id": "1",
                "date": "2025-01-15",
                "amount": 145.5,
                "type": "expense",
                "category": "Dining",
                "description": "Lunch",
            }
        ]

    def test_remove(self, db_path: Path) -> None:
        """Should delete by id and report whether anything changed."""
        store = TransactionStore(db_path)
        store.add(make_txn("1"))

        assert store.remove("missing") is False
        assert store.remove("1") is True
        assert TransactionStore(db_path).list() == []

    def test_update_replaces_wholesale(self, db_path: Path) -> None:
        """Should replace the transaction sharing the id."""
        store = TransactionStore(db_path)
        store.add(make_txn("1", description="Old"))

        assert store.update(make_txn("1", description="New")) is True
        assert store.update(make_txn("2")) is False
        assert TransactionStore(db_path).list()[0].description == "New"

    def test_list_is_a_snapshot(self, db_path: Path) -> None:
        """Mutating a snapshot doesn't touch the store."""
        store = TransactionStore(db_path)
        store.add(make_txn("1"))

        snapshot = store.list()
        snapshot.clear()

        assert len(store.list()) == 1

    def test_set_categories_persists(self, db_path: Path) -> None:
        """Taxonomy edits are saved in their own entry."""
        store = TransactionStore(db_path)
        taxonomy = store.categories
        taxonomy[TransactionType.EXPENSE].append(CategoryName("Coffee"))
        store.set_categories(taxonomy)

        reloaded = TransactionStore(db_path)
        assert reloaded.categories[TransactionType.EXPENSE][-1] == "Coffee"
        assert get_value(CATEGORIES_KEY, db_path)["expense"][-1] == "Coffee"

    def test_categories_property_is_a_copy(self, db_path: Path) -> None:
        """Editing the returned taxonomy doesn't change the store."""
        store = TransactionStore(db_path)
        store.categories[TransactionType.EXPENSE].clear()

        assert store.categories[TransactionType.EXPENSE] == default_taxonomy()[TransactionType.EXPENSE]

    def test_category_edits_leave_transactions_alone(self, db_path: Path) -> None:
        """Deleting a category doesn't touch transactions that use it."""
        store = TransactionStore(db_path)
        store.add(make_txn("1"))
        taxonomy = store.categories
        taxonomy[TransactionType.EXPENSE] = []
        store.set_categories(taxonomy)

        assert TransactionStore(db_path).list()[0].category == "Dining"
