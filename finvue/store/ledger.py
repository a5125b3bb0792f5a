"""Transaction store: in-memory state with load-on-init and save-on-mutation."""

from collections.abc import Sequence
from pathlib import Path

from finvue.domain.categories import copy_taxonomy
from finvue.domain.models import Taxonomy, default_taxonomy
from finvue.domain.transactions import (
    Transaction,
    prepend_transaction,
    remove_transaction,
    replace_transaction,
)
from finvue.logging_setup import get_logger
from finvue.store.queries import load_categories, load_transactions, save_categories, save_transactions
from finvue.store.schema import get_db_path, init_database

logger = get_logger(__name__)


class TransactionStore:
    """Authoritative transaction collection and category taxonomy.

    State is loaded once when the store is created and every mutation writes
    the affected entry back in full. Callers hand snapshots from ``list()``
    to the analytics functions; the analytics never see the store.
    """

    def __init__(self, db_path: Path | None = None) -> None:
        self.db_path = db_path or get_db_path()
        init_database(self.db_path)

        transactions = load_transactions(self.db_path)
        taxonomy = load_categories(self.db_path)

        self._transactions: list[Transaction] = transactions if transactions is not None else []
        self._categories: Taxonomy = taxonomy if taxonomy is not None else default_taxonomy()

    def list(self) -> list[Transaction]:
        """Snapshot of all transactions, most recent first."""
        return list(self._transactions)

    def get(self, txn_id: str) -> Transaction | None:
        return next((t for t in self._transactions if t.id == txn_id), None)

    def add(self, transaction: Transaction) -> None:
        self._transactions = prepend_transaction(self._transactions, transaction)
        save_transactions(self._transactions, self.db_path)
        logger.info("Added transaction %s", transaction.id)

    def remove(self, txn_id: str) -> bool:
        """Delete a transaction by id.

        Returns:
            True if a transaction was removed.
        """
        remaining = remove_transaction(self._transactions, txn_id)
        if len(remaining) == len(self._transactions):
            return False

        self._transactions = remaining
        save_transactions(self._transactions, self.db_path)
        logger.info("Removed transaction %s", txn_id)
        return True

    def update(self, transaction: Transaction) -> bool:
        """Replace the stored transaction with the same id.

        Returns:
            True if a transaction was replaced.
        """
        if self.get(transaction.id) is None:
            return False

        self._transactions = replace_transaction(self._transactions, transaction)
        save_transactions(self._transactions, self.db_path)
        logger.info("Updated transaction %s", transaction.id)
        return True

    def replace_all(self, transactions: Sequence[Transaction]) -> None:
        self._transactions = list(transactions)
        save_transactions(self._transactions, self.db_path)

    @property
    def categories(self) -> Taxonomy:
        return copy_taxonomy(self._categories)

    def set_categories(self, taxonomy: Taxonomy) -> None:
        self._categories = copy_taxonomy(taxonomy)
        save_categories(self._categories, self.db_path)
