"""Tests for finvue.domain.export pure functions."""

from datetime import date

from finvue.domain.export import export_filename, format_csv, format_plain_amount
from finvue.domain.models import CategoryName, Description, Money, TransactionType
from finvue.domain.transactions import Transaction


def make_txn(description: str, amount: int, txn_type: TransactionType = TransactionType.EXPENSE) -> Transaction:
    return Transaction(
        id="x",
        date=date(2024, 3, 12),
        amount=Money(amount),
        type=txn_type,
        category=CategoryName("Groceries"),
        description=Description(description),
    )


class TestFormatCsv:
    """Tests for format_csv."""

    def test_header_and_rows(self) -> None:
        """Should emit the header then one line per transaction."""
        csv_text = format_csv(
            [
                make_txn("Whole Foods Market", 14550),
                make_txn("Tech Corp Monthly", 480000, TransactionType.INCOME),
            ]
        )

        assert csv_text.split("\n") == [
            "Date,Description,Type,Category,Amount",
            '2024-03-12,"Whole Foods Market",expense,Groceries,145.5',
            '2024-03-12,"Tech Corp Monthly",income,Groceries,4800',
        ]

    def test_escapes_embedded_quotes(self) -> None:
        """Quotes inside the description are doubled."""
        csv_text = format_csv([make_txn('The "Good" Deli', 999)])

        assert csv_text.split("\n")[1] == '2024-03-12,"The ""Good"" Deli",expense,Groceries,9.99'

    def test_empty_collection_is_header_only(self) -> None:
        """Should still produce the header."""
        assert format_csv([]) == "Date,Description,Type,Category,Amount"


class TestFormatPlainAmount:
    """Tests for format_plain_amount."""

    def test_strips_trailing_zeros(self) -> None:
        """Whole amounts drop the decimals entirely."""
        assert format_plain_amount(Money(150000)) == "1500"
        assert format_plain_amount(Money(18020)) == "180.2"
        assert format_plain_amount(Money(5)) == "0.05"


def test_export_filename() -> None:
    """Should embed the date in the default file name."""
    assert export_filename("2025-01-31") == "finvue_export_2025-01-31.csv"
