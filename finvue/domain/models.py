"""Domain type definitions for finvue.

These types provide semantic clarity and help with type checking:
- Money: Amount in cents (minor units), always non-negative
- CategoryName: Name of a category in the taxonomy
- Description: Transaction description text
- TransactionType: Closed set of money movement kinds
- Taxonomy: Mapping of transaction type to ordered category names
"""

from enum import StrEnum
from typing import NewType

# Money amounts are stored as cents (minor units) to avoid floating point errors
Money = NewType("Money", int)

# Category name, opaque to the analytics engine
CategoryName = NewType("CategoryName", str)

# Transaction description text
Description = NewType("Description", str)


class TransactionType(StrEnum):
    """Kind of money movement. Determines sign and bucket in aggregations."""

    INCOME = "income"
    EXPENSE = "expense"
    BILL = "bill"
    SAVING = "saving"
    DEBT = "debt"


# Ordered category names per transaction type (order is display order only)
Taxonomy = dict[TransactionType, list[CategoryName]]

MONTHS = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]


def default_taxonomy() -> Taxonomy:
    """Build a fresh copy of the default category taxonomy."""
    return {
        TransactionType.INCOME: [
            CategoryName(name) for name in ("Salary", "Freelance", "Investment", "Gift", "Other")
        ],
        TransactionType.BILL: [
            CategoryName(name) for name in ("Rent/Mortgage", "Utilities", "Internet", "Phone", "Subscription")
        ],
        TransactionType.EXPENSE: [
            CategoryName(name)
            for name in ("Groceries", "Dining", "Transport", "Shopping", "Entertainment", "Health")
        ],
        TransactionType.SAVING: [
            CategoryName(name) for name in ("Emergency Fund", "Retirement", "Travel Fund", "General Savings")
        ],
        TransactionType.DEBT: [
            CategoryName(name) for name in ("Credit Card", "Personal Loan", "Student Loan", "Car Loan")
        ],
    }


def to_money(amount: float | str) -> Money:
    """Convert an amount in major units to cents, rounding to the nearest cent.

    Raises:
        ValueError: If amount is not numeric.
    """
    return Money(int(round(float(amount) * 100)))


def from_money(amount: Money) -> float:
    """Convert cents back to major units."""
    return amount / 100
