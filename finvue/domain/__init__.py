"""Domain models and types for finvue.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from finvue.domain.models import CategoryName, Description, Money, Taxonomy, TransactionType

__all__ = ["Money", "CategoryName", "Description", "Taxonomy", "TransactionType"]
