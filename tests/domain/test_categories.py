"""Tests for finvue.domain.categories pure functions."""

import pytest

from finvue.domain.categories import (
    add_category,
    categories_for,
    delete_category,
    rename_category,
    taxonomy_from_record,
    taxonomy_to_record,
)
from finvue.domain.models import CategoryName, TransactionType, default_taxonomy


def small_taxonomy() -> dict[TransactionType, list[CategoryName]]:
    return {
        TransactionType.EXPENSE: [CategoryName("Groceries"), CategoryName("Dining")],
        TransactionType.INCOME: [CategoryName("Salary")],
    }


class TestAddCategory:
    """Tests for add_category."""

    def test_appends_trimmed_name(self) -> None:
        """Should append the trimmed name at the end."""
        taxonomy, error = add_category(small_taxonomy(), TransactionType.EXPENSE, "  Coffee ")

        assert error is None
        assert taxonomy[TransactionType.EXPENSE] == ["Groceries", "Dining", "Coffee"]

    def test_does_not_mutate_input(self) -> None:
        """The original taxonomy is left as it was."""
        original = small_taxonomy()

        add_category(original, TransactionType.EXPENSE, "Coffee")

        assert original == small_taxonomy()

    def test_rejects_blank_name(self) -> None:
        """Should refuse empty names."""
        original = small_taxonomy()
        taxonomy, error = add_category(original, TransactionType.EXPENSE, "   ")

        assert error == "Category name can't be empty"
        assert taxonomy is original

    def test_rejects_duplicate(self) -> None:
        """Names must be distinct within a type."""
        _, error = add_category(small_taxonomy(), TransactionType.EXPENSE, "Dining")

        assert error is not None
        assert "already exists" in error

    def test_same_name_under_another_type(self) -> None:
        """Distinctness is per type."""
        taxonomy, error = add_category(small_taxonomy(), TransactionType.INCOME, "Dining")

        assert error is None
        assert taxonomy[TransactionType.INCOME] == ["Salary", "Dining"]

    def test_adds_missing_type(self) -> None:
        """Should create the list for a type that has none."""
        taxonomy, error = add_category(small_taxonomy(), TransactionType.DEBT, "Car Loan")

        assert error is None
        assert taxonomy[TransactionType.DEBT] == ["Car Loan"]


class TestRenameCategory:
    """Tests for rename_category."""

    def test_keeps_position(self) -> None:
        """Renamed category stays where it was."""
        taxonomy, error = rename_category(small_taxonomy(), TransactionType.EXPENSE, "Groceries", "Food")

        assert error is None
        assert taxonomy[TransactionType.EXPENSE] == ["Food", "Dining"]

    def test_unknown_name(self) -> None:
        """Should report names that don't exist."""
        _, error = rename_category(small_taxonomy(), TransactionType.EXPENSE, "Travel", "Trips")

        assert error is not None
        assert "not found" in error

    def test_rejects_collision(self) -> None:
        """Can't rename onto another existing name."""
        _, error = rename_category(small_taxonomy(), TransactionType.EXPENSE, "Groceries", "Dining")

        assert error is not None
        assert "already exists" in error

    def test_rename_to_itself(self) -> None:
        """Renaming to the same name is allowed."""
        taxonomy, error = rename_category(small_taxonomy(), TransactionType.EXPENSE, "Dining", " Dining ")

        assert error is None
        assert taxonomy[TransactionType.EXPENSE] == ["Groceries", "Dining"]

    def test_rejects_blank(self) -> None:
        """Should refuse empty replacement names."""
        _, error = rename_category(small_taxonomy(), TransactionType.EXPENSE, "Dining", "")

        assert error == "Category name can't be empty"


class TestDeleteCategory:
    """Tests for delete_category."""

    def test_removes_name(self) -> None:
        """Should drop the category."""
        taxonomy, error = delete_category(small_taxonomy(), TransactionType.EXPENSE, "Groceries")

        assert error is None
        assert taxonomy[TransactionType.EXPENSE] == ["Dining"]

    def test_unknown_name(self) -> None:
        """Should report names that don't exist."""
        _, error = delete_category(small_taxonomy(), TransactionType.BILL, "Rent")

        assert error is not None


class TestTaxonomyRecords:
    """Tests for taxonomy serialization."""

    def test_default_taxonomy_round_trip(self) -> None:
        """Serialized defaults load back unchanged."""
        taxonomy = default_taxonomy()

        assert taxonomy_from_record(taxonomy_to_record(taxonomy)) == taxonomy

    def test_fills_missing_types_and_drops_unknown(self) -> None:
        """Missing types get empty lists; unknown keys are ignored."""
        taxonomy = taxonomy_from_record({"income": ["Salary"], "transfer": ["Internal"]})

        assert taxonomy[TransactionType.INCOME] == ["Salary"]
        assert taxonomy[TransactionType.BILL] == []
        assert len(taxonomy) == len(TransactionType)

    def test_rejects_non_mapping(self) -> None:
        """Should raise for malformed records."""
        with pytest.raises(ValueError):
            taxonomy_from_record(["Salary"])  # type: ignore[arg-type]

    def test_rejects_non_list_group(self) -> None:
        """Each group must be a list."""
        with pytest.raises(ValueError):
            taxonomy_from_record({"income": "Salary"})


class TestCategoriesFor:
    """Tests for categories_for."""

    def test_uses_taxonomy(self) -> None:
        """Should return the type's own list."""
        assert categories_for(small_taxonomy(), TransactionType.INCOME) == ["Salary"]

    def test_falls_back_to_defaults(self) -> None:
        """Types absent from the taxonomy use the defaults."""
        assert categories_for(small_taxonomy(), TransactionType.BILL) == default_taxonomy()[TransactionType.BILL]
