"""Pure functions for editing the category taxonomy.

Edits return a new taxonomy and never touch existing transactions:
renaming or deleting a category leaves transactions that reference the
old name as they are.
"""

from typing import Any

from finvue.domain.models import CategoryName, Taxonomy, TransactionType, default_taxonomy


def copy_taxonomy(taxonomy: Taxonomy) -> Taxonomy:
    """Copy taxonomy so edits don't alias the input lists."""
    return {txn_type: list(names) for txn_type, names in taxonomy.items()}


def add_category(
    taxonomy: Taxonomy,
    txn_type: TransactionType,
    name: str,
) -> tuple[Taxonomy, str | None]:
    """Append a category to a type's list.

    Args:
        taxonomy: Current taxonomy.
        txn_type: Transaction type to add to.
        name: New category name (trimmed).

    Returns:
        Tuple of (new_taxonomy, error_message). On error the input taxonomy is returned.
    """
    trimmed = name.strip()
    if not trimmed:
        return taxonomy, "Category name can't be empty"

    existing = taxonomy.get(txn_type, [])
    if trimmed in existing:
        return taxonomy, f"Category '{trimmed}' already exists for {txn_type}"

    updated = copy_taxonomy(taxonomy)
    updated[txn_type] = [*existing, CategoryName(trimmed)]
    return updated, None


def rename_category(
    taxonomy: Taxonomy,
    txn_type: TransactionType,
    old_name: str,
    new_name: str,
) -> tuple[Taxonomy, str | None]:
    """Rename a category in place, keeping its position.

    Args:
        taxonomy: Current taxonomy.
        txn_type: Transaction type owning the category.
        old_name: Current category name.
        new_name: Replacement name (trimmed).

    Returns:
        Tuple of (new_taxonomy, error_message).
    """
    trimmed = new_name.strip()
    if not trimmed:
        return taxonomy, "Category name can't be empty"

    existing = taxonomy.get(txn_type, [])
    if old_name not in existing:
        return taxonomy, f"Category '{old_name}' not found for {txn_type}"

    if trimmed != old_name and trimmed in existing:
        return taxonomy, f"Category '{trimmed}' already exists for {txn_type}"

    updated = copy_taxonomy(taxonomy)
    updated[txn_type] = [CategoryName(trimmed) if n == old_name else n for n in existing]
    return updated, None


def delete_category(
    taxonomy: Taxonomy,
    txn_type: TransactionType,
    name: str,
) -> tuple[Taxonomy, str | None]:
    """Remove a category from a type's list.

    Args:
        taxonomy: Current taxonomy.
        txn_type: Transaction type owning the category.
        name: Category to remove.

    Returns:
        Tuple of (new_taxonomy, error_message).
    """
    existing = taxonomy.get(txn_type, [])
    if name not in existing:
        return taxonomy, f"Category '{name}' not found for {txn_type}"

    updated = copy_taxonomy(taxonomy)
    updated[txn_type] = [n for n in existing if n != name]
    return updated, None


def taxonomy_to_record(taxonomy: Taxonomy) -> dict[str, list[str]]:
    """Serialize taxonomy for JSON storage."""
    return {txn_type.value: [str(n) for n in names] for txn_type, names in taxonomy.items()}


def taxonomy_from_record(record: dict[str, Any]) -> Taxonomy:
    """Deserialize a stored taxonomy.

    Types missing from the record get an empty list; unknown keys are dropped.

    Raises:
        ValueError: If the record is not a mapping of lists.
    """
    if not isinstance(record, dict):
        raise ValueError("Category taxonomy must be a JSON object")

    taxonomy: Taxonomy = {}
    for txn_type in TransactionType:
        names = record.get(txn_type.value, [])
        if not isinstance(names, list):
            raise ValueError(f"Categories for {txn_type} must be a list")
        taxonomy[txn_type] = [CategoryName(str(n)) for n in names]
    return taxonomy


def categories_for(taxonomy: Taxonomy, txn_type: TransactionType) -> list[CategoryName]:
    """Category names for a type, falling back to the defaults when the type is absent."""
    if txn_type in taxonomy:
        return list(taxonomy[txn_type])
    return default_taxonomy()[txn_type]
