"""Date utilities for finvue.

Pure functions for month arithmetic, trend windows and date parsing.
Months are 1-12 in (year, month) pairs; a "month index" is 0-11.
"""

from datetime import date, datetime, timedelta

import pandas as pd

from finvue.domain.models import MONTHS

TREND_WINDOW_MONTHS = 6


def month_range(year: int, month: int) -> tuple[date, date, str]:
    """Calculate date range and label for a month.

    Args:
        year: Calendar year.
        month: Month number (1-12).

    Returns:
        Tuple of (since, until, label) where:
        - since: First day of month
        - until: First day of next month
        - label: Human-readable month (e.g., "January 2025")

    Raises:
        ValueError: If month is out of range.
    """
    since = date(year, month, 1)
    until = (since.replace(day=28) + timedelta(days=4)).replace(day=1)
    label = f"{MONTHS[month - 1]} {year}"
    return since, until, label


def shift_month(year: int, month: int, offset: int) -> tuple[int, int]:
    """Move a (year, month) pair by a number of months, wrapping years.

    Args:
        year: Calendar year.
        month: Month number (1-12).
        offset: Months to move (negative moves backwards).

    Returns:
        Tuple of (year, month).
    """
    total = year * 12 + (month - 1) + offset
    return total // 12, total % 12 + 1


def trend_window(today: date, size: int = TREND_WINDOW_MONTHS) -> list[tuple[int, int]]:
    """List the calendar months of a rolling window ending at today's month.

    Args:
        today: Reference date; its month is the last month of the window.
        size: Number of months in the window.

    Returns:
        List of (year, month) pairs, oldest first.
    """
    return [shift_month(today.year, today.month, -offset) for offset in range(size - 1, -1, -1)]


def month_label(month_index: int) -> str:
    """Short month label (e.g., "Jan") for a 0-11 month index."""
    return MONTHS[month_index][:3]


def parse_month(value: str) -> int:
    """Parse a month given as a number (1-12) or a name into a 0-11 index.

    Raises:
        ValueError: If the value is not a recognisable month.
    """
    text = value.strip()
    if text.isdigit():
        number = int(text)
        if 1 <= number <= 12:
            return number - 1
        raise ValueError(f"Month must be between 1 and 12, got {number}")

    lowered = text.lower()
    for index, name in enumerate(MONTHS):
        if len(lowered) >= 3 and name.lower().startswith(lowered):
            return index

    raise ValueError(f"Unknown month: {value!r}")


def normalize_date(value: str) -> date:
    """Normalize a user-entered date to a calendar date.

    Accepts YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY and other formats pandas understands.

    Raises:
        ValueError: If the value can't be parsed as a date.
    """
    if not value or not value.strip():
        raise ValueError("Date is required")
    try:
        parsed = pd.to_datetime(value.strip(), dayfirst=not _is_iso(value.strip()))
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Invalid date format: {value!r}") from e
    if pd.isna(parsed):
        raise ValueError(f"Invalid date format: {value!r}")
    return parsed.date()


def _is_iso(value: str) -> bool:
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True
