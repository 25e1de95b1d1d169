"""
Term start helpers for --term-start.

uOttawa terms begin in January (winter), May (spring/summer) and
September (fall); classes start on the first Wednesday of the month.
"""
from __future__ import annotations

from datetime import date, timedelta

WEDNESDAY = 2


def first_wednesday(year: int, month: int) -> date:
    first = date(year, month, 1)
    return first + timedelta(days=(WEDNESDAY - first.weekday()) % 7)


def upcoming_term_start(today: date) -> date:
    """First Wednesday of the closest term that has not yet started its month."""
    if today.month <= 5:
        return first_wednesday(today.year, 5)
    if today.month <= 9:
        return first_wednesday(today.year, 9)
    return first_wednesday(today.year + 1, 1)


def parse_term_start(value: str, today: date | None = None) -> date:
    """Parse a --term-start value: 'YYYY-MM-DD' or 'auto'."""
    if value.strip().lower() == "auto":
        return upcoming_term_start(today or date.today())
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValueError(f"Invalid term start {value!r}; use YYYY-MM-DD or 'auto'.") from None
