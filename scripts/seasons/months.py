"""
Calendar month helpers shared by the season parser and seasonal analytics.
"""

from datetime import date, datetime, timezone
from typing import Callable, Iterable, List, Optional, Union

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

ALL_MONTHS = frozenset(MONTH_ABBREVIATIONS)

_MONTH_INDEX = {abbrev: i for i, abbrev in enumerate(MONTH_ABBREVIATIONS)}


def utc_now() -> datetime:
    """Default clock: timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def month_abbreviation(moment: Union[date, datetime]) -> str:
    """Return the three-letter abbreviation for a date's month."""
    return MONTH_ABBREVIATIONS[moment.month - 1]


def current_month(clock: Optional[Callable[[], datetime]] = None) -> str:
    """
    Resolve "now" to a month abbreviation.

    Args:
        clock: Callable returning the current datetime (defaults to UTC now)

    Returns:
        Month abbreviation such as "Oct"
    """
    return month_abbreviation((clock or utc_now)())


def month_index(abbrev: str) -> int:
    """Zero-based calendar position of a month abbreviation."""
    try:
        return _MONTH_INDEX[abbrev]
    except KeyError:
        raise ValueError(f"Unknown month abbreviation: {abbrev!r}") from None


def next_month(abbrev: str) -> str:
    """Month following ``abbrev``; December wraps to January."""
    return MONTH_ABBREVIATIONS[(month_index(abbrev) + 1) % 12]


def sort_months(months: Iterable[str]) -> List[str]:
    """Order month abbreviations chronologically (Jan first)."""
    return sorted(months, key=month_index)


def resolve_month_prefix(text: str) -> Optional[str]:
    """
    Resolve free text to the first month abbreviation it starts with.

    Matching is case-sensitive on the abbreviation: "March" and "Mar" both
    resolve to "Mar", "march" resolves to nothing.
    """
    text = text.strip()
    for abbrev in MONTH_ABBREVIATIONS:
        if text.startswith(abbrev):
            return abbrev
    return None
