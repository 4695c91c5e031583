"""
Season description parser.

Turns availability text attached to bugs and fish ("March - June",
"December - February", "All (raining)", "March - June, September - November")
into the set of calendar months it covers.

Grammar, in precedence order:
1. Parenthetical qualifiers are stripped ("All (raining)" -> "All").
2. "All" as the whole description means every month.
3. Comma-separated clauses are parsed independently and unioned.
4. "<Month> - <Month>" is an inclusive range; a start after the end wraps
   around the year boundary ("Oct - Feb" -> Oct, Nov, Dec, Jan, Feb).
5. Anything else is a single month.

Clauses that match no month are dropped rather than raising.
"""

import re
from functools import lru_cache
from typing import FrozenSet, List, Optional

from .months import ALL_MONTHS, MONTH_ABBREVIATIONS, next_month, resolve_month_prefix

ALL_SENTINEL = "All"

_PARENTHETICAL = re.compile(r'\([^)]*\)')
# Hyphen, en-dash or em-dash with optional surrounding spaces
_RANGE_SEPARATOR = re.compile(r'\s*[-–—]\s*')


def strip_qualifiers(description: str) -> str:
    """Remove parenthetical notes such as "(raining)" and trim."""
    return _PARENTHETICAL.sub('', description).strip()


def _expand_range(start: str, end: str) -> List[str]:
    start_idx = MONTH_ABBREVIATIONS.index(start)
    end_idx = MONTH_ABBREVIATIONS.index(end)

    if start_idx <= end_idx:
        return list(MONTH_ABBREVIATIONS[start_idx:end_idx + 1])

    # Wraps past December
    return list(MONTH_ABBREVIATIONS[start_idx:]) + list(MONTH_ABBREVIATIONS[:end_idx + 1])


def parse_clause(clause: str) -> FrozenSet[str]:
    """
    Parse one comma-free clause into months.

    Args:
        clause: A single range ("March - June") or month ("October")

    Returns:
        Months covered by the clause; empty when nothing matches
    """
    clause = clause.strip()
    if not clause:
        return frozenset()

    if clause.startswith(ALL_SENTINEL):
        return ALL_MONTHS

    if _RANGE_SEPARATOR.search(clause):
        parts = _RANGE_SEPARATOR.split(clause)
        if len(parts) != 2:
            return frozenset()

        start = resolve_month_prefix(parts[0])
        end = resolve_month_prefix(parts[1])
        if start is None or end is None:
            return frozenset()

        return frozenset(_expand_range(start, end))

    month = resolve_month_prefix(clause)
    return frozenset([month]) if month else frozenset()


@lru_cache(maxsize=512)
def parse_season(description: Optional[str]) -> FrozenSet[str]:
    """
    Parse a season description into month abbreviations.

    Args:
        description: Free-form availability text, may be None or empty

    Returns:
        Frozen set of month abbreviations ("Jan" ... "Dec")
    """
    if not description:
        return frozenset()

    text = strip_qualifiers(description)
    if not text:
        return frozenset()

    if text.startswith(ALL_SENTINEL):
        return ALL_MONTHS

    months = set()
    for clause in text.split(','):
        months |= parse_clause(clause)

    return frozenset(months)


def is_available_in(description: Optional[str], month: str) -> bool:
    """Check whether a season description covers ``month``."""
    return month in parse_season(description)


def is_leaving_soon(description: Optional[str], current: str) -> bool:
    """
    Check whether an item is in its last available month.

    True when ``current`` is covered by the season but the following month
    is not. Year-round seasons are never leaving.
    """
    months = parse_season(description)
    return current in months and next_month(current) not in months
