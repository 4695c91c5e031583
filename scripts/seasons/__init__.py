"""
Season parsing for collectible availability.

Converts free-form season descriptions into calendar month sets and
provides month arithmetic used by seasonal analytics.
"""

from .months import (
    MONTH_ABBREVIATIONS,
    ALL_MONTHS,
    utc_now,
    month_abbreviation,
    current_month,
    month_index,
    next_month,
    sort_months,
    resolve_month_prefix,
)
from .parser import parse_season, parse_clause, strip_qualifiers, is_available_in, is_leaving_soon

__all__ = [
    'MONTH_ABBREVIATIONS',
    'ALL_MONTHS',
    'utc_now',
    'month_abbreviation',
    'current_month',
    'month_index',
    'next_month',
    'sort_months',
    'resolve_month_prefix',
    'parse_season',
    'parse_clause',
    'strip_qualifiers',
    'is_available_in',
    'is_leaving_soon',
]

__version__ = '1.0.0'
