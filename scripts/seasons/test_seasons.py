#!/usr/bin/env python3
"""
Tests for season description parsing and month helpers.

Run with: python3 -m pytest scripts/seasons/test_seasons.py -v
Or: python3 scripts/seasons/test_seasons.py
"""

import unittest
import sys
from datetime import datetime, date, timezone
from pathlib import Path

# Add parent directory to path for imports when run directly
if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).parent.parent))

from seasons import (
    MONTH_ABBREVIATIONS,
    ALL_MONTHS,
    parse_season,
    parse_clause,
    strip_qualifiers,
    is_available_in,
    is_leaving_soon,
    month_abbreviation,
    current_month,
    next_month,
    sort_months,
    resolve_month_prefix,
)


class TestParseSeason(unittest.TestCase):
    """Test the season grammar."""

    def test_empty_description(self):
        """Empty and missing descriptions cover no months."""
        self.assertEqual(parse_season(""), frozenset())
        self.assertEqual(parse_season(None), frozenset())
        self.assertEqual(parse_season("   "), frozenset())

    def test_all_sentinel(self):
        """'All' short-circuits to every month."""
        self.assertEqual(parse_season("All"), ALL_MONTHS)
        self.assertEqual(len(parse_season("All")), 12)

    def test_all_with_parenthetical(self):
        """A trailing qualifier does not block the 'All' match."""
        self.assertEqual(parse_season("All (raining)"), ALL_MONTHS)
        self.assertEqual(parse_season("All year (except winter nights)"), ALL_MONTHS)

    def test_simple_range(self):
        """Inclusive range within one year."""
        self.assertEqual(parse_season("March - June"), {"Mar", "Apr", "May", "Jun"})

    def test_wraparound_range(self):
        """Start after end wraps over the year boundary."""
        self.assertEqual(
            parse_season("October - February"),
            {"Oct", "Nov", "Dec", "Jan", "Feb"},
        )

    def test_full_year_range(self):
        """January - December covers every month."""
        self.assertEqual(parse_season("January - December"), ALL_MONTHS)

    def test_multiple_ranges_unioned(self):
        """All clauses contribute, not only the last one."""
        months = parse_season("January - March, October - December")
        self.assertEqual(months, {"Jan", "Feb", "Mar", "Oct", "Nov", "Dec"})
        self.assertEqual(len(months), 6)

        months = parse_season("March - June, September - November")
        self.assertEqual(months, {"Mar", "Apr", "May", "Jun", "Sep", "Oct", "Nov"})

    def test_range_and_single_month(self):
        """Ranges and single months mix freely."""
        self.assertEqual(
            parse_season("March - June, October"),
            {"Mar", "Apr", "May", "Jun", "Oct"},
        )

    def test_overlapping_clauses_deduplicated(self):
        """Overlapping clauses do not double count."""
        months = parse_season("March - June, May - July")
        self.assertEqual(months, {"Mar", "Apr", "May", "Jun", "Jul"})

    def test_single_month(self):
        """A clause without a dash is a single month."""
        self.assertEqual(parse_season("June"), {"Jun"})
        self.assertEqual(parse_season("Sep"), {"Sep"})

    def test_dash_variants(self):
        """Hyphen, en-dash and missing spaces all denote ranges."""
        expected = {"Jul", "Aug", "Sep"}
        self.assertEqual(parse_season("July - September"), expected)
        self.assertEqual(parse_season("July – September"), expected)
        self.assertEqual(parse_season("July-September"), expected)
        self.assertEqual(parse_season("Jul—Sep"), expected)

    def test_unknown_clauses_ignored(self):
        """Unparseable clauses are dropped silently."""
        self.assertEqual(parse_season("Whenever"), frozenset())
        self.assertEqual(parse_season("Spring, June"), {"Jun"})
        self.assertEqual(parse_season("March - Someday"), frozenset())
        self.assertEqual(parse_season("March - May - July"), frozenset())

    def test_case_sensitive_prefix(self):
        """Month prefixes match the capitalized abbreviation only."""
        self.assertEqual(parse_season("march - june"), frozenset())
        self.assertEqual(parse_season("all"), frozenset())

    def test_parenthetical_inside_clause(self):
        """Qualifiers are stripped from individual clauses too."""
        self.assertEqual(parse_season("June (night) - August"), {"Jun", "Jul", "Aug"})

    def test_result_is_frozen(self):
        """Parsed sets are immutable so cached values stay intact."""
        months = parse_season("March - June")
        self.assertIsInstance(months, frozenset)
        self.assertIs(parse_season("March - June"), months)


class TestClauseHelpers(unittest.TestCase):
    """Test clause-level helpers."""

    def test_parse_clause(self):
        self.assertEqual(parse_clause(" Dec - Feb "), {"Dec", "Jan", "Feb"})
        self.assertEqual(parse_clause(""), frozenset())

    def test_strip_qualifiers(self):
        self.assertEqual(strip_qualifiers("All (raining)"), "All")
        self.assertEqual(strip_qualifiers("(night only)"), "")

    def test_resolve_month_prefix(self):
        self.assertEqual(resolve_month_prefix("March"), "Mar")
        self.assertEqual(resolve_month_prefix("  Sept "), "Sep")
        self.assertIsNone(resolve_month_prefix("Ma"))

    def test_is_available_in(self):
        self.assertTrue(is_available_in("December - February", "Jan"))
        self.assertFalse(is_available_in("December - February", "Mar"))
        self.assertFalse(is_available_in(None, "Jan"))

    def test_is_leaving_soon(self):
        """Leaving means available now and gone next month."""
        self.assertFalse(is_leaving_soon("All (raining)", "Dec"))
        self.assertFalse(is_leaving_soon("December - February", "Dec"))
        self.assertTrue(is_leaving_soon("September - December", "Dec"))
        self.assertTrue(is_leaving_soon("June - July", "Jul"))

    def test_is_leaving_soon_not_available(self):
        """Items outside their season are not leaving."""
        self.assertFalse(is_leaving_soon("June - July", "Dec"))
        self.assertFalse(is_leaving_soon(None, "Dec"))

    def test_is_leaving_soon_uses_parsed_months(self):
        """A month named only inside a qualifier does not count."""
        self.assertFalse(is_leaving_soon("All (except Jan)", "Dec"))
        self.assertTrue(is_leaving_soon("June (not Jul)", "Jun"))


class TestMonthHelpers(unittest.TestCase):
    """Test month arithmetic."""

    def test_month_abbreviation(self):
        self.assertEqual(month_abbreviation(date(2024, 1, 31)), "Jan")
        self.assertEqual(month_abbreviation(datetime(2024, 12, 1, tzinfo=timezone.utc)), "Dec")

    def test_current_month_uses_clock(self):
        clock = lambda: datetime(2025, 7, 4, 12, 0, tzinfo=timezone.utc)
        self.assertEqual(current_month(clock), "Jul")

    def test_next_month_wraps(self):
        self.assertEqual(next_month("Dec"), "Jan")
        self.assertEqual(next_month("Jan"), "Feb")

    def test_next_month_rejects_unknown(self):
        with self.assertRaises(ValueError):
            next_month("Smarch")

    def test_sort_months(self):
        self.assertEqual(sort_months({"Dec", "Jan", "Apr"}), ["Jan", "Apr", "Dec"])
        self.assertEqual(sort_months(ALL_MONTHS), list(MONTH_ABBREVIATIONS))


if __name__ == "__main__":
    unittest.main()
