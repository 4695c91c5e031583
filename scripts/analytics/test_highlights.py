#!/usr/bin/env python3
"""
Tests for home screen highlights.

Run with: python3 -m pytest scripts/analytics/test_highlights.py -v
Or: python3 scripts/analytics/test_highlights.py
"""

import unittest
import sys
from pathlib import Path
from datetime import datetime, timedelta, timezone

# Add parent directory to path for imports when run directly
if __name__ == "__main__":
    sys.path.insert(0, str(Path(__file__).parent.parent))

from collection.models import Category, Fossil, Bug, Fish, Art
from analytics import (
    AVAILABLE_NOW,
    LEAVING_SOON,
    CollectionStatus,
    compute_category_completion,
    collection_status,
    seasonal_highlights,
    relative_time,
    recent_donations,
)


NOW = datetime(2024, 12, 10, 12, 0, tzinfo=timezone.utc)


class TestCollectionStatus(unittest.TestCase):
    """Test status card summary."""

    def test_status_from_completion(self):
        completion = compute_category_completion(
            [Fossil(name="Amber", is_donated=True), Fossil(name="Skull")],
            [Bug(name="Moth", is_donated=True)],
            [],
            [Art(name="Statue")],
        )
        status = collection_status(completion)

        self.assertEqual(status.total_collected, 2)
        self.assertEqual(status.total_available, 4)
        self.assertAlmostEqual(status.completion_percentage, 0.5)

    def test_empty(self):
        status = collection_status(compute_category_completion([], [], [], []))
        self.assertEqual(status, CollectionStatus())


class TestSeasonalHighlights(unittest.TestCase):
    """Test available-now and leaving-soon labels."""

    def test_labels(self):
        bugs = [
            Bug(name="Snowflake Moth", season="September - December"),
            Bug(name="Winter Beetle", season="December - February"),
            Bug(name="Cicada", season="June - July"),
        ]
        fish = [Fish(name="Koi", season="All (raining)")]

        highlights = seasonal_highlights(bugs, fish, "Dec")

        self.assertEqual([h.name for h in highlights], ["Snowflake Moth", "Winter Beetle", "Koi"])
        self.assertEqual(highlights[0].description, LEAVING_SOON)
        self.assertTrue(highlights[0].is_leaving)
        self.assertEqual(highlights[1].description, AVAILABLE_NOW)
        self.assertFalse(highlights[2].is_leaving)
        self.assertEqual(highlights[2].category, Category.FISH)

    def test_limit_per_category(self):
        """Each list contributes at most the limit, bugs first."""
        bugs = [Bug(name=f"Bug {i}", season="All") for i in range(5)]
        fish = [Fish(name=f"Fish {i}", season="All") for i in range(5)]

        highlights = seasonal_highlights(bugs, fish, "Jan", limit_per_category=2)

        self.assertEqual([h.name for h in highlights], ["Bug 0", "Bug 1", "Fish 0", "Fish 1"])

    def test_uses_parsed_season(self):
        """Month names inside qualifiers do not make an item available."""
        bugs = [Bug(name="Odd", season="June (not Dec)"), Bug(name="Seasonless")]
        self.assertEqual(seasonal_highlights(bugs, [], "Dec"), [])


class TestRecentDonations(unittest.TestCase):
    """Test recent donation listing and relative time labels."""

    def test_relative_time_labels(self):
        self.assertEqual(relative_time(NOW, NOW), "Just now")
        self.assertEqual(relative_time(NOW - timedelta(seconds=30), NOW), "Just now")
        self.assertEqual(relative_time(NOW - timedelta(minutes=1), NOW), "1 minute ago")
        self.assertEqual(relative_time(NOW - timedelta(minutes=5), NOW), "5 minutes ago")
        self.assertEqual(relative_time(NOW - timedelta(hours=1, minutes=20), NOW), "1 hour ago")
        self.assertEqual(relative_time(NOW - timedelta(hours=23), NOW), "23 hours ago")
        self.assertEqual(relative_time(NOW - timedelta(days=1, hours=3), NOW), "Yesterday")
        self.assertEqual(relative_time(NOW - timedelta(days=3), NOW), "3 days ago")

    def test_future_is_just_now(self):
        self.assertEqual(relative_time(NOW + timedelta(hours=2), NOW), "Just now")

    def test_newest_first_with_limit(self):
        items = [
            Fossil(name="T. Rex", part="Skull", is_donated=True, donation_timestamp=NOW - timedelta(days=2)),
            Bug(name="Moth", is_donated=True, donation_timestamp=NOW - timedelta(minutes=5)),
            Fish(name="Koi", season="All", is_donated=True),
            Art(name="Statue"),
            Art(name="Painting", is_donated=True, donation_timestamp=NOW - timedelta(hours=2)),
        ]

        recent = recent_donations(items, NOW, limit=2)

        self.assertEqual([r.title for r in recent], ["Moth", "Painting"])
        self.assertEqual(recent[0].relative_time, "5 minutes ago")
        self.assertEqual(recent[1].category, Category.ART)

        everything = recent_donations(items, NOW)
        self.assertEqual([r.title for r in everything], ["Moth", "Painting", "T. Rex Skull"])
        self.assertEqual(everything[2].to_dict()["category"], "fossil")


if __name__ == "__main__":
    unittest.main()
