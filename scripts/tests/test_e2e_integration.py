#!/usr/bin/env python3
"""
End-to-end integration tests for the museum tracker.

Tests the complete flow from a JSONL-backed store through donations,
analytics and search.

Run with: python3 -m pytest scripts/tests/test_e2e_integration.py -v
Or: python3 scripts/tests/test_e2e_integration.py
"""

import unittest
import json
import shutil
import tempfile
from pathlib import Path
from datetime import datetime, timezone, timedelta
import sys

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from collection import (
    Category,
    Fossil,
    Bug,
    Fish,
    Art,
    Town,
    Game,
    JSONLItemStore,
    DonationService,
)
from analytics import AnalyticsService, LEAVING_SOON, AVAILABLE_NOW
from search import GlobalSearchService
from settings.config import config


NOW = datetime(2024, 12, 10, 18, 0, tzinfo=timezone.utc)


class TestFullPipeline(unittest.TestCase):
    """Test store -> donations -> analytics pipeline."""

    def setUp(self):
        """Set up a data directory with one town and a starter catalog."""
        self.temp_dir = tempfile.mkdtemp()
        self.data_dir = Path(self.temp_dir) / "data"
        self.store = JSONLItemStore(self.data_dir)

        self.town = Town(name="Maple Grove", player_name="Sam", game=Game.ACGCN)
        self.store.save_town(self.town)

        self.catalog = {
            Category.FOSSIL: [Fossil(name="T. Rex", part=part) for part in ("Skull", "Torso", "Tail")],
            Category.BUG: [
                Bug(name="Snowflake Moth", season="September - December"),
                Bug(name="Winter Beetle", season="December - February"),
                Bug(name="Common Butterfly", season="March - June"),
                Bug(name="Mystery Bug"),
            ],
            Category.FISH: [
                Fish(name="Sea Bass", season="All", location="Sea"),
                Fish(name="Koi", season="All (raining)", location="Pond"),
            ],
            Category.ART: [Art(name="Amazing Painting", based_on="The Night Watch")],
        }
        self.store.save_items(item for items in self.catalog.values() for item in items)

        self.clock = lambda: NOW
        self.donations = DonationService(self.store, clock=self.clock)
        self.analytics = AnalyticsService(self.store, clock=self.clock, cache_ttl=300)
        self.donations.add_listener(self.analytics.invalidate_cache)

        for category, items in self.catalog.items():
            for item in items:
                self.donations.link_to_town(category, item.id, self.town.id)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _donate(self, category: Category, index: int, when: datetime):
        return self.donations.mark_donated(category, self.catalog[category][index].id, when=when)

    def test_donations_flow_into_analytics(self):
        """Donations are reflected in completion, timeline and seasonal views."""
        empty = self.analytics.get_category_completion(self.town.id)
        self.assertEqual(empty.total_count, 10)
        self.assertEqual(empty.total_progress, 0.0)

        self._donate(Category.FOSSIL, 0, NOW - timedelta(days=60))
        self._donate(Category.FOSSIL, 1, NOW - timedelta(days=9))
        self._donate(Category.BUG, 0, NOW - timedelta(days=2))
        self._donate(Category.FISH, 0, NOW - timedelta(minutes=10))
        self.donations.mark_donated(Category.ART, self.catalog[Category.ART][0].id)

        completion = self.analytics.get_category_completion(self.town.id)
        self.assertEqual(completion.total_donated, 5)
        self.assertAlmostEqual(completion.total_progress, 0.5)
        self.assertAlmostEqual(completion.fossils.progress, 2 / 3)

        timeline = self.analytics.get_monthly_timeline(self.town.id)
        self.assertEqual([(m.key, m.total_count) for m in timeline], [("2024-10", 1), ("2024-12", 4)])
        self.assertEqual(timeline[1].art_count, 1)

        seasonal = self.analytics.get_seasonal_breakdown(self.town.id)
        december = seasonal.current_month_completion()
        self.assertEqual(december.month, "Dec")
        self.assertEqual((december.bug_count, december.bug_donated), (2, 1))
        self.assertEqual((december.fish_count, december.fish_donated), (2, 1))

    def test_unmark_removes_from_timeline(self):
        self._donate(Category.BUG, 0, NOW - timedelta(days=2))
        self.assertEqual(len(self.analytics.get_monthly_timeline(self.town.id)), 1)

        self.donations.unmark_donated(Category.BUG, self.catalog[Category.BUG][0].id)
        self.assertEqual(self.analytics.get_monthly_timeline(self.town.id), [])

    def test_home_screen(self):
        self._donate(Category.FOSSIL, 0, NOW - timedelta(days=1, hours=2))
        self._donate(Category.FISH, 1, NOW - timedelta(hours=5))

        status = self.analytics.get_collection_status(self.town.id)
        self.assertEqual((status.total_collected, status.total_available), (2, 10))

        highlights = self.analytics.get_seasonal_highlights(self.town.id)
        labels = {h.name: h.description for h in highlights}
        self.assertEqual(labels, {
            "Snowflake Moth": LEAVING_SOON,
            "Winter Beetle": AVAILABLE_NOW,
            "Sea Bass": AVAILABLE_NOW,
            "Koi": AVAILABLE_NOW,
        })

        recent = self.analytics.get_recent_donations(self.town.id)
        self.assertEqual([(r.title, r.relative_time) for r in recent], [
            ("Koi", "5 hours ago"),
            ("T. Rex Skull", "Yesterday"),
        ])

    def test_state_survives_reopen_and_compaction(self):
        """A fresh store over the same directory sees the latest state."""
        self._donate(Category.FOSSIL, 2, NOW - timedelta(days=3))
        kept = self.store.compact()
        self.assertEqual(kept["fossils.jsonl"], 3)
        self.assertEqual(kept["towns.jsonl"], 1)

        reopened = JSONLItemStore(self.data_dir)
        analytics = AnalyticsService(reopened, clock=self.clock, cache_ttl=0)
        completion = analytics.get_category_completion(self.town.id)
        self.assertEqual(completion.fossils.donated_count, 1)
        self.assertEqual(reopened.get_town(self.town.id).player_name, "Sam")

        with open(reopened.log_path(Category.FOSSIL)) as f:
            records = [json.loads(line) for line in f]
        self.assertEqual(len(records), 3)

    def test_search_scoped_to_town(self):
        unlinked = Bug(name="Moth of the Void", season="All")
        self.store.save_item(unlinked)

        search = GlobalSearchService(self.store)
        self.assertEqual(search.search("moth", town_id=self.town.id).total_count, 1)
        self.assertEqual(search.search("moth").total_count, 2)
        self.assertEqual(search.get_history(), ["moth"])

    def test_config_defaults(self):
        self.assertEqual(config.get('highlights.per_category'), 3)
        self.assertEqual(config.get('search.history_size'), 10)
        self.assertEqual(config.get('analytics.seasonal_order'), "chronological")


if __name__ == "__main__":
    unittest.main()
