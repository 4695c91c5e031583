"""
Analytics facade over an item store.

Composes the progress, timeline and seasonal aggregators (plus home screen
highlights) for one collection scope at a time. Results are memoized per
scope for ``analytics.cache_ttl_sec`` seconds; ``invalidate_cache`` drops
entries immediately and can be registered as a donation listener:

    service = AnalyticsService(store)
    donations.add_listener(service.invalidate_cache)
"""

import threading
import time
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from collection.errors import CollectionError
from collection.models import Category, CollectibleItem
from collection.store import ItemStore
from seasons import current_month, utc_now
from settings.config import config

from .highlights import collection_status, recent_donations, seasonal_highlights
from .progress import compute_category_completion
from .schema import (
    CategoryCompletionData,
    CategoryProgress,
    CollectionStatus,
    MonthlyDonationActivity,
    RecentDonation,
    SeasonalData,
    SeasonalHighlight,
)
from .seasonal import analyze_seasonal_completion
from .timeline import build_monthly_timeline


class AnalyticsError(Exception):
    """Raised when analytics cannot read the item store"""
    pass


class AnalyticsService:
    """Read-only analytics for collection scopes."""

    def __init__(
        self,
        store: ItemStore,
        clock: Optional[Callable[[], datetime]] = None,
        cache_ttl: Optional[float] = None,
        seasonal_order: Optional[str] = None,
    ):
        """
        Initialize service.

        Args:
            store: Item store to read from
            clock: Callable returning the current time (defaults to UTC now)
            cache_ttl: Seconds a cached result stays valid (defaults to
                ``analytics.cache_ttl_sec``; 0 disables caching)
            seasonal_order: "chronological" or "alphabetical" (defaults to
                ``analytics.seasonal_order``)
        """
        self.store = store
        self.clock = clock or utc_now
        self.seasonal_order = seasonal_order or config.get('analytics.seasonal_order', 'chronological')

        if cache_ttl is None:
            cache_ttl = config.get('analytics.cache_ttl_sec', 300)
            if not config.get('analytics.cache_enabled', True):
                cache_ttl = 0
        self.cache_ttl = float(cache_ttl)

        self._cache: Dict[Tuple, Tuple[float, Any]] = {}
        # Bumped by invalidate_cache; a compute that spans a bump is not stored
        self._generation = 0
        self._scope_generations: Dict[Optional[str], int] = {}
        self._lock = threading.Lock()

    # Cache

    def _cached(self, key: Tuple, compute: Callable[[], Any]) -> Any:
        if self.cache_ttl <= 0:
            return compute()

        with self._lock:
            entry = self._cache.get(key)
            if entry is not None and time.monotonic() - entry[0] < self.cache_ttl:
                return entry[1]
            started = self._generation_of(key[1])

        value = compute()

        with self._lock:
            if self._generation_of(key[1]) == started:
                self._cache[key] = (time.monotonic(), value)
        return value

    def _generation_of(self, scope_id: Optional[str]) -> Tuple[int, int]:
        return self._generation, self._scope_generations.get(scope_id, 0)

    def invalidate_cache(self, scope_id: Optional[str] = None, item: Optional[CollectibleItem] = None):
        """
        Drop cached results.

        Args:
            scope_id: Scope to invalidate; None clears every scope
            item: Changed item (accepted so this can be a donation listener)
        """
        with self._lock:
            if scope_id is None:
                self._generation += 1
                self._cache.clear()
                return
            self._scope_generations[scope_id] = self._scope_generations.get(scope_id, 0) + 1
            for key in [k for k in self._cache if k[1] == scope_id]:
                del self._cache[key]

    def cache_size(self) -> int:
        with self._lock:
            return len(self._cache)

    # Store access

    def _items(self, category: Category, scope_id: Optional[str]) -> List[CollectibleItem]:
        try:
            return self.store.get_items(category, scope_id)
        except (OSError, CollectionError) as e:
            raise AnalyticsError(f"Failed to load {category.plural} for scope '{scope_id}': {e}") from e

    def _all_items(self, scope_id: Optional[str]) -> Dict[Category, List[CollectibleItem]]:
        return {category: self._items(category, scope_id) for category in Category}

    # Aggregations

    def get_category_completion(self, scope_id: Optional[str]) -> CategoryCompletionData:
        """
        Completion ratios for a scope.

        Returns:
            CategoryCompletionData; zeroed for unknown or empty scopes

        Raises:
            AnalyticsError: The store could not be read
        """
        def compute():
            items = self._all_items(scope_id)
            return compute_category_completion(
                items[Category.FOSSIL], items[Category.BUG], items[Category.FISH], items[Category.ART]
            )

        return self._cached(("completion", scope_id), compute)

    def get_monthly_timeline(
        self,
        scope_id: Optional[str],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MonthlyDonationActivity]:
        """
        Donations per month for a scope, ascending.

        Args:
            scope_id: Collection scope
            start_date: Inclusive lower bound (optional)
            end_date: Inclusive upper bound (optional)
        """
        def compute():
            items = self._all_items(scope_id)
            donations = [
                (category, item)
                for category, category_items in items.items()
                for item in category_items
            ]
            return build_monthly_timeline(donations, start_date, end_date)

        return list(self._cached(("timeline", scope_id, start_date, end_date), compute))

    def get_seasonal_breakdown(self, scope_id: Optional[str]) -> SeasonalData:
        """Per-month bug and fish completion for a scope."""
        def compute():
            return analyze_seasonal_completion(
                self._items(Category.BUG, scope_id),
                self._items(Category.FISH, scope_id),
                order=self.seasonal_order,
                clock=self.clock,
            )

        return self._cached(("seasonal", scope_id), compute)

    def get_collection_status(self, scope_id: Optional[str]) -> CollectionStatus:
        return collection_status(self.get_category_completion(scope_id))

    def get_category_progress(self, scope_id: Optional[str]) -> Dict[Category, CategoryProgress]:
        return self.get_category_completion(scope_id).by_category()

    def get_seasonal_highlights(self, scope_id: Optional[str], limit: Optional[int] = None) -> List[SeasonalHighlight]:
        """
        Bugs and fish available this month.

        Args:
            scope_id: Collection scope
            limit: Highlights per category (defaults to ``highlights.per_category``)
        """
        if limit is None:
            limit = config.get('highlights.per_category', 3)

        return seasonal_highlights(
            self._items(Category.BUG, scope_id),
            self._items(Category.FISH, scope_id),
            current_month(self.clock),
            limit_per_category=limit,
        )

    def get_recent_donations(self, scope_id: Optional[str], limit: Optional[int] = None) -> List[RecentDonation]:
        """
        Newest dated donations for a scope.

        Args:
            scope_id: Collection scope
            limit: Maximum results (defaults to ``highlights.recent_limit``)
        """
        if limit is None:
            limit = config.get('highlights.recent_limit', 5)

        items = self._all_items(scope_id)
        everything = [item for category_items in items.values() for item in category_items]
        return recent_donations(everything, self.clock(), limit=limit)
