"""
Cross-category item search.

Matches are found by case-insensitive substring on the item name and its
variant field (fossil part, bug/fish season, art source). Matches within
each category are ordered by BM25 relevance; ties keep store order.
"""

import re
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np
from rank_bm25 import BM25Okapi

from collection.models import Art, Category, CollectibleItem, Fossil
from collection.store import ItemStore
from settings.config import config


def tokenize(text: str) -> List[str]:
    """Tokenize text for BM25 scoring."""
    return re.findall(r'\w+', text.lower())


def searchable_fields(item: CollectibleItem) -> List[str]:
    """Name plus the variant field a user might search by."""
    if isinstance(item, Fossil):
        extra = item.part
    elif isinstance(item, Art):
        extra = item.based_on
    else:
        extra = item.season_text
    return [item.name, extra] if extra else [item.name]


def matches_query(item: CollectibleItem, query: str) -> bool:
    """Case-insensitive substring match on any searchable field."""
    return any(query in text.lower() for text in searchable_fields(item))


@dataclass
class GlobalSearchResults:
    """Search matches grouped by category."""
    fossils: List[CollectibleItem] = field(default_factory=list)
    bugs: List[CollectibleItem] = field(default_factory=list)
    fish: List[CollectibleItem] = field(default_factory=list)
    art: List[CollectibleItem] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.fossils) + len(self.bugs) + len(self.fish) + len(self.art)

    @property
    def is_empty(self) -> bool:
        return self.total_count == 0

    def category_counts(self) -> Dict[Category, int]:
        """Number of matches per category."""
        return {
            Category.FOSSIL: len(self.fossils),
            Category.BUG: len(self.bugs),
            Category.FISH: len(self.fish),
            Category.ART: len(self.art),
        }


def rank_matches(query: str, items: List[CollectibleItem]) -> List[CollectibleItem]:
    """
    Order items by BM25 relevance to ``query``.

    Args:
        query: Normalized query text
        items: Items that already matched the query

    Returns:
        Items, most relevant first; equal scores keep input order
    """
    query_tokens = tokenize(query)
    if len(items) < 2 or not query_tokens:
        return list(items)

    bm25 = BM25Okapi([tokenize(" ".join(searchable_fields(item))) for item in items])
    scores = np.asarray(bm25.get_scores(query_tokens), dtype=float)
    order = np.argsort(-scores, kind="stable")
    return [items[i] for i in order]


class GlobalSearchService:
    """Search every category at once and remember recent queries."""

    def __init__(self, store: ItemStore, history_size: Optional[int] = None):
        """
        Initialize service.

        Args:
            store: Item store to search
            history_size: Maximum remembered queries (defaults to
                ``search.history_size``)
        """
        self.store = store
        self.history_size = history_size if history_size is not None else config.get('search.history_size', 10)
        self._history: List[str] = []
        self._lock = threading.Lock()

    def _record(self, query: str):
        with self._lock:
            if query in self._history:
                return
            self._history.insert(0, query)
            del self._history[self.history_size:]

    def _matches(self, category: Category, query: str, town_id: Optional[str]) -> List[CollectibleItem]:
        items = self.store.get_items(category, town_id) if town_id is not None else self.store.get_all(category)
        matched = [item for item in items if matches_query(item, query)]
        return rank_matches(query, matched)

    def search(self, query: str, town_id: Optional[str] = None) -> GlobalSearchResults:
        """
        Search all categories.

        Args:
            query: Free text; trimmed and lower-cased before matching
            town_id: Restrict to one town (None searches every item)

        Returns:
            GlobalSearchResults; empty for a blank query
        """
        normalized = query.strip().lower()
        if not normalized:
            return GlobalSearchResults()

        self._record(normalized)

        return GlobalSearchResults(
            fossils=self._matches(Category.FOSSIL, normalized, town_id),
            bugs=self._matches(Category.BUG, normalized, town_id),
            fish=self._matches(Category.FISH, normalized, town_id),
            art=self._matches(Category.ART, normalized, town_id),
        )

    def get_history(self) -> List[str]:
        """Recent queries, newest first."""
        with self._lock:
            return list(self._history)

    def clear_history(self):
        with self._lock:
            self._history.clear()
