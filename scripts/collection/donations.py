"""
Donation state changes.

``DonationService`` is the only writer of the donated flag and timestamp.
It keeps the two consistent, links items to towns, and notifies listeners
(e.g. the analytics cache) after each successful change.
"""

import threading
from datetime import datetime
from typing import Callable, List, Optional

from seasons import utc_now

from .errors import DonationError
from .models import Category, CollectibleItem
from .store import CategoryLike, ItemStore

DonationListener = Callable[[Optional[str], CollectibleItem], None]


class DonationService:
    """Mark, unmark and re-date donations on top of an ``ItemStore``."""

    def __init__(self, store: ItemStore, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize service.

        Args:
            store: Item store to read and write
            clock: Callable returning the current time (defaults to UTC now)
        """
        self.store = store
        self.clock = clock or utc_now
        self._listeners: List[DonationListener] = []
        self._lock = threading.Lock()

    def add_listener(self, listener: DonationListener):
        """
        Register a callback run after each successful mutation.

        Listeners receive ``(town_id, item)`` where ``item`` is the new
        snapshot. When a change moves an item between towns, the listener
        runs once per affected town.
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: DonationListener):
        """Unregister a callback; unknown callbacks are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, towns: List[Optional[str]], item: CollectibleItem):
        seen = []
        for town_id in towns:
            if town_id in seen:
                continue
            seen.append(town_id)
            for listener in list(self._listeners):
                listener(town_id, item)

    def _update(self, category: CategoryLike, item_id: str, change) -> CollectibleItem:
        with self._lock:
            current = self.store.get_item(Category(category), item_id)
            updated = change(current)
            self.store.save_item(updated)

        self._notify([current.town_id, updated.town_id], updated)
        return updated

    def mark_donated(self, category: CategoryLike, item_id: str,
                     when: Optional[datetime] = None) -> CollectibleItem:
        """
        Mark an item as donated.

        Args:
            category: Item category
            item_id: Item identifier
            when: Donation time (defaults to the clock's now)

        Returns:
            Updated item snapshot

        Raises:
            ItemNotFoundError: Unknown item
        """
        timestamp = when or self.clock()
        return self._update(category, item_id, lambda item: item.mark_donated(timestamp))

    def unmark_donated(self, category: CategoryLike, item_id: str) -> CollectibleItem:
        """Clear the donated flag and the timestamp."""
        return self._update(category, item_id, lambda item: item.unmark_donated())

    def set_donation_date(self, category: CategoryLike, item_id: str, when: datetime) -> CollectibleItem:
        """
        Change the timestamp of an existing donation.

        Raises:
            DonationError: The item is not donated
        """
        def change(item):
            if not item.is_donated:
                raise DonationError(item.display_name, "set donation date", "item is not donated")
            return item.mark_donated(when)

        return self._update(category, item_id, change)

    def link_to_town(self, category: CategoryLike, item_id: str, town_id: str) -> CollectibleItem:
        """
        Link an item to a town.

        Raises:
            TownNotFoundError: The town has not been saved
        """
        self.store.get_town(town_id)
        return self._update(category, item_id, lambda item: item.with_town(town_id))

    def unlink_from_town(self, category: CategoryLike, item_id: str) -> CollectibleItem:
        """Remove an item's town link."""
        return self._update(category, item_id, lambda item: item.with_town(None))

    def get_items_for_town(self, category: CategoryLike, town_id: Optional[str]) -> List[CollectibleItem]:
        return self.store.get_items(Category(category), town_id)
