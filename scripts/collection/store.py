"""
Collectible item stores.

``ItemStore`` is the interface analytics and donation code read items
through. Two implementations ship here:

- ``InMemoryItemStore``: dictionaries behind a lock, for tests and embedding.
- ``JSONLItemStore``: one append-only JSONL log per category plus a town log.
  The latest record for an id wins on read; ``compact()`` drops superseded
  records.
"""

import sys
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from settings.config import config

from .errors import ItemNotFoundError, TownNotFoundError
from .jsonl_utils import JSONLReader, JSONLWriter
from .models import Category, CollectibleItem, Town, item_from_dict

CategoryLike = Union[Category, str]


class ItemStore(ABC):
    """Base class for item stores."""

    @abstractmethod
    def get_all(self, category: CategoryLike) -> List[CollectibleItem]:
        """Return every item of a category, in insertion order."""
        pass

    @abstractmethod
    def save_items(self, items: Iterable[CollectibleItem]) -> None:
        """Insert or replace items by id."""
        pass

    @abstractmethod
    def save_town(self, town: Town) -> None:
        """Insert or replace a town by id."""
        pass

    @abstractmethod
    def list_towns(self) -> List[Town]:
        """Return all towns."""
        pass

    def get_items(self, category: CategoryLike, town_id: Optional[str]) -> List[CollectibleItem]:
        """
        Get items of a category linked to a town.

        Args:
            category: Item category
            town_id: Scope identifier; unknown ids simply match nothing

        Returns:
            Items whose ``town_id`` equals ``town_id``
        """
        return [item for item in self.get_all(category) if item.town_id == town_id]

    def get_item(self, category: CategoryLike, item_id: str) -> CollectibleItem:
        """
        Get a single item.

        Raises:
            ItemNotFoundError: No item with that id in the category
        """
        category = Category(category)
        for item in self.get_all(category):
            if item.id == item_id:
                return item
        raise ItemNotFoundError(category.value, item_id)

    def save_item(self, item: CollectibleItem) -> None:
        """Insert or replace one item."""
        self.save_items([item])

    def get_town(self, town_id: str) -> Town:
        """
        Get a town by id.

        Raises:
            TownNotFoundError: No town with that id
        """
        for town in self.list_towns():
            if town.id == town_id:
                return town
        raise TownNotFoundError(town_id)


class InMemoryItemStore(ItemStore):
    """Thread-safe in-memory store."""

    def __init__(self, items: Optional[Iterable[CollectibleItem]] = None, towns: Optional[Iterable[Town]] = None):
        self._lock = threading.Lock()
        self._items: Dict[Category, Dict[str, CollectibleItem]] = {c: {} for c in Category}
        self._towns: Dict[str, Town] = {}
        if items:
            self.save_items(items)
        for town in towns or []:
            self.save_town(town)

    def get_all(self, category: CategoryLike) -> List[CollectibleItem]:
        with self._lock:
            return list(self._items[Category(category)].values())

    def save_items(self, items: Iterable[CollectibleItem]) -> None:
        with self._lock:
            for item in items:
                self._items[item.category][item.id] = item

    def save_town(self, town: Town) -> None:
        with self._lock:
            self._towns[town.id] = town

    def list_towns(self) -> List[Town]:
        with self._lock:
            return list(self._towns.values())


class JSONLItemStore(ItemStore):
    """File-backed store using one JSONL log per category."""

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize store.

        Args:
            data_dir: Directory for the logs. If None, uses ``store.data_dir``
                from configuration.
        """
        if data_dir is None:
            data_dir = Path(config.get('store.data_dir', '~/.museum-tracker/data')).expanduser()

        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.towns_log = self.data_dir / "towns.jsonl"

    def log_path(self, category: CategoryLike) -> Path:
        """Path of the log for a category (e.g. ``fossils.jsonl``)."""
        return self.data_dir / f"{Category(category).plural}.jsonl"

    def _load_items(self, category: Category) -> Dict[str, CollectibleItem]:
        items: Dict[str, CollectibleItem] = {}
        path = self.log_path(category)
        for line_num, entry in enumerate(JSONLReader.read_log(path), 1):
            try:
                item = item_from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                print(f"Warning: Skipping invalid {category.value} record #{line_num} in {path}: {e}",
                      file=sys.stderr)
                continue
            if item.category is not category:
                print(f"Warning: Skipping {item.category.value} record in {path}", file=sys.stderr)
                continue
            # Re-assigning an existing key keeps its original position
            items[item.id] = item
        return items

    def get_all(self, category: CategoryLike) -> List[CollectibleItem]:
        return list(self._load_items(Category(category)).values())

    def save_items(self, items: Iterable[CollectibleItem]) -> None:
        by_category: Dict[Category, List[dict]] = {}
        for item in items:
            by_category.setdefault(item.category, []).append(item.to_dict())

        for category, records in by_category.items():
            JSONLWriter(self.log_path(category)).append_batch(records)

    def save_town(self, town: Town) -> None:
        JSONLWriter(self.towns_log).append(town.to_dict())

    def list_towns(self) -> List[Town]:
        towns: Dict[str, Town] = {}
        for entry in JSONLReader.read_log(self.towns_log):
            try:
                town = Town.from_dict(entry)
            except (KeyError, TypeError, ValueError) as e:
                print(f"Warning: Skipping invalid town record in {self.towns_log}: {e}", file=sys.stderr)
                continue
            towns[town.id] = town
        return list(towns.values())

    def compact(self) -> Dict[str, int]:
        """
        Rewrite every log keeping only the latest record per id.

        Each log is loaded and replaced under its writer lock, so records
        appended meanwhile land in the compacted log.

        Returns:
            Number of records kept per log file name
        """
        kept = {}
        for category in Category:
            path = self.log_path(category)
            if not path.exists():
                continue
            writer = JSONLWriter(path)
            with writer.locked():
                items = self._load_items(category)
                writer.rewrite(item.to_dict() for item in items.values())
            kept[path.name] = len(items)

        if self.towns_log.exists():
            writer = JSONLWriter(self.towns_log)
            with writer.locked():
                towns = self.list_towns()
                writer.rewrite(town.to_dict() for town in towns)
            kept[self.towns_log.name] = len(towns)

        return kept
