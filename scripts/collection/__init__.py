"""
Collectible item models, storage and donation tracking.

Provides the four collectible variants, item stores (in-memory and
JSONL-backed) and the donation service that keeps donation state
consistent.
"""

from .models import (
    Category,
    Game,
    Fossil,
    Bug,
    Fish,
    Art,
    CollectibleItem,
    ITEM_TYPES,
    Town,
    item_from_dict,
    parse_timestamp,
)
from .errors import CollectionError, ItemNotFoundError, TownNotFoundError, DonationError
from .jsonl_utils import JSONLReader, JSONLWriter
from .store import ItemStore, InMemoryItemStore, JSONLItemStore
from .donations import DonationService

__all__ = [
    'Category',
    'Game',
    'Fossil',
    'Bug',
    'Fish',
    'Art',
    'CollectibleItem',
    'ITEM_TYPES',
    'Town',
    'item_from_dict',
    'parse_timestamp',
    'CollectionError',
    'ItemNotFoundError',
    'TownNotFoundError',
    'DonationError',
    'JSONLReader',
    'JSONLWriter',
    'ItemStore',
    'InMemoryItemStore',
    'JSONLItemStore',
    'DonationService',
]

__version__ = '1.0.0'
