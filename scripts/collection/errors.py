"""Errors raised by the item store and donation service."""

from typing import Optional


class CollectionError(Exception):
    """Base exception for collection store and donation errors"""
    pass


class ItemNotFoundError(CollectionError):
    """Raised when an item id does not exist in its category"""

    def __init__(self, category: str, item_id: str):
        self.category = category
        self.item_id = item_id
        super().__init__(f"No {category} with id '{item_id}'")


class TownNotFoundError(CollectionError):
    """Raised when linking to a town that has not been saved"""

    def __init__(self, town_id: str):
        self.town_id = town_id
        super().__init__(f"No town with id '{town_id}'")


class DonationError(CollectionError):
    """Raised when a donation state change cannot be applied"""

    def __init__(self, item_name: str, operation: str, reason: Optional[str] = None):
        self.item_name = item_name
        self.operation = operation
        message = f"Failed to {operation} item '{item_name}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
