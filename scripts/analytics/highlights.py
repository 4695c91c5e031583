"""
Home screen summaries built on the aggregators.

- Collection status: overall collected / available / weighted percentage
- Seasonal highlights: bugs and fish catchable this month
- Recent donations: newest dated donations with relative-time labels
"""

from datetime import datetime
from typing import Iterable, List, Sequence

from collection.models import CollectibleItem
from seasons import is_leaving_soon, parse_season

from .schema import CategoryCompletionData, CollectionStatus, RecentDonation, SeasonalHighlight

AVAILABLE_NOW = "Available now!"
LEAVING_SOON = "Leaving soon!"


def collection_status(completion: CategoryCompletionData) -> CollectionStatus:
    """Summarize completion data for the status card."""
    return CollectionStatus(
        total_collected=completion.total_donated,
        total_available=completion.total_count,
        completion_percentage=completion.total_progress,
    )


def _available(items: Sequence[CollectibleItem], month: str, limit: int) -> List[SeasonalHighlight]:
    highlights = []
    for item in items:
        if len(highlights) >= limit:
            break
        if month not in parse_season(item.season_text):
            continue

        leaving = is_leaving_soon(item.season_text, month)
        highlights.append(SeasonalHighlight(
            item_id=item.id,
            name=item.name,
            category=item.category,
            description=LEAVING_SOON if leaving else AVAILABLE_NOW,
            is_leaving=leaving,
        ))
    return highlights


def seasonal_highlights(
    bugs: Sequence[CollectibleItem],
    fish: Sequence[CollectibleItem],
    current_month: str,
    limit_per_category: int = 3,
) -> List[SeasonalHighlight]:
    """
    List bugs then fish available in ``current_month``.

    Args:
        bugs: Bug items for the scope
        fish: Fish items for the scope
        current_month: Month abbreviation such as "Jun"
        limit_per_category: Maximum highlights taken from each list

    Returns:
        Up to ``limit_per_category`` bugs followed by up to as many fish,
        in store order
    """
    return (_available(bugs, current_month, limit_per_category)
            + _available(fish, current_month, limit_per_category))


def relative_time(moment: datetime, now: datetime) -> str:
    """
    Describe how long ago ``moment`` was.

    Returns:
        "Just now", "N minute(s) ago", "N hour(s) ago", "Yesterday" or
        "N days ago"; future moments read as "Just now"
    """
    elapsed = int((now - moment).total_seconds())
    days, remainder = divmod(elapsed, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes = remainder // 60

    if elapsed <= 0:
        return "Just now"
    if days > 0:
        return "Yesterday" if days == 1 else f"{days} days ago"
    if hours > 0:
        return f"{hours} hour{'' if hours == 1 else 's'} ago"
    if minutes > 0:
        return f"{minutes} minute{'' if minutes == 1 else 's'} ago"
    return "Just now"


def recent_donations(items: Iterable[CollectibleItem], now: datetime, limit: int = 5) -> List[RecentDonation]:
    """
    Newest dated donations across categories.

    Args:
        items: Items of any category
        now: Reference time for relative labels
        limit: Maximum number of donations returned

    Returns:
        RecentDonation list, newest first
    """
    dated = [item for item in items if item.is_donated and item.donation_timestamp is not None]
    dated.sort(key=lambda item: item.donation_timestamp, reverse=True)

    return [
        RecentDonation(
            item_id=item.id,
            title=item.display_name,
            category=item.category,
            donated_at=item.donation_timestamp,
            relative_time=relative_time(item.donation_timestamp, now),
        )
        for item in dated[:limit]
    ]
