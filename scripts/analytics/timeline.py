"""
Monthly donation timeline.

Buckets dated donations by calendar month (year + month) for timeline
charts. Undated donations cannot be placed and are left out; months with no
donations are not synthesized.
"""

from collections import Counter
from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from collection.models import Category, CollectibleItem

from .schema import MonthlyDonationActivity

TaggedDonation = Tuple[Category, CollectibleItem]

_COUNT_FIELDS = {
    Category.FOSSIL: "fossil_count",
    Category.BUG: "bug_count",
    Category.FISH: "fish_count",
    Category.ART: "art_count",
}


def tag_donations(
    fossils: Sequence[CollectibleItem],
    bugs: Sequence[CollectibleItem],
    fish: Sequence[CollectibleItem],
    art: Sequence[CollectibleItem],
) -> List[TaggedDonation]:
    """Pair every donated item with its category."""
    tagged = []
    for category, items in zip(Category, (fossils, bugs, fish, art)):
        tagged.extend((category, item) for item in items if item.is_donated)
    return tagged


def _as_utc(value: Union[date, datetime], end_of_day: bool = False) -> datetime:
    """Normalize a bound to an aware datetime; plain dates cover the whole day."""
    if not isinstance(value, datetime):
        clock_time = datetime.max.time() if end_of_day else datetime.min.time()
        value = datetime.combine(value, clock_time)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def build_monthly_timeline(
    donations: Iterable[Union[TaggedDonation, CollectibleItem]],
    start_date: Optional[Union[date, datetime]] = None,
    end_date: Optional[Union[date, datetime]] = None,
) -> List[MonthlyDonationActivity]:
    """
    Bucket donations by month.

    Args:
        donations: ``(Category, item)`` pairs or bare items
        start_date: Inclusive lower bound (optional)
        end_date: Inclusive upper bound (optional); a plain date includes
            the whole day

    Returns:
        MonthlyDonationActivity per month with at least one donation,
        ascending by month
    """
    start = _as_utc(start_date) if start_date is not None else None
    end = _as_utc(end_date, end_of_day=True) if end_date is not None else None

    buckets: Dict[date, Counter] = {}
    for entry in donations:
        if isinstance(entry, tuple):
            category, item = entry
        else:
            category, item = entry.category, entry

        timestamp = item.donation_timestamp
        if not item.is_donated or timestamp is None:
            continue

        timestamp = _as_utc(timestamp)
        if start is not None and timestamp < start:
            continue
        if end is not None and timestamp > end:
            continue

        month = date(timestamp.year, timestamp.month, 1)
        buckets.setdefault(month, Counter())[Category(category)] += 1

    return [
        MonthlyDonationActivity(
            month=month,
            **{_COUNT_FIELDS[category]: n for category, n in counts.items()}
        )
        for month, counts in sorted(buckets.items())
    ]
