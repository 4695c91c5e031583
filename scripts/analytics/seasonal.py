"""
Seasonal completion analysis.

Each bug and fish fans out to every month its season covers, so an item
available March - June is counted once under each of Mar, Apr, May and Jun.
Months with no available item are not reported.
"""

from collections import defaultdict
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

from collection.models import CollectibleItem
from seasons import parse_season, sort_months, utc_now
from settings.config import config

from .schema import SeasonalCompletion, SeasonalData

CHRONOLOGICAL = "chronological"
ALPHABETICAL = "alphabetical"
SEASONAL_ORDERS = (CHRONOLOGICAL, ALPHABETICAL)


def order_months(months, order: str) -> List[str]:
    """
    Order month abbreviations for display.

    Args:
        months: Month abbreviations
        order: "chronological" (Jan first) or "alphabetical" (token order,
            Apr first)

    Raises:
        ValueError: Unknown order
    """
    if order == CHRONOLOGICAL:
        return sort_months(months)
    if order == ALPHABETICAL:
        return sorted(months)
    raise ValueError(f"Unknown seasonal order: {order!r} (expected one of {SEASONAL_ORDERS})")


def _tally(items: Sequence[CollectibleItem]) -> Dict[str, List[int]]:
    """Map month -> [count, donated] for items whose season covers it."""
    tally: Dict[str, List[int]] = defaultdict(lambda: [0, 0])
    for item in items:
        for month in parse_season(item.season_text):
            tally[month][0] += 1
            if item.is_donated:
                tally[month][1] += 1
    return tally


def _ratio(donated: int, count: int) -> float:
    return donated / count if count > 0 else 0.0


def analyze_seasonal_completion(
    bugs: Sequence[CollectibleItem],
    fish: Sequence[CollectibleItem],
    order: Optional[str] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> SeasonalData:
    """
    Build per-month bug and fish completion.

    Months are listed Jan to Dec by default. Set ``analytics.seasonal_order``
    (or pass ``order``) to "alphabetical" for plain token order, Apr first.

    Args:
        bugs: Bug items for the scope; bugs without a season are skipped
        fish: Fish items for the scope
        order: Month ordering (defaults to ``analytics.seasonal_order``)
        clock: Clock used by ``SeasonalData.current_month_completion``

    Returns:
        SeasonalData with one SeasonalCompletion per month that has items
    """
    if order is None:
        order = config.get('analytics.seasonal_order', CHRONOLOGICAL)

    bug_tally = _tally(bugs)
    fish_tally = _tally(fish)

    completions = []
    for month in order_months(set(bug_tally) | set(fish_tally), order):
        bug_count, bug_donated = bug_tally.get(month, (0, 0))
        fish_count, fish_donated = fish_tally.get(month, (0, 0))
        completions.append(SeasonalCompletion(
            month=month,
            bug_count=bug_count,
            bug_donated=bug_donated,
            bug_progress=_ratio(bug_donated, bug_count),
            fish_count=fish_count,
            fish_donated=fish_donated,
            fish_progress=_ratio(fish_donated, fish_count),
        ))

    return SeasonalData(completions=tuple(completions), clock=clock or utc_now)
