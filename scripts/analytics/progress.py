"""
Category completion ratios.

The overall ratio is weighted by item count: a category with twice as many
items moves the total twice as much. Zero-item categories report 0.0 and
an empty collection reports 0.0 overall.
"""

import numpy as np
from typing import Sequence

from collection.models import CollectibleItem

from .schema import CategoryCompletionData, CategoryProgress


def category_progress(items: Sequence[CollectibleItem]) -> CategoryProgress:
    """
    Count donations in one item list.

    Args:
        items: Items of a single category

    Returns:
        CategoryProgress with count, donated_count and progress
    """
    count = len(items)
    donated = sum(1 for item in items if item.is_donated)
    return CategoryProgress(
        count=count,
        donated_count=donated,
        progress=donated / count if count > 0 else 0.0,
    )


def weighted_progress(*categories: CategoryProgress) -> float:
    """Item-count-weighted mean of category progress values."""
    counts = np.array([c.count for c in categories], dtype=float)
    if counts.sum() == 0:
        return 0.0

    progress = np.array([c.progress for c in categories], dtype=float)
    return float(np.average(progress, weights=counts))


def compute_category_completion(
    fossils: Sequence[CollectibleItem],
    bugs: Sequence[CollectibleItem],
    fish: Sequence[CollectibleItem],
    art: Sequence[CollectibleItem],
) -> CategoryCompletionData:
    """
    Build completion data for one collection scope.

    Args:
        fossils: Fossil items for the scope
        bugs: Bug items for the scope
        fish: Fish items for the scope
        art: Art items for the scope

    Returns:
        CategoryCompletionData with per-category and weighted total progress
    """
    per_category = [category_progress(items) for items in (fossils, bugs, fish, art)]

    return CategoryCompletionData(
        fossils=per_category[0],
        bugs=per_category[1],
        fish=per_category[2],
        art=per_category[3],
        total_progress=weighted_progress(*per_category),
    )
