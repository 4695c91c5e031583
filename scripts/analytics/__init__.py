"""
Donation analytics.

Aggregates collectible items into completion ratios, monthly donation
timelines and seasonal availability breakdowns, and exposes them through
a cached per-scope facade.
"""

from .schema import (
    CategoryProgress,
    CategoryCompletionData,
    MonthlyDonationActivity,
    SeasonalCompletion,
    SeasonalData,
    CollectionStatus,
    SeasonalHighlight,
    RecentDonation,
)
from .progress import category_progress, weighted_progress, compute_category_completion
from .timeline import tag_donations, build_monthly_timeline
from .seasonal import (
    CHRONOLOGICAL,
    ALPHABETICAL,
    SEASONAL_ORDERS,
    order_months,
    analyze_seasonal_completion,
)
from .highlights import (
    AVAILABLE_NOW,
    LEAVING_SOON,
    collection_status,
    seasonal_highlights,
    relative_time,
    recent_donations,
)
from .service import AnalyticsService, AnalyticsError

__all__ = [
    'CategoryProgress',
    'CategoryCompletionData',
    'MonthlyDonationActivity',
    'SeasonalCompletion',
    'SeasonalData',
    'CollectionStatus',
    'SeasonalHighlight',
    'RecentDonation',
    'category_progress',
    'weighted_progress',
    'compute_category_completion',
    'tag_donations',
    'build_monthly_timeline',
    'CHRONOLOGICAL',
    'ALPHABETICAL',
    'SEASONAL_ORDERS',
    'order_months',
    'analyze_seasonal_completion',
    'AVAILABLE_NOW',
    'LEAVING_SOON',
    'collection_status',
    'seasonal_highlights',
    'relative_time',
    'recent_donations',
    'AnalyticsService',
    'AnalyticsError',
]

__version__ = '1.0.0'
