"""
Result schemas for donation analytics.

All results are immutable so the analytics service can hand the same cached
instance to several callers.
"""

from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from collection.models import Category
from seasons import is_leaving_soon, month_abbreviation, utc_now


@dataclass(frozen=True)
class CategoryProgress:
    """Donation counts for one category."""
    count: int = 0
    donated_count: int = 0
    progress: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class CategoryCompletionData:
    """Per-category progress plus the item-weighted overall ratio."""
    fossils: CategoryProgress = field(default_factory=CategoryProgress)
    bugs: CategoryProgress = field(default_factory=CategoryProgress)
    fish: CategoryProgress = field(default_factory=CategoryProgress)
    art: CategoryProgress = field(default_factory=CategoryProgress)
    total_progress: float = 0.0

    @property
    def total_count(self) -> int:
        return sum(p.count for p in self.by_category().values())

    @property
    def total_donated(self) -> int:
        return sum(p.donated_count for p in self.by_category().values())

    def by_category(self) -> Dict[Category, CategoryProgress]:
        """Progress keyed by category, in display order."""
        return {
            Category.FOSSIL: self.fossils,
            Category.BUG: self.bugs,
            Category.FISH: self.fish,
            Category.ART: self.art,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["total_count"] = self.total_count
        data["total_donated"] = self.total_donated
        return data


@dataclass(frozen=True)
class MonthlyDonationActivity:
    """Donations bucketed into one calendar month."""
    month: date  # first day of the month
    fossil_count: int = 0
    bug_count: int = 0
    fish_count: int = 0
    art_count: int = 0

    @property
    def total_count(self) -> int:
        return self.fossil_count + self.bug_count + self.fish_count + self.art_count

    @property
    def key(self) -> str:
        """Sortable "YYYY-MM" identifier."""
        return self.month.strftime("%Y-%m")

    @property
    def formatted_month(self) -> str:
        """Display label such as "March 2024"."""
        return self.month.strftime("%B %Y")

    def count_for(self, category: Category) -> int:
        return {
            Category.FOSSIL: self.fossil_count,
            Category.BUG: self.bug_count,
            Category.FISH: self.fish_count,
            Category.ART: self.art_count,
        }[category]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "month": self.key,
            "formatted_month": self.formatted_month,
            "fossil_count": self.fossil_count,
            "bug_count": self.bug_count,
            "fish_count": self.fish_count,
            "art_count": self.art_count,
            "total_count": self.total_count,
        }


@dataclass(frozen=True)
class SeasonalCompletion:
    """Bug and fish availability and donations for one calendar month."""
    month: str  # "Jan" ... "Dec"
    bug_count: int = 0
    bug_donated: int = 0
    bug_progress: float = 0.0
    fish_count: int = 0
    fish_donated: int = 0
    fish_progress: float = 0.0

    @property
    def total_count(self) -> int:
        return self.bug_count + self.fish_count

    @property
    def total_donated(self) -> int:
        return self.bug_donated + self.fish_donated

    @property
    def total_progress(self) -> float:
        total = self.total_count
        return self.total_donated / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["total_count"] = self.total_count
        data["total_donated"] = self.total_donated
        data["total_progress"] = self.total_progress
        return data


@dataclass(frozen=True)
class SeasonalData:
    """Ordered seasonal completions plus "now" resolution."""
    completions: Tuple[SeasonalCompletion, ...] = ()
    clock: Callable[[], datetime] = field(default=utc_now, compare=False, repr=False)

    @property
    def months(self) -> List[str]:
        return [c.month for c in self.completions]

    def for_month(self, month: str) -> Optional[SeasonalCompletion]:
        """Completion for a month abbreviation, or None if nothing is available then."""
        for completion in self.completions:
            if completion.month == month:
                return completion
        return None

    def current_month_completion(self, now: Optional[datetime] = None) -> Optional[SeasonalCompletion]:
        """
        Completion for the current month.

        Args:
            now: Moment to resolve (defaults to the injected clock)

        Returns:
            The month's completion, or None when no bug or fish is available
        """
        return self.for_month(month_abbreviation(now or self.clock()))

    def is_leaving_soon(self, season: Optional[str], current_month: str) -> bool:
        """See ``seasons.is_leaving_soon``."""
        return is_leaving_soon(season, current_month)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"completions": [c.to_dict() for c in self.completions]}


@dataclass(frozen=True)
class CollectionStatus:
    """Overall collection totals for the home screen."""
    total_collected: int = 0
    total_available: int = 0
    completion_percentage: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class SeasonalHighlight:
    """A bug or fish catchable this month."""
    item_id: str
    name: str
    category: Category
    description: str
    is_leaving: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["category"] = self.category.value
        return data


@dataclass(frozen=True)
class RecentDonation:
    """A dated donation with a relative-time label."""
    item_id: str
    title: str
    category: Category
    donated_at: datetime
    relative_time: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "item_id": self.item_id,
            "title": self.title,
            "category": self.category.value,
            "donated_at": self.donated_at.isoformat(),
            "relative_time": self.relative_time,
        }
