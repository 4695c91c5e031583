"""
Collectible item schemas.

Items form a closed set of four variants (Fossil, Bug, Fish, Art) sharing a
common projection (id, name, donation flag and timestamp, games, town link)
plus variant-specific payload. Instances are immutable snapshots: donation
changes produce new instances via ``mark_donated`` / ``unmark_donated``.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, Iterable, Optional, Tuple, Union


class Category(str, Enum):
    """Museum collection categories."""
    FOSSIL = "fossil"
    BUG = "bug"
    FISH = "fish"
    ART = "art"

    @property
    def plural(self) -> str:
        return {
            Category.FOSSIL: "fossils",
            Category.BUG: "bugs",
            Category.FISH: "fish",
            Category.ART: "art",
        }[self]


class Game(str, Enum):
    """Game editions an item can appear in."""
    ACGCN = "Animal Crossing GameCube"
    ACWW = "Animal Crossing: Wild World"
    ACCF = "Animal Crossing: City Folk"
    ACNL = "Animal Crossing: New Leaf"
    ACNH = "Animal Crossing: New Horizons"

    @property
    def short_name(self) -> str:
        return self.name

    @property
    def release_year(self) -> int:
        return _RELEASE_YEARS[self]


_RELEASE_YEARS = {
    Game.ACGCN: 2001,
    Game.ACWW: 2005,
    Game.ACCF: 2008,
    Game.ACNL: 2012,
    Game.ACNH: 2020,
}


def new_id() -> str:
    """Generate a fresh item/town identifier."""
    return str(uuid.uuid4())


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; naive values are assumed to be UTC."""
    if not value:
        return None
    timestamp = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp


def _unique_games(games: Iterable[Union[Game, str]]) -> Tuple[Game, ...]:
    ordered = []
    for game in games:
        game = Game(game)
        if game not in ordered:
            ordered.append(game)
    return tuple(ordered)


@dataclass(frozen=True)
class _CollectibleBase:
    """Fields shared by every collectible variant."""
    name: str
    is_donated: bool = False
    donation_timestamp: Optional[datetime] = None
    games: Tuple[Game, ...] = (Game.ACGCN,)
    town_id: Optional[str] = None
    id: str = field(default_factory=new_id)

    category: ClassVar[Category]

    def __post_init__(self):
        object.__setattr__(self, "games", _unique_games(self.games))
        if self.donation_timestamp is not None and self.donation_timestamp.tzinfo is None:
            object.__setattr__(self, "donation_timestamp",
                               self.donation_timestamp.replace(tzinfo=timezone.utc))
        if self.donation_timestamp is not None and not self.is_donated:
            raise ValueError(
                f"{self.category.value} '{self.name}' has a donation timestamp but is not donated"
            )

    @property
    def season_text(self) -> Optional[str]:
        """Season description, for variants that have one."""
        return None

    @property
    def display_name(self) -> str:
        return self.name

    def mark_donated(self, when: datetime):
        """Return a donated copy stamped with ``when``."""
        return replace(self, is_donated=True, donation_timestamp=when)

    def unmark_donated(self):
        """Return a copy with the donation flag and timestamp cleared."""
        return replace(self, is_donated=False, donation_timestamp=None)

    def with_town(self, town_id: Optional[str]):
        """Return a copy linked to ``town_id`` (None unlinks)."""
        return replace(self, town_id=town_id)

    def _variant_fields(self) -> Dict[str, Any]:
        return {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = {
            "category": self.category.value,
            "id": self.id,
            "name": self.name,
            "is_donated": self.is_donated,
            "donation_timestamp": (
                self.donation_timestamp.isoformat() if self.donation_timestamp else None
            ),
            "games": [game.name for game in self.games],
            "town_id": self.town_id,
        }
        data.update(self._variant_fields())
        return data


@dataclass(frozen=True)
class Fossil(_CollectibleBase):
    """Fossil, optionally one part of a multi-part skeleton."""
    part: Optional[str] = None

    category: ClassVar[Category] = Category.FOSSIL

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.part}" if self.part else self.name

    def _variant_fields(self) -> Dict[str, Any]:
        return {"part": self.part}


@dataclass(frozen=True)
class Bug(_CollectibleBase):
    """Bug with an optional availability season."""
    season: Optional[str] = None

    category: ClassVar[Category] = Category.BUG

    @property
    def season_text(self) -> Optional[str]:
        return self.season

    def _variant_fields(self) -> Dict[str, Any]:
        return {"season": self.season}


@dataclass(frozen=True)
class Fish(_CollectibleBase):
    """Fish with a required season and location."""
    season: str = ""
    location: str = ""

    category: ClassVar[Category] = Category.FISH

    @property
    def season_text(self) -> Optional[str]:
        return self.season

    def _variant_fields(self) -> Dict[str, Any]:
        return {"season": self.season, "location": self.location}


@dataclass(frozen=True)
class Art(_CollectibleBase):
    """Art piece and the real-world work it is based on."""
    based_on: str = ""

    category: ClassVar[Category] = Category.ART

    def _variant_fields(self) -> Dict[str, Any]:
        return {"based_on": self.based_on}


CollectibleItem = Union[Fossil, Bug, Fish, Art]

ITEM_TYPES = {
    Category.FOSSIL: Fossil,
    Category.BUG: Bug,
    Category.FISH: Fish,
    Category.ART: Art,
}

_VARIANT_KEYS = {
    Category.FOSSIL: ("part",),
    Category.BUG: ("season",),
    Category.FISH: ("season", "location"),
    Category.ART: ("based_on",),
}


def item_from_dict(data: Dict[str, Any]) -> CollectibleItem:
    """
    Rebuild an item from ``to_dict`` output.

    Raises:
        ValueError: Unknown category, game, or an invalid donation state
        KeyError: Missing required fields
    """
    category = Category(data["category"])
    kwargs = {
        "id": data["id"],
        "name": data["name"],
        "is_donated": bool(data.get("is_donated", False)),
        "donation_timestamp": parse_timestamp(data.get("donation_timestamp")),
        "games": tuple(Game[g] for g in data.get("games", ["ACGCN"])),
        "town_id": data.get("town_id"),
    }
    for key in _VARIANT_KEYS[category]:
        if key in data and data[key] is not None:
            kwargs[key] = data[key]
    return ITEM_TYPES[category](**kwargs)


@dataclass(frozen=True)
class Town:
    """Collection owner that items are linked to."""
    name: str
    player_name: str = "Player"
    game: Game = Game.ACGCN
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=new_id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "player_name": self.player_name,
            "game": self.game.name,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Town":
        """Rebuild a town from ``to_dict`` output."""
        return cls(
            id=data["id"],
            name=data["name"],
            player_name=data.get("player_name", "Player"),
            game=Game[data.get("game", "ACGCN")],
            created_at=parse_timestamp(data.get("created_at")) or datetime.now(timezone.utc),
        )
