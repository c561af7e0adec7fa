"""Core card schema types, enumerations and static game tables."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Stat(Enum):
    """Player stats tracked across the game."""

    EXPERIENCE = "experience"
    ENROLLMENT = "enrollment"
    SATISFACTION = "satisfaction"
    ACCOUNTING = "accounting"


class Role(Enum):
    """Placement slots a card can be assigned to."""

    LEADER = "leader"
    TEACHER = "teacher"
    STAFF = "staff"


class Rarity(Enum):
    """Rarity tiers; each tier has its own training pool."""

    N = "N"
    R = "R"
    SR = "SR"
    SSR = "SSR"


class Category(Enum):
    """Card action types, compared against a turn's recommended category."""

    MOBILIZATION = "動員"
    RECEPTION = "応対"
    ACADEMIC = "教務"
    GENERAL_AFFAIRS = "庶務"


class Phase(Enum):
    """Phases of a turn."""

    START = "start"
    TRAINING = "training"
    ACTION = "action"
    MEETING = "meeting"
    END = "end"


# Display token tables used by the effect text DSL
STAT_NAMES: dict[str, Stat] = {
    "体験": Stat.EXPERIENCE,
    "入塾": Stat.ENROLLMENT,
    "満足": Stat.SATISFACTION,
    "経理": Stat.ACCOUNTING,
}
STAT_LABELS: dict[Stat, str] = {stat: label for label, stat in STAT_NAMES.items()}

ROLE_NAMES: dict[str, Role] = {
    "室長": Role.LEADER,
    "講師": Role.TEACHER,
    "事務": Role.STAFF,
}
ROLE_LABELS: dict[Role, str] = {role: label for label, role in ROLE_NAMES.items()}

# Resolution order of placed cards
ROLE_ORDER: tuple[Role, ...] = (Role.LEADER, Role.TEACHER, Role.STAFF)

ACCOUNTING_MAX = 15

INITIAL_STATS: dict[Stat, int] = {
    Stat.EXPERIENCE: 0,
    Stat.ENROLLMENT: 0,
    Stat.SATISFACTION: 3,
    Stat.ACCOUNTING: 3,
}

OPENING_OFFER_SIZE = 4
OPENING_PICKS = 2
TRAINING_OFFER_SIZE = 3
TRAINING_PICKS = 1
HAND_SIZE = 4


@dataclass
class Card:
    """A game card.

    Identity fields never change after creation. ``acquired_turn`` records
    the turn the card entered the player's deck and is written at most once.
    Cards move between containers by copy, never by shared reference.
    """

    category: Category
    rarity: Rarity
    name: str
    top_effect: str = ""
    effect: str = ""
    acquired_turn: Optional[int] = None

    def mark_acquired(self, turn: int) -> None:
        """Record the acquisition turn unless one is already set."""
        if self.acquired_turn is None:
            self.acquired_turn = turn

    def copy(self) -> "Card":
        return replace(self)

    def __str__(self) -> str:
        return f"{self.name} ({self.rarity.value}/{self.category.value})"


@dataclass(frozen=True)
class TurnConfig:
    """Static configuration for one turn index."""

    name: str
    training_rarity: Rarity
    recommended_category: Optional[Category] = None
    recommended_stat: Optional[Stat] = None
    delete_quota: int = 0


TURN_CONFIGS: tuple[TurnConfig, ...] = (
    TurnConfig("1月下旬", Rarity.R, Category.MOBILIZATION, Stat.EXPERIENCE, 2),
    TurnConfig("2月上旬", Rarity.SR, Category.RECEPTION, Stat.SATISFACTION, 2),
    TurnConfig("2月下旬", Rarity.R, Category.MOBILIZATION, Stat.EXPERIENCE, 1),
    TurnConfig("3月上旬", Rarity.SSR, Category.GENERAL_AFFAIRS, Stat.ACCOUNTING, 1),
    TurnConfig("3月下旬", Rarity.SSR, Category.ACADEMIC, Stat.ENROLLMENT, 1),
    TurnConfig("4月上旬", Rarity.SR, Category.RECEPTION, Stat.SATISFACTION, 1),
    TurnConfig("4月下旬", Rarity.SR, Category.ACADEMIC, Stat.ENROLLMENT, 1),
    TurnConfig("5月上旬", Rarity.SR, Category.GENERAL_AFFAIRS, Stat.ACCOUNTING, 0),
)

MAX_TURNS = len(TURN_CONFIGS)
