"""Effect AST: conditions and stat deltas parsed from card effect text."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from jukudeck.cards.schema import Role, Stat


class Comparator(Enum):
    """Threshold comparison for stat conditions."""

    GTE = ">="
    LTE = "<="


@dataclass(frozen=True)
class RoleCondition:
    """Holds when the acting role is one of ``roles``."""

    roles: frozenset[Role]

    def __init__(self, roles) -> None:
        object.__setattr__(self, "roles", frozenset(roles))


@dataclass(frozen=True)
class StatCondition:
    """Holds when a stat compares against a threshold."""

    stat: Stat
    threshold: int
    comparator: Comparator


@dataclass(frozen=True)
class UnknownCondition:
    """Unrecognised condition text. Never holds."""

    raw: str


Condition = Union[RoleCondition, StatCondition, UnknownCondition]


@dataclass(frozen=True)
class SetTo:
    """Assign an absolute value to a stat."""

    stat: Stat
    value: int


@dataclass(frozen=True)
class ChangeBy:
    """Add a signed amount to a stat."""

    stat: Stat
    delta: int


StatDelta = Union[SetTo, ChangeBy]


@dataclass(frozen=True)
class ConditionalBlock:
    """Effects that fire only when ``condition`` holds at resolution time."""

    condition: Condition
    effects: tuple[StatDelta, ...]

    def __init__(self, condition: Condition, effects) -> None:
        object.__setattr__(self, "condition", condition)
        object.__setattr__(self, "effects", tuple(effects))


@dataclass(frozen=True)
class EffectAST:
    """Parsed form of one card's effect text."""

    role_restrictions: frozenset[Role] = frozenset()
    base_effects: tuple[StatDelta, ...] = ()
    conditional_blocks: tuple[ConditionalBlock, ...] = ()

    def __init__(self, role_restrictions=(), base_effects=(), conditional_blocks=()) -> None:
        # Convert to immutable containers so parses can be cached and shared
        object.__setattr__(self, "role_restrictions", frozenset(role_restrictions))
        object.__setattr__(self, "base_effects", tuple(base_effects))
        object.__setattr__(self, "conditional_blocks", tuple(conditional_blocks))

    @property
    def is_restricted(self) -> bool:
        return bool(self.role_restrictions)

    def allows(self, role: Role) -> bool:
        """True if a card with this effect may act in ``role``."""
        return not self.role_restrictions or role in self.role_restrictions
