"""Condition evaluation and card effect application."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from jukudeck.cards.describe import describe_condition
from jukudeck.cards.effects import (
    Comparator,
    Condition,
    RoleCondition,
    StatCondition,
)
from jukudeck.cards.parser import parse_effect
from jukudeck.cards.schema import ROLE_LABELS, Card, Role
from jukudeck.simulation.stats import StatBlock

logger = logging.getLogger(__name__)


def evaluate_condition(condition: Condition, role: Role, stats: StatBlock) -> bool:
    """Decide whether ``condition`` holds for ``role`` and current stats.

    Unknown conditions never hold.
    """
    if isinstance(condition, RoleCondition):
        return role in condition.roles

    if isinstance(condition, StatCondition):
        current = stats.get(condition.stat)
        if condition.comparator == Comparator.GTE:
            return current >= condition.threshold
        return current <= condition.threshold

    return False


def apply_card_effect(card: Optional[Card], role: Role, stats: StatBlock) -> bool:
    """Apply a card's effect for ``role``, mutating ``stats``.

    Returns False without touching ``stats`` when the card has no effect
    text or its role restriction excludes ``role``. Conditional blocks are
    evaluated in order against the live stats, so an earlier block can
    enable or disable a later one.
    """
    if card is None or not card.effect:
        logger.error("Card has no effect text")
        return False

    parsed = parse_effect(card.effect)
    log = logger.info if stats.log_changes else logger.debug

    if not parsed.allows(role):
        log(f"{card.name} cannot be played as {ROLE_LABELS[role]}")
        return False

    log(f"Card effect: {card.name} ({ROLE_LABELS[role]})")

    for effect in parsed.base_effects:
        stats.apply(effect)

    for block in parsed.conditional_blocks:
        if evaluate_condition(block.condition, role, stats):
            log(f"  Condition met: {describe_condition(block.condition)}")
            for effect in block.effects:
                stats.apply(effect)

    return True


@dataclass(frozen=True)
class PlacementCheck:
    """Advisory result of previewing a placement."""

    allowed: bool
    unmet_conditions: tuple[str, ...] = field(default=())

    @property
    def has_warnings(self) -> bool:
        return bool(self.unmet_conditions)


def check_placement(card: Card, role: Role, stats: StatBlock) -> PlacementCheck:
    """Preview a placement without mutating anything.

    Uses the same parser and evaluator as :func:`apply_card_effect`.
    Conditions are checked against the current stats only, so a block that
    an earlier effect would enable is still reported as unmet.
    """
    parsed = parse_effect(card.effect)
    if not parsed.allows(role):
        return PlacementCheck(allowed=False)

    unmet: List[str] = [
        describe_condition(block.condition)
        for block in parsed.conditional_blocks
        if not evaluate_condition(block.condition, role, stats)
    ]
    return PlacementCheck(allowed=True, unmet_conditions=tuple(unmet))
