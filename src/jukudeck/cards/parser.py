"""Parser for the card effect text DSL.

Effect text is short Japanese prose built from a closed set of patterns::

    【室長・講師】満足+2、〈満足8以上〉経理+1。

- ``【…】`` restricts which roles may play the card (``・`` separated).
- ``〈condition〉effects`` is a conditional block; its effects run up to the
  next ``。`` or ``〈``.
- ``<stat>+N`` / ``<stat>-N`` change a stat, ``<stat>をNにする`` sets it.

Everything outside restriction and conditional spans is a base effect.
Parsing is total: unrecognised text yields empty or unknown nodes, never an
exception.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional

from jukudeck.cards.effects import (
    ChangeBy,
    Comparator,
    Condition,
    ConditionalBlock,
    EffectAST,
    RoleCondition,
    SetTo,
    StatCondition,
    StatDelta,
    UnknownCondition,
)
from jukudeck.cards.schema import ROLE_NAMES, STAT_NAMES, Role

logger = logging.getLogger(__name__)

LIST_SEPARATOR = "・"

_STAT_ALTERNATION = "|".join(re.escape(name) for name in STAT_NAMES)

# First 【…】 span holds the role restriction
RESTRICTION_PATTERN = re.compile(r"【([^】]+)】")

# 〈condition〉effect text up to the next sentence end or conditional marker
CONDITIONAL_PATTERN = re.compile(r"〈([^〉]+)〉([^。〈]+)")

# Same span as above but tolerating empty effect text, used for removal
CONDITIONAL_SPAN_PATTERN = re.compile(r"〈[^〉]+〉[^。〈]*")

SET_PATTERN = re.compile(rf"({_STAT_ALTERNATION})を([0-9]+)にする")
CHANGE_PATTERN = re.compile(rf"({_STAT_ALTERNATION})([+\-])([0-9]+)")
STAT_CONDITION_PATTERN = re.compile(rf"({_STAT_ALTERNATION})([0-9]+)(以上|以下)")


def _to_int(digits: str) -> Optional[int]:
    """Convert a matched digit run, or None when it is too long to convert."""
    try:
        return int(digits)
    except ValueError:
        logger.debug(f"Dropping unconvertible number ({len(digits)} digits)")
        return None


def _map_roles(text: str) -> list[Role]:
    """Map a ``・`` separated list of role names, dropping unknown tokens."""
    roles: list[Role] = []
    for token in text.split(LIST_SEPARATOR):
        role = ROLE_NAMES.get(token.strip())
        if role is not None and role not in roles:
            roles.append(role)
    return roles


def parse_fragment(fragment: str) -> list[StatDelta]:
    """Parse the stat deltas in one effect fragment.

    At most one absolute assignment is honoured (the first); every relative
    change is returned in order of appearance, after the assignment.
    """
    effects: list[StatDelta] = []

    set_match = SET_PATTERN.search(fragment)
    if set_match:
        value = _to_int(set_match.group(2))
        if value is not None:
            effects.append(SetTo(STAT_NAMES[set_match.group(1)], value))

    for match in CHANGE_PATTERN.finditer(fragment):
        amount = _to_int(match.group(3))
        if amount is None:
            continue
        sign = 1 if match.group(2) == "+" else -1
        effects.append(ChangeBy(STAT_NAMES[match.group(1)], sign * amount))

    return effects


def parse_condition(text: str) -> Condition:
    """Parse the text inside ``〈…〉`` into a condition."""
    roles = _map_roles(text)
    if roles:
        return RoleCondition(roles)

    match = STAT_CONDITION_PATTERN.search(text)
    threshold = _to_int(match.group(2)) if match else None
    if threshold is not None:
        comparator = Comparator.GTE if match.group(3) == "以上" else Comparator.LTE
        return StatCondition(
            stat=STAT_NAMES[match.group(1)],
            threshold=threshold,
            comparator=comparator,
        )

    return UnknownCondition(raw=text)


@lru_cache(maxsize=1024)
def _parse_cached(text: str) -> EffectAST:
    restrictions: list[Role] = []
    restriction_match = RESTRICTION_PATTERN.search(text)
    if restriction_match:
        restrictions = _map_roles(restriction_match.group(1))

    blocks: list[ConditionalBlock] = []
    for match in CONDITIONAL_PATTERN.finditer(text):
        condition = parse_condition(match.group(1).strip())
        blocks.append(ConditionalBlock(condition, parse_fragment(match.group(2).strip())))

    base_text = RESTRICTION_PATTERN.sub("", text)
    base_text = CONDITIONAL_SPAN_PATTERN.sub("", base_text)

    ast = EffectAST(
        role_restrictions=restrictions,
        base_effects=parse_fragment(base_text),
        conditional_blocks=blocks,
    )
    logger.debug(
        f"Parsed effect {text!r}: {len(ast.base_effects)} base, "
        f"{len(ast.conditional_blocks)} conditional"
    )
    return ast


def parse_effect(text: str) -> EffectAST:
    """Parse raw effect text into an :class:`EffectAST`.

    Never raises. Empty or non-string input gives an empty, unrestricted
    AST. Results are cached per text.
    """
    if not isinstance(text, str) or not text:
        return EffectAST()
    return _parse_cached(text)


def clear_parse_cache() -> None:
    _parse_cached.cache_clear()
