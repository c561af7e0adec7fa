"""Human-readable rendering of parsed effects."""

from __future__ import annotations

from jukudeck.cards.effects import (
    ChangeBy,
    Comparator,
    Condition,
    EffectAST,
    RoleCondition,
    SetTo,
    StatCondition,
    StatDelta,
    UnknownCondition,
)
from jukudeck.cards.schema import ROLE_LABELS, ROLE_ORDER, STAT_LABELS


def describe_condition(condition: Condition) -> str:
    """Render a condition back in effect text notation, e.g. ``満足8以上``."""
    if isinstance(condition, RoleCondition):
        return "・".join(ROLE_LABELS[r] for r in ROLE_ORDER if r in condition.roles)
    if isinstance(condition, StatCondition):
        suffix = "以上" if condition.comparator == Comparator.GTE else "以下"
        return f"{STAT_LABELS[condition.stat]}{condition.threshold}{suffix}"
    if isinstance(condition, UnknownCondition):
        return condition.raw or "不明"
    return "不明"


def describe_delta(delta: StatDelta) -> str:
    if isinstance(delta, SetTo):
        return f"{STAT_LABELS[delta.stat]}を{delta.value}にする"
    sign = "+" if delta.delta >= 0 else "-"
    return f"{STAT_LABELS[delta.stat]}{sign}{abs(delta.delta)}"


def describe_effect(ast: EffectAST) -> str:
    """One-line summary of a parsed effect."""
    parts: list[str] = []

    if ast.role_restrictions:
        roles = "・".join(ROLE_LABELS[r] for r in ROLE_ORDER if r in ast.role_restrictions)
        parts.append(f"【{roles}】")

    if ast.base_effects:
        parts.append("、".join(describe_delta(d) for d in ast.base_effects))

    for block in ast.conditional_blocks:
        effects = "、".join(describe_delta(d) for d in block.effects)
        parts.append(f"〈{describe_condition(block.condition)}〉{effects}")

    return " ".join(parts) if parts else "(効果なし)"


def format_realized_change(label: str, before: int, after: int) -> str:
    """Format a stat change as ``満足: 8 → 10 (+2)``."""
    delta = after - before
    sign = "+" if delta > 0 else ""
    return f"{label}: {before} → {after} ({sign}{delta})"
