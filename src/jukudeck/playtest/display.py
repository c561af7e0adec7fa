"""Terminal display for game state and action results."""

from __future__ import annotations

from typing import Dict, List, Optional

from jukudeck.cards.describe import describe_effect
from jukudeck.cards.parser import parse_effect
from jukudeck.cards.schema import ROLE_LABELS, ROLE_ORDER, STAT_LABELS, Card, Role, Stat, TurnConfig
from jukudeck.simulation.state import GameState
from jukudeck.simulation.turns import ActionEffect


def format_card(card: Card) -> str:
    """Format card as ``[SR 応対] 満足度アンケート``."""
    return f"[{card.rarity.value} {card.category.value}] {card.name}"


def format_stats(stats: Dict[Stat, int]) -> str:
    return "  ".join(f"{STAT_LABELS[s]} {stats[s]}" for s in Stat)


class StateRenderer:
    """Renders game state to plain text."""

    def render(self, state: GameState, config: Optional[TurnConfig] = None, debug: bool = False) -> str:
        lines: list[str] = []

        header = f"=== Turn {state.turn + 1} ({state.phase.value}) ==="
        if config is not None:
            header = f"=== Turn {state.turn + 1} {config.name} ({state.phase.value}) ==="
        lines.append(header)

        if config is not None and config.recommended_category is not None:
            lines.append(
                f"Recommended: {config.recommended_category.value}"
                f" | Deletions: {config.delete_quota}"
            )

        lines.append(format_stats(state.player.stats.snapshot()))
        lines.append(f"Deck: {len(state.player.deck)} cards")

        if state.pending_training:
            lines.append("Training offer:")
            lines.extend(self._card_lines(state.pending_training, debug))

        if state.player.hand:
            lines.append("Hand:")
            lines.extend(self._card_lines(state.player.hand, debug))

        placed = [(r, state.player.placed[r]) for r in ROLE_ORDER if state.player.placed[r]]
        for role, card in placed:
            lines.append(f"  {ROLE_LABELS[role]}: {format_card(card)}")

        return "\n".join(lines)

    def render_actions(self, results: Dict[Role, ActionEffect]) -> str:
        """Summarize per-role stat changes after resolving actions."""
        if not results:
            return "No cards placed"

        lines: list[str] = []
        for role in ROLE_ORDER:
            effect = results.get(role)
            if effect is None:
                continue
            changes = ", ".join(
                f"{STAT_LABELS[s]}{d:+d}" for s, d in effect.deltas.items() if d
            ) or "no change"
            bonus = " (recommended)" if effect.is_recommended else ""
            status = "" if effect.applied else " [rejected]"
            lines.append(f"{ROLE_LABELS[role]}: {effect.card_name}{bonus}{status} -> {changes}")
        return "\n".join(lines)

    def _card_lines(self, cards: List[Card], debug: bool) -> List[str]:
        lines = []
        for i, card in enumerate(cards):
            line = f"  [{i + 1}] {format_card(card)}  {card.top_effect}"
            if debug:
                line += f"  <{describe_effect(parse_effect(card.effect))}>"
            lines.append(line)
        return lines
