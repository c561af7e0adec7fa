"""Snapshot serialization for resuming a game session."""

import json
from typing import Any, Dict, List, Optional, Set

from jukudeck.cards.schema import ROLE_ORDER, Card, Phase, Rarity, Stat
from jukudeck.cards.serialization import card_from_dict, card_to_dict, cards_from_list, cards_to_list
from jukudeck.simulation.deck import TrainingPools
from jukudeck.simulation.state import GameState, PlayerState
from jukudeck.simulation.stats import StatBlock


class SchemaVersion:
    """Snapshot schema version constants."""

    CURRENT = "1.0"
    COMPATIBLE: Set[str] = {"1.0"}


def validate_schema_version(data: Dict[str, Any]) -> None:
    """Validate snapshot schema version is compatible.

    Raises:
        ValueError: If schema version is missing or not compatible
    """
    version = data.get("schema_version")
    if version not in SchemaVersion.COMPATIBLE:
        raise ValueError(
            f"Incompatible snapshot version: {version}. "
            f"Compatible versions: {SchemaVersion.COMPATIBLE}"
        )


def _optional_card(data: Optional[Dict[str, Any]]) -> Optional[Card]:
    return card_from_dict(data) if data else None


def state_to_dict(state: GameState, pools: TrainingPools) -> Dict[str, Any]:
    """Convert game state plus training pools to a JSON-serializable dict."""
    player = state.player
    return {
        "schema_version": SchemaVersion.CURRENT,
        "turn": state.turn,
        "phase": state.phase.value,
        "stats": {stat.value: player.stats.get(stat) for stat in Stat},
        "deck": cards_to_list(player.deck),
        "hand": cards_to_list(player.hand),
        "placed": {
            role.value: card_to_dict(player.placed[role]) if player.placed[role] else None
            for role in ROLE_ORDER
        },
        "pending_training": (
            cards_to_list(state.pending_training)
            if state.pending_training is not None else None
        ),
        "training_pools": {
            rarity.value: cards_to_list(pools[rarity]) for rarity in Rarity
        },
    }


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """Create GameState from a snapshot dict.

    Raises:
        ValueError: On incompatible version, malformed content or stats
            outside their bounds
    """
    if not isinstance(data, dict):
        raise ValueError(f"Malformed snapshot: expected an object, got {type(data).__name__}")
    validate_schema_version(data)
    try:
        stats = StatBlock(**{stat.value: int(data["stats"][stat.value]) for stat in Stat})
        placed_data = data.get("placed", {})
        player = PlayerState(
            stats=stats,
            deck=cards_from_list(data.get("deck", [])),
            hand=cards_from_list(data.get("hand", [])),
            placed={role: _optional_card(placed_data.get(role.value)) for role in ROLE_ORDER},
        )
        pending = data.get("pending_training")
        state = GameState(
            player=player,
            turn=int(data["turn"]),
            phase=Phase(data["phase"]),
            pending_training=cards_from_list(pending) if pending is not None else None,
        )
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed snapshot: {e}") from e

    if not stats.in_bounds():
        raise ValueError(f"Snapshot stats out of bounds: {stats.snapshot()}")
    return state


def pools_from_dict(data: Dict[str, Any]) -> Dict[Rarity, List[Card]]:
    """Extract training pool contents from a snapshot dict.

    Raises:
        ValueError: If the pools are malformed
    """
    try:
        raw = data.get("training_pools", {})
        return {rarity: cards_from_list(raw.get(rarity.value, [])) for rarity in Rarity}
    except (KeyError, TypeError, AttributeError) as e:
        raise ValueError(f"Malformed snapshot pools: {e}") from e


def snapshot_to_json(data: Dict[str, Any], indent: int = 2) -> str:
    return json.dumps(data, indent=indent, ensure_ascii=False)


def snapshot_from_json(json_str: str) -> Dict[str, Any]:
    return json.loads(json_str)
