"""JSON serialization for cards and card catalogs."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jukudeck.cards.schema import Card, Category, Rarity


def card_to_dict(card: Card) -> Dict[str, Any]:
    """Convert Card to JSON-serializable dict."""
    return {
        "category": card.category.value,
        "rarity": card.rarity.value,
        "name": card.name,
        "top_effect": card.top_effect,
        "effect": card.effect,
        "acquired_turn": card.acquired_turn,
    }


def card_from_dict(data: Dict[str, Any]) -> Card:
    """Create Card from dict.

    Raises:
        ValueError: If category or rarity is not recognised
        KeyError: If a required field is missing
    """
    acquired: Optional[int] = data.get("acquired_turn")
    return Card(
        category=Category(data["category"]),
        rarity=Rarity(data["rarity"]),
        name=data["name"],
        top_effect=data.get("top_effect", ""),
        effect=data.get("effect", ""),
        acquired_turn=int(acquired) if acquired is not None else None,
    )


def cards_to_list(cards: List[Card]) -> List[Dict[str, Any]]:
    return [card_to_dict(c) for c in cards]


def cards_from_list(data: List[Dict[str, Any]]) -> List[Card]:
    return [card_from_dict(d) for d in data]


def catalog_to_json(cards: List[Card], indent: int = 2) -> str:
    """Serialize a card catalog to a JSON string."""
    return json.dumps({"cards": cards_to_list(cards)}, indent=indent, ensure_ascii=False)


def catalog_from_json(json_str: str) -> List[Card]:
    """Deserialize a card catalog.

    Accepts either ``{"cards": [...]}`` or a bare list of card dicts.
    """
    data = json.loads(json_str)
    if isinstance(data, dict):
        data = data.get("cards", [])
    return cards_from_list(data)


def load_catalog(path: Union[str, Path]) -> List[Card]:
    """Load a card catalog JSON file."""
    with open(path, encoding="utf-8") as f:
        return catalog_from_json(f.read())
