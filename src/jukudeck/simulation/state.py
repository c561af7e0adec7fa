"""Mutable game state containers owned by the turn manager."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from jukudeck.cards.schema import ROLE_LABELS, ROLE_ORDER, Card, Phase, Role
from jukudeck.simulation.stats import StatBlock

logger = logging.getLogger(__name__)


def _empty_slots() -> Dict[Role, Optional[Card]]:
    return {role: None for role in ROLE_ORDER}


@dataclass
class PlayerState:
    """Stats and card zones of the single player.

    ``deck`` is a stack: the last element is the top card.
    """

    stats: StatBlock = field(default_factory=StatBlock)
    deck: List[Card] = field(default_factory=list)
    hand: List[Card] = field(default_factory=list)
    placed: Dict[Role, Optional[Card]] = field(default_factory=_empty_slots)

    def add_to_deck(self, card: Card, turn: int) -> Card:
        """Push a copy of ``card`` on top of the deck, stamping its turn."""
        added = card.copy()
        added.mark_acquired(turn)
        self.deck.append(added)
        logger.info(f"Added to deck: {added.name} ({added.rarity.value})")
        return added

    def remove_from_deck(self, card: Card) -> bool:
        """Remove the first deck card equal to ``card``."""
        for i, candidate in enumerate(self.deck):
            if candidate == card:
                del self.deck[i]
                logger.info(f"Removed from deck: {card.name}")
                return True
        return False

    def remove_from_hand(self, card: Card) -> Optional[Card]:
        for i, candidate in enumerate(self.hand):
            if candidate == card:
                return self.hand.pop(i)
        return None

    def place_card(self, card: Card, role: Role) -> None:
        self.placed[role] = card.copy()
        logger.info(f"Placed {card.name} as {ROLE_LABELS[role]}")

    def clear_placed(self) -> None:
        self.placed = _empty_slots()

    def placed_cards(self) -> List[Card]:
        return [c for c in (self.placed[r] for r in ROLE_ORDER) if c is not None]

    def return_all_to_deck(self) -> None:
        """Move placed and hand cards back onto the deck and clear both."""
        for card in self.placed_cards():
            self.deck.append(card.copy())
        for card in self.hand:
            self.deck.append(card.copy())
        self.hand = []
        self.clear_placed()
        logger.info("Returned hand and placed cards to deck")


@dataclass
class GameState:
    """Complete single-player game state."""

    player: PlayerState = field(default_factory=PlayerState)
    turn: int = 0
    phase: Phase = Phase.START
    # Offered but unresolved training cards; None outside the training phase
    pending_training: Optional[List[Card]] = None

    def reset(self) -> None:
        self.player = PlayerState()
        self.turn = 0
        self.phase = Phase.START
        self.pending_training = None
        logger.info("Game state initialized")
