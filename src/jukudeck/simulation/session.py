"""Game session: the operations a front end drives the core through."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

from jukudeck.cards.schema import (
    HAND_SIZE,
    OPENING_PICKS,
    TRAINING_PICKS,
    Card,
    Phase,
    Rarity,
    Role,
    TurnConfig,
)
from jukudeck.simulation.deck import TrainingPools
from jukudeck.simulation.evaluator import PlacementCheck, check_placement
from jukudeck.simulation.snapshot import pools_from_dict, state_from_dict, state_to_dict
from jukudeck.simulation.state import GameState
from jukudeck.simulation.turns import ActionEffect, TurnManager

logger = logging.getLogger(__name__)


@dataclass
class SessionConfig:
    """Configuration for a game session."""

    seed: Optional[int] = None
    # Card names served first by training / hand draws (debugging, tests)
    forced_training_names: List[str] = field(default_factory=list)
    forced_hand_names: List[str] = field(default_factory=list)
    hand_size: int = HAND_SIZE

    def __post_init__(self):
        """Generate seed if not provided."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)


class GameSession:
    """Single-player game session.

    Every user-facing operation reports rejection through its return value
    rather than raising.
    """

    def __init__(self, catalog: Iterable[Card], config: Optional[SessionConfig] = None):
        self.config = config or SessionConfig()
        self.seed = self.config.seed
        self.rng = random.Random(self.seed)
        self.pools = TrainingPools(catalog, self.rng)
        self.manager = TurnManager(
            GameState(),
            self.pools,
            rng=self.rng,
            forced_training_names=self.config.forced_training_names,
            forced_hand_names=self.config.forced_hand_names,
            hand_size=self.config.hand_size,
        )

    @property
    def state(self) -> GameState:
        return self.manager.state

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def turn(self) -> int:
        return self.state.turn

    @property
    def current_config(self) -> TurnConfig:
        return self.manager.current_config

    @property
    def is_finished(self) -> bool:
        return self.state.phase == Phase.END

    @property
    def required_training_picks(self) -> int:
        """How many offered cards must be chosen to confirm training."""
        offer = self.state.pending_training or []
        required = OPENING_PICKS if self.state.turn == 0 else TRAINING_PICKS
        return min(required, len(offer))

    def _reject(self, message: str) -> bool:
        logger.warning(f"Rejected: {message}")
        return False

    def initialize_session(self) -> GameState:
        """Start a new game and draw the opening training offer."""
        self.manager.initialize_game()
        self.manager.advance_phase()
        logger.info(f"Session started (seed {self.seed})")
        return self.state

    def draw_training(self, rarity: Rarity, count: int) -> List[Card]:
        return self.manager.draw_training(rarity, count)

    def draw_hand(self, count: int) -> List[Card]:
        return self.manager.draw_hand(count)

    def advance_phase(self) -> bool:
        return self.manager.advance_phase()

    def confirm_training_choice(self, cards: Sequence[Card]) -> bool:
        """Add the chosen offered cards to the deck and start the action phase."""
        offer = self.state.pending_training
        if self.state.phase != Phase.TRAINING or offer is None:
            return self._reject("no training offer to confirm")

        required = self.required_training_picks
        if len(cards) != required:
            return self._reject(f"choose exactly {required} training card(s), got {len(cards)}")

        remaining = list(offer)
        for card in cards:
            idx = next((i for i, c in enumerate(remaining) if c == card), None)
            if idx is None:
                return self._reject(f"{card.name} was not offered")
            remaining.pop(idx)

        for card in cards:
            self.state.player.add_to_deck(card, self.state.turn)
        self.state.pending_training = None

        return self.manager.advance_phase()

    def preview_placement(self, card: Card, role: Role) -> PlacementCheck:
        return check_placement(card, role, self.state.player.stats)

    def place_card(self, card: Card, role: Role) -> bool:
        """Move ``card`` from the hand into the empty ``role`` slot."""
        player = self.state.player
        if self.state.phase != Phase.ACTION:
            return self._reject("cards can only be placed in the action phase")
        if player.placed[role] is not None:
            return self._reject(f"{role.value} slot is occupied")
        if card not in player.hand:
            return self._reject(f"{card.name} is not in hand")
        if not self.preview_placement(card, role).allowed:
            return self._reject(f"{card.name} cannot be placed as {role.value}")

        moved = player.remove_from_hand(card)
        player.place_card(moved, role)
        return True

    def unplace(self, role: Role) -> bool:
        """Return the card in ``role`` to the hand."""
        player = self.state.player
        card = player.placed[role]
        if self.state.phase != Phase.ACTION or card is None:
            return self._reject(f"nothing to take back from {role.value}")
        player.placed[role] = None
        player.hand.append(card.copy())
        return True

    def clear_placed(self) -> None:
        self.state.player.clear_placed()

    def resolve_placed_actions(self) -> Optional[Dict[Role, ActionEffect]]:
        """Resolve placed cards, then move on to the meeting (or next turn).

        Returns per-role before/after stats, or None when not in the action
        phase.
        """
        if self.state.phase != Phase.ACTION:
            self._reject("no action phase to resolve")
            return None

        results = self.manager.execute_actions()
        self.manager.advance_phase()
        return results

    def confirm_meeting(self, cards_to_remove: Sequence[Card] = ()) -> bool:
        """Delete up to the turn's quota of deck cards and advance the turn."""
        if self.state.phase != Phase.MEETING:
            return self._reject("no meeting in progress")

        quota = self.current_config.delete_quota
        if len(cards_to_remove) > quota:
            return self._reject(f"at most {quota} card(s) may be removed")

        remaining = list(self.state.player.deck)
        for card in cards_to_remove:
            idx = next((i for i, c in enumerate(remaining) if c == card), None)
            if idx is None:
                return self._reject(f"{card.name} is not in the deck")
            remaining.pop(idx)

        for card in cards_to_remove:
            self.state.player.remove_from_deck(card)

        # Hand is normally empty here; anything left goes back to the deck
        player = self.state.player
        player.deck.extend(c.copy() for c in player.hand)
        player.hand = []

        return self.manager.advance_phase()

    def deck_by_acquisition(self) -> List[Card]:
        """Deck ordered by acquisition turn, oldest first."""
        return sorted(
            self.state.player.deck,
            key=lambda c: c.acquired_turn if c.acquired_turn is not None else 0,
        )

    def snapshot(self) -> Dict[str, Any]:
        """Lossless, JSON-serializable view of the session."""
        return state_to_dict(self.state, self.pools)

    @classmethod
    def restore(
        cls,
        data: Dict[str, Any],
        catalog: Iterable[Card],
        config: Optional[SessionConfig] = None,
    ) -> "GameSession":
        """Rebuild a session from :meth:`snapshot` output without re-drawing.

        Raises:
            ValueError: If the snapshot is incompatible or malformed
        """
        state = state_from_dict(data)
        session = cls(catalog, config)
        if state.phase != Phase.END and not 0 <= state.turn < session.manager.max_turns:
            raise ValueError(f"Snapshot turn {state.turn} out of range")
        if state.phase == Phase.TRAINING and state.pending_training is None:
            raise ValueError("Snapshot in training phase has no pending offer")

        session.manager.state = state
        session.pools.replace_pools(pools_from_dict(data))
        logger.info(f"Session restored (turn {state.turn}, {state.phase.value})")
        return session
