"""Turn and phase state machine."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from jukudeck.cards.schema import (
    HAND_SIZE,
    OPENING_OFFER_SIZE,
    ROLE_ORDER,
    TRAINING_OFFER_SIZE,
    TURN_CONFIGS,
    Card,
    Phase,
    Rarity,
    Role,
    Stat,
    TurnConfig,
)
from jukudeck.simulation.deck import TrainingPools, draw_cards
from jukudeck.simulation.evaluator import apply_card_effect
from jukudeck.simulation.state import GameState

logger = logging.getLogger(__name__)


class PhaseError(Exception):
    """Broken turn/phase invariant."""

    pass


@dataclass(frozen=True)
class ActionEffect:
    """Outcome of resolving one placed card."""

    role: Role
    card_name: str
    before: Dict[Stat, int]
    after: Dict[Stat, int]
    is_recommended: bool
    applied: bool

    @property
    def deltas(self) -> Dict[Stat, int]:
        return {stat: self.after[stat] - self.before[stat] for stat in Stat}


class TurnManager:
    """Sequences start -> training -> action -> meeting -> training | end.

    The manager owns the game state and the training pools. Draws use the
    forced name lists it was built with; leave them empty for normal play.
    """

    def __init__(
        self,
        state: GameState,
        pools: TrainingPools,
        rng: Optional[random.Random] = None,
        turn_configs: Sequence[TurnConfig] = TURN_CONFIGS,
        forced_training_names: Sequence[str] = (),
        forced_hand_names: Sequence[str] = (),
        hand_size: int = HAND_SIZE,
    ) -> None:
        self.state = state
        self.pools = pools
        self.rng = rng or pools.rng
        self.turn_configs = tuple(turn_configs)
        self.forced_training_names = tuple(forced_training_names)
        self.forced_hand_names = tuple(forced_hand_names)
        self.hand_size = hand_size

    @property
    def max_turns(self) -> int:
        return len(self.turn_configs)

    @property
    def current_config(self) -> TurnConfig:
        turn = self.state.turn
        if not 0 <= turn < self.max_turns:
            raise PhaseError(f"Turn index {turn} outside 0..{self.max_turns - 1}")
        return self.turn_configs[turn]

    def initialize_game(self) -> None:
        """Reset state, seed the deck with starter cards, shuffle the pools."""
        self.state.reset()

        starters = self.pools.starter_cards()
        self.state.player.deck.extend(starters)
        logger.info(f"Added {len(starters)} starter cards to deck")

        for rarity in (Rarity.R, Rarity.SR, Rarity.SSR):
            self.pools.shuffle(rarity)

    def advance_phase(self) -> bool:
        """Perform the next phase transition.

        Returns False (and changes nothing) when there is no transition out
        of the current phase.
        """
        phase = self.state.phase
        logger.debug(f"advance_phase from {phase.value} (turn {self.state.turn})")

        if phase == Phase.START:
            self.state.phase = Phase.TRAINING
            self.start_training_phase()
        elif phase == Phase.TRAINING:
            self.state.phase = Phase.ACTION
            self.start_action_phase()
        elif phase == Phase.ACTION:
            skip_meeting = self.current_config.delete_quota == 0
            self.state.phase = Phase.MEETING
            self.start_meeting_phase()
            if skip_meeting:
                logger.info("No deletions this turn, skipping meeting")
                return self.advance_phase()
        elif phase == Phase.MEETING:
            self.state.turn += 1
            if self.state.turn >= self.max_turns:
                self.state.phase = Phase.END
                logger.info(f"Game over: {self.max_turns} turns completed")
            else:
                self.state.phase = Phase.TRAINING
                logger.info(f"Turn {self.state.turn + 1} start: {self.current_config.name}")
                self.start_training_phase()
        else:
            logger.error(f"No transition out of phase {phase.value}")
            return False

        return True

    def start_training_phase(self) -> List[Card]:
        """Draw the training offer for the current turn."""
        config = self.current_config
        count = OPENING_OFFER_SIZE if self.state.turn == 0 else TRAINING_OFFER_SIZE
        offer = self.draw_training(config.training_rarity, count)
        self.state.pending_training = offer
        logger.info(f"Training phase: {len(offer)} {config.training_rarity.value} cards offered")
        return offer

    def start_action_phase(self) -> List[Card]:
        """Shuffle the deck and draw a fresh hand."""
        logger.info("Action phase start")
        self.rng.shuffle(self.state.player.deck)
        logger.debug("Deck shuffled")
        return self.draw_hand(self.hand_size)

    def start_meeting_phase(self) -> None:
        logger.info("Meeting phase start")
        self.state.player.return_all_to_deck()

    def draw_training(self, rarity: Rarity, count: int) -> List[Card]:
        return self.pools.draw(rarity, count, self.forced_training_names)

    def draw_hand(self, count: int) -> List[Card]:
        """Draw from the top of the player's deck into the hand."""
        player = self.state.player
        drawn = draw_cards(player.deck, count, self.forced_hand_names, self.pools.catalog)
        player.hand.extend(drawn)
        if drawn:
            logger.info(f"Drew {len(drawn)} cards into hand")
        return drawn

    def execute_actions(self) -> Dict[Role, ActionEffect]:
        """Resolve every placed card in role order.

        A card matching the turn's recommended category first grants +1 to
        the recommended stat, then its own effect is applied.
        """
        config = self.current_config
        stats = self.state.player.stats
        results: Dict[Role, ActionEffect] = {}

        logger.info("--- Resolving actions ---")
        for role in ROLE_ORDER:
            card = self.state.player.placed[role]
            if card is None:
                continue

            before = stats.snapshot()
            is_recommended = (
                config.recommended_category is not None
                and card.category == config.recommended_category
            )
            if is_recommended and config.recommended_stat is not None:
                stats.change_by(config.recommended_stat, 1)
                logger.info(f"Recommended action bonus: {config.recommended_category.value}")

            applied = apply_card_effect(card, role, stats)

            results[role] = ActionEffect(
                role=role,
                card_name=card.name,
                before=before,
                after=stats.snapshot(),
                is_recommended=is_recommended,
                applied=applied,
            )
        logger.info("--- Actions resolved ---")
        return results
