"""AI player implementations."""

import random
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from jukudeck.cards.schema import HAND_SIZE, ROLE_ORDER, Card, Role, Stat
from jukudeck.simulation.evaluator import apply_card_effect, check_placement
from jukudeck.simulation.state import GameState
from jukudeck.simulation.stats import StatBlock


class AIPlayer(ABC):
    """Base class for AI players."""

    name = "ai"

    @abstractmethod
    def choose_training(self, offer: List[Card], picks: int, state: GameState) -> List[Card]:
        """Choose exactly ``picks`` cards from the training offer."""
        pass

    @abstractmethod
    def choose_placements(self, hand: List[Card], state: GameState) -> Dict[Role, Card]:
        """Assign hand cards to roles. Placements must pass the role gate."""
        pass

    @abstractmethod
    def choose_deletions(self, deck: List[Card], quota: int, state: GameState) -> List[Card]:
        """Choose at most ``quota`` deck cards to remove."""
        pass


class RandomPlayer(AIPlayer):
    """Player that chooses uniformly at random."""

    name = "random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def choose_training(self, offer: List[Card], picks: int, state: GameState) -> List[Card]:
        return self.rng.sample(offer, picks)

    def choose_placements(self, hand: List[Card], state: GameState) -> Dict[Role, Card]:
        available = list(hand)
        self.rng.shuffle(available)
        placements: Dict[Role, Card] = {}
        for role in ROLE_ORDER:
            for card in available:
                if check_placement(card, role, state.player.stats).allowed:
                    placements[role] = card
                    available.remove(card)
                    break
        return placements

    def choose_deletions(self, deck: List[Card], quota: int, state: GameState) -> List[Card]:
        count = self.rng.randint(0, min(quota, len(deck)))
        return self.rng.sample(deck, count)


def _stat_gain(before: StatBlock, after: StatBlock) -> int:
    # Enrollment is what the school lives on; weight it above the rest
    weights = {Stat.EXPERIENCE: 1, Stat.ENROLLMENT: 2, Stat.SATISFACTION: 1, Stat.ACCOUNTING: 1}
    return sum(weights[s] * (after.get(s) - before.get(s)) for s in Stat)


def score_card(card: Card, role: Role, stats: StatBlock) -> int:
    """Stat gain of playing ``card`` as ``role``, simulated on a copy."""
    trial = stats.copy()
    if not apply_card_effect(card, role, trial):
        return -1000
    return _stat_gain(stats, trial)


class GreedyPlayer(AIPlayer):
    """Player that maximizes immediate weighted stat gain."""

    name = "greedy"

    def choose_training(self, offer: List[Card], picks: int, state: GameState) -> List[Card]:
        stats = state.player.stats
        ranked = sorted(
            offer,
            key=lambda c: max(score_card(c, r, stats) for r in ROLE_ORDER),
            reverse=True,
        )
        return ranked[:picks]

    def choose_placements(self, hand: List[Card], state: GameState) -> Dict[Role, Card]:
        available = list(hand)
        placements: Dict[Role, Card] = {}
        for role in ROLE_ORDER:
            candidates = [
                c for c in available
                if check_placement(c, role, state.player.stats).allowed
            ]
            if not candidates:
                continue
            best = max(candidates, key=lambda c: score_card(c, role, state.player.stats))
            placements[role] = best
            available.remove(best)
        return placements

    def choose_deletions(self, deck: List[Card], quota: int, state: GameState) -> List[Card]:
        # Thin out the weakest cards, keeping at least a full hand
        stats = state.player.stats
        spare = max(0, len(deck) - HAND_SIZE)
        ranked = sorted(deck, key=lambda c: max(score_card(c, r, stats) for r in ROLE_ORDER))
        return ranked[:min(quota, spare)]
