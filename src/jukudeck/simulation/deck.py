"""Training pools and card drawing."""

from __future__ import annotations

import logging
import random
from typing import Dict, Iterable, List, Optional, Sequence, Union

from jukudeck.cards.schema import Card, Rarity

logger = logging.getLogger(__name__)


def find_card(catalog: Sequence[Card], name: str) -> Optional[Card]:
    """First catalog card named ``name``, if any."""
    for card in catalog:
        if card.name == name:
            return card
    return None


def draw_cards(
    pool: List[Card],
    count: int,
    forced_names: Sequence[str] = (),
    catalog: Sequence[Card] = (),
) -> List[Card]:
    """Draw up to ``count`` cards from ``pool`` (its tail is the top).

    Forced names are served first, in order: a matching pool card is
    removed and returned, otherwise a copy of the matching catalog card is
    inserted without touching ``pool``. Remaining slots pop from the top.
    Running out of cards returns a short list.
    """
    drawn: List[Card] = []

    for name in forced_names:
        if len(drawn) >= count:
            break
        idx = next((i for i, c in enumerate(pool) if c.name == name), None)
        if idx is not None:
            drawn.append(pool.pop(idx).copy())
            logger.info(f"Forced draw: {name}")
            continue
        found = find_card(catalog, name)
        if found is not None:
            drawn.append(found.copy())
            logger.info(f"Forced insert: {name} (not in pool)")

    while len(drawn) < count:
        if not pool:
            logger.info(f"Pool exhausted after {len(drawn)} of {count} cards")
            break
        drawn.append(pool.pop().copy())

    return drawn


class TrainingPools:
    """Per-rarity ordered pools of cards offered in training."""

    def __init__(self, catalog: Iterable[Card], rng: Optional[random.Random] = None) -> None:
        self.catalog: List[Card] = [c.copy() for c in catalog]
        self.rng = rng or random.Random()
        self.pools: Dict[Rarity, List[Card]] = {rarity: [] for rarity in Rarity}
        for card in self.catalog:
            self.pools[card.rarity].append(card.copy())

    def __getitem__(self, rarity: Rarity) -> List[Card]:
        return self.pools[rarity]

    def shuffle(self, rarity: Rarity) -> None:
        """Shuffle one pool in place."""
        self.rng.shuffle(self.pools[rarity])
        logger.debug(f"Shuffled {rarity.value} pool ({len(self.pools[rarity])} cards)")

    def draw(
        self,
        rarity: Union[Rarity, str],
        count: int,
        forced_names: Sequence[str] = (),
    ) -> List[Card]:
        """Draw from the ``rarity`` pool. Unknown rarities draw nothing."""
        try:
            key = Rarity(rarity)
        except ValueError:
            logger.error(f"Unknown rarity: {rarity}")
            return []
        return draw_cards(self.pools[key], count, forced_names, self.catalog)

    def starter_cards(self) -> List[Card]:
        """Two independent copies of every N card in the catalog."""
        starters: List[Card] = []
        for card in self.catalog:
            if card.rarity == Rarity.N:
                starters.append(card.copy())
                starters.append(card.copy())
        return starters

    def replace_pools(self, pools: Dict[Rarity, List[Card]]) -> None:
        """Replace pool contents, e.g. when restoring a snapshot."""
        for rarity in Rarity:
            self.pools[rarity] = [c.copy() for c in pools.get(rarity, [])]
