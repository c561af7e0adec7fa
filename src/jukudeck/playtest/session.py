"""Automated playtest session management."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional

from jukudeck.cards.schema import Card, Phase, ROLE_LABELS, Stat
from jukudeck.playtest.display import StateRenderer, format_card
from jukudeck.simulation.players import AIPlayer
from jukudeck.simulation.session import GameSession, SessionConfig

logger = logging.getLogger(__name__)


@dataclass
class PlaytestResult:
    """Outcome of one automated game."""

    seed: int
    strategy: str
    turns_played: int
    final_stats: Dict[str, int] = field(default_factory=dict)
    deck_size: int = 0
    finished: bool = False
    stuck_reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PlaytestSession:
    """Plays a whole game with an AI player, narrating each step."""

    def __init__(
        self,
        catalog: Iterable[Card],
        config: SessionConfig,
        player: AIPlayer,
        debug: bool = False,
        session: Optional[GameSession] = None,
        max_steps: int = 100,
    ):
        self.config = config
        self.player = player
        self.debug = debug
        self.max_steps = max_steps
        self.game = session or GameSession(catalog, config)
        self.renderer = StateRenderer()
        # Called after every completed step, e.g. to persist a snapshot
        self.on_step: Optional[Callable[[GameSession], None]] = None

    def run(self, output_fn: Callable[[str], None] = print) -> PlaytestResult:
        """Run the game to the end.

        Args:
            output_fn: Function to output text (default: print)

        Returns:
            PlaytestResult with final stats
        """
        game = self.game
        if game.phase == Phase.START:
            game.initialize_session()
            output_fn(f"Seed: {game.seed} (use --seed {game.seed} to replay)")

        stuck_reason: Optional[str] = None
        steps = 0

        while not game.is_finished:
            steps += 1
            if steps > self.max_steps:
                stuck_reason = f"exceeded {self.max_steps} steps"
                break

            output_fn("")
            output_fn(self.renderer.render(game.state, game.current_config, self.debug))

            if game.phase == Phase.TRAINING:
                ok = self._play_training(output_fn)
            elif game.phase == Phase.ACTION:
                ok = self._play_action(output_fn)
            elif game.phase == Phase.MEETING:
                ok = self._play_meeting(output_fn)
            else:
                ok = game.advance_phase()

            if not ok:
                stuck_reason = f"step rejected in {game.phase.value} phase"
                break

            if self.on_step is not None:
                self.on_step(game)

        if stuck_reason:
            output_fn(f"\nGame stuck: {stuck_reason}")
            logger.warning(f"Playtest stuck: {stuck_reason}")
        else:
            output_fn("\n=== Game Over ===")

        stats = game.state.player.stats
        output_fn("  ".join(f"{s.value}: {stats.get(s)}" for s in Stat))

        return PlaytestResult(
            seed=game.seed,
            strategy=self.player.name,
            turns_played=min(game.turn, game.manager.max_turns),
            final_stats={s.value: stats.get(s) for s in Stat},
            deck_size=len(game.state.player.deck),
            finished=game.is_finished,
            stuck_reason=stuck_reason,
        )

    def _play_training(self, output_fn: Callable[[str], None]) -> bool:
        game = self.game
        offer = list(game.state.pending_training or [])
        chosen = self.player.choose_training(offer, game.required_training_picks, game.state)
        for card in chosen:
            output_fn(f"Training: {format_card(card)}")
        return game.confirm_training_choice(chosen)

    def _play_action(self, output_fn: Callable[[str], None]) -> bool:
        game = self.game
        placements = self.player.choose_placements(list(game.state.player.hand), game.state)
        for role, card in placements.items():
            check = game.preview_placement(card, role)
            if check.has_warnings:
                output_fn(f"  {card.name}: conditions not met yet ({', '.join(check.unmet_conditions)})")
            if game.place_card(card, role):
                output_fn(f"{ROLE_LABELS[role]} <- {format_card(card)}")

        results = game.resolve_placed_actions()
        if results is None:
            return False
        output_fn(self.renderer.render_actions(results))
        return True

    def _play_meeting(self, output_fn: Callable[[str], None]) -> bool:
        game = self.game
        quota = game.current_config.delete_quota
        deck = game.deck_by_acquisition()
        deletions = self.player.choose_deletions(deck, quota, game.state)
        for card in deletions:
            output_fn(f"Meeting: remove {format_card(card)}")
        return game.confirm_meeting(deletions)
