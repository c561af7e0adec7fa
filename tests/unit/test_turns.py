"""Tests for the turn and phase state machine."""

import random

import pytest

from jukudeck.cards.examples import create_sample_catalog
from jukudeck.cards.schema import (
    MAX_TURNS,
    Card,
    Category,
    Phase,
    Rarity,
    Role,
    Stat,
    TurnConfig,
)
from jukudeck.simulation.deck import TrainingPools, find_card
from jukudeck.simulation.state import GameState
from jukudeck.simulation.turns import PhaseError, TurnManager


def make_manager(seed: int = 1, **kwargs) -> TurnManager:
    rng = random.Random(seed)
    pools = TrainingPools(create_sample_catalog(), rng)
    manager = TurnManager(GameState(), pools, rng, **kwargs)
    manager.initialize_game()
    return manager


def catalog_card(name: str) -> Card:
    card = find_card(create_sample_catalog(), name)
    assert card is not None
    return card


class TestInitialize:

    def test_starting_state(self):
        manager = make_manager()
        state = manager.state

        assert state.phase == Phase.START
        assert state.turn == 0
        assert len(state.player.deck) == 8
        assert state.player.hand == []
        assert state.player.stats.snapshot()[Stat.SATISFACTION] == 3

    def test_reinitialize_resets(self):
        manager = make_manager()
        manager.state.turn = 5
        manager.state.player.stats.change_by(Stat.EXPERIENCE, 4)

        manager.initialize_game()

        assert manager.state.turn == 0
        assert manager.state.player.stats.experience == 0
        assert len(manager.state.player.deck) == 8


class TestTransitions:

    def test_start_to_training_offers_four(self):
        manager = make_manager()
        assert manager.advance_phase()

        offer = manager.state.pending_training
        assert manager.state.phase == Phase.TRAINING
        assert len(offer) == 4
        assert all(c.rarity == Rarity.R for c in offer)

    def test_training_to_action_draws_hand(self):
        manager = make_manager()
        manager.advance_phase()
        manager.advance_phase()

        assert manager.state.phase == Phase.ACTION
        assert len(manager.state.player.hand) == 4
        assert len(manager.state.player.deck) == 4

    def test_action_to_meeting_returns_cards(self):
        manager = make_manager()
        manager.advance_phase()
        manager.advance_phase()
        player = manager.state.player
        player.place_card(player.remove_from_hand(player.hand[0]), Role.LEADER)

        manager.advance_phase()

        assert manager.state.phase == Phase.MEETING
        assert len(player.deck) == 8
        assert player.hand == []
        assert player.placed_cards() == []

    def test_meeting_to_next_training(self):
        manager = make_manager()
        for _ in range(3):
            manager.advance_phase()
        manager.advance_phase()

        assert manager.state.turn == 1
        assert manager.state.phase == Phase.TRAINING
        offer = manager.state.pending_training
        assert len(offer) == 3
        assert all(c.rarity == Rarity.SR for c in offer)

    def test_zero_quota_skips_meeting(self):
        configs = (
            TurnConfig("first", Rarity.R, delete_quota=0),
            TurnConfig("second", Rarity.SR, delete_quota=1),
        )
        manager = make_manager(turn_configs=configs)
        manager.advance_phase()
        manager.advance_phase()

        manager.advance_phase()

        assert manager.state.turn == 1
        assert manager.state.phase == Phase.TRAINING
        assert len(manager.state.player.deck) == 8

    def test_zero_quota_on_last_turn_ends_game(self):
        manager = make_manager()
        state = manager.state
        state.turn = MAX_TURNS - 1
        state.phase = Phase.ACTION
        state.player.hand = [catalog_card("電話応対")]
        state.player.placed[Role.STAFF] = catalog_card("経費精算")

        assert manager.advance_phase()

        assert state.phase == Phase.END
        assert state.turn == MAX_TURNS
        names = [c.name for c in state.player.deck]
        assert "経費精算" in names
        assert names.count("電話応対") == 3
        assert state.player.hand == []

    def test_full_run_reaches_end(self):
        manager = make_manager()
        steps = 0
        while manager.state.phase != Phase.END:
            assert manager.advance_phase()
            steps += 1

        assert manager.state.turn == MAX_TURNS
        # 7 turns with a meeting, the last one skipping it
        assert steps == 1 + 7 * 3 + 2

    def test_no_transition_from_end(self):
        manager = make_manager()
        manager.state.phase = Phase.END
        manager.state.turn = MAX_TURNS

        assert not manager.advance_phase()
        assert manager.state.phase == Phase.END

    def test_config_out_of_range(self):
        manager = make_manager()
        manager.state.turn = MAX_TURNS
        with pytest.raises(PhaseError):
            manager.current_config

    def test_forced_training_names(self):
        manager = make_manager(forced_training_names=["体験授業"])
        manager.advance_phase()
        assert manager.state.pending_training[0].name == "体験授業"

    def test_seeded_offers_repeat(self):
        first = make_manager(seed=9)
        second = make_manager(seed=9)
        first.advance_phase()
        second.advance_phase()

        assert [c.name for c in first.state.pending_training] == [
            c.name for c in second.state.pending_training
        ]


class TestExecuteActions:

    def _in_action(self) -> TurnManager:
        manager = make_manager()
        manager.state.phase = Phase.ACTION
        return manager

    def test_recommended_bonus(self):
        manager = self._in_action()
        manager.state.player.placed[Role.LEADER] = catalog_card("チラシ配り")

        results = manager.execute_actions()

        effect = results[Role.LEADER]
        assert effect.is_recommended
        assert effect.applied
        assert effect.before[Stat.EXPERIENCE] == 0
        assert effect.after[Stat.EXPERIENCE] == 2
        assert effect.deltas[Stat.EXPERIENCE] == 2

    def test_bonus_applies_before_effect(self):
        manager = self._in_action()
        card = Card(Category.MOBILIZATION, Rarity.R, "朝礼", effect="〈体験1以上〉満足+1。")
        manager.state.player.placed[Role.STAFF] = card

        manager.execute_actions()

        stats = manager.state.player.stats
        assert stats.experience == 1
        assert stats.satisfaction == 4

    def test_role_order(self):
        manager = self._in_action()
        placed = manager.state.player.placed
        placed[Role.LEADER] = catalog_card("予算見直し")
        placed[Role.TEACHER] = catalog_card("経費精算")

        manager.execute_actions()

        assert manager.state.player.stats.accounting == 15

    def test_rejected_card_reported(self):
        manager = self._in_action()
        manager.state.player.placed[Role.STAFF] = catalog_card("満足度アンケート")

        results = manager.execute_actions()

        assert not results[Role.STAFF].applied
        assert not results[Role.STAFF].is_recommended
        assert manager.state.player.stats.satisfaction == 3

    def test_empty_slots_skipped(self):
        manager = self._in_action()
        assert manager.execute_actions() == {}
