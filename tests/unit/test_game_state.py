"""Tests for cards and game state containers."""

from jukudeck.cards.schema import Card, Category, Phase, Rarity, Role
from jukudeck.simulation.state import GameState, PlayerState


def make_card(name: str = "電話応対") -> Card:
    return Card(Category.RECEPTION, Rarity.N, name, "満足+1", "満足+1。")


class TestCard:

    def test_mark_acquired_first_write_wins(self):
        card = make_card()
        card.mark_acquired(2)
        card.mark_acquired(5)
        assert card.acquired_turn == 2

    def test_copy_is_independent(self):
        card = make_card()
        clone = card.copy()
        clone.mark_acquired(1)

        assert clone == Card(Category.RECEPTION, Rarity.N, "電話応対", "満足+1", "満足+1。", 1)
        assert card.acquired_turn is None

    def test_str(self):
        assert str(make_card()) == "電話応対 (N/応対)"


class TestPlayerState:

    def test_add_to_deck_stamps_copy(self):
        player = PlayerState()
        card = make_card()
        added = player.add_to_deck(card, 3)

        assert added is not card
        assert player.deck[-1].acquired_turn == 3
        assert card.acquired_turn is None

    def test_remove_from_deck_first_match(self):
        player = PlayerState(deck=[make_card(), make_card("授業準備"), make_card()])

        assert player.remove_from_deck(make_card())
        assert [c.name for c in player.deck] == ["授業準備", "電話応対"]
        assert not player.remove_from_deck(make_card("経費精算"))

    def test_return_all_to_deck(self):
        player = PlayerState(hand=[make_card("授業準備")])
        player.place_card(make_card(), Role.TEACHER)

        player.return_all_to_deck()

        assert [c.name for c in player.deck] == ["電話応対", "授業準備"]
        assert player.hand == []
        assert player.placed_cards() == []

    def test_place_card_stores_copy(self):
        player = PlayerState()
        card = make_card()
        player.place_card(card, Role.LEADER)

        assert player.placed[Role.LEADER] == card
        assert player.placed[Role.LEADER] is not card


def test_game_state_reset() -> None:
    state = GameState(turn=4, phase=Phase.MEETING, pending_training=[make_card()])
    state.player.hand.append(make_card())

    state.reset()

    assert state.turn == 0
    assert state.phase == Phase.START
    assert state.pending_training is None
    assert state.player.hand == []
