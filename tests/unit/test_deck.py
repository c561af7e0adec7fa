"""Tests for card drawing and training pools."""

import random

from jukudeck.cards.examples import create_sample_catalog
from jukudeck.cards.schema import Card, Category, Rarity
from jukudeck.simulation.deck import TrainingPools, draw_cards, find_card


def make_cards(*names: str) -> list[Card]:
    return [Card(Category.ACADEMIC, Rarity.R, name, effect="入塾+1") for name in names]


class TestDrawCards:

    def test_pops_from_top(self):
        pool = make_cards("a", "b", "c")
        drawn = draw_cards(pool, 2)

        assert [c.name for c in drawn] == ["c", "b"]
        assert [c.name for c in pool] == ["a"]

    def test_short_pool_returns_what_is_left(self):
        pool = make_cards("a", "b", "c")
        drawn = draw_cards(pool, 5)

        assert len(drawn) == 3
        assert pool == []

    def test_empty_pool(self):
        assert draw_cards([], 3) == []

    def test_forced_name_taken_from_pool(self):
        pool = make_cards("a", "b", "c")
        drawn = draw_cards(pool, 2, forced_names=["a"])

        assert [c.name for c in drawn] == ["a", "c"]
        assert [c.name for c in pool] == ["b"]

    def test_forced_name_inserted_from_catalog(self):
        pool = make_cards("a")
        catalog = make_cards("a", "x")
        drawn = draw_cards(pool, 2, forced_names=["x"], catalog=catalog)

        assert [c.name for c in drawn] == ["x", "a"]
        assert pool == []
        assert drawn[0] is not catalog[1]

    def test_unknown_forced_name_ignored(self):
        pool = make_cards("a", "b")
        drawn = draw_cards(pool, 1, forced_names=["zzz"])
        assert [c.name for c in drawn] == ["b"]

    def test_forced_names_limited_by_count(self):
        pool = make_cards("a", "b", "c")
        drawn = draw_cards(pool, 2, forced_names=["a", "b", "c"])

        assert [c.name for c in drawn] == ["a", "b"]
        assert [c.name for c in pool] == ["c"]

    def test_drawn_cards_are_copies(self):
        pool = make_cards("a")
        original = pool[0]
        drawn = draw_cards(pool, 1)

        drawn[0].mark_acquired(3)
        assert drawn[0] is not original
        assert original.acquired_turn is None


def test_find_card() -> None:
    catalog = make_cards("a", "b")
    assert find_card(catalog, "b") is catalog[1]
    assert find_card(catalog, "z") is None


class TestTrainingPools:

    def test_pools_by_rarity(self):
        pools = TrainingPools(create_sample_catalog(), random.Random(0))

        assert len(pools[Rarity.N]) == 4
        assert len(pools[Rarity.R]) == 6
        assert len(pools[Rarity.SR]) == 5
        assert len(pools[Rarity.SSR]) == 4
        assert all(c.rarity == Rarity.SR for c in pools[Rarity.SR])

    def test_pools_do_not_share_catalog_cards(self):
        catalog = create_sample_catalog()
        pools = TrainingPools(catalog, random.Random(0))

        pools[Rarity.R][0].mark_acquired(1)
        assert all(c.acquired_turn is None for c in catalog)
        assert all(c.acquired_turn is None for c in pools.catalog)

    def test_starter_cards(self):
        pools = TrainingPools(create_sample_catalog(), random.Random(0))
        starters = pools.starter_cards()

        assert len(starters) == 8
        names = [c.name for c in starters]
        for name in ("チラシ配り", "電話応対", "授業準備", "経費精算"):
            assert names.count(name) == 2
        assert starters[0] is not starters[1]

    def test_shuffle_is_seeded(self):
        first = TrainingPools(create_sample_catalog(), random.Random(42))
        second = TrainingPools(create_sample_catalog(), random.Random(42))
        first.shuffle(Rarity.R)
        second.shuffle(Rarity.R)

        assert [c.name for c in first[Rarity.R]] == [c.name for c in second[Rarity.R]]

    def test_draw_unknown_rarity(self):
        pools = TrainingPools(create_sample_catalog(), random.Random(0))
        assert pools.draw("UR", 3) == []

    def test_draw_accepts_rarity_value(self):
        pools = TrainingPools(create_sample_catalog(), random.Random(0))
        drawn = pools.draw("SSR", 2)
        assert len(drawn) == 2
        assert len(pools[Rarity.SSR]) == 2

    def test_draw_exhausts_pool(self):
        pools = TrainingPools(create_sample_catalog(), random.Random(0))
        assert len(pools.draw(Rarity.R, 10)) == 6
        assert pools.draw(Rarity.R, 1) == []

    def test_replace_pools(self):
        pools = TrainingPools(create_sample_catalog(), random.Random(0))
        pools.replace_pools({Rarity.R: make_cards("a")})

        assert [c.name for c in pools[Rarity.R]] == ["a"]
        assert pools[Rarity.SR] == []
