"""Tests for the sample card catalog."""

from jukudeck.cards.examples import (
    create_rare_cards,
    create_sample_catalog,
    create_starter_cards,
    create_super_rare_cards,
    create_ultra_rare_cards,
)
from jukudeck.cards.parser import parse_effect
from jukudeck.cards.schema import TURN_CONFIGS, Rarity


def test_catalog_size_and_rarities() -> None:
    catalog = create_sample_catalog()

    assert len(catalog) == 19
    assert all(c.rarity == Rarity.N for c in create_starter_cards())
    assert all(c.rarity == Rarity.R for c in create_rare_cards())
    assert all(c.rarity == Rarity.SR for c in create_super_rare_cards())
    assert all(c.rarity == Rarity.SSR for c in create_ultra_rare_cards())


def test_names_unique() -> None:
    names = [c.name for c in create_sample_catalog()]
    assert len(names) == len(set(names))


def test_every_card_has_parsable_effect() -> None:
    for card in create_sample_catalog():
        ast = parse_effect(card.effect)
        assert ast.base_effects or ast.conditional_blocks, card.name


def test_every_training_rarity_has_cards() -> None:
    rarities = {c.rarity for c in create_sample_catalog()}
    assert {config.training_rarity for config in TURN_CONFIGS} <= rarities
