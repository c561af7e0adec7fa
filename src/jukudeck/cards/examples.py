"""Example card catalog for testing and the playtest CLI."""

from typing import List

from jukudeck.cards.schema import Card, Category, Rarity


def _card(category: Category, rarity: Rarity, name: str, top: str, effect: str) -> Card:
    return Card(category=category, rarity=rarity, name=name, top_effect=top, effect=effect)


def create_starter_cards() -> List[Card]:
    """N-rarity basics; every player starts with two copies of each."""
    return [
        _card(Category.MOBILIZATION, Rarity.N, "チラシ配り", "体験+1", "体験+1。"),
        _card(Category.RECEPTION, Rarity.N, "電話応対", "満足+1", "満足+1。"),
        _card(Category.ACADEMIC, Rarity.N, "授業準備", "入塾+1", "入塾+1。"),
        _card(Category.GENERAL_AFFAIRS, Rarity.N, "経費精算", "経理+1", "経理+1。"),
    ]


def create_rare_cards() -> List[Card]:
    return [
        _card(Category.MOBILIZATION, Rarity.R, "体験授業", "体験+2", "【講師】体験+2。"),
        _card(
            Category.RECEPTION, Rarity.R, "保護者面談", "満足+2",
            "【室長・講師】満足+2、〈満足8以上〉入塾+1。",
        ),
        _card(Category.ACADEMIC, Rarity.R, "教材研究", "入塾+1", "入塾+1、〈講師〉入塾+1。"),
        _card(Category.GENERAL_AFFAIRS, Rarity.R, "備品整理", "経理+2", "経理+2、満足-1。"),
        _card(Category.MOBILIZATION, Rarity.R, "学校前配布", "体験+2", "体験+2、経理-1。"),
        _card(Category.RECEPTION, Rarity.R, "自習室開放", "満足+1", "満足+1、〈事務〉満足+1。"),
    ]


def create_super_rare_cards() -> List[Card]:
    return [
        _card(
            Category.RECEPTION, Rarity.SR, "満足度アンケート", "満足+2",
            "【室長】満足+2、〈満足8以上〉経理+1。",
        ),
        _card(Category.GENERAL_AFFAIRS, Rarity.SR, "予算見直し", "経理14", "経理を14にする。"),
        _card(
            Category.ACADEMIC, Rarity.SR, "個別指導", "入塾+2",
            "【講師】入塾+2、〈入塾3以下〉入塾+1。",
        ),
        _card(
            Category.MOBILIZATION, Rarity.SR, "紹介キャンペーン", "体験+3",
            "体験+3、〈満足10以上〉体験+2。",
        ),
        _card(Category.RECEPTION, Rarity.SR, "季節講習案内", "体験+1 満足+1", "体験+1、満足+1。"),
    ]


def create_ultra_rare_cards() -> List[Card]:
    return [
        _card(
            Category.ACADEMIC, Rarity.SSR, "合格実績掲示", "体験+2 入塾+2",
            "体験+2、入塾+2、〈室長〉満足+2。",
        ),
        _card(
            Category.GENERAL_AFFAIRS, Rarity.SSR, "経営改善", "経理10",
            "【室長・事務】経理を10にする、満足+1。",
        ),
        _card(
            Category.RECEPTION, Rarity.SSR, "特別説明会", "体験+1",
            "〈事務〉経理+2。〈満足5以下〉満足+3。体験+1。",
        ),
        _card(
            Category.MOBILIZATION, Rarity.SSR, "地域イベント", "体験+4",
            "体験+4、満足-1、〈経理5以上〉経理-2、満足+2。",
        ),
    ]


def create_sample_catalog() -> List[Card]:
    """Full sample catalog, ordered N, R, SR, SSR."""
    return (
        create_starter_cards()
        + create_rare_cards()
        + create_super_rare_cards()
        + create_ultra_rare_cards()
    )
