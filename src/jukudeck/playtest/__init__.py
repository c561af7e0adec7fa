"""Automated playtesting for the card game."""

from jukudeck.playtest.display import StateRenderer, format_card, format_stats
from jukudeck.playtest.session import PlaytestResult, PlaytestSession

__all__ = [
    "StateRenderer",
    "format_card",
    "format_stats",
    "PlaytestResult",
    "PlaytestSession",
]
