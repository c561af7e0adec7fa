"""Game rules: stats, effects, decks and the turn state machine."""
