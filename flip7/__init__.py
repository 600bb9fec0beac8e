"""Top-level package for the Flip 7 rules engine."""

from . import cards, deck, match, rules, scoreboard, state, turn
from .match import MatchCoordinator

__all__ = [
    "MatchCoordinator",
    "cards",
    "deck",
    "match",
    "rules",
    "scoreboard",
    "state",
    "turn",
]
