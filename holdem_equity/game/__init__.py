"""Card and hand evaluation module."""

from .cards import Card, Rank, Suit, FULL_DECK, parse_cards, remaining_deck
from .evaluator import Category, HandRank, Outcome, evaluate, compare, describe

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "FULL_DECK",
    "parse_cards",
    "remaining_deck",
    "Category",
    "HandRank",
    "Outcome",
    "evaluate",
    "compare",
    "describe",
]
