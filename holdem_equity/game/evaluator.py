"""
Seven-card hand evaluation using the treys library.

A hand rank is a category plus a tie-break tuple. Both compare naturally as
Python tuples, so ``max`` over HandRank values picks the best hand and equal
values are a split pot.
"""

from enum import Enum, IntEnum
from typing import NamedTuple, Sequence

from treys import Evaluator
from treys.lookup import LookupTable

from .cards import FULL_DECK, Card


class Category(IntEnum):
    """Hand categories, weakest first."""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


CATEGORY_NAMES = {
    Category.HIGH_CARD: "High Card",
    Category.PAIR: "Pair",
    Category.TWO_PAIR: "Two Pair",
    Category.THREE_OF_A_KIND: "Three of a Kind",
    Category.STRAIGHT: "Straight",
    Category.FLUSH: "Flush",
    Category.FULL_HOUSE: "Full House",
    Category.FOUR_OF_A_KIND: "Four of a Kind",
    Category.STRAIGHT_FLUSH: "Straight Flush",
}


class HandRank(NamedTuple):
    """Category plus tie-break values (highest significance first)."""
    category: Category
    tiebreak: tuple[int, ...]


class Outcome(Enum):
    """Result of comparing one hand against another."""
    WIN = "win"
    TIE = "tie"
    LOSS = "loss"


_evaluator = Evaluator()

# treys ranks run from 1 (royal flush) to 7462 (worst high card)
WORST_RANK = LookupTable.MAX_HIGH_CARD

_TREYS_CARDS = {card: card.to_treys() for card in FULL_DECK}


def _category(rank_class: int) -> Category:
    # treys classes: 0 royal flush (newer releases), 1 straight flush .. 9 high card
    return Category(min(Category.STRAIGHT_FLUSH, 9 - rank_class))


def evaluate(cards: Sequence[Card]) -> HandRank:
    """
    Rank the best five-card hand that can be made from 5 to 7 cards.

    Args:
        cards: 5, 6 or 7 distinct cards

    Returns:
        HandRank of the best five-card combination
    """
    if not 5 <= len(cards) <= 7:
        raise ValueError(f"Need 5 to 7 cards to evaluate, got {len(cards)}")

    encoded = [_TREYS_CARDS[card] for card in cards]
    rank = _evaluator.evaluate(encoded[:2], encoded[2:])
    return HandRank(
        _category(_evaluator.get_rank_class(rank)),
        (WORST_RANK + 1 - rank,),
    )


def compare(hand_a: HandRank, hand_b: HandRank) -> Outcome:
    """Compare two evaluated hands from hand_a's point of view."""
    if hand_a > hand_b:
        return Outcome.WIN
    if hand_a < hand_b:
        return Outcome.LOSS
    return Outcome.TIE


def describe(rank: HandRank) -> str:
    """Get the hand class (e.g., "Two Pair", "Flush")."""
    return CATEGORY_NAMES[rank.category]
