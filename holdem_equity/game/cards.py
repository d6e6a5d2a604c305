"""Card and deck representation utilities."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable

from treys import Card as TreysCard

from holdem_equity.errors import DuplicateCardError, InvalidCardError


class Rank(IntEnum):
    """Card ranks (2-14 where 14 is Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


class Suit(IntEnum):
    """Card suits."""
    CLUBS = 0
    DIAMONDS = 1
    HEARTS = 2
    SPADES = 3


# Mapping for string conversion
RANK_STR = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9",
    10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"
}
STR_RANK = {v: k for k, v in RANK_STR.items()}

SUIT_STR = {0: "c", 1: "d", 2: "h", 3: "s"}
STR_SUIT = {v: k for k, v in SUIT_STR.items()}


@dataclass(frozen=True, order=True)
class Card:
    """A playing card. Cards order by rank, then suit."""
    rank: int  # 2-14
    suit: int  # 0-3

    def __post_init__(self):
        if self.rank not in RANK_STR:
            raise InvalidCardError(f"Invalid rank: {self.rank}")
        if self.suit not in SUIT_STR:
            raise InvalidCardError(f"Invalid suit: {self.suit}")

    def __str__(self) -> str:
        return f"{RANK_STR[self.rank]}{SUIT_STR[self.suit]}"

    def __repr__(self) -> str:
        return str(self)

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', 'Th', '2c'."""
        if not isinstance(s, str) or len(s) != 2:
            raise InvalidCardError(f"Invalid card string: {s!r}")
        rank_char = s[0].upper()
        suit_char = s[1].lower()

        if rank_char not in STR_RANK:
            raise InvalidCardError(f"Invalid rank: {s[0]!r} in {s!r}")
        if suit_char not in STR_SUIT:
            raise InvalidCardError(f"Invalid suit: {s[1]!r} in {s!r}")

        return cls(rank=STR_RANK[rank_char], suit=STR_SUIT[suit_char])

    def to_treys(self) -> int:
        """Convert to treys library card format."""
        return TreysCard.new(str(self))


FULL_DECK: tuple[Card, ...] = tuple(
    Card(rank, suit)
    for rank in range(2, 15)
    for suit in range(4)
)


def parse_cards(text: str) -> list[Card]:
    """
    Parse a run of cards.

    Accepts concatenated ('AsKhTd') or separated ('As Kh Td', 'As,Kh')
    notation. An empty string yields an empty list.
    """
    compact = "".join(text.replace(",", " ").split())
    if len(compact) % 2:
        raise InvalidCardError(f"Invalid card run: {text!r}")
    return [Card.from_string(compact[i:i + 2]) for i in range(0, len(compact), 2)]


def coerce_cards(cards) -> list[Card]:
    """Accept a card string or an iterable of Cards / card strings."""
    if isinstance(cards, str):
        return parse_cards(cards)
    return [c if isinstance(c, Card) else Card.from_string(c) for c in cards]


def remaining_deck(known_cards: Iterable[Card]) -> tuple[Card, ...]:
    """
    Cards of the 52-card universe not present in known_cards.

    Raises:
        DuplicateCardError: if known_cards names any card twice
    """
    seen: set[Card] = set()
    for card in known_cards:
        if card in seen:
            raise DuplicateCardError(card)
        seen.add(card)
    return tuple(card for card in FULL_DECK if card not in seen)
