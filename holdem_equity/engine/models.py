"""Data models for equity requests and results."""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Sequence

from holdem_equity.errors import DuplicateCardError, InvalidRequestError
from holdem_equity.game.cards import Card, coerce_cards, remaining_deck

BOARD_SIZE = 5
HOLE_SIZE = 2
DECK_SIZE = 52


class Mode(Enum):
    """How a result was produced."""
    EXACT = "exact"
    SAMPLED = "sampled"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class EquityRequest:
    """
    A single equity question.

    hands holds the known hole cards of each seated player (0, 1 or 2 each,
    as Cards or card strings);
    unknown_players adds that many players with no known cards after them.
    The optional overrides take precedence over the engine configuration.
    """
    hands: tuple[tuple[Card, ...], ...]
    board: tuple[Card, ...] = ()
    unknown_players: int = 0
    seed: Optional[int] = None
    trials: Optional[int] = None
    exact_threshold: Optional[int] = None

    @classmethod
    def from_strings(
        cls,
        hands: Sequence,
        board="",
        unknown_players: int = 0,
        seed: Optional[int] = None,
        trials: Optional[int] = None,
        exact_threshold: Optional[int] = None,
    ) -> "EquityRequest":
        """
        Build a request from card strings.

        Examples:
            EquityRequest.from_strings(["AsAh", "KdKc"])
            EquityRequest.from_strings(["AsKs", "Qh", ""], board="Ts9s2d")
        """
        return cls(
            hands=tuple(tuple(coerce_cards(h)) for h in hands),
            board=tuple(coerce_cards(board)),
            unknown_players=unknown_players,
            seed=seed,
            trials=trials,
            exact_threshold=exact_threshold,
        )

    @property
    def num_players(self) -> int:
        return len(self.hands) + self.unknown_players


@dataclass(frozen=True)
class SlotLayout:
    """
    Known cards of a validated request and the slots still to be dealt.

    holes has one entry per player, unknown players included as ().
    deck is every card not already on the board or in a hand, in deck order.
    """
    board: tuple[Card, ...]
    holes: tuple[tuple[Card, ...], ...]
    deck: tuple[Card, ...]

    @classmethod
    def from_request(cls, request: EquityRequest) -> "SlotLayout":
        """
        Validate a request and derive its layout.

        Raises:
            InvalidRequestError: on any structural problem
            InvalidCardError: if a card is malformed
            DuplicateCardError: if a card appears twice anywhere
        """
        board = tuple(coerce_cards(request.board))
        hands = tuple(tuple(coerce_cards(hand)) for hand in request.hands)

        if len(board) > BOARD_SIZE:
            raise InvalidRequestError(
                f"Board has {len(board)} cards, at most {BOARD_SIZE} allowed"
            )
        for i, hand in enumerate(hands):
            if len(hand) > HOLE_SIZE:
                raise InvalidRequestError(
                    f"Player {i} has {len(hand)} hole cards, at most {HOLE_SIZE} allowed"
                )
        if request.unknown_players < 0:
            raise InvalidRequestError("unknown_players must be non-negative")
        if request.trials is not None and request.trials < 1:
            raise InvalidRequestError(
                f"trials must be at least 1, got {request.trials}"
            )
        if request.exact_threshold is not None and request.exact_threshold < 0:
            raise InvalidRequestError(
                f"exact_threshold must be non-negative, got {request.exact_threshold}"
            )
        if request.num_players < 2:
            raise InvalidRequestError(
                f"Need at least 2 players, got {request.num_players}"
            )

        needed = BOARD_SIZE + HOLE_SIZE * request.num_players
        if needed > DECK_SIZE:
            raise InvalidRequestError(
                f"{request.num_players} players need {needed} cards, "
                f"the deck only holds {DECK_SIZE}"
            )

        owners: dict[Card, str] = {}
        for card in board:
            _claim(owners, card, "board")
        for i, hand in enumerate(hands):
            for card in hand:
                _claim(owners, card, f"player {i}")

        holes = hands + ((),) * request.unknown_players

        return cls(
            board=board,
            holes=holes,
            deck=remaining_deck(owners),
        )

    @property
    def num_players(self) -> int:
        return len(self.holes)

    @property
    def board_missing(self) -> int:
        return BOARD_SIZE - len(self.board)

    @property
    def hole_missing(self) -> tuple[int, ...]:
        return tuple(HOLE_SIZE - len(h) for h in self.holes)

    @property
    def cards_missing(self) -> int:
        return self.board_missing + sum(self.hole_missing)


def _claim(owners: dict, card: Card, owner: str) -> None:
    if card in owners:
        previous = owners[card]
        where = previous if previous == owner else f"{previous} and {owner}"
        raise DuplicateCardError(card, where)
    owners[card] = owner


class Completion(NamedTuple):
    """
    One concrete deal of every unknown card.

    board is the full five-card board and holes the full two-card hand of
    each player, known cards included.
    """
    board: tuple[Card, ...]
    holes: tuple[tuple[Card, ...], ...]

    def cards(self) -> list[Card]:
        """Every card dealt in this completion."""
        dealt = list(self.board)
        for hole in self.holes:
            dealt.extend(hole)
        return dealt

    def __repr__(self) -> str:
        board = "".join(str(c) for c in self.board)
        holes = " ".join("".join(str(c) for c in h) for h in self.holes)
        return f"Completion({board} | {holes})"


@dataclass
class PlayerEquity:
    """Showdown statistics for one player."""
    wins: int
    ties: int
    losses: int
    total: int
    equity: float  # 0-1, split pots counted fractionally

    @property
    def percentage(self) -> float:
        return self.equity * 100

    @property
    def win_pct(self) -> float:
        return self.wins / self.total * 100

    @property
    def tie_pct(self) -> float:
        return self.ties / self.total * 100

    @property
    def loss_pct(self) -> float:
        return self.losses / self.total * 100

    def __repr__(self) -> str:
        return (
            f"PlayerEquity({self.percentage:.2f}%: W {self.wins} "
            f"T {self.ties} L {self.losses} / {self.total})"
        )


@dataclass
class EquityResult:
    """Per-player equity plus how it was computed."""
    players: list[PlayerEquity]
    mode: Mode
    space_size: int                 # Distinct completions of the exact space
    trials: Optional[int] = None    # Samples actually run (sampled mode only)
    seed: Optional[int] = None      # Seed that reproduces a sampled result

    @property
    def equities(self) -> list[float]:
        return [p.equity for p in self.players]

    @property
    def is_exact(self) -> bool:
        return self.mode is Mode.EXACT
