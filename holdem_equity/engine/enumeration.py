"""Exhaustive enumeration of every completion of a deal."""

import itertools
import math
from typing import Iterator

from holdem_equity.game.cards import Card
from .models import Completion, SlotLayout


def count_completions(layout: SlotLayout) -> int:
    """
    Number of distinct completions of a layout.

    The board is drawn first, then each player's missing hole cards in seat
    order from what is left. Players are distinguishable, so swapping two
    unknown hands counts as a different completion.
    """
    available = len(layout.deck)
    total = math.comb(available, layout.board_missing)
    available -= layout.board_missing
    for missing in layout.hole_missing:
        total *= math.comb(available, missing)
        available -= missing
    return total


def _without(deck: tuple[Card, ...], used: tuple[Card, ...]) -> tuple[Card, ...]:
    if not used:
        return deck
    used = set(used)
    return tuple(card for card in deck if card not in used)


class Enumeration:
    """
    Lazy, restartable stream over every completion of a layout.

    Each call to iter() starts again from the first completion; the order
    is deterministic (lexicographic over the deck order).

    Sharding splits the outermost dealing level: the board draw, or the
    first missing hole when the board is complete. Shard `shard` of `shards`
    keeps every `shards`-th branch of that level starting at `shard`, and
    only ever builds completions under its own branches.
    """

    def __init__(self, layout: SlotLayout, shard: int = 0, shards: int = 1):
        if shards < 1 or not 0 <= shard < shards:
            raise ValueError(f"Invalid shard {shard} of {shards}")
        self.layout = layout
        self.shard = shard
        self.shards = shards
        self.size = count_completions(layout)
        self._missing = layout.hole_missing

        # Seat whose draw is sharded; None shards the board draw
        self._split_seat = None
        drawn = layout.board_missing
        if not drawn:
            for seat, missing in enumerate(self._missing):
                if missing:
                    self._split_seat, drawn = seat, missing
                    break
        self._branches = math.comb(len(layout.deck), drawn)

    def __len__(self) -> int:
        if self.shard >= self._branches:
            return 0
        mine = (self._branches - self.shard + self.shards - 1) // self.shards
        return mine * (self.size // self._branches)

    def __iter__(self) -> Iterator[Completion]:
        return self._generate()

    def _stride(self, branches: Iterator) -> Iterator:
        if self.shards == 1:
            return branches
        return itertools.islice(branches, self.shard, None, self.shards)

    def _generate(self) -> Iterator[Completion]:
        layout = self.layout
        boards = itertools.combinations(layout.deck, layout.board_missing)
        if self._split_seat is None:
            boards = self._stride(boards)
        for extra in boards:
            board = layout.board + extra
            rest = _without(layout.deck, extra)
            for holes in self._deal(rest, 0):
                yield Completion(board, holes)

    def _deal(self, deck: tuple[Card, ...], seat: int) -> Iterator[tuple]:
        """Every assignment of missing hole cards from `seat` onwards."""
        holes = self.layout.holes
        if seat == len(holes):
            yield ()
            return
        drawn_options = itertools.combinations(deck, self._missing[seat])
        if seat == self._split_seat:
            drawn_options = self._stride(drawn_options)
        for drawn in drawn_options:
            hole = holes[seat] + drawn
            rest = _without(deck, drawn)
            for tail in self._deal(rest, seat + 1):
                yield (hole,) + tail
