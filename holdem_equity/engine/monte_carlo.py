"""Monte Carlo sampling of completions."""

from typing import Iterator, Union

import numpy as np

from .models import Completion, SlotLayout

SeedLike = Union[int, np.random.SeedSequence, None]


class MonteCarloSampler:
    """
    Finite stream of uniformly random completions.

    Every trial takes the leading cards of an independent uniform
    permutation of the remaining deck: first the missing board cards, then
    each player's missing hole cards in seat order. Draws are without
    replacement, so no card repeats within a completion and every legal
    completion is equally likely.

    The random generator is built from the seed on every iter(), so a
    sampler with a fixed seed replays the same completions each time.
    """

    def __init__(
        self,
        layout: SlotLayout,
        trials: int,
        seed: SeedLike = None,
        batch_size: int = 10_000,
    ):
        if trials < 1:
            raise ValueError(f"trials must be at least 1, got {trials}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.layout = layout
        self.trials = trials
        self.seed = seed
        self.batch_size = batch_size

        # Column ranges of a draw row belonging to each seat
        self._seat_slices = []
        start = layout.board_missing
        for missing in layout.hole_missing:
            self._seat_slices.append((start, start + missing))
            start += missing

    def __len__(self) -> int:
        return self.trials

    def __iter__(self) -> Iterator[Completion]:
        return self._generate(np.random.default_rng(self.seed))

    def _generate(self, rng: np.random.Generator) -> Iterator[Completion]:
        layout = self.layout
        deck = layout.deck
        needed = layout.cards_missing
        board_missing = layout.board_missing
        order = np.arange(len(deck))

        remaining = self.trials
        while remaining > 0:
            size = min(self.batch_size, remaining)
            draws = rng.permuted(np.tile(order, (size, 1)), axis=1)[:, :needed]
            for row in draws.tolist():
                board = layout.board + tuple(deck[i] for i in row[:board_missing])
                holes = tuple(
                    known + tuple(deck[i] for i in row[start:stop])
                    for known, (start, stop) in zip(layout.holes, self._seat_slices)
                )
                yield Completion(board, holes)
            remaining -= size
