"""Showdown tallies and their reduction into equity."""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

import numpy as np

from holdem_equity.errors import CalculationCancelled, NoLegalCompletionsError
from holdem_equity.game.evaluator import HandRank, evaluate
from .models import Completion, EquityResult, Mode, PlayerEquity


@dataclass
class Tally:
    """
    Win/tie/loss counts for every player over some set of completions.

    Ties are counted per split size (splits[seat][k] is the number of
    completions where the player shared the pot k ways), so a tally holds
    only integers and merging tallies is exact, commutative and associative.
    """
    num_players: int
    wins: list[int] = field(default_factory=list)
    losses: list[int] = field(default_factory=list)
    splits: list[dict[int, int]] = field(default_factory=list)
    total: int = 0

    def __post_init__(self):
        if not self.wins:
            self.wins = [0] * self.num_players
        if not self.losses:
            self.losses = [0] * self.num_players
        if not self.splits:
            self.splits = [{} for _ in range(self.num_players)]

    def record(self, ranks: Sequence[HandRank]) -> None:
        """Add one showdown given every player's hand rank."""
        best = max(ranks)
        winners = [seat for seat, rank in enumerate(ranks) if rank == best]
        if len(winners) == 1:
            self.wins[winners[0]] += 1
        else:
            k = len(winners)
            for seat in winners:
                split = self.splits[seat]
                split[k] = split.get(k, 0) + 1
        for seat, rank in enumerate(ranks):
            if rank != best:
                self.losses[seat] += 1
        self.total += 1

    def merge(self, other: "Tally") -> "Tally":
        """Sum of two tallies over disjoint sets of completions."""
        if other.num_players != self.num_players:
            raise ValueError(
                f"Cannot merge tallies for {self.num_players} and "
                f"{other.num_players} players"
            )
        splits = []
        for mine, theirs in zip(self.splits, other.splits):
            combined = dict(mine)
            for k, count in theirs.items():
                combined[k] = combined.get(k, 0) + count
            splits.append(combined)
        return Tally(
            num_players=self.num_players,
            wins=[a + b for a, b in zip(self.wins, other.wins)],
            losses=[a + b for a, b in zip(self.losses, other.losses)],
            splits=splits,
            total=self.total + other.total,
        )

    __add__ = merge

    def ties(self, seat: int) -> int:
        return sum(self.splits[seat].values())

    def equity(self, seat: int) -> float:
        """Pot share of a seat, split pots counted as 1/k each."""
        if self.total == 0:
            raise NoLegalCompletionsError("No legal completions were evaluated")
        share = sum(count / k for k, count in sorted(self.splits[seat].items()))
        return (self.wins[seat] + share) / self.total

    def max_standard_error(self) -> float:
        """
        Largest standard error of any player's equity estimate.

        Uses the Agresti-Coull adjustment (two pseudo-successes and two
        pseudo-failures), so an outcome that has not been sampled yet still
        carries a non-zero error.
        """
        if self.total == 0:
            raise NoLegalCompletionsError("No legal completions were evaluated")
        n = self.total + 4
        shares = np.array([self.equity(seat) for seat in range(self.num_players)])
        p = (shares * self.total + 2) / n
        return float(np.sqrt(p * (1 - p) / n).max())

    def to_result(
        self,
        mode: Mode,
        space_size: int,
        trials: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> EquityResult:
        """
        Convert counts into an EquityResult.

        Raises:
            NoLegalCompletionsError: if nothing was tallied
        """
        if self.total == 0:
            raise NoLegalCompletionsError("No legal completions were evaluated")
        players = [
            PlayerEquity(
                wins=self.wins[seat],
                ties=self.ties(seat),
                losses=self.losses[seat],
                total=self.total,
                equity=self.equity(seat),
            )
            for seat in range(self.num_players)
        ]
        return EquityResult(
            players=players,
            mode=mode,
            space_size=space_size,
            trials=trials,
            seed=seed,
        )


def aggregate(
    completions: Iterable[Completion],
    num_players: int,
    cancel=None,
    check_every: int = 10_000,
) -> Tally:
    """
    Evaluate every player's hand for each completion and tally the showdowns.

    Args:
        completions: Completions to evaluate
        num_players: Players in every completion
        cancel: Optional flag with is_set(), polled every check_every completions
        check_every: Completions between cancellation checks

    Returns:
        Tally over the given completions

    Raises:
        CalculationCancelled: if the flag is set while running
    """
    tally = Tally(num_players)
    if cancel is not None and cancel.is_set():
        raise CalculationCancelled("Cancelled before start")

    for n, completion in enumerate(completions, 1):
        board = completion.board
        tally.record([evaluate(board + hole) for hole in completion.holes])
        if cancel is not None and n % check_every == 0 and cancel.is_set():
            raise CalculationCancelled(f"Cancelled after {n} completions")
    return tally
