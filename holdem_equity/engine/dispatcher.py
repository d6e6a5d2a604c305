"""
Equity computation entry point.

compute() sizes the exact space of a request, enumerates it when it is at
or below the tractability threshold and otherwise falls back to Monte
Carlo sampling.
"""

import itertools
import logging
from typing import Optional

import numpy as np

from holdem_equity.config import EquityConfig
from .aggregator import Tally, aggregate
from .enumeration import Enumeration, count_completions
from .models import EquityRequest, EquityResult, Mode, SlotLayout
from .monte_carlo import MonteCarloSampler
from .parallel import enumerate_parallel, sample_parallel

logger = logging.getLogger(__name__)


def compute(
    request: EquityRequest,
    config: Optional[EquityConfig] = None,
    cancel=None,
) -> EquityResult:
    """
    Compute every player's showdown equity.

    Args:
        request: Known cards and unknown player count
        config: Engine configuration (defaults if omitted)
        cancel: Optional flag with is_set() (e.g. threading.Event)

    Returns:
        EquityResult, exact or sampled

    Raises:
        InvalidRequestError: if the request is not a legal deal
        CalculationCancelled: if cancel was set before completion
    """
    config = config or EquityConfig()
    layout = SlotLayout.from_request(request)
    space_size = count_completions(layout)

    threshold = request.exact_threshold
    if threshold is None:
        threshold = config.exact_threshold

    if space_size <= threshold:
        logger.info(
            f"Enumerating {space_size} completions for {layout.num_players} players"
        )
        tally = _run_exact(layout, config, cancel)
        return tally.to_result(Mode.EXACT, space_size)

    trials = request.trials if request.trials is not None else config.trials
    seed = request.seed if request.seed is not None else config.seed
    if seed is None:
        seed = np.random.SeedSequence().entropy

    logger.info(
        f"Space of {space_size} completions exceeds threshold {threshold}; "
        f"sampling {trials} trials (seed={seed})"
    )
    tally = _run_sampled(layout, trials, seed, config, cancel)
    return tally.to_result(Mode.SAMPLED, space_size, trials=tally.total, seed=seed)


def _run_exact(layout: SlotLayout, config: EquityConfig, cancel) -> Tally:
    if config.workers > 1:
        return enumerate_parallel(layout, config.workers, cancel)
    return aggregate(
        Enumeration(layout), layout.num_players, cancel, check_every=config.chunk_size
    )


def _run_sampled(
    layout: SlotLayout,
    trials: int,
    seed: int,
    config: EquityConfig,
    cancel,
) -> Tally:
    if config.workers > 1:
        return sample_parallel(
            layout, trials, seed, config.workers, config.chunk_size, cancel
        )

    sampler = MonteCarloSampler(layout, trials, seed, batch_size=config.chunk_size)
    if config.convergence_tolerance is None:
        return aggregate(
            sampler, layout.num_players, cancel, check_every=config.chunk_size
        )

    stream = iter(sampler)
    tally = Tally(layout.num_players)
    while tally.total < trials:
        chunk = itertools.islice(stream, config.chunk_size)
        tally = tally.merge(aggregate(chunk, layout.num_players, cancel))
        if (
            tally.total >= config.min_trials
            and tally.max_standard_error() <= config.convergence_tolerance
        ):
            logger.debug(
                f"Converged after {tally.total} trials "
                f"(tolerance {config.convergence_tolerance})"
            )
            break
    return tally


class EquityCalculator:
    """
    Equity calculations with a fixed configuration.

    Supports exact enumeration for small cases and
    Monte Carlo simulation for larger ones.
    """

    def __init__(self, config: Optional[EquityConfig] = None):
        self.config = config or EquityConfig()

    def compute(self, request: EquityRequest, cancel=None) -> EquityResult:
        return compute(request, self.config, cancel)

    def hand_vs_hand(
        self,
        hand1,
        hand2,
        board=(),
        num_simulations: Optional[int] = None,
        seed: Optional[int] = None,
    ) -> tuple[float, float, float]:
        """
        Calculate equity of hand1 vs hand2 on a board.

        Args:
            hand1: First hand (e.g. 'AsAh' or a list of Cards)
            hand2: Second hand
            board: Board cards (0-5)
            num_simulations: Trials if the spot has to be sampled
            seed: Seed if the spot has to be sampled

        Returns:
            Tuple of (hand1_equity, hand2_equity, tie_frequency)
        """
        request = EquityRequest.from_strings(
            [hand1, hand2], board, trials=num_simulations, seed=seed
        )
        result = self.compute(request)
        first, second = result.players
        return first.equity, second.equity, first.ties / first.total


def calculate_equity(
    hand,
    board=(),
    num_opponents: int = 1,
    num_simulations: int = 10000,
    seed: Optional[int] = None,
) -> float:
    """
    Calculate hand equity against random opponent(s).

    Args:
        hand: Hero's hand
        board: Board cards
        num_opponents: Number of opponents
        num_simulations: Number of simulations when the spot is sampled
        seed: Seed when the spot is sampled

    Returns:
        Equity (0-1)
    """
    request = EquityRequest.from_strings(
        [hand], board, unknown_players=num_opponents,
        trials=num_simulations, seed=seed,
    )
    return compute(request).players[0].equity
