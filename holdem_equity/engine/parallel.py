"""
Parallel equity computation.

The completion stream is cut into independent shards, each tallied in its
own process. Tallies are merged by addition, so the order in which shards
finish never changes the result.
"""

import logging
import multiprocessing as mp

import numpy as np

from holdem_equity.errors import CalculationCancelled
from .aggregator import Tally, aggregate
from .enumeration import Enumeration
from .models import Mode, SlotLayout
from .monte_carlo import MonteCarloSampler

logger = logging.getLogger(__name__)

# Shards per worker; more shards means more frequent cancellation checks
SHARDS_PER_WORKER = 4


def _run_shard(args) -> Tally:
    """
    Worker function to tally one shard.

    This runs in a separate process.

    Args:
        args: Tuple of (layout, mode, shard, shards, trials, seed, batch_size)
    """
    layout, mode, shard, shards, trials, seed, batch_size = args
    if mode is Mode.EXACT:
        completions = Enumeration(layout, shard=shard, shards=shards)
    else:
        completions = MonteCarloSampler(layout, trials, seed, batch_size=batch_size)
    return aggregate(completions, layout.num_players)


def _map_reduce(layout: SlotLayout, work_args: list, workers: int, cancel=None) -> Tally:
    if cancel is not None and cancel.is_set():
        raise CalculationCancelled("Cancelled before start")

    tally = Tally(layout.num_players)
    with mp.Pool(processes=workers) as pool:
        for done, partial in enumerate(pool.imap_unordered(_run_shard, work_args), 1):
            tally = tally.merge(partial)
            if cancel is not None and cancel.is_set():
                # Leaving the with block terminates outstanding shards
                logger.info(f"Cancelled after {done}/{len(work_args)} shards")
                raise CalculationCancelled(
                    f"Cancelled after {done} of {len(work_args)} shards"
                )
    return tally


def enumerate_parallel(layout: SlotLayout, workers: int, cancel=None) -> Tally:
    """Tally every completion of a layout using `workers` processes."""
    shards = workers * SHARDS_PER_WORKER
    work_args = [
        (layout, Mode.EXACT, shard, shards, None, None, None)
        for shard in range(shards)
    ]
    logger.info(f"Enumerating with {workers} workers over {shards} shards")
    return _map_reduce(layout, work_args, workers, cancel)


def sample_parallel(
    layout: SlotLayout,
    trials: int,
    seed: int,
    workers: int,
    batch_size: int = 10_000,
    cancel=None,
) -> Tally:
    """
    Tally `trials` sampled completions using `workers` processes.

    Each shard draws from its own child of SeedSequence(seed), so results
    are reproducible for a fixed seed, trial count and worker count.
    """
    shards = min(workers * SHARDS_PER_WORKER, trials)
    base, extra = divmod(trials, shards)
    children = np.random.SeedSequence(seed).spawn(shards)

    work_args = [
        (layout, Mode.SAMPLED, shard, shards, base + (shard < extra), child, batch_size)
        for shard, child in enumerate(children)
    ]
    logger.info(f"Sampling {trials} trials with {workers} workers over {shards} shards")
    return _map_reduce(layout, work_args, workers, cancel)
