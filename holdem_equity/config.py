"""Engine configuration."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class EquityConfig:
    """Configuration for the equity engine."""
    exact_threshold: int = 200_000   # Max completions enumerated exactly
    trials: int = 100_000            # Monte Carlo trials when sampling
    seed: Optional[int] = None       # None draws fresh entropy per request
    workers: int = 1                 # Processes (1 = run in the caller)
    chunk_size: int = 10_000         # Completions between cancellation checks

    # Optional early stop for sampling: largest per-player standard error
    convergence_tolerance: Optional[float] = None
    min_trials: int = 1_000

    def __post_init__(self):
        if self.exact_threshold < 0:
            raise ValueError("exact_threshold must be non-negative")
        if self.trials < 1:
            raise ValueError("trials must be at least 1")
        if self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")
        if self.convergence_tolerance is not None:
            if self.convergence_tolerance <= 0:
                raise ValueError("convergence_tolerance must be positive")
            if self.workers > 1:
                raise ValueError("convergence_tolerance requires workers=1")
        if self.min_trials < 1:
            raise ValueError("min_trials must be at least 1")
