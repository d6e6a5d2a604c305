"""Equity engine module."""

from .models import Completion, EquityRequest, EquityResult, Mode, PlayerEquity, SlotLayout
from .enumeration import Enumeration, count_completions
from .monte_carlo import MonteCarloSampler
from .aggregator import Tally, aggregate
from .dispatcher import EquityCalculator, calculate_equity, compute

__all__ = [
    "Completion",
    "EquityRequest",
    "EquityResult",
    "Mode",
    "PlayerEquity",
    "SlotLayout",
    "Enumeration",
    "count_completions",
    "MonteCarloSampler",
    "Tally",
    "aggregate",
    "EquityCalculator",
    "calculate_equity",
    "compute",
]
