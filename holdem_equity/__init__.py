"""
holdem_equity: Texas Hold'em showdown equity engine

Computes each player's win, tie and loss probability from known hole
cards, a partial board and any number of players with unknown cards,
by exact enumeration when the deal is small enough and seeded Monte
Carlo sampling otherwise.
"""

__version__ = "0.1.0"

from .config import EquityConfig
from .engine import (
    EquityCalculator,
    EquityRequest,
    EquityResult,
    Mode,
    PlayerEquity,
    calculate_equity,
    compute,
)
from .errors import (
    CalculationCancelled,
    DuplicateCardError,
    EquityError,
    InvalidCardError,
    InvalidRequestError,
    NoLegalCompletionsError,
)

__all__ = [
    "EquityConfig",
    "EquityCalculator",
    "EquityRequest",
    "EquityResult",
    "Mode",
    "PlayerEquity",
    "calculate_equity",
    "compute",
    "CalculationCancelled",
    "DuplicateCardError",
    "EquityError",
    "InvalidCardError",
    "InvalidRequestError",
    "NoLegalCompletionsError",
]
