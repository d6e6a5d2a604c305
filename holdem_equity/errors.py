"""Exceptions raised by the equity engine."""

from typing import Optional


class EquityError(Exception):
    """Base class for every error the engine raises."""


class InvalidRequestError(EquityError, ValueError):
    """The request cannot describe a legal hold'em deal."""


class InvalidCardError(InvalidRequestError):
    """A card token has an unknown rank or suit."""


class DuplicateCardError(InvalidRequestError):
    """The same card was assigned to more than one place."""

    def __init__(self, card, where: Optional[str] = None):
        self.card = card
        self.where = where
        message = f"Duplicate card: {card}"
        if where:
            message += f" ({where})"
        super().__init__(message)


class NoLegalCompletionsError(EquityError):
    """Aggregation finished without a single outcome to divide by."""


class CalculationCancelled(EquityError):
    """The caller cancelled the computation before it finished."""
