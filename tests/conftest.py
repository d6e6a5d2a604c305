"""Pytest configuration and fixtures."""

import threading

import pytest

from holdem_equity.game.cards import parse_cards


@pytest.fixture
def board_flop():
    return parse_cards("Ks7d2c")


@pytest.fixture
def board_river():
    return parse_cards("Ks7d2c9h3s")


@pytest.fixture
def cancel_event():
    """A cancellation flag that is already set."""
    event = threading.Event()
    event.set()
    return event
