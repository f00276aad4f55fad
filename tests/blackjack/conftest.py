"""
Pytest fixtures for blackjack tests.

Games are played against stacked decks so every deal is known in advance.
"""

import logging
import random

import pytest

from cmdjack.blackjack.blackjack import BlackjackGame
from cmdjack.blackjack.rules import Rules
from cmdjack.common.io_interface import TestIOInterface

from deck_helpers import stacked


# Reset the package logger after each test
@pytest.fixture(scope="function", autouse=True)
def reset_package_logger():
    package_logger = logging.getLogger("cmdjack")
    yield
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_game():
    def _make_game(*ranks, chips=10, inputs=None, deck_factory=None):
        io_interface = TestIOInterface(inputs)
        return BlackjackGame(
            Rules(starting_chips=chips),
            io_interface,
            rng=random.Random(0),
            deck_factory=deck_factory or stacked(*ranks),
        )

    return _make_game
