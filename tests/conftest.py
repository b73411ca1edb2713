import random
from unittest.mock import Mock

import pytest

from wrapsnake.board import Board
from wrapsnake.snake import Snake


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def observer():
    return Mock()


@pytest.fixture
def board(rng, observer):
    """10x10 board with no food yet."""
    return Board(10, 10, observer=observer, rng=rng)


@pytest.fixture
def snake():
    return Snake()
