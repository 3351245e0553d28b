"""Shared fixtures for the Stickochet test suite.

Boards are written as ASCII layouts (see ``stickochet.board``):
    # = wall   . = empty   ~ = goop   c = checkpoint   x = collected   G = goal
"""

import random

import pytest

from stickochet.board import Board
from stickochet.generator import GeneratorConfig


@pytest.fixture
def make_board():
    """Factory: build a Board from a multi-line ASCII layout."""
    def _make(layout: str) -> Board:
        return Board.from_rows([line.strip() for line in layout.strip().splitlines()])
    return _make


@pytest.fixture
def open_board(make_board):
    """5x5 board with walls only on the border."""
    return make_board("""
        #####
        #...#
        #...#
        #...#
        #####
    """)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def small_config():
    return GeneratorConfig(width=7, height=7)
