"""Shared fixtures for the Qirkat tests."""

import pytest

from qirkat.game.board import Board
from qirkat.game.color import PieceColor


INIT_BOARD = "  b b b b b\n  b b b b b\n  b b - w w\n  w w w w w\n  w w w w w"

INIT_BOARD_EDGED = (
    "  5 b b b b b\n  4 b b b b b\n  3 b b - w w\n"
    "  2 w w w w w\n  1 w w w w w\n    a b c d e"
)

GAME1 = ["c2-c3", "c4-c2", "c1-c3", "a3-c1", "c3-a3", "c5-c4", "a3-c5-c3"]

GAME1_BOARD = "  b b - b b\n  b - - b b\n  - - w w w\n  w - - w w\n  w w b w w"


@pytest.fixture
def initial_board():
    """Board in the starting position, white to move."""
    return Board()


@pytest.fixture
def board_from():
    """Factory building a board from a 25-character description."""

    def _make(text, next_move=PieceColor.WHITE):
        board = Board()
        board.set_pieces(text, next_move)
        return board

    return _make
