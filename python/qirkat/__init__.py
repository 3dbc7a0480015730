"""Qirkat: board engine, minimax player and command-line game."""

from .ai import MinimaxAgent, MinimaxSearch, find_best_move, static_score
from .game.board import Board, BoardView
from .game.color import PieceColor
from .game.move import Move, parse_move

__all__ = [
    "Board",
    "BoardView",
    "MinimaxAgent",
    "MinimaxSearch",
    "Move",
    "PieceColor",
    "find_best_move",
    "parse_move",
    "static_score",
]
