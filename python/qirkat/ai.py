from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from .adjacency import MAX_INDEX
from .game.board import Board, BoardView
from .game.color import PieceColor
from .game.move import Move


LOG = logging.getLogger("qirkat.ai")

Score = int

# Maximum minimax depth before falling back to the static evaluation.
MAX_DEPTH = 8
# Magnitude of a won position: positive when white wins.
WINNING_VALUE: Score = 2**31 - 2
INFTY: Score = 2**31 - 1


class SearchError(RuntimeError):
    pass


def sense_for(player: PieceColor) -> int:
    return 1 if player is PieceColor.WHITE else -1


def static_score(board: Board) -> Score:
    """Heuristic value of ``board``; positive favours white.

    Material dominates. Each white piece adds its distance from the last
    square and each black piece its own index, weighted a tenth as much.
    """

    if board.game_over:
        # The side to move has nothing left to play.
        return -WINNING_VALUE if board.whose_move is PieceColor.WHITE else WINNING_VALUE

    white = black = 0
    white_advance = black_advance = 0
    size = MAX_INDEX + 1
    for k in range(size):
        cell = board.get(k)
        if cell is PieceColor.WHITE:
            white += 1
            white_advance += size - k
        elif cell is PieceColor.BLACK:
            black += 1
            black_advance += k
    return (white - black) * 1000 + (white_advance - black_advance) * 100


class MinimaxSearch:
    """Alpha-beta search over a private copy of the board."""

    def __init__(self, depth: int = MAX_DEPTH) -> None:
        self.depth = depth
        self.nodes = 0

    def find_best_move(self, board: Board | BoardView, sense: int) -> Move:
        # Top-level entry; the caller's board is never touched
        if board.game_over:
            raise SearchError("no legal moves on a finished board")

        scratch = Board(board)
        self.nodes = 0
        value, best = self._minimax(scratch, self.depth, sense, -INFTY, INFTY)
        if best is None:
            raise SearchError("search produced no move")
        LOG.debug("Best move %s with value %d after %d nodes", best, value, self.nodes)
        return best

    def search(self, board: Board, depth: int, sense: int, alpha: Score, beta: Score) -> Score:
        value, _ = self._minimax(board, depth, sense, alpha, beta)
        return value

    def _minimax(
        self,
        board: Board,
        depth: int,
        sense: int,
        alpha: Score,
        beta: Score,
    ) -> Tuple[Score, Optional[Move]]:
        # Depth-limited minimax core; ties go to the later move
        self.nodes += 1
        if depth == 0 or board.game_over:
            return static_score(board), None

        best: Optional[Move] = None
        if sense == 1:
            best_value = -INFTY
            for mov in board.get_moves():
                with board.trial(mov):
                    response, _ = self._minimax(board, depth - 1, -1, alpha, beta)
                if response >= best_value:
                    best, best_value = mov, response
                    alpha = max(alpha, response)
                if beta <= alpha:
                    break
        else:
            best_value = INFTY
            for mov in board.get_moves():
                with board.trial(mov):
                    response, _ = self._minimax(board, depth - 1, 1, alpha, beta)
                if response <= best_value:
                    best, best_value = mov, response
                    beta = min(beta, response)
                if beta <= alpha:
                    break
        return best_value, best


def find_best_move(board: Board | BoardView, sense: int, depth: int = MAX_DEPTH) -> Move:
    """Best chain for the side given by ``sense`` (+1 white, -1 black)."""

    return MinimaxSearch(depth).find_best_move(board, sense)


@dataclass(frozen=True)
class SearchResult:
    move: Move
    nodes: int
    elapsed: float


class MinimaxAgent:
    def __init__(self, player: PieceColor, depth: int = MAX_DEPTH) -> None:
        self.player = player
        self.depth = depth
        self.last_result: Optional[SearchResult] = None

    def choose_move(self, board: Board | BoardView) -> Optional[Move]:
        if board.game_over:
            return None

        search = MinimaxSearch(self.depth)
        started = time.perf_counter()
        move = search.find_best_move(board, sense_for(self.player))
        elapsed = time.perf_counter() - started

        self.last_result = SearchResult(move=move, nodes=search.nodes, elapsed=elapsed)
        LOG.info("%s chose %s (%d nodes, %.3fs)", self.player, move, search.nodes, elapsed)
        return move

    @property
    def description(self) -> str:
        return f"Minimax(depth={self.depth})"


__all__ = [
    "MAX_DEPTH",
    "WINNING_VALUE",
    "MinimaxAgent",
    "MinimaxSearch",
    "SearchError",
    "SearchResult",
    "find_best_move",
    "static_score",
]
