from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional, Tuple, Union

from ..adjacency import COLUMNS, MAX_INDEX, ROWS, SIDE, index, neighbors, valid_square
from . import rules
from .color import PieceColor
from .move import Move, link


LOG = logging.getLogger("qirkat.board")

W = PieceColor.WHITE
B = PieceColor.BLACK
E = PieceColor.EMPTY

# fmt: off
INITIAL_CELLS: Tuple[PieceColor, ...] = (
    W, W, W, W, W,
    W, W, W, W, W,
    B, B, E, W, W,
    B, B, B, B, B,
    B, B, B, B, B,
)
# fmt: on

_BOARD_PATTERN = re.compile(r"^[bwBW-]{25}$")

Subscriber = Callable[["Board"], None]


class BoardFormatError(ValueError):
    pass


class UsageError(RuntimeError):
    pass


class EmptyHistoryError(RuntimeError):
    pass


class ReadOnlyBoardError(RuntimeError):
    pass


class Board:
    def __init__(self, other: Optional[Union["Board", "BoardView"]] = None) -> None:
        self._cells: List[PieceColor] = [E] * (MAX_INDEX + 1)
        self._whose_move = W
        self._game_over = False
        self._history: List[Move] = []
        self._subscribers: List[Subscriber] = []
        if other is None:
            self.clear()
        else:
            self._internal_copy(other)

    # -- lifecycle ---------------------------------------------------------

    def clear(self) -> None:
        # Rebuild the initial layout
        self._cells = list(INITIAL_CELLS)
        self._whose_move = W
        self._game_over = False
        self._history.clear()
        self._notify()

    def copy_from(self, other: Union["Board", "BoardView"]) -> None:
        self._internal_copy(other)
        self._notify()

    def _internal_copy(self, other: Union["Board", "BoardView"]) -> None:
        self._cells = [other.get(k) for k in range(MAX_INDEX + 1)]
        self._whose_move = other.whose_move
        self._game_over = other.game_over
        self._history = list(other.history)

    def set_pieces(self, text: str, next_move: Optional[PieceColor]) -> None:
        """Load 25 ``b``/``w``/``-`` characters, row 1 first, ``a`` to ``e``.

        Whitespace is ignored. The history is discarded.
        """

        if next_move is None or next_move is E:
            raise UsageError("bad player color")
        compact = re.sub(r"\s", "", text)
        if not _BOARD_PATTERN.match(compact):
            raise BoardFormatError("bad board description")

        self._cells = [PieceColor.from_short_name(char) for char in compact]
        self._whose_move = next_move
        self._history.clear()
        self._game_over = not self._has_move()
        self._notify()

    # -- queries -----------------------------------------------------------

    def get(self, square: int) -> PieceColor:
        if not valid_square(square):
            raise ValueError(f"Unknown square index: {square}")
        return self._cells[square]

    def get_at(self, column: str, row: str) -> PieceColor:
        return self._cells[index(COLUMNS.index(column), ROWS.index(row))]

    @property
    def whose_move(self) -> PieceColor:
        return self._whose_move

    def set_whose_move(self, color: PieceColor) -> None:
        if color is E:
            raise UsageError("bad player color")
        self._whose_move = color
        self._game_over = not self._has_move()
        self._notify()

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def history(self) -> Tuple[Move, ...]:
        return tuple(self._history)

    def count(self, color: PieceColor) -> int:
        return sum(1 for cell in self._cells if cell is color)

    # -- legality ----------------------------------------------------------

    def legal_move(self, mov: Move) -> bool:
        """Return True iff ``mov`` may be played by the side to move."""

        if mov.is_jump():
            return self.check_jump(mov, allow_partial=False)
        if mov.tail is not None:
            return False
        if self.jump_possible():
            return False
        return self.legal_move_fast(mov)

    def legal_move_fast(self, mov: Move) -> bool:
        """Single-step check used by move generation.

        Skips the mandatory-capture test; callers only reach it once jump
        availability has been settled.
        """

        if mov.jumped is not None:
            return self.check_jump_fast(mov)
        if not rules.simple_step_ok(self._cells, self._whose_move, mov):
            return False
        return not rules.reverses_previous(self._history, mov)

    def check_jump(self, mov: Optional[Move], allow_partial: bool = False) -> bool:
        """Return True iff ``mov`` is a valid jump sequence on this board.

        Steps are replayed on a scratch copy of the cells so that every jump
        sees the captures made before it. Unless ``allow_partial``, the chain
        must also end where no further capture is available.
        """

        if mov is None or not mov.is_jump():
            return False

        cells = list(self._cells)
        mover = self._whose_move
        position = mov.origin
        for step in mov.steps():
            if step.origin != position:
                return False
            if step.is_vestigial():
                continue
            if not rules.jump_step_ok(cells, mover, step):
                return False
            rules.apply_step(cells, step, mover)
            position = step.target

        if not allow_partial and any(rules.jumps_from(cells, mover, position)):
            return False
        return True

    def check_jump_fast(self, mov: Move) -> bool:
        return rules.jump_step_ok(self._cells, self._whose_move, mov)

    def jump_possible(self, square: Optional[int] = None) -> bool:
        if square is not None:
            return any(rules.jumps_from(self._cells, self._whose_move, square))
        return any(self.jump_possible(k) for k in range(MAX_INDEX + 1))

    def move_possible(self, square: Optional[int] = None) -> bool:
        if square is not None:
            return any(True for _ in self._simple_moves_from(square))
        return any(self.move_possible(k) for k in range(MAX_INDEX + 1))

    def _has_move(self) -> bool:
        return self.jump_possible() or self.move_possible()

    # -- move generation ---------------------------------------------------

    def get_moves(self) -> List[Move]:
        """All legal moves, jumps only when any capture exists."""

        moves: List[Move] = []
        if self._game_over:
            return moves
        if self.jump_possible():
            for k in range(MAX_INDEX + 1):
                moves.extend(self._jumps_from(k))
        else:
            for k in range(MAX_INDEX + 1):
                moves.extend(self._simple_moves_from(k))
        return moves

    def _simple_moves_from(self, square: int) -> Iterator[Move]:
        if self._cells[square] is not self._whose_move:
            return
        for edge in neighbors(square):
            mov = Move.step(square, edge.neighbor)
            if self.legal_move_fast(mov):
                yield mov

    def _jumps_from(self, square: int) -> List[Move]:
        # Maximal capture chains starting at square
        chains: List[Move] = []
        if self._cells[square] is not self._whose_move:
            return chains
        for edge in neighbors(square):
            if edge.landing is None:
                continue
            mov = Move.jump(square, edge.landing)
            if not self.check_jump_fast(mov):
                continue

            with self._speculate(mov):
                continuations = self._jumps_from(edge.landing)

            if not continuations:
                chains.append(mov)
            else:
                chains.extend(link(mov, nxt) for nxt in continuations)
        return chains

    @contextmanager
    def _speculate(self, step: Move) -> Iterator[None]:
        # Play one jump for the side to move without touching history
        rules.apply_step(self._cells, step, self._whose_move)
        try:
            yield
        finally:
            rules.retract_step(self._cells, step, self._whose_move)

    # -- mutation ----------------------------------------------------------

    def make_move(self, mov: Move) -> None:
        """Play ``mov`` for the side to move, assuming it is legal."""

        for step in mov.steps():
            rules.apply_step(self._cells, step, self._whose_move)
        self._history.append(mov)
        self._whose_move = self._whose_move.opposite()
        self._game_over = not self._has_move()
        LOG.debug("%s played %s; game over: %s", self._whose_move.opposite(), mov, self._game_over)
        self._notify()

    def undo(self) -> None:
        """Take back the last chain played."""

        if not self._history:
            raise EmptyHistoryError("no move to undo")
        mov = self._history.pop()
        mover = self._whose_move.opposite()
        for step in reversed(list(mov.steps())):
            rules.retract_step(self._cells, step, mover)
        self._whose_move = mover
        self._game_over = False
        LOG.debug("Undid %s", mov)
        self._notify()

    @contextmanager
    def trial(self, mov: Move) -> Iterator["Board"]:
        """Play ``mov`` for the duration of the block, then undo it."""

        self.make_move(mov)
        try:
            yield self
        finally:
            self.undo()

    # -- notification ------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)

    def constant_view(self) -> "BoardView":
        return BoardView(self)

    # -- display -----------------------------------------------------------

    def render(self, legend: bool = False) -> str:
        """Text picture of the board, row 5 on top.

        With ``legend``, row numbers run down the left and column letters
        along the bottom.
        """

        lines = []
        for r in range(SIDE - 1, -1, -1):
            cells = " ".join(self._cells[r * SIDE + c].short_name for c in range(SIDE))
            prefix = f"  {r + 1} " if legend else "  "
            lines.append(prefix + cells)
        if legend:
            lines.append("    " + " ".join(COLUMNS))
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.render(legend=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Board, BoardView)):
            return NotImplemented
        return (
            self.whose_move is other.whose_move
            and self.game_over == other.game_over
            and all(self.get(k) is other.get(k) for k in range(MAX_INDEX + 1))
        )

    __hash__ = None  # type: ignore[assignment]


class BoardView:
    """Read-only handle on a live :class:`Board`.

    Queries are answered by the underlying board. Mutators raise
    :class:`ReadOnlyBoardError`. Subscribers of the view are told about every
    change to the board.
    """

    def __init__(self, board: Board) -> None:
        self._board = board
        self._subscribers: List[Callable[["BoardView"], None]] = []
        board.subscribe(self._relay)

    def _relay(self, _board: Board) -> None:
        for callback in list(self._subscribers):
            callback(self)

    def subscribe(self, callback: Callable[["BoardView"], None]) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[["BoardView"], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def detach(self) -> None:
        self._board.unsubscribe(self._relay)

    # Queries

    def get(self, square: int) -> PieceColor:
        return self._board.get(square)

    def get_at(self, column: str, row: str) -> PieceColor:
        return self._board.get_at(column, row)

    @property
    def whose_move(self) -> PieceColor:
        return self._board.whose_move

    @property
    def game_over(self) -> bool:
        return self._board.game_over

    @property
    def history(self) -> Tuple[Move, ...]:
        return self._board.history

    def count(self, color: PieceColor) -> int:
        return self._board.count(color)

    def legal_move(self, mov: Move) -> bool:
        return self._board.legal_move(mov)

    def check_jump(self, mov: Optional[Move], allow_partial: bool = False) -> bool:
        return self._board.check_jump(mov, allow_partial)

    def jump_possible(self, square: Optional[int] = None) -> bool:
        return self._board.jump_possible(square)

    def move_possible(self, square: Optional[int] = None) -> bool:
        return self._board.move_possible(square)

    def get_moves(self) -> List[Move]:
        return self._board.get_moves()

    def render(self, legend: bool = False) -> str:
        return self._board.render(legend)

    def __str__(self) -> str:
        return str(self._board)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, (Board, BoardView)):
            return NotImplemented
        return self._board == other

    __hash__ = None  # type: ignore[assignment]

    # Mutators

    def _refuse(self, operation: str) -> None:
        raise ReadOnlyBoardError(f"{operation} is not allowed on a read-only board")

    def clear(self) -> None:
        self._refuse("clear")

    def copy_from(self, other: Union[Board, "BoardView"]) -> None:
        self._refuse("copy_from")

    def set_pieces(self, text: str, next_move: Optional[PieceColor]) -> None:
        self._refuse("set_pieces")

    def set_whose_move(self, color: PieceColor) -> None:
        self._refuse("set_whose_move")

    def make_move(self, mov: Move) -> None:
        self._refuse("make_move")

    def undo(self) -> None:
        self._refuse("undo")
