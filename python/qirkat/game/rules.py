"""Legality predicates shared by the board engine.

Every helper here is a pure function of a cell array, the side to move and,
for the anti-oscillation rule, the history of played chains. The board keeps
the state; these functions only answer questions about it.
"""

from __future__ import annotations

from typing import Iterator, List, Sequence

from ..adjacency import SIDE, has_diagonals, neighbors, row, span
from .color import PieceColor
from .move import Move


Cells = List[PieceColor]


def step_shape_ok(step: Move) -> bool:
    # Span limits shared by simple steps and jumps
    dc, dr = span(step.origin, step.target)
    if dc > 2 or dr > 2:
        return False
    if dc + dr == 3:
        return False
    if dc != 0 and dr != 0 and not has_diagonals(step.origin):
        return False
    return True


def direction_ok(step: Move, mover: PieceColor) -> bool:
    """White never retreats toward row 1, black never toward row 5.

    A piece already on its far row may not make a simple move at all.
    """

    r0, r1 = row(step.origin), row(step.target)
    if mover is PieceColor.WHITE:
        return r0 != SIDE - 1 and r1 >= r0
    return r0 != 0 and r1 <= r0


def simple_step_ok(cells: Sequence[PieceColor], mover: PieceColor, step: Move) -> bool:
    if step.jumped is not None or step.tail is not None:
        return False
    if cells[step.origin] is not mover:
        return False
    if cells[step.target] is not PieceColor.EMPTY:
        return False
    return direction_ok(step, mover) and step_shape_ok(step)


def jump_shape_ok(step: Move) -> bool:
    # Straight or diagonal distance two, capturing the midpoint
    dc, dr = span(step.origin, step.target)
    if max(dc, dr) != 2 or dc not in (0, 2) or dr not in (0, 2):
        return False
    return step.jumped == (step.origin + step.target) // 2


def jump_step_ok(cells: Sequence[PieceColor], mover: PieceColor, step: Move) -> bool:
    """Check a single jump against ``cells``, ignoring any tail."""

    if step.jumped is None or not jump_shape_ok(step):
        return False
    if cells[step.origin] is not mover:
        return False
    if cells[step.target] is not PieceColor.EMPTY:
        return False
    if cells[step.jumped] is not mover.opposite():
        return False
    return step_shape_ok(step)


def jumps_from(cells: Sequence[PieceColor], mover: PieceColor, square: int) -> Iterator[Move]:
    # Single captures available to the piece on square
    for edge in neighbors(square):
        if edge.landing is None:
            continue
        step = Move.jump(square, edge.landing)
        if jump_step_ok(cells, mover, step):
            yield step


def apply_step(cells: Cells, step: Move, color: PieceColor) -> None:
    if step.is_vestigial():
        return
    cells[step.origin] = PieceColor.EMPTY
    cells[step.target] = color
    if step.jumped is not None:
        cells[step.jumped] = PieceColor.EMPTY


def retract_step(cells: Cells, step: Move, color: PieceColor) -> None:
    if step.is_vestigial():
        return
    cells[step.target] = PieceColor.EMPTY
    cells[step.origin] = color
    if step.jumped is not None:
        cells[step.jumped] = color.opposite()


def reverses_previous(history: Sequence[Move], step: Move) -> bool:
    """Return True if ``step`` would undo the last move that touched its squares.

    History is scanned newest first. A chain that last left ``step.origin``
    settles the question in favour of the move, as does a chain that arrived
    on ``step.origin`` from somewhere other than ``step.target``. A chain that
    arrived on ``step.origin`` from ``step.target`` makes ``step`` a
    reversal.
    """

    for previous in reversed(history):
        arrived_here = step.origin == previous.final_target
        if step.origin == previous.origin or (arrived_here and step.target != previous.origin):
            return False
        if arrived_here and step.target == previous.origin:
            return True
    return False
