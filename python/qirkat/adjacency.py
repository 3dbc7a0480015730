"""Square geometry for the 5x5 Qirkat board.

Squares are numbered 0..24 in row-major order with row 0 at the bottom, so
``a1`` is 0, ``e1`` is 4 and ``e5`` is 24. Only squares with an even index
sit on the diagonal lines of the board; odd squares connect horizontally and
vertically only. The tables below enumerate, for each square, the adjacent
square reachable by a single step and the landing square beyond it for a
jump. The rest of the package shares them as the single source of truth for
move generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Tuple


SIDE = 5
MAX_INDEX = SIDE * SIDE - 1
COLUMNS = "abcde"
ROWS = "12345"


@dataclass(frozen=True)
class Edge:
    """Represents a directed neighbor relationship on the board.

    Attributes
    ----------
    neighbor:
        The adjacent square reached by a simple step. It is also the square
        jumped over when capturing in the same direction.
    landing:
        The square beyond ``neighbor`` where a capturing piece lands.
        ``None`` when that square falls off the board.
    """

    neighbor: int
    landing: int | None


def col(square: int) -> int:
    return square % SIDE


def row(square: int) -> int:
    return square // SIDE


def index(column: int, row_: int) -> int:
    return row_ * SIDE + column


def valid_square(square: int) -> bool:
    return 0 <= square <= MAX_INDEX


def has_diagonals(square: int) -> bool:
    """Return True if diagonal lines pass through ``square``."""

    return square % 2 == 0


def square_name(square: int) -> str:
    """Return the ``<col><row>`` name of ``square``, e.g. ``c3`` for 12."""

    return f"{COLUMNS[col(square)]}{ROWS[row(square)]}"


def parse_square(name: str) -> int:
    """Return the index of the square called ``name`` (``a1`` .. ``e5``)."""

    if len(name) != 2 or name[0] not in COLUMNS or name[1] not in ROWS:
        raise ValueError(f"Unknown square: {name!r}")
    return index(COLUMNS.index(name[0]), ROWS.index(name[1]))


def span(origin: int, target: int) -> Tuple[int, int]:
    """Return the absolute column and row distance between two squares."""

    return abs(col(origin) - col(target)), abs(row(origin) - row(target))


def _build_adjacency() -> Dict[int, List[Edge]]:
    # Row offset is the outer loop and column offset the inner one; move
    # generation inherits this order.
    table: Dict[int, List[Edge]] = {}
    for square in range(MAX_INDEX + 1):
        edges: List[Edge] = []
        c0, r0 = col(square), row(square)
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == dc == 0:
                    continue
                if dr != 0 and dc != 0 and not has_diagonals(square):
                    continue
                c1, r1 = c0 + dc, r0 + dr
                if not (0 <= c1 < SIDE and 0 <= r1 < SIDE):
                    continue
                c2, r2 = c1 + dc, r1 + dr
                landing = index(c2, r2) if 0 <= c2 < SIDE and 0 <= r2 < SIDE else None
                edges.append(Edge(neighbor=index(c1, r1), landing=landing))
        table[square] = edges
    return table


ADJACENCY: Dict[int, List[Edge]] = _build_adjacency()


def neighbors(square: int) -> List[Edge]:
    """Return all outgoing edges from ``square`` in generation order."""

    try:
        return ADJACENCY[square]
    except KeyError as exc:
        raise ValueError(f"Unknown square index: {square}") from exc


def all_edges() -> Iterator[tuple[int, Edge]]:
    """Iterate over every ``(square, edge)`` pair on the board."""

    for square, edges in ADJACENCY.items():
        for edge in edges:
            yield square, edge
