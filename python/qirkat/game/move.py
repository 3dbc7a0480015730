"""Immutable moves and jump chains plus their ``c2-c3`` text notation."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Iterator, Optional

from ..adjacency import parse_square, span, square_name


_MOVE_PATTERN = re.compile(r"^[a-e][1-5](?:-[a-e][1-5])+$")


class MoveFormatError(ValueError):
    pass


@dataclass(frozen=True)
class Move:
    """One step of a turn, optionally followed by further jump steps.

    A simple move has no ``jumped`` square. A jump captures the piece on
    ``jumped`` (the midpoint of ``origin`` and ``target``) and may carry a
    ``tail``: the next jump of the same turn. A step whose origin equals its
    target is vestigial; it only glues chain segments together.
    """

    origin: int
    target: int
    jumped: Optional[int] = None
    tail: Optional["Move"] = None

    @classmethod
    def step(cls, origin: int, target: int) -> "Move":
        return cls(origin=origin, target=target)

    @classmethod
    def jump(cls, origin: int, target: int, tail: Optional["Move"] = None) -> "Move":
        return cls(origin=origin, target=target, jumped=(origin + target) // 2, tail=tail)

    @classmethod
    def between(cls, origin: int, target: int, tail: Optional["Move"] = None) -> "Move":
        """Build the step from ``origin`` to ``target``, classified by span.

        Straight or diagonal distance two is a jump; anything else is a
        simple step (the rules reject the spans they do not allow).
        """

        dc, dr = span(origin, target)
        if max(dc, dr) == 2 and dc in (0, 2) and dr in (0, 2):
            return cls.jump(origin, target, tail)
        return cls(origin=origin, target=target, tail=tail)

    @property
    def final_target(self) -> int:
        step = self
        while step.tail is not None:
            step = step.tail
        return step.target

    def steps(self) -> Iterator["Move"]:
        step: Optional[Move] = self
        while step is not None:
            yield step
            step = step.tail

    def is_jump(self) -> bool:
        return any(step.jumped is not None for step in self.steps())

    def is_vestigial(self) -> bool:
        return self.origin == self.target

    def __len__(self) -> int:
        return sum(1 for _ in self.steps())

    def __str__(self) -> str:
        parts = [square_name(self.origin)]
        for step in self.steps():
            if not step.is_vestigial():
                parts.append(square_name(step.target))
        return "-".join(parts)


def link(first: Optional[Move], second: Optional[Move]) -> Optional[Move]:
    """Return ``first`` with ``second`` appended after its last step."""

    if first is None:
        return second
    if second is None:
        return first
    return replace(first, tail=link(first.tail, second))


def parse_move(text: str) -> Move:
    """Parse ``a3-c5-c3`` style notation into a move chain."""

    cleaned = text.strip().lower()
    if not _MOVE_PATTERN.match(cleaned):
        raise MoveFormatError(f"Malformed move: {text!r}")

    squares = [parse_square(name) for name in cleaned.split("-")]
    if len(squares) == 2:
        return Move.between(squares[0], squares[1])

    # Three or more squares always spell a jump chain
    chain = Move.jump(squares[-2], squares[-1])
    for origin, target in reversed(list(zip(squares, squares[1:-1]))):
        chain = Move.jump(origin, target, tail=chain)
    return chain
