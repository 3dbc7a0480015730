from __future__ import annotations

from enum import Enum
from typing import Optional


class PieceColor(Enum):
    """Contents of a square, doubling as the identity of a side."""

    EMPTY = "-"
    WHITE = "w"
    BLACK = "b"

    @property
    def short_name(self) -> str:
        return self.value

    def opposite(self) -> "PieceColor":
        # Flip between sides
        if self is PieceColor.WHITE:
            return PieceColor.BLACK
        if self is PieceColor.BLACK:
            return PieceColor.WHITE
        return self

    @classmethod
    def from_short_name(cls, char: str) -> "PieceColor":
        return cls(char.lower())

    @classmethod
    def parse(cls, name: Optional[str]) -> Optional["PieceColor"]:
        """Map ``white``/``black`` (or ``w``/``b``) to a side; None otherwise."""

        if not name:
            return None
        key = name.strip().lower()
        if key in {"w", "white"}:
            return cls.WHITE
        if key in {"b", "black"}:
            return cls.BLACK
        return None

    def __str__(self) -> str:
        return self.name.capitalize()
