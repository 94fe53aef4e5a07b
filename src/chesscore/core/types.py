"""Board coordinate value type and helpers.

Board layout (row-major, top-down as drawn on screen):
    row 0 = rank 8 (black's back rank), row 7 = rank 1
    col 0 = file a, col 7 = file h

So ``Position(6, 4)`` is e2 and ``Position(0, 4)`` is e8.
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable (row, col) coordinate.

    Nothing is validated on construction; indices outside 0..7 are a
    programming error, not a recoverable condition.
    """

    row: int
    col: int

    @property
    def is_on_board(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    def offset(self, d_row: int, d_col: int) -> Position:
        """Position shifted by the given deltas (may leave the board)."""
        return Position(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        if self.is_on_board:
            return square_name(self)
        return f"({self.row}, {self.col})"


def square_name(pos: Position) -> str:
    """Human-readable name, e.g. ``Position(6, 4)`` → ``'e2'``."""
    return f"{_FILES[pos.col]}{8 - pos.row}"


def parse_square(name: str) -> Position:
    """Parse a square name, e.g. ``'e4'`` → ``Position(4, 4)``."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Position(8 - int(name[1]), _FILES.index(name[0]))


def all_positions() -> list[Position]:
    """All 64 squares, row by row starting from row 0."""
    return [Position(row, col) for row in range(8) for col in range(8)]
