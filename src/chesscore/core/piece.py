"""Piece — a closed tagged variant over :class:`PieceType`."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from chesscore.core import movement
from chesscore.core.enums import Color, PieceType
from chesscore.core.types import Position

if TYPE_CHECKING:
    from chesscore.core.board import Board

# FEN character ↔ PieceType (lowercase form)
_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

# Names accepted when a pawn promotes.
PROMOTION_NAMES: dict[str, PieceType] = {
    "queen": PieceType.QUEEN,
    "rook": PieceType.ROOK,
    "bishop": PieceType.BISHOP,
    "knight": PieceType.KNIGHT,
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


@dataclass(slots=True)
class Piece:
    """A chess piece owned by a single board cell.

    ``has_moved`` is the only mutable field. It drives castling eligibility
    for kings and rooks, and is carried by every piece so that trial moves
    can restore it symmetrically. Equality ignores it.
    """

    color: Color
    piece_type: PieceType
    has_moved: bool = field(default=False, compare=False)

    # ── Movement ─────────────────────────────────────────────────────────

    def is_valid_move(self, from_pos: Position, to_pos: Position, board: Board) -> bool:
        """Pseudo-legal move test; does not consider the own king's safety."""
        return movement.is_valid_move(self, from_pos, to_pos, board)

    def attacks(self, from_pos: Position, to_pos: Position, board: Board) -> bool:
        """Whether this piece on *from_pos* threatens *to_pos*."""
        return movement.attacks(self, from_pos, to_pos, board)

    @property
    def is_white(self) -> bool:
        return self.color == Color.WHITE

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.is_white else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            piece_type = _TYPES_BY_LETTER[char.lower()]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(Color.WHITE if char.isupper() else Color.BLACK, piece_type)

    @classmethod
    def from_name(cls, name: str, color: Color) -> Piece:
        """Create a promotion piece from its name ('queen', 'rook', ...)."""
        try:
            piece_type = PROMOTION_NAMES[name.strip().lower()]
        except KeyError:
            raise ValueError(f"Invalid promotion piece: {name!r}") from None
        return cls(color, piece_type)

    @property
    def code(self) -> str:
        """Two-letter sprite code used by board views, e.g. 'wp', 'bn'."""
        return ("w" if self.is_white else "b") + _LETTERS[self.piece_type]

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]
