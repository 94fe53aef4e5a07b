"""Board — piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from chesscore.core.enums import Color, PieceType
from chesscore.core.piece import Piece
from chesscore.core.types import Position

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(slots=True)
class TrialMove:
    """Snapshot of everything a trial move touches, for exact rollback."""

    from_pos: Position
    to_pos: Position
    piece: Piece
    displaced: Piece | None
    piece_had_moved: bool
    displaced_had_moved: bool
    capture_at: Position | None = None
    lifted: Piece | None = None


class Board:
    """Mutable 8x8 container of optional pieces.

    The board enforces no chess rules at all; legality lives in
    :class:`~chesscore.game.state.GameState`. This keeps speculative moves
    cheap: apply, inspect, roll back.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        # _grid[row][col]; row 0 is rank 8.
        self._grid: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def get_piece(self, row: int, col: int) -> Piece | None:
        return self._grid[row][col]

    def set_piece(self, row: int, col: int, piece: Piece | None) -> None:
        self._grid[row][col] = piece

    def is_empty(self, row: int, col: int) -> bool:
        return self._grid[row][col] is None

    def __getitem__(self, pos: Position) -> Piece | None:
        return self._grid[pos.row][pos.col]

    def __setitem__(self, pos: Position, piece: Piece | None) -> None:
        self._grid[pos.row][pos.col] = piece

    # -- Mutation -----------------------------------------------------------

    def move_piece(self, from_pos: Position, to_pos: Position) -> None:
        """Relocate a piece unconditionally, overwriting any occupant."""
        piece = self[from_pos]
        if piece is None:
            raise ValueError(f"No piece on {from_pos}")
        self[from_pos] = None
        self[to_pos] = piece
        piece.has_moved = True

    def clear(self) -> None:
        self._grid = [[None] * 8 for _ in range(8)]

    # -- Speculative moves --------------------------------------------------

    def apply_trial(
        self,
        from_pos: Position,
        to_pos: Position,
        capture_at: Position | None = None,
    ) -> TrialMove:
        """Move a piece tentatively and return the state needed to undo it.

        *capture_at* names an extra square emptied for the duration of the
        trial (the pawn taken en passant).
        """
        piece = self[from_pos]
        if piece is None:
            raise ValueError(f"No piece on {from_pos}")
        displaced = self[to_pos]
        trial = TrialMove(
            from_pos=from_pos,
            to_pos=to_pos,
            piece=piece,
            displaced=displaced,
            piece_had_moved=piece.has_moved,
            displaced_had_moved=displaced.has_moved if displaced else False,
        )
        if capture_at is not None:
            trial.capture_at = capture_at
            trial.lifted = self[capture_at]
            self[capture_at] = None
        self.move_piece(from_pos, to_pos)
        return trial

    def revert_trial(self, trial: TrialMove) -> None:
        """Undo :meth:`apply_trial`, restoring cells and has-moved flags."""
        self[trial.from_pos] = trial.piece
        self[trial.to_pos] = trial.displaced
        if trial.capture_at is not None:
            self[trial.capture_at] = trial.lifted
        trial.piece.has_moved = trial.piece_had_moved
        if trial.displaced is not None:
            trial.displaced.has_moved = trial.displaced_had_moved

    @contextmanager
    def trial_move(
        self,
        from_pos: Position,
        to_pos: Position,
        capture_at: Position | None = None,
    ) -> Iterator[None]:
        """Scoped trial move: the board is restored when the block exits."""
        trial = self.apply_trial(from_pos, to_pos, capture_at)
        try:
            yield
        finally:
            self.revert_trial(trial)

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color) -> list[tuple[Position, Piece]]:
        """All ``(position, piece)`` pairs of *color*, row by row."""
        return [
            (Position(row, col), piece)
            for row, rank in enumerate(self._grid)
            for col, piece in enumerate(rank)
            if piece is not None and piece.color == color
        ]

    def find_king(self, color: Color) -> Position | None:
        for pos, piece in self.pieces(color):
            if piece.piece_type == PieceType.KING:
                return pos
        return None

    def copy(self) -> Board:
        """Deep copy: pieces are duplicated, including their flags."""
        b = Board()
        for row in range(8):
            for col in range(8):
                p = self._grid[row][col]
                if p is not None:
                    b._grid[row][col] = Piece(p.color, p.piece_type, p.has_moved)
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, piece_type in enumerate(_BACK_RANK):
            b.set_piece(0, col, Piece(Color.BLACK, piece_type))
            b.set_piece(1, col, Piece(Color.BLACK, PieceType.PAWN))
            b.set_piece(6, col, Piece(Color.WHITE, PieceType.PAWN))
            b.set_piece(7, col, Piece(Color.WHITE, piece_type))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = [str(p) if p else "." for p in self._grid[row]]
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
