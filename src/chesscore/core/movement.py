"""Movement geometry per piece type (pseudo-legality only).

None of these predicates know about check: they answer whether a piece
could move from one square to another given the pieces on the board.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from chesscore.core.enums import PieceType
from chesscore.core.types import Position

if TYPE_CHECKING:
    from chesscore.core.board import Board
    from chesscore.core.piece import Piece

MoveRule = Callable[["Piece", Position, Position, "Board"], bool]

KNIGHT_OFFSETS: frozenset[tuple[int, int]] = frozenset(
    {
        (-2, -1),
        (-2, 1),
        (-1, -2),
        (-1, 2),
        (1, -2),
        (1, 2),
        (2, -1),
        (2, 1),
    }
)

# Castling: the king starts on this column and moves two columns sideways.
KING_START_COL = 4


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(board: Board, from_pos: Position, to_pos: Position) -> bool:
    """Whether every square strictly between two aligned squares is empty."""
    step_row = _sign(to_pos.row - from_pos.row)
    step_col = _sign(to_pos.col - from_pos.col)
    row = from_pos.row + step_row
    col = from_pos.col + step_col
    while (row, col) != (to_pos.row, to_pos.col):
        if not board.is_empty(row, col):
            return False
        row += step_row
        col += step_col
    return True


# -- Piece-specific rules --------------------------------------------------


def _pawn(piece: Piece, from_pos: Position, to_pos: Position, board: Board) -> bool:
    direction = piece.color.pawn_direction
    d_row = to_pos.row - from_pos.row
    d_col = to_pos.col - from_pos.col
    target = board[to_pos]

    if d_col == 0:
        if target is not None:
            return False
        if d_row == direction:
            return True
        return (
            d_row == 2 * direction
            and from_pos.row == piece.color.pawn_row
            and board.is_empty(from_pos.row + direction, from_pos.col)
        )

    # Diagonal steps only capture; en passant is resolved by the game state.
    return abs(d_col) == 1 and d_row == direction and target is not None


def _knight(piece: Piece, from_pos: Position, to_pos: Position, board: Board) -> bool:
    return (to_pos.row - from_pos.row, to_pos.col - from_pos.col) in KNIGHT_OFFSETS


def _bishop(piece: Piece, from_pos: Position, to_pos: Position, board: Board) -> bool:
    if abs(to_pos.row - from_pos.row) != abs(to_pos.col - from_pos.col):
        return False
    return is_path_clear(board, from_pos, to_pos)


def _rook(piece: Piece, from_pos: Position, to_pos: Position, board: Board) -> bool:
    if from_pos.row != to_pos.row and from_pos.col != to_pos.col:
        return False
    return is_path_clear(board, from_pos, to_pos)


def _queen(piece: Piece, from_pos: Position, to_pos: Position, board: Board) -> bool:
    return _rook(piece, from_pos, to_pos, board) or _bishop(
        piece, from_pos, to_pos, board
    )


def _king_step(
    piece: Piece, from_pos: Position, to_pos: Position, board: Board
) -> bool:
    return max(abs(to_pos.row - from_pos.row), abs(to_pos.col - from_pos.col)) == 1


def is_castling_offset(piece: Piece, from_pos: Position, to_pos: Position) -> bool:
    """Whether a king move has the two-column castling shape."""
    return (
        piece.piece_type == PieceType.KING
        and from_pos.row == to_pos.row
        and abs(to_pos.col - from_pos.col) == 2
    )


def _king(piece: Piece, from_pos: Position, to_pos: Position, board: Board) -> bool:
    if _king_step(piece, from_pos, to_pos, board):
        return True
    # Castling shape only; rook, path and check conditions live in GameState.
    return (
        is_castling_offset(piece, from_pos, to_pos)
        and not piece.has_moved
        and from_pos.row == piece.color.home_row
        and from_pos.col == KING_START_COL
        and board[to_pos] is None
    )


MOVE_RULES: dict[PieceType, MoveRule] = {
    PieceType.PAWN: _pawn,
    PieceType.KNIGHT: _knight,
    PieceType.BISHOP: _bishop,
    PieceType.ROOK: _rook,
    PieceType.QUEEN: _queen,
    PieceType.KING: _king,
}

# Squares a piece threatens. Identical to MOVE_RULES except that the king's
# castling shape is never an attack.
ATTACK_RULES: dict[PieceType, MoveRule] = {**MOVE_RULES, PieceType.KING: _king_step}


def _basic_checks(
    piece: Piece, from_pos: Position, to_pos: Position, board: Board
) -> bool:
    if not (from_pos.is_on_board and to_pos.is_on_board) or from_pos == to_pos:
        return False
    target = board[to_pos]
    return target is None or target.color != piece.color


def is_valid_move(
    piece: Piece, from_pos: Position, to_pos: Position, board: Board
) -> bool:
    """Pseudo-legal move test for *piece* standing on *from_pos*."""
    if not _basic_checks(piece, from_pos, to_pos, board):
        return False
    return MOVE_RULES[piece.piece_type](piece, from_pos, to_pos, board)


def attacks(piece: Piece, from_pos: Position, to_pos: Position, board: Board) -> bool:
    """Whether *piece* on *from_pos* threatens *to_pos*."""
    if not _basic_checks(piece, from_pos, to_pos, board):
        return False
    return ATTACK_RULES[piece.piece_type](piece, from_pos, to_pos, board)
