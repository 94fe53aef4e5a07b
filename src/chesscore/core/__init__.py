"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chesscore.core import Board, Position, board_to_fen

    board = Board.initial()
    pawn = board.get_piece(6, 4)  # e2
    pawn.is_valid_move(Position(6, 4), Position(4, 4), board)  # True
"""

from chesscore.core.board import Board, TrialMove
from chesscore.core.enums import Color, GameResult, PieceType
from chesscore.core.notation import (
    FEN_SUFFIX,
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
)
from chesscore.core.piece import PROMOTION_NAMES, Piece
from chesscore.core.types import Position, all_positions, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "PieceType",
    # Types / helpers
    "Position",
    "all_positions",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Piece",
    "PROMOTION_NAMES",
    "TrialMove",
    # Notation
    "FEN_SUFFIX",
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
