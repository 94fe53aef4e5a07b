"""Notation package: reduced FEN parsing and serialization."""

from chesscore.core.notation.fen import (
    FEN_SUFFIX,
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
)

__all__ = [
    "FEN_SUFFIX",
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
