"""Reduced FEN parsing and serialization.

Only piece placement and side to move are meaningful. Export always ends
with the fixed ``- - 0 1`` suffix (no castling rights, en-passant square or
clocks); import reads the first two fields and ignores the rest.
"""

from __future__ import annotations

from chesscore.core.board import Board
from chesscore.core.piece import Piece

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w - - 0 1"
FEN_SUFFIX = "- - 0 1"


def board_from_fen(fen: str) -> tuple[Board, bool]:
    """Parse *fen* into a fresh board and the white-to-move flag."""
    parts = fen.split()
    if len(parts) < 2:
        raise ValueError(f"Invalid FEN (need at least 2 fields): {fen!r}")

    placement, side_part = parts[:2]

    # 1. Piece placement, row 0 (rank 8) first
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                board.set_piece(row, col, Piece.from_char(ch))
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        white_to_move = True
    elif side_part == "b":
        white_to_move = False
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    return board, white_to_move


def board_to_fen(board: Board, white_to_move: bool) -> str:
    """Serialise *board* and the side to move to reduced FEN."""
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board.get_piece(row, col)
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    side_str = "w" if white_to_move else "b"
    return f"{board_str} {side_str} {FEN_SUFFIX}"
