"""Tests for reduced FEN parsing and serialization."""

import pytest

from chesscore.core.board import Board
from chesscore.core.enums import Color, PieceType
from chesscore.core.notation import (
    FEN_SUFFIX,
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
)
from chesscore.core.piece import Piece
from chesscore.core.types import parse_square


class TestFenParsing:
    def test_starting_position(self) -> None:
        board, white_to_move = board_from_fen(STARTING_FEN)
        assert white_to_move
        assert board == Board.initial()

    def test_black_to_move(self) -> None:
        _, white_to_move = board_from_fen("8/8/8/8/8/8/8/K6k b - - 0 1")
        assert not white_to_move

    def test_only_two_fields_required(self) -> None:
        board, white_to_move = board_from_fen("8/8/8/8/8/8/8/K6k w")
        assert white_to_move
        assert board[parse_square("a1")] == Piece(Color.WHITE, PieceType.KING)
        assert board[parse_square("h1")] == Piece(Color.BLACK, PieceType.KING)

    def test_trailing_fields_ignored(self) -> None:
        board, _ = board_from_fen(
            "r3k2r/8/8/8/8/8/8/R3K2R w KQkq e3 12 40"
        )
        rook = board[parse_square("a1")]
        assert rook == Piece(Color.WHITE, PieceType.ROOK)
        assert rook is not None and not rook.has_moved

    def test_loaded_pieces_are_unmoved(self) -> None:
        board, _ = board_from_fen("4k3/8/8/3P4/8/8/8/4K3 w - - 0 1")
        for color in Color:
            assert all(not p.has_moved for _, p in board.pieces(color))

    def test_mixed_rank(self) -> None:
        board, _ = board_from_fen("8/8/8/2pP4/8/8/8/8 w - - 0 1")
        assert board[parse_square("c5")] == Piece(Color.BLACK, PieceType.PAWN)
        assert board[parse_square("d5")] == Piece(Color.WHITE, PieceType.PAWN)
        assert len(board.pieces(Color.WHITE)) == 1


class TestFenErrors:
    def test_single_field(self) -> None:
        with pytest.raises(ValueError, match="at least 2 fields"):
            board_from_fen("8/8/8/8/8/8/8/8")

    def test_empty_string(self) -> None:
        with pytest.raises(ValueError, match="at least 2 fields"):
            board_from_fen("")

    def test_wrong_rank_count(self) -> None:
        with pytest.raises(ValueError, match="8 ranks"):
            board_from_fen("8/8/8/8/8/8/8 w")

    @pytest.mark.parametrize(
        "placement",
        [
            "9/8/8/8/8/8/8/8",
            "7/8/8/8/8/8/8/8",
            "ppppppppp/8/8/8/8/8/8/8",
            "8p/8/8/8/8/8/8/8",
        ],
    )
    def test_bad_rank_width(self, placement: str) -> None:
        with pytest.raises(ValueError, match="Invalid FEN"):
            board_from_fen(f"{placement} w - - 0 1")

    def test_zero_digit(self) -> None:
        with pytest.raises(ValueError, match="Invalid FEN digit"):
            board_from_fen("08/8/8/8/8/8/8/8 w")

    def test_unknown_piece_letter(self) -> None:
        with pytest.raises(ValueError, match="Invalid piece character"):
            board_from_fen("7x/8/8/8/8/8/8/8 w")

    def test_bad_side_to_move(self) -> None:
        with pytest.raises(ValueError, match="side-to-move"):
            board_from_fen("8/8/8/8/8/8/8/8 x - - 0 1")


class TestFenSerialization:
    def test_starting_position(self) -> None:
        assert board_to_fen(Board.initial(), True) == STARTING_FEN

    def test_side_and_suffix(self) -> None:
        fen = board_to_fen(Board(), False)
        assert fen == f"8/8/8/8/8/8/8/8 b {FEN_SUFFIX}"

    def test_after_king_pawn_opening(self) -> None:
        board = Board.initial()
        board.move_piece(parse_square("e2"), parse_square("e4"))
        assert (
            board_to_fen(board, False)
            == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b - - 0 1"
        )

    def test_suffix_drops_imported_fields(self) -> None:
        board, white_to_move = board_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 3 9")
        expected = "r3k2r/8/8/8/8/8/8/R3K2R w - - 0 1"
        assert board_to_fen(board, white_to_move) == expected

    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w - - 0 1",
            "8/4P3/8/8/8/8/k7/4K3 b - - 0 1",
        ],
    )
    def test_round_trip(self, fen: str) -> None:
        assert board_to_fen(*board_from_fen(fen)) == fen
