"""GameState — the move engine.

Tracks the board, the side to move and the two-click selection gesture, and
decides move legality including check-safety, castling, en passant and
promotion. Check-safety uses speculative trial moves on the live board that
are rolled back before returning, so a ``GameState`` must only ever be used
from one thread.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from chesscore.core.board import Board
from chesscore.core.enums import Color, GameResult, PieceType
from chesscore.core.movement import KING_START_COL, is_castling_offset
from chesscore.core.notation import STARTING_FEN, board_from_fen, board_to_fen
from chesscore.core.piece import Piece
from chesscore.core.types import Position, all_positions
from chesscore.game.interfaces import (
    ChangeKind,
    SelectionPhase,
    StateChange,
    StateObserver,
)

_LOGGER = logging.getLogger(__name__)

# Rook destination column after castling, keyed by the rook's start column.
_CASTLED_ROOK_COL: dict[int, int] = {7: 5, 0: 3}


class GameState:
    """Board + side to move + selection/promotion/en-passant bookkeeping.

    Every accepted mutation produces a :class:`StateChange` which is kept as
    :attr:`last_change` and handed to the registered observers in
    registration order. Observers must not mutate the state from inside the
    callback; doing so raises ``RuntimeError``.
    """

    __slots__ = (
        "_board",
        "_white_to_move",
        "_selected",
        "_pending_promotion",
        "_en_passant_target",
        "_observers",
        "_last_change",
        "_notifying",
    )

    def __init__(
        self,
        board: Board | None = None,
        white_to_move: bool = True,
        observers: Iterable[StateObserver] = (),
    ) -> None:
        self._board = board if board is not None else Board.initial()
        self._white_to_move = white_to_move
        self._selected: Position | None = None
        self._pending_promotion: Position | None = None
        self._en_passant_target: Position | None = None
        self._observers: list[StateObserver] = list(observers)
        self._last_change: StateChange | None = None
        self._notifying = False

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def side_to_move(self) -> Color:
        return Color.WHITE if self._white_to_move else Color.BLACK

    @property
    def selected(self) -> Position | None:
        return self._selected

    @property
    def pending_promotion(self) -> Position | None:
        return self._pending_promotion

    @property
    def en_passant_target(self) -> Position | None:
        """Square skipped by the last pawn double step, if any."""
        return self._en_passant_target

    @en_passant_target.setter
    def en_passant_target(self, pos: Position | None) -> None:
        self._ensure_mutable()
        self._en_passant_target = pos

    @property
    def last_change(self) -> StateChange | None:
        return self._last_change

    @property
    def selection_phase(self) -> SelectionPhase:
        if self._pending_promotion is not None:
            return SelectionPhase.PENDING_PROMOTION
        if self._selected is not None:
            return SelectionPhase.PIECE_SELECTED
        return SelectionPhase.NO_SELECTION

    def is_white_turn(self) -> bool:
        return self._white_to_move

    def has_pending_promotion(self) -> bool:
        return self._pending_promotion is not None

    # ── Observers ────────────────────────────────────────────────────────

    def add_observer(self, observer: StateObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: StateObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Start a new game from the standard position or from *fen*."""
        self.load_fen(fen or STARTING_FEN)

    def set_board(self, board: Board) -> None:
        """Install a custom board; selection and special-move state reset."""
        self._ensure_mutable()
        self._board = board
        self._reset_transient()
        self._notify(ChangeKind.BOARD_REPLACED)

    def set_white_turn(self, white_to_move: bool) -> None:
        self._ensure_mutable()
        self._white_to_move = white_to_move
        self._selected = None
        self._notify(ChangeKind.TURN_CHANGED)

    # ── Two-click move gesture ───────────────────────────────────────────

    def select_piece(self, row: int, col: int) -> bool:
        """Select one of the side-to-move's pieces as the move origin."""
        self._ensure_mutable()
        if self._pending_promotion is not None:
            return False
        piece = self._board.get_piece(row, col)
        if piece is None or piece.color != self.side_to_move:
            return False
        self._selected = Position(row, col)
        return True

    def select_target_square(self, row: int, col: int) -> bool:
        """Try to move the selected piece to ``(row, col)``.

        Returns True if the move was accepted. A pawn reaching the last row
        is accepted but leaves the turn with the mover until
        :meth:`promote_pawn` is called. A rejected move clears the selection,
        or re-selects the clicked square if it holds one of the mover's
        pieces.
        """
        self._ensure_mutable()
        origin = self._selected
        if origin is None or self._pending_promotion is not None:
            return False

        board = self._board
        target = Position(row, col)
        piece = board[origin]
        if piece is None:
            self._selected = None
            return False

        if not self._is_pseudo_legal(origin, target):
            return self._reject_target(origin, target)
        if not self.can_move_to_escape_check(origin, target):
            return self._reject_target(origin, target)

        victim = self._en_passant_victim(piece, origin, target)
        if victim is not None:
            board[victim] = None

        if is_castling_offset(piece, origin, target):
            rook_pos = Position(origin.row, 7 if target.col > origin.col else 0)
            if not self.attempt_castling(origin, rook_pos):
                return self._reject_target(origin, target)
            rook_target = Position(origin.row, _CASTLED_ROOK_COL[rook_pos.col])
            board.move_piece(origin, target)
            board.move_piece(rook_pos, rook_target)
            self._selected = None
            self._pending_promotion = None
            self._en_passant_target = None
            self._white_to_move = not self._white_to_move
            _LOGGER.debug("Castled %s -> %s", origin, target)
            self._notify(ChangeKind.CASTLE, origin, target, rook_pos, rook_target)
            return True

        if victim is not None:
            kind = ChangeKind.EN_PASSANT
            squares: tuple[Position, ...] = (origin, target, victim)
        else:
            kind = ChangeKind.CAPTURE if board[target] is not None else ChangeKind.MOVE
            squares = (origin, target)

        is_pawn = piece.piece_type == PieceType.PAWN
        if is_pawn and abs(target.row - origin.row) == 2:
            skipped_row = (origin.row + target.row) // 2
            self._en_passant_target = Position(skipped_row, origin.col)
        else:
            self._en_passant_target = None

        board.move_piece(origin, target)
        self._selected = None

        if is_pawn and target.row == piece.color.promotion_row:
            self._pending_promotion = target
            _LOGGER.debug("Pawn reached %s, awaiting promotion", target)
            self._notify(ChangeKind.PROMOTION_PENDING, *squares)
            return True

        self._white_to_move = not self._white_to_move
        _LOGGER.debug("Moved %s %s -> %s", piece.piece_type.name, origin, target)
        self._notify(kind, *squares)
        return True

    # ── Check detection ──────────────────────────────────────────────────

    def find_king(self, color: Color) -> Position | None:
        return self._board.find_king(color)

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked? False when that king is missing."""
        king_pos = self.find_king(color)
        if king_pos is None:
            return False
        board = self._board
        for pos, piece in board.pieces(color.opposite):
            if piece.attacks(pos, king_pos, board):
                return True
        return False

    def can_move_to_escape_check(self, from_pos: Position, to_pos: Position) -> bool:
        """Whether moving from *from_pos* to *to_pos* leaves the mover safe.

        The move is tried on the live board and rolled back, restoring the
        has-moved flags of both pieces. Not valid across a promotion.
        """
        piece = self._board[from_pos]
        if piece is None:
            raise ValueError(f"No piece on {from_pos}")
        victim = self._en_passant_victim(piece, from_pos, to_pos)
        with self._board.trial_move(from_pos, to_pos, capture_at=victim):
            in_check = self.is_in_check(piece.color)
        return not in_check

    def is_checkmate(self) -> bool:
        color = self.side_to_move
        return self.is_in_check(color) and not self.has_any_legal_move(color)

    def is_stalemate(self) -> bool:
        color = self.side_to_move
        return not self.is_in_check(color) and not self.has_any_legal_move(color)

    def has_any_legal_move(self, color: Color) -> bool:
        targets = all_positions()
        for origin, _piece in self._board.pieces(color):
            for target in targets:
                if self._is_legal(origin, target):
                    return True
        return False

    def game_result(self) -> GameResult:
        """Result for the side to move: mate, stalemate draw, or ongoing."""
        color = self.side_to_move
        if self.has_any_legal_move(color):
            return GameResult.IN_PROGRESS
        if not self.is_in_check(color):
            return GameResult.DRAW
        if color == Color.WHITE:
            return GameResult.BLACK_WINS
        return GameResult.WHITE_WINS

    # ── Special moves ────────────────────────────────────────────────────

    def attempt_castling(self, king_pos: Position, rook_pos: Position) -> bool:
        """Check every castling precondition without changing the board."""
        board = self._board
        king = board[king_pos]
        rook = board[rook_pos]
        if king is None or king.piece_type != PieceType.KING:
            return False
        if rook is None or rook.piece_type != PieceType.ROOK:
            return False
        if king.color != self.side_to_move or rook.color != king.color:
            return False
        if king.has_moved or rook.has_moved:
            return False
        if king_pos.row != rook_pos.row or king_pos.col != KING_START_COL:
            return False

        direction = 1 if rook_pos.col > king_pos.col else -1
        for col in range(king_pos.col + direction, rook_pos.col, direction):
            if not board.is_empty(king_pos.row, col):
                return False

        if self.is_in_check(king.color):
            return False
        for step in (1, 2):
            crossed = king_pos.offset(0, step * direction)
            if not self.can_move_to_escape_check(king_pos, crossed):
                return False
        return True

    def promote_pawn(self, type_name: str) -> bool:
        """Replace the pawn awaiting promotion and pass the turn.

        Returns False if no promotion is pending. Raises ``ValueError`` if
        *type_name* is not one of queen, rook, bishop or knight.
        """
        self._ensure_mutable()
        pos = self._pending_promotion
        if pos is None:
            return False
        pawn = self._board[pos]
        if pawn is None:
            raise ValueError(f"No pawn awaiting promotion on {pos}")
        promoted = Piece.from_name(type_name, pawn.color)
        promoted.has_moved = True
        self._board[pos] = promoted
        self._pending_promotion = None
        self._white_to_move = not self._white_to_move
        _LOGGER.debug("Promoted pawn on %s to %s", pos, promoted.piece_type.name)
        self._notify(ChangeKind.PROMOTION, pos)
        return True

    # ── Queries ──────────────────────────────────────────────────────────

    def get_valid_moves_for_piece(self, row: int, col: int) -> list[Position]:
        """Legal destinations of the side-to-move's piece on ``(row, col)``."""
        origin = Position(row, col)
        piece = self._board[origin]
        if piece is None or piece.color != self.side_to_move:
            return []
        return [target for target in all_positions() if self._is_legal(origin, target)]

    def piece_code(self, row: int, col: int) -> str | None:
        """Sprite code of the piece on ``(row, col)``, e.g. ``'wp'``."""
        piece = self._board.get_piece(row, col)
        return piece.code if piece is not None else None

    # ── FEN ──────────────────────────────────────────────────────────────

    def generate_fen(self) -> str:
        return board_to_fen(self._board, self._white_to_move)

    def load_fen(self, fen: str) -> None:
        """Replace the position with *fen*; nothing changes if it is invalid."""
        self._ensure_mutable()
        parsed, white_to_move = board_from_fen(fen)
        board = self._board
        for row in range(8):
            for col in range(8):
                board.set_piece(row, col, parsed.get_piece(row, col))
        self._white_to_move = white_to_move
        self._reset_transient()
        _LOGGER.debug("Loaded position %s", fen)
        self._notify(ChangeKind.POSITION_LOADED)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _en_passant_victim(
        self, piece: Piece, from_pos: Position, to_pos: Position
    ) -> Position | None:
        """Square of the pawn captured if this move is an en-passant capture."""
        if piece.piece_type != PieceType.PAWN or to_pos != self._en_passant_target:
            return None
        if abs(to_pos.col - from_pos.col) != 1:
            return None
        if to_pos.row - from_pos.row != piece.color.pawn_direction:
            return None
        if self._board[to_pos] is not None:
            return None
        victim_pos = Position(from_pos.row, to_pos.col)
        victim = self._board[victim_pos]
        if (
            victim is None
            or victim.piece_type != PieceType.PAWN
            or victim.color == piece.color
        ):
            return None
        return victim_pos

    def _is_pseudo_legal(self, from_pos: Position, to_pos: Position) -> bool:
        piece = self._board[from_pos]
        if piece is None:
            return False
        if piece.is_valid_move(from_pos, to_pos, self._board):
            return True
        return self._en_passant_victim(piece, from_pos, to_pos) is not None

    def _is_legal(self, from_pos: Position, to_pos: Position) -> bool:
        piece = self._board[from_pos]
        if piece is None or not self._is_pseudo_legal(from_pos, to_pos):
            return False
        if not self.can_move_to_escape_check(from_pos, to_pos):
            return False
        if is_castling_offset(piece, from_pos, to_pos):
            rook_pos = Position(from_pos.row, 7 if to_pos.col > from_pos.col else 0)
            return self.attempt_castling(from_pos, rook_pos)
        return True

    def _reject_target(self, origin: Position, target: Position) -> bool:
        self._selected = None
        occupant = self._board[target] if target.is_on_board else None
        if occupant is not None and occupant.color == self.side_to_move:
            self._selected = target
        _LOGGER.debug("Rejected move %s -> %s", origin, target)
        return False

    def _reset_transient(self) -> None:
        self._selected = None
        self._pending_promotion = None
        self._en_passant_target = None

    def _ensure_mutable(self) -> None:
        if self._notifying:
            raise RuntimeError("GameState must not be mutated from an observer")

    def _notify(self, kind: ChangeKind, *squares: Position) -> None:
        change = StateChange(kind, squares, self._white_to_move)
        self._last_change = change
        self._notifying = True
        try:
            for observer in list(self._observers):
                observer(change)
        finally:
            self._notifying = False
