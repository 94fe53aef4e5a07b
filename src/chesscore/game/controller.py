"""BoardClickController — routes board clicks to the two-click move gesture.

Toolkit-agnostic: a view translates pointer events to ``(row, col)`` and
calls :meth:`BoardClickController.click`, then repaints from
:attr:`highlights` and the game state.
"""

from __future__ import annotations

from enum import IntEnum, auto

from chesscore.core.types import Position
from chesscore.game.settings import SessionSettings
from chesscore.game.state import GameState


class ClickResult(IntEnum):
    """Outcome of a single board click."""

    IGNORED = auto()  # nothing selectable, nothing selected
    SELECTED = auto()  # a piece is (now) selected
    MOVED = auto()  # a move was played and the turn passed
    PROMOTION_REQUIRED = auto()  # pawn on the last row, choose a piece
    REJECTED = auto()  # illegal target, selection dropped


class BoardClickController:
    """Turns clicks into ``select_piece`` / ``select_target_square`` calls."""

    __slots__ = ("_state", "_settings", "_highlights")

    def __init__(
        self, state: GameState, settings: SessionSettings | None = None
    ) -> None:
        self._state = state
        self._settings = settings if settings is not None else SessionSettings()
        self._highlights: list[Position] = []

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def settings(self) -> SessionSettings:
        return self._settings

    @property
    def highlights(self) -> list[Position]:
        """Legal destinations of the current selection (may be empty)."""
        return list(self._highlights)

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self) -> None:
        self._highlights = []
        self._state.setup(self._settings.start_fen)

    def click(self, row: int, col: int) -> ClickResult:
        state = self._state
        if state.has_pending_promotion():
            return ClickResult.IGNORED

        if state.selected is None:
            if not state.select_piece(row, col):
                return ClickResult.IGNORED
            self._refresh_highlights()
            return ClickResult.SELECTED

        if state.select_target_square(row, col):
            self._highlights = []
            if state.has_pending_promotion():
                auto_piece = self._settings.auto_promote_to
                if auto_piece is None:
                    return ClickResult.PROMOTION_REQUIRED
                state.promote_pawn(auto_piece)
            return ClickResult.MOVED

        # A failed move may have re-selected another piece of the mover.
        if state.selected is not None:
            self._refresh_highlights()
            return ClickResult.SELECTED
        self._highlights = []
        return ClickResult.REJECTED

    def choose_promotion(self, type_name: str) -> bool:
        return self._state.promote_pawn(type_name)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _refresh_highlights(self) -> None:
        selected = self._state.selected
        if selected is None or not self._settings.show_legal_moves:
            self._highlights = []
            return
        self._highlights = self._state.get_valid_moves_for_piece(
            selected.row, selected.col
        )
