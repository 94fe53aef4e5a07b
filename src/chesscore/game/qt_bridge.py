"""Qt bridge re-emitting game state changes as signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from chesscore.game.interfaces import ChangeKind, StateChange
from chesscore.game.state import GameState


class GameStateNotifier(QObject):
    """Observer that forwards every :class:`StateChange` to Qt.

    Connect views with a queued connection if their slots may call back into
    the game state; observers must not mutate it synchronously.
    """

    state_changed = pyqtSignal(object)
    promotion_requested = pyqtSignal(int, int)
    turn_changed = pyqtSignal(bool)

    def __init__(self, state: GameState, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._state = state
        self._white_to_move = state.is_white_turn()
        state.add_observer(self._on_change)

    def detach(self) -> None:
        """Stop listening to the game state."""
        self._state.remove_observer(self._on_change)

    def _on_change(self, change: StateChange) -> None:
        self.state_changed.emit(change)
        if change.kind == ChangeKind.PROMOTION_PENDING:
            square = change.squares[1]
            self.promotion_requested.emit(square.row, square.col)
        if change.white_to_move != self._white_to_move:
            self._white_to_move = change.white_to_move
            self.turn_changed.emit(change.white_to_move)
