"""Game layer — move engine, input routing, settings and FEN files.

Quick start::

    from chesscore.game import GameState

    state = GameState()
    state.select_piece(6, 4)         # e2
    state.select_target_square(4, 4)  # e4
    state.generate_fen()

The Qt bridge lives in :mod:`chesscore.game.qt_bridge` and is not imported
here so that the engine stays usable without a Qt installation.
"""

from chesscore.game.controller import BoardClickController, ClickResult
from chesscore.game.fen_io import load_fen_file, save_fen_file
from chesscore.game.interfaces import (
    ChangeKind,
    SelectionPhase,
    StateChange,
    StateObserver,
)
from chesscore.game.settings import SessionSettings
from chesscore.game.state import GameState

__all__ = [
    # Interfaces
    "ChangeKind",
    "SelectionPhase",
    "StateChange",
    "StateObserver",
    # Concrete
    "BoardClickController",
    "ClickResult",
    "GameState",
    "SessionSettings",
    # Files
    "load_fen_file",
    "save_fen_file",
]
