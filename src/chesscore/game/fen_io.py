"""FEN file save/load helpers."""

from __future__ import annotations

import logging
from pathlib import Path

from chesscore.game.state import GameState

_LOGGER = logging.getLogger(__name__)


def save_fen_file(state: GameState, file_path: Path | str) -> str:
    """Write the current position of *state* to *file_path* and return it."""
    fen = state.generate_fen()
    path = Path(file_path)
    path.write_text(fen + "\n", encoding="utf-8")
    _LOGGER.info("Saved position to %s", path)
    return fen


def load_fen_file(state: GameState, file_path: Path | str) -> str:
    """Load the first non-empty line of *file_path* into *state*."""
    path = Path(file_path)
    lines = [line.strip() for line in path.read_text(encoding="utf-8").splitlines()]
    fens = [line for line in lines if line]
    if not fens:
        raise ValueError(f"No FEN found in {path}")
    if len(fens) > 1:
        _LOGGER.warning("Ignoring %d extra line(s) in %s", len(fens) - 1, path)
    state.load_fen(fens[0])
    _LOGGER.info("Loaded position from %s", path)
    return fens[0]
