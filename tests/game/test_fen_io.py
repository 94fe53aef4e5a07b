"""Tests for FEN file save/load helpers."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from chesscore.core.notation import STARTING_FEN
from chesscore.game.fen_io import load_fen_file, save_fen_file
from chesscore.game.state import GameState

MATE_FEN = "R2k4/8/3K4/8/8/8/8/8 b - - 0 1"


def test_save_writes_single_line(tmp_path: Path) -> None:
    path = tmp_path / "position.fen"
    fen = save_fen_file(GameState(), path)
    assert fen == STARTING_FEN
    assert path.read_text(encoding="utf-8") == STARTING_FEN + "\n"


def test_save_then_load_restores_position(tmp_path: Path) -> None:
    source = GameState()
    source.load_fen(MATE_FEN)
    path = tmp_path / "mate.fen"
    save_fen_file(source, str(path))

    target = GameState()
    assert load_fen_file(target, path) == MATE_FEN
    assert target.generate_fen() == MATE_FEN
    assert target.is_checkmate()


def test_load_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "padded.fen"
    path.write_text(f"\n   \n  {MATE_FEN}  \n\n", encoding="utf-8")
    state = GameState()
    load_fen_file(state, path)
    assert state.generate_fen() == MATE_FEN


def test_load_warns_on_extra_lines(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "many.fen"
    path.write_text(f"{MATE_FEN}\n{STARTING_FEN}\n", encoding="utf-8")
    state = GameState()
    with caplog.at_level(logging.WARNING, logger="chesscore.game.fen_io"):
        load_fen_file(state, path)
    assert state.generate_fen() == MATE_FEN
    assert "Ignoring 1 extra line(s)" in caplog.text


def test_load_empty_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "empty.fen"
    path.write_text("\n\n", encoding="utf-8")
    state = GameState()
    with pytest.raises(ValueError, match="No FEN found"):
        load_fen_file(state, path)
    assert state.generate_fen() == STARTING_FEN


def test_load_invalid_fen_keeps_position(tmp_path: Path) -> None:
    path = tmp_path / "broken.fen"
    path.write_text("not a fen\n", encoding="utf-8")
    state = GameState()
    with pytest.raises(ValueError):
        load_fen_file(state, path)
    assert state.generate_fen() == STARTING_FEN


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_fen_file(GameState(), tmp_path / "missing.fen")
