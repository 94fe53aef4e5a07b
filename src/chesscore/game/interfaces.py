"""Value types shared by the game layer and its observers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto

from chesscore.core.types import Position


# ── Interaction FSM states ───────────────────────────────────────────────────


class SelectionPhase(IntEnum):
    """States of the two-click move gesture."""

    NO_SELECTION = auto()
    PIECE_SELECTED = auto()
    PENDING_PROMOTION = auto()


# ── Change descriptors ───────────────────────────────────────────────────────


class ChangeKind(IntEnum):
    """What an accepted state mutation did."""

    MOVE = auto()
    CAPTURE = auto()
    EN_PASSANT = auto()
    CASTLE = auto()
    PROMOTION_PENDING = auto()
    PROMOTION = auto()
    POSITION_LOADED = auto()
    TURN_CHANGED = auto()
    BOARD_REPLACED = auto()


@dataclass(frozen=True, slots=True)
class StateChange:
    """Immutable record of one accepted mutation.

    Args:
        kind: Category of the change.
        squares: Squares whose content changed, in the order they were
            touched (origin first for moves).
        white_to_move: Side to move *after* the change.
    """

    kind: ChangeKind
    squares: tuple[Position, ...] = ()
    white_to_move: bool = True


StateObserver = Callable[[StateChange], None]
