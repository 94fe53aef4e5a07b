"""Session settings consumed by the input controller."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.notation import STARTING_FEN
from chesscore.core.piece import PROMOTION_NAMES


@dataclass
class SessionSettings:
    """All user-configurable session settings."""

    # Position a new game starts from
    start_fen: str = STARTING_FEN

    # Compute legal destinations of the selected piece for highlighting
    show_legal_moves: bool = True

    # Resolve promotions immediately with this piece ("queen", ...) instead
    # of asking the player
    auto_promote_to: str | None = None

    def __post_init__(self) -> None:
        if (
            self.auto_promote_to is not None
            and self.auto_promote_to.lower() not in PROMOTION_NAMES
        ):
            raise ValueError(f"Invalid promotion piece: {self.auto_promote_to!r}")
