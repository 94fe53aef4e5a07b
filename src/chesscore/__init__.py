"""chesscore — chess rules engine with a two-click move gesture and reduced FEN."""

__version__ = "0.1.0"
