from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .square import Square


class ReplayError(ValueError):
    """Base class for errors that abort the replay of a single game."""


class DecodeError(ReplayError):
    """Raised when an encoded move list cannot be turned into plies."""


class PieceNotFound(ReplayError):
    """An expected square (origin or castling rook) held no piece."""

    def __init__(self, square: "Square") -> None:
        super().__init__(f"piece not found on square: {square}")
        self.square = square


class EnPassantPieceNotFound(ReplayError):
    """The pawn to be captured en passant was missing from its square."""

    def __init__(self, square: "Square") -> None:
        super().__init__(f"en passant capture not found on square: {square}")
        self.square = square
