from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .piece import Color, PieceId, PieceKind
from .square import Square, str_to_square


UCI_PROMOTIONS = {
    "q": PieceKind.QUEEN,
    "r": PieceKind.ROOK,
    "b": PieceKind.BISHOP,
    "n": PieceKind.KNIGHT,
}
_PROMOTION_TO_UCI = {v: k for k, v in UCI_PROMOTIONS.items()}


@dataclass(frozen=True)
class Ply:
    """One decoded half-move.

    Attributes:
        origin (Square): Square the moving piece leaves.
        destination (Square): Square the moving piece lands on.
        promotion (Optional[PieceKind]): Promoted kind, if this is a promotion.
    """

    origin: Square
    destination: Square
    promotion: Optional[PieceKind] = None

    def to_uci(self) -> str:
        """Serialize the ply into long algebraic UCI form.

        Returns:
            str: Move encoded like ``"e2e4"`` or ``"e7e8q"``.
        """
        suffix = _PROMOTION_TO_UCI[self.promotion] if self.promotion else ""
        return str(self.origin) + str(self.destination) + suffix


def parse_uci(uci: str) -> Ply:
    """Parse a UCI move string.

    Args:
        uci (str): Move encoded in long algebraic notation (e.g. ``"e2e4"``).

    Returns:
        Ply: Parsed ply.

    Raises:
        ValueError: If the string has an invalid length, squares, or promotion
            piece.
    """
    if len(uci) not in (4, 5):
        raise ValueError(f"invalid UCI move length: {uci!r}")
    origin = str_to_square(uci[0:2])
    destination = str_to_square(uci[2:4])
    promo: Optional[PieceKind] = None
    if len(uci) == 5:
        promo = UCI_PROMOTIONS.get(uci[4].lower())
        if promo is None:
            raise ValueError(f"invalid promotion piece: {uci[4]!r}")
    return Ply(origin, destination, promo)


@dataclass(frozen=True)
class MoveRecord:
    """Outcome of applying one ply to a board."""

    move_num: int
    mover: PieceId
    origin: Square
    destination: Square
    captured: Optional[PieceId] = None
    capture_score: int = 0
    promotion: Optional[PieceKind] = None

    @property
    def color(self) -> Color:
        return self.mover.color

    @property
    def moved_piece(self) -> str:
        return self.mover.name

    @property
    def captured_piece(self) -> str:
        return self.captured.name if self.captured is not None else ""

    def to_row(self) -> Dict[str, Any]:
        """Flatten into plain values for persistence and JSON responses."""
        return {
            "move_num": self.move_num,
            "color": str(self.color),
            "moved_piece": self.moved_piece,
            "starting_location": str(self.origin),
            "ending_location": str(self.destination),
            "captured_piece": self.captured_piece,
            "capture_score": self.capture_score,
            "promotion": str(self.promotion) if self.promotion else None,
        }
