from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional

from .square import Square


class Color(Enum):
    WHITE = "white"
    BLACK = "black"

    def __str__(self) -> str:
        return self.value


class PieceKind(Enum):
    KING = "king"
    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"
    PAWN = "pawn"

    @property
    def material(self) -> int:
        return MATERIAL[self]

    def __str__(self) -> str:
        return self.value


MATERIAL: Dict[PieceKind, int] = {
    PieceKind.KING: 0,
    PieceKind.QUEEN: 9,
    PieceKind.ROOK: 5,
    PieceKind.BISHOP: 3,
    PieceKind.KNIGHT: 3,
    PieceKind.PAWN: 1,
}

PROMOTION_KINDS = (PieceKind.QUEEN, PieceKind.ROOK, PieceKind.BISHOP, PieceKind.KNIGHT)


@dataclass(frozen=True)
class PieceId:
    """Permanent identity of a starting piece.

    The starting file tells apart pieces that exist in pairs (rooks, knights,
    bishops) or eights (pawns). It never changes, even after promotion, so it
    is the key under which captures are credited.
    """

    kind: PieceKind
    color: Color
    file: str

    @property
    def name(self) -> str:
        """Display name such as ``"king"``, ``"rook_a"`` or ``"pawn_e"``."""
        if self.kind in (PieceKind.KING, PieceKind.QUEEN):
            return self.kind.value
        return f"{self.kind.value}_{self.file}"

    def __str__(self) -> str:
        return f"{self.color} {self.name}"


@dataclass(frozen=True)
class Piece:
    """A piece on the board: its identity plus an optional promotion override."""

    identity: PieceId
    promoted_kind: Optional[PieceKind] = None

    @property
    def kind(self) -> PieceKind:
        return self.identity.kind

    @property
    def current_kind(self) -> PieceKind:
        """Kind the piece moves as now: the promoted kind, if any."""
        return self.promoted_kind or self.identity.kind

    @property
    def color(self) -> Color:
        return self.identity.color

    @property
    def value(self) -> int:
        return self.current_kind.material

    def promote(self, kind: PieceKind) -> "Piece":
        if kind not in PROMOTION_KINDS:
            raise ValueError(f"cannot promote to {kind}")
        return replace(self, promoted_kind=kind)


_BACK_RANK = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _starting_layout() -> Dict[Square, PieceId]:
    layout: Dict[Square, PieceId] = {}
    for file_idx, kind in enumerate(_BACK_RANK):
        file = Square(file_idx).file_name
        layout[Square(file_idx)] = PieceId(kind, Color.WHITE, file)
        layout[Square(8 + file_idx)] = PieceId(PieceKind.PAWN, Color.WHITE, file)
        layout[Square(48 + file_idx)] = PieceId(PieceKind.PAWN, Color.BLACK, file)
        layout[Square(56 + file_idx)] = PieceId(kind, Color.BLACK, file)
    return layout


# Square -> identity of the piece standing there at game start
STARTING_LAYOUT: Dict[Square, PieceId] = _starting_layout()


def _roster(color: Color) -> List[PieceId]:
    # Display order: king, queen, rooks, knights, bishops, then pawns a..h
    order = [
        (PieceKind.KING, "e"),
        (PieceKind.QUEEN, "d"),
        (PieceKind.ROOK, "a"),
        (PieceKind.ROOK, "h"),
        (PieceKind.KNIGHT, "b"),
        (PieceKind.KNIGHT, "g"),
        (PieceKind.BISHOP, "c"),
        (PieceKind.BISHOP, "f"),
    ]
    order += [(PieceKind.PAWN, f) for f in "abcdefgh"]
    return [PieceId(kind, color, file) for kind, file in order]


WHITE_PIECES: List[PieceId] = _roster(Color.WHITE)
BLACK_PIECES: List[PieceId] = _roster(Color.BLACK)
ALL_PIECES: List[PieceId] = WHITE_PIECES + BLACK_PIECES
