from __future__ import annotations

from enum import IntEnum
from typing import Optional


FILES = "abcdefgh"


class Square(IntEnum):
    """Board square, rank-major from white's side (a1=0 .. h8=63)."""

    A1, B1, C1, D1, E1, F1, G1, H1 = range(0, 8)
    A2, B2, C2, D2, E2, F2, G2, H2 = range(8, 16)
    A3, B3, C3, D3, E3, F3, G3, H3 = range(16, 24)
    A4, B4, C4, D4, E4, F4, G4, H4 = range(24, 32)
    A5, B5, C5, D5, E5, F5, G5, H5 = range(32, 40)
    A6, B6, C6, D6, E6, F6, G6, H6 = range(40, 48)
    A7, B7, C7, D7, E7, F7, G7, H7 = range(48, 56)
    A8, B8, C8, D8, E8, F8, G8, H8 = range(56, 64)

    @property
    def file(self) -> int:
        return self % 8

    @property
    def rank(self) -> int:
        return self // 8

    @property
    def file_name(self) -> str:
        return FILES[self.file]

    def offset(self, df: int, dr: int) -> Optional["Square"]:
        """Return the square ``df`` files and ``dr`` ranks away, or None off-board."""
        f, r = self.file + df, self.rank + dr
        if 0 <= f < 8 and 0 <= r < 8:
            return Square(r * 8 + f)
        return None

    def __str__(self) -> str:
        return square_to_str(self)

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


def str_to_square(s: str) -> Square:
    """Convert algebraic notation into a Square.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Square: The named square.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    file = ord(s[0]) - ord("a")
    rank = int(s[1]) - 1
    return Square(rank * 8 + file)


def square_to_str(idx: int) -> str:
    """Convert a 0-based square index into algebraic notation.

    Raises:
        ValueError: If ``idx`` is outside the valid square range.
    """
    if idx < 0 or idx > 63:
        raise ValueError(f"invalid square index: {idx}")
    return FILES[idx % 8] + str(idx // 8 + 1)
