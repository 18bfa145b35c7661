"""Compact move-list codec.

Each ply is two characters: an origin token followed by a destination token.
The 64 square tokens map in order onto a1..h1, a2..h2, ..., a8..h8. A
destination token outside that alphabet is a promotion marker: it names the
promoted kind and the direction of the promoting pawn (straight, toward the
a-file, or toward the h-file), and the true destination square follows from
the origin square.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Tuple

from .errors import DecodeError
from .move import Ply
from .piece import PieceKind
from .square import Square


SQUARE_TOKENS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!?"

TOKEN_TO_SQUARE: Dict[str, Square] = {ch: Square(i) for i, ch in enumerate(SQUARE_TOKENS)}
SQUARE_TO_TOKEN: Dict[Square, str] = {sq: ch for ch, sq in TOKEN_TO_SQUARE.items()}

# File shift of the promoting pawn: toward the a-file, straight, toward the h-file
LEFT, STRAIGHT, RIGHT = -1, 0, 1

# Marker -> (file shift, promoted kind)
PROMOTION_MARKERS: Dict[str, Tuple[int, PieceKind]] = {
    "~": (STRAIGHT, PieceKind.QUEEN),
    "^": (STRAIGHT, PieceKind.KNIGHT),
    "_": (STRAIGHT, PieceKind.ROOK),
    "#": (STRAIGHT, PieceKind.BISHOP),
    "{": (LEFT, PieceKind.QUEEN),
    "(": (LEFT, PieceKind.KNIGHT),
    "[": (LEFT, PieceKind.ROOK),
    "@": (LEFT, PieceKind.BISHOP),
    "}": (RIGHT, PieceKind.QUEEN),
    ")": (RIGHT, PieceKind.KNIGHT),
    "]": (RIGHT, PieceKind.ROOK),
    "$": (RIGHT, PieceKind.BISHOP),
}
MARKER_FOR: Dict[Tuple[int, PieceKind], str] = {v: k for k, v in PROMOTION_MARKERS.items()}


def _promotion_targets(df: int) -> Dict[Square, Square]:
    # Pawns promote from the 7th rank onto the 8th (white) or the 2nd onto the 1st (black)
    table: Dict[Square, Square] = {}
    for origin in Square:
        if origin.rank == 6:
            dest = origin.offset(df, 1)
        elif origin.rank == 1:
            dest = origin.offset(df, -1)
        else:
            continue
        if dest is not None:
            table[origin] = dest
    return table


PROMOTION_TARGETS: Dict[int, Dict[Square, Square]] = {
    df: _promotion_targets(df) for df in (LEFT, STRAIGHT, RIGHT)
}


def decode_ply(origin_token: str, dest_token: str) -> Ply:
    """Decode one origin/destination token pair.

    Raises:
        DecodeError: If either token is not in the alphabet, or a promotion
            marker has no destination from the given origin.
    """
    origin = TOKEN_TO_SQUARE.get(origin_token)
    if origin is None:
        raise DecodeError(f"unrecognized origin token: {origin_token!r}")
    dest = TOKEN_TO_SQUARE.get(dest_token)
    if dest is not None:
        return Ply(origin, dest)
    marker = PROMOTION_MARKERS.get(dest_token)
    if marker is None:
        raise DecodeError(f"unrecognized destination token: {dest_token!r}")
    df, kind = marker
    dest = PROMOTION_TARGETS[df].get(origin)
    if dest is None:
        raise DecodeError(f"promotion marker {dest_token!r} has no destination from {origin}")
    return Ply(origin, dest, kind)


def decode_move_list(move_list: str) -> Iterator[Ply]:
    """Decode a full game's move list into a lazy sequence of plies.

    The length check happens immediately; token errors surface when the
    offending ply is reached.

    Raises:
        DecodeError: If ``move_list`` has odd length.
    """
    if len(move_list) % 2:
        raise DecodeError(
            f"move list has odd length {len(move_list)}: "
            f"dangling origin token {move_list[-1]!r}"
        )
    return _iter_plies(move_list)


def _iter_plies(move_list: str) -> Iterator[Ply]:
    for i in range(0, len(move_list), 2):
        yield decode_ply(move_list[i], move_list[i + 1])


def encode_ply(ply: Ply) -> str:
    """Encode a ply as its two-token form.

    Raises:
        DecodeError: If a promotion's geometry has no marker.
    """
    origin_token = SQUARE_TO_TOKEN[ply.origin]
    if ply.promotion is None:
        return origin_token + SQUARE_TO_TOKEN[ply.destination]
    df = ply.destination.file - ply.origin.file
    if PROMOTION_TARGETS.get(df, {}).get(ply.origin) != ply.destination:
        raise DecodeError(f"no promotion marker for {ply.to_uci()}")
    return origin_token + MARKER_FOR[(df, ply.promotion)]


def encode_moves(plies: Iterable[Ply]) -> str:
    return "".join(encode_ply(p) for p in plies)
