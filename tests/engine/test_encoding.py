from __future__ import annotations

import pytest

from fantasy_chess.engine.encoding import (
    LEFT,
    PROMOTION_MARKERS,
    PROMOTION_TARGETS,
    RIGHT,
    SQUARE_TOKENS,
    STRAIGHT,
    TOKEN_TO_SQUARE,
    decode_move_list,
    decode_ply,
    encode_moves,
    encode_ply,
)
from fantasy_chess.engine.errors import DecodeError, ReplayError
from fantasy_chess.engine.move import Ply, parse_uci
from fantasy_chess.engine.piece import PROMOTION_KINDS, PieceKind
from fantasy_chess.engine.square import Square


def test_alphabet_covers_every_square_once() -> None:
    assert len(SQUARE_TOKENS) == 64
    assert len(set(SQUARE_TOKENS)) == 64
    assert not set(SQUARE_TOKENS) & set(PROMOTION_MARKERS)


@pytest.mark.parametrize(
    "token,square",
    [
        ("a", Square.A1),
        ("h", Square.H1),
        ("m", Square.E2),
        ("C", Square.E4),
        ("K", Square.E5),
        ("0", Square.E7),
        ("4", Square.A8),
        ("!", Square.G8),
        ("?", Square.H8),
    ],
)
def test_token_to_square(token: str, square: Square) -> None:
    assert TOKEN_TO_SQUARE[token] == square


def test_decode_simple_opening() -> None:
    plies = list(decode_move_list("mC0K"))
    assert plies == [Ply(Square.E2, Square.E4), Ply(Square.E7, Square.E5)]


def test_empty_move_list_has_no_plies() -> None:
    assert list(decode_move_list("")) == []


def test_odd_length_fails_before_iteration() -> None:
    with pytest.raises(DecodeError) as exc:
        decode_move_list("mC0")
    assert "odd length 3" in str(exc.value)
    assert isinstance(exc.value, ReplayError)


def test_bad_token_surfaces_at_its_ply() -> None:
    plies = decode_move_list("mC*K")
    assert next(plies) == Ply(Square.E2, Square.E4)
    with pytest.raises(DecodeError):
        next(plies)


def test_unknown_destination_token() -> None:
    with pytest.raises(DecodeError):
        decode_ply("m", "*")


@pytest.mark.parametrize(
    "origin,marker,expected",
    [
        ("W", "~", Ply(Square.A7, Square.A8, PieceKind.QUEEN)),
        ("3", "{", Ply(Square.H7, Square.G8, PieceKind.QUEEN)),
        ("Y", "]", Ply(Square.C7, Square.D8, PieceKind.ROOK)),
        ("j", "(", Ply(Square.B2, Square.A1, PieceKind.KNIGHT)),
        ("o", "$", Ply(Square.G2, Square.H1, PieceKind.BISHOP)),
        ("n", "#", Ply(Square.F2, Square.F1, PieceKind.BISHOP)),
    ],
)
def test_promotion_markers(origin: str, marker: str, expected: Ply) -> None:
    assert decode_ply(origin, marker) == expected


@pytest.mark.parametrize(
    "origin,marker",
    [
        ("i", "{"),  # a2 cannot capture toward the a-file
        ("3", "}"),  # h7 cannot capture toward the h-file
        ("C", "~"),  # e4 is not a promotion rank
    ],
)
def test_promotion_marker_without_destination(origin: str, marker: str) -> None:
    with pytest.raises(DecodeError):
        decode_ply(origin, marker)


def test_every_direction_has_one_marker_per_kind() -> None:
    for df in (LEFT, STRAIGHT, RIGHT):
        kinds = [kind for d, kind in PROMOTION_MARKERS.values() if d == df]
        assert sorted(k.value for k in kinds) == sorted(k.value for k in PROMOTION_KINDS)
    assert len(PROMOTION_TARGETS[STRAIGHT]) == 16
    assert len(PROMOTION_TARGETS[LEFT]) == 14
    assert len(PROMOTION_TARGETS[RIGHT]) == 14


def test_encode_from_uci() -> None:
    plies = [parse_uci(m) for m in ("e2e4", "e7e5", "a7a8q", "b2a1n")]
    assert encode_moves(plies) == "mC0KW~j("


def test_encode_reproduces_full_game(long_game: str) -> None:
    assert encode_moves(decode_move_list(long_game)) == long_game


def test_encode_rejects_impossible_promotion() -> None:
    with pytest.raises(DecodeError):
        encode_ply(Ply(Square.A7, Square.C8, PieceKind.QUEEN))
    # A pawn reaching the last rank without a promotion is a plain move
    assert encode_ply(Ply(Square.E7, Square.E8)) == "08"
