from __future__ import annotations

import pytest

from fantasy_chess.engine.board import Board
from fantasy_chess.engine.errors import PieceNotFound
from fantasy_chess.engine.piece import STARTING_LAYOUT, Piece, PieceKind
from fantasy_chess.engine.square import Square


def _kings_and_rooks() -> Board:
    squares = (Square.E1, Square.A1, Square.H1, Square.E8, Square.A8, Square.H8)
    return Board(pieces={sq: Piece(STARTING_LAYOUT[sq]) for sq in squares})


@pytest.mark.parametrize(
    "king_from,king_to,rook_from,rook_to",
    [
        (Square.E1, Square.G1, Square.H1, Square.F1),
        (Square.E1, Square.C1, Square.A1, Square.D1),
        (Square.E8, Square.G8, Square.H8, Square.F8),
        (Square.E8, Square.C8, Square.A8, Square.D8),
    ],
)
def test_castling_moves_king_and_rook(
    king_from: Square, king_to: Square, rook_from: Square, rook_to: Square
) -> None:
    b = _kings_and_rooks()
    king = b.piece_at(king_from)
    rook = b.piece_at(rook_from)
    rec = b.apply_ply(king_from, king_to)
    assert b.piece_at(king_to) == king
    assert b.piece_at(rook_to) == rook
    assert b.piece_at(king_from) is None
    assert b.piece_at(rook_from) is None
    assert rec.captured is None
    assert rec.capture_score == 0
    assert b.occupancy() == 6


def test_castling_without_rook_raises() -> None:
    b = Board(pieces={Square.E1: Piece(STARTING_LAYOUT[Square.E1])})
    with pytest.raises(PieceNotFound) as exc:
        b.apply_ply(Square.E1, Square.G1)
    assert exc.value.square == Square.H1
    # Board untouched
    assert b.piece_at(Square.E1) is not None
    assert b.piece_at(Square.G1) is None
    assert b.move_num == 0


def test_non_king_on_castling_path_moves_alone() -> None:
    rook = Piece(STARTING_LAYOUT[Square.A1])
    b = Board(pieces={Square.E1: rook, Square.H1: Piece(STARTING_LAYOUT[Square.H1])})
    b.apply_ply(Square.E1, Square.G1)
    assert b.piece_at(Square.G1) == rook
    assert b.piece_at(Square.H1) is not None
    assert b.piece_at(Square.F1) is None


def test_king_step_is_not_castling() -> None:
    b = _kings_and_rooks()
    b.apply_ply(Square.E1, Square.F1)
    assert b.piece_at(Square.H1) is not None
    king = b.piece_at(Square.F1)
    assert king is not None and king.kind == PieceKind.KING
