from __future__ import annotations

import pytest

from fantasy_chess.engine.board import Board
from fantasy_chess.engine.encoding import decode_move_list
from fantasy_chess.engine.errors import PieceNotFound
from fantasy_chess.engine.piece import Color, PieceId, PieceKind
from fantasy_chess.engine.square import Square


def _play(board: Board, move_list: str) -> list:
    return [board.apply(ply) for ply in decode_move_list(move_list)]


def test_startpos_placement() -> None:
    b = Board.startpos()
    assert b.occupancy() == 32
    assert b.placement() == "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
    assert b.last_move is None
    assert b.move_num == 0


def test_plain_move_keeps_identity() -> None:
    b = Board.startpos()
    rec = b.apply_ply(Square.E2, Square.E4)
    assert rec.move_num == 1
    assert rec.mover == PieceId(PieceKind.PAWN, Color.WHITE, "e")
    assert rec.captured is None
    assert rec.capture_score == 0
    assert b.piece_at(Square.E2) is None
    piece = b.piece_at(Square.E4)
    assert piece is not None and piece.identity == rec.mover
    assert b.occupancy() == 32


def test_capture_record_row() -> None:
    b = Board.startpos()
    records = _play(b, "mCZJCJ")  # e4 d5 exd5
    rec = records[-1]
    assert rec.captured == PieceId(PieceKind.PAWN, Color.BLACK, "d")
    assert rec.capture_score == 1
    assert b.occupancy() == 31
    assert rec.to_row() == {
        "move_num": 3,
        "color": "white",
        "moved_piece": "pawn_e",
        "starting_location": "e4",
        "ending_location": "d5",
        "captured_piece": "pawn_d",
        "capture_score": 1,
        "promotion": None,
    }


def test_empty_origin_raises_and_leaves_board() -> None:
    b = Board.startpos()
    with pytest.raises(PieceNotFound) as exc:
        b.apply_ply(Square.E3, Square.E4)
    assert exc.value.square == Square.E3
    assert "e3" in str(exc.value)
    assert b.occupancy() == 32
    assert b.move_num == 0
    assert b.last_move is None


def test_occupancy_only_drops_on_capture(long_game: str) -> None:
    b = Board.startpos()
    for ply in decode_move_list(long_game):
        before = b.occupancy()
        rec = b.apply(ply)
        expected = before if rec.captured is None else before - 1
        assert b.occupancy() == expected
        landed = b.piece_at(rec.destination)
        assert landed is not None and landed.identity == rec.mover
        assert b.piece_at(rec.origin) is None
    assert b.move_num == 75


def test_placement_matches_known_position() -> None:
    b = Board.startpos()
    _play(b, "mC0Kgv5QfA9Ieg")  # e4 e5 Nf3 Nc6 Bc4 Bc5 O-O
    assert b.placement() == "r1bqk1nr/pppp1ppp/2n5/2b1p3/2B1P3/5N2/PPPP1PPP/RNBQ1RK1"
