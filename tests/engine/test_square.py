from __future__ import annotations

import pytest

from fantasy_chess.engine.square import Square, square_to_str, str_to_square


def test_square_names_round_trip() -> None:
    assert str_to_square("e4") == Square.E4
    assert int(Square.E4) == 28
    assert str(Square.E4) == "e4"
    assert f"{Square.H8}" == "h8"
    assert square_to_str(0) == "a1"


def test_file_and_rank() -> None:
    assert Square.E4.file == 4
    assert Square.E4.rank == 3
    assert Square.C7.file_name == "c"


def test_offset_stays_on_board() -> None:
    assert Square.E2.offset(0, 2) == Square.E4
    assert Square.A1.offset(-1, 0) is None
    assert Square.H8.offset(0, 1) is None
    assert Square.D5.offset(-1, 1) == Square.C6


@pytest.mark.parametrize("bad", ["", "e", "i1", "a9", "a0", "E4", "e44"])
def test_invalid_square_names_raise(bad: str) -> None:
    with pytest.raises(ValueError):
        str_to_square(bad)


def test_invalid_square_index_raises() -> None:
    with pytest.raises(ValueError):
        square_to_str(64)
