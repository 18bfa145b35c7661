"""PGN source: turns PGN game streams into encoded move lists.

Moves are parsed and checked by python-chess, then re-encoded into the
compact two-token move encoding so that they replay through the same board
engine as chess.com games.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping, Optional, TextIO

import chess
import chess.pgn

from ..engine.encoding import encode_moves
from ..engine.game import GameInfo
from ..engine.move import Ply
from ..engine.piece import PieceKind
from ..engine.square import Square
from .headers import parse_end_time, parse_rating


logger = logging.getLogger(__name__)

LICHESS_PREFIX = "https://lichess.org/"
CHESS_COM_LINK_PREFIX = "https://www.chess.com/game/live/"

_PROMOTIONS: Dict[int, PieceKind] = {
    chess.QUEEN: PieceKind.QUEEN,
    chess.ROOK: PieceKind.ROOK,
    chess.BISHOP: PieceKind.BISHOP,
    chess.KNIGHT: PieceKind.KNIGHT,
}


class PgnError(ValueError):
    """Raised when a PGN game contains moves that cannot be parsed."""


@dataclass
class PgnGame:
    info: GameInfo
    move_list: str


def read_games(handle: TextIO) -> Iterator[PgnGame]:
    """Yield every standard game in a PGN stream, in file order.

    Non-standard games (odds, Chess960, other variants or custom start
    positions) are skipped.

    Raises:
        PgnError: If a game's mainline contains an illegal or unparsable move.
    """
    while True:
        game = chess.pgn.read_game(handle)
        if game is None:
            return
        if is_nonstandard(game.headers):
            logger.info(
                "skipping non-standard game %s vs %s",
                game.headers.get("White", "?"),
                game.headers.get("Black", "?"),
            )
            continue
        yield convert_game(game)


def is_nonstandard(headers: Mapping[str, str]) -> bool:
    event = headers.get("Event", "").lower()
    if "odds chess" in event or "chess960" in event:
        return True
    variant = headers.get("Variant", "Standard").lower()
    if variant not in ("standard", "chess"):
        return True
    fen = headers.get("FEN")
    return fen is not None and fen != chess.STARTING_FEN


def convert_game(game: chess.pgn.Game) -> PgnGame:
    if game.errors:
        raise PgnError(f"invalid move in PGN game: {game.errors[0]}")
    plies = [to_ply(m) for m in game.mainline_moves()]
    info = game_info(game.headers)
    logger.info(
        "game between %s and %s ending %s: %d plies",
        info.white_player_name,
        info.black_player_name,
        info.end_time,
        len(plies),
    )
    return PgnGame(info=info, move_list=encode_moves(plies))


def to_ply(move: chess.Move) -> Ply:
    promotion: Optional[PieceKind] = None
    if move.promotion is not None:
        promotion = _PROMOTIONS[move.promotion]
    return Ply(Square(move.from_square), Square(move.to_square), promotion)


def game_info(headers: Mapping[str, str]) -> GameInfo:
    h = {k.lower(): v for k, v in headers.items()}
    info = GameInfo()
    info.white_player_name = info.white_player_id = h.get("white", "")
    info.black_player_name = info.black_player_id = h.get("black", "")
    info.white_player_rating = parse_rating(h.get("whiteelo"))
    info.black_player_rating = parse_rating(h.get("blackelo"))

    if "utcdate" in h:
        info.end_time = parse_end_time(h["utcdate"], h.get("utctime", ""))
    else:
        # EndTime carries a timezone suffix ("12:34:56 PST"); only the clock is kept
        end_time = h.get("endtime", "").split(" ")[0]
        info.end_time = parse_end_time(h.get("date", ""), end_time)

    site = h.get("site", "")
    if site.startswith(LICHESS_PREFIX):
        info.source = "lichess.org"
        info.source_id = site[len(LICHESS_PREFIX):]
    else:
        info.source = site.lower()
    link = h.get("link", "")
    if link.startswith(CHESS_COM_LINK_PREFIX):
        info.source_id = link[len(CHESS_COM_LINK_PREFIX):]
    return info
