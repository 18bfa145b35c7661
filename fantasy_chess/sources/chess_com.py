"""chess.com live-game source.

The callback endpoint returns ``{"game": {"id": ..., "moveList": ...,
"pgnHeaders": {...}}}`` where ``moveList`` is already in the compact two-token
move encoding.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests

from ..config import DEFAULT_CHESS_COM_URL
from ..engine.game import GameInfo
from .headers import parse_end_time, parse_rating


logger = logging.getLogger(__name__)

SOURCE = "chess.com"


@dataclass
class ChessComGame:
    info: GameInfo
    move_list: str


def parse_game_response(payload: Mapping[str, Any]) -> ChessComGame:
    """Extract the move list and metadata from a callback payload.

    Raises:
        ValueError: If the payload has no ``game.moveList`` string.
    """
    game = payload.get("game") if isinstance(payload, Mapping) else None
    if not isinstance(game, Mapping):
        raise ValueError("malformed chess.com payload: missing 'game'")
    move_list = game.get("moveList")
    if not isinstance(move_list, str):
        raise ValueError("malformed chess.com payload: missing 'game.moveList'")

    source_id = str(game.get("id", ""))
    info = GameInfo(source=SOURCE, source_id=source_id)
    headers: Dict[str, Any] = dict(game.get("pgnHeaders") or {})
    if headers:
        info.white_player_name = info.white_player_id = str(headers.get("White", ""))
        info.black_player_name = info.black_player_id = str(headers.get("Black", ""))
        info.white_player_rating = parse_rating(headers.get("WhiteElo"))
        info.black_player_rating = parse_rating(headers.get("BlackElo"))
        # EndTime may carry a timezone suffix ("12:34:56 PST"); only the clock is kept
        end_time = str(headers.get("EndTime", "")).split(" ")[0]
        info.end_time = parse_end_time(str(headers.get("Date", "")), end_time)
    return ChessComGame(info=info, move_list=move_list)


def fetch_game(
    game_id: str,
    *,
    base_url: str = DEFAULT_CHESS_COM_URL,
    timeout: float = 10.0,
    session: Optional[requests.Session] = None,
) -> ChessComGame:
    """Fetch one live game by id.

    Raises:
        requests.RequestException: On transport or HTTP status errors.
        ValueError: If the response is not a game payload.
    """
    url = f"{base_url.rstrip('/')}/{game_id}"
    logger.info("fetching chess.com game %s", game_id)
    http = session or requests
    resp = http.get(url, timeout=timeout)
    resp.raise_for_status()
    return parse_game_response(resp.json())
