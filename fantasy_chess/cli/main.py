from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional, Tuple

import requests
import uvicorn

from ..config import Settings
from ..engine.errors import ReplayError
from ..engine.game import GameInfo
from ..engine.score import PieceScore
from ..scoring.service import ScoringService
from ..sources.chess_com import fetch_game
from ..sources.pgn import PgnError, read_games
from ..storage.db import SQLiteStore


logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fantasy-chess", description="Credit captured material to the pieces that took it"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_score = sub.add_parser("score", help="Score an encoded move list")
    p_score.add_argument("move_list", help="Encoded move list (whitespace is ignored)")
    p_score.add_argument("--json", action="store_true", help="Print scores as JSON")

    p_game = sub.add_parser("score-game", help="Fetch a chess.com game by ID and score it")
    p_game.add_argument("game_id", help="ID of the game on chess.com")
    p_game.add_argument("--json", action="store_true", help="Print scores as JSON")

    p_ingest = sub.add_parser("ingest", help="Replay games and record them in a database")
    src = p_ingest.add_mutually_exclusive_group(required=True)
    src.add_argument("--pgn", action="append", metavar="PATH", help="PGN file (repeatable)")
    src.add_argument(
        "--chess-com-id", action="append", metavar="ID", help="chess.com game ID (repeatable)"
    )
    p_ingest.add_argument(
        "--db", default=settings.db_path, help=f"SQLite DB file (default: {settings.db_path})"
    )
    p_ingest.add_argument(
        "--workers", type=int, default=settings.workers, help="Games replayed concurrently"
    )

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    return parser


def _print_score(score: PieceScore, as_json: bool) -> None:
    if as_json:
        print(json.dumps(score.to_dict(), indent=2))
    else:
        print(score.format(), end="")


def cmd_score(args: argparse.Namespace, service: ScoringService) -> int:
    move_list = "".join(args.move_list.split())
    try:
        res = service.replay(move_list)
    except ReplayError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    _print_score(res.scores, args.json)
    return 0


def cmd_score_game(args: argparse.Namespace, service: ScoringService, settings: Settings) -> int:
    try:
        game = fetch_game(
            args.game_id, base_url=settings.chess_com_url, timeout=settings.request_timeout_s
        )
        res = service.replay(game.move_list, game.info)
    except (requests.RequestException, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    _print_score(res.scores, args.json)
    return 0


def _collect_games(args: argparse.Namespace, settings: Settings) -> Tuple[List[Tuple[GameInfo, str]], int]:
    games: List[Tuple[GameInfo, str]] = []
    failed = 0
    for path in args.pgn or []:
        try:
            with open(path, "r", encoding="utf-8") as f:
                games.extend((g.info, g.move_list) for g in read_games(f))
        except (OSError, PgnError) as e:
            logger.error("could not read %s: %s", path, e)
            failed += 1
    for game_id in args.chess_com_id or []:
        try:
            game = fetch_game(
                game_id, base_url=settings.chess_com_url, timeout=settings.request_timeout_s
            )
        except (requests.RequestException, ValueError) as e:
            logger.error("could not fetch chess.com game %s: %s", game_id, e)
            failed += 1
            continue
        games.append((game.info, game.move_list))
    return games, failed


def cmd_ingest(args: argparse.Namespace, service: ScoringService, settings: Settings) -> int:
    if args.workers < 1:
        print("error: --workers must be >= 1", file=sys.stderr)
        return 2
    games, failed = _collect_games(args, settings)
    outcomes = service.replay_many(games, workers=args.workers)
    recorded = 0
    with SQLiteStore(args.db) as store:
        for outcome in outcomes:
            if outcome.result is None:
                failed += 1
                continue
            store.record_game(outcome.info, outcome.result.records)
            recorded += 1
    print(f"recorded {recorded} game(s) in {args.db}; {failed} failed")
    return 1 if failed else 0


def cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run(
        "fantasy_chess.protocol.http.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    level = logging.DEBUG if args.verbose else getattr(logging, settings.log_level, logging.INFO)
    logging.basicConfig(level=level)

    service = ScoringService(workers=settings.workers)
    if args.command == "score":
        return cmd_score(args, service)
    if args.command == "score-game":
        return cmd_score_game(args, service, settings)
    if args.command == "ingest":
        return cmd_ingest(args, service, settings)
    return cmd_serve(args)


if __name__ == "__main__":
    sys.exit(main())
