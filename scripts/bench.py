#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import json
import os
import platform
import sys
import time
from typing import Any, Dict, List, Tuple

# Ensure repo root (which contains `fantasy_chess/`) is importable when running directly
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from fantasy_chess.engine.game import GameInfo
from fantasy_chess.scoring.service import ScoringService
from fantasy_chess.sources.pgn import read_games


# Full game with castling on both sides, en passant and a queen promotion
DEFAULT_GAME = (
    "mC0KlB3NBJYIJQXHfHWGgvZJbs1LcD2Mdl6Seg5QHy7Zae86CJSJeK9IvMIngn!TlJTJsHJDjz"
    "ZBnwBtfvtvwv7tvDQBHBtuKI67Du?8BS70zG87GO7dkALDuDdfDKfTOWTSMSNFW~01491U9TUNTM"
)


def load_games(path: str | None) -> List[Tuple[GameInfo, str]]:
    if not path:
        return [(GameInfo(source="bench"), DEFAULT_GAME)]
    with open(path, "r", encoding="utf-8") as f:
        return [(g.info, g.move_list) for g in read_games(f)]


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark game replay throughput")
    parser.add_argument("--pgn", type=str, default=None, help="PGN file (default: built-in game)")
    parser.add_argument("--repeat", type=int, default=200, help="Replays per game (default: 200)")
    parser.add_argument("--workers", type=int, default=1, help="Worker threads (default: 1)")
    args = parser.parse_args()

    games = load_games(args.pgn) * max(1, args.repeat)
    service = ScoringService(workers=args.workers)

    start = time.perf_counter()
    outcomes = service.replay_many(games)
    dt = time.perf_counter() - start

    plies = sum(o.result.plies for o in outcomes if o.result is not None)
    report: Dict[str, Any] = {
        "python": platform.python_version(),
        "games": len(outcomes),
        "failed": sum(1 for o in outcomes if not o.ok),
        "plies": plies,
        "workers": args.workers,
        "time_ms": int(dt * 1000),
        "plies_per_s": int(plies / max(dt, 1e-9)),
    }
    print(json.dumps(report, indent=2))


if __name__ == "__main__":
    main()
