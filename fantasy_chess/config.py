from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_CHESS_COM_URL = "https://www.chess.com/callback/live/game"


@dataclass(frozen=True)
class Settings:
    """Runtime settings, read from ``FANTASY_CHESS_*`` environment variables."""

    db_path: str = "fantasy_chess.sqlite3"
    workers: int = 1
    chess_com_url: str = DEFAULT_CHESS_COM_URL
    request_timeout_s: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        try:
            workers = int(env.get("FANTASY_CHESS_WORKERS", cls.workers))
            timeout = float(env.get("FANTASY_CHESS_TIMEOUT", cls.request_timeout_s))
        except ValueError as e:
            raise ValueError(f"invalid numeric setting: {e}") from e
        if workers < 1:
            raise ValueError("FANTASY_CHESS_WORKERS must be >= 1")
        return cls(
            db_path=env.get("FANTASY_CHESS_DB", cls.db_path),
            workers=workers,
            chess_com_url=env.get("FANTASY_CHESS_CHESS_COM_URL", cls.chess_com_url).rstrip("/"),
            request_timeout_s=timeout,
            log_level=env.get("FANTASY_CHESS_LOG_LEVEL", cls.log_level).upper(),
        )
