from __future__ import annotations

import logging
import sqlite3
from typing import Dict, Iterable, Optional, Tuple

from ..engine.game import GameInfo
from ..engine.move import MoveRecord


logger = logging.getLogger(__name__)


SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS Games (
        id TEXT PRIMARY KEY,
        source TEXT NOT NULL,
        source_id TEXT NOT NULL,
        end_time INTEGER,
        white_player_id TEXT NOT NULL,
        white_player_name TEXT NOT NULL,
        white_player_rating INTEGER,
        black_player_id TEXT NOT NULL,
        black_player_name TEXT NOT NULL,
        black_player_rating INTEGER
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS Moves (
        game_id TEXT NOT NULL REFERENCES Games(id),
        move_num INTEGER NOT NULL,
        color TEXT NOT NULL,
        moved_piece TEXT NOT NULL,
        starting_location TEXT NOT NULL,
        ending_location TEXT NOT NULL,
        captured_piece TEXT NOT NULL,
        capture_score INTEGER NOT NULL,
        PRIMARY KEY (game_id, move_num)
    )
    """,
)

_INSERT_GAME = (
    "INSERT INTO Games (id, source, source_id, end_time, "
    "white_player_id, white_player_name, white_player_rating, "
    "black_player_id, black_player_name, black_player_rating) "
    "VALUES (:id, :source, :source_id, :end_time, "
    ":white_player_id, :white_player_name, :white_player_rating, "
    ":black_player_id, :black_player_name, :black_player_rating)"
)

_INSERT_MOVE = (
    "INSERT INTO Moves (game_id, move_num, color, moved_piece, "
    "starting_location, ending_location, captured_piece, capture_score) "
    "VALUES (:game_id, :move_num, :color, :moved_piece, "
    ":starting_location, :ending_location, :captured_piece, :capture_score)"
)


class SQLiteStore:
    """Relational store for replayed games and their per-ply records."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._conn: Optional[sqlite3.Connection] = sqlite3.connect(path)
        with self._conn:
            for stmt in SCHEMA:
                self._conn.execute(stmt)

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise RuntimeError("store is closed")
        return self._conn

    def record_game(self, info: GameInfo, records: Iterable[MoveRecord]) -> int:
        """Insert a game and all of its moves in one transaction.

        Returns:
            int: Number of move rows written.

        Raises:
            sqlite3.Error: On any failure; nothing is committed for the game.
        """
        rows = []
        for rec in records:
            row = rec.to_row()
            row.pop("promotion")
            row["game_id"] = info.id
            rows.append(row)
        with self.conn:
            self.conn.execute(_INSERT_GAME, info.to_row())
            self.conn.executemany(_INSERT_MOVE, rows)
        logger.info("recorded game %s (%d moves)", info.id, len(rows))
        return len(rows)

    def game_ids(self) -> Tuple[str, ...]:
        cur = self.conn.execute("SELECT id FROM Games ORDER BY rowid")
        return tuple(r[0] for r in cur.fetchall())

    def move_count(self, game_id: str) -> int:
        cur = self.conn.execute("SELECT COUNT(*) FROM Moves WHERE game_id = ?", (game_id,))
        return int(cur.fetchone()[0])

    def game_scores(self, game_id: str) -> Dict[Tuple[str, str], int]:
        """Sum captured value per (color, moved_piece) for a stored game."""
        cur = self.conn.execute(
            "SELECT color, moved_piece, SUM(capture_score) FROM Moves "
            "WHERE game_id = ? GROUP BY color, moved_piece",
            (game_id,),
        )
        return {(color, piece): int(total) for color, piece, total in cur.fetchall()}

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "SQLiteStore":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
