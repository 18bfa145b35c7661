from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from .board import Board
from .encoding import decode_move_list
from .move import MoveRecord, Ply
from .score import PieceScore, score_records


@dataclass
class GameInfo:
    """Metadata describing where a game came from and who played it."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    source: str = ""
    source_id: str = ""
    end_time: Optional[int] = None
    white_player_id: str = ""
    white_player_name: str = ""
    white_player_rating: Optional[int] = None
    black_player_id: str = ""
    black_player_name: str = ""
    black_player_rating: Optional[int] = None

    def to_row(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Game:
    """Game wrapper around a board with its replay history.

    Responsibility: own one board, apply plies in order, keep their records.
    """

    board: Board
    info: GameInfo = field(default_factory=GameInfo)
    records: List[MoveRecord] = field(default_factory=list)

    @classmethod
    def new(cls, info: Optional[GameInfo] = None) -> "Game":
        return cls(board=Board.startpos(), info=info or GameInfo())

    @classmethod
    def replay(cls, move_list: str, info: Optional[GameInfo] = None) -> "Game":
        """Build a game by replaying a whole encoded move list.

        Raises:
            ReplayError: If any ply fails; the game is abandoned.
        """
        game = cls.new(info)
        for ply in decode_move_list(move_list):
            game.apply(ply)
        return game

    def apply(self, ply: Ply) -> MoveRecord:
        rec = self.board.apply(ply)
        self.records.append(rec)
        return rec

    @property
    def plies(self) -> int:
        return len(self.records)

    def scores(self) -> PieceScore:
        return score_records(self.records)

    def move_rows(self) -> List[Dict[str, Any]]:
        return [r.to_row() for r in self.records]


def replay_game(move_list: str) -> List[MoveRecord]:
    """Replay an encoded move list from the starting position.

    Raises:
        ReplayError: On the first ply that cannot be decoded or applied; no
            partial result is returned.
    """
    return Game.replay(move_list).records


def score_game(move_list: str) -> PieceScore:
    return Game.replay(move_list).scores()
