from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from ..engine.errors import ReplayError
from ..engine.game import Game, GameInfo
from ..engine.move import MoveRecord
from ..engine.score import PieceScore


logger = logging.getLogger(__name__)


@dataclass
class ReplayResult:
    game: Game
    scores: PieceScore
    time_ms: int

    @property
    def info(self) -> GameInfo:
        return self.game.info

    @property
    def records(self) -> List[MoveRecord]:
        return self.game.records

    @property
    def plies(self) -> int:
        return self.game.plies


@dataclass
class GameOutcome:
    """Result slot for one game of a batch: either a result or an error."""

    info: GameInfo
    result: Optional[ReplayResult] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result is not None


class ScoringService:
    """Replays encoded games and credits captures to their starting pieces.

    Each game gets its own board, so independent games can be replayed on
    separate worker threads.
    """

    def __init__(self, workers: int = 1) -> None:
        self.workers = max(1, int(workers))

    def replay(self, move_list: str, info: Optional[GameInfo] = None) -> ReplayResult:
        """Replay and score one game.

        Raises:
            ReplayError: If the move list is corrupt or inconsistent with the
                board; nothing is returned for the game.
        """
        start = time.perf_counter()
        game = Game.replay(move_list, info)
        return ReplayResult(
            game=game,
            scores=game.scores(),
            time_ms=int((time.perf_counter() - start) * 1000),
        )

    def replay_many(
        self,
        games: Iterable[Tuple[GameInfo, str]],
        workers: Optional[int] = None,
    ) -> List[GameOutcome]:
        """Replay independent games, keeping input order in the outcomes.

        A game that fails is reported in its outcome and does not stop the
        others.
        """
        items: Sequence[Tuple[GameInfo, str]] = list(games)
        n_workers = max(1, int(workers if workers is not None else self.workers))
        if n_workers == 1 or len(items) <= 1:
            return [self._replay_one(info, move_list) for info, move_list in items]
        with ThreadPoolExecutor(max_workers=n_workers) as ex:
            return list(ex.map(lambda item: self._replay_one(*item), items))

    def _replay_one(self, info: GameInfo, move_list: str) -> GameOutcome:
        try:
            result = self.replay(move_list, info)
        except ReplayError as e:
            logger.warning("aborted game %s: %s", info.id, e)
            return GameOutcome(info=info, error=str(e))
        logger.debug("replayed game %s: %d plies in %d ms", info.id, result.plies, result.time_ms)
        return GameOutcome(info=info, result=result)
