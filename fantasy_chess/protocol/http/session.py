from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...scoring.service import ReplayResult


class InMemoryReplayStore:
    """Thread-safe in-memory store of finished replays.

    Responsibilities:
    - Keep replay results under a unique `replay_id`
    - Retrieve or delete them by id
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._replays: Dict[str, ReplayResult] = {}

    def create(self, result: ReplayResult) -> str:
        """Store a replay and return its `replay_id`."""
        rid = str(uuid.uuid4())
        with self._lock:
            self._replays[rid] = result
        return rid

    def get(self, replay_id: str) -> Optional[ReplayResult]:
        with self._lock:
            return self._replays.get(replay_id)

    def delete(self, replay_id: str) -> bool:
        with self._lock:
            return self._replays.pop(replay_id, None) is not None
