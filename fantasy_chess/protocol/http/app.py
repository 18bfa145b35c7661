from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional

import requests
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    exception_handler,
    http_exception_handler,
    replay_error_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemoryReplayStore
from ...config import Settings
from ...engine.encoding import encode_moves
from ...engine.errors import ReplayError
from ...engine.move import parse_uci
from ...scoring.service import ReplayResult, ScoringService
from ...sources.chess_com import ChessComGame, fetch_game


logger = logging.getLogger(__name__)

Fetcher = Callable[..., ChessComGame]


class MoveListRequest(BaseModel):
    move_list: str = Field(..., description="Encoded move list, two tokens per ply")


class EncodeRequest(BaseModel):
    moves: List[str] = Field(..., description="UCI moves from the start position, e.g. e2e4")


class EncodeResponse(BaseModel):
    move_list: str


class ScoreResponse(BaseModel):
    plies: int
    scores: Dict[str, Dict[str, int]]


class MovesResponse(BaseModel):
    plies: int
    moves: List[Dict[str, Any]]


class ReplayCreatedResponse(BaseModel):
    replay_id: str
    plies: int
    scores: Dict[str, Dict[str, int]]


def create_app(settings: Optional[Settings] = None, fetch: Optional[Fetcher] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    fetch = fetch or fetch_game
    app = FastAPI(title="Fantasy Chess API", version="0.1.0")

    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(ReplayError, replay_error_handler)
    app.add_exception_handler(Exception, exception_handler)

    service = ScoringService(workers=settings.workers)
    store = InMemoryReplayStore()

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/score", response_model=ScoreResponse)
    async def score(req: MoveListRequest) -> ScoreResponse:
        res = service.replay(req.move_list)
        return ScoreResponse(plies=res.plies, scores=res.scores.to_dict())

    @app.post("/api/replay", response_model=MovesResponse)
    async def replay(req: MoveListRequest) -> MovesResponse:
        res = service.replay(req.move_list)
        return _moves_response(res)

    @app.post("/api/encode", response_model=EncodeResponse)
    async def encode(req: EncodeRequest) -> EncodeResponse:
        try:
            plies = [parse_uci(m) for m in req.moves]
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        return EncodeResponse(move_list=encode_moves(plies))

    @app.post("/api/replays", response_model=ReplayCreatedResponse)
    async def create_replay(req: MoveListRequest) -> ReplayCreatedResponse:
        res = service.replay(req.move_list)
        replay_id = store.create(res)
        return ReplayCreatedResponse(
            replay_id=replay_id, plies=res.plies, scores=res.scores.to_dict()
        )

    @app.get("/api/replays/{replay_id}/moves", response_model=MovesResponse)
    async def replay_moves(replay_id: str) -> MovesResponse:
        return _moves_response(_require_replay(store, replay_id))

    @app.delete("/api/replays/{replay_id}")
    async def delete_replay(replay_id: str) -> Dict[str, str]:
        if not store.delete(replay_id):
            raise HTTPException(status_code=404, detail="replay not found")
        return {"status": "deleted"}

    @app.get("/api/chess-com/{game_id}/score", response_model=ScoreResponse)
    async def chess_com_score(game_id: str) -> ScoreResponse:
        try:
            game = fetch(
                game_id,
                base_url=settings.chess_com_url,
                timeout=settings.request_timeout_s,
            )
        except (requests.RequestException, ValueError) as e:
            logger.warning("chess.com fetch failed for %s: %s", game_id, e)
            raise HTTPException(status_code=502, detail=f"upstream error: {e}")
        res = service.replay(game.move_list, game.info)
        return ScoreResponse(plies=res.plies, scores=res.scores.to_dict())

    return app


def _moves_response(res: ReplayResult) -> MovesResponse:
    return MovesResponse(plies=res.plies, moves=res.game.move_rows())


def _require_replay(store: InMemoryReplayStore, replay_id: str) -> ReplayResult:
    res = store.get(replay_id)
    if res is None:
        raise HTTPException(status_code=404, detail="replay not found")
    return res
