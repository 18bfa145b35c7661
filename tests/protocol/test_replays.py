from __future__ import annotations

from fastapi.testclient import TestClient

from fantasy_chess.config import Settings
from fantasy_chess.protocol.http.app import create_app


def test_replay_lifecycle(long_game: str) -> None:
    client = TestClient(create_app(Settings()))
    r = client.post("/api/replays", json={"move_list": long_game})
    assert r.status_code == 200
    body = r.json()
    replay_id = body["replay_id"]
    assert replay_id
    assert body["plies"] == 75
    assert body["scores"]["white"]["king"] == 21

    r_moves = client.get(f"/api/replays/{replay_id}/moves")
    assert r_moves.status_code == 200
    moves = r_moves.json()["moves"]
    assert len(moves) == 75
    assert [m["promotion"] for m in moves if m["promotion"]] == ["queen"]

    r_del = client.delete(f"/api/replays/{replay_id}")
    assert r_del.status_code == 200
    assert r_del.json() == {"status": "deleted"}

    r_gone = client.get(f"/api/replays/{replay_id}/moves")
    assert r_gone.status_code == 404
    assert r_gone.json()["error"]["code"] == "not_found"
    assert client.delete(f"/api/replays/{replay_id}").status_code == 404


def test_failed_replay_is_not_stored() -> None:
    client = TestClient(create_app(Settings()))
    r = client.post("/api/replays", json={"move_list": "mCmC"})
    assert r.status_code == 400
