from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.testclient import TestClient

from fantasy_chess.config import Settings
from fantasy_chess.protocol.http.app import create_app


def test_error_envelope_for_http_exception() -> None:
    app: FastAPI = create_app(Settings())

    @app.get("/boom")
    def boom():  # type: ignore[no-redef]
        raise HTTPException(status_code=400, detail="oops")

    client = TestClient(app)
    r = client.get("/boom")
    assert r.status_code == 400
    body = r.json()
    assert "error" in body
    err = body["error"]
    assert err["code"] == "bad_request"
    assert err["message"] == "oops"
    assert err["type"] == "client_error"
    assert err["request_id"]


def test_decode_error_is_bad_request() -> None:
    client = TestClient(create_app(Settings()))
    r = client.post("/api/score", json={"move_list": "mC0"})
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["code"] == "bad_request"
    assert "odd length" in err["message"]
    assert "square" not in err


def test_missing_piece_reports_square() -> None:
    client = TestClient(create_app(Settings()))
    r = client.post("/api/score", json={"move_list": "mCmC"})
    assert r.status_code == 400
    err = r.json()["error"]
    assert err["square"] == "e2"
    assert "e2" in err["message"]


def test_validation_error_envelope() -> None:
    client = TestClient(create_app(Settings()))
    r = client.post("/api/score", json={})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["code"] == "unprocessable_entity"
    assert any(fe["field"].endswith("move_list") for fe in err["field_errors"])
