"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from grid_snake.server.app import create_app


@pytest.fixture()
def tc():
    """Starlette TestClient with lifespan, so REST calls, sockets and tick
    clocks share one event loop."""
    with TestClient(create_app()) as client:
        yield client


def _create_game(tc, **overrides) -> str:
    body = {"tick_rate_ms": 2000, "seed": 3, **overrides}
    resp = tc.post("/games", json=body)
    assert resp.status_code == 201
    return resp.json()["game_id"]


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        game_id = _create_game(tc)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["status"] == "not_started"
            assert state["snake"]["length"] == 3
            assert "food" in state
            assert state["grid"] == {"size": 20}

    def test_direction_starts_game(self, tc):
        game_id = _create_game(tc)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "up"}))
            state = json.loads(ws.receive_text())
            assert state["has_started"] is True
            assert state["direction"] == "UP"

    def test_key_and_swipe_input(self, tc):
        game_id = _create_game(tc)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"key": "KeyW"}))
            assert json.loads(ws.receive_text())["direction"] == "UP"
            ws.send_text(json.dumps({"swipe": [-90, 5]}))
            assert json.loads(ws.receive_text())["direction"] == "LEFT"

    def test_pause_and_reset_actions(self, tc):
        game_id = _create_game(tc)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "down"}))
            ws.receive_text()
            ws.send_text(json.dumps({"action": "pause"}))
            assert json.loads(ws.receive_text())["is_paused"] is True
            ws.send_text(json.dumps({"action": "reset"}))
            state = json.loads(ws.receive_text())
            assert state["status"] == "not_started"
            assert state["is_paused"] is False

    def test_invalid_messages_ignored(self, tc):
        game_id = _create_game(tc)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text("123")
            ws.send_text(json.dumps({"direction": "invalid_dir"}))
            ws.send_text(json.dumps({"swipe": "left"}))
            ws.send_text(json.dumps({"no_direction_key": True}))
            ws.send_text(json.dumps({"direction": "down"}))
            state = json.loads(ws.receive_text())
            assert state["direction"] == "DOWN"

    def test_game_over_is_streamed(self, tc):
        game_id = _create_game(
            tc, grid_size=4, teleport_clearance=1, tick_rate_ms=50,
        )
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"direction": "right"}))
            ws.receive_text()
            state = json.loads(ws.receive_text())
            assert state["is_game_over"] is True
            assert state["tick"] == 1

    def test_nonexistent_game_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/games/nonexistent/play",
        ):
            pass


class TestDisconnectHandling:
    def test_disconnect_game_survives(self, tc):
        game_id = _create_game(tc)
        session = tc.app.state.game_manager.get_game(game_id)
        with tc.websocket_connect(f"/games/{game_id}/play") as ws:
            ws.receive_text()
            assert len(session.subscribers) == 1

        resp = tc.get(f"/games/{game_id}")
        assert resp.status_code == 200
        assert resp.json()["status"] == "not_started"
