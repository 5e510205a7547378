"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json

import pytest
from starlette.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from smooth_snake.server.app import create_app


@pytest.fixture()
def tc():
    """Starlette TestClient kept open so frame loops share one event loop."""
    with TestClient(create_app()) as client:
        yield client


def _create_session(tc, **body) -> str:
    resp = tc.post("/sessions", json={"dimension": 10, "seed": 1, **body})
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestPlayWebSocket:
    def test_connect_and_receive_snapshot(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            message = json.loads(ws.receive_text())
            assert message["type"] == "snapshot"
            state = message["state"]
            assert state["state"] == "idle"
            assert state["snake"]["body"] == [[4, 4], [5, 4]]
            assert state["food"] is not None

    def test_viewer_counted(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            assert tc.get(f"/sessions/{session_id}").json()["viewers"] == 1

    def test_start_streams_frames(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "start"}))
            message = json.loads(ws.receive_text())
            assert message["type"] == "frame"
            assert message["state"] in ("entering", "game_over")

    def test_key_starts_game(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"key": "ArrowDown"}))
            message = json.loads(ws.receive_text())
            assert message["type"] == "frame"

    def test_invalid_messages_ignored(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text("not json")
            ws.send_text(json.dumps(["start"]))
            ws.send_text(json.dumps({"action": "fly"}))
            ws.send_text(json.dumps({"key": "q"}))
            ws.send_text(json.dumps({"action": "start"}))
            message = json.loads(ws.receive_text())
            assert message["type"] == "frame"

    def test_reset_sends_snapshot_then_repaint(self, tc):
        session_id = _create_session(tc)

        with tc.websocket_connect(f"/sessions/{session_id}/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"action": "reset"}))
            snapshot = json.loads(ws.receive_text())
            assert snapshot["type"] == "snapshot"
            assert snapshot["state"]["state"] == "idle"
            frame = json.loads(ws.receive_text())
            assert frame["type"] == "frame"
            assert frame["ops"][0]["op"] == "clear"
            assert any(e["type"] == "bonus" for e in frame["events"])

    def test_nonexistent_session_rejected(self, tc):
        with pytest.raises(WebSocketDisconnect), tc.websocket_connect(
            "/sessions/nonexistent/play",
        ):
            pass


class TestAppLifespan:
    def test_session_limit_configured(self):
        with TestClient(create_app(max_sessions=1)) as client:
            manager = client.app.state.session_manager
            assert manager._max_sessions == 1
            first = _create_session(client)
            second = _create_session(client)
            assert client.get(f"/sessions/{first}").status_code == 404
            assert client.get(f"/sessions/{second}").status_code == 200
