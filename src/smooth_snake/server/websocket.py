"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from smooth_snake.controls import InputAction, action_for_key
from smooth_snake.server.session_manager import SessionManager

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _parse_action(raw: str) -> InputAction | None:
    """Decode ``{"action": ...}`` or ``{"key": ...}``; ``None`` if invalid."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None

    action = msg.get("action")
    if isinstance(action, str):
        try:
            return InputAction(action.lower())
        except ValueError:
            return None

    key = msg.get("key")
    if isinstance(key, str):
        return action_for_key(key)
    return None


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Send input actions, receive draw operations and score events."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()
    logger.info("Viewer connected to session %s.", session_id)

    # The snapshot goes out before any frame reaches this viewer.
    async with session.lock:
        state = session.engine.get_state()
        await websocket.send_text(
            json.dumps(
                {"type": "snapshot", "state": state}, separators=(",", ":"),
            ),
        )
        session.sockets.append(websocket)

    try:
        while True:
            action = _parse_action(await websocket.receive_text())
            if action is None:
                continue
            try:
                await manager.apply_action(session_id, action)
            except KeyError:
                # The session was deleted underneath us.
                break
    except WebSocketDisconnect:
        logger.info("Viewer disconnected from session %s.", session_id)
    finally:
        if websocket in session.sockets:
            session.sockets.remove(websocket)
