"""REST API route handlers for session lifecycle and input."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, Response

from smooth_snake.server.models import (
    ActionRequest,
    CreateSessionRequest,
    SessionSummary,
)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new, idle game session."""
    manager = _get_manager(request)
    try:
        session = await manager.create_session(
            dimension=body.dimension,
            seed=body.seed,
            squares_per_second=body.squares_per_second,
            super_food_probability=body.super_food_probability,
            autoplay=body.autoplay,
        )
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List all sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the full game state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = session.summary().model_dump()
    result["game"] = session.engine.get_state()
    return result


@router.post("/{session_id}/actions")
async def apply_action(
    session_id: str, body: ActionRequest, request: Request,
) -> dict:
    """Apply a player action (turn, start, reset, autoplay)."""
    try:
        return await _get_manager(request).apply_action(
            session_id, body.action,
        )
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, request: Request) -> Response:
    """Stop and remove a session."""
    try:
        await _get_manager(request).remove_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return Response(status_code=204)
