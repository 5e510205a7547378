"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from smooth_snake.controls import InputAction


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    dimension: int = Field(default=20, ge=4, le=100)
    seed: int | None = None
    squares_per_second: float | None = Field(default=None, gt=0, le=60)
    super_food_probability: float | None = Field(default=None, ge=0, le=1)
    autoplay: bool = False


class ActionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/actions."""

    action: InputAction


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    state: str
    score: int
    autoplay: bool
    dimension: int
    viewers: int
