"""FastAPI application serving snake sessions over REST and websockets.

Each session runs its own frame loop inside the server's event loop; the
lifespan owns the registry and stops every loop on shutdown.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from smooth_snake.server.routes import router
from smooth_snake.server.session_manager import (
    _FRAME_INTERVAL,
    _MAX_SESSIONS,
    SessionManager,
)
from smooth_snake.server.websocket import ws_router

logger = logging.getLogger(__name__)


def create_app(
    max_sessions: int = _MAX_SESSIONS,
    frame_interval: float = _FRAME_INTERVAL,
) -> FastAPI:
    """Build the application.

    *max_sessions* bounds the registry and *frame_interval* is the delay, in
    seconds, between frames of a running game.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.session_manager = SessionManager(
            max_sessions=max_sessions, frame_interval=frame_interval,
        )
        logger.info(
            "Session manager started (max %d sessions, %.0f fps).",
            max_sessions, 1 / frame_interval,
        )
        yield
        await app.state.session_manager.cleanup()

    app = FastAPI(
        title="Smooth Snake API", version="0.1.0", lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
