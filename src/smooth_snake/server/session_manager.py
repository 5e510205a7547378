"""In-memory session registry and per-session async frame loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field

from starlette.websockets import WebSocket, WebSocketState

from smooth_snake.config import GameConfig
from smooth_snake.controls import InputAction, dispatch
from smooth_snake.engine import FrameResult, GameEngine
from smooth_snake.render import RecordingSurface
from smooth_snake.server.models import SessionSummary

logger = logging.getLogger(__name__)

_FRAME_INTERVAL = 1 / 60  # seconds
_MAX_SESSIONS = 100


class _EventQueue:
    """Score observer that buffers changes until the next broadcast."""

    def __init__(self) -> None:
        self.events: list[dict] = []

    def on_score_changed(self, score: int) -> None:
        self.events.append({"type": "score", "score": score})

    def on_bonus_points_changed(self, points: int) -> None:
        self.events.append({"type": "bonus", "points": points})

    def drain(self) -> list[dict]:
        events = self.events
        self.events = []
        return events


@dataclass
class Session:
    """A single game and the sockets watching it."""

    session_id: str
    engine: GameEngine
    surface: RecordingSurface
    events: _EventQueue
    sockets: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def looping(self) -> bool:
        return self._task is not None and not self._task.done()

    def flush(self) -> dict:
        """Collect everything drawn and scored since the last flush."""
        return {
            "type": "frame",
            "state": self.engine.state.value,
            "ops": self.surface.drain(),
            "events": self.events.drain(),
        }

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            state=self.engine.state.value,
            score=self.engine.score,
            autoplay=self.engine.autoplay,
            dimension=self.engine.config.dimension,
            viewers=len(self.sockets),
        )


class SessionManager:
    """Central registry managing all game sessions."""

    def __init__(
        self,
        max_sessions: int = _MAX_SESSIONS,
        frame_interval: float = _FRAME_INTERVAL,
    ) -> None:
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1.")
        if frame_interval <= 0:
            raise ValueError("frame_interval must be positive.")
        self._sessions: dict[str, Session] = {}
        self._max_sessions = max_sessions
        self._frame_interval = frame_interval

    async def create_session(
        self,
        dimension: int = 20,
        seed: int | None = None,
        squares_per_second: float | None = None,
        super_food_probability: float | None = None,
        autoplay: bool = False,
    ) -> Session:
        """Create a new idle game session and return it."""
        overrides: dict = {"dimension": dimension, "seed": seed}
        if squares_per_second is not None:
            overrides["squares_per_second"] = squares_per_second
        if super_food_probability is not None:
            overrides["super_food_probability"] = super_food_probability
        config = GameConfig().with_overrides(**overrides)

        await self._make_room()

        side = config.board_pixels
        surface = RecordingSurface(side, side)
        events = _EventQueue()
        engine = GameEngine(config, surface=surface, observer=events)
        if autoplay:
            engine.toggle_autoplay()

        session_id = uuid.uuid4().hex[:12]
        session = Session(
            session_id=session_id,
            engine=engine,
            surface=surface,
            events=events,
        )
        self._sessions[session_id] = session
        logger.info("Session %s created (%dx%d).", session_id, dimension, dimension)
        return session

    async def _make_room(self) -> None:
        """Evict the oldest session without a frame loop if at capacity."""
        if len(self._sessions) < self._max_sessions:
            return
        idle = [s for s in self._sessions.values() if not s.looping]
        if not idle:
            raise ValueError("Session limit reached. Try again later.")
        oldest = min(idle, key=lambda s: s.created_at)
        del self._sessions[oldest.session_id]
        await self._stop(oldest)
        logger.info("Evicted idle session %s.", oldest.session_id)

    def get_session(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        return [s.summary() for s in self._sessions.values()]

    async def apply_action(
        self, session_id: str, action: InputAction,
    ) -> dict:
        """Apply a player action and return the resulting game state."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")

        async with session.lock:
            dispatch(session.engine, action)
            message = session.flush()
            state = session.engine.get_state()
            if session.engine.running and not session.looping:
                session._task = asyncio.create_task(self._frame_loop(session))
            # Draw operations are incremental; send them in commit order.
            if action is InputAction.RESET:
                await self._broadcast(
                    session, {"type": "snapshot", "state": state},
                )
            await self._broadcast(session, message)
        return state

    async def remove_session(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        await self._stop(session)
        logger.info("Session %s removed.", session_id)

    async def _frame_loop(self, session: Session) -> None:
        """Feed the engine frames until it asks to stop."""
        loop = asyncio.get_running_loop()
        try:
            while True:
                await asyncio.sleep(self._frame_interval)
                async with session.lock:
                    result = session.engine.handle_frame(loop.time() * 1000)
                    message = session.flush()
                    if result is FrameResult.STOP:
                        # Let the next start spawn a fresh loop.
                        session._task = None
                    await self._broadcast(session, message)
                if result is FrameResult.STOP:
                    break
        except asyncio.CancelledError:
            logger.info("Frame loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Frame loop error in session %s.", session.session_id)

    async def _broadcast(self, session: Session, message: dict) -> None:
        """Send a message to every connected viewer of *session*."""
        if message.get("type") == "frame" and not (
            message["ops"] or message["events"]
        ):
            return
        payload = json.dumps(message, separators=(",", ":"))
        dead: list[WebSocket] = []

        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)

        for ws in dead:
            if ws in session.sockets:
                session.sockets.remove(ws)

    async def _stop(self, session: Session) -> None:
        """Cancel the frame loop and close every socket of *session*."""
        task = session._task
        if task is not None and not task.done():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        for ws in list(session.sockets):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Session closed.")
            except Exception:
                logger.warning(
                    "Failed closing socket in session %s.", session.session_id,
                )
        session.sockets.clear()

    async def cleanup(self) -> None:
        """Cancel all running frame loops and drop every session."""
        for session in list(self._sessions.values()):
            await self._stop(session)
        self._sessions.clear()
        logger.info("SessionManager cleanup complete.")
