"""Headless frame loop for running games without a display."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from smooth_snake.config import GameConfig
from smooth_snake.engine import FrameResult, GameEngine
from smooth_snake.render import RecordingSurface

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of a simulated game."""

    frames: int
    commits: int
    score: int
    length: int
    game_over: bool
    simulated_seconds: float
    wall_time_seconds: float

    def summary(self) -> str:
        outcome = "crashed" if self.game_over else "still running"
        return (
            f"Simulation: {self.frames} frames, {self.commits} moves, "
            f"score {self.score}, length {self.length}, {outcome} after "
            f"{self.simulated_seconds:.1f}s of game time "
            f"({self.wall_time_seconds:.2f}s wall)"
        )


def run_simulation(
    config: GameConfig | None = None,
    *,
    autoplay: bool = True,
    frame_ms: float = 1000 / 60,
    max_frames: int = 100_000,
) -> SimulationResult:
    """Drive one game with synthetic timestamps until it stops.

    With *autoplay* off the snake keeps its heading, so the game ends at the
    first wall unless *max_frames* runs out first.
    """
    if frame_ms <= 0:
        raise ValueError("frame_ms must be positive.")
    config = config if config is not None else GameConfig()
    side = config.board_pixels
    surface = RecordingSurface(side, side)
    engine = GameEngine(config, surface=surface)
    if autoplay:
        engine.toggle_autoplay()
    engine.start()

    start = time.perf_counter()
    timestamp = 0.0
    frames = 0
    while frames < max_frames:
        result = engine.handle_frame(timestamp)
        frames += 1
        # Nobody paints these; keep memory flat on long runs.
        surface.drain()
        if result is FrameResult.STOP:
            break
        timestamp += frame_ms

    sim = SimulationResult(
        frames=frames,
        commits=engine.commits,
        score=engine.score,
        length=len(engine.snake),
        game_over=engine.game_over,
        simulated_seconds=timestamp / 1000,
        wall_time_seconds=time.perf_counter() - start,
    )
    logger.info(sim.summary())
    return sim
