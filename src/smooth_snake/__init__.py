"""Smooth Snake: animated snake game engine with an autoplay heuristic."""

from smooth_snake.config import GameConfig, Palette
from smooth_snake.engine import EngineState, FrameResult, GameEngine
from smooth_snake.grid import CellType, Grid
from smooth_snake.scorekeeper import Scorekeeper, ScoreObserver
from smooth_snake.snake import Direction, Snake

__all__ = [
    "CellType",
    "Direction",
    "EngineState",
    "FrameResult",
    "GameConfig",
    "GameEngine",
    "Grid",
    "Palette",
    "ScoreObserver",
    "Scorekeeper",
    "Snake",
]
