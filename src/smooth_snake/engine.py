"""Frame-driven motion engine composing grid, snake, score and autoplay.

The snake moves continuously: once a head cell is committed it is filled in
a little more on every frame, while the tail cell is erased at the same rate.
When the head cell is completely filled the engine commits the next one,
which is where turns, collisions and food are resolved.
"""

from __future__ import annotations

import enum
import logging

import numpy as np

from smooth_snake.config import GameConfig
from smooth_snake.grid import CellType, Grid
from smooth_snake.pathfinder import next_heading
from smooth_snake.render import NullSurface, Surface
from smooth_snake.scorekeeper import Scorekeeper, ScoreObserver
from smooth_snake.snake import Direction, Snake

logger = logging.getLogger(__name__)


class EngineState(enum.Enum):
    """Lifecycle of the motion state machine."""

    IDLE = "idle"
    ENTERING = "entering"
    AWAITING_COMMIT = "awaiting_commit"
    GAME_OVER = "game_over"


class FrameResult(enum.Enum):
    """Whether the scheduler should request another frame."""

    CONTINUE = "continue"
    STOP = "stop"


class GameEngine:
    """Single-snake, frame-driven game engine.

    The engine owns the grid, the snake and the scorekeeper. It never
    schedules itself: a scheduler calls :meth:`handle_frame` with a
    non-decreasing timestamp in milliseconds and keeps doing so while it
    returns :attr:`FrameResult.CONTINUE`.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        surface: Surface | None = None,
        observer: ScoreObserver | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.surface = surface if surface is not None else NullSurface()
        self.observer = observer
        self.rng = np.random.default_rng(self.config.seed)
        self._colors = {
            CellType.EMPTY: self.config.palette.grass,
            CellType.BODY: self.config.palette.snake,
            CellType.FOOD: self.config.palette.food,
            CellType.SUPER_FOOD: self.config.palette.super_food,
        }
        self.reset()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Discard the current game and set up a fresh, idle one."""
        dimension = self.config.dimension
        self.grid = Grid(dimension)
        self.snake = Snake(len(self.grid))
        self.scorekeeper = Scorekeeper(self.observer)

        self.running = False
        self.game_over = False
        self.autoplay = False
        self.boosted = False
        self.squares_per_second = self.config.squares_per_second
        self.entered_at: float | None = None
        self.is_eating = False
        self.frames = 0
        self.commits = 0

        self.surface.clear(self.config.palette.grass)
        mid = dimension // 2 - 1
        self._place_snake(
            self.grid.to_index(mid, mid),
            Direction.RIGHT,
            self.config.initial_length,
        )
        self.food_cell = self._add_random_food()
        logger.info("Game reset on a %dx%d grid.", dimension, dimension)

    def start(self) -> bool:
        """Start an idle game.

        Returns ``True`` when the engine went from idle to running, i.e. when
        the caller should begin requesting frames.
        """
        if self.game_over:
            logger.info("Ignoring start: game is over, reset first.")
            return False
        if self.running:
            return False
        self.running = True
        logger.info("Game started.")
        return True

    def toggle_autoplay(self) -> bool:
        """Switch autoplay on or off and return the new setting."""
        if self.autoplay:
            self.autoplay = False
            self.squares_per_second /= self.config.auto_boost
        else:
            self.autoplay = True
            self.squares_per_second *= self.config.auto_boost
        logger.info("Autoplay %s.", "enabled" if self.autoplay else "disabled")
        return self.autoplay

    def push_turn(self, direction: Direction) -> bool:
        """Queue a turn from the player. Ignored while autoplay steers."""
        if self.autoplay:
            return False
        self.snake.push_turn(direction)
        return True

    @property
    def state(self) -> EngineState:
        if self.game_over:
            return EngineState.GAME_OVER
        if not self.running:
            return EngineState.IDLE
        if self.entered_at is None:
            return EngineState.AWAITING_COMMIT
        return EngineState.ENTERING

    @property
    def score(self) -> int:
        return self.scorekeeper.score

    @property
    def bonus_points(self) -> int:
        return self.scorekeeper.bonus_points

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    def handle_frame(self, timestamp: float) -> FrameResult:
        """Advance the animation to *timestamp* (milliseconds)."""
        if not self.running:
            return FrameResult.STOP
        self.frames += 1

        if self.entered_at is None:
            return self._commit_next_head(timestamp)

        elapsed = timestamp - self.entered_at
        proportion = elapsed * self.squares_per_second / 1000
        if proportion < 1:
            self._draw_partial_head(proportion)
            if not self.is_eating:
                self._erase_partial_tail(proportion)
            return FrameResult.CONTINUE

        # The head cell is completely filled in.
        self._paint(self.snake.head, CellType.BODY)
        if not self.is_eating:
            self._remove_tail()
        if self.autoplay:
            heading = next_heading(self.grid, self.snake, self.food_cell)
            if heading is not None:
                self.snake.push_turn(heading)
        return self._commit_next_head(timestamp)

    def _commit_next_head(self, timestamp: float) -> FrameResult:
        """Choose the next head cell and start entering it."""
        self.snake.apply_next_turn()
        self.scorekeeper.decrement_bonus_points()

        next_cell = self.grid.step(self.snake.head, self.snake.direction)
        if not self.grid.is_traversable(next_cell):
            self._crash()
            return FrameResult.STOP

        # Look before entering; new food is placed once the snake has grown.
        is_food = self.grid.is_food(next_cell)
        is_super_food = self.grid.is_super_food(next_cell)
        self._enter_cell(next_cell, timestamp, is_food)

        if is_food:
            self._eat(is_super_food)
        return FrameResult.CONTINUE

    def _enter_cell(self, cell: int, timestamp: float, is_food: bool) -> None:
        self.entered_at = timestamp
        self.is_eating = is_food
        self.snake.add_at_head(cell)
        # Occupied from now on even though it is drawn a bit at a time.
        self.grid.set(cell, CellType.BODY)
        self.commits += 1

    def _eat(self, is_super_food: bool) -> None:
        if is_super_food and not self.boosted:
            self.boosted = True
            self.squares_per_second *= self.config.boost
        elif not is_super_food and self.boosted:
            self.boosted = False
            self.squares_per_second /= self.config.boost

        self.scorekeeper.increment_score()
        self.squares_per_second *= self.config.speed_up
        logger.debug(
            "Ate %s; score %d, speed %.2f cells/s.",
            "super food" if is_super_food else "food",
            self.scorekeeper.score,
            self.squares_per_second,
        )
        self.food_cell = self._add_random_food()

    def _crash(self) -> None:
        self.running = False
        self.game_over = True
        logger.info(
            "Snake crashed after %d moves with score %d.",
            self.commits, self.scorekeeper.score,
        )

    # ------------------------------------------------------------------
    # Board setup
    # ------------------------------------------------------------------

    def _place_snake(
        self, tail: int, direction: Direction, length: int,
    ) -> None:
        self.snake.direction = direction
        cell = tail
        for _ in range(length):
            self.snake.add_at_head(cell)
            self._paint(cell, CellType.BODY)
            cell = self.grid.step(cell, direction)

    def _add_random_food(self) -> int | None:
        """Place food on a random empty cell and reset the bonus."""
        cell = self.grid.random_cell(CellType.EMPTY, self.rng)
        if cell is None:
            logger.warning("No empty cell left for food.")
            return None

        super_food = (
            not self.boosted
            and self.rng.random() < self.config.super_food_probability
        )
        if super_food:
            self._paint(cell, CellType.SUPER_FOOD)
            bonus = self.config.super_food_bonus
        else:
            self._paint(cell, CellType.FOOD)
            bonus = self.config.food_bonus

        distance = self.grid.manhattan_distance(cell, self.snake.head)
        self.scorekeeper.set_bonus_points(distance + bonus)
        return cell

    def _remove_tail(self) -> None:
        vacated = self.snake.remove_tail()
        self._paint(vacated, CellType.EMPTY)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _paint(self, cell: int, cell_type: CellType) -> None:
        """Set a cell's state and draw it completely."""
        self.grid.set(cell, cell_type)
        size = self.config.cell_size
        inset = self.config.inset
        x, y = self.grid.to_xy(cell)
        self.surface.fill_rect(
            x * size, y * size, size, size, self.config.palette.grass,
        )
        if cell_type != CellType.EMPTY:
            self.surface.fill_rect(
                x * size + inset,
                y * size + inset,
                size - 2 * inset,
                size - 2 * inset,
                self._colors[cell_type],
            )

    def _draw_partial_head(self, proportion: float) -> None:
        self._partial_fill(
            self.snake.head,
            self.snake.direction,
            proportion,
            self.config.palette.snake,
        )

    def _erase_partial_tail(self, proportion: float) -> None:
        tail = self.snake.tail
        direction = self.grid.direction(tail, self.snake.after_tail)
        if direction is None:
            return
        self._partial_fill(
            tail, direction, proportion, self.config.palette.grass,
        )

    def _partial_fill(
        self,
        cell: int,
        direction: Direction,
        proportion: float,
        color: str,
    ) -> None:
        """Fill the part of *cell* already crossed when moving *direction*."""
        size = self.config.cell_size
        inset = self.config.inset
        inner = size - 2 * inset
        cx, cy = self.grid.to_xy(cell)
        x = cx * size + inset
        y = cy * size + inset
        width = height = inner

        dx, dy = direction.value
        if dx != 0:
            width = inner * proportion
            if dx == -1:
                x += inner * (1 - proportion)
        else:
            height = inner * proportion
            if dy == -1:
                y += inner * (1 - proportion)
        self.surface.fill_rect(x, y, width, height, color)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        food = None
        if self.food_cell is not None:
            food = {
                "cell": list(self.grid.to_xy(self.food_cell)),
                "super": self.grid.is_super_food(self.food_cell),
            }
        return {
            "state": self.state.value,
            "score": self.scorekeeper.score,
            "bonus_points": self.scorekeeper.bonus_points,
            "squares_per_second": self.squares_per_second,
            "autoplay": self.autoplay,
            "boosted": self.boosted,
            "commits": self.commits,
            "snake": {
                "body": [list(self.grid.to_xy(c)) for c in self.snake],
                "direction": self.snake.direction.name.lower(),
            },
            "food": food,
            "grid": self.grid.to_dict(),
        }
