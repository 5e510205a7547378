"""Grid representation for the snake game."""

from __future__ import annotations

import enum

import numpy as np

from smooth_snake.snake import Direction


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    BODY = 1
    FOOD = 2
    SUPER_FOOD = 3


class Grid:
    """NumPy-backed square grid of cell states.

    Cells are addressed by a single integer index so they can be stored in
    sets and used to index gradient arrays. The encoding is column-major:
    ``index = x * dimension + y``. Coordinates use ``(x, y)`` with ``x``
    growing to the right and ``y`` growing downwards.
    """

    def __init__(self, dimension: int = 20) -> None:
        if dimension < 4:
            raise ValueError("Grid dimension must be at least 4.")
        self.dimension = dimension
        self.cells = np.zeros(dimension * dimension, dtype=np.int8)

    def __len__(self) -> int:
        return self.cells.size

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def to_index(self, x: int, y: int) -> int:
        return x * self.dimension + y

    def to_xy(self, cell: int) -> tuple[int, int]:
        return cell // self.dimension, cell % self.dimension

    def on_grid(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= x < self.dimension and 0 <= y < self.dimension

    def get(self, cell: int) -> CellType:
        """Return the cell type at the given index."""
        return CellType(self.cells[cell])

    def set(self, cell: int, cell_type: CellType) -> None:
        """Set the cell type at the given index."""
        self.cells[cell] = cell_type

    def step(self, cell: int, direction: Direction) -> int | None:
        """Return the cell adjacent in *direction*, or ``None`` off-grid."""
        x, y = self.to_xy(cell)
        dx, dy = direction.value
        nx, ny = x + dx, y + dy
        if not self.on_grid(nx, ny):
            return None
        return self.to_index(nx, ny)

    def is_traversable(self, cell: int | None) -> bool:
        """True for an on-grid cell the snake does not occupy."""
        return cell is not None and bool(self.cells[cell] != CellType.BODY)

    def is_food(self, cell: int) -> bool:
        return int(self.cells[cell]) in (CellType.FOOD, CellType.SUPER_FOOD)

    def is_super_food(self, cell: int) -> bool:
        return bool(self.cells[cell] == CellType.SUPER_FOOD)

    def count(self, cell_type: CellType) -> int:
        """Return the number of cells currently holding *cell_type*."""
        return int(np.count_nonzero(self.cells == cell_type))

    def random_cell(
        self, cell_type: CellType, rng: np.random.Generator,
    ) -> int | None:
        """Pick a uniformly random cell of *cell_type*.

        Returns ``None`` when no cell currently holds that type, e.g. when
        looking for an empty cell on a full grid.
        """
        candidates = np.flatnonzero(self.cells == cell_type)
        if candidates.size == 0:
            return None
        return int(candidates[rng.integers(candidates.size)])

    def neighbors(self, cell: int) -> list[int]:
        """Return the on-grid neighbors of *cell*.

        The order is fixed (-x, +x, -y, +y); the autoplay heuristic relies
        on it to break ties deterministically.
        """
        x, y = self.to_xy(cell)
        last = self.dimension - 1
        result: list[int] = []
        if x > 0:
            result.append(cell - self.dimension)
        if x < last:
            result.append(cell + self.dimension)
        if y > 0:
            result.append(cell - 1)
        if y < last:
            result.append(cell + 1)
        return result

    def direction(self, from_cell: int, to_cell: int) -> Direction | None:
        """Return the heading pointing from *from_cell* towards *to_cell*.

        Only meaningful for axis-aligned pairs such as neighbors. Returns
        ``None`` when the cells coincide or are not aligned.
        """
        fx, fy = self.to_xy(from_cell)
        tx, ty = self.to_xy(to_cell)
        delta = (int(np.sign(tx - fx)), int(np.sign(ty - fy)))
        try:
            return Direction(delta)
        except ValueError:
            return None

    def manhattan_distance(self, a: int, b: int) -> int:
        ax, ay = self.to_xy(a)
        bx, by = self.to_xy(b)
        return abs(ax - bx) + abs(ay - by)

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary.

        ``cells`` is indexed ``[x][y]``, matching the index encoding.
        """
        return {
            "dimension": self.dimension,
            "cells": self.cells.reshape(
                self.dimension, self.dimension,
            ).tolist(),
        }
