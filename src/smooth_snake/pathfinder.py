"""Autoplay heuristic built on two BFS distance fields.

The snake heads greedily towards the food along ``food`` gradient, but only
through cells from which its own tail is still reachable, breaking ties in
favour of cells farther from the tail to keep room to manoeuvre. This is a
heuristic: it does not prevent every self-enclosure.
"""

from __future__ import annotations

from collections import deque

import numpy as np

from smooth_snake.grid import CellType, Grid
from smooth_snake.snake import Direction, Snake


def gradient(grid: Grid, source: int | None) -> np.ndarray:
    """Return BFS distances from *source* to every cell.

    Body cells are walls. The source itself is always at distance 0, even
    when it is a body cell such as the snake's tail. Unreachable cells, and
    every cell when *source* is ``None``, are ``inf``.
    """
    field = np.full(len(grid), np.inf)
    if source is None:
        return field

    field[source] = 0
    queue: deque[int] = deque([source])
    while queue:
        cell = queue.popleft()
        distance = field[cell] + 1
        for n in grid.neighbors(cell):
            if field[n] == np.inf and grid.cells[n] != CellType.BODY:
                field[n] = distance
                queue.append(n)
    return field


def next_heading(
    grid: Grid, snake: Snake, food: int | None,
) -> Direction | None:
    """Pick the heading for the next cell, or ``None`` to keep straight on."""
    head = snake.head
    straight = grid.step(head, snake.direction)

    tail_gradient = gradient(grid, snake.tail)
    food_gradient = gradient(grid, food)

    def safe(cell: int | None) -> bool:
        if cell is None or tail_gradient[cell] == np.inf:
            return False
        # Eating food right next to the tail can seal the only way back.
        return not (food_gradient[cell] == 0 and tail_gradient[cell] == 1)

    def better(cell: int, current: int | None) -> bool:
        if not safe(current):
            return True
        if not safe(cell):
            return False
        if food_gradient[cell] < food_gradient[current]:
            return True
        if food_gradient[cell] == food_gradient[current]:
            return bool(tail_gradient[cell] > tail_gradient[current])
        return False

    choice = straight
    for n in grid.neighbors(head):
        if grid.cells[n] != CellType.BODY and better(n, choice):
            choice = n

    if choice is None or choice == straight:
        return None
    return grid.direction(head, choice)
