"""Tests for the autoplay gradient heuristic."""

import numpy as np

from smooth_snake.grid import CellType, Grid
from smooth_snake.pathfinder import gradient, next_heading
from smooth_snake.snake import Direction, Snake


def _board(dimension, body, direction, food=None):
    """Build a grid and snake from (x, y) cells listed tail to head."""
    grid = Grid(dimension)
    snake = Snake(len(grid), direction)
    for x, y in body:
        cell = grid.to_index(x, y)
        snake.add_at_head(cell)
        grid.set(cell, CellType.BODY)
    food_cell = None
    if food is not None:
        food_cell = grid.to_index(*food)
        grid.set(food_cell, CellType.FOOD)
    return grid, snake, food_cell


class TestGradient:
    def test_empty_grid_matches_manhattan_distance(self):
        grid = Grid(7)
        source = grid.to_index(2, 5)
        field = gradient(grid, source)
        for cell in range(len(grid)):
            assert field[cell] == grid.manhattan_distance(source, cell)

    def test_wall_makes_cells_unreachable(self):
        grid = Grid(6)
        for y in range(6):
            grid.set(grid.to_index(2, y), CellType.BODY)
        field = gradient(grid, grid.to_index(0, 0))
        for y in range(6):
            assert field[grid.to_index(2, y)] == np.inf
            assert field[grid.to_index(3, y)] == np.inf
            assert field[grid.to_index(5, y)] == np.inf
        assert field[grid.to_index(1, 5)] == 6

    def test_detour_around_obstacle(self):
        grid = Grid(5)
        for y in range(4):
            grid.set(grid.to_index(2, y), CellType.BODY)
        field = gradient(grid, grid.to_index(1, 0))
        # Around the bottom of the wall: down 4, across 2, up 4.
        assert field[grid.to_index(3, 0)] == 10

    def test_body_source_is_zero(self):
        grid = Grid(5)
        source = grid.to_index(1, 1)
        grid.set(source, CellType.BODY)
        field = gradient(grid, source)
        assert field[source] == 0
        assert field[grid.to_index(2, 1)] == 1

    def test_none_source_is_unreachable_everywhere(self):
        field = gradient(Grid(4), None)
        assert np.all(np.isinf(field))


class TestNextHeading:
    def test_keeps_straight_towards_food(self):
        grid, snake, food = _board(8, [(1, 2), (2, 2)], Direction.RIGHT, (5, 2))
        assert next_heading(grid, snake, food) is None

    def test_turns_towards_food(self):
        grid, snake, food = _board(8, [(1, 4), (2, 4)], Direction.RIGHT, (2, 1))
        assert next_heading(grid, snake, food) == Direction.UP

    def test_turns_away_from_wall(self):
        grid, snake, food = _board(8, [(6, 3), (7, 3)], Direction.RIGHT, (7, 7))
        assert next_heading(grid, snake, food) == Direction.DOWN

    def test_refuses_food_next_to_tail(self):
        # The food sits between head and tail: eating it would plug the
        # only route back to the tail.
        body = [(3, 1), (2, 1), (1, 1), (1, 2), (2, 2)]
        grid, snake, food = _board(6, body, Direction.RIGHT, (3, 2))
        assert next_heading(grid, snake, food) == Direction.DOWN

    def test_takes_food_not_next_to_tail(self):
        body = [(3, 1), (2, 1), (1, 1), (1, 2), (2, 2)]
        grid, snake, food = _board(6, body, Direction.RIGHT, (4, 2))
        assert next_heading(grid, snake, food) is None

    def test_avoids_pocket_cut_off_from_tail(self):
        body = [(2, 0), (1, 0), (1, 1), (1, 2), (0, 2)]
        grid, snake, food = _board(6, body, Direction.LEFT, (0, 0))
        assert next_heading(grid, snake, food) == Direction.DOWN

    def test_prefers_room_when_food_is_unreachable(self):
        grid, snake, food = _board(6, [(4, 2), (4, 1), (5, 1)], Direction.RIGHT)
        assert food is None
        assert next_heading(grid, snake, food) == Direction.UP

    def test_no_preference_when_boxed_in(self):
        body = [(1, 0), (1, 1), (0, 1), (0, 0)]
        grid, snake, food = _board(4, body, Direction.UP, (3, 3))
        assert next_heading(grid, snake, food) is None
