"""Snake representation and turn handling."""

from __future__ import annotations

import enum
from collections import deque
from collections.abc import Iterator


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) values; ``y`` grows downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


class Snake:
    """A snake stored as a fixed-capacity ring buffer of cell indices.

    Segments run from ``tail`` to ``head``. New segments are written at the
    head cursor and old ones released at the tail cursor, so both ends are
    O(1) without reallocating. Capacity is the grid's cell count.
    """

    def __init__(
        self, capacity: int, direction: Direction = Direction.RIGHT,
    ) -> None:
        if capacity < 2:
            raise ValueError("Snake capacity must be at least 2.")
        self._segments: list[int | None] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._length = 0
        self.direction = direction
        self.turns: deque[Direction] = deque()

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[int]:
        """Yield occupied cells from tail to head."""
        capacity = len(self._segments)
        for offset in range(self._length):
            yield self._segments[(self._tail + offset) % capacity]

    @property
    def capacity(self) -> int:
        return len(self._segments)

    @property
    def head(self) -> int:
        """Return the head cell."""
        if not self._length:
            raise ValueError("Snake has no segments.")
        return self._segments[(self._head - 1) % len(self._segments)]

    @property
    def tail(self) -> int:
        """Return the tail cell."""
        if not self._length:
            raise ValueError("Snake has no segments.")
        return self._segments[self._tail]

    @property
    def after_tail(self) -> int:
        """Return the segment next to the tail, i.e. where the tail retreats."""
        if self._length < 2:
            raise ValueError("Snake needs two segments to retreat its tail.")
        return self._segments[(self._tail + 1) % len(self._segments)]

    def add_at_head(self, cell: int) -> None:
        """Extend the snake by writing *cell* as the new head."""
        if self._length == len(self._segments):
            raise ValueError("Snake already fills its capacity.")
        self._segments[self._head] = cell
        self._head = (self._head + 1) % len(self._segments)
        self._length += 1

    def remove_tail(self) -> int:
        """Drop the tail segment and return the vacated cell."""
        if not self._length:
            raise ValueError("Snake has no segments.")
        vacated = self._segments[self._tail]
        self._segments[self._tail] = None
        self._tail = (self._tail + 1) % len(self._segments)
        self._length -= 1
        return vacated

    def push_turn(self, direction: Direction) -> None:
        """Queue a turn. Legality is checked when the turn is applied."""
        self.turns.append(direction)

    def is_legal_turn(self, direction: Direction) -> bool:
        """Only left or right turns are legal.

        One of dx, dy is zero before the turn and the other coordinate is
        zero after it, which rules out both reversals and no-op turns.
        """
        dx, dy = self.direction.value
        new_dx, new_dy = direction.value
        return dx == new_dy or dy == new_dx

    def apply_next_turn(self) -> Direction | None:
        """Apply the first legal queued turn, discarding illegal ones.

        Returns the applied heading, or ``None`` if the queue held no legal
        turn (the heading is then unchanged).
        """
        while self.turns:
            turn = self.turns.popleft()
            if self.is_legal_turn(turn):
                self.direction = turn
                return turn
        return None

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": list(self),
            "direction": self.direction.name.lower(),
            "pending_turns": [t.name.lower() for t in self.turns],
        }
