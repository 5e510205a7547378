"""Score and decaying bonus-point tracking."""

from __future__ import annotations

from typing import Protocol


class ScoreObserver(Protocol):
    """Receives score and bonus changes.

    Both callbacks run synchronously at the point of change, possibly
    several times within one frame, and must not raise.
    """

    def on_score_changed(self, score: int) -> None: ...

    def on_bonus_points_changed(self, points: int) -> None: ...


class Scorekeeper:
    """Tracks the score and the bonus awarded for the next food."""

    def __init__(self, observer: ScoreObserver | None = None) -> None:
        self.observer = observer
        self.score = 0
        self.bonus_points = 0

    def increment_score(self) -> None:
        """Award one point plus whatever bonus is left."""
        self.score += 1 + self.bonus_points
        if self.observer is not None:
            self.observer.on_score_changed(self.score)

    def set_bonus_points(self, points: int) -> None:
        self.bonus_points = max(0, points)
        if self.observer is not None:
            self.observer.on_bonus_points_changed(self.bonus_points)

    def decrement_bonus_points(self) -> None:
        self.set_bonus_points(self.bonus_points - 1)

    def to_dict(self) -> dict:
        return {"score": self.score, "bonus_points": self.bonus_points}
