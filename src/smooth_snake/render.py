"""Drawing surface interface and a recording implementation."""

from __future__ import annotations

from typing import Protocol


class Surface(Protocol):
    """Pixel-space drawing target."""

    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: str,
    ) -> None: ...

    def clear(self, color: str) -> None: ...


class RecordingSurface:
    """Surface that records draw operations instead of painting them.

    Used by the headless simulator and by the web adapter, which ships the
    recorded operations to a browser canvas.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.operations: list[dict] = []

    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: str,
    ) -> None:
        self.operations.append({
            "op": "fill",
            "x": x,
            "y": y,
            "w": width,
            "h": height,
            "color": color,
        })

    def clear(self, color: str) -> None:
        # Everything recorded so far is painted over.
        self.operations.clear()
        self.operations.append({"op": "clear", "color": color})

    def drain(self) -> list[dict]:
        """Return and forget the operations recorded so far."""
        ops = self.operations
        self.operations = []
        return ops


class NullSurface:
    """Surface that discards every draw call."""

    def fill_rect(
        self, x: float, y: float, width: float, height: float, color: str,
    ) -> None:
        pass

    def clear(self, color: str) -> None:
        pass
