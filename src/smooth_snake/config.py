"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Palette:
    """Cell colours (colour-blind safe)."""

    grass: str = "rgb(74, 155, 119)"
    snake: str = "rgb(52, 114, 170)"
    food: str = "rgb(219, 160, 76)"
    super_food: str = "rgb(239, 227, 109)"


@dataclass(frozen=True)
class GameConfig:
    """Full game configuration.

    Supports JSON serialization so a game can be replayed with the same
    settings and seed.
    """

    # Board
    dimension: int = 20
    cell_size: int = 32
    inset: int = 1
    initial_length: int = 2

    # Speed, in cells per second
    squares_per_second: float = 6.0
    speed_up: float = 1.01
    boost: float = 1.5
    auto_boost: float = 2.0

    # Food
    super_food_probability: float = 0.1
    food_bonus: int = 20
    super_food_bonus: int = 60

    seed: int | None = None

    palette: Palette = field(default_factory=Palette)

    def __post_init__(self) -> None:
        if self.dimension < 4:
            raise ValueError("dimension must be at least 4.")
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if not 0 <= self.inset * 2 < self.cell_size:
            raise ValueError("inset must leave room inside a cell.")
        if self.initial_length < 2:
            raise ValueError("initial_length must be at least 2.")
        if self.dimension // 2 - 1 + self.initial_length > self.dimension:
            raise ValueError(
                "initial_length does not fit the grid; increase dimension "
                "or reduce initial_length."
            )
        if self.squares_per_second <= 0:
            raise ValueError("squares_per_second must be positive.")
        for name in ("speed_up", "boost", "auto_boost"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive.")
        if not 0.0 <= self.super_food_probability <= 1.0:
            raise ValueError("super_food_probability must be within [0, 1].")
        if self.food_bonus < 0 or self.super_food_bonus < 0:
            raise ValueError("food bonuses must be non-negative.")

    @property
    def board_pixels(self) -> int:
        return self.dimension * self.cell_size

    def with_overrides(self, **overrides) -> GameConfig:
        """Return a validated copy with *overrides* applied."""
        palette = overrides.pop("palette", None)
        if isinstance(palette, dict):
            overrides["palette"] = Palette(**palette)
        elif palette is not None:
            overrides["palette"] = palette
        return replace(self, **overrides)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ValueError(f"Config file {path} must hold a JSON object.")
        palette_data = raw.pop("palette", {})
        _check_keys(Palette, palette_data, "palette")
        _check_keys(cls, raw, "config")
        raw["palette"] = Palette(**palette_data)
        return cls(**raw)


def _check_keys(kind: type, data: dict, label: str) -> None:
    unknown = set(data) - {f.name for f in fields(kind)}
    if unknown:
        raise ValueError(f"Unknown {label} keys: {', '.join(sorted(unknown))}.")
