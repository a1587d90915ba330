"""Game and display configuration."""

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

ENV_PREFIX = "TETRIS_"

# Environment variable suffix -> GameConfig field
ENV_FIELDS = {
    "ROWS": "rows",
    "COLS": "cols",
    "SPAWN_ROW": "spawn_row",
    "SPAWN_COL": "spawn_col",
    "GRAVITY_MS": "gravity_interval_ms",
    "BLOCK_SIZE": "block_size",
}


@dataclass(frozen=True)
class GameConfig:
    """Board geometry, spawn point and gravity cadence.

    Attributes:
        rows: Board height in cells
        cols: Board width in cells
        spawn_row: Row where new pieces appear
        spawn_col: Column where new pieces appear (not re-centered per width)
        gravity_interval_ms: Period of the gravity tick
        block_size: Pixel size of one cell, for renderers
    """

    rows: int = 20
    cols: int = 10
    spawn_row: int = 0
    spawn_col: int = 3
    gravity_interval_ms: int = 500
    block_size: int = 30

    def __post_init__(self):
        for name in ("rows", "cols", "gravity_interval_ms", "block_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")

    @property
    def gravity_interval(self) -> float:
        """Gravity period in seconds."""
        return self.gravity_interval_ms / 1000.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        """Build a config from TETRIS_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            Config with defaults for unset variables

        Raises:
            ValueError: If a variable is not an integer
        """
        if environ is None:
            environ = os.environ

        overrides = {}
        for suffix, field_name in ENV_FIELDS.items():
            key = ENV_PREFIX + suffix
            raw = environ.get(key)
            if raw is None or raw == "":
                continue
            try:
                overrides[field_name] = int(raw)
            except ValueError:
                raise ValueError(f"{key} must be an integer, got {raw!r}")

        return cls(**overrides)

    def to_dict(self) -> dict:
        """Convert config to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
