"""Runtime configuration for a SumStack engine.

Defaults mirror :mod:`sumstack.constants`; ``GameConfig.from_env`` lets a
launcher override them through ``SUMSTACK_*`` environment variables.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from sumstack.constants import (
    GRID_COLS,
    GRID_ROWS,
    INITIAL_ROWS,
    POINTS_PER_TILE,
    ROW_APPEND_DELAY,
    TARGET_MAX,
    TARGET_MIN,
    TIME_PER_ROUND,
)

ENV_PREFIX = "SUMSTACK_"


@dataclass(frozen=True)
class GameConfig:
    """Board geometry, target range and pacing for one engine."""
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    initial_rows: int = INITIAL_ROWS
    target_min: int = TARGET_MIN
    target_max: int = TARGET_MAX
    time_per_round: int = TIME_PER_ROUND
    row_append_delay: float = ROW_APPEND_DELAY  # 0 appends the classic row synchronously
    points_per_tile: int = POINTS_PER_TILE
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if not 0 <= self.initial_rows <= self.rows:
            raise ValueError(
                f"initial_rows must be within [0, {self.rows}], got {self.initial_rows}"
            )
        if self.target_min > self.target_max:
            raise ValueError(
                f"target_min ({self.target_min}) must not exceed target_max ({self.target_max})"
            )
        if self.target_min <= 0:
            raise ValueError(f"target_min must be positive, got {self.target_min}")
        if self.time_per_round <= 0:
            raise ValueError(f"time_per_round must be positive, got {self.time_per_round}")
        if self.row_append_delay < 0:
            raise ValueError(f"row_append_delay must be >= 0, got {self.row_append_delay}")
        if self.points_per_tile < 0:
            raise ValueError(f"points_per_tile must be >= 0, got {self.points_per_tile}")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GameConfig":
        """Build a config from ``SUMSTACK_<FIELD>`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        overrides = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            caster = float if f.name == "row_append_delay" else int
            try:
                overrides[f.name] = caster(raw)
            except ValueError:
                raise ValueError(
                    f"{ENV_PREFIX}{f.name.upper()} must be a number, got {raw!r}"
                ) from None
        return cls(**overrides)
