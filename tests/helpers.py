from __future__ import annotations

from typing import Optional, Sequence

from esper import World

from sumstack.config import GameConfig
from sumstack.engine import GameEngine
from sumstack.systems.board_ops import clear_cell, place_tile, require_dimensions
from sumstack.utils.game_state import get_game_state


def make_engine(seed: int = 0, **overrides) -> GameEngine:
    """Engine with a seeded RNG so boards and targets are reproducible."""

    return GameEngine(GameConfig(seed=seed, **overrides))


def load_board(world: World, layout: Sequence[Sequence[Optional[int]]]) -> None:
    """Overwrite the board from a top-to-bottom layout; None marks an empty cell.

    Rows missing from the top of ``layout`` are emptied.
    """

    rows, cols = require_dimensions(world)
    offset = rows - len(layout)
    for row in range(rows):
        values = layout[row - offset] if row >= offset else [None] * cols
        for col in range(cols):
            value = values[col]
            if value is None:
                clear_cell(world, row, col)
            else:
                place_tile(world, row, col, value)


def set_target(engine: GameEngine, target: int) -> None:
    get_game_state(engine.world).target = target


def columns_compacted(values) -> bool:
    """True when no column has an empty cell below a filled one."""

    for col in range(len(values[0])):
        seen_tile = False
        for row in range(len(values)):
            if values[row][col] is not None:
                seen_tile = True
            elif seen_tile:
                return False
    return True
