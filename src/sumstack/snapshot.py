"""Immutable views of the game published to renderers.

A snapshot never changes after it is built. Rows that are identical to the
previous snapshot's rows are reused as-is, so consecutive snapshots share
structure and renderers can skip unchanged rows with an identity check.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from sumstack.components.game_state import GameMode, GameStatus
from sumstack.systems.board_ops import Position, active_tiles, require_dimensions
from sumstack.utils.game_state import get_game_state


@dataclass(frozen=True, slots=True)
class TileView:
    id: int
    value: int
    selected: bool = False


Row = Tuple[Optional[TileView], ...]
Grid = Tuple[Row, ...]


@dataclass(frozen=True)
class GameSnapshot:
    grid: Grid
    target: int
    score: int
    mode: GameMode
    status: GameStatus
    time_left: int
    max_time: int
    level: int = 1
    generation: int = 0
    pending_row: bool = False

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def tile(self, row: int, col: int) -> TileView | None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            return None
        return self.grid[row][col]

    @property
    def selected(self) -> Tuple[Position, ...]:
        return tuple(
            (r, c)
            for r, row in enumerate(self.grid)
            for c, tile in enumerate(row)
            if tile is not None and tile.selected
        )

    @property
    def current_sum(self) -> int:
        return sum(tile.value for row in self.grid for tile in row if tile is not None and tile.selected)

    @property
    def danger(self) -> bool:
        """True when the top row holds a tile; the next row injection ends the game."""
        return bool(self.grid) and any(tile is not None for tile in self.grid[0])

    def values(self) -> Tuple[Tuple[Optional[int], ...], ...]:
        """Grid of plain values (None for empty cells), handy for logging and tests."""
        return tuple(tuple(tile.value if tile else None for tile in row) for row in self.grid)


def build_snapshot(world: World, previous: GameSnapshot | None = None, *, pending_row: bool = False) -> GameSnapshot:
    rows, cols = require_dimensions(world)
    tiles = active_tiles(world)
    grid_rows = []
    for r in range(rows):
        cells = []
        for c in range(cols):
            tile = tiles.get((r, c))
            cells.append(TileView(id=tile.tile_id, value=tile.value, selected=tile.selected) if tile else None)
        row: Row = tuple(cells)
        if previous is not None and r < previous.rows and previous.grid[r] == row:
            row = previous.grid[r]
        grid_rows.append(row)
    state = get_game_state(world)
    return GameSnapshot(
        grid=tuple(grid_rows),
        target=state.target,
        score=state.score,
        mode=state.mode,
        status=state.status,
        time_left=state.time_left,
        max_time=state.max_time,
        level=state.level,
        generation=state.generation,
        pending_row=pending_row,
    )
