from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from esper import World

from sumstack.components.active_switch import ActiveSwitch
from sumstack.components.board import Board
from sumstack.components.board_position import BoardPosition
from sumstack.components.tile import NumberTile
from sumstack.constants import TILE_VALUE_MAX, TILE_VALUE_MIN

Position = Tuple[int, int]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    tile_id: int


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def require_dimensions(world: World) -> Tuple[int, int]:
    dims = board_dimensions(world)
    if dims is None:
        raise RuntimeError("Board component not found")
    return dims


def in_bounds(world: World, row: int, col: int) -> bool:
    for _, board in world.get_component(Board):
        return board.contains(row, col)
    return False


def cell_index(world: World) -> Dict[Position, int]:
    """Map every board position to the cell entity that occupies it."""
    return {(pos.row, pos.col): entity for entity, pos in world.get_component(BoardPosition)}


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def tile_at(world: World, row: int, col: int) -> NumberTile | None:
    """Return the tile held at (row, col), or None for empty/unknown cells."""
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    if not world.component_for_entity(entity, ActiveSwitch).active:
        return None
    return world.component_for_entity(entity, NumberTile)


def next_tile_id(world: World) -> int:
    return next(world.tile_ids)


def random_tile_value(world: World) -> int:
    rng = getattr(world, "random", None)
    if not isinstance(rng, random.Random):
        rng = random.Random()
    return rng.randint(TILE_VALUE_MIN, TILE_VALUE_MAX)


def place_tile(world: World, row: int, col: int, value: int | None = None, *, selected: bool = False) -> NumberTile:
    """Put a freshly identified tile into the cell at (row, col)."""
    entity = get_entity_at(world, row, col)
    if entity is None:
        raise RuntimeError(f"No board cell at ({row}, {col})")
    if value is None:
        value = random_tile_value(world)
    tile: NumberTile = world.component_for_entity(entity, NumberTile)
    tile.tile_id = next_tile_id(world)
    tile.value = int(value)
    tile.selected = selected
    world.component_for_entity(entity, ActiveSwitch).active = True
    return tile


def clear_cell(world: World, row: int, col: int) -> None:
    entity = get_entity_at(world, row, col)
    if entity is None:
        return
    _deactivate(world, entity)


def clear_board(world: World) -> None:
    for entity, _ in world.get_component(BoardPosition):
        _deactivate(world, entity)


def fill_row(world: World, row: int) -> List[Position]:
    """Fill every cell of ``row`` with a new unselected random tile."""
    _, cols = require_dimensions(world)
    spawned: List[Position] = []
    for col in range(cols):
        place_tile(world, row, col)
        spawned.append((row, col))
    return spawned


def fill_bottom_rows(world: World, count: int) -> List[Position]:
    rows, _ = require_dimensions(world)
    spawned: List[Position] = []
    for row in range(rows - 1, rows - 1 - count, -1):
        spawned.extend(fill_row(world, row))
    return spawned


def active_tiles(world: World) -> Dict[Position, NumberTile]:
    """Return mapping of occupied positions to their tiles."""
    mapping: Dict[Position, NumberTile] = {}
    for entity, position in world.get_component(BoardPosition):
        switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not switch.active:
            continue
        mapping[(position.row, position.col)] = world.component_for_entity(entity, NumberTile)
    return mapping


def selected_positions(world: World) -> List[Position]:
    return sorted(pos for pos, tile in active_tiles(world).items() if tile.selected)


def current_sum(world: World) -> int:
    """Sum of values over every selected tile on the whole board."""
    return sum(tile.value for tile in active_tiles(world).values() if tile.selected)


def clear_selection(world: World) -> List[Position]:
    cleared: List[Position] = []
    for pos, tile in active_tiles(world).items():
        if tile.selected:
            tile.selected = False
            cleared.append(pos)
    return sorted(cleared)


def clear_tiles(world: World, positions: Iterable[Position]) -> List[int]:
    """Empty the given cells and return the values that were removed."""
    values: List[int] = []
    for row, col in positions:
        entity = get_entity_at(world, row, col)
        if entity is None:
            continue
        switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not switch.active:
            continue
        values.append(world.component_for_entity(entity, NumberTile).value)
        _deactivate(world, entity)
    return values


def compute_gravity_moves(world: World) -> List[GravityMove]:
    """Moves that compact each column toward the bottom row, bottom-most first."""
    dims = board_dimensions(world)
    if dims is None:
        return []
    rows, cols = dims
    tiles = active_tiles(world)
    moves: List[GravityMove] = []
    for col in range(cols):
        filled_rows = [row for row in range(rows) if (row, col) in tiles]
        first_target = rows - len(filled_rows)
        column_moves: List[GravityMove] = []
        for offset, original_row in enumerate(filled_rows):
            target_row = first_target + offset
            if original_row == target_row:
                continue
            column_moves.append(
                GravityMove(
                    source=(original_row, col),
                    target=(target_row, col),
                    tile_id=tiles[(original_row, col)].tile_id,
                )
            )
        moves.extend(reversed(column_moves))
    return moves


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    index = cell_index(world)
    # Lower tiles must land before the ones above them reuse their cells.
    for move in sorted(moves, key=lambda m: m.source[0], reverse=True):
        src_entity = index.get(move.source)
        dst_entity = index.get(move.target)
        if src_entity is None or dst_entity is None:
            continue
        if not world.component_for_entity(src_entity, ActiveSwitch).active:
            continue
        _move_tile(world, src_entity, dst_entity)


def row_occupied(world: World, row: int) -> bool:
    _, cols = require_dimensions(world)
    return any(tile_at(world, row, col) is not None for col in range(cols))


def shift_rows_up(world: World) -> None:
    """Row r takes the contents of row r+1; the bottom row is left empty."""
    rows, cols = require_dimensions(world)
    index = cell_index(world)
    for row in range(rows - 1):
        for col in range(cols):
            dst_entity = index[(row, col)]
            src_entity = index[(row + 1, col)]
            if world.component_for_entity(src_entity, ActiveSwitch).active:
                _move_tile(world, src_entity, dst_entity)
            else:
                _deactivate(world, dst_entity)
    for col in range(cols):
        _deactivate(world, index[(rows - 1, col)])


def _move_tile(world: World, src_entity: int, dst_entity: int) -> None:
    src_tile: NumberTile = world.component_for_entity(src_entity, NumberTile)
    dst_tile: NumberTile = world.component_for_entity(dst_entity, NumberTile)
    dst_tile.tile_id = src_tile.tile_id
    dst_tile.value = src_tile.value
    dst_tile.selected = src_tile.selected
    world.component_for_entity(dst_entity, ActiveSwitch).active = True
    _deactivate(world, src_entity)


def _deactivate(world: World, entity: int) -> None:
    world.component_for_entity(entity, ActiveSwitch).active = False
    tile: NumberTile = world.component_for_entity(entity, NumberTile)
    tile.selected = False
