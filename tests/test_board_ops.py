import pytest
from esper import World

from sumstack.events.bus import EventBus
from sumstack.systems.board import BoardSystem
from sumstack.systems.board_ops import (
    active_tiles,
    apply_gravity_moves,
    clear_tiles,
    compute_gravity_moves,
    current_sum,
    fill_bottom_rows,
    place_tile,
    require_dimensions,
    row_occupied,
    shift_rows_up,
)
from sumstack.utils.game_state import get_game_state
from sumstack.world import create_world
from tests.helpers import columns_compacted, load_board


def _board(rows=4, cols=3):
    bus = EventBus()
    world = create_world()
    BoardSystem(world, bus, rows, cols)
    return world


def _values(world, rows=4, cols=3):
    tiles = active_tiles(world)
    return [
        [tiles[(r, c)].value if (r, c) in tiles else None for c in range(cols)]
        for r in range(rows)
    ]


def test_board_starts_empty():
    world = _board()
    assert active_tiles(world) == {}
    assert not row_occupied(world, 3)


def test_fill_bottom_rows_assigns_unique_ids_and_valid_values():
    world = _board()
    spawned = fill_bottom_rows(world, 2)
    assert sorted(spawned) == [(2, 0), (2, 1), (2, 2), (3, 0), (3, 1), (3, 2)]
    tiles = active_tiles(world)
    assert len({tile.tile_id for tile in tiles.values()}) == 6
    assert all(1 <= tile.value <= 9 for tile in tiles.values())
    assert not row_occupied(world, 1)


def test_gravity_compacts_columns_and_keeps_order():
    world = _board()
    load_board(world, [
        [1, None, 7],
        [None, 5, None],
        [2, None, 8],
        [None, None, 9],
    ])
    ids_before = {pos: tile.tile_id for pos, tile in active_tiles(world).items()}

    moves = compute_gravity_moves(world)
    # Bottom-most move of each column comes first.
    assert [m.source for m in moves] == [(2, 0), (0, 0), (1, 1), (0, 2)]
    apply_gravity_moves(world, moves)

    assert _values(world) == [
        [None, None, None],
        [None, None, 7],
        [1, None, 8],
        [2, 5, 9],
    ]
    tiles = active_tiles(world)
    assert tiles[(3, 0)].tile_id == ids_before[(2, 0)]
    assert tiles[(2, 0)].tile_id == ids_before[(0, 0)]
    assert columns_compacted(_values(world))


def test_gravity_on_compact_board_is_empty():
    world = _board()
    fill_bottom_rows(world, 2)
    assert compute_gravity_moves(world) == []


def test_clear_tiles_returns_removed_values():
    world = _board()
    load_board(world, [[None, None, None], [None, None, None], [None, None, None], [4, 5, 6]])
    assert clear_tiles(world, [(3, 0), (3, 2), (0, 0)]) == [4, 6]
    assert _values(world)[3] == [None, 5, None]


def test_shift_rows_up_moves_everything_and_empties_bottom():
    world = _board()
    load_board(world, [[None, None, None], [None, 3, None], [1, 4, None], [2, 5, 6]])
    shift_rows_up(world)
    assert _values(world) == [
        [None, 3, None],
        [1, 4, None],
        [2, 5, 6],
        [None, None, None],
    ]


def test_current_sum_counts_selected_tiles_only():
    world = _board()
    place_tile(world, 3, 0, 4, selected=True)
    place_tile(world, 3, 1, 5)
    place_tile(world, 3, 2, 3, selected=True)
    assert current_sum(world) == 7


def test_missing_resources_raise_runtime_error():
    world = World()
    with pytest.raises(RuntimeError, match="Board"):
        require_dimensions(world)
    with pytest.raises(RuntimeError, match="GameState"):
        get_game_state(world)
