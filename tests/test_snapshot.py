import dataclasses

import pytest

from sumstack.components.game_state import GameMode
from sumstack.snapshot import TileView, build_snapshot
from tests.helpers import load_board, make_engine


def test_snapshot_is_immutable():
    engine = make_engine()
    snap = engine.start(GameMode.CLASSIC)
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.score = 100
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.grid[9][0].value = 1
    with pytest.raises(TypeError):
        snap.grid[9][0] = None


def test_published_snapshot_survives_later_operations():
    engine = make_engine(seed=1)
    first = engine.start(GameMode.CLASSIC)
    values = first.values()
    engine.select_tile(9, 0)
    engine.add_row()
    assert first.values() == values
    assert first.selected == ()


def test_unchanged_rows_are_shared():
    engine = make_engine(seed=1)
    before = engine.start(GameMode.CLASSIC)
    after = engine.select_tile(9, 2)
    for r in range(9):
        assert after.grid[r] is before.grid[r]
    assert after.grid[9] is not before.grid[9]


def test_noop_operation_returns_previous_snapshot():
    engine = make_engine()
    snap = engine.start(GameMode.CLASSIC)
    assert engine.select_tile(0, 0) is snap
    assert engine.advance(0.5) is snap


def test_subscribe_receives_each_new_snapshot():
    engine = make_engine()
    received = []
    engine.subscribe(received.append)
    started = engine.start(GameMode.CLASSIC)
    engine.select_tile(0, 0)
    selected = engine.select_tile(9, 0)
    assert received == [started, selected]
    assert received[-1] is engine.snapshot


def test_snapshot_helpers():
    engine = make_engine()
    engine.start(GameMode.CLASSIC)
    load_board(engine.world, [[None, 3, None, None, None, None]] + [[2] * 6] * 9)
    snap = build_snapshot(engine.world)
    assert snap.danger
    assert snap.tile(0, 0) is None
    assert snap.tile(0, 1).value == 3
    assert snap.tile(20, 1) is None
    assert isinstance(snap.tile(9, 5), TileView)
    assert snap.current_sum == 0
