import random
import threading

from sumstack import GameConfig, GameEngine, GameMode, GameStatus
from sumstack.events.bus import EVENT_TILE_SELECTED, EventBus


def test_same_seed_gives_same_game():
    first = GameEngine(GameConfig(seed=21)).start(GameMode.CLASSIC)
    second = GameEngine(GameConfig(seed=21)).start(GameMode.CLASSIC)
    assert first.values() == second.values()
    assert first.target == second.target


def test_injected_rng_and_bus_are_used():
    bus = EventBus()
    selected = []
    bus.subscribe(EVENT_TILE_SELECTED, lambda s, **kw: selected.append((kw["row"], kw["col"], kw["value"])))
    engine = GameEngine(GameConfig(), event_bus=bus, rng=random.Random(3))
    twin = GameEngine(GameConfig(), rng=random.Random(3))
    snap = engine.start("classic")
    assert snap.values() == twin.start("classic").values()

    engine.select_tile(9, 4)
    assert selected == [(9, 4, snap.tile(9, 4).value)]


def test_current_mode_follows_last_start():
    engine = GameEngine(GameConfig(seed=1))
    assert engine.current_mode == GameMode.CLASSIC
    engine.start(GameMode.TIME)
    assert engine.current_mode == GameMode.TIME


def test_custom_board_size():
    engine = GameEngine(GameConfig(rows=5, cols=3, initial_rows=2, seed=1))
    snap = engine.start(GameMode.CLASSIC)
    assert (snap.rows, snap.cols) == (5, 3)
    assert all(value is not None for row in snap.values()[3:] for value in row)
    assert all(value is None for row in snap.values()[:3] for value in row)


def test_operations_from_several_threads_are_serialised():
    engine = GameEngine(GameConfig(seed=4, row_append_delay=0))
    engine.start(GameMode.TIME)

    def worker():
        for _ in range(50):
            engine.advance(0.05)
            engine.select_tile(9, 0)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    snap = engine.snapshot
    assert snap.status in (GameStatus.PLAYING, GameStatus.GAMEOVER)
    expected = sum(t.value for row in snap.grid for t in row if t is not None and t.selected)
    assert snap.current_sum == expected
    assert snap.current_sum < snap.target
