from sumstack.components.game_state import GameMode, GameStatus
from sumstack.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_PRESS
from sumstack.systems.input import KEY_ESCAPE, KEY_R, InputSystem
from sumstack.ui.layout import cell_at_point, cell_center, compute_board_geometry
from tests.helpers import make_engine


class DummyWindow:
    def __init__(self, width=800, height=720):
        self.width = width
        self.height = height


def _setup():
    engine = make_engine(seed=2)
    window = DummyWindow()
    InputSystem(engine.event_bus, window, engine)
    geometry = compute_board_geometry(window.width, window.height, 10, 6)
    return engine, geometry


def test_cell_center_round_trips_through_cell_at_point():
    geometry = compute_board_geometry(800, 720, 10, 6)
    for row, col in ((0, 0), (0, 5), (9, 0), (9, 5), (4, 3)):
        x, y = cell_center(row, col, geometry, 10)
        assert cell_at_point(x, y, geometry, 10, 6) == (row, col)


def test_top_row_is_drawn_highest():
    geometry = compute_board_geometry(800, 720, 10, 6)
    _, top_y = cell_center(0, 0, geometry, 10)
    _, bottom_y = cell_center(9, 0, geometry, 10)
    assert top_y > bottom_y


def test_points_outside_board_map_to_none():
    geometry = compute_board_geometry(800, 720, 10, 6)
    tile_size, start_x, start_y = geometry
    assert cell_at_point(start_x - 1, start_y + 1, geometry, 10, 6) is None
    assert cell_at_point(start_x + 6 * tile_size, start_y + 1, geometry, 10, 6) is None
    assert cell_at_point(start_x + 1, start_y + 10 * tile_size, geometry, 10, 6) is None
    assert cell_at_point(start_x + 1, start_y - 1, geometry, 10, 6) is None


def test_left_click_selects_bottom_left_tile():
    engine, geometry = _setup()
    engine.start(GameMode.CLASSIC)
    x, y = cell_center(9, 0, geometry, 10)
    engine.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    assert engine.snapshot.selected == ((9, 0),)


def test_right_click_and_idle_clicks_ignored():
    engine, geometry = _setup()
    x, y = cell_center(9, 0, geometry, 10)
    engine.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    assert engine.snapshot.status == GameStatus.IDLE

    engine.start(GameMode.CLASSIC)
    engine.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4)
    assert engine.snapshot.selected == ()


def test_keys_reset_and_leave_game():
    engine, _ = _setup()
    engine.event_bus.emit(EVENT_KEY_PRESS, symbol=KEY_R, modifiers=0)
    assert engine.snapshot.status == GameStatus.IDLE

    started = engine.start(GameMode.TIME)
    engine.event_bus.emit(EVENT_KEY_PRESS, symbol=KEY_R, modifiers=0)
    assert engine.snapshot.generation == started.generation + 1
    assert engine.snapshot.mode == GameMode.TIME

    engine.event_bus.emit(EVENT_KEY_PRESS, symbol=KEY_ESCAPE, modifiers=0)
    assert engine.snapshot.status == GameStatus.IDLE
