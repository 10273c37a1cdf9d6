from sumstack.components.game_state import GameStatus
from sumstack.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_PRESS, EventBus
from sumstack.ui.layout import cell_at_point, compute_board_geometry

# arcade.key values; kept numeric so this module does not import arcade.
KEY_ESCAPE = 65307
KEY_R = 114


class InputSystem:
    """Turns window input into engine operations while a game is on screen."""

    def __init__(self, event_bus: EventBus, window, engine):
        self.event_bus = event_bus
        self.window = window
        self.engine = engine
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Left button (1) only.
        if button != 1:
            return
        snapshot = self.engine.snapshot
        if snapshot.status != GameStatus.PLAYING:
            return
        geometry = compute_board_geometry(self.window.width, self.window.height, snapshot.rows, snapshot.cols)
        cell = cell_at_point(x, y, geometry, snapshot.rows, snapshot.cols)
        if cell is None:
            return
        self.engine.select_tile(*cell)

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if self.engine.snapshot.status == GameStatus.IDLE:
            return
        if symbol == KEY_R:
            self.engine.reset()
        elif symbol == KEY_ESCAPE:
            self.engine.return_to_menu()
