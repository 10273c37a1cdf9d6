"""Entry point for the SumStack number puzzle.

Sets up the game engine, menu and render systems, and the Arcade window.
"""
import logging
import os

from arcade import Window, run, set_background_color

from sumstack.components.game_state import GameStatus
from sumstack.config import GameConfig
from sumstack.constants import WINDOW_HEIGHT, WINDOW_TITLE, WINDOW_WIDTH
from sumstack.engine import GameEngine
from sumstack.events.bus import (
    EVENT_GAME_STATUS_CHANGED,
    EVENT_KEY_PRESS,
    EVENT_MENU_MODE_SELECTED,
    EVENT_MOUSE_PRESS,
)
from sumstack.menu.factory import clear_main_menu, spawn_main_menu
from sumstack.menu.input_system import MenuInputSystem
from sumstack.menu.render_system import MenuRenderSystem
from sumstack.systems.input import InputSystem
from sumstack.systems.render import RenderSystem

logger = logging.getLogger(__name__)


class SumStackWindow(Window):
    def __init__(self, config: GameConfig | None = None):
        super().__init__(WINDOW_WIDTH, WINDOW_HEIGHT, WINDOW_TITLE, resizable=True)
        self.set_update_rate(1/60)
        self.engine = GameEngine(config)
        self.event_bus = self.engine.event_bus
        self.world = self.engine.world

        spawn_main_menu(self.world, self.width, self.height)
        self.menu_input_system = MenuInputSystem(self.world, self.event_bus)
        self.menu_render_system = MenuRenderSystem(self.world, self)
        self.render_system = RenderSystem(self.event_bus, self, self.engine.snapshot)
        self.input_system = InputSystem(self.event_bus, self, self.engine)

        self.event_bus.subscribe(EVENT_MENU_MODE_SELECTED, self.on_mode_selected)
        self.event_bus.subscribe(EVENT_GAME_STATUS_CHANGED, self.on_status_changed)
        set_background_color((9, 9, 11))

    def on_mode_selected(self, sender, **kwargs):
        mode = kwargs.get('mode')
        if mode is None:
            return
        clear_main_menu(self.world)
        self.engine.start(mode)

    def on_status_changed(self, sender, **kwargs):
        if kwargs.get('new_status') == GameStatus.IDLE:
            spawn_main_menu(self.world, self.width, self.height)

    def on_draw(self):
        self.clear()
        if self.engine.snapshot.status == GameStatus.IDLE:
            self.menu_render_system.process()
            return
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.engine.advance(delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        # Menu clicks never reach the board.
        if self.engine.snapshot.status == GameStatus.IDLE:
            self.menu_input_system.handle_mouse_press(x, y, button)
            return
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    logging.basicConfig(
        level=os.environ.get("SUMSTACK_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    window = SumStackWindow(GameConfig.from_env())
    logger.info("window ready (%dx%d)", window.width, window.height)
    run()

if __name__ == "__main__":
    main()
