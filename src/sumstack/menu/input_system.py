"""Input handling for the ECS-driven main menu."""
from esper import World

from sumstack.components.game_state import GameMode, GameStatus
from sumstack.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MENU_MODE_SELECTED,
    EventBus,
)
from sumstack.menu.components import MenuButton
from sumstack.utils.game_state import get_game_state

# arcade.key.KEY_1 / KEY_2, avoided as imports to keep loose coupling.
MODE_KEYS = {49: GameMode.CLASSIC, 50: GameMode.TIME}


class MenuInputSystem:
    """Processes input events while no game is running."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self._event_bus = event_bus
        event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_key_press(self, sender, **payload) -> None:
        symbol = payload.get("symbol")
        if symbol in MODE_KEYS and self._menu_active():
            self._select(MODE_KEYS[symbol])

    def handle_mouse_press(self, x: float, y: float, button: int) -> None:
        """Start a game if a mode button was clicked."""
        if not self._menu_active():
            return
        for _, menu_button in self.world.get_component(MenuButton):
            if not menu_button.enabled:
                continue
            if self._point_inside_button(x, y, menu_button):
                self._select(menu_button.mode)
                return

    def _menu_active(self) -> bool:
        return get_game_state(self.world).status == GameStatus.IDLE

    def _select(self, mode: GameMode) -> None:
        self._event_bus.emit(EVENT_MENU_MODE_SELECTED, mode=mode)

    @staticmethod
    def _point_inside_button(x: float, y: float, button: MenuButton) -> bool:
        half_w = button.width / 2
        half_h = button.height / 2
        return (
            button.x - half_w <= x <= button.x + half_w
            and button.y - half_h <= y <= button.y + half_h
        )
