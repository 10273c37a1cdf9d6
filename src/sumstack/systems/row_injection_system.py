import logging

from esper import World

from sumstack.components.game_state import GameStatus
from sumstack.events.bus import (
    EVENT_GAME_OVER,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_ROW_INJECTED,
    EventBus,
)
from sumstack.systems.board_ops import fill_row, require_dimensions, row_occupied, shift_rows_up
from sumstack.utils.game_state import get_game_state, set_game_status

logger = logging.getLogger(__name__)


class RowInjectionSystem:
    """Pushes a fresh row in at the bottom, or ends the game if the top row is taken."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_ROW_INJECT_REQUEST, self.on_row_inject_request)

    def on_row_inject_request(self, sender, **kwargs):
        reason = kwargs.get('reason', 'request')
        generation = kwargs.get('generation')
        state = get_game_state(self.world)
        if state.status != GameStatus.PLAYING:
            logger.debug("row injection (%s) ignored: status %s", reason, state.status.name)
            return
        if generation is not None and generation != state.generation:
            logger.debug("row injection (%s) ignored: stale generation %s", reason, generation)
            return
        if row_occupied(self.world, 0):
            # The over-full board is kept as-is for display.
            set_game_status(self.world, self.event_bus, GameStatus.GAMEOVER)
            logger.info("game over: score=%d mode=%s", state.score, state.mode.name)
            self.event_bus.emit(EVENT_GAME_OVER, score=state.score, mode=state.mode)
            return
        rows, _ = require_dimensions(self.world)
        shift_rows_up(self.world)
        new_tiles = fill_row(self.world, rows - 1)
        self.event_bus.emit(EVENT_ROW_INJECTED, new_tiles=new_tiles, reason=reason)
