from __future__ import annotations

import logging

from esper import World

from sumstack.components.game_state import GameMode, GameStatus
from sumstack.events.bus import (
    EVENT_GAME_RESET_REQUEST,
    EVENT_GAME_START_REQUEST,
    EVENT_GAME_STARTED,
    EVENT_RETURN_TO_MENU_REQUEST,
    EventBus,
)
from sumstack.systems.board_ops import clear_board, fill_bottom_rows
from sumstack.systems.match_resolution import draw_target
from sumstack.utils.game_state import get_game_state, set_game_status

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Coordinates starting, resetting and abandoning games."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_GAME_START_REQUEST, self.on_start_request)
        self.event_bus.subscribe(EVENT_GAME_RESET_REQUEST, self.on_reset_request)
        self.event_bus.subscribe(EVENT_RETURN_TO_MENU_REQUEST, self.on_return_to_menu)

    def on_start_request(self, sender, **payload) -> None:
        mode = payload.get("mode")
        if mode is None:
            return
        self.start_game(GameMode.parse(mode))

    def on_reset_request(self, sender, **payload) -> None:
        self.start_game(get_game_state(self.world).mode)

    def on_return_to_menu(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state.status == GameStatus.IDLE:
            return
        # New generation so any stale deferred work from the abandoned game is dropped.
        state.generation += 1
        set_game_status(self.world, self.event_bus, GameStatus.IDLE)
        logger.info("returned to menu (score=%d)", state.score)

    def start_game(self, mode: GameMode) -> None:
        config = self.world.config
        state = get_game_state(self.world)
        state.generation += 1
        state.mode = mode
        clear_board(self.world)
        fill_bottom_rows(self.world, config.initial_rows)
        state.target = draw_target(self.world)
        state.score = 0
        state.level = 1
        state.max_time = config.time_per_round
        state.time_left = config.time_per_round
        logger.info("game started: mode=%s target=%d generation=%d", mode.name, state.target, state.generation)
        # Started first so listeners drop the previous game's timers before the status flips.
        self.event_bus.emit(
            EVENT_GAME_STARTED,
            mode=mode,
            generation=state.generation,
            target=state.target,
        )
        set_game_status(self.world, self.event_bus, GameStatus.PLAYING)
