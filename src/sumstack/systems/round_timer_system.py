from __future__ import annotations

import logging

from esper import World

from sumstack.components.game_state import GameMode, GameStatus
from sumstack.components.round_timer import RoundTimer
from sumstack.events.bus import (
    EVENT_GAME_STARTED,
    EVENT_GAME_STATUS_CHANGED,
    EVENT_ROUND_TICK,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_TICK,
    EVENT_TIMER_CHANGED,
    EventBus,
)
from sumstack.utils.game_state import get_game_state

logger = logging.getLogger(__name__)

ROUND_TICK_SECONDS = 1.0


class RoundTimerSystem:
    """TIME-mode countdown.

    The RoundTimer entity is the timer resource: it is created on entering
    PLAYING with mode TIME and deleted on any exit from that combination.
    Frame ticks only advance the countdown while it exists; ``EVENT_ROUND_TICK``
    is the one-second step, which external drivers may also emit directly.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_ROUND_TICK, self.on_round_tick)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)
        self.event_bus.subscribe(EVENT_GAME_STATUS_CHANGED, self.on_status_changed)

    @property
    def active(self) -> bool:
        return self._timer() is not None

    def _timer(self) -> tuple[int, RoundTimer] | None:
        for entity, timer in self.world.get_component(RoundTimer):
            return entity, timer
        return None

    def _sync(self) -> None:
        state = get_game_state(self.world)
        wanted = state.status == GameStatus.PLAYING and state.mode == GameMode.TIME
        current = self._timer()
        if current is not None:
            entity, timer = current
            if wanted and timer.generation == state.generation:
                return
            self.world.delete_entity(entity, immediate=True)
            logger.debug("round timer released (generation=%s)", timer.generation)
        if wanted:
            self.world.create_entity(RoundTimer(generation=state.generation))
            logger.debug("round timer acquired (generation=%s)", state.generation)

    def on_game_started(self, sender, **kwargs):
        self._sync()

    def on_status_changed(self, sender, **kwargs):
        self._sync()

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 0.0)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return
        current = self._timer()
        if current is None or dt <= 0:
            return
        _, timer = current
        timer.elapsed += dt
        while True:
            current = self._timer()
            # A round tick can end the game, which releases the timer mid-loop.
            if current is None or current[1] is not timer:
                return
            if timer.elapsed < ROUND_TICK_SECONDS:
                return
            timer.elapsed -= ROUND_TICK_SECONDS
            self.event_bus.emit(EVENT_ROUND_TICK, source="timer")

    def on_round_tick(self, sender, **kwargs):
        state = get_game_state(self.world)
        if state.status != GameStatus.PLAYING or state.mode != GameMode.TIME:
            return
        state.time_left -= 1
        if state.time_left <= 0:
            self.event_bus.emit(EVENT_ROW_INJECT_REQUEST, reason="timer", generation=state.generation)
            state.time_left = state.max_time
        self.event_bus.emit(EVENT_TIMER_CHANGED, time_left=state.time_left, max_time=state.max_time)
