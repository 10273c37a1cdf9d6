"""Public facade over the SumStack world and systems.

Every operation is serialised, routed through the event bus to the systems,
and answered with an immutable :class:`GameSnapshot`.
"""
from __future__ import annotations

import logging
import random
import threading
from typing import Callable

from sumstack.components.game_state import GameMode
from sumstack.config import GameConfig
from sumstack.events.bus import (
    EVENT_GAME_RESET_REQUEST,
    EVENT_GAME_START_REQUEST,
    EVENT_RETURN_TO_MENU_REQUEST,
    EVENT_ROUND_TICK,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_SNAPSHOT_PUBLISHED,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EventBus,
)
from sumstack.snapshot import GameSnapshot, build_snapshot
from sumstack.systems.board import BoardSystem
from sumstack.systems.game_flow_system import GameFlowSystem
from sumstack.systems.match_resolution import MatchResolutionSystem
from sumstack.systems.round_timer_system import RoundTimerSystem
from sumstack.systems.row_injection_system import RowInjectionSystem
from sumstack.systems.scheduler_system import SchedulerSystem
from sumstack.utils.game_state import get_game_state
from sumstack.world import create_world

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[GameSnapshot], None]


class GameEngine:
    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        event_bus: EventBus | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or GameConfig()
        self.event_bus = event_bus or EventBus()
        self.world = create_world(config=self.config, rng=rng)
        self._lock = threading.RLock()

        self.scheduler = SchedulerSystem(self.world, self.event_bus)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.match_resolution_system = MatchResolutionSystem(self.world, self.event_bus, scheduler=self.scheduler)
        self.row_injection_system = RowInjectionSystem(self.world, self.event_bus)
        self.round_timer_system = RoundTimerSystem(self.world, self.event_bus)
        self.game_flow_system = GameFlowSystem(self.world, self.event_bus)

        self._snapshot = build_snapshot(self.world)

    @property
    def snapshot(self) -> GameSnapshot:
        return self._snapshot

    def subscribe(self, listener: SnapshotListener) -> None:
        """Call ``listener(snapshot)`` for every newly published snapshot."""
        self.event_bus.subscribe(EVENT_SNAPSHOT_PUBLISHED, lambda sender, **kw: listener(kw["snapshot"]))

    def start(self, mode: GameMode | str) -> GameSnapshot:
        mode = GameMode.parse(mode)
        return self._dispatch(EVENT_GAME_START_REQUEST, mode=mode)

    def select_tile(self, row: int, col: int) -> GameSnapshot:
        return self._dispatch(EVENT_TILE_CLICK, row=row, col=col)

    def tick(self) -> GameSnapshot:
        """One second of TIME-mode countdown; no-op in any other situation."""
        return self._dispatch(EVENT_ROUND_TICK, source="manual")

    def add_row(self) -> GameSnapshot:
        return self._dispatch(EVENT_ROW_INJECT_REQUEST, reason="manual")

    def reset(self) -> GameSnapshot:
        return self._dispatch(EVENT_GAME_RESET_REQUEST)

    def return_to_menu(self) -> GameSnapshot:
        return self._dispatch(EVENT_RETURN_TO_MENU_REQUEST)

    def advance(self, dt: float) -> GameSnapshot:
        """Advance real time by ``dt`` seconds: due deferred tasks fire, the round timer counts."""
        return self._dispatch(EVENT_TICK, dt=dt)

    @property
    def current_mode(self) -> GameMode:
        return get_game_state(self.world).mode

    def _dispatch(self, event: str, **payload) -> GameSnapshot:
        with self._lock:
            self.event_bus.emit(event, **payload)
            return self._publish()

    def _publish(self) -> GameSnapshot:
        previous = self._snapshot
        pending_row = bool(self.scheduler.pending(EVENT_ROW_INJECT_REQUEST))
        snapshot = build_snapshot(self.world, previous, pending_row=pending_row)
        if snapshot == previous:
            return previous
        self._snapshot = snapshot
        self.event_bus.emit(EVENT_SNAPSHOT_PUBLISHED, snapshot=snapshot)
        return snapshot
