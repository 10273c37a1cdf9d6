from __future__ import annotations

import logging
from typing import Any

from esper import World

from sumstack.components.deferred_task import DeferredTask
from sumstack.components.game_state import GameStatus
from sumstack.events.bus import (
    EVENT_GAME_STARTED,
    EVENT_GAME_STATUS_CHANGED,
    EVENT_TASK_CANCELLED,
    EVENT_TASK_SCHEDULED,
    EVENT_TICK,
    EventBus,
)
from sumstack.utils.game_state import get_game_state

logger = logging.getLogger(__name__)


class SchedulerSystem:
    """Cancellable one-shot timers expressed as DeferredTask entities.

    Each task remembers the game generation it was scheduled for. Tasks are
    cancelled whenever a new game starts or the game leaves PLAYING, and a
    task that still comes due for a superseded generation is dropped.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_GAME_STARTED, self.on_game_started)
        self.event_bus.subscribe(EVENT_GAME_STATUS_CHANGED, self.on_status_changed)

    def schedule(self, delay: float, event: str, **payload: Any) -> int:
        """Emit ``event`` with ``payload`` after ``delay`` seconds; returns a cancel handle."""
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        generation = get_game_state(self.world).generation
        handle = self.world.create_entity(
            DeferredTask(event=event, remaining=float(delay), generation=generation, payload=dict(payload))
        )
        logger.debug("scheduled %s in %.3fs (handle=%s, generation=%s)", event, delay, handle, generation)
        self.event_bus.emit(EVENT_TASK_SCHEDULED, handle=handle, event=event, delay=float(delay))
        return handle

    def cancel(self, handle: int, *, reason: str = "cancelled") -> bool:
        """Drop a pending task. Returns False if it already fired or was cancelled."""
        if not self.world.entity_exists(handle) or not self.world.has_component(handle, DeferredTask):
            return False
        task = self.world.component_for_entity(handle, DeferredTask)
        self.world.delete_entity(handle, immediate=True)
        logger.debug("cancelled %s (handle=%s, reason=%s)", task.event, handle, reason)
        self.event_bus.emit(EVENT_TASK_CANCELLED, handle=handle, event=task.event, reason=reason)
        return True

    def cancel_all(self, *, reason: str = "cancelled") -> int:
        handles = [entity for entity, _ in self.world.get_component(DeferredTask)]
        return sum(1 for handle in handles if self.cancel(handle, reason=reason))

    def pending(self, event: str | None = None) -> list[int]:
        return [
            entity
            for entity, task in self.world.get_component(DeferredTask)
            if event is None or task.event == event
        ]

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 0.0)
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            return
        if dt <= 0:
            return
        due: list[tuple[float, int, DeferredTask]] = []
        for entity, task in self.world.get_component(DeferredTask):
            task.remaining -= dt
            if task.remaining <= 0:
                due.append((task.remaining, entity, task))
        # Fire the most overdue first so ordering matches scheduling time.
        for _, entity, task in sorted(due, key=lambda item: (item[0], item[1])):
            if not self.world.entity_exists(entity):
                # Cancelled by an earlier task firing in this same tick.
                continue
            self.world.delete_entity(entity, immediate=True)
            if task.generation != get_game_state(self.world).generation:
                logger.debug("dropped stale %s (handle=%s)", task.event, entity)
                continue
            self.event_bus.emit(task.event, **task.payload)

    def on_game_started(self, sender, **kwargs):
        self.cancel_all(reason="game_started")

    def on_status_changed(self, sender, **kwargs):
        if kwargs.get('new_status') != GameStatus.PLAYING:
            self.cancel_all(reason="left_playing")
