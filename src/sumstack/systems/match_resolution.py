import logging
from typing import List, Tuple

from esper import World

from sumstack.components.game_state import GameMode, GameStatus
from sumstack.events.bus import (
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_ROW_INJECT_REQUEST,
    EVENT_SCORE_CHANGED,
    EVENT_SELECTION_CHANGED,
    EVENT_SELECTION_OVERFLOW,
    EVENT_TARGET_CHANGED,
    EVENT_TIMER_CHANGED,
    EventBus,
)
from sumstack.systems.board_ops import (
    apply_gravity_moves,
    clear_selection,
    clear_tiles,
    compute_gravity_moves,
    current_sum,
    selected_positions,
)
from sumstack.systems.scheduler_system import SchedulerSystem
from sumstack.utils.game_state import get_game_state

logger = logging.getLogger(__name__)


def draw_target(world: World) -> int:
    config = world.config
    return world.random.randint(config.target_min, config.target_max)


class MatchResolutionSystem:
    """Compares the running selection sum with the target after every toggle."""

    def __init__(self, world: World, event_bus: EventBus, scheduler: SchedulerSystem | None = None):
        self.world = world
        self.event_bus = event_bus
        self.scheduler = scheduler
        self.event_bus.subscribe(EVENT_SELECTION_CHANGED, self.on_selection_changed)

    def on_selection_changed(self, sender, **kwargs):
        state = get_game_state(self.world)
        if state.status != GameStatus.PLAYING:
            return
        # Recompute from the board rather than trusting the payload.
        total = current_sum(self.world)
        if total == state.target:
            self._resolve_match(total)
        elif total > state.target:
            positions = clear_selection(self.world)
            logger.debug("overflow: %s > %s, cleared %d selections", total, state.target, len(positions))
            self.event_bus.emit(EVENT_SELECTION_OVERFLOW, positions=positions, total=total, target=state.target)

    def _resolve_match(self, total: int):
        state = get_game_state(self.world)
        positions: List[Tuple[int, int]] = selected_positions(self.world)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=positions, total=total)

        values = clear_tiles(self.world, positions)
        points = len(values) * self.world.config.points_per_tile
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=positions, values=values, points=points)

        moves = compute_gravity_moves(self.world)
        if moves:
            apply_gravity_moves(self.world, moves)
        self.event_bus.emit(
            EVENT_GRAVITY_APPLIED,
            moves=[{'from': m.source, 'to': m.target, 'tile_id': m.tile_id} for m in moves],
            columns=len({m.source[1] for m in moves}),
        )

        state.score += points
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=points)

        previous_target = state.target
        state.target = draw_target(self.world)
        self.event_bus.emit(EVENT_TARGET_CHANGED, previous=previous_target, target=state.target)

        state.time_left = state.max_time
        self.event_bus.emit(EVENT_TIMER_CHANGED, time_left=state.time_left, max_time=state.max_time)
        logger.debug("match of %d tiles for %d points; next target %d", len(values), points, state.target)

        if state.mode == GameMode.CLASSIC:
            self._queue_row(state.generation)

    def _queue_row(self, generation: int):
        delay = self.world.config.row_append_delay
        if self.scheduler is None or delay <= 0:
            self.event_bus.emit(EVENT_ROW_INJECT_REQUEST, reason="match", generation=generation)
            return
        self.scheduler.schedule(
            delay,
            EVENT_ROW_INJECT_REQUEST,
            reason="match",
            generation=generation,
        )
