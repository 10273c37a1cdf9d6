from __future__ import annotations

import logging

from esper import World

from sumstack.components.game_state import GameState, GameStatus
from sumstack.events.bus import EVENT_GAME_STATUS_CHANGED, EventBus

logger = logging.getLogger(__name__)


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState resource not found")


def is_playing(world: World) -> bool:
    for _, state in world.get_component(GameState):
        return state.status == GameStatus.PLAYING
    return False


def set_game_status(world: World, event_bus: EventBus, status: GameStatus) -> None:
    """Update the game status and emit a change event when it differs."""

    state = get_game_state(world)
    previous_status = state.status
    if previous_status == status:
        return
    state.status = status
    logger.debug("status %s -> %s (mode=%s)", previous_status.name, status.name, state.mode.name)
    event_bus.emit(
        EVENT_GAME_STATUS_CHANGED,
        previous_status=previous_status,
        new_status=status,
        mode=state.mode,
    )
