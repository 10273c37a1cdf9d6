import itertools
import random

from esper import World

from sumstack.config import GameConfig
from sumstack.components.game_state import GameMode, GameState


def create_world(
    initial_mode: GameMode = GameMode.CLASSIC,
    *,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> World:
    config = config or GameConfig()
    world = World()
    setattr(world, "config", config)
    setattr(world, "random", rng or random.Random(config.seed))
    setattr(world, "tile_ids", itertools.count(1))

    # Register the global game state resource; the board entity is owned by BoardSystem.
    state_entity = world.create_entity()
    world.add_component(
        state_entity,
        GameState(
            mode=initial_mode,
            time_left=config.time_per_round,
            max_time=config.time_per_round,
        ),
    )
    return world
