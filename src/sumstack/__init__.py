"""SumStack: pick numbered tiles that add up to the target before the stack reaches the top."""
from sumstack.components.game_state import GameMode, GameStatus
from sumstack.config import GameConfig
from sumstack.engine import GameEngine
from sumstack.snapshot import GameSnapshot, TileView

__all__ = [
    "GameConfig",
    "GameEngine",
    "GameMode",
    "GameSnapshot",
    "GameStatus",
    "TileView",
]
