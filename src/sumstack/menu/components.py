"""Components used by the main menu ECS subsystem."""
from dataclasses import dataclass

from sumstack.components.game_state import GameMode


@dataclass
class MenuButton:
    """Interactive button that starts a game in ``mode``."""
    label: str
    mode: GameMode
    x: float
    y: float
    subtitle: str = ""
    width: float = 320.0
    height: float = 72.0
    enabled: bool = True


@dataclass
class MenuBackground:
    """Background styling data for the menu screen."""
    color: tuple[int, int, int] = (12, 12, 16)


@dataclass
class MenuTag:
    """Marker component so menu entities can be cleaned up together."""
    pass
