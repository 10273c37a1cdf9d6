"""Game state resource describing the active game."""
from dataclasses import dataclass
from enum import Enum

from sumstack.constants import TIME_PER_ROUND


class GameMode(Enum):
    """Pacing rule for row injection, fixed for the duration of a game."""
    CLASSIC = "CLASSIC"
    TIME = "TIME"

    @classmethod
    def parse(cls, value: "GameMode | str") -> "GameMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown game mode {value!r}; expected one of {names}") from None


class GameStatus(Enum):
    IDLE = "IDLE"
    PLAYING = "PLAYING"
    GAMEOVER = "GAMEOVER"


@dataclass
class GameState:
    """Singleton component storing score, target, mode, status and round time."""
    mode: GameMode = GameMode.CLASSIC
    status: GameStatus = GameStatus.IDLE
    target: int = 0
    score: int = 0
    # Reserved for progression; nothing advances it.
    level: int = 1
    time_left: int = TIME_PER_ROUND
    max_time: int = TIME_PER_ROUND
    generation: int = 0
