from dataclasses import dataclass

@dataclass(slots=True)
class RoundTimer:
    """Countdown resource that only exists while a TIME game is PLAYING.

    ``elapsed`` accumulates real seconds between whole-second round ticks.
    """
    generation: int
    elapsed: float = 0.0
