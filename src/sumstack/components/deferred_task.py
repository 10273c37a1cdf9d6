from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass(slots=True)
class DeferredTask:
    """One-shot event emission scheduled ``remaining`` seconds in the future."""

    event: str
    remaining: float
    generation: int
    payload: Dict[str, Any] = field(default_factory=dict)
