from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float (real seconds since last frame)
EVENT_ROUND_TICK = "round_tick"            # payload: source=str ("manual" | "timer")
EVENT_TIMER_CHANGED = "timer_changed"      # payload: time_left=int, max_time=int
EVENT_TASK_SCHEDULED = "task_scheduled"    # payload: handle=int, event=str, delay=float
EVENT_TASK_CANCELLED = "task_cancelled"    # payload: handle=int, event=str, reason=str


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_KEY_PRESS = "key_press"              # payload: symbol, modifiers
EVENT_TILE_CLICK = "tile_click"            # payload: row, col


# ============================================================================
# TILE & BOARD MECHANICS
# ============================================================================
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col, value
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: row, col, value
EVENT_SELECTION_CHANGED = "selection_changed"      # payload: positions=[(r,c),...], total=int
EVENT_SELECTION_OVERFLOW = "selection_overflow"    # payload: positions=[(r,c),...], total=int, target=int
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], total=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], values=[int,...], points=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[{'from','to','tile_id'}], columns=int
EVENT_ROW_INJECT_REQUEST = "row_inject_request"    # payload: reason=str, generation=int|None
EVENT_ROW_INJECTED = "row_injected"                # payload: new_tiles=[(r,c),...], reason=str


# ============================================================================
# SCORE & TARGET
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"      # payload: score=int, delta=int
EVENT_TARGET_CHANGED = "target_changed"    # payload: previous=int, target=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_START_REQUEST = "game_start_request"        # payload: mode=GameMode
EVENT_GAME_RESET_REQUEST = "game_reset_request"        # payload: None
EVENT_RETURN_TO_MENU_REQUEST = "return_to_menu_request"  # payload: None
EVENT_GAME_STARTED = "game_started"                    # payload: mode=GameMode, generation=int, target=int
EVENT_GAME_STATUS_CHANGED = "game_status_changed"      # payload: previous_status=GameStatus|None, new_status=GameStatus, mode=GameMode
EVENT_GAME_OVER = "game_over"                          # payload: score=int, mode=GameMode
EVENT_SNAPSHOT_PUBLISHED = "snapshot_published"        # payload: snapshot=GameSnapshot


# ============================================================================
# MENU & UI
# ============================================================================
EVENT_MENU_MODE_SELECTED = "menu_mode_selected"        # payload: mode=GameMode
