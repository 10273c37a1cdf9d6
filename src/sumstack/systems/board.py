import logging

from esper import World

from sumstack.components.active_switch import ActiveSwitch
from sumstack.components.board import Board
from sumstack.components.board_position import BoardPosition
from sumstack.components.tile import NumberTile
from sumstack.events.bus import (
    EVENT_SELECTION_CHANGED,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_SELECTED,
    EventBus,
)
from sumstack.systems.board_ops import current_sum, in_bounds, selected_positions, tile_at
from sumstack.utils.game_state import is_playing

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and its cells; toggles tile selection on clicks."""

    def __init__(self, world: World, event_bus: EventBus, rows: int | None = None, cols: int | None = None):
        self.world = world
        self.event_bus = event_bus
        config = getattr(world, "config", None)
        rows = rows if rows is not None else config.rows
        cols = cols if cols is not None else config.cols
        # Create a single board entity with Board component
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(rows=rows, cols=cols))
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self._init_board()

    def _init_board(self):
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        for r in range(board.rows):
            for c in range(board.cols):
                # Cells start empty; GameFlowSystem fills the entry rows when a game starts.
                self.world.create_entity(
                    BoardPosition(row=r, col=c),
                    ActiveSwitch(active=False),
                    NumberTile(),
                )

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not is_playing(self.world):
            logger.debug("click at (%s, %s) ignored: not playing", row, col)
            return
        if not in_bounds(self.world, row, col):
            logger.debug("click at (%s, %s) ignored: out of bounds", row, col)
            return
        tile = tile_at(self.world, row, col)
        if tile is None:
            return
        tile.selected = not tile.selected
        event = EVENT_TILE_SELECTED if tile.selected else EVENT_TILE_DESELECTED
        self.event_bus.emit(event, row=row, col=col, value=tile.value)
        self.event_bus.emit(
            EVENT_SELECTION_CHANGED,
            positions=selected_positions(self.world),
            total=current_sum(self.world),
        )
