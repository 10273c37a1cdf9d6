from dataclasses import dataclass

@dataclass(slots=True)
class NumberTile:
    """Numbered tile data held by a board cell entity.

    Only meaningful while the cell's ActiveSwitch is on. ``tile_id`` travels
    with the tile through gravity and row shifts so renderers can keep
    per-tile identity.
    """
    tile_id: int = 0
    value: int = 0
    selected: bool = False
