from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-cell occupancy flag.

    active: True if the cell currently holds a tile; False if cleared/empty.
    Tile data lives in a separate NumberTile component.
    """
    active: bool = True
