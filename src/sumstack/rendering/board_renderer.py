from __future__ import annotations

from typing import TYPE_CHECKING

from sumstack.ui.layout import cell_center

if TYPE_CHECKING:
    from sumstack.snapshot import GameSnapshot
    from sumstack.systems.render import RenderSystem

TILE_COLOR = (63, 63, 70)
SELECTED_COLOR = (16, 185, 129)
DANGER_TINT = (239, 68, 68, 40)
GRID_LINE_COLOR = (39, 39, 42)


class BoardRenderer:
    def __init__(self, render_system: RenderSystem, padding: int = 4):
        self._rs = render_system
        self._padding = padding

    def render(self, arcade, snapshot: GameSnapshot, geometry, headless: bool) -> None:
        rs = self._rs
        tile_size, start_x, start_y = geometry
        rows, cols = snapshot.rows, snapshot.cols
        rs._last_tile_layout = {}

        if not headless:
            arcade.draw_lbwh_rectangle_outline(
                start_x, start_y, cols * tile_size, rows * tile_size, GRID_LINE_COLOR, border_width=2
            )
            if snapshot.danger:
                arcade.draw_lbwh_rectangle_filled(
                    start_x, start_y, cols * tile_size, rows * tile_size, DANGER_TINT
                )

        draw_size = max(tile_size - self._padding, 4)
        for row in range(rows):
            for col in range(cols):
                tile = snapshot.grid[row][col]
                if tile is None:
                    continue
                draw_x, draw_y = cell_center(row, col, geometry, rows)
                rs._last_tile_layout[(row, col)] = {
                    "tile_id": tile.id,
                    "center": (draw_x, draw_y),
                    "size": draw_size,
                }
                if headless:
                    continue
                color = SELECTED_COLOR if tile.selected else TILE_COLOR
                arcade.draw_lbwh_rectangle_filled(
                    draw_x - draw_size / 2, draw_y - draw_size / 2, draw_size, draw_size, color
                )
                if row == 0:
                    arcade.draw_line(
                        draw_x - draw_size / 2,
                        draw_y + draw_size / 2,
                        draw_x + draw_size / 2,
                        draw_y + draw_size / 2,
                        (239, 68, 68),
                        2,
                    )
                arcade.draw_text(
                    str(tile.value),
                    draw_x,
                    draw_y,
                    arcade.color.WHITE,
                    int(draw_size * 0.45),
                    anchor_x="center",
                    anchor_y="center",
                    bold=True,
                )
