from __future__ import annotations

from typing import Any

from sumstack.components.game_state import GameMode, GameStatus
from sumstack.constants import BOTTOM_MARGIN, HUD_HEIGHT
from sumstack.events.bus import EVENT_SNAPSHOT_PUBLISHED, EventBus
from sumstack.rendering.board_renderer import BoardRenderer
from sumstack.snapshot import GameSnapshot
from sumstack.ui.layout import compute_board_geometry

PADDING = 4


class RenderSystem:
    """Paints the latest published snapshot: board, HUD and game-over overlay."""

    def __init__(self, event_bus: EventBus, window, snapshot: GameSnapshot | None = None):
        self.event_bus = event_bus
        self.window = window
        self.snapshot = snapshot
        self.event_bus.subscribe(EVENT_SNAPSHOT_PUBLISHED, self.on_snapshot)
        self._last_tile_layout: dict[tuple[int, int], dict[str, Any]] = {}
        self._board_renderer = BoardRenderer(self, padding=PADDING)

    def on_snapshot(self, sender, **kwargs):
        snapshot = kwargs.get('snapshot')
        if snapshot is not None:
            self.snapshot = snapshot

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True
        snapshot = self.snapshot
        if snapshot is None or snapshot.status == GameStatus.IDLE:
            return
        geometry = compute_board_geometry(self.window.width, self.window.height, snapshot.rows, snapshot.cols)
        self._board_renderer.render(arcade, snapshot, geometry, headless)
        if headless:
            return
        self._draw_hud(arcade, snapshot, geometry)
        if snapshot.status == GameStatus.GAMEOVER:
            self._draw_game_over(arcade, snapshot)

    def _draw_hud(self, arcade, snapshot: GameSnapshot, geometry):
        tile_size, start_x, start_y = geometry
        board_top = start_y + snapshot.rows * tile_size
        hud_y = min(board_top + HUD_HEIGHT / 2, self.window.height - BOTTOM_MARGIN)
        arcade.draw_text(
            f"TARGET {snapshot.target}",
            self.window.width / 2,
            hud_y,
            arcade.color.EMERALD,
            28,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )
        total = snapshot.current_sum
        sum_color = arcade.color.RED if total > snapshot.target else arcade.color.WHITE
        arcade.draw_text(
            f"{total} / {snapshot.target}",
            self.window.width / 2,
            hud_y - 30,
            sum_color,
            16,
            anchor_x="center",
            anchor_y="center",
        )
        arcade.draw_text(f"SCORE {snapshot.score:,}", 20, hud_y, arcade.color.WHITE, 18, anchor_y="center")
        mode_label = "Classic" if snapshot.mode == GameMode.CLASSIC else "Timed"
        arcade.draw_text(mode_label, 20, hud_y - 28, arcade.color.LIGHT_GRAY, 12, anchor_y="center")
        if snapshot.mode == GameMode.TIME and snapshot.max_time > 0:
            bar_width = 160
            left = self.window.width - bar_width - 20
            fraction = max(0.0, min(1.0, snapshot.time_left / snapshot.max_time))
            bar_color = arcade.color.RED if snapshot.time_left < 5 else arcade.color.EMERALD
            arcade.draw_lbwh_rectangle_filled(left, hud_y - 6, bar_width, 12, (39, 39, 42))
            arcade.draw_lbwh_rectangle_filled(left, hud_y - 6, bar_width * fraction, 12, bar_color)
            arcade.draw_text(
                f"{snapshot.time_left}s", left + bar_width, hud_y - 24, bar_color, 12, anchor_x="right"
            )

    def _draw_game_over(self, arcade, snapshot: GameSnapshot):
        arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, (9, 9, 11, 200))
        cx = self.window.width / 2
        cy = self.window.height / 2
        arcade.draw_text("GAME OVER", cx, cy + 50, arcade.color.WHITE, 40, anchor_x="center", bold=True)
        arcade.draw_text(
            f"Final score {snapshot.score:,}", cx, cy, arcade.color.EMERALD, 24, anchor_x="center"
        )
        arcade.draw_text(
            "R to try again - Esc for the menu", cx, cy - 50, arcade.color.LIGHT_GRAY, 14, anchor_x="center"
        )
