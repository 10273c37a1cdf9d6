"""Rendering system responsible for drawing the main menu."""
import arcade
from esper import World

from sumstack.menu.components import MenuBackground, MenuButton


class MenuRenderSystem:
    """Renders menu entities; the window only calls it while the game is idle."""

    def __init__(self, world: World, window) -> None:
        self.world = world
        self.window = window

    def process(self) -> None:
        for _, background in self.world.get_component(MenuBackground):
            arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, background.color)

        arcade.draw_text(
            "SumStack",
            self.window.width / 2,
            self.window.height * 0.8,
            arcade.color.WHITE,
            44,
            anchor_x="center",
            anchor_y="center",
            bold=True,
        )

        for _, button in self.world.get_component(MenuButton):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            fill_color = arcade.color.EMERALD if button.enabled else arcade.color.GRAY_BLUE
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, fill_color)
            arcade.draw_lbwh_rectangle_outline(
                left, bottom, button.width, button.height, arcade.color.WHITE, border_width=2
            )
            arcade.draw_text(
                button.label,
                button.x,
                button.y + 10,
                arcade.color.WHITE,
                22,
                anchor_x="center",
                anchor_y="center",
                bold=True,
            )
            if button.subtitle:
                arcade.draw_text(
                    button.subtitle,
                    button.x,
                    button.y - 18,
                    arcade.color.LIGHT_GRAY,
                    12,
                    anchor_x="center",
                    anchor_y="center",
                )
