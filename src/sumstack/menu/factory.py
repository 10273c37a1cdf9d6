"""Factory helpers for creating the main menu entities."""
from esper import World

from sumstack.components.game_state import GameMode
from sumstack.menu.components import MenuBackground, MenuButton, MenuTag


def spawn_main_menu(world: World, width: int, height: int) -> None:
    """Create the menu background and one button per game mode."""
    clear_main_menu(world)
    center_x = width / 2
    center_y = height / 2

    world.create_entity(MenuBackground(), MenuTag())

    button_specs = (
        ("Classic", "A new row after every match", GameMode.CLASSIC, center_y + 50.0),
        ("Timed", "A new row whenever the clock runs out", GameMode.TIME, center_y - 50.0),
    )
    for label, subtitle, mode, y_position in button_specs:
        world.create_entity(
            MenuButton(label=label, subtitle=subtitle, mode=mode, x=center_x, y=y_position),
            MenuTag(),
        )


def clear_main_menu(world: World) -> None:
    """Remove all entities that are part of the menu UI."""
    for ent in [ent for ent, _ in world.get_component(MenuTag)]:
        world.delete_entity(ent, immediate=True)
