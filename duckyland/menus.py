"""The game's menus: main, credits, settings and pause."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Protocol, Sequence

from duckyland.asset_tracking import Handle, ResourceHandles
from duckyland.audio import AudioInstance, AudioMixer, music
from duckyland.states import Menu, Screen, State
from duckyland.theme import button, button_small, header, label, ui_root
from duckyland.ui import Direction, JustifySelf, Node

MIN_VOLUME = 0.0
MAX_VOLUME = 3.0
VOLUME_STEP = 0.1
MENU_Z_INDEX = 2
CREDITS_MUSIC_PATH = "audio/music/Monkeys Spinning Monkeys.ogg"

CREATED_BY: tuple[tuple[str, str], ...] = (
    ("Joe Shmoe", "Implemented alligator wrestling AI"),
    ("Jane Doe", "Made the music for the alien invasion"),
)

ASSET_CREDITS: tuple[tuple[str, str], ...] = (
    ("Ducky sprite", "CC0 by Caz Creates Games"),
    ("Button SFX", "CC0 by Jaszunio15"),
    ("Music", "CC BY 3.0 by Kevin MacLeod"),
    ("Splash logo", "Used with permission on the splash screen"),
)


class _MenuHost(Protocol):
    screen: State[Screen]
    menu: State[Menu]
    resources: ResourceHandles
    mixer: AudioMixer
    credits_music: Optional[Handle]

    def play_scoped(self, instance: AudioInstance, scope: Menu) -> AudioInstance: ...

    def exit(self) -> None: ...


def lower_volume(volume: float) -> float:
    """One step quieter, never below the minimum."""
    return max(volume - VOLUME_STEP, MIN_VOLUME)


def raise_volume(volume: float) -> float:
    """One step louder, never above the maximum."""
    return min(volume + VOLUME_STEP, MAX_VOLUME)


def volume_label(volume: float) -> str:
    """The volume as a whole percentage, padded to three digits."""
    return f"{100.0 * volume:3.0f}%"


def settings_back_target(screen: Screen) -> Menu:
    """Where leaving the settings menu goes, given the current screen."""
    return Menu.MAIN if screen is Screen.TITLE else Menu.PAUSE


def grid(content: Iterable[Sequence[str]]) -> Node:
    """A two-column grid of labels, the left column aligned to the right."""
    children = []
    for row in content:
        if len(row) != 2:
            raise ValueError(f"grid rows need exactly two cells, got {len(row)}")
        left, right = label(row[0]), label(row[1])
        left.justify_self = JustifySelf.END
        right.justify_self = JustifySelf.START
        children.extend((left, right))
    return Node(
        "Grid",
        direction=Direction.GRID,
        row_gap=10.0,
        column_gap=30.0,
        grid_columns=(400.0, 400.0),
        children=children,
    )


def _menu_root(name: str, children: list[Node]) -> Node:
    root = ui_root(name)
    root.z_index = MENU_Z_INDEX
    root.children = children
    return root


def _go_to_menu(game: _MenuHost, menu: Menu) -> Callable[[], None]:
    return lambda: game.menu.set(menu)


def main_menu(game: _MenuHost) -> Node:
    def play() -> None:
        game.screen.set(Screen.GAMEPLAY if game.resources.is_all_done() else Screen.LOADING)

    return _menu_root(
        "Main Menu",
        [
            button("Play", play),
            button("Settings", _go_to_menu(game, Menu.SETTINGS)),
            button("Credits", _go_to_menu(game, Menu.CREDITS)),
            button("Exit", game.exit),
        ],
    )


def credits_menu(game: _MenuHost) -> Node:
    """Build the credits menu and start its music if it has loaded."""
    if game.credits_music is not None:
        track = music(game.credits_music)
        track_name = "Credits Music"
        setattr(track, "name", track_name)
        game.play_scoped(track, Menu.CREDITS)
    return _menu_root(
        "Credits Menu",
        [
            header("Created by"),
            grid(CREATED_BY),
            header("Assets"),
            grid(ASSET_CREDITS),
            button("Back", _go_to_menu(game, Menu.MAIN)),
        ],
    )


def settings_menu(game: _MenuHost) -> Node:
    volume_text = label(volume_label(game.mixer.global_volume))
    volume_text.name = "Global Volume Label"

    def change_volume(step: Callable[[float], float]) -> Callable[[], None]:
        def apply() -> None:
            game.mixer.set_global_volume(step(game.mixer.global_volume))
            volume_text.text = volume_label(game.mixer.global_volume)

        return apply

    master = label("Master Volume")
    master.justify_self = JustifySelf.END
    volume_widget = Node(
        "Global Volume Widget",
        justify_self=JustifySelf.START,
        align_center=True,
        children=[
            button_small("-", change_volume(lower_volume)),
            Node("Current Volume", padding_x=10.0, justify_center=True, children=[volume_text]),
            button_small("+", change_volume(raise_volume)),
        ],
    )
    settings_grid = Node(
        "Settings Grid",
        direction=Direction.GRID,
        row_gap=10.0,
        column_gap=30.0,
        grid_columns=(400.0, 400.0),
        children=[master, volume_widget],
    )

    def back() -> None:
        game.menu.set(settings_back_target(game.screen.current))

    return _menu_root(
        "Settings Menu",
        [header("Settings"), settings_grid, button("Back", back)],
    )


def pause_menu(game: _MenuHost) -> Node:
    return _menu_root(
        "Pause Menu",
        [
            header("Game paused"),
            button("Continue", _go_to_menu(game, Menu.NONE)),
            button("Settings", _go_to_menu(game, Menu.SETTINGS)),
            button("Quit to title", lambda: game.screen.set(Screen.TITLE)),
        ],
    )


_BUILDERS: dict[Menu, Callable[[_MenuHost], Node]] = {
    Menu.MAIN: main_menu,
    Menu.CREDITS: credits_menu,
    Menu.SETTINGS: settings_menu,
    Menu.PAUSE: pause_menu,
}


def build_menu(menu: Menu, game: _MenuHost) -> Optional[Node]:
    """Build the UI for ``menu``; None when no menu is shown."""
    builder = _BUILDERS.get(menu)
    return None if builder is None else builder(game)