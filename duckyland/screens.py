"""Splash, loading and gameplay screen pieces."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from duckyland.states import Menu, Screen
from duckyland.theme import label, ui_root
from duckyland.ui import Node

SPLASH_BACKGROUND_COLOR = (0.157, 0.157, 0.157)
SPLASH_DURATION_SECS = 1.8
SPLASH_FADE_DURATION_SECS = 0.6
SPLASH_IMAGE_PATH = "images/splash.png"
PAUSE_OVERLAY_COLOR = (0.0, 0.0, 0.0, 0.8)

PAUSE_KEYS = frozenset({"p", "escape"})
CLOSE_MENU_KEYS = frozenset({"p"})


@dataclass
class FadeInOut:
    """Fades an image in and out over ``total_duration`` seconds."""

    total_duration: float = SPLASH_DURATION_SECS
    fade_duration: float = SPLASH_FADE_DURATION_SECS
    t: float = 0.0

    def tick(self, delta: float) -> None:
        self.t += delta

    def alpha(self) -> float:
        """Trapezoid-shaped opacity: rising, flat at 1.0, then falling."""
        t = min(max(self.t / self.total_duration, 0.0), 1.0)
        fade = self.fade_duration / self.total_duration
        return min((1.0 - abs(2.0 * t - 1.0)) / fade, 1.0)


def splash_screen() -> tuple[Node, FadeInOut]:
    """The splash screen UI and the fade that drives its image."""
    root = ui_root("Splash Screen")
    root.background = SPLASH_BACKGROUND_COLOR
    root.children = [Node("Splash image", width="70%")]
    return root, FadeInOut()


def loading_screen() -> Node:
    root = ui_root("Loading Screen")
    root.children = [label("Loading...")]
    return root


def pause_overlay() -> Node:
    """A translucent layer covering the window while paused."""
    return Node(
        "Pause Overlay",
        width="100%",
        height="100%",
        absolute=True,
        z_index=1,
        background=PAUSE_OVERLAY_COLOR,
    )


def gameplay_key_request(screen: Screen, menu: Menu, key: str) -> Optional[Menu]:
    """The menu a key press asks for during gameplay, or None.

    ``Menu.PAUSE`` means pause the game and open the pause menu;
    ``Menu.NONE`` means close whatever menu is open.
    """
    if screen is not Screen.GAMEPLAY:
        return None
    if menu is Menu.NONE:
        return Menu.PAUSE if key in PAUSE_KEYS else None
    return Menu.NONE if key in CLOSE_MENU_KEYS else None