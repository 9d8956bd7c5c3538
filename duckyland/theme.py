"""Colours, interaction palettes and common widgets."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable

from duckyland.ui import Direction, Node

Color = tuple[float, float, float]

LABEL_TEXT: Color = (0.867, 0.827, 0.412)
HEADER_TEXT: Color = (0.988, 0.984, 0.800)
BUTTON_TEXT: Color = (0.925, 0.925, 0.925)
BUTTON_BACKGROUND: Color = (0.275, 0.400, 0.750)
BUTTON_HOVERED_BACKGROUND: Color = (0.384, 0.600, 0.820)
BUTTON_PRESSED_BACKGROUND: Color = (0.239, 0.286, 0.600)


class Interaction(enum.Enum):
    NONE = "none"
    HOVERED = "hovered"
    PRESSED = "pressed"


@dataclass(frozen=True)
class InteractionPalette:
    """Background colours for each interaction state."""

    none: Color
    hovered: Color
    pressed: Color

    def color_for(self, interaction: Interaction) -> Color:
        return {
            Interaction.NONE: self.none,
            Interaction.HOVERED: self.hovered,
            Interaction.PRESSED: self.pressed,
        }[interaction]


def ui_root(name: str) -> Node:
    """A root that fills the window and centres its content in a column."""
    return Node(
        name,
        width="100%",
        height="100%",
        absolute=True,
        direction=Direction.COLUMN,
        align_center=True,
        justify_center=True,
        row_gap=20.0,
        pickable=False,
    )


def header(text: str) -> Node:
    return Node("Header", text=text, font_size=40.0, text_color=HEADER_TEXT)


def label(text: str) -> Node:
    return Node("Label", text=text, font_size=24.0, text_color=LABEL_TEXT)


def _button_base(text: str, action: Callable[..., Any], width: float, height: float, rounded: bool) -> Node:
    inner = Node(
        "Button Inner",
        width=width,
        height=height,
        align_center=True,
        justify_center=True,
        background=BUTTON_BACKGROUND,
        rounded=rounded,
        on_click=action,
        palette=InteractionPalette(BUTTON_BACKGROUND, BUTTON_HOVERED_BACKGROUND, BUTTON_PRESSED_BACKGROUND),
        interaction=Interaction.NONE,
        children=[
            Node("Button Text", text=text, font_size=40.0, text_color=BUTTON_TEXT, pickable=False)
        ],
    )
    return Node("Button", children=[inner])


def button(text: str, action: Callable[..., Any]) -> Node:
    """A large rounded button that calls ``action`` when clicked."""
    return _button_base(text, action, 380.0, 80.0, True)


def button_small(text: str, action: Callable[..., Any]) -> Node:
    """A small square button that calls ``action`` when clicked."""
    return _button_base(text, action, 30.0, 30.0, False)