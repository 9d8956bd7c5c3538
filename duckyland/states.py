"""Game state enums and a deferred state machine."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar


class Screen(enum.Enum):
    """The game's main screens; the default is SPLASH."""

    SPLASH = enum.auto()
    TITLE = enum.auto()
    LOADING = enum.auto()
    GAMEPLAY = enum.auto()


class Menu(enum.Enum):
    """Menus shown over a screen; the default is NONE."""

    NONE = enum.auto()
    MAIN = enum.auto()
    CREDITS = enum.auto()
    SETTINGS = enum.auto()
    PAUSE = enum.auto()


@enum.unique
class AppSystems(enum.IntEnum):
    """Phases of a frame's update, in the order they run."""

    TICK_TIMERS = 0
    RECORD_INPUT = 1
    UPDATE = 2


T = TypeVar("T")


@dataclass(frozen=True)
class Transition(Generic[T]):
    exited: T
    entered: T


class State(Generic[T]):
    """A value whose changes are requested, then applied together."""

    def __init__(self, initial: T) -> None:
        self.current: T = initial
        self.pending: Optional[T] = None

    def set(self, value: T) -> None:
        self.pending = value

    def apply(self) -> Optional[Transition[T]]:
        """Apply a pending change; return the transition, or None if nothing changed."""
        if self.pending is None:
            return None
        value, self.pending = self.pending, None
        if value == self.current:
            return None
        transition = Transition(self.current, value)
        self.current = value
        return transition