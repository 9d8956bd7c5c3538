"""Character movement from intent and wrapping around the window."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import ClassVar, Tuple, Union

VecLike = Union["Vec2", Tuple[float, float]]


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    ZERO: ClassVar[Vec2]

    @classmethod
    def of(cls, value: VecLike) -> Vec2:
        if isinstance(value, Vec2):
            return value
        x, y = value
        return cls(float(x), float(y))

    def __add__(self, other: VecLike | float) -> Vec2:
        if isinstance(other, (int, float)):
            return Vec2(self.x + other, self.y + other)
        o = Vec2.of(other)
        return Vec2(self.x + o.x, self.y + o.y)

    def __sub__(self, other: VecLike | float) -> Vec2:
        if isinstance(other, (int, float)):
            return Vec2(self.x - other, self.y - other)
        o = Vec2.of(other)
        return Vec2(self.x - o.x, self.y - o.y)

    def __mul__(self, scalar: float) -> Vec2:
        return Vec2(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec2:
        return Vec2(self.x / scalar, self.y / scalar)

    def __iter__(self):
        yield self.x
        yield self.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize_or_zero(self) -> Vec2:
        """Unit vector in the same direction, or zero if that is not defined."""
        length = self.length()
        if length == 0.0 or not math.isfinite(length):
            return Vec2.ZERO
        return Vec2(self.x / length, self.y / length)

    def rem_euclid(self, other: VecLike) -> Vec2:
        """Component-wise Euclidean remainder, always non-negative."""
        o = Vec2.of(other)
        return Vec2(self.x % abs(o.x), self.y % abs(o.y))


Vec2.ZERO = Vec2(0.0, 0.0)

SCREEN_WRAP_MARGIN = 256.0


@dataclass
class MovementController:
    """Movement intent and maximum speed in pixels per second."""

    intent: Vec2 = field(default_factory=lambda: Vec2.ZERO)
    max_speed: float = 400.0


def apply_movement(controller: MovementController, position: VecLike, delta: float) -> Vec2:
    """Return ``position`` moved by the controller's velocity over ``delta`` seconds."""
    velocity = controller.intent * controller.max_speed
    return Vec2.of(position) + velocity * delta


def screen_wrap(position: VecLike, window_size: VecLike) -> Vec2:
    """Wrap ``position`` into a region a little larger than the window, centred on the origin."""
    size = Vec2.of(window_size) + SCREEN_WRAP_MARGIN
    half_size = size / 2.0
    return (Vec2.of(position) + half_size).rem_euclid(size) - half_size