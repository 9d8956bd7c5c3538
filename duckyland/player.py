"""The player character: input, animation and sprite assets."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import AbstractSet, Optional

from duckyland.animation import PlayerAnimation, animation_state_for, should_play_step
from duckyland.asset_tracking import AssetServer, Handle
from duckyland.movement import MovementController, Vec2, VecLike, apply_movement, screen_wrap

UP_KEYS = frozenset({"w", "up"})
DOWN_KEYS = frozenset({"s", "down"})
LEFT_KEYS = frozenset({"a", "left"})
RIGHT_KEYS = frozenset({"d", "right"})

TILE_SIZE = 32
ATLAS_COLUMNS = 6
ATLAS_ROWS = 2
ATLAS_PADDING = 1
PLAYER_SCALE = 8.0


def directional_intent(pressed: AbstractSet[str]) -> Vec2:
    """Turn pressed key names into a normalized movement intent."""
    x = y = 0.0
    if pressed & UP_KEYS:
        y += 1.0
    if pressed & DOWN_KEYS:
        y -= 1.0
    if pressed & LEFT_KEYS:
        x -= 1.0
    if pressed & RIGHT_KEYS:
        x += 1.0
    return Vec2(x, y).normalize_or_zero()


def atlas_rect(index: int) -> tuple[int, int, int, int]:
    """Pixel rectangle (x, y, w, h) of a sprite in the player's atlas."""
    if not 0 <= index < ATLAS_COLUMNS * ATLAS_ROWS:
        raise IndexError(f"atlas index {index} out of range")
    row, column = divmod(index, ATLAS_COLUMNS)
    step = TILE_SIZE + ATLAS_PADDING
    return (column * step, row * step, TILE_SIZE, TILE_SIZE)


@dataclass(frozen=True)
class PlayerAssets:
    ducky: Handle
    steps: tuple[Handle, ...]

    @classmethod
    def load(cls, server: AssetServer) -> PlayerAssets:
        return cls(
            ducky=server.load("images/ducky.png"),
            steps=tuple(server.load(f"audio/sound_effects/step{n}.ogg") for n in range(1, 5)),
        )

    @property
    def handles(self) -> tuple[Handle, ...]:
        return (self.ducky, *self.steps)


@dataclass(eq=False)
class Player:
    """The player's state in the world."""

    max_speed: float
    assets: PlayerAssets
    name: str = "Player"
    position: Vec2 = field(default_factory=lambda: Vec2.ZERO)
    scale: float = PLAYER_SCALE
    flip_x: bool = False
    rng: random.Random = field(default_factory=random.Random)

    def __post_init__(self) -> None:
        self.controller = MovementController(max_speed=self.max_speed)
        self.animation = PlayerAnimation()
        self.atlas_index = self.animation.atlas_index()

    def tick_timers(self, delta: float) -> None:
        self.animation.update_timer(delta)

    def record_input(self, pressed: AbstractSet[str]) -> None:
        self.controller.intent = directional_intent(pressed)

    def update(self, delta: float, window_size: VecLike) -> Optional[Handle]:
        """Move, wrap and animate; return a step sound to play, if any."""
        self.position = screen_wrap(apply_movement(self.controller, self.position, delta), window_size)

        intent = self.controller.intent
        if intent.x != 0.0:
            self.flip_x = intent.x < 0.0
        self.animation.update_state(animation_state_for(intent))

        if self.animation.changed():
            self.atlas_index = self.animation.atlas_index()

        if should_play_step(self.animation):
            return self.rng.choice(self.assets.steps)
        return None