"""Player sprite animation driven by movement intent."""

from __future__ import annotations

import enum

from duckyland.movement import Vec2
from duckyland.timer import Timer, TimerMode


class PlayerAnimationState(enum.Enum):
    IDLING = "idling"
    WALKING = "walking"


class PlayerAnimation:
    """Tracks the player's animation frame; tied to the sprite atlas layout."""

    IDLE_FRAMES = 2
    IDLE_INTERVAL = 0.5
    WALKING_FRAMES = 6
    WALKING_INTERVAL = 0.05

    def __init__(self) -> None:
        self._start(PlayerAnimationState.IDLING)

    def _start(self, state: PlayerAnimationState) -> None:
        interval = self.IDLE_INTERVAL if state is PlayerAnimationState.IDLING else self.WALKING_INTERVAL
        self.timer = Timer(interval, TimerMode.REPEATING)
        self.frame = 0
        self.state = state

    @property
    def frame_count(self) -> int:
        return self.IDLE_FRAMES if self.state is PlayerAnimationState.IDLING else self.WALKING_FRAMES

    def update_timer(self, delta: float) -> None:
        """Advance the timer and step to the next frame when it fires."""
        self.timer.tick(delta)
        if not self.timer.finished():
            return
        self.frame = (self.frame + 1) % self.frame_count

    def update_state(self, state: PlayerAnimationState) -> None:
        """Restart the animation if the state differs from the current one."""
        if self.state is not state:
            self._start(state)

    def changed(self) -> bool:
        """Whether the frame changed on the last tick."""
        return self.timer.finished()

    def atlas_index(self) -> int:
        if self.state is PlayerAnimationState.IDLING:
            return self.frame
        return self.WALKING_FRAMES + self.frame


def animation_state_for(intent: Vec2) -> PlayerAnimationState:
    """Idle when there is no movement intent, walking otherwise."""
    if intent == Vec2.ZERO:
        return PlayerAnimationState.IDLING
    return PlayerAnimationState.WALKING


def should_play_step(animation: PlayerAnimation) -> bool:
    """Whether a step sound belongs to the frame just reached."""
    return (
        animation.state is PlayerAnimationState.WALKING
        and animation.changed()
        and animation.frame in (2, 5)
    )