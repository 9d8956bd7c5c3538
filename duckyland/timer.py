"""Frame timers driven by elapsed time in seconds."""

from __future__ import annotations

import enum


class TimerMode(enum.Enum):
    """Whether a timer stops after finishing once or starts over."""

    ONCE = "once"
    REPEATING = "repeating"


class Timer:
    """A countdown ticked by frame deltas, in seconds."""

    def __init__(self, duration: float, mode: TimerMode = TimerMode.ONCE) -> None:
        if duration < 0:
            raise ValueError("timer duration must not be negative")
        self.duration = float(duration)
        self.mode = mode
        self.elapsed = 0.0
        self._finished = False
        self.times_finished_this_tick = 0

    @classmethod
    def from_seconds(cls, seconds: float, mode: TimerMode = TimerMode.ONCE) -> Timer:
        return cls(seconds, mode)

    def tick(self, delta: float) -> Timer:
        """Advance the timer by ``delta`` seconds."""
        if delta < 0:
            raise ValueError("delta must not be negative")
        if self.mode is TimerMode.ONCE and self._finished:
            self.times_finished_this_tick = 0
            return self
        self.elapsed += delta
        if self.elapsed >= self.duration:
            if self.mode is TimerMode.REPEATING:
                if self.duration > 0:
                    self.times_finished_this_tick = int(self.elapsed // self.duration)
                    self.elapsed %= self.duration
                else:
                    self.times_finished_this_tick = 1
                    self.elapsed = 0.0
            else:
                self.times_finished_this_tick = 1
                self.elapsed = self.duration
            self._finished = True
        else:
            self.times_finished_this_tick = 0
            if self.mode is TimerMode.REPEATING:
                self._finished = False
        return self

    def finished(self) -> bool:
        return self._finished

    def just_finished(self) -> bool:
        return self.times_finished_this_tick > 0

    def reset(self) -> None:
        self.elapsed = 0.0
        self._finished = False
        self.times_finished_this_tick = 0