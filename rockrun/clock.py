"""
Frame clock - turns wall-clock gaps into simulation steps.

Every step handed to a game's update stage is clamped to [0, MAX_STEP] so a
stalled frame (window drag, tab switch, debugger pause) cannot make entities
tunnel through each other.

Usage:
    clock = FrameClock(frame_limiter=pygame.time.Clock(), fps=60)
    while running:
        dt = clock.tick()
        game.update(dt)
"""
import math
import time
from typing import Callable, Optional

import pygame

MAX_STEP: float = 1.0 / 30.0


def clamp_step(raw_dt: float, max_step: float = MAX_STEP) -> float:
    """Clamp a raw frame gap (seconds) to [0, max_step].

    Negative gaps (clock went backwards) and NaN map to 0.
    """
    if math.isnan(raw_dt) or raw_dt <= 0.0:
        return 0.0
    return min(raw_dt, max_step)


class FrameClock:
    """Per-frame time source with a clamped step.

    Args:
        time_source: Monotonic clock returning seconds
        max_step: Largest step ever returned
        frame_limiter: Optional pygame Clock used to cap the frame rate
        fps: Target frame rate for the limiter (0 = uncapped)
    """

    def __init__(
        self,
        time_source: Callable[[], float] = time.perf_counter,
        max_step: float = MAX_STEP,
        frame_limiter: Optional[pygame.time.Clock] = None,
        fps: int = 60,
    ):
        self._time_source = time_source
        self._max_step = max_step
        self._frame_limiter = frame_limiter
        self._fps = fps
        self._last: Optional[float] = None

    @property
    def max_step(self) -> float:
        return self._max_step

    def tick(self, now: Optional[float] = None) -> float:
        """Advance the clock and return the clamped step in seconds.

        The first tick after construction or reset() returns 0.
        """
        if self._frame_limiter is not None:
            self._frame_limiter.tick(self._fps)

        if now is None:
            now = self._time_source()

        if self._last is None:
            self._last = now
            return 0.0

        raw = now - self._last
        self._last = now
        return clamp_step(raw, self._max_step)

    def reset(self) -> None:
        """Forget the previous tick so the next one yields 0."""
        self._last = None
