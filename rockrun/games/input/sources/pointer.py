"""
Pointer Input Source - two-zone virtual joystick.

The screen is split down the middle:

    +-----------+-----------+
    |  thrust   |           |
    |  + steer  |   fire    |
    +-----------+           |
    |   steer   |           |
    +-----------+-----------+

In the left half the pointer's x relative to that half's centre steers
(with a dead zone) and the upper part also thrusts. Holding anywhere in the
right half fires. Any press also counts as "start" (tap to start).
"""
from typing import Optional, Set, Tuple

import pygame

from rockrun.games.input.input_event import Control, InputCommand
from rockrun.games.input.sources.base import InputSource


class PointerInputSource(InputSource):
    """Mouse/touch joystick.

    Args:
        width: Screen width in pixels
        height: Screen height in pixels
        dead_zone: Fraction of the left half's width around its centre that
            does not steer
        thrust_zone: Fraction of the screen height (from the top) that thrusts
    """

    def __init__(
        self,
        width: int,
        height: int,
        dead_zone: float = 0.15,
        thrust_zone: float = 0.5,
    ):
        super().__init__()
        self._width = width
        self._height = height
        self._dead_zone = dead_zone
        self._thrust_zone = thrust_zone
        self._position: Optional[Tuple[float, float]] = None

    def resize(self, width: int, height: int) -> None:
        self._width = width
        self._height = height

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            was_firing = Control.FIRE in self.held()
            self._position = (float(event.pos[0]), float(event.pos[1]))
            if Control.FIRE in self.held():
                self._press_fire(was_firing)
            self._command(InputCommand.START)
        elif event.type == pygame.MOUSEMOTION and self._position is not None:
            was_firing = Control.FIRE in self.held()
            self._position = (float(event.pos[0]), float(event.pos[1]))
            if Control.FIRE in self.held():
                self._press_fire(was_firing)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._position = None

    def held(self) -> Set[Control]:
        if self._position is None:
            return set()

        x, y = self._position
        half = self._width / 2
        if x >= half:
            return {Control.FIRE}

        controls: Set[Control] = set()
        offset = (x - half / 2) / (half / 2)  # -1 (far left) .. +1 (middle)
        if offset < -self._dead_zone:
            controls.add(Control.LEFT)
        elif offset > self._dead_zone:
            controls.add(Control.RIGHT)
        if y < self._height * self._thrust_zone:
            controls.add(Control.THRUST)
        return controls

    def reset(self) -> None:
        super().reset()
        self._position = None
