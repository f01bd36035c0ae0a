"""
Held Button Source - on-screen touch buttons.

Four buttons sit along the bottom edge:

    +---------------------------------------+
    |                                       |
    |        [^]                            |
    |   [<]       [>]                [*]    |
    +---------------------------------------+

Each mouse or finger holds the button it went down on until it lifts. A tap
anywhere counts as "start". Without a screen size the source has no layout
and is driven only through press()/release().
"""
from typing import Dict, Optional, Set, Tuple

import pygame

from rockrun.games.input.input_event import Control, InputCommand
from rockrun.games.input.sources.base import InputSource

# Pointer id used for the mouse; fingers use their SDL finger_id
MOUSE_POINTER = -1


def button_layout(width: int, height: int) -> Dict[Control, pygame.Rect]:
    """Screen rects for the on-screen buttons."""
    size = max(56, min(width, height) // 8)
    gap = size // 4
    bottom = height - gap - size

    left = pygame.Rect(gap, bottom, size, size)
    right = pygame.Rect(left.right + size + gap, bottom, size, size)
    thrust = pygame.Rect(left.right + gap // 2, bottom - size - gap, size, size)
    fire = pygame.Rect(width - gap - size, bottom, size, size)
    return {Control.LEFT: left, Control.RIGHT: right, Control.THRUST: thrust, Control.FIRE: fire}


class HeldButtonSource(InputSource):
    """Controls held through on-screen buttons.

    Args:
        width: Screen width, or None for a source with no layout
        height: Screen height
    """

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None):
        super().__init__()
        self._held: Set[Control] = set()
        self._pointers: Dict[int, Control] = {}
        self._size: Optional[Tuple[int, int]] = None
        self._layout: Dict[Control, pygame.Rect] = {}
        if width and height:
            self.resize(width, height)

    @property
    def layout(self) -> Dict[Control, pygame.Rect]:
        return dict(self._layout)

    def resize(self, width: int, height: int) -> None:
        self._size = (width, height)
        self._layout = button_layout(width, height)

    def button_at(self, x: float, y: float) -> Optional[Control]:
        for control, rect in self._layout.items():
            if rect.collidepoint(int(x), int(y)):
                return control
        return None

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            # Touches also arrive as FINGER events
            if event.button != 1 or getattr(event, 'touch', False):
                return
            if event.type == pygame.MOUSEBUTTONDOWN:
                self._touch(MOUSE_POINTER, *event.pos)
            else:
                self._lift(MOUSE_POINTER)
        elif event.type == pygame.FINGERDOWN and self._size is not None:
            width, height = self._size
            self._touch(event.finger_id, event.x * width, event.y * height)
        elif event.type == pygame.FINGERUP:
            self._lift(event.finger_id)

    def _touch(self, pointer: int, x: float, y: float) -> None:
        control = self.button_at(x, y)
        if control is None:
            self._command(InputCommand.START)
            return
        self._pointers[pointer] = control
        self.press(control)

    def _lift(self, pointer: int) -> None:
        control = self._pointers.pop(pointer, None)
        if control is not None and control not in self._pointers.values():
            self.release(control)

    def press(self, control: Control) -> None:
        """Button went down. Pressing also counts as tap-to-start."""
        if control is Control.FIRE:
            self._press_fire(control in self._held)
        self._held.add(control)
        self._command(InputCommand.START)

    def release(self, control: Control) -> None:
        self._held.discard(control)

    def command(self, command: InputCommand) -> None:
        """Pause/restart buttons."""
        self._command(command)

    def held(self) -> Set[Control]:
        return set(self._held)

    def reset(self) -> None:
        super().reset()
        self._held.clear()
        self._pointers.clear()
