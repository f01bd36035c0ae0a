"""
Keyboard Input Source.

Arrows or WASD steer and thrust, Space/Enter fire, P pauses, R restarts,
Esc quits. Enter and Space also count as "start" on title and game-over
screens.
"""
from typing import Dict, Set

import pygame

from rockrun.games.input.input_event import Control, InputCommand
from rockrun.games.input.sources.base import InputSource

KEY_CONTROLS: Dict[int, Control] = {
    pygame.K_LEFT: Control.LEFT,
    pygame.K_a: Control.LEFT,
    pygame.K_RIGHT: Control.RIGHT,
    pygame.K_d: Control.RIGHT,
    pygame.K_UP: Control.THRUST,
    pygame.K_w: Control.THRUST,
    pygame.K_SPACE: Control.FIRE,
    pygame.K_RETURN: Control.FIRE,
}

KEY_COMMANDS: Dict[int, InputCommand] = {
    pygame.K_p: InputCommand.PAUSE_TOGGLE,
    pygame.K_r: InputCommand.RESTART,
    pygame.K_ESCAPE: InputCommand.QUIT,
}

START_KEYS = (pygame.K_RETURN, pygame.K_SPACE)


class KeyboardInputSource(InputSource):
    """Keyboard input tracked from KEYDOWN/KEYUP events."""

    def __init__(self):
        super().__init__()
        self._keys_down: Set[int] = set()

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.KEYDOWN:
            control = KEY_CONTROLS.get(event.key)
            if control is Control.FIRE:
                self._press_fire(Control.FIRE in self.held())
            if event.key in START_KEYS:
                self._command(InputCommand.START)
            command = KEY_COMMANDS.get(event.key)
            if command is not None:
                self._command(command)
            self._keys_down.add(event.key)
        elif event.type == pygame.KEYUP:
            self._keys_down.discard(event.key)

    def held(self) -> Set[Control]:
        return {KEY_CONTROLS[k] for k in self._keys_down if k in KEY_CONTROLS}

    def reset(self) -> None:
        super().reset()
        self._keys_down.clear()
