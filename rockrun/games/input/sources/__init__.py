"""Input sources: keyboard, pointer joystick and on-screen buttons."""

from rockrun.games.input.sources.base import InputSource
from rockrun.games.input.sources.buttons import HeldButtonSource
from rockrun.games.input.sources.keyboard import KeyboardInputSource
from rockrun.games.input.sources.pointer import PointerInputSource

__all__ = ['InputSource', 'HeldButtonSource', 'KeyboardInputSource', 'PointerInputSource']
