"""
Input abstraction layer for Rock Run games.

Keyboard, pointer joystick and on-screen buttons all reduce to the same
InputSnapshot plus a list of InputCommands.
"""

from rockrun.games.input.input_event import IDLE, Control, InputCommand, InputSnapshot
from rockrun.games.input.input_manager import InputManager

__all__ = ['IDLE', 'Control', 'InputCommand', 'InputSnapshot', 'InputManager']
