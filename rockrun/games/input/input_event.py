"""
Input snapshot - device independent player intent.

Every input source (keyboard, pointer joystick, on-screen buttons) is reduced
to the same small vocabulary: held controls, fire press edges and discrete
commands. Games never see a physical device.
"""
from dataclasses import dataclass
from enum import Enum


class Control(Enum):
    """Controls that can be held down."""
    LEFT = "left"
    RIGHT = "right"
    THRUST = "thrust"
    FIRE = "fire"


class InputCommand(Enum):
    """Discrete, one-shot commands."""
    START = "start"
    PAUSE_TOGGLE = "pause_toggle"
    RESTART = "restart"
    QUIT = "quit"


@dataclass(frozen=True)
class InputSnapshot:
    """Immutable per-frame input state.

    Attributes:
        left: Steer left held
        right: Steer right held
        thrust: Thrust held
        fire_held: Fire currently held
        fire_pressed: A new fire press happened this frame (one pulse per press)
    """
    left: bool = False
    right: bool = False
    thrust: bool = False
    fire_held: bool = False
    fire_pressed: bool = False

    def __str__(self) -> str:
        """String representation for debugging."""
        held = [name for name in ('left', 'right', 'thrust', 'fire_held') if getattr(self, name)]
        pulse = ' +fire' if self.fire_pressed else ''
        return f"InputSnapshot({','.join(held) or 'idle'}{pulse})"


IDLE = InputSnapshot()
