"""GameState enum and the state machine every Rock Run game runs on.

States:
    MENU: Title screen, waiting for a start input
    PLAYING: Simulation running
    PAUSED: Simulation frozen, input parked
    GAME_OVER: Run ended with no lives left
    WON: Run ended by destroying the objective

Only PLAYING advances the simulation. Rendering happens in every state.

Transitions:
    MENU      -> PLAYING                          (start)
    PLAYING   -> PAUSED | GAME_OVER | WON         (pause, death, objective)
    PLAYING   -> PLAYING                          (restart)
    PAUSED    -> PLAYING                          (resume or restart)
    GAME_OVER -> PLAYING                          (restart)
    WON       -> PLAYING                          (restart)
"""
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from rockrun.logging import get_logger

log = get_logger('game_state')


class GameState(Enum):
    """Standard game states used by every game."""
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    WON = "won"

    @property
    def is_terminal(self) -> bool:
        """True for states that end a run."""
        return self in (GameState.GAME_OVER, GameState.WON)


TRANSITIONS: Dict[GameState, FrozenSet[GameState]] = {
    GameState.MENU: frozenset({GameState.PLAYING}),
    GameState.PLAYING: frozenset({
        GameState.PAUSED, GameState.GAME_OVER, GameState.WON, GameState.PLAYING,
    }),
    GameState.PAUSED: frozenset({GameState.PLAYING}),
    GameState.GAME_OVER: frozenset({GameState.PLAYING}),
    GameState.WON: frozenset({GameState.PLAYING}),
}

# (old_state, new_state) -> None
TransitionListener = Callable[[GameState, GameState], None]


class GameStateMachine:
    """Single owner of a game's state.

    transition() is the only way to change state; illegal requests are
    rejected and logged rather than raised so the frame loop keeps going.
    """

    def __init__(self, initial: GameState = GameState.MENU):
        self._state = initial
        self._listeners: List[TransitionListener] = []

    @property
    def state(self) -> GameState:
        return self._state

    def can_transition(self, target: GameState) -> bool:
        return target in TRANSITIONS[self._state]

    def transition(self, target: GameState) -> bool:
        """Move to target if the table allows it.

        Returns:
            True if the state changed (or re-entered), False if rejected
        """
        if not self.can_transition(target):
            log.debug("Rejected transition %s -> %s", self._state.value, target.value)
            return False

        old = self._state
        self._state = target
        log.debug("State %s -> %s", old.value, target.value)
        for listener in self._listeners:
            listener(old, target)
        return True

    def add_listener(self, listener: TransitionListener) -> None:
        self._listeners.append(listener)

    def reset(self, state: Optional[GameState] = None) -> None:
        """Force a state without validation (construction and tests)."""
        self._state = state or GameState.MENU
