"""
Base Input Source - Abstract interface for input backends.
"""
from abc import ABC, abstractmethod
from typing import List, Set

import pygame

from rockrun.games.input.input_event import Control, InputCommand


class InputSource(ABC):
    """Abstract base class for input sources.

    Sources receive raw pygame events and expose held controls, fire press
    edges and discrete commands.
    """

    def __init__(self):
        self._presses = 0
        self._commands: List[InputCommand] = []

    @abstractmethod
    def handle_event(self, event: pygame.event.Event) -> None:
        """Consume one pygame event (ignore the ones not relevant)."""
        pass

    @abstractmethod
    def held(self) -> Set[Control]:
        """Controls currently held on this source."""
        pass

    def poll_presses(self) -> int:
        """Number of fire press edges since the last poll."""
        presses = self._presses
        self._presses = 0
        return presses

    def poll_commands(self) -> List[InputCommand]:
        """Commands issued since the last poll."""
        commands = self._commands
        self._commands = []
        return commands

    def reset(self) -> None:
        """Drop pending presses and commands."""
        self._presses = 0
        self._commands = []

    def _press_fire(self, was_held: bool) -> None:
        if not was_held:
            self._presses += 1

    def _command(self, command: InputCommand) -> None:
        self._commands.append(command)
