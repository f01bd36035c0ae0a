"""
Input Manager - Unions every input source into one snapshot per frame.
"""
from typing import Iterable, List, Optional, Sequence, Set, Tuple

import pygame

from rockrun.games.input.input_event import Control, InputCommand, InputSnapshot
from rockrun.games.input.sources.base import InputSource
from rockrun.logging import get_logger

log = get_logger('input')


class InputManager:
    """Collects input from several sources at once.

    Held controls are the union over all sources. Fire is edge triggered:
    poll() reports fire_pressed once for a press, however long it is held,
    whether the edge comes from a source's press events or from the union
    going from not-held to held.
    """

    def __init__(self, sources: Optional[Sequence[InputSource]] = None):
        self._sources: List[InputSource] = list(sources or [])
        self._fire_was_held = False

    def add_source(self, source: InputSource) -> None:
        self._sources.append(source)

    @property
    def sources(self) -> List[InputSource]:
        return list(self._sources)

    def process_events(self, events: Iterable[pygame.event.Event]) -> None:
        """Dispatch raw pygame events to every source."""
        for event in events:
            for source in self._sources:
                source.handle_event(event)

    def held(self) -> Set[Control]:
        controls: Set[Control] = set()
        for source in self._sources:
            controls |= source.held()
        return controls

    def poll(self) -> Tuple[InputSnapshot, List[InputCommand]]:
        """Build this frame's snapshot and collect pending commands."""
        held = self.held()
        fire_held = Control.FIRE in held

        presses = sum(source.poll_presses() for source in self._sources)
        edge = fire_held and not self._fire_was_held
        self._fire_was_held = fire_held

        commands: List[InputCommand] = []
        for source in self._sources:
            commands.extend(source.poll_commands())

        snapshot = InputSnapshot(
            left=Control.LEFT in held,
            right=Control.RIGHT in held,
            thrust=Control.THRUST in held,
            fire_held=fire_held,
            fire_pressed=presses > 0 or edge,
        )
        if commands:
            log.debug("Commands: %s", [c.value for c in commands])
        return snapshot, commands

    def clear(self) -> None:
        """Drop pending presses and commands from every source."""
        for source in self._sources:
            source.poll_presses()
            source.poll_commands()
        self._fire_was_held = Control.FIRE in self.held()
