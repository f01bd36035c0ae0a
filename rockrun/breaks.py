"""
Break gate - cooperative pause points between waves.

An optional external collaborator (an ad or intermission provider) may be
offered a "break" when a wave or section ends. The game never blocks on it:
the gate only raises a ``suspended`` flag that the game checks before
spawning the next wave, and the provider clears it through a completion
callback. Providers that are missing or raise are tolerated with no effect
on play.

Usage:
    gate = BreakGate(provider)
    gate.notify_started()
    ...
    gate.request()            # wave cleared
    if not gate.suspended:
        spawn_next_wave()
"""
from abc import ABC, abstractmethod
from typing import Callable, Optional

from rockrun.logging import get_logger

log = get_logger('breaks')


class BreakProvider(ABC):
    """External orchestration hooks around gameplay."""

    @abstractmethod
    def gameplay_started(self) -> None:
        """Gameplay became active (run start or resume)."""
        pass

    @abstractmethod
    def gameplay_stopped(self) -> None:
        """Gameplay stopped (pause or run end)."""
        pass

    @abstractmethod
    def request_break(self, on_done: Callable[[], None]) -> None:
        """Offer a break; call on_done when play may continue.

        on_done may be called synchronously or from a later frame.
        """
        pass


class NullBreakProvider(BreakProvider):
    """Provider that never interrupts play."""

    def gameplay_started(self) -> None:
        pass

    def gameplay_stopped(self) -> None:
        pass

    def request_break(self, on_done: Callable[[], None]) -> None:
        on_done()


class BreakGate:
    """Spawning-suspended flag driven by a BreakProvider."""

    def __init__(self, provider: Optional[BreakProvider] = None):
        self._provider = provider or NullBreakProvider()
        self._suspended = False
        self._request_id = 0

    @property
    def suspended(self) -> bool:
        """True while a requested break has not completed."""
        return self._suspended

    def request(self) -> None:
        """Request a break and suspend spawning until it completes."""
        if self._suspended:
            return

        self._request_id += 1
        request_id = self._request_id
        self._suspended = True

        def on_done() -> None:
            # Ignore completions of breaks abandoned by cancel()
            if request_id == self._request_id:
                self._suspended = False

        try:
            self._provider.request_break(on_done)
        except Exception as e:
            log.warning("Break provider failed, continuing: %s", e)
            self._suspended = False

    def cancel(self) -> None:
        """Abandon any pending break (run restart)."""
        self._request_id += 1
        self._suspended = False

    def notify_started(self) -> None:
        try:
            self._provider.gameplay_started()
        except Exception as e:
            log.warning("gameplay_started hook failed: %s", e)

    def notify_stopped(self) -> None:
        try:
            self._provider.gameplay_stopped()
        except Exception as e:
            log.warning("gameplay_stopped hook failed: %s", e)
