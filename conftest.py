"""Shared pytest fixtures.

Tests run headless: SDL uses its dummy video and audio drivers, and every
game gets an in-memory best-score store so nothing touches the user's
save file.
"""
import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')
os.environ.setdefault('SDL_AUDIODRIVER', 'dummy')

import pygame
import pytest

from rockrun.breaks import BreakProvider
from rockrun.persistence import MemoryBestScoreStore


@pytest.fixture
def memory_store():
    """Best-score store that never writes to disk."""
    return MemoryBestScoreStore()


@pytest.fixture
def asteroids_game(memory_store):
    """Seeded Asteroids game on the title screen."""
    from games.Asteroids.game_mode import AsteroidsMode
    return AsteroidsMode(width=800, height=600, seed=1234, best_score_store=memory_store)


@pytest.fixture
def trench_game(memory_store):
    """Seeded Trench Run game on the title screen."""
    from games.TrenchRun.game_mode import TrenchRunMode
    return TrenchRunMode(width=960, height=720, seed=1234, best_score_store=memory_store)


class DeferredBreakProvider(BreakProvider):
    """Break provider whose breaks end only when the test says so."""

    def __init__(self):
        self.started = 0
        self.stopped = 0
        self.pending = None

    def gameplay_started(self) -> None:
        self.started += 1

    def gameplay_stopped(self) -> None:
        self.stopped += 1

    def request_break(self, on_done) -> None:
        self.pending = on_done

    def finish(self) -> None:
        done, self.pending = self.pending, None
        done()


@pytest.fixture
def deferred_breaks():
    """Break provider that holds every break open until finish()."""
    return DeferredBreakProvider()


@pytest.fixture
def pygame_init():
    """Initialize pygame for render tests."""
    pygame.init()
    yield
    pygame.quit()
