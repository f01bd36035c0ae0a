"""
Tests for the Asteroids game mode.

Runs are seeded and stepped by hand; scenarios are staged by editing the
session stores directly.
"""

import pygame
import pytest

from games.Asteroids.game_mode import AsteroidsMode
from models import GameEventType
from rockrun.games import GameState
from rockrun.games.input import IDLE, InputCommand, InputSnapshot
from rockrun.sim import Bullet, Obstacle, ObstacleKind

DT = 1 / 60
FIRE = InputSnapshot(fire_held=True, fire_pressed=True)


def start(game):
    game.handle_input(IDLE, [InputCommand.START])
    game.drain_events()


def rock(x, y, tier, radius=30.0):
    return Obstacle(kind=ObstacleKind.ASTEROID, x=x, y=y, radius=radius, tier=tier)


def event_types(game):
    return [e.type for e in game.drain_events()]


class TestLifecycle:
    """Test menu, pause and restart handling."""

    def test_starts_on_menu_with_first_wave(self, asteroids_game):
        assert asteroids_game.state is GameState.MENU
        assert len(asteroids_game.session.obstacles) == 4

    def test_menu_does_not_simulate(self, asteroids_game):
        before = [(o.x, o.y) for o in asteroids_game.session.obstacles]
        asteroids_game.update(DT)
        assert [(o.x, o.y) for o in asteroids_game.session.obstacles] == before

    def test_start_command(self, asteroids_game):
        asteroids_game.handle_input(IDLE, [InputCommand.START])
        assert asteroids_game.state is GameState.PLAYING
        assert event_types(asteroids_game) == [GameEventType.RUN_STARTED]

    def test_start_tap_does_not_fire(self, asteroids_game):
        asteroids_game.handle_input(FIRE, [InputCommand.START])
        asteroids_game.update(DT)
        assert asteroids_game.session.bullets == []

        asteroids_game.handle_input(FIRE)
        asteroids_game.update(DT)
        assert len(asteroids_game.session.bullets) == 1

    def test_one_shot_per_press(self, asteroids_game):
        start(asteroids_game)
        asteroids_game.session.obstacles[:] = [rock(60, 560, tier=3)]
        asteroids_game.handle_input(FIRE)
        asteroids_game.update(DT)
        for _ in range(30):
            asteroids_game.handle_input(InputSnapshot(fire_held=True))
            asteroids_game.update(DT)
        assert len(asteroids_game.session.bullets) == 1

    def test_pause_freezes_simulation(self, asteroids_game):
        start(asteroids_game)
        asteroids_game.handle_input(IDLE, [InputCommand.PAUSE_TOGGLE])
        assert asteroids_game.state is GameState.PAUSED

        before = [(o.x, o.y) for o in asteroids_game.session.obstacles]
        asteroids_game.update(DT)
        assert [(o.x, o.y) for o in asteroids_game.session.obstacles] == before

        asteroids_game.handle_input(IDLE, [InputCommand.PAUSE_TOGGLE])
        assert asteroids_game.state is GameState.PLAYING
        assert event_types(asteroids_game) == [GameEventType.PAUSED, GameEventType.RESUMED]

    def test_pause_ignored_on_menu(self, asteroids_game):
        asteroids_game.handle_input(IDLE, [InputCommand.PAUSE_TOGGLE])
        assert asteroids_game.state is GameState.MENU

    def test_restart_ignored_on_menu(self, asteroids_game):
        asteroids_game.handle_input(IDLE, [InputCommand.RESTART])
        assert asteroids_game.state is GameState.MENU

    def test_restart_resets_run(self, asteroids_game):
        start(asteroids_game)
        asteroids_game.session.add_score(300)
        asteroids_game.session.level = 4
        old_session = asteroids_game.session

        asteroids_game.handle_input(IDLE, [InputCommand.RESTART])

        s = asteroids_game.session
        assert s is not old_session
        assert (s.score, s.level, s.lives) == (0, 1, 3)
        assert asteroids_game.state is GameState.PLAYING

    def test_seeded_runs_repeat(self, memory_store):
        a = AsteroidsMode(width=800, height=600, seed=7, best_score_store=memory_store)
        b = AsteroidsMode(width=800, height=600, seed=7, best_score_store=memory_store)
        assert [(o.x, o.y) for o in a.session.obstacles] == [(o.x, o.y) for o in b.session.obstacles]

    def test_lives_clamped(self, memory_store):
        game = AsteroidsMode(width=800, height=600, lives=9, best_score_store=memory_store)
        assert game.session.lives == AsteroidsMode.MAX_LIVES


class TestShooting:
    """Test destroying and splitting rocks."""

    def test_large_rock_splits(self, asteroids_game):
        start(asteroids_game)
        s = asteroids_game.session
        s.obstacles[:] = [rock(400, 100, tier=3, radius=60)]
        s.bullets.append(Bullet(x=400, y=100, vx=0, vy=0, life=1.0))

        asteroids_game.update(DT)

        assert s.score == 20
        assert s.bullets == []
        assert 2 <= len(s.obstacles) <= 3
        assert all(o.tier == 2 for o in s.obstacles)
        assert s.particles

    def test_medium_rock_points(self, asteroids_game):
        start(asteroids_game)
        s = asteroids_game.session
        s.obstacles[:] = [rock(400, 100, tier=2), rock(100, 500, tier=3)]
        s.bullets.append(Bullet(x=400, y=100, vx=0, vy=0, life=1.0))

        asteroids_game.update(DT)
        assert s.score == 50

    def test_clearing_last_rock_starts_next_level(self, asteroids_game):
        start(asteroids_game)
        s = asteroids_game.session
        s.obstacles[:] = [rock(400, 100, tier=1)]
        s.bullets.append(Bullet(x=400, y=100, vx=0, vy=0, life=1.0))

        asteroids_game.update(DT)

        assert s.score == 100
        assert s.level == 2
        assert len(s.obstacles) == 5
        assert all(o.tier == 3 for o in s.obstacles)
        assert (s.ship.x, s.ship.y) == (400, 300)
        assert GameEventType.LEVEL_CLEARED in event_types(asteroids_game)


class TestDeath:
    """Test losing lives and ending the run."""

    def test_contact_costs_a_life(self, asteroids_game):
        start(asteroids_game)
        s = asteroids_game.session
        s.ship.invincible = 0.0
        s.ship.x, s.ship.y = 200, 200
        s.obstacles[:] = [rock(200, 200, tier=3)]

        asteroids_game.update(DT)

        assert s.lives == 2
        assert (s.ship.x, s.ship.y) == (400, 300)
        assert s.ship.invincible > 0
        assert GameEventType.LIFE_LOST in event_types(asteroids_game)

    def test_invincible_ship_survives_contact(self, asteroids_game):
        start(asteroids_game)
        s = asteroids_game.session
        s.obstacles[:] = [rock(400, 300, tier=3)]
        asteroids_game.update(DT)
        assert s.lives == 3

    def test_last_life_ends_run_and_saves_best(self, memory_store):
        game = AsteroidsMode(width=800, height=600, lives=1, seed=3, best_score_store=memory_store)
        start(game)
        s = game.session
        s.add_score(450)
        s.ship.invincible = 0.0
        s.obstacles[:] = [rock(400, 300, tier=3)]

        game.update(DT)

        assert game.state is GameState.GAME_OVER
        assert memory_store.load() == 450
        assert game.best_score == 450
        types = event_types(game)
        assert GameEventType.GAME_OVER in types
        assert GameEventType.NEW_BEST in types

    def test_no_new_best_below_record(self):
        from rockrun.persistence import MemoryBestScoreStore
        store = MemoryBestScoreStore(best=1000)
        game = AsteroidsMode(width=800, height=600, lives=1, best_score_store=store)
        start(game)
        game.session.ship.invincible = 0.0
        game.session.obstacles[:] = [rock(400, 300, tier=3)]

        game.update(DT)

        assert store.load() == 1000
        assert GameEventType.NEW_BEST not in event_types(game)

    def test_start_after_game_over_restarts(self, memory_store):
        game = AsteroidsMode(width=800, height=600, lives=1, best_score_store=memory_store)
        start(game)
        game.session.ship.invincible = 0.0
        game.session.obstacles[:] = [rock(400, 300, tier=3)]
        game.update(DT)

        game.handle_input(IDLE, [InputCommand.START])
        assert game.state is GameState.PLAYING
        assert game.session.lives == 1
        assert game.session.score == 0


class TestBreaks:
    """Test waves waiting on the break provider."""

    def test_next_wave_waits_for_break(self, memory_store, deferred_breaks):
        game = AsteroidsMode(width=800, height=600, seed=5, best_score_store=memory_store,
                             break_provider=deferred_breaks)
        start(game)
        assert deferred_breaks.started == 1

        game.session.obstacles.clear()
        game.update(DT)
        assert game.session.level == 2
        assert game.spawning_suspended
        assert game.session.obstacles == []

        game.update(DT)
        assert game.session.level == 2
        assert game.session.obstacles == []

        deferred_breaks.finish()
        game.update(DT)
        assert len(game.session.obstacles) == 5

    def test_restart_cancels_break(self, memory_store, deferred_breaks):
        game = AsteroidsMode(width=800, height=600, best_score_store=memory_store,
                             break_provider=deferred_breaks)
        start(game)
        game.session.obstacles.clear()
        game.update(DT)

        game.handle_input(IDLE, [InputCommand.RESTART])
        assert not game.spawning_suspended
        assert len(game.session.obstacles) == 4

    def test_pause_reports_stopped(self, memory_store, deferred_breaks):
        game = AsteroidsMode(width=800, height=600, best_score_store=memory_store,
                             break_provider=deferred_breaks)
        start(game)
        game.handle_input(IDLE, [InputCommand.PAUSE_TOGGLE])
        assert deferred_breaks.stopped == 1


class TestSnapshotAndRender:
    """Test the read-only frame view and drawing."""

    def test_snapshot_hud(self, asteroids_game):
        start(asteroids_game)
        asteroids_game.session.add_score(70)
        hud = asteroids_game.snapshot().hud
        assert hud.game == "Asteroids"
        assert hud.state == "playing"
        assert hud.score == 70
        assert hud.best_score == 70
        assert hud.lives == 3

    def test_thrust_shows_in_snapshot(self, asteroids_game):
        start(asteroids_game)
        asteroids_game.handle_input(InputSnapshot(thrust=True))
        asteroids_game.update(DT)
        assert asteroids_game.snapshot().thrusting

    @pytest.mark.parametrize("playing", [False, True])
    def test_render(self, pygame_init, asteroids_game, playing):
        if playing:
            start(asteroids_game)
            asteroids_game.update(DT)
        screen = pygame.Surface((800, 600))
        asteroids_game.render(screen)

    def test_game_info(self):
        info = AsteroidsMode.get_info()
        assert info['name'] == "Asteroids"
        names = [a['name'] for a in info['arguments']]
        assert names[0] == '--skin'
        assert '--lives' in names and '--seed' in names
