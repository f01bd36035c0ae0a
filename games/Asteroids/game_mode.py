"""Asteroids - free-roam wrap-around rock shooter.

Features:
- Rotate/thrust flight with drag and a speed cap
- Rocks split into smaller, faster, more valuable fragments
- Each cleared wave brings a larger, faster one
"""

import math
from typing import Dict, List

from rockrun.games import BaseGame, GameState
from rockrun.games.skin import VectorSkin
from rockrun.logging import get_logger
from rockrun.sim import Obstacle, Session, Ship
from rockrun.sim.collision import find_ship_contact, point_hits_obstacle, resolve_bullet_hits
from rockrun.sim.physics import (
    Intent,
    ShipTuning,
    advance_bullets,
    advance_obstacles,
    advance_particles,
    integrate_ship,
    tick_timers,
    try_fire,
)
from models import GameEventType

from .config import (
    BULLET_LIFE,
    BULLET_SPEED,
    DRAG,
    EXHAUST_COLOR,
    FIRE_INTERVAL,
    MAX_SPEED,
    RESPAWN_INVINCIBILITY,
    ROCK_DEBRIS_COLOR,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SHIP_EXPLOSION_COLOR,
    SHIP_RADIUS,
    STARTING_LIVES,
    THRUST_ACCEL,
    TIER_POINTS,
    TURN_RATE,
)
from .game.field import spawn_field, split_asteroid
from .game.skins import GeometricSkin

log = get_logger('asteroids')


class AsteroidsMode(BaseGame):
    """Asteroids game mode.

    A level is one wave of rocks. Clearing it advances the level, asks the
    break gate for a pause point and spawns the next wave once the gate is
    open, with the ship back at the centre.
    """

    # Game metadata
    NAME = "Asteroids"
    DESCRIPTION = "Free-roam wrap-around rock shooter."
    VERSION = "1.0.0"
    AUTHOR = "Rock Run Team"

    # CLI arguments
    ARGUMENTS = [
        {
            'name': '--skin',
            'type': str,
            'default': 'geometric',
            'choices': ['geometric'],
            'help': 'Visual skin (geometric=line art)'
        },
    ]

    # Skin registry
    SKINS: Dict[str, type] = {
        'geometric': GeometricSkin,
    }

    DEBRIS_COLOR = ROCK_DEBRIS_COLOR
    SHIP_DEBRIS_COLOR = SHIP_EXPLOSION_COLOR

    def __init__(
        self,
        skin: str = 'geometric',
        lives: int = STARTING_LIVES,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        **kwargs,
    ):
        """Initialize Asteroids.

        Args:
            skin: Visual skin to use
            lives: Starting lives
            width: Screen width
            height: Screen height
            **kwargs: Base game args (seed, best_score_store, break_provider, ...)
        """
        self._skin_name = skin
        self._tuning = ShipTuning(
            turn_rate=TURN_RATE,
            accel=THRUST_ACCEL,
            max_speed=MAX_SPEED,
            drag=DRAG,
        )
        # A cleared wave waiting on the break gate
        self._wave_pending = False

        super().__init__(width=width, height=height, lives=lives, **kwargs)

    def _create_skin(self) -> VectorSkin:
        return self.SKINS.get(self._skin_name, GeometricSkin)()

    # =========================================================================
    # Run and wave setup
    # =========================================================================

    def _new_session(self) -> Session:
        ship = Ship(x=self._width / 2, y=self._height / 2, radius=SHIP_RADIUS)
        session = Session.create(ship, lives=self._starting_lives, seed=self._run_seed())
        self._wave_pending = False
        self._start_wave(session)
        return session

    def _start_wave(self, session: Session) -> None:
        """Clear the playfield, recentre the ship and spawn the level's rocks."""
        session.obstacles.clear()
        session.particles.clear()
        session.clear_projectiles()
        session.ship.reset(self._width / 2, self._height / 2, RESPAWN_INVINCIBILITY)
        count = spawn_field(session, self._width, self._height)
        log.debug("Level %d: %d rocks", session.level, count)

    def _wave_cleared(self) -> None:
        s = self._session
        s.level += 1
        self._emit(GameEventType.LEVEL_CLEARED, f"Level {s.level}", s.level)

        self._breaks.request()
        if self._breaks.suspended:
            self._wave_pending = True
        else:
            self._start_wave(s)

    # =========================================================================
    # Simulation
    # =========================================================================

    def _step(self, dt: float) -> None:
        s = self._session
        ship = s.ship

        if self._wave_pending and not self._breaks.suspended:
            self._wave_pending = False
            self._start_wave(s)

        intent = Intent(left=self._intent.left, right=self._intent.right, thrust=self._intent.thrust)
        integrate_ship(ship, intent, dt, self._tuning, self._width, self._height)
        if intent.thrust:
            s.emit_particles(
                ship.x - math.cos(ship.angle) * ship.radius,
                ship.y - math.sin(ship.angle) * ship.radius,
                1, 70.0, 0.25, EXHAUST_COLOR,
            )
        tick_timers(ship, dt)

        if self._consume_fire():
            try_fire(ship, s.bullets, FIRE_INTERVAL, BULLET_SPEED, BULLET_LIFE)

        s.bullets = advance_bullets(s.bullets, dt, self._width, self._height)
        s.obstacles = advance_obstacles(s.obstacles, dt, self._width, self._height)
        s.particles = advance_particles(s.particles, dt, self._width, self._height)

        for rock in resolve_bullet_hits(s.bullets, s.obstacles, point_hits_obstacle):
            self._on_destroyed(rock)

        if find_ship_contact(ship, s.obstacles) is not None:
            self._ship_destroyed((self._width / 2, self._height / 2), RESPAWN_INVINCIBILITY)
            if self.state is not GameState.PLAYING:
                return

        if not s.obstacles and not self._wave_pending:
            self._wave_cleared()

    def _points_for(self, obstacle: Obstacle) -> int:
        return TIER_POINTS.get(obstacle.tier, obstacle.traits.points)

    def _fragments(self, obstacle: Obstacle) -> List[Obstacle]:
        return split_asteroid(self._session.rng, obstacle, self._session.level)
