"""TrenchRun - forward-scrolling corridor shooter.

Features:
- Strafing ship in a swaying, narrowing trench
- Data-driven obstacle rows from patterns.yaml
- Turrets that shoot back, supply drops that restore lives
- Sections that speed up; the run is won at the exhaust port
"""

import math
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from models import GameEventType
from rockrun.games import BaseGame, GameState
from rockrun.games.skin import VectorSkin
from rockrun.logging import get_logger
from rockrun.sim import EnemyBullet, ObstacleKind, Session, Ship
from rockrun.sim.collision import bullet_hits_obstacle, find_ship_contact, point_hits_obstacle, resolve_bullet_hits
from rockrun.sim.physics import (
    Intent,
    ShipTuning,
    advance_bullets,
    advance_enemy_bullets,
    advance_obstacles,
    advance_particles,
    integrate_strafe,
    tick_timers,
    try_fire,
)

from .config import (
    BAND_BOTTOM,
    BAND_TOP,
    BULLET_LIFE,
    BULLET_SPEED,
    CRUISE_ROW,
    ENEMY_BULLET_LIFE,
    ENEMY_BULLET_SPEED,
    FIRE_INTERVAL,
    MAX_STRAFE_SPEED,
    RESPAWN_INVINCIBILITY,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    SHIP_RADIUS,
    STARTING_LIVES,
    STRAFE_ACCEL,
    STRAFE_DRAG,
    TURRET_FIRE_INTERVAL,
)
from .game.corridor import bounds_at_row
from .game.patterns import load_patterns
from .game.skins import GeometricSkin
from .game.spawner import PatternSpawner, forward_speed

log = get_logger('trench')

# Screen row (fraction of height) where the exhaust port stops scrolling
PORT_HOLD_ROW = 0.22


class TrenchRunMode(BaseGame):
    """Trench Run game mode.

    The ship keeps its nose up and strafes; the world scrolls toward it at
    the section's forward speed. Reaching a new section asks the break gate
    for a pause point; rows are withheld while it is suspended.
    """

    # Game metadata
    NAME = "Trench Run"
    DESCRIPTION = "Fly the trench, dodge and blast obstacles, hit the exhaust port."
    VERSION = "1.0.0"
    AUTHOR = "Rock Run Team"

    # CLI arguments
    ARGUMENTS = [
        {
            'name': '--skin',
            'type': str,
            'default': 'geometric',
            'choices': ['geometric'],
            'help': 'Visual skin (geometric=shaded trench)'
        },
        {
            'name': '--patterns',
            'type': str,
            'default': None,
            'help': 'Obstacle pattern YAML (default: bundled patterns.yaml)'
        },
    ]

    # Skin registry
    SKINS: Dict[str, type] = {
        'geometric': GeometricSkin,
    }

    def __init__(
        self,
        skin: str = 'geometric',
        patterns: Optional[Union[str, Path]] = None,
        lives: int = STARTING_LIVES,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        **kwargs,
    ):
        """Initialize Trench Run.

        Args:
            skin: Visual skin to use
            patterns: Pattern YAML path (validated before the game starts)
            lives: Starting lives
            width: Screen width
            height: Screen height
            **kwargs: Base game args (seed, best_score_store, break_provider, ...)
        """
        self._skin_name = skin
        self._patterns = load_patterns(patterns)
        self._tuning = ShipTuning(
            turn_rate=0.0,
            accel=STRAFE_ACCEL,
            max_speed=MAX_STRAFE_SPEED,
            drag=STRAFE_DRAG,
        )
        self._spawner: Optional[PatternSpawner] = None

        super().__init__(width=width, height=height, lives=lives, **kwargs)

    def _create_skin(self) -> VectorSkin:
        return self.SKINS.get(self._skin_name, GeometricSkin)()

    @property
    def spawner(self) -> PatternSpawner:
        return self._spawner

    def resize(self, width: int, height: int) -> None:
        super().resize(width, height)
        self._spawner.resize(width, height)

    # =========================================================================
    # Geometry helpers
    # =========================================================================

    def _bounds(self, y: float) -> Tuple[float, float]:
        s = self._session
        return bounds_at_row(s.distance, y, self._width, self._height, s.section)

    def _spawn_point(self) -> Tuple[float, float]:
        """Ship spawn: corridor centre on the cruise row."""
        y = self._height * CRUISE_ROW
        left, right = self._bounds(y)
        return (left + right) / 2, y

    # =========================================================================
    # Run setup
    # =========================================================================

    def _new_session(self) -> Session:
        ship = Ship(x=self._width / 2, y=self._height * CRUISE_ROW, radius=SHIP_RADIUS)
        session = Session.create(
            ship,
            lives=self._starting_lives,
            seed=self._run_seed(),
            forward_speed=forward_speed(1),
        )
        self._session = session
        self._spawner = PatternSpawner(self._patterns, self._width, self._height)

        x, y = self._spawn_point()
        ship.reset(x, y, RESPAWN_INVINCIBILITY)
        return session

    # =========================================================================
    # Simulation
    # =========================================================================

    def _step(self, dt: float) -> None:
        s = self._session
        ship = s.ship

        travelled = s.forward_speed * dt
        s.distance += travelled
        if self._spawner.update(s, travelled, self._breaks.suspended):
            self._emit(GameEventType.SECTION_REACHED, f"Section {s.section}", s.section)
            self._breaks.request()

        intent = Intent(left=self._intent.left, right=self._intent.right, thrust=self._intent.thrust)
        integrate_strafe(
            ship, intent, dt, self._tuning, self._bounds,
            cruise_y=self._height * CRUISE_ROW,
            y_range=(self._height * BAND_TOP, self._height * BAND_BOTTOM),
        )
        tick_timers(ship, dt)

        if self._consume_fire():
            try_fire(ship, s.bullets, FIRE_INTERVAL, BULLET_SPEED, BULLET_LIFE)

        scroll = s.forward_speed
        s.bullets = advance_bullets(s.bullets, dt, self._width, self._height, wrap=False)
        s.obstacles = advance_obstacles(s.obstacles, dt, self._width, self._height, wrap=False, scroll=scroll)
        s.enemy_bullets = advance_enemy_bullets(s.enemy_bullets, dt, self._width, self._height, scroll=scroll)
        s.particles = advance_particles(s.particles, dt, self._width, self._height, wrap=False, scroll=scroll)

        self._hold_exhaust_port()
        self._fire_turrets(dt)

        for obstacle in resolve_bullet_hits(s.bullets, s.obstacles, bullet_hits_obstacle):
            self._on_destroyed(obstacle)
            if self.state is not GameState.PLAYING:
                return

        contact = find_ship_contact(ship, s.obstacles, s.enemy_bullets, point_hits_obstacle)
        if contact is not None:
            if isinstance(contact, EnemyBullet):
                s.enemy_bullets.remove(contact)
            self._ship_destroyed(self._spawn_point(), RESPAWN_INVINCIBILITY)

    def _hold_exhaust_port(self) -> None:
        """The port stops at its hold row and stays centred in the trench."""
        hold_y = self._height * PORT_HOLD_ROW
        for obstacle in self._session.obstacles:
            if obstacle.kind is ObstacleKind.EXHAUST_PORT and obstacle.y >= hold_y:
                left, right = self._bounds(hold_y)
                obstacle.x = (left + right) / 2
                obstacle.y = hold_y

    def _fire_turrets(self, dt: float) -> None:
        """On-screen turrets shoot at the ship on their own cooldowns."""
        s = self._session
        ship = s.ship
        for turret in s.obstacles:
            if not turret.traits.fires_back or not 0 <= turret.y <= self._height:
                continue

            turret.fire_cooldown -= dt
            if turret.fire_cooldown > 0:
                continue
            turret.fire_cooldown = TURRET_FIRE_INTERVAL * s.rng.uniform(0.8, 1.2)

            dx = ship.x - turret.x
            dy = ship.y - turret.y
            d = math.hypot(dx, dy) or 1.0
            # Aim in screen space; the corridor scroll is added back when moving
            s.enemy_bullets.append(EnemyBullet(
                x=turret.x,
                y=turret.y,
                vx=dx / d * ENEMY_BULLET_SPEED,
                vy=dy / d * ENEMY_BULLET_SPEED - s.forward_speed,
                life=ENEMY_BULLET_LIFE,
            ))
