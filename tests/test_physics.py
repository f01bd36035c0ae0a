"""Tests for the physics step."""

import math

import pytest

from rockrun.sim import Bullet, EnemyBullet, Obstacle, ObstacleKind, Particle, Ship
from rockrun.sim.physics import (
    Intent,
    ShipTuning,
    advance_bullets,
    advance_enemy_bullets,
    advance_obstacles,
    advance_particles,
    clamp_speed,
    drag_factor,
    integrate_ship,
    integrate_strafe,
    tick_timers,
    try_fire,
    wrap_position,
)

TUNING = ShipTuning()


def open_corridor(y):
    return 100.0, 500.0


class TestHelpers:
    """Test drag, clamping and wrapping."""

    def test_drag_is_frame_rate_independent(self):
        # Two half steps decay exactly like one full step
        assert drag_factor(1 / 120) ** 2 == pytest.approx(drag_factor(1 / 60))
        assert drag_factor(1 / 60) == pytest.approx(0.985)

    def test_clamp_speed(self):
        vx, vy = clamp_speed(300.0, 400.0, 100.0)
        assert math.hypot(vx, vy) == pytest.approx(100.0)
        assert clamp_speed(3.0, 4.0, 100.0) == (3.0, 4.0)

    @pytest.mark.parametrize("pos,expected", [
        ((-1, 50), (799, 50)),
        ((800, 50), (0, 50)),
        ((50, -2), (50, 598)),
        ((50, 600), (50, 0)),
        ((400, 300), (400, 300)),
    ])
    def test_wrap_position(self, pos, expected):
        assert wrap_position(pos[0], pos[1], 800, 600) == expected


class TestIntegrateShip:
    """Test free-roam flight."""

    def test_rotation(self):
        ship = Ship(x=100, y=100)
        start = ship.angle
        integrate_ship(ship, Intent(right=True), 0.1, TUNING, 800, 600)
        assert ship.angle == pytest.approx(start + 0.38)

    def test_thrust_accelerates_along_heading(self):
        ship = Ship(x=100, y=100)  # facing up
        integrate_ship(ship, Intent(thrust=True), 0.1, TUNING, 800, 600)
        assert ship.vy < 0
        assert ship.vx == pytest.approx(0.0, abs=1e-9)

    def test_speed_capped(self):
        ship = Ship(x=100, y=100, vx=2000.0)
        integrate_ship(ship, Intent(), 1 / 60, TUNING, 800, 600)
        assert ship.speed <= TUNING.max_speed + 1e-9

    def test_drag_slows_coasting_ship(self):
        ship = Ship(x=100, y=100, vx=100.0)
        integrate_ship(ship, Intent(), 1 / 60, TUNING, 800, 600)
        assert ship.vx == pytest.approx(98.5)

    def test_wraps_at_edge(self):
        ship = Ship(x=799, y=300, vx=300.0)
        integrate_ship(ship, Intent(), 1 / 30, TUNING, 800, 600)
        assert 0 <= ship.x < 800
        assert ship.x < 100


class TestIntegrateStrafe:
    """Test corridor flight."""

    def test_heading_never_changes(self):
        ship = Ship(x=300, y=400)
        integrate_strafe(ship, Intent(left=True), 0.03, TUNING, open_corridor, 400, (200, 500))
        assert ship.angle == pytest.approx(-math.pi / 2)
        assert ship.vx < 0

    def test_clamped_to_corridor(self):
        ship = Ship(x=120, y=400, vx=-400.0)
        integrate_strafe(ship, Intent(left=True), 0.03, TUNING, open_corridor, 400, (200, 500))
        assert ship.x == pytest.approx(100 + ship.radius)
        assert ship.vx == 0.0

    def test_thrust_moves_up_then_eases_back(self):
        ship = Ship(x=300, y=400)
        for _ in range(10):
            integrate_strafe(ship, Intent(thrust=True), 0.03, TUNING, open_corridor, 400, (200, 500))
        pushed = ship.y
        assert pushed < 400

        for _ in range(500):
            integrate_strafe(ship, Intent(), 0.03, TUNING, open_corridor, 400, (200, 500))
        assert abs(ship.y - 400) < abs(pushed - 400)

    def test_vertical_band(self):
        ship = Ship(x=300, y=210, vy=-400.0)
        integrate_strafe(ship, Intent(thrust=True), 0.03, TUNING, open_corridor, 400, (200, 500))
        assert ship.y == 200


class TestTimersAndFiring:
    """Test cooldowns and shots."""

    def test_timers_floor_at_zero(self):
        ship = Ship(x=0, y=0, invincible=0.01, cooldown=0.5)
        tick_timers(ship, 0.1)
        assert ship.invincible == 0.0
        assert ship.cooldown == pytest.approx(0.4)

    def test_fire_spawns_at_nose_with_ship_velocity(self):
        ship = Ship(x=100, y=100, vx=10.0)
        bullets = []
        bullet = try_fire(ship, bullets, interval=0.18, speed=420.0, life=1.1)

        assert bullets == [bullet]
        assert bullet.x == pytest.approx(100)
        assert bullet.y == pytest.approx(100 - (ship.radius + 4))
        assert bullet.vx == pytest.approx(10.0)
        assert bullet.vy == pytest.approx(-420.0)
        assert ship.cooldown == pytest.approx(0.18)

    def test_fire_rejected_during_cooldown(self):
        ship = Ship(x=100, y=100, cooldown=0.05)
        bullets = []
        assert try_fire(ship, bullets, 0.18, 420.0, 1.1) is None
        assert bullets == []


class TestAdvance:
    """Test store integration and filtering."""

    def test_bullets_expire(self):
        bullets = [Bullet(x=10, y=10, vx=0, vy=0, life=0.05), Bullet(x=10, y=10, vx=0, vy=0, life=1.0)]
        alive = advance_bullets(bullets, 0.1, 800, 600)
        assert len(alive) == 1

    def test_bullets_wrap_in_free_roam(self):
        alive = advance_bullets([Bullet(x=795, y=10, vx=300, vy=0, life=1.0)], 0.1, 800, 600)
        assert alive[0].x < 100

    def test_bullets_leave_view_in_corridor(self):
        alive = advance_bullets([Bullet(x=400, y=5, vx=0, vy=-620, life=1.0)], 0.1, 800, 600, wrap=False)
        assert alive == []

    def test_obstacles_scroll_and_drop_past_bottom(self):
        near = Obstacle(kind=ObstacleKind.CRATE, x=100, y=100, width=40, height=40)
        gone = Obstacle(kind=ObstacleKind.CRATE, x=100, y=650, width=40, height=40)
        alive = advance_obstacles([near, gone], 0.1, 800, 600, wrap=False, scroll=200.0)
        assert alive == [near]
        assert near.y == pytest.approx(120)

    def test_enemy_bullets_add_scroll(self):
        b = EnemyBullet(x=100, y=100, vx=0, vy=-100, life=3.0)
        advance_enemy_bullets([b], 0.1, 800, 600, scroll=100.0)
        assert b.y == pytest.approx(100)

    def test_particles_age_out(self):
        p = Particle(x=1, y=1, vx=0, vy=0, life=0.05, max_life=0.5)
        assert advance_particles([p], 0.1, 800, 600) == []
