"""Tests for hit tests and collision resolution."""

import pytest

from rockrun.sim import Bullet, EnemyBullet, Obstacle, ObstacleKind, Ship
from rockrun.sim.collision import (
    HIT_TOLERANCE,
    bullet_hits_obstacle,
    circle_hits_circle,
    circle_hits_rect,
    dist2,
    find_ship_contact,
    point_hits_obstacle,
    resolve_bullet_hits,
)


def rock(x=0.0, y=0.0, radius=20.0, tier=3):
    return Obstacle(kind=ObstacleKind.ASTEROID, x=x, y=y, radius=radius, tier=tier)


def crate(x=0.0, y=0.0, size=40.0, hp=0):
    return Obstacle(kind=ObstacleKind.CRATE, x=x, y=y, width=size, height=size, hp=hp)


def bullet(x, y):
    return Bullet(x=x, y=y, vx=0, vy=0, life=1.0)


class TestHitTests:
    """Test the geometric predicates."""

    def test_dist2(self):
        assert dist2(0, 0, 3, 4) == 25

    def test_circles_touching_count(self):
        assert circle_hits_circle(0, 0, 5, 10, 0, 5)
        assert not circle_hits_circle(0, 0, 5, 10.01, 0, 5)

    def test_point_on_circle_boundary_hits(self):
        assert point_hits_obstacle(20, 0, 0, rock())

    def test_point_inside_rect(self):
        assert circle_hits_rect(5, 5, 0, crate())

    def test_rect_boundary_inclusive(self):
        assert circle_hits_rect(20, 0, 0, crate())
        assert not circle_hits_rect(20.5, 0, 0, crate())

    def test_rect_tolerance(self):
        assert not point_hits_obstacle(23, 0, 0, crate())
        assert bullet_hits_obstacle(23, 0, 0, crate())
        assert not bullet_hits_obstacle(20 + HIT_TOLERANCE + 0.5, 0, 0, crate())

    def test_tolerance_not_applied_to_circles(self):
        assert not bullet_hits_obstacle(22, 0, 0, rock())


class TestResolveBulletHits:
    """Test first-match resolution."""

    def test_hit_removes_bullet_and_destroys(self):
        bullets = [bullet(0, 0)]
        obstacles = [rock()]
        destroyed = resolve_bullet_hits(bullets, obstacles)
        assert len(destroyed) == 1
        assert bullets == [] and obstacles == []

    def test_bullet_consumed_at_most_once(self):
        # Two overlapping rocks, one bullet: only one rock is hit
        bullets = [bullet(0, 0)]
        obstacles = [rock(), rock(x=5)]
        destroyed = resolve_bullet_hits(bullets, obstacles)
        assert len(destroyed) == 1
        assert len(obstacles) == 1

    def test_obstacle_takes_one_bullet_per_tick(self):
        bullets = [bullet(0, 0), bullet(1, 1)]
        obstacles = [crate(hp=2)]
        destroyed = resolve_bullet_hits(bullets, obstacles)
        assert destroyed == []
        assert obstacles[0].hp == 1
        assert len(bullets) == 1

    def test_multi_hit_obstacle_survives_until_zero(self):
        target = crate()
        obstacles = [target]
        resolve_bullet_hits([bullet(0, 0)], obstacles)
        assert obstacles == [target]
        destroyed = resolve_bullet_hits([bullet(0, 0)], obstacles)
        assert destroyed == [target]

    def test_misses_leave_everything(self):
        bullets = [bullet(500, 500)]
        obstacles = [rock()]
        assert resolve_bullet_hits(bullets, obstacles) == []
        assert len(bullets) == 1 and len(obstacles) == 1

    def test_destroyed_in_store_order(self):
        a, b = rock(x=0), rock(x=100)
        destroyed = resolve_bullet_hits([bullet(100, 0), bullet(0, 0)], [a, b])
        assert destroyed == [a, b]


class TestFindShipContact:
    """Test ship contact detection."""

    def test_uses_scaled_ship_radius(self):
        ship = Ship(x=0, y=0, radius=14)
        reach = 20 + 14 * 0.85
        assert find_ship_contact(ship, [rock(x=reach - 0.1)]) is not None
        assert find_ship_contact(ship, [rock(x=reach + 0.1)]) is None

    def test_invincible_ship_is_never_hit(self):
        ship = Ship(x=0, y=0, invincible=0.5)
        assert find_ship_contact(ship, [rock()]) is None

    def test_enemy_bullet_contact(self):
        ship = Ship(x=0, y=0)
        shot = EnemyBullet(x=10, y=0, vx=0, vy=0, life=1.0)
        assert find_ship_contact(ship, [], [shot]) is shot

    def test_obstacles_checked_before_bullets(self):
        ship = Ship(x=0, y=0)
        target = crate()
        shot = EnemyBullet(x=0, y=0, vx=0, vy=0, life=1.0)
        assert find_ship_contact(ship, [target], [shot]) is target
