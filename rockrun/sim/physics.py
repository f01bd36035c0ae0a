"""Physics step - integration, drag, playfield edges and timers.

All functions take the step ``dt`` in seconds. Drag is applied as
``drag ** (dt * 60)`` so a ship coasts the same distance at any frame rate.
"""

import math
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from rockrun.sim.entities import Bullet, EnemyBullet, Obstacle, Particle, Ship

# Signature of a corridor bounds lookup: screen y -> (left, right)
BoundsFn = Callable[[float], Tuple[float, float]]


@dataclass(frozen=True)
class ShipTuning:
    """Flight model constants for a ship."""

    turn_rate: float = 3.8      # rad/s
    accel: float = 220.0        # px/s^2
    max_speed: float = 420.0    # px/s
    drag: float = 0.985         # per 1/60 s


@dataclass(frozen=True)
class Intent:
    """Steering intent for one physics step."""

    left: bool = False
    right: bool = False
    thrust: bool = False


def drag_factor(dt: float, drag: float = 0.985) -> float:
    """Frame-rate independent velocity decay for a step of dt seconds."""
    return drag ** (dt * 60.0)


def clamp_speed(vx: float, vy: float, max_speed: float) -> Tuple[float, float]:
    """Scale (vx, vy) down to max_speed if it is faster."""
    speed = math.hypot(vx, vy)
    if speed > max_speed:
        return vx / speed * max_speed, vy / speed * max_speed
    return vx, vy


def wrap_position(x: float, y: float, width: float, height: float) -> Tuple[float, float]:
    """Re-enter from the opposite edge when leaving the playfield."""
    if x < 0:
        x += width
    elif x >= width:
        x -= width
    if y < 0:
        y += height
    elif y >= height:
        y -= height
    return x, y


def integrate_ship(
    ship: Ship,
    intent: Intent,
    dt: float,
    tuning: ShipTuning,
    width: float,
    height: float,
) -> None:
    """Free-roam flight: rotate, thrust along heading, drag, wrap."""
    if intent.left:
        ship.angle -= tuning.turn_rate * dt
    if intent.right:
        ship.angle += tuning.turn_rate * dt

    if intent.thrust:
        ship.vx += math.cos(ship.angle) * tuning.accel * dt
        ship.vy += math.sin(ship.angle) * tuning.accel * dt

    drag = drag_factor(dt, tuning.drag)
    ship.vx, ship.vy = clamp_speed(ship.vx * drag, ship.vy * drag, tuning.max_speed)

    ship.x += ship.vx * dt
    ship.y += ship.vy * dt
    ship.x, ship.y = wrap_position(ship.x, ship.y, width, height)


def integrate_strafe(
    ship: Ship,
    intent: Intent,
    dt: float,
    tuning: ShipTuning,
    bounds: BoundsFn,
    cruise_y: float,
    y_range: Tuple[float, float],
) -> None:
    """Corridor flight: heading stays up, steering strafes.

    Left/right accelerate sideways, thrust pushes up the screen and the ship
    eases back to its cruise row when thrust is released. The ship is then
    clamped inside the corridor at its current row.
    """
    if intent.left:
        ship.vx -= tuning.accel * dt
    if intent.right:
        ship.vx += tuning.accel * dt

    if intent.thrust:
        ship.vy -= tuning.accel * 0.6 * dt
    else:
        ship.vy += (cruise_y - ship.y) * 2.0 * dt

    drag = drag_factor(dt, tuning.drag)
    ship.vx, ship.vy = clamp_speed(ship.vx * drag, ship.vy * drag, tuning.max_speed)

    ship.x += ship.vx * dt
    ship.y += ship.vy * dt

    top, bottom = y_range
    if ship.y < top:
        ship.y, ship.vy = top, 0.0
    elif ship.y > bottom:
        ship.y, ship.vy = bottom, 0.0

    left, right = bounds(ship.y)
    if ship.x - ship.radius < left:
        ship.x, ship.vx = left + ship.radius, 0.0
    elif ship.x + ship.radius > right:
        ship.x, ship.vx = right - ship.radius, 0.0


def tick_timers(ship: Ship, dt: float) -> None:
    """Count down invincibility and fire cooldown, never below zero."""
    ship.invincible = max(0.0, ship.invincible - dt)
    ship.cooldown = max(0.0, ship.cooldown - dt)


def try_fire(
    ship: Ship,
    bullets: List[Bullet],
    interval: float,
    speed: float,
    life: float,
    hue: int = 200,
) -> Optional[Bullet]:
    """Fire one bullet from the ship's nose if the cooldown allows.

    Returns the new bullet, or None when the shot was rejected.
    """
    if ship.cooldown > 0:
        return None

    ship.cooldown = interval
    nose = ship.radius + 4
    cos_a = math.cos(ship.angle)
    sin_a = math.sin(ship.angle)
    bullet = Bullet(
        x=ship.x + cos_a * nose,
        y=ship.y + sin_a * nose,
        vx=ship.vx + cos_a * speed,
        vy=ship.vy + sin_a * speed,
        life=life,
        hue=hue,
    )
    bullets.append(bullet)
    return bullet


def _in_view(x: float, y: float, width: float, height: float, margin: float) -> bool:
    return -margin <= x <= width + margin and -margin <= y <= height + margin


def advance_bullets(
    bullets: List[Bullet],
    dt: float,
    width: float,
    height: float,
    wrap: bool = True,
    margin: float = 20.0,
) -> List[Bullet]:
    """Move bullets and age them.

    Returns the surviving bullets: expired ones are dropped, and when wrap is
    False so are bullets outside the view.
    """
    alive = []
    for b in bullets:
        b.x += b.vx * dt
        b.y += b.vy * dt
        b.life -= dt
        if b.life <= 0:
            continue
        if wrap:
            b.x, b.y = wrap_position(b.x, b.y, width, height)
        elif not _in_view(b.x, b.y, width, height, margin):
            continue
        alive.append(b)
    return alive


def advance_enemy_bullets(
    bullets: List[EnemyBullet],
    dt: float,
    width: float,
    height: float,
    scroll: float = 0.0,
    margin: float = 20.0,
) -> List[EnemyBullet]:
    """Move enemy bullets (plus forward scroll) and drop expired or off-view ones."""
    alive = []
    for b in bullets:
        b.x += b.vx * dt
        b.y += (b.vy + scroll) * dt
        b.life -= dt
        if b.life <= 0 or not _in_view(b.x, b.y, width, height, margin):
            continue
        alive.append(b)
    return alive


def advance_obstacles(
    obstacles: List[Obstacle],
    dt: float,
    width: float,
    height: float,
    wrap: bool = True,
    scroll: float = 0.0,
    margin: float = 40.0,
) -> List[Obstacle]:
    """Move obstacles.

    Free-roam obstacles wrap. Corridor obstacles also scroll down with the
    forward speed and are dropped once fully past the bottom edge.
    """
    alive = []
    for o in obstacles:
        o.x += o.vx * dt
        o.y += (o.vy + scroll) * dt
        if wrap:
            o.x, o.y = wrap_position(o.x, o.y, width, height)
        elif o.y - o.half_extent > height + margin:
            continue
        alive.append(o)
    return alive


def advance_particles(
    particles: List[Particle],
    dt: float,
    width: float,
    height: float,
    wrap: bool = True,
    scroll: float = 0.0,
) -> List[Particle]:
    """Move and age particles, dropping dead ones."""
    alive = []
    for p in particles:
        p.x += p.vx * dt
        p.y += (p.vy + scroll) * dt
        p.life -= dt
        if p.life <= 0:
            continue
        if wrap:
            p.x, p.y = wrap_position(p.x, p.y, width, height)
        alive.append(p)
    return alive
