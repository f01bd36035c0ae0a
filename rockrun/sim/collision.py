"""Collision detection and resolution.

Hit tests are boundary inclusive: touching counts as a hit.

Resolution is "first match wins" - each obstacle takes at most one bullet
per tick and each bullet is consumed by at most one obstacle, so a single
projectile can never score twice.
"""

from typing import Callable, List, Optional, Union

from rockrun.sim.entities import Bullet, EnemyBullet, Obstacle, Shape, Ship

# Forgiveness margin added to the bullet radius for rectangle targets
HIT_TOLERANCE: float = 4.0

# (x, y, radius, obstacle) -> hit?
HitTest = Callable[[float, float, float, Obstacle], bool]


def dist2(ax: float, ay: float, bx: float, by: float) -> float:
    """Squared distance between two points."""
    dx = ax - bx
    dy = ay - by
    return dx * dx + dy * dy


def circle_hits_circle(x1: float, y1: float, r1: float, x2: float, y2: float, r2: float) -> bool:
    """Check if two circles touch or overlap."""
    rr = r1 + r2
    return dist2(x1, y1, x2, y2) <= rr * rr


def circle_hits_rect(
    px: float,
    py: float,
    radius: float,
    obstacle: Obstacle,
    tolerance: float = 0.0,
) -> bool:
    """Check a circle against an obstacle's rectangle.

    Clamps the circle centre to the rectangle and compares the squared
    distance to the clamped point with (radius + tolerance)^2.
    """
    left, top, right, bottom = obstacle.get_bounds()
    cx = min(max(px, left), right)
    cy = min(max(py, top), bottom)
    r = radius + tolerance
    return dist2(px, py, cx, cy) <= r * r


def point_hits_obstacle(x: float, y: float, radius: float, obstacle: Obstacle) -> bool:
    """Shape-aware test used by the free-roam game (no tolerance)."""
    if obstacle.traits.shape is Shape.CIRCLE:
        return circle_hits_circle(x, y, radius, obstacle.x, obstacle.y, obstacle.radius)
    return circle_hits_rect(x, y, radius, obstacle)


def bullet_hits_obstacle(x: float, y: float, radius: float, obstacle: Obstacle) -> bool:
    """Shape-aware test with the rectangle forgiveness margin."""
    if obstacle.traits.shape is Shape.CIRCLE:
        return circle_hits_circle(x, y, radius, obstacle.x, obstacle.y, obstacle.radius)
    return circle_hits_rect(x, y, radius, obstacle, HIT_TOLERANCE)


def resolve_bullet_hits(
    bullets: List[Bullet],
    obstacles: List[Obstacle],
    hit_test: HitTest = point_hits_obstacle,
    bullet_radius: float = 0.0,
    damage: int = 1,
) -> List[Obstacle]:
    """Apply bullet hits to obstacles.

    For each obstacle, the first live bullet that hits it is removed and the
    obstacle loses ``damage`` hit points. Destroyed obstacles are removed
    from the store.

    Both lists are modified in place.

    Returns:
        Obstacles destroyed this tick, in store order
    """
    if not bullets or not obstacles:
        return []

    spent = set()
    destroyed: List[Obstacle] = []
    survivors: List[Obstacle] = []

    for obstacle in obstacles:
        for i, b in enumerate(bullets):
            if i in spent:
                continue
            if hit_test(b.x, b.y, bullet_radius, obstacle):
                spent.add(i)
                obstacle.hp -= damage
                break

        if obstacle.is_destroyed:
            destroyed.append(obstacle)
        else:
            survivors.append(obstacle)

    if spent:
        bullets[:] = [b for i, b in enumerate(bullets) if i not in spent]
    obstacles[:] = survivors
    return destroyed


def find_ship_contact(
    ship: Ship,
    obstacles: List[Obstacle],
    enemy_bullets: Optional[List[EnemyBullet]] = None,
    hit_test: HitTest = point_hits_obstacle,
    ship_scale: float = 0.85,
) -> Optional[Union[Obstacle, EnemyBullet]]:
    """First obstacle or enemy bullet touching the ship.

    Always None while the ship is invincible. The ship's effective radius
    is ``ship.radius * ship_scale``.
    """
    if ship.invincible > 0:
        return None

    radius = ship.radius * ship_scale
    for obstacle in obstacles:
        if hit_test(ship.x, ship.y, radius, obstacle):
            return obstacle

    for b in enemy_bullets or ():
        if circle_hits_circle(ship.x, ship.y, radius, b.x, b.y, b.radius):
            return b

    return None
