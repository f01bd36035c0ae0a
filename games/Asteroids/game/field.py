"""Asteroid field - wave sizing, rock generation, placement and splitting."""

import math
import random
from typing import List, Optional, Tuple

from rockrun.sim import Obstacle, ObstacleKind, Session
from rockrun.sim.collision import dist2

from ..config import (
    ASTEROID_MAX_SPEED,
    ASTEROID_MIN_SPEED,
    ASTEROID_SPEED_PER_LEVEL,
    EXTRA_FRAGMENT_CHANCE,
    SAFE_SPAWN_DISTANCE,
    SPAWN_ATTEMPTS,
    SPLIT_KICK,
    TIER_RADIUS,
)

LARGE = 3
SMALL = 1


def asteroid_count(level: int) -> int:
    """Rocks in the wave for a level: 3 + level, kept within 4..10."""
    return max(4, min(10, 3 + level))


def make_outline(rng: random.Random, radius: float) -> List[Tuple[float, float]]:
    """Jagged outline as (angle, distance) pairs around the centre."""
    n = int(rng.uniform(10, 16))
    return [(i / n * math.tau, radius * rng.uniform(0.72, 1.12)) for i in range(n)]


def make_asteroid(rng: random.Random, x: float, y: float, tier: int, level: int) -> Obstacle:
    """One asteroid at (x, y) drifting in a random direction.

    Speed grows with the level; size comes from the tier with some jitter.
    """
    radius = TIER_RADIUS[tier] * rng.uniform(0.85, 1.1)
    speed = rng.uniform(ASTEROID_MIN_SPEED, ASTEROID_MAX_SPEED) + (level - 1) * ASTEROID_SPEED_PER_LEVEL
    heading = rng.uniform(0.0, math.tau)
    return Obstacle(
        kind=ObstacleKind.ASTEROID,
        x=x,
        y=y,
        vx=math.cos(heading) * speed,
        vy=math.sin(heading) * speed,
        radius=radius,
        tier=tier,
        verts=make_outline(rng, radius),
    )


def pick_spawn_point(
    rng: random.Random,
    width: float,
    height: float,
    avoid: Tuple[float, float],
    min_distance: float = SAFE_SPAWN_DISTANCE,
    attempts: int = SPAWN_ATTEMPTS,
) -> Tuple[float, float]:
    """Random point at least min_distance from avoid.

    Rejection sampling; when every attempt lands too close the last sample
    is used anyway.
    """
    x, y = avoid
    limit = min_distance * min_distance
    for _ in range(attempts):
        x = rng.uniform(0.0, width)
        y = rng.uniform(0.0, height)
        if dist2(x, y, avoid[0], avoid[1]) > limit:
            break
    return x, y


def spawn_field(session: Session, width: float, height: float, avoid: Optional[Tuple[float, float]] = None) -> int:
    """Fill the session with a fresh wave of large rocks.

    Returns the number of rocks added.
    """
    if avoid is None:
        avoid = (session.ship.x, session.ship.y)

    count = asteroid_count(session.level)
    for _ in range(count):
        x, y = pick_spawn_point(session.rng, width, height, avoid)
        session.obstacles.append(make_asteroid(session.rng, x, y, LARGE, session.level))
    return count


def split_asteroid(rng: random.Random, parent: Obstacle, level: int) -> List[Obstacle]:
    """Fragments for a destroyed rock; the smallest tier leaves nothing."""
    if parent.tier <= SMALL:
        return []

    n = 2 + (1 if rng.random() < EXTRA_FRAGMENT_CHANCE else 0)
    children = []
    for _ in range(n):
        child = make_asteroid(rng, parent.x, parent.y, parent.tier - 1, level)
        child.vx += rng.uniform(-SPLIT_KICK, SPLIT_KICK)
        child.vy += rng.uniform(-SPLIT_KICK, SPLIT_KICK)
        children.append(child)
    return children
