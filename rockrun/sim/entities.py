"""Simulation entities shared by every Rock Run game.

Entities are plain mutable records. They have no identity beyond membership
in a Session store; removal is done by filtering the store.

Obstacle behaviour comes from the closed ObstacleKind enum and its
KindTraits row. Collision effects read the traits of the kind, never ad hoc flags.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Tuple


@dataclass
class Ship:
    """The player's ship. Exactly one per session."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    angle: float = -math.pi / 2  # Facing up
    radius: float = 14.0
    invincible: float = 0.0      # Seconds remaining; > 0 blocks death
    cooldown: float = 0.0        # Seconds until the next shot is allowed

    @property
    def speed(self) -> float:
        return math.hypot(self.vx, self.vy)

    def reset(self, x: float, y: float, invincible: float) -> None:
        """Return to spawn after a death or level start."""
        self.x = x
        self.y = y
        self.vx = 0.0
        self.vy = 0.0
        self.angle = -math.pi / 2
        self.invincible = invincible
        self.cooldown = 0.0


@dataclass
class Bullet:
    """Player projectile."""

    x: float
    y: float
    vx: float
    vy: float
    life: float
    hue: int = 200  # Presentation only


@dataclass
class EnemyBullet:
    """Turret projectile, aimed at the ship when fired."""

    x: float
    y: float
    vx: float
    vy: float
    life: float
    radius: float = 4.0


@dataclass
class Particle:
    """Cosmetic particle. Never read by gameplay."""

    x: float
    y: float
    vx: float
    vy: float
    life: float
    max_life: float
    color: Tuple[int, int, int] = (232, 237, 246)


class ObstacleKind(Enum):
    """Every kind of obstacle a game can spawn."""

    ASTEROID = "asteroid"
    CRATE = "crate"
    PILLAR = "pillar"
    TURRET = "turret"
    SUPPLY = "supply"
    EXHAUST_PORT = "exhaust_port"


class Shape(Enum):
    CIRCLE = "circle"
    RECT = "rect"


@dataclass(frozen=True)
class KindTraits:
    """Per-kind payload resolved by the collision effects."""

    hit_points: int
    points: int
    shape: Shape
    splits: bool = False        # Breaks into smaller tiers when destroyed
    grants_life: bool = False   # Destroying it awards a life
    fires_back: bool = False    # Shoots at the ship
    objective: bool = False     # Destroying it wins the run


KIND_TRAITS: Dict[ObstacleKind, KindTraits] = {
    ObstacleKind.ASTEROID: KindTraits(hit_points=1, points=20, shape=Shape.CIRCLE, splits=True),
    ObstacleKind.CRATE: KindTraits(hit_points=2, points=50, shape=Shape.RECT),
    ObstacleKind.PILLAR: KindTraits(hit_points=4, points=80, shape=Shape.RECT),
    ObstacleKind.TURRET: KindTraits(hit_points=3, points=150, shape=Shape.RECT, fires_back=True),
    ObstacleKind.SUPPLY: KindTraits(hit_points=1, points=25, shape=Shape.RECT, grants_life=True),
    ObstacleKind.EXHAUST_PORT: KindTraits(hit_points=6, points=1000, shape=Shape.RECT, objective=True),
}


@dataclass
class Obstacle:
    """Anything the player shoots at or must avoid.

    Circle obstacles use ``radius``; rectangle obstacles use ``width`` and
    ``height`` centred on (x, y).
    """

    kind: ObstacleKind
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    radius: float = 0.0
    width: float = 0.0
    height: float = 0.0
    hp: int = 0
    tier: int = 1
    fire_cooldown: float = 0.0
    verts: List[Tuple[float, float]] = field(default_factory=list)

    def __post_init__(self):
        if self.hp <= 0:
            self.hp = self.traits.hit_points

    @property
    def traits(self) -> KindTraits:
        return KIND_TRAITS[self.kind]

    @property
    def is_destroyed(self) -> bool:
        return self.hp <= 0

    @property
    def half_extent(self) -> float:
        """Largest distance from centre to the shape's edge along an axis."""
        if self.traits.shape is Shape.CIRCLE:
            return self.radius
        return max(self.width, self.height) / 2

    def get_bounds(self) -> Tuple[float, float, float, float]:
        """Bounding box (left, top, right, bottom)."""
        if self.traits.shape is Shape.CIRCLE:
            return (self.x - self.radius, self.y - self.radius,
                    self.x + self.radius, self.y + self.radius)
        half_w = self.width / 2
        half_h = self.height / 2
        return (self.x - half_w, self.y - half_h, self.x + half_w, self.y + half_h)
