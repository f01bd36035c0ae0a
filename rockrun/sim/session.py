"""Session - everything one run of a game owns.

A Session holds every entity store and run counter. Spawners append to the
stores they are given, the physics step moves entities, and the collision
resolver removes them. Restarting a run means building a new Session.
"""

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from rockrun.sim.entities import Bullet, EnemyBullet, Obstacle, Particle, Ship


@dataclass
class Session:
    """Entity stores and counters for a single run."""

    ship: Ship
    lives: int = 3
    rng: random.Random = field(default_factory=random.Random)
    score: int = 0
    level: int = 1
    section: int = 1
    distance: float = 0.0
    forward_speed: float = 0.0
    bullets: List[Bullet] = field(default_factory=list)
    obstacles: List[Obstacle] = field(default_factory=list)
    particles: List[Particle] = field(default_factory=list)
    enemy_bullets: List[EnemyBullet] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        ship: Ship,
        lives: int,
        seed: Optional[int] = None,
        forward_speed: float = 0.0,
    ) -> 'Session':
        """Fresh session with a seeded random source."""
        return cls(ship=ship, lives=lives, rng=random.Random(seed), forward_speed=forward_speed)

    def add_score(self, points: int) -> int:
        """Add points; the score never decreases."""
        if points < 0:
            raise ValueError(f'Score awards must be non-negative, got {points}')
        self.score += points
        return self.score

    def lose_life(self) -> int:
        """Remove one life. Returns lives remaining."""
        self.lives = max(0, self.lives - 1)
        return self.lives

    def grant_life(self, cap: int) -> bool:
        """Add one life up to cap. Returns True if a life was added."""
        if self.lives >= cap:
            return False
        self.lives += 1
        return True

    def clear_projectiles(self) -> None:
        self.bullets.clear()
        self.enemy_bullets.clear()

    def emit_particles(
        self,
        x: float,
        y: float,
        count: int,
        speed: float,
        life: float,
        color: Tuple[int, int, int] = (232, 237, 246),
    ) -> None:
        """Burst of cosmetic particles in random directions."""
        rng = self.rng
        for _ in range(count):
            a = rng.uniform(0.0, math.tau)
            s = rng.uniform(speed * 0.35, speed)
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=math.cos(a) * s,
                vy=math.sin(a) * s,
                life=rng.uniform(life * 0.5, life),
                max_life=life,
                color=color,
            ))
