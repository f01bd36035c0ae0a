"""Simulation core shared by every Rock Run game.

- entities: Ship, Bullet, EnemyBullet, Particle, Obstacle and ObstacleKind
- session: Session owning all entity stores and run counters
- physics: integration, drag, wrap/clamp, timers, firing
- collision: hit tests and first-match resolution
"""

from rockrun.sim.entities import (
    Bullet,
    EnemyBullet,
    KIND_TRAITS,
    KindTraits,
    Obstacle,
    ObstacleKind,
    Particle,
    Shape,
    Ship,
)
from rockrun.sim.session import Session

__all__ = [
    'Bullet',
    'EnemyBullet',
    'KIND_TRAITS',
    'KindTraits',
    'Obstacle',
    'ObstacleKind',
    'Particle',
    'Shape',
    'Ship',
    'Session',
]
