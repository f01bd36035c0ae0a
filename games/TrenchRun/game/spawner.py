"""Corridor spawner - pattern rows, sections, supplies and the objective.

The spawner is driven by travelled distance, never by frame count: every
``gap`` pixels of forward travel it places one row of obstacles just above
the top edge, and every ``section_length`` pixels it starts a new section.
"""

import random
from typing import List, Tuple

from models import PatternConfig, PatternSet
from rockrun.logging import get_logger
from rockrun.sim import Obstacle, ObstacleKind, Session

from ..config import (
    EXHAUST_PORT_SIZE,
    FORWARD_SPEED_BASE,
    FORWARD_SPEED_MAX,
    FORWARD_SPEED_STEP,
    GAP_BASE,
    GAP_MIN,
    GAP_STEP,
    OBJECTIVE_SECTION,
    SECTION_BASE,
    SECTION_GROWTH,
    SPAWN_MARGIN,
    SUPPLY_SIZE,
    TURRET_FIRE_INTERVAL,
)
from .corridor import bounds_at_row

log = get_logger('spawner')

# Clearance kept between an obstacle and the corridor wall
WALL_PADDING = 6.0
# Gap between the two wall pillars (wide enough for the ship)
WALL_OPENING = 100.0
SLALOM_COUNT = 3
SPRAY_COUNT = 4


def spawn_gap(section: int) -> float:
    """Distance between obstacle rows; shrinks each section down to GAP_MIN."""
    return max(GAP_MIN, GAP_BASE - GAP_STEP * (section - 1))


def section_length(section: int) -> float:
    return SECTION_BASE + SECTION_GROWTH * (section - 1)


def forward_speed(section: int) -> float:
    return min(FORWARD_SPEED_MAX, FORWARD_SPEED_BASE + FORWARD_SPEED_STEP * (section - 1))


class PatternSpawner:
    """Places obstacle rows from weighted YAML patterns.

    Attributes:
        objective_spawned: True once the exhaust port has been placed
    """

    def __init__(self, patterns: PatternSet, width: float, height: float):
        self._patterns = patterns
        self._width = width
        self._height = height

        self._until_next = spawn_gap(1)
        self._section_end = section_length(1)
        self._supply_due = False
        self.objective_spawned = False

    def resize(self, width: float, height: float) -> None:
        self._width = width
        self._height = height

    @property
    def section_end(self) -> float:
        """Distance at which the current section ends."""
        return self._section_end

    def update(self, session: Session, travelled: float, suspended: bool = False) -> bool:
        """Account for travelled distance and spawn what is due.

        session.distance must already include ``travelled``. While suspended
        no rows are placed.

        Returns:
            True if a new section started
        """
        advanced = False
        if session.distance >= self._section_end:
            self._advance_section(session)
            advanced = True

        if suspended:
            return advanced

        self._until_next -= travelled
        if self._until_next <= 0:
            self._spawn_row(session)
            self._until_next = spawn_gap(session.section)
        return advanced

    def _advance_section(self, session: Session) -> None:
        session.section += 1
        self._section_end += section_length(session.section)
        session.forward_speed = forward_speed(session.section)
        self._supply_due = True
        log.info("Section %d at %.0f px (speed %.0f)", session.section, session.distance, session.forward_speed)

    # =========================================================================
    # Row placement
    # =========================================================================

    def _row_bounds(self, session: Session, y: float) -> Tuple[float, float]:
        return bounds_at_row(session.distance, y, self._width, self._height, session.section)

    def _spawn_row(self, session: Session) -> None:
        y = -SPAWN_MARGIN
        if self._supply_due:
            self._supply_due = False
            session.obstacles.append(self._place_supply(session, y))
            return

        if session.section >= OBJECTIVE_SECTION and not self.objective_spawned:
            self.objective_spawned = True
            session.obstacles.append(self._place_objective(session, y))
            log.info("Exhaust port placed at %.0f px", session.distance)
            return

        pattern = self.choose_pattern(session.rng, session.section)
        placed = self.place_pattern(session, pattern, y)
        session.obstacles.extend(placed)
        log.trace("Row '%s': %d obstacles", pattern.name, len(placed))

    def choose_pattern(self, rng: random.Random, section: int) -> PatternConfig:
        """Weighted pick among the patterns allowed in this section."""
        choices = self._patterns.available(section) or self._patterns.patterns
        return rng.choices(choices, weights=[p.weight for p in choices], k=1)[0]

    def place_pattern(self, session: Session, pattern: PatternConfig, y: float) -> List[Obstacle]:
        """Obstacles for one pattern row whose bottom edge is at y."""
        rng = session.rng
        w, h = pattern.size
        left, right = self._row_bounds(session, y)
        formation = pattern.formation

        # (centre x, bottom y, width) per obstacle
        slots: List[Tuple[float, float, float]]
        if formation == "single":
            slots = [(self._random_x(rng, left, right, w), y, w)]
        elif formation == "pair":
            third = (right - left) / 3
            slots = [
                (self._clamp_x(left + third + rng.uniform(-20, 20), left, right, w), y, w),
                (self._clamp_x(right - third + rng.uniform(-20, 20), left, right, w), y, w),
            ]
        elif formation == "wall":
            slots = [(x, y, width) for x, width in self._wall_pillars(rng, left, right, w)]
        elif formation == "slalom":
            slots = []
            side = rng.choice((0, 1))
            for i in range(SLALOM_COUNT):
                row_y = y - i * h * 1.8
                row_left, row_right = self._row_bounds(session, row_y)
                edge = row_left if (i + side) % 2 == 0 else row_right - w
                slots.append((self._clamp_x(edge + w / 2 + WALL_PADDING, row_left, row_right, w), row_y, w))
        else:
            slots = []
            for _ in range(SPRAY_COUNT):
                row_y = y - rng.uniform(0, 80)
                slots.append((self._random_x(rng, *self._row_bounds(session, row_y), w), row_y, w))

        return [self._make_obstacle(rng, pattern, x, row_y, width) for x, row_y, width in slots]

    def _make_obstacle(self, rng: random.Random, pattern: PatternConfig, x: float, y: float, w: float) -> Obstacle:
        if pattern.turret_chance > 0 and rng.random() < pattern.turret_chance:
            kind = ObstacleKind.TURRET
        else:
            kind = ObstacleKind(pattern.kind)

        h = pattern.size[1]
        obstacle = Obstacle(kind=kind, x=x, y=y - h / 2, width=w, height=h)
        if kind is ObstacleKind.TURRET:
            obstacle.fire_cooldown = rng.uniform(0.5, TURRET_FIRE_INTERVAL)
        return obstacle

    def _place_supply(self, session: Session, y: float) -> Obstacle:
        w, h = SUPPLY_SIZE
        left, right = self._row_bounds(session, y)
        x = self._random_x(session.rng, left, right, w)
        return Obstacle(kind=ObstacleKind.SUPPLY, x=x, y=y - h / 2, width=w, height=h)

    def _place_objective(self, session: Session, y: float) -> Obstacle:
        w, h = EXHAUST_PORT_SIZE
        left, right = self._row_bounds(session, y)
        return Obstacle(kind=ObstacleKind.EXHAUST_PORT, x=(left + right) / 2, y=y - h / 2, width=w, height=h)

    # =========================================================================
    # Placement helpers
    # =========================================================================

    @staticmethod
    def _clamp_x(x: float, left: float, right: float, w: float) -> float:
        lo = left + w / 2 + WALL_PADDING
        hi = right - w / 2 - WALL_PADDING
        if lo > hi:
            return (left + right) / 2
        return min(max(x, lo), hi)

    def _random_x(self, rng: random.Random, left: float, right: float, w: float) -> float:
        lo = left + w / 2 + WALL_PADDING
        hi = right - w / 2 - WALL_PADDING
        if lo > hi:
            return (left + right) / 2
        return rng.uniform(lo, hi)

    @staticmethod
    def _wall_pillars(rng: random.Random, left: float, right: float, w: float) -> List[Tuple[float, float]]:
        """(centre, width) of two pillars reaching in from the walls.

        They leave one WALL_OPENING gap at a random position; each pillar is
        at least w wide. Empty if the corridor is too narrow for that.
        """
        inner_left = left + WALL_PADDING
        inner_right = right - WALL_PADDING
        if inner_right - inner_left < WALL_OPENING + 2 * w:
            return []

        gap_start = rng.uniform(inner_left + w, inner_right - w - WALL_OPENING)
        gap_end = gap_start + WALL_OPENING
        return [
            ((inner_left + gap_start) / 2, gap_start - inner_left),
            ((gap_end + inner_right) / 2, inner_right - gap_end),
        ]
