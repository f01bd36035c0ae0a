"""
Tests for pattern loading and the corridor spawner.
"""

import random

import pytest
from pydantic import ValidationError

from games.TrenchRun.game.corridor import bounds_at_row
from games.TrenchRun.game.patterns import load_patterns
from games.TrenchRun.game.spawner import (
    WALL_OPENING,
    WALL_PADDING,
    PatternSpawner,
    forward_speed,
    section_length,
    spawn_gap,
)
from models import PatternConfig
from rockrun.sim import ObstacleKind, Session, Ship


@pytest.fixture
def patterns():
    return load_patterns()


@pytest.fixture
def session():
    return Session.create(Ship(x=480, y=576), lives=3, seed=11, forward_speed=forward_speed(1))


@pytest.fixture
def spawner(patterns):
    return PatternSpawner(patterns, 960, 720)


def travel(spawner, session, pixels, suspended=False):
    session.distance += pixels
    return spawner.update(session, pixels, suspended)


class TestLoadPatterns:
    """Test YAML loading and validation."""

    def test_bundled_patterns(self, patterns):
        names = [p.name for p in patterns.patterns]
        assert len(names) == 6
        assert 'lone_crate' in names
        assert [p.name for p in patterns.available(1)] == ['lone_crate', 'crate_pair']
        assert len(patterns.available(3)) == 6

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_patterns(tmp_path / 'missing.yaml')

    @pytest.mark.parametrize("content", [
        "",
        "patterns: []\n",
        "patterns:\n  - {name: a, weight: 0, formation: single}\n",
        "patterns:\n  - {name: a, weight: 1, formation: zigzag}\n",
        "patterns:\n  - {name: a, weight: 1, formation: single, size: [0, 10]}\n",
        "patterns:\n  - {name: a, weight: 1, formation: single}\n  - {name: a, weight: 2, formation: pair}\n",
    ])
    def test_invalid_patterns_rejected(self, tmp_path, content):
        path = tmp_path / 'patterns.yaml'
        path.write_text(content)
        with pytest.raises(ValidationError):
            load_patterns(path)

    def test_custom_file(self, tmp_path):
        path = tmp_path / 'patterns.yaml'
        path.write_text("patterns:\n  - {name: only, weight: 1, formation: spray, kind: pillar}\n")
        loaded = load_patterns(path)
        assert loaded.patterns[0].kind == 'pillar'
        assert loaded.patterns[0].size == (44.0, 44.0)


class TestProgression:
    """Test per-section tuning curves."""

    def test_gap_shrinks_to_floor(self):
        assert spawn_gap(1) == 260
        assert spawn_gap(2) == 240
        assert spawn_gap(30) == 140

    def test_sections_get_longer(self):
        assert section_length(1) == 2400
        assert section_length(2) == 3000

    def test_speed_capped(self):
        assert forward_speed(1) == 160
        assert forward_speed(2) == 182
        assert forward_speed(50) == 340


class TestSpawner:
    """Test distance-driven row placement."""

    def test_rows_follow_distance(self, spawner, session):
        travel(spawner, session, 200)
        assert session.obstacles == []

        travel(spawner, session, 100)
        assert session.obstacles
        assert all(o.y < 0 for o in session.obstacles)

    def test_section_advance(self, spawner, session):
        session.distance = 2400
        assert spawner.update(session, 0.0)
        assert session.section == 2
        assert session.forward_speed == forward_speed(2)
        assert spawner.section_end == 2400 + 3000

    def test_supply_first_after_section(self, spawner, session):
        session.distance = 2400 - 300
        travel(spawner, session, 300)
        assert session.section == 2
        assert [o.kind for o in session.obstacles] == [ObstacleKind.SUPPLY]

    def test_suspended_spawns_nothing(self, spawner, session):
        session.distance = 2400 - 300
        assert travel(spawner, session, 300, suspended=True)
        travel(spawner, session, 600, suspended=True)
        assert session.obstacles == []

    def test_objective_placed_once(self, spawner, session):
        session.section = 5
        travel(spawner, session, 300)
        travel(spawner, session, 300)
        ports = [o for o in session.obstacles if o.kind is ObstacleKind.EXHAUST_PORT]
        assert len(ports) == 1
        assert spawner.objective_spawned

    def test_choose_pattern_respects_section(self, spawner):
        rng = random.Random(4)
        for _ in range(100):
            assert spawner.choose_pattern(rng, 1).min_section == 1


class TestFormations:
    """Test placement of each formation."""

    @pytest.mark.parametrize("formation,count", [
        ("single", 1),
        ("pair", 2),
        ("wall", 2),
        ("slalom", 3),
        ("spray", 4),
    ])
    def test_formation_sizes(self, spawner, session, formation, count):
        pattern = PatternConfig(name='p', weight=1, formation=formation, size=(40, 40))
        for seed in range(25):
            session.rng = random.Random(seed)
            placed = spawner.place_pattern(session, pattern, -60)
            assert len(placed) == count
            for o in placed:
                left, right = bounds_at_row(session.distance, o.y + 20, 960, 720, session.section)
                assert left <= o.x - o.width / 2 and o.x + o.width / 2 <= right

    def test_slalom_rows_stack_upward(self, spawner, session):
        pattern = PatternConfig(name='p', weight=1, formation='slalom', size=(40, 40))
        ys = [o.y for o in spawner.place_pattern(session, pattern, -60)]
        assert ys == sorted(ys, reverse=True)

    def test_wall_is_two_pillars_around_a_gap(self, spawner, session):
        pattern = PatternConfig(name='p', weight=1, formation='wall', kind='pillar', size=(46, 80))
        left, right = bounds_at_row(session.distance, -60, 960, 720, session.section)
        for seed in range(25):
            session.rng = random.Random(seed)
            first, second = sorted(spawner.place_pattern(session, pattern, -60), key=lambda o: o.x)
            assert first.kind is second.kind is ObstacleKind.PILLAR
            assert first.width >= 46 and second.width >= 46

            # Flush with the walls, one ship-sized gap in between
            assert first.x - first.width / 2 == pytest.approx(left + WALL_PADDING)
            assert second.x + second.width / 2 == pytest.approx(right - WALL_PADDING)
            gap = (second.x - second.width / 2) - (first.x + first.width / 2)
            assert gap == pytest.approx(WALL_OPENING)

    def test_wall_too_narrow(self):
        assert PatternSpawner._wall_pillars(random.Random(1), 0, 100, 46) == []

    def test_turret_chance(self, spawner, session):
        pattern = PatternConfig(name='p', weight=1, formation='spray', turret_chance=1.0)
        placed = spawner.place_pattern(session, pattern, -60)
        assert all(o.kind is ObstacleKind.TURRET for o in placed)
        assert all(o.fire_cooldown > 0 for o in placed)
