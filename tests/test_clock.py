"""Tests for the frame clock and step clamping."""

import math

import pytest

from rockrun.clock import MAX_STEP, FrameClock, clamp_step


class FakeTime:
    """Manually advanced time source."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


class TestClampStep:
    """Test clamp_step."""

    def test_normal_step_unchanged(self):
        assert clamp_step(0.016) == pytest.approx(0.016)

    def test_long_gap_clamped(self):
        assert clamp_step(2.5) == pytest.approx(MAX_STEP)

    def test_negative_gap_is_zero(self):
        assert clamp_step(-0.5) == 0.0

    def test_nan_is_zero(self):
        assert clamp_step(math.nan) == 0.0

    def test_custom_max(self):
        assert clamp_step(0.5, max_step=0.1) == pytest.approx(0.1)

    def test_max_step_is_one_thirtieth(self):
        assert MAX_STEP == pytest.approx(1 / 30)


class TestFrameClock:
    """Test FrameClock ticking."""

    def test_first_tick_is_zero(self):
        clock = FrameClock(time_source=FakeTime())
        assert clock.tick() == 0.0

    def test_tick_measures_gap(self):
        t = FakeTime()
        clock = FrameClock(time_source=t)
        clock.tick()
        t.now += 0.02
        assert clock.tick() == pytest.approx(0.02)

    def test_stall_is_clamped(self):
        t = FakeTime()
        clock = FrameClock(time_source=t)
        clock.tick()
        t.now += 5.0
        assert clock.tick() == pytest.approx(MAX_STEP)

    def test_clock_going_backwards_yields_zero(self):
        t = FakeTime()
        clock = FrameClock(time_source=t)
        clock.tick()
        t.now -= 1.0
        assert clock.tick() == 0.0

    def test_explicit_now(self):
        clock = FrameClock(time_source=FakeTime())
        clock.tick(now=10.0)
        assert clock.tick(now=10.01) == pytest.approx(0.01)

    def test_reset_rearms_first_tick(self):
        t = FakeTime()
        clock = FrameClock(time_source=t)
        clock.tick()
        t.now += 0.02
        clock.reset()
        t.now += 3.0
        assert clock.tick() == 0.0
        t.now += 0.01
        assert clock.tick() == pytest.approx(0.01)

    def test_steps_always_within_range(self):
        t = FakeTime()
        clock = FrameClock(time_source=t)
        for gap in (0.0, 0.001, 0.016, 0.04, 1.0, -0.2, 0.03):
            t.now += gap
            dt = clock.tick()
            assert 0.0 <= dt <= clock.max_step
