"""Corridor geometry.

The corridor is a function of travelled distance: its centre sways and its
width pulses sinusoidally, and every section makes it narrower down to a
floor. Screen rows map to distance with the bottom edge at the current
distance and rows further up showing corridor still ahead.
"""

import math
from typing import Tuple

from ..config import (
    CORRIDOR_MIN_WIDTH,
    CORRIDOR_NARROWING,
    CORRIDOR_PULSE,
    CORRIDOR_PULSE_LENGTH,
    CORRIDOR_SWAY,
    CORRIDOR_SWAY_LENGTH,
    CORRIDOR_WIDTH,
)


def corridor_width(distance: float, section: int = 1) -> float:
    """Open width of the corridor at a distance."""
    base = max(CORRIDOR_MIN_WIDTH, CORRIDOR_WIDTH - CORRIDOR_NARROWING * (section - 1))
    pulse = CORRIDOR_PULSE * math.sin(distance / CORRIDOR_PULSE_LENGTH * math.tau)
    return max(CORRIDOR_MIN_WIDTH, base + pulse)


def corridor_bounds(distance: float, width: float, section: int = 1) -> Tuple[float, float]:
    """(left, right) walls of the corridor at a distance.

    Always inside [0, width]; a screen narrower than the corridor just gets
    the whole screen.
    """
    open_width = corridor_width(distance, section)
    if open_width >= width:
        return 0.0, float(width)

    centre = width / 2 + CORRIDOR_SWAY * math.sin(distance / CORRIDOR_SWAY_LENGTH * math.tau)
    half = open_width / 2
    centre = min(max(centre, half), width - half)
    return centre - half, centre + half


def row_distance(distance: float, y: float, height: float) -> float:
    """Distance shown at screen row y."""
    return distance + (height - y)


def bounds_at_row(distance: float, y: float, width: float, height: float, section: int = 1) -> Tuple[float, float]:
    """Corridor walls at screen row y."""
    return corridor_bounds(row_distance(distance, y, height), width, section)


def theme_index(section: int, theme_count: int) -> int:
    """Color theme for a section; themes cycle."""
    return (section - 1) % theme_count
