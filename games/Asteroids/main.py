#!/usr/bin/env python3
"""Asteroids - Standalone Entry Point.

Usage:
    python main.py
    python main.py --lives 5
    python main.py --seed 42 --best-score-file scores.json
"""

import os
import sys

# Add project root to path for imports
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.Asteroids.config import SCREEN_HEIGHT, SCREEN_WIDTH
from games.Asteroids.game_mode import AsteroidsMode
from rockrun.games.runner import main_for

CONTROLS = (
    "Left/Right or A/D to rotate, Up or W to thrust",
    "Space or Enter to fire",
    "Mouse: left half steers (top thrusts), right half fires",
    "P to pause, R to restart, ESC to quit",
)


def main():
    """Run Asteroids standalone."""
    return main_for(AsteroidsMode, SCREEN_WIDTH, SCREEN_HEIGHT, controls=CONTROLS)


if __name__ == "__main__":
    sys.exit(main())
