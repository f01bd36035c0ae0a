#!/usr/bin/env python3
"""TrenchRun - Standalone Entry Point.

Usage:
    python main.py
    python main.py --lives 5
    python main.py --patterns my_patterns.yaml
"""

import os
import sys

# Add project root to path for imports
_project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.TrenchRun.config import SCREEN_HEIGHT, SCREEN_WIDTH
from games.TrenchRun.game_mode import TrenchRunMode
from rockrun.games.runner import main_for

CONTROLS = (
    "Left/Right or A/D to strafe, Up or W to surge forward",
    "Space or Enter to fire",
    "Mouse: left half steers (top surges), right half fires",
    "P to pause, R to restart, ESC to quit",
)


def main():
    """Run Trench Run standalone."""
    return main_for(TrenchRunMode, SCREEN_WIDTH, SCREEN_HEIGHT, controls=CONTROLS)


if __name__ == "__main__":
    sys.exit(main())
