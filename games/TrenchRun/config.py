"""
TrenchRun - Configuration loader.

Every tunable can be overridden from games/TrenchRun/.env.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from game directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Display
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 960)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)

# Obstacle patterns
PATTERNS_FILE = Path(os.getenv('PATTERNS_FILE', str(Path(__file__).parent / 'patterns.yaml')))

# Run
STARTING_LIVES = _get_int('STARTING_LIVES', 3)
RESPAWN_INVINCIBILITY = _get_float('RESPAWN_INVINCIBILITY', 1.2)  # seconds

# Ship strafing model
SHIP_RADIUS = _get_float('SHIP_RADIUS', 14.0)
STRAFE_ACCEL = _get_float('STRAFE_ACCEL', 1100.0)  # px/s^2
MAX_STRAFE_SPEED = _get_float('MAX_STRAFE_SPEED', 380.0)
STRAFE_DRAG = _get_float('STRAFE_DRAG', 0.9)        # per 1/60 s
CRUISE_ROW = _get_float('CRUISE_ROW', 0.8)          # fraction of screen height
BAND_TOP = _get_float('BAND_TOP', 0.45)
BAND_BOTTOM = _get_float('BAND_BOTTOM', 0.92)

# Weapon
FIRE_INTERVAL = _get_float('FIRE_INTERVAL', 0.16)
BULLET_SPEED = _get_float('BULLET_SPEED', 620.0)
BULLET_LIFE = _get_float('BULLET_LIFE', 1.2)

# Forward scroll (px/s), raised each section
FORWARD_SPEED_BASE = _get_float('FORWARD_SPEED_BASE', 160.0)
FORWARD_SPEED_STEP = _get_float('FORWARD_SPEED_STEP', 22.0)
FORWARD_SPEED_MAX = _get_float('FORWARD_SPEED_MAX', 340.0)

# Spawning: distance between pattern rows and section lengths
GAP_BASE = _get_float('GAP_BASE', 260.0)
GAP_STEP = _get_float('GAP_STEP', 20.0)
GAP_MIN = _get_float('GAP_MIN', 140.0)
SECTION_BASE = _get_float('SECTION_BASE', 2400.0)
SECTION_GROWTH = _get_float('SECTION_GROWTH', 600.0)
OBJECTIVE_SECTION = _get_int('OBJECTIVE_SECTION', 5)
SPAWN_MARGIN = _get_float('SPAWN_MARGIN', 60.0)  # spawn row above the top edge

# Corridor geometry
CORRIDOR_WIDTH = _get_float('CORRIDOR_WIDTH', 560.0)
CORRIDOR_NARROWING = _get_float('CORRIDOR_NARROWING', 30.0)  # per section
CORRIDOR_MIN_WIDTH = _get_float('CORRIDOR_MIN_WIDTH', 300.0)
CORRIDOR_SWAY = _get_float('CORRIDOR_SWAY', 90.0)            # centre offset amplitude
CORRIDOR_SWAY_LENGTH = _get_float('CORRIDOR_SWAY_LENGTH', 1800.0)
CORRIDOR_PULSE = _get_float('CORRIDOR_PULSE', 40.0)          # width amplitude
CORRIDOR_PULSE_LENGTH = _get_float('CORRIDOR_PULSE_LENGTH', 1100.0)

# Turrets
TURRET_FIRE_INTERVAL = _get_float('TURRET_FIRE_INTERVAL', 1.6)
ENEMY_BULLET_SPEED = _get_float('ENEMY_BULLET_SPEED', 240.0)
ENEMY_BULLET_LIFE = _get_float('ENEMY_BULLET_LIFE', 3.0)

# Special obstacle sizes (width, height)
SUPPLY_SIZE = (34.0, 34.0)
EXHAUST_PORT_SIZE = (96.0, 56.0)

# Section color themes: (wall, floor line, accent)
THEMES = [
    ((46, 58, 84), (28, 34, 50), (125, 211, 252)),
    ((74, 52, 84), (42, 30, 50), (244, 114, 182)),
    ((48, 78, 62), (28, 46, 36), (134, 239, 172)),
    ((86, 70, 44), (50, 40, 26), (253, 186, 116)),
]
