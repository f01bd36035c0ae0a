"""
Asteroids - Configuration loader.

Every tunable can be overridden from games/Asteroids/.env.
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
SCREEN_WIDTH = _get_int('SCREEN_WIDTH', 1280)
SCREEN_HEIGHT = _get_int('SCREEN_HEIGHT', 720)

# Run
STARTING_LIVES = _get_int('STARTING_LIVES', 3)
RESPAWN_INVINCIBILITY = _get_float('RESPAWN_INVINCIBILITY', 2.0)  # seconds

# Ship flight model
SHIP_RADIUS = _get_float('SHIP_RADIUS', 14.0)
TURN_RATE = _get_float('TURN_RATE', 3.8)          # rad/s
THRUST_ACCEL = _get_float('THRUST_ACCEL', 220.0)  # px/s^2
MAX_SPEED = _get_float('MAX_SPEED', 420.0)        # px/s
DRAG = _get_float('DRAG', 0.985)                  # per 1/60 s

# Weapon
FIRE_INTERVAL = _get_float('FIRE_INTERVAL', 0.18)
BULLET_SPEED = _get_float('BULLET_SPEED', 420.0)
BULLET_LIFE = _get_float('BULLET_LIFE', 1.1)

# Asteroid field
SAFE_SPAWN_DISTANCE = _get_float('SAFE_SPAWN_DISTANCE', 220.0)
SPAWN_ATTEMPTS = _get_int('SPAWN_ATTEMPTS', 50)
ASTEROID_MIN_SPEED = _get_float('ASTEROID_MIN_SPEED', 35.0)
ASTEROID_MAX_SPEED = _get_float('ASTEROID_MAX_SPEED', 70.0)
ASTEROID_SPEED_PER_LEVEL = _get_float('ASTEROID_SPEED_PER_LEVEL', 6.0)
SPLIT_KICK = _get_float('SPLIT_KICK', 70.0)
EXTRA_FRAGMENT_CHANCE = _get_float('EXTRA_FRAGMENT_CHANCE', 0.25)

# Base radius by tier (3 = large)
TIER_RADIUS = {
    3: _get_float('LARGE_RADIUS', 60.0),
    2: _get_float('MEDIUM_RADIUS', 38.0),
    1: _get_float('SMALL_RADIUS', 22.0),
}

# Points by tier; smaller rocks are worth more
TIER_POINTS = {
    3: _get_int('LARGE_POINTS', 20),
    2: _get_int('MEDIUM_POINTS', 50),
    1: _get_int('SMALL_POINTS', 100),
}

# Colors
SHIP_EXPLOSION_COLOR = (251, 113, 133)
ROCK_DEBRIS_COLOR = (232, 237, 246)
EXHAUST_COLOR = (125, 211, 252)
