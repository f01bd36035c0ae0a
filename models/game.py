"""
Game-facing data models shared by every Rock Run game.

These are what the presentation layer receives: a HUD snapshot of the run
counters once per frame and toast-style game events.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HudSnapshot(BaseModel):
    """Read-only run counters for the HUD.

    Attributes:
        game: Game name
        state: GameState value ('menu', 'playing', ...)
        score: Current score
        best_score: Best score ever recorded (includes the current run once beaten)
        lives: Lives remaining
        level: Free-roam level (1-based)
        section: Corridor section (1-based)
        distance: Corridor distance travelled in pixels
        suspended: True while spawning waits on a break
    """
    game: str
    state: str
    score: int = Field(default=0, ge=0)
    best_score: int = Field(default=0, ge=0)
    lives: int = Field(default=0, ge=0)
    level: int = Field(default=1, ge=1)
    section: int = Field(default=1, ge=1)
    distance: float = Field(default=0.0, ge=0.0)
    suspended: bool = False

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return (f"HudSnapshot({self.game} {self.state} score={self.score} "
                f"lives={self.lives} level={self.level} section={self.section})")


class GameEventType(str, Enum):
    """Kinds of toast-worthy events."""
    RUN_STARTED = "run_started"
    LEVEL_CLEARED = "level_cleared"
    SECTION_REACHED = "section_reached"
    LIFE_LOST = "life_lost"
    LIFE_GAINED = "life_gained"
    PAUSED = "paused"
    RESUMED = "resumed"
    GAME_OVER = "game_over"
    VICTORY = "victory"
    NEW_BEST = "new_best"


class GameEvent(BaseModel):
    """A normal game occurrence the UI may announce.

    Attributes:
        type: What happened
        message: Short human-readable text
        value: Optional number tied to the event (level, lives, score)
    """
    type: GameEventType
    message: str
    value: Optional[int] = None

    model_config = ConfigDict(frozen=True)
