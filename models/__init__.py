"""
Pydantic data models for Rock Run.

- game: HudSnapshot and GameEvent handed to the presentation layer
- patterns: corridor obstacle pattern configuration loaded from YAML

Usage:
    >>> from models import HudSnapshot, GameEvent, GameEventType
    >>> from models.patterns import PatternSet
"""

from .game import GameEvent, GameEventType, HudSnapshot
from .patterns import PatternConfig, PatternSet

__all__ = [
    'GameEvent',
    'GameEventType',
    'HudSnapshot',
    'PatternConfig',
    'PatternSet',
]
