"""TrenchRun skins for rendering."""

from .geometric import GeometricSkin

__all__ = [
    'GeometricSkin',
]
