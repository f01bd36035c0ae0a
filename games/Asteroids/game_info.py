"""Asteroids - Game Info for Registry.

Required for auto-discovery by GameRegistry.
"""


def get_game_mode(**kwargs):
    """Factory function to create Asteroids game instance.

    Args:
        **kwargs: Game configuration options (from CLI)

    Returns:
        AsteroidsMode instance
    """
    from games.Asteroids.game_mode import AsteroidsMode
    return AsteroidsMode(**kwargs)
