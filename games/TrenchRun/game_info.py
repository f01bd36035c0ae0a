"""TrenchRun - Game Info for Registry.

Required for auto-discovery by GameRegistry.
"""


def get_game_mode(**kwargs):
    """Factory function to create TrenchRun game instance.

    Args:
        **kwargs: Game configuration options (from CLI)

    Returns:
        TrenchRunMode instance
    """
    from games.TrenchRun.game_mode import TrenchRunMode
    return TrenchRunMode(**kwargs)
