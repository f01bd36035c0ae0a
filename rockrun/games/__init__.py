"""Shared game infrastructure: base game, state machine, input, skins, runner."""

from rockrun.games.base_game import BaseGame, FrameSnapshot
from rockrun.games.game_state import GameState, GameStateMachine

__all__ = ['BaseGame', 'FrameSnapshot', 'GameState', 'GameStateMachine']
