"""Rock Run - arcade shooter platform.

Simulation core, input, state machine, persistence and logging shared by the
games under ``games/``.
"""

__version__ = "1.0.0"
