"""Base class for all Rock Run games.

BaseGame owns everything that is the same in every variant: the state
machine, command handling (start, pause, restart), fire-edge latching, the
best-score store, the break gate, game events and the per-frame snapshot
for the presentation layer. Subclasses supply the Session factory and the
simulation step.

Game metadata (NAME, DESCRIPTION, etc.) and CLI arguments (ARGUMENTS)
are declared as class attributes so launchers can discover them.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pygame

from models import GameEvent, GameEventType, HudSnapshot
from rockrun.breaks import BreakGate, BreakProvider
from rockrun.clock import clamp_step
from rockrun.games.game_state import GameState, GameStateMachine
from rockrun.games.input import IDLE, InputCommand, InputSnapshot
from rockrun.games.skin import VectorSkin
from rockrun.logging import emit_record, get_logger
from rockrun.persistence import BestScoreStore
from rockrun.sim import Bullet, EnemyBullet, Obstacle, Particle, Session, Ship

log = get_logger('game')


@dataclass(frozen=True)
class FrameSnapshot:
    """What the presentation layer may read for one frame.

    Entity tuples reference live simulation records; renderers must treat
    them as read-only.
    """
    ship: Ship
    bullets: Tuple[Bullet, ...]
    obstacles: Tuple[Obstacle, ...]
    particles: Tuple[Particle, ...]
    enemy_bullets: Tuple[EnemyBullet, ...]
    hud: HudSnapshot
    thrusting: bool = False


class BaseGame(ABC):
    """Abstract base class for all Rock Run games.

    Class Attributes (metadata):
        NAME: Display name for the game
        DESCRIPTION: Short description of gameplay
        VERSION: Semantic version string
        AUTHOR: Author/team name
        ARGUMENTS: List of CLI argument definitions for argparse

    Subclasses must implement:
        - _new_session() -> Session: Fresh stores and counters for a run
        - _step(dt): Advance spawner, physics and collisions for one frame
        - _create_skin() -> VectorSkin: Renderer for the game

    Usage:
        class MyGame(BaseGame):
            NAME = "My Game"

            def _new_session(self) -> Session:
                return Session.create(Ship(x=100, y=100), lives=self._starting_lives)

            def _step(self, dt: float) -> None:
                ...
    """

    # =========================================================================
    # Game Metadata (override in subclasses)
    # =========================================================================

    NAME: str = "Unnamed Game"
    DESCRIPTION: str = "No description"
    VERSION: str = "1.0.0"
    AUTHOR: str = "Unknown"

    # Each entry is a dict with keys: name, type, default, help, choices (optional)
    ARGUMENTS: List[Dict[str, Any]] = []

    _BASE_ARGUMENTS: List[Dict[str, Any]] = [
        {
            'name': '--lives',
            'type': int,
            'default': 3,
            'help': 'Starting lives'
        },
        {
            'name': '--seed',
            'type': int,
            'default': None,
            'help': 'Random seed (default: random)'
        },
        {
            'name': '--best-score-file',
            'type': str,
            'default': None,
            'help': 'JSON file holding the best score'
        },
    ]

    # Lives can never exceed this, pickups included
    MAX_LIVES: int = 5

    # Explosion particles: (count, speed, life)
    HIT_BURST = (18, 260.0, 0.55)
    DEATH_BURST = (28, 220.0, 0.7)
    DEBRIS_COLOR = (232, 237, 246)
    SHIP_DEBRIS_COLOR = (251, 113, 133)

    @classmethod
    def get_arguments(cls) -> List[Dict[str, Any]]:
        """Get all CLI arguments for this game (game-specific + base).

        Game-specific arguments come first, then base arguments.
        Duplicates by name are removed (game-specific takes precedence).
        """
        seen_names = set()
        result = []

        for arg in list(cls.ARGUMENTS) + list(cls._BASE_ARGUMENTS):
            name = arg.get('name', '')
            if name and name not in seen_names:
                seen_names.add(name)
                result.append(arg)

        return result

    @classmethod
    def get_info(cls) -> Dict[str, Any]:
        """Get game metadata as a dictionary."""
        return {
            'name': cls.NAME,
            'description': cls.DESCRIPTION,
            'version': cls.VERSION,
            'author': cls.AUTHOR,
            'arguments': cls.get_arguments(),
        }

    # =========================================================================
    # Instance Initialization
    # =========================================================================

    def __init__(
        self,
        width: int,
        height: int,
        lives: int = 3,
        seed: Optional[int] = None,
        best_score_file: Optional[str] = None,
        best_score_store: Optional[BestScoreStore] = None,
        break_provider: Optional[BreakProvider] = None,
        **kwargs,
    ):
        """Initialize base game.

        Args:
            width: Playfield width in pixels
            height: Playfield height in pixels
            lives: Starting lives
            seed: Random seed for the first run (later runs derive from it)
            best_score_file: JSON file for the best score (ignored if a store is given)
            best_score_store: Best-score persistence
            break_provider: Optional between-wave break orchestration
        """
        if kwargs:
            log.debug("Ignoring unknown options: %s", sorted(kwargs))

        self._width = width
        self._height = height
        self._starting_lives = max(1, min(lives, self.MAX_LIVES))
        self._seed = seed
        self._runs = 0

        self._store = best_score_store or BestScoreStore(best_score_file)
        self._best_score = self._store.load()

        self._breaks = BreakGate(break_provider)
        self._machine = GameStateMachine(GameState.MENU)
        self._machine.add_listener(self._on_transition)

        self._events: List[GameEvent] = []
        self._intent: InputSnapshot = IDLE
        self._fire_pending = False

        self._skin = self._create_skin()
        self._session = self._new_session()

    # =========================================================================
    # Subclass hooks
    # =========================================================================

    @abstractmethod
    def _new_session(self) -> Session:
        """Build the stores and counters for a new run."""
        pass

    @abstractmethod
    def _step(self, dt: float) -> None:
        """Advance the simulation by dt seconds (only called while PLAYING)."""
        pass

    @abstractmethod
    def _create_skin(self) -> VectorSkin:
        """Build the renderer for this game."""
        pass

    # =========================================================================
    # Public interface
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._machine.state

    @property
    def session(self) -> Session:
        return self._session

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def resize(self, width: int, height: int) -> None:
        """Playfield size changed; entities keep their positions."""
        log.debug("Resize %dx%d -> %dx%d", self._width, self._height, width, height)
        self._width = width
        self._height = height

    @property
    def best_score(self) -> int:
        return self._best_score

    @property
    def spawning_suspended(self) -> bool:
        return self._breaks.suspended

    def get_score(self) -> int:
        return self._session.score

    def handle_input(self, snapshot: InputSnapshot, commands: Sequence[InputCommand] = ()) -> None:
        """Apply one frame of input.

        Commands are handled first. Steering and fire only count while
        PLAYING; a fire press arriving in the same frame as a start is
        dropped so the tap that starts the run does not also shoot.
        """
        started = False
        for command in commands:
            if command is InputCommand.START:
                started = self.start() or started
            elif command is InputCommand.PAUSE_TOGGLE:
                self.toggle_pause()
            elif command is InputCommand.RESTART:
                started = self.restart() or started

        if self.state is not GameState.PLAYING:
            self._intent = IDLE
            self._fire_pending = False
            return

        self._intent = snapshot
        if snapshot.fire_pressed and not started:
            self._fire_pending = True

    def update(self, dt: float) -> None:
        """Advance the game. Only PLAYING runs the simulation."""
        dt = clamp_step(dt)
        self._skin.update(dt)
        if self.state is not GameState.PLAYING:
            return
        self._step(dt)

    def render(self, screen: pygame.Surface) -> None:
        """Draw the current frame (every state)."""
        self._skin.show_events(self.drain_events())
        self._skin.render_frame(self.snapshot(), screen)

    def render_buttons(self, screen: pygame.Surface, layout: Dict[Any, pygame.Rect], held: set) -> None:
        """Draw on-screen touch buttons over the frame."""
        self._skin.render_buttons(screen, layout, held)

    def start(self) -> bool:
        """Leave the title or end screen. Returns True if a run started."""
        state = self.state
        if state is GameState.MENU:
            if self._machine.transition(GameState.PLAYING):
                self._emit(GameEventType.RUN_STARTED, f"{self.NAME}: go!")
                return True
            return False
        if state.is_terminal:
            return self.restart()
        return False

    def toggle_pause(self) -> bool:
        """Pause or resume. Returns True if the state changed."""
        if self.state is GameState.PLAYING:
            if self._machine.transition(GameState.PAUSED):
                self._emit(GameEventType.PAUSED, "Paused")
                return True
        elif self.state is GameState.PAUSED:
            if self._machine.transition(GameState.PLAYING):
                self._emit(GameEventType.RESUMED, "Resumed")
                return True
        return False

    def restart(self) -> bool:
        """Throw the current run away and start a fresh one.

        Not available from the title screen. Returns True if a run started.
        """
        if self.state is GameState.MENU:
            return False

        self._breaks.cancel()
        self._runs += 1
        self._session = self._new_session()
        self._intent = IDLE
        self._fire_pending = False
        self._machine.transition(GameState.PLAYING)
        self._emit(GameEventType.RUN_STARTED, f"{self.NAME}: go!")
        return True

    def drain_events(self) -> List[GameEvent]:
        """Game events since the last call, oldest first."""
        events = self._events
        self._events = []
        return events

    def snapshot(self) -> FrameSnapshot:
        """Read-only view of the current frame for rendering."""
        s = self._session
        hud = HudSnapshot(
            game=self.NAME,
            state=self.state.value,
            score=s.score,
            best_score=max(self._best_score, s.score),
            lives=s.lives,
            level=s.level,
            section=s.section,
            distance=s.distance,
            suspended=self._breaks.suspended,
        )
        return FrameSnapshot(
            ship=s.ship,
            bullets=tuple(s.bullets),
            obstacles=tuple(s.obstacles),
            particles=tuple(s.particles),
            enemy_bullets=tuple(s.enemy_bullets),
            hud=hud,
            thrusting=self._intent.thrust,
        )

    # =========================================================================
    # Helpers for subclasses
    # =========================================================================

    def _run_seed(self) -> Optional[int]:
        """Seed for the current run; None keeps runs random."""
        if self._seed is None:
            return None
        return self._seed + self._runs

    def _consume_fire(self) -> bool:
        """Take this frame's fire pulse (at most one per press)."""
        pending = self._fire_pending
        self._fire_pending = False
        return pending

    def _emit(self, event_type: GameEventType, message: str, value: Optional[int] = None) -> None:
        self._events.append(GameEvent(type=event_type, message=message, value=value))
        log.debug("Event %s: %s", event_type.value, message)

    def _ship_destroyed(self, respawn: Tuple[float, float], invincibility: float) -> None:
        """Take a life; respawn the ship or end the run."""
        s = self._session
        count, speed, life = self.DEATH_BURST
        s.emit_particles(s.ship.x, s.ship.y, count, speed, life, self.SHIP_DEBRIS_COLOR)
        remaining = s.lose_life()
        if remaining <= 0:
            self._end_run(won=False)
            return

        s.ship.reset(respawn[0], respawn[1], invincibility)
        self._emit(GameEventType.LIFE_LOST, f"Ship lost - {remaining} left", remaining)

    def _points_for(self, obstacle: Obstacle) -> int:
        return obstacle.traits.points

    def _fragments(self, obstacle: Obstacle) -> List[Obstacle]:
        """Obstacles left behind by a destroyed splitting obstacle."""
        return []

    def _on_destroyed(self, obstacle: Obstacle) -> None:
        """Apply a destroyed obstacle's payload from its kind's traits."""
        s = self._session
        traits = obstacle.traits

        s.add_score(self._points_for(obstacle))
        count, speed, life = self.HIT_BURST
        s.emit_particles(obstacle.x, obstacle.y, count, speed, life, self.DEBRIS_COLOR)

        if traits.splits:
            s.obstacles.extend(self._fragments(obstacle))
        if traits.grants_life:
            self._grant_life()
        if traits.objective:
            self._end_run(won=True)

    def _grant_life(self) -> None:
        s = self._session
        if s.grant_life(self.MAX_LIVES):
            self._emit(GameEventType.LIFE_GAINED, "Extra life!", s.lives)

    def _end_run(self, won: bool) -> None:
        """Move to a terminal state and persist the best score."""
        target = GameState.WON if won else GameState.GAME_OVER
        if not self._machine.transition(target):
            return

        score = self._session.score
        previous_best = self._best_score
        self._best_score = max(self._store.submit(score), previous_best)

        if won:
            self._emit(GameEventType.VICTORY, f"Victory! Score: {score}", score)
        else:
            self._emit(GameEventType.GAME_OVER, f"Game over. Score: {score}", score)
        if score > previous_best:
            self._emit(GameEventType.NEW_BEST, f"New best: {score}", score)

        log.info("Run ended (%s) score=%d best=%d", target.value, score, self._best_score)
        emit_record('runs', {
            'game': self.NAME,
            'result': target.value,
            'score': score,
            'best_score': self._best_score,
            'level': self._session.level,
            'section': self._session.section,
            'distance': round(self._session.distance, 1),
        })

    def _on_transition(self, old: GameState, new: GameState) -> None:
        """Tell the break provider when gameplay starts and stops."""
        if new is GameState.PLAYING and old is not GameState.PLAYING:
            self._breaks.notify_started()
        elif old is GameState.PLAYING and new is not GameState.PLAYING:
            self._breaks.notify_stopped()
