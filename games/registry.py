"""
Game Registry - finds the Rock Run games under games/.

A game is any directory here with a game_mode.py that defines a BaseGame
subclass. Its metadata and CLI arguments are read from that class; an
optional game_info.get_game_mode() factory is used to build instances.

Usage:
    from games.registry import get_registry

    registry = get_registry()
    registry.list_games()                      # ['asteroids', 'trenchrun']
    registry.get_game_arguments('trenchrun')   # argparse definitions
    game = registry.create_game('asteroids', width=1280, height=720, seed=7)
"""

import importlib
import inspect
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, Type

from rockrun.games.base_game import BaseGame
from rockrun.logging import get_logger

log = get_logger('registry')

GAMES_DIR = Path(__file__).parent

GameFactory = Callable[..., BaseGame]


@dataclass
class GameInfo:
    """Launcher-facing description of a game."""
    name: str
    slug: str          # lowercase directory name
    description: str
    version: str
    author: str
    module_path: str   # e.g. 'games.Asteroids'
    arguments: List[Dict[str, Any]] = field(default_factory=list)
    has_config: bool = False   # config.py or .env present


@dataclass
class _Entry:
    info: GameInfo
    game_class: Type[BaseGame]
    factory: GameFactory


def _game_dirs(root: Path) -> Iterator[Path]:
    if not root.is_dir():
        return
    for path in sorted(root.iterdir()):
        if path.is_dir() and path.name[0] not in '_.' and (path / 'game_mode.py').exists():
            yield path


def find_game_class(module_path: str) -> Optional[Type[BaseGame]]:
    """The BaseGame subclass defined (not imported) in <module_path>.game_mode."""
    module = importlib.import_module(f"{module_path}.game_mode")
    for _, obj in inspect.getmembers(module, inspect.isclass):
        if obj.__module__ == module.__name__ and issubclass(obj, BaseGame) and obj is not BaseGame:
            return obj
    return None


def _find_factory(game_dir: Path, module_path: str, game_class: Type[BaseGame]) -> GameFactory:
    """game_info.get_game_mode when the game ships one, else the class itself."""
    if not (game_dir / 'game_info.py').exists():
        return game_class
    try:
        module = importlib.import_module(f"{module_path}.game_info")
    except Exception as e:
        log.warning("Ignoring game_info for %s: %s", game_dir.name, e)
        return game_class
    factory = getattr(module, 'get_game_mode', None)
    return factory if callable(factory) else game_class


class GameRegistry:
    """
    Discovered games keyed by slug.

    A game that fails to import is skipped with a warning; the rest stay
    available.
    """

    def __init__(self, games_dir: Path = GAMES_DIR):
        self._entries: Dict[str, _Entry] = {}
        for game_dir in _game_dirs(games_dir):
            self._register(game_dir)

    def _register(self, game_dir: Path) -> None:
        module_path = f"games.{game_dir.name}"
        try:
            game_class = find_game_class(module_path)
        except Exception as e:
            log.warning("Failed to load game from %s: %s", game_dir, e)
            return
        if game_class is None:
            log.warning("No BaseGame subclass in %s/game_mode.py", game_dir)
            return

        slug = game_dir.name.lower()
        info = GameInfo(
            name=game_class.NAME,
            slug=slug,
            description=game_class.DESCRIPTION,
            version=game_class.VERSION,
            author=game_class.AUTHOR,
            module_path=module_path,
            arguments=game_class.get_arguments(),
            has_config=(game_dir / 'config.py').exists() or (game_dir / '.env').exists(),
        )
        self._entries[slug] = _Entry(info, game_class, _find_factory(game_dir, module_path, game_class))
        log.debug("Registered %s (%s)", slug, game_class.__name__)

    def list_games(self) -> List[str]:
        return sorted(self._entries)

    def get_game_info(self, slug: str) -> Optional[GameInfo]:
        entry = self._entries.get(slug.lower())
        return entry.info if entry else None

    def get_game_arguments(self, slug: str) -> List[Dict[str, Any]]:
        """argparse definitions for a game; empty for unknown slugs."""
        info = self.get_game_info(slug)
        return info.arguments if info else []

    def get_game_class(self, slug: str) -> Optional[Type[BaseGame]]:
        entry = self._entries.get(slug.lower())
        return entry.game_class if entry else None

    def create_game(self, slug: str, width: int, height: int, **kwargs) -> BaseGame:
        """
        Build a game sized to the display.

        Raises:
            ValueError: If no game has this slug
        """
        entry = self._entries.get(slug.lower())
        if entry is None:
            raise ValueError(f"Unknown game: {slug}. Available: {', '.join(self.list_games())}")
        return entry.factory(width=width, height=height, **kwargs)


_registry: Optional[GameRegistry] = None


def get_registry() -> GameRegistry:
    """Process-wide registry, discovered on first use."""
    global _registry
    if _registry is None:
        _registry = GameRegistry()
    return _registry
