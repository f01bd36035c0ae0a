#!/usr/bin/env python3
"""
Rock Run launcher.

    python play.py --list                  # games and their options
    python play.py asteroids
    python play.py trenchrun --lives 5 --seed 7
    python play.py trenchrun --help        # options for one game
    python play.py asteroids -r 1920x1080

The game name is read first so that its own ARGUMENTS can be added to the
parser before the full command line is parsed.
"""

import argparse
import os
import sys
from typing import List, Optional, Tuple

_project_root = os.path.dirname(os.path.abspath(__file__))
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

from games.registry import GameRegistry, get_registry
from rockrun.games.runner import add_game_arguments, create_display, run_game

DEFAULT_SIZE = (1280, 720)
LAUNCHER_OPTIONS = ('game', 'list', 'resolution', 'fullscreen', 'fps', 'buttons')

CONTROLS = """\
Controls:
  Arrows / WASD  steer
  Space          fire
  P / R          pause / restart
  Esc            quit"""


def parse_resolution(text: str) -> Tuple[int, int]:
    """'1920x1080' -> (1920, 1080)."""
    width, sep, height = text.lower().partition('x')
    if not sep:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}")
    try:
        return int(width), int(height)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WIDTHxHEIGHT, got {text!r}") from None


def build_launcher_parser(registry: GameRegistry, game: Optional[str]) -> argparse.ArgumentParser:
    games = registry.list_games()
    parser = argparse.ArgumentParser(
        description='Rock Run - arcade shooters',
        epilog=f"Games: {', '.join(games)}. Use '<game> --help' for game options.",
    )
    parser.add_argument('game', nargs='?', choices=games, help='Game to play')
    parser.add_argument('--list', '-l', action='store_true', help='List games and exit')
    parser.add_argument('--resolution', '-r', type=parse_resolution, default=None,
                        help='Window size as WIDTHxHEIGHT')
    parser.add_argument('--fullscreen', '-f', action='store_true', help='Run fullscreen')
    parser.add_argument('--fps', type=int, default=60, help='Frame rate cap')
    parser.add_argument('--buttons', '-b', action='store_true', help='On-screen touch buttons')

    game_class = registry.get_game_class(game) if game else None
    if game_class is not None:
        add_game_arguments(parser, game_class)
    return parser


def print_games(registry: GameRegistry) -> None:
    for slug in registry.list_games():
        info = registry.get_game_info(slug)
        print(f"{slug:<12} {info.name} {info.version} - {info.description}")
        options = [a['name'] for a in info.arguments]
        if options:
            print(f"{'':<12} options: {' '.join(options)}")


def main(argv: Optional[List[str]] = None) -> int:
    registry = get_registry()

    peek = argparse.ArgumentParser(add_help=False)
    peek.add_argument('game', nargs='?', choices=registry.list_games())
    known, _ = peek.parse_known_args(argv)

    parser = build_launcher_parser(registry, known.game)
    args = parser.parse_args(argv)

    if args.list:
        print_games(registry)
        return 0
    if args.game is None:
        parser.print_help()
        return 1

    info = registry.get_game_info(args.game)
    width, height = args.resolution or DEFAULT_SIZE
    screen = create_display(width, height, args.fullscreen, info.name)
    width, height = screen.get_size()

    game_kwargs = {k: v for k, v in vars(args).items() if k not in LAUNCHER_OPTIONS}
    print(f"{info.name} ({width}x{height})")
    print(CONTROLS)

    game = registry.create_game(args.game, width, height, **game_kwargs)
    return run_game(game, screen, fps=args.fps, buttons=args.buttons)


if __name__ == "__main__":
    sys.exit(main())
