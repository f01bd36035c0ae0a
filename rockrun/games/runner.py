"""Interactive pygame loop shared by every Rock Run game.

Each frame: measure a clamped step, dispatch pygame events to the input
sources, hand the snapshot and commands to the game, update, render.
"""

import argparse
from typing import Any, Dict, List, Optional, Sequence, Type, Union

import pygame

from rockrun.clock import FrameClock
from rockrun.games.base_game import BaseGame
from rockrun.games.game_state import GameState
from rockrun.games.input import InputCommand, InputManager
from rockrun.games.input.sources import HeldButtonSource, KeyboardInputSource, PointerInputSource
from rockrun.logging import close_all_sinks, get_logger

log = get_logger('runner')


def add_game_arguments(parser: argparse.ArgumentParser, game_cls: Type[BaseGame]) -> None:
    """Add a game's declared ARGUMENTS to an argparse parser."""
    for arg in game_cls.get_arguments():
        kwargs: Dict[str, Any] = {k: v for k, v in arg.items() if k != 'name'}
        parser.add_argument(arg['name'], **kwargs)


def build_parser(game_cls: Type[BaseGame], width: int, height: int) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=f"{game_cls.NAME} - {game_cls.DESCRIPTION}")

    # Display options
    parser.add_argument('--width', type=int, default=width, help='Screen width')
    parser.add_argument('--height', type=int, default=height, help='Screen height')
    parser.add_argument('--fullscreen', action='store_true', help='Run fullscreen')
    parser.add_argument('--fps', type=int, default=60, help='Frame rate cap')
    parser.add_argument('--buttons', action='store_true', help='On-screen touch buttons instead of the pointer joystick')

    add_game_arguments(parser, game_cls)
    return parser


def create_display(width: int, height: int, fullscreen: bool, caption: str) -> pygame.Surface:
    """Initialize pygame and open the window."""
    pygame.init()
    pygame.font.init()

    if fullscreen:
        screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
    else:
        screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)

    pygame.display.set_caption(caption)
    return screen


def run_game(
    game: BaseGame,
    screen: pygame.Surface,
    fps: int = 60,
    manager: Optional[InputManager] = None,
    buttons: bool = False,
) -> int:
    """Run the frame loop until the window closes or Esc is pressed.

    With buttons=True the pointer drives on-screen touch buttons instead of
    the two-zone joystick.
    """
    width, height = screen.get_size()
    touch: Union[HeldButtonSource, PointerInputSource]
    touch = HeldButtonSource(width, height) if buttons else PointerInputSource(width, height)
    if manager is None:
        manager = InputManager([KeyboardInputSource(), touch])

    clock = FrameClock(frame_limiter=pygame.time.Clock(), fps=fps)
    running = True

    while running:
        dt = clock.tick()

        events = pygame.event.get()
        for event in events:
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                game.resize(event.w, event.h)
                touch.resize(event.w, event.h)
        manager.process_events(events)

        snapshot, commands = manager.poll()
        if InputCommand.QUIT in commands:
            running = False

        before = game.state
        game.handle_input(snapshot, commands)
        if game.state is GameState.PLAYING and before is not GameState.PLAYING:
            # Fresh run or resume: drop the start tap and the paused gap
            manager.clear()
            clock.reset()

        game.update(dt)
        game.render(screen)
        if isinstance(touch, HeldButtonSource):
            game.render_buttons(screen, touch.layout, touch.held())
        pygame.display.flip()

    log.info("Exiting %s (score %d, best %d)", game.NAME, game.get_score(), game.best_score)
    close_all_sinks()
    pygame.quit()
    return 0


def main_for(
    game_cls: Type[BaseGame],
    width: int,
    height: int,
    argv: Optional[Sequence[str]] = None,
    controls: Sequence[str] = (),
) -> int:
    """Standalone entry point used by each game's main.py."""
    args = build_parser(game_cls, width, height).parse_args(argv)

    screen = create_display(args.width, args.height, args.fullscreen, game_cls.NAME)
    width, height = screen.get_size()

    options = vars(args).copy()
    for key in ('width', 'height', 'fullscreen', 'fps', 'buttons'):
        options.pop(key)

    game = game_cls(width=width, height=height, **options)

    lines: List[str] = ["=" * 50, game_cls.NAME.upper(), "=" * 50, "Controls:"]
    lines.extend(f"  - {c}" for c in controls)
    lines.append("=" * 50)
    print("\n" + "\n".join(lines) + "\n")

    return run_game(game, screen, fps=args.fps, buttons=args.buttons)
