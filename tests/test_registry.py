"""Tests for game discovery and the launcher helpers."""

import argparse
import importlib

import pytest

from games.registry import GameRegistry, get_registry
from play import build_launcher_parser, main, parse_resolution
from rockrun.games import BaseGame
from rockrun.games.runner import build_parser


@pytest.fixture
def registry():
    return GameRegistry()


class TestGameRegistry:
    """Test auto-discovery of game modes."""

    def test_discovers_both_games(self, registry):
        assert registry.list_games() == ['asteroids', 'trenchrun']

    def test_game_info(self, registry):
        info = registry.get_game_info('TrenchRun')
        assert info.name == "Trench Run"
        assert info.module_path == 'games.TrenchRun'
        assert info.has_config

    def test_game_arguments(self, registry):
        names = [a['name'] for a in registry.get_game_arguments('asteroids')]
        assert '--skin' in names
        assert '--lives' in names
        assert registry.get_game_arguments('pong') == []

    def test_create_game(self, registry, memory_store):
        game = registry.create_game('asteroids', width=640, height=480, best_score_store=memory_store)
        assert isinstance(game, BaseGame)
        assert (game.width, game.height) == (640, 480)

    def test_unknown_game(self, registry):
        with pytest.raises(ValueError, match="Unknown game"):
            registry.create_game('pong', width=640, height=480)

    def test_missing_games_dir(self, tmp_path):
        assert GameRegistry(tmp_path / 'nowhere').list_games() == []

    def test_singleton(self):
        assert get_registry() is get_registry()


class TestParser:
    """Test CLI parsing from declared arguments."""

    def test_defaults(self, registry):
        parser = build_parser(registry.get_game_class('trenchrun'), 960, 720)
        args = parser.parse_args([])
        assert (args.width, args.height, args.fps) == (960, 720, 60)
        assert not args.buttons
        assert args.skin == 'geometric'
        assert args.patterns is None
        assert args.lives == 3

    def test_game_options(self, registry):
        parser = build_parser(registry.get_game_class('asteroids'), 1280, 720)
        args = parser.parse_args(['--lives', '5', '--seed', '42', '--best-score-file', 'best.json'])
        assert (args.lives, args.seed, args.best_score_file) == (5, 42, 'best.json')

    def test_bad_choice_exits(self, registry):
        parser = build_parser(registry.get_game_class('asteroids'), 1280, 720)
        with pytest.raises(SystemExit):
            parser.parse_args(['--skin', 'neon'])


class TestGameInfoFactories:
    """Test the per-game factory hooks."""

    @pytest.mark.parametrize("module,name", [
        ('games.Asteroids.game_info', 'Asteroids'),
        ('games.TrenchRun.game_info', 'Trench Run'),
    ])
    def test_get_game_mode(self, module, name, memory_store):
        factory = importlib.import_module(module).get_game_mode
        game = factory(width=800, height=600, best_score_store=memory_store)
        assert game.NAME == name
        assert game.width == 800


class TestLauncher:
    """Test the play.py command line."""

    def test_resolution(self):
        assert parse_resolution('1920x1080') == (1920, 1080)
        assert parse_resolution('800X600') == (800, 600)

    @pytest.mark.parametrize("text", ['1920', 'widexhigh', ''])
    def test_bad_resolution(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            parse_resolution(text)

    def test_game_options_added(self, registry):
        args = build_launcher_parser(registry, 'trenchrun').parse_args(['trenchrun', '--lives', '4', '-r', '640x480', '-b'])
        assert (args.game, args.lives, args.resolution, args.buttons) == ('trenchrun', 4, (640, 480), True)

    def test_list(self, capsys):
        assert main(['--list']) == 0
        out = capsys.readouterr().out
        assert 'asteroids' in out and 'trenchrun' in out
