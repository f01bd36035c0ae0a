"""
Rock Run Logging

Two channels share one configuration:

* Console lines from per-module loggers, filtered by level::

      from rockrun.logging import get_logger

      log = get_logger('asteroids')
      log.debug("Spawning %d asteroids", count)

* Structured records (run summaries and the like) routed to sinks::

      from rockrun.logging import emit_record

      emit_record('runs', {'game': 'Asteroids', 'score': 1200, 'level': 3})

Environment:
    ROCKRUN_LOG_LEVEL=DEBUG                 default console level
    ROCKRUN_LOG_<MODULE>=DEBUG              level for one module
    ROCKRUN_LOG_DIR=~/rockrun-logs          where FileSink writes
    ROCKRUN_LOGGING_<MODULE>_ENABLED=true   record module to a JSONL file

Module names in the environment are a single word (``TRENCH``, ``RUNS``).
"""

import json
import os
import sys
import time
import traceback
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import IO, Any, Dict, Mapping, Optional


class LogLevel(IntEnum):
    """Console levels; values line up with the stdlib logging module."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_NAMES: Dict[str, LogLevel] = {level.name: level for level in LogLevel}
_LEVEL_NAMES['WARN'] = LogLevel.WARNING


def parse_level(name: str, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Level from a case-insensitive name; unknown names give default."""
    return _LEVEL_NAMES.get(name.strip().upper(), default)


def parse_env_value(raw: str) -> Any:
    """Coerce an environment string to bool, int or float where it looks like one."""
    lowered = raw.strip().lower()
    if lowered in ('true', 'yes', 'on', '1'):
        return True
    if lowered in ('false', 'no', 'off', '0'):
        return False
    for cast in (int, float):
        try:
            return cast(raw)
        except ValueError:
            continue
    return raw


# =============================================================================
# Settings
# =============================================================================

@dataclass
class LogSettings:
    """Everything the loggers and sinks read at call time.

    Attributes:
        default_level: Console level for modules without an override
        module_levels: Lowercase module name -> console level
        log_dir: Directory for FileSink output (None = user data dir)
        modules: Lowercase module name -> record settings ({'enabled': True})
    """
    default_level: LogLevel = LogLevel.INFO
    module_levels: Dict[str, LogLevel] = field(default_factory=dict)
    log_dir: Optional[str] = None
    modules: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def level_for(self, module: str) -> LogLevel:
        return self.module_levels.get(module, self.default_level)


def settings_from_env(environ: Mapping[str, str]) -> LogSettings:
    """Build settings from ROCKRUN_LOG_* and ROCKRUN_LOGGING_* variables."""
    settings = LogSettings()
    for key, value in environ.items():
        if key == 'ROCKRUN_LOG_LEVEL':
            settings.default_level = parse_level(value)
        elif key == 'ROCKRUN_LOG_DIR':
            settings.log_dir = value
        elif key.startswith('ROCKRUN_LOG_'):
            settings.module_levels[key[len('ROCKRUN_LOG_'):].lower()] = parse_level(value)
        elif key.startswith('ROCKRUN_LOGGING_'):
            module, _, option = key[len('ROCKRUN_LOGGING_'):].lower().partition('_')
            if module and option:
                settings.modules.setdefault(module, {})[option] = parse_env_value(value)
    return settings


_settings = settings_from_env(os.environ)


def get_settings() -> LogSettings:
    return _settings


def reload_from_env(environ: Optional[Mapping[str, str]] = None) -> LogSettings:
    """Replace the active settings with a fresh read of the environment."""
    global _settings
    _settings = settings_from_env(os.environ if environ is None else environ)
    return _settings


def configure_logging(
    level: Optional[str] = None,
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Adjust the active settings in code.

    Args:
        level: Default console level name
        modules: Module name -> level name overrides
        log_dir: Directory for FileSink output
    """
    if level is not None:
        _settings.default_level = parse_level(level)
    for module, module_level in (modules or {}).items():
        _settings.module_levels[module.lower()] = parse_level(module_level)
    if log_dir is not None:
        _settings.log_dir = log_dir


def get_module_config(module: str) -> Dict[str, Any]:
    """Record settings for a module, e.g. {'enabled': True}."""
    return _settings.modules.get(module.lower(), {})


def user_data_dir() -> Path:
    """Per-user data directory (save file, logs).

    macOS ~/Library/Application Support/RockRun, Windows %APPDATA%/RockRun,
    elsewhere $XDG_DATA_HOME/rockrun.
    """
    if sys.platform == 'darwin':
        return Path.home() / 'Library' / 'Application Support' / 'RockRun'
    if sys.platform == 'win32':
        return Path(os.environ.get('APPDATA', str(Path.home()))) / 'RockRun'
    return Path(os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))) / 'rockrun'


def get_log_dir() -> Path:
    if _settings.log_dir:
        return Path(_settings.log_dir).expanduser()
    return user_data_dir() / 'logs'


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record for module."""
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __enter__(self) -> 'LogSink':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class NullSink(LogSink):
    """Accepts and drops everything."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass


class FileSink(LogSink):
    """
    One JSONL file per module: ``<session>_<module>.jsonl``.

    The first line of each file is a header record and ``close()`` appends a
    footer, so a file cut short by a crash is easy to spot.

    Args:
        log_dir: Output directory (default: get_log_dir() at first write)
        session_name: File name prefix (default: start timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._handles: Dict[str, IO[str]] = {}

    def path_for(self, module: str) -> Path:
        if self._log_dir is None:
            self._log_dir = get_log_dir()
        return self._log_dir / f"{self._session_name}_{module}.jsonl"

    def _write(self, module: str, record: Dict[str, Any]) -> None:
        self._handles[module].write(json.dumps(record) + "\n")

    def _open(self, module: str) -> None:
        path = self.path_for(module)
        path.parent.mkdir(parents=True, exist_ok=True)
        self._handles[module] = open(path, 'a')
        self._write(module, {'type': 'header', 'module': module,
                             'session_name': self._session_name, 'start_time': time.time()})

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        if module not in self._handles:
            self._open(module)
        self._write(module, {'wall_time': time.time(), **record})

    def flush(self) -> None:
        for handle in self._handles.values():
            handle.flush()

    def close(self) -> None:
        for module in list(self._handles):
            self._write(module, {'type': 'footer', 'module': module, 'end_time': time.time()})
            self._handles.pop(module).close()

    @property
    def open_modules(self) -> list:
        return sorted(self._handles)


_sinks: Dict[str, LogSink] = {}
_default_sink: Optional[LogSink] = None


def register_sink(module: str, sink: LogSink) -> None:
    """Route records for module to sink."""
    _sinks[module] = sink


def set_default_sink(sink: Optional[LogSink]) -> None:
    """Sink for modules without their own (None = drop them)."""
    global _default_sink
    _default_sink = sink


def get_sink(module: str) -> Optional[LogSink]:
    """Registered sink for module, else the default.

    A module switched on with ROCKRUN_LOGGING_<MODULE>_ENABLED gets a
    FileSink the first time it is asked for.
    """
    sink = _sinks.get(module)
    if sink is None and get_module_config(module).get('enabled'):
        sink = _sinks[module] = FileSink()
    return sink or _default_sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """Send a record to the module's sink. Returns False if nobody listens."""
    sink = get_sink(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and forget every sink (call on shutdown)."""
    global _default_sink
    while _sinks:
        _, sink = _sinks.popitem()
        sink.close()
    if _default_sink is not None:
        _default_sink.close()
        _default_sink = None


# =============================================================================
# Console loggers
# =============================================================================

class RockRunLogger:
    """Leveled console logger for one module.

    The level is looked up on every call, so configure_logging() affects
    loggers that already exist.
    """

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower()

    @property
    def level(self) -> LogLevel:
        return _settings.level_for(self._key)

    def is_enabled_for(self, level: LogLevel) -> bool:
        return level >= self.level

    def _log(self, level: LogLevel, msg: str, args: tuple) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {level.name}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, msg, args)

    def critical(self, msg: str, *args) -> None:
        self._log(LogLevel.CRITICAL, msg, args)

    def exception(self, msg: str, *args) -> None:
        """Error line followed by the traceback being handled."""
        self._log(LogLevel.ERROR, msg, args)
        if LogLevel.ERROR >= self.level:
            traceback.print_exc(file=sys.stdout)


@lru_cache(maxsize=None)
def get_logger(module: str) -> RockRunLogger:
    """Shared logger for a module name ('asteroids', 'input', ...)."""
    return RockRunLogger(module)
