"""
Best-score persistence.

A single integer is kept in a small JSON key-value file under the fixed key
``best_score``. Reading never fails: a missing, unreadable or malformed file
counts as a best of 0. Writing failures are logged and ignored so a read-only
disk never interrupts play.
"""
import json
import os
from pathlib import Path
from typing import Optional, Union

from rockrun.logging import get_logger, user_data_dir

log = get_logger('persistence')

BEST_SCORE_KEY = 'best_score'


def default_save_path() -> Path:
    """Save file location, respecting ROCKRUN_SAVE_PATH."""
    env_path = os.environ.get('ROCKRUN_SAVE_PATH')
    if env_path:
        return Path(env_path).expanduser()
    return user_data_dir() / 'save.json'


class BestScoreStore:
    """Best score backed by a JSON file.

    Args:
        path: JSON file path (default: default_save_path())
        key: Key the best score is stored under
    """

    def __init__(self, path: Optional[Union[str, Path]] = None, key: str = BEST_SCORE_KEY):
        self._path = Path(path) if path is not None else default_save_path()
        self._key = key

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict:
        try:
            with open(self._path, 'r') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            log.warning("Could not read %s: %s", self._path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> int:
        """Stored best score, 0 on absence or failure."""
        value = self._read_all().get(self._key, 0)
        try:
            best = int(value)
        except (TypeError, ValueError):
            log.warning("Ignoring malformed best score %r in %s", value, self._path)
            return 0
        return max(best, 0)

    def _write(self, best: int) -> None:
        data = self._read_all()
        data[self._key] = best
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, 'w') as f:
                json.dump(data, f)
        except OSError as e:
            log.warning("Could not save best score to %s: %s", self._path, e)

    def submit(self, score: int) -> int:
        """Record a finished run's score.

        Writes only when the score beats the stored best.

        Returns:
            The best score after submission
        """
        best = self.load()
        if score > best:
            self._write(score)
            log.info("New best score %d", score)
            return score
        return best


class MemoryBestScoreStore(BestScoreStore):
    """In-memory store for tests and headless runs."""

    def __init__(self, best: int = 0):
        super().__init__(path=os.devnull)
        self._best = best
        self.writes = 0

    def load(self) -> int:
        return self._best

    def _write(self, best: int) -> None:
        self._best = best
        self.writes += 1
