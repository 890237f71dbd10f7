from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".schulte"
SCORES_FILE_NAME = "high_scores.json"


def score_key(grid_size: int) -> str:
    return f"highScore_{grid_size}x{grid_size}"


class HighScoreStore:
    """Best completion time per grid size. Persists to disk across app restarts.
    File: ~/.schulte/high_scores.json unless another path is given.

    Values are kept the way a browser key-value store keeps them: a flat map of
    ``highScore_NxN`` to string-encoded milliseconds.
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = Path(file_path) if file_path is not None else DEFAULT_DATA_DIR / SCORES_FILE_NAME
        self._records = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def load(self, grid_size: int) -> Optional[int]:
        """Return the best time in ms for *grid_size*, or None when there is no usable record."""
        raw = self._records.get(score_key(grid_size))
        if raw is None:
            return None
        # Only whole milliseconds count; bools, floats and negatives are corrupt.
        if isinstance(raw, int) and not isinstance(raw, bool) and raw >= 0:
            return raw
        if isinstance(raw, str) and raw.strip().isdecimal():
            return int(raw.strip())
        logger.warning("Ignoring corrupt high score %r for %s", raw, score_key(grid_size))
        return None

    def save(self, grid_size: int, elapsed_ms: int) -> bool:
        """Store *elapsed_ms* if it beats the current record. Returns True on a new best."""
        current = self.load(grid_size)
        if current is not None and elapsed_ms >= current:
            return False
        self._records[score_key(grid_size)] = str(int(elapsed_ms))
        self._save()
        return True

    def clear(self, grid_size: int) -> None:
        """Forget the record for a single grid size."""
        if self._records.pop(score_key(grid_size), None) is not None:
            self._save()

    def all(self) -> Dict[int, int]:
        """Return every usable record keyed by grid size."""
        result: Dict[int, int] = {}
        for key in self._records:
            size = _size_from_key(key)
            if size is None:
                continue
            value = self.load(size)
            if value is not None:
                result[size] = value
        return result

    def _load(self) -> Dict[str, str]:
        if not self._file_path.exists():
            return {}
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning("Could not load high scores from %s: %s", self._file_path, e)
            return {}
        if not isinstance(payload, dict):
            logger.warning("Ignoring high score file %s: expected a JSON object", self._file_path)
            return {}
        return {str(key): value for key, value in payload.items()}

    def _save(self) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(self._records, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save high scores to %s: %s", self._file_path, e)


def _size_from_key(key: str) -> Optional[int]:
    prefix = "highScore_"
    if not key.startswith(prefix):
        return None
    rows, sep, cols = key[len(prefix):].partition("x")
    if not sep or rows != cols or not rows.isdigit():
        return None
    return int(rows)
