"""Best-score storage keyed by level id."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class ScoreStore(Protocol):
    def get(self, level_id: str) -> int | None:
        """Return the stored value for a level, if any."""

    def set(self, level_id: str, value: int) -> bool:
        """Store a value; return True when the stored value changed."""


class InMemoryScoreStore:
    def __init__(self, initial: dict[str, int] | None = None) -> None:
        self._scores: dict[str, int] = dict(initial or {})

    def get(self, level_id: str) -> int | None:
        return self._scores.get(level_id)

    def set(self, level_id: str, value: int) -> bool:
        if self._scores.get(level_id) == value:
            return False
        self._scores[level_id] = value
        return True

    def as_dict(self) -> dict[str, int]:
        return dict(self._scores)


class JsonScoreStore:
    """Scores kept in one JSON object file, rewritten on every change."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._scores = _load_scores(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, level_id: str) -> int | None:
        return self._scores.get(level_id)

    def set(self, level_id: str, value: int) -> bool:
        if self._scores.get(level_id) == value:
            return False
        self._scores[level_id] = value
        self._write()
        return True

    def as_dict(self) -> dict[str, int]:
        return dict(self._scores)

    def _write(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            json.dumps(self._scores, indent=2, sort_keys=True), encoding="utf-8"
        )


def _load_scores(path: Path) -> dict[str, int]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        logger.warning("Ignoring unreadable score file %s", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring score file %s: expected a JSON object", path)
        return {}
    return {
        str(key): int(value)
        for key, value in data.items()
        if isinstance(value, (int, float)) and not isinstance(value, bool)
    }
