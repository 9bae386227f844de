"""Level table: built-in defaults plus an optional JSON override."""

from __future__ import annotations

import json
from pathlib import Path

from gridracer.engine.contracts import LevelConfig

DEFAULT_LEVELS: tuple[LevelConfig, ...] = (
    LevelConfig(size=4, building_density=0.1, weight_range=(1, 3)),
    LevelConfig(size=6, building_density=0.15, weight_range=(1, 5)),
    LevelConfig(size=8, building_density=0.2, weight_range=(1, 5)),
    LevelConfig(size=10, building_density=0.2, weight_range=(1, 9)),
    LevelConfig(size=10, building_density=0.3, weight_range=(1, 9)),
)


def load_levels(path: Path | None = None) -> tuple[LevelConfig, ...]:
    if path is None:
        return DEFAULT_LEVELS
    data = _load_json(path)
    if not isinstance(data, dict):
        raise ValueError(f"Level file {path} must be a JSON object.")
    raw_levels = data.get("levels", [])
    if not raw_levels:
        raise ValueError(f"Level file {path} defines no levels.")
    return tuple(LevelConfig.model_validate(level) for level in raw_levels)


def get_level(levels: tuple[LevelConfig, ...], number: int) -> LevelConfig:
    """Look up a level by its 1-based number."""
    if not 1 <= number <= len(levels):
        raise ValueError(f"Level {number} is not defined (1..{len(levels)}).")
    return levels[number - 1]


def level_id(number: int) -> str:
    return f"level-{number}"


def _load_json(path: Path) -> object:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Missing level file: {path}") from exc
    return json.loads(text)
