"""Random grid generation and ASCII grid parsing."""

from __future__ import annotations

import logging
import random
from typing import Iterable

from gridracer.engine.contracts import (
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    Cell,
    CellType,
    Coord,
    Grid,
)

logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 10
DEFAULT_DENSITY = 0.2
DEFAULT_WEIGHT_RANGE = (1, 5)

BUILDING_TOKEN = "#"


class GridConfigError(ValueError):
    """Raised when a grid cannot be built from the given configuration."""


def default_endpoints(size: int) -> tuple[Coord, Coord]:
    return (0, 0), (size - 1, size - 1)


def generate_grid(
    size: int = DEFAULT_GRID_SIZE,
    density: float = DEFAULT_DENSITY,
    weight_range: tuple[int, int] = DEFAULT_WEIGHT_RANGE,
    *,
    seed: int | None = None,
    rng: random.Random | None = None,
    force_start_road: bool = False,
) -> Grid:
    """Draw a size x size grid; the end cell is always forced to Road.

    Every cell draws a weight, so a Building that gets forced to Road
    still carries one. Pass ``seed`` or ``rng`` for reproducible grids.
    """
    _check_config(size, density, weight_range)
    rng = rng or random.Random(seed)
    lo, hi = weight_range

    rows: list[list[Cell]] = []
    for row in range(size):
        cells = []
        for col in range(size):
            cell_type = (
                CellType.BUILDING if rng.random() < density else CellType.ROAD
            )
            cells.append(
                Cell(row=row, col=col, type=cell_type, weight=rng.randint(lo, hi))
            )
        rows.append(cells)

    start, end = default_endpoints(size)
    forced = [end]
    if force_start_road:
        forced.append(start)
    for row, col in forced:
        rows[row][col] = rows[row][col].model_copy(update={"type": CellType.ROAD})

    grid = Grid(size=size, cells=rows)
    logger.debug(
        "Generated %dx%d grid with %d passable cells",
        size,
        size,
        grid.passable_count(),
    )
    return grid


def grid_from_lines(lines: Iterable[str]) -> Grid:
    """Parse whitespace-separated rows: digits are Road weights, '#' a Building."""
    rows: list[list[Cell]] = []
    for row, line in enumerate(line for line in lines if line.strip()):
        cells = []
        for col, token in enumerate(line.split()):
            cells.append(_parse_token(token, row, col))
        rows.append(cells)

    size = len(rows)
    if size == 0:
        raise GridConfigError("Grid text is empty.")
    for row, cells in enumerate(rows):
        if len(cells) != size:
            raise GridConfigError(
                f"Row {row} has {len(cells)} cells; expected {size} for a square grid."
            )
    return Grid(size=size, cells=rows)


def grid_to_lines(grid: Grid) -> list[str]:
    return [
        " ".join(
            str(cell.weight) if cell.is_road else BUILDING_TOKEN for cell in row
        )
        for row in grid.cells
    ]


def _parse_token(token: str, row: int, col: int) -> Cell:
    if token == BUILDING_TOKEN:
        return Cell(row=row, col=col, type=CellType.BUILDING, weight=1)
    if not token.isdigit() or int(token) < 1:
        raise GridConfigError(f"Bad cell token {token!r} at ({row}, {col}).")
    return Cell(row=row, col=col, type=CellType.ROAD, weight=int(token))


def _check_config(size: int, density: float, weight_range: tuple[int, int]) -> None:
    if not MIN_GRID_SIZE <= size <= MAX_GRID_SIZE:
        raise GridConfigError(
            f"Grid size {size} is outside {MIN_GRID_SIZE}..{MAX_GRID_SIZE}."
        )
    if not 0.0 <= density <= 1.0:
        raise GridConfigError(f"Building density {density} is outside [0, 1].")
    lo, hi = weight_range
    if lo < 1 or lo > hi:
        raise GridConfigError(f"Weight range {weight_range} must satisfy 1 <= lo <= hi.")
