"""Shared helpers for drawing grids, paths and trace steps with Rich."""

from __future__ import annotations

from typing import Sequence

from rich.text import Text

from gridracer.engine.contracts import Coord, Grid
from gridracer.engine.pathfinding import TraceStep

CELL_WIDTH = 3

BUILDING_STYLE = "grey93 on grey27"
ROAD_STYLE = "black on grey74"
USER_PATH_STYLE = "black on sky_blue1"
BEST_PATH_STYLE = "black on green3"
START_STYLE = "bold white on blue"
END_STYLE = "bold white on red"
VISITED_STYLE = "black on khaki1"
FRONTIER_STYLE = "black on light_goldenrod3"
SETTLED_STYLE = "bold black on orange1"


def render_grid_lines(
    grid: Grid,
    *,
    start: Coord,
    end: Coord,
    user_path: Sequence[Coord] = (),
    best_path: Sequence[Coord] = (),
    show_best: bool = False,
    step: TraceStep | None = None,
) -> list[Text]:
    user_cells = set(user_path)
    best_cells = set(best_path) if show_best else set()
    if step is not None:
        best_cells |= set(step.best_path)
    frontier = set(step.frontier()) if step is not None else set()

    lines: list[Text] = []
    for row in grid.cells:
        line = Text()
        for cell in row:
            coord = cell.coord
            label = str(cell.weight) if cell.is_road else ""
            line.append(
                label.center(CELL_WIDTH),
                style=_cell_style(
                    coord,
                    is_road=cell.is_road,
                    start=start,
                    end=end,
                    user_cells=user_cells,
                    best_cells=best_cells,
                    frontier=frontier,
                    step=step,
                ),
            )
        lines.append(line)
    return lines


def cell_at(grid_size: int, x: int, y: int) -> Coord | None:
    """Map a character offset inside the rendered grid to a cell."""
    if x < 0 or y < 0:
        return None
    row, col = y, x // CELL_WIDTH
    if row >= grid_size or col >= grid_size:
        return None
    return (row, col)


def grid_width(grid_size: int) -> int:
    return grid_size * CELL_WIDTH


def _cell_style(
    coord: Coord,
    *,
    is_road: bool,
    start: Coord,
    end: Coord,
    user_cells: set[Coord],
    best_cells: set[Coord],
    frontier: set[Coord],
    step: TraceStep | None,
) -> str:
    if coord == start:
        return START_STYLE
    if coord == end:
        return END_STYLE
    if step is not None and coord == step.settled:
        return SETTLED_STYLE
    if coord in best_cells:
        return BEST_PATH_STYLE
    if coord in user_cells:
        return USER_PATH_STYLE
    if step is not None and step.is_visited(coord):
        return VISITED_STYLE
    if coord in frontier:
        return FRONTIER_STYLE
    return ROAD_STYLE if is_road else BUILDING_STYLE
