"""Structural checks for user-drawn paths."""

from __future__ import annotations

from typing import Sequence

from gridracer.engine.contracts import Coord, Grid


def validate(path: Sequence[Coord], start: Coord, end: Coord) -> bool:
    """True when the path runs from start to end in unit 4-connected steps.

    Repeated cells are not checked here; ``can_append`` never lets one in.
    """
    if not path:
        return False
    if tuple(path[0]) != tuple(start) or tuple(path[-1]) != tuple(end):
        return False
    return all(is_adjacent(a, b) for a, b in zip(path, path[1:]))


def is_adjacent(a: Coord, b: Coord) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def can_append(
    path: Sequence[Coord], cell: Coord, grid: Grid, start: Coord, end: Coord
) -> bool:
    if not grid.in_bounds(cell):
        return False
    if not grid.cell(cell).is_road and cell != end:
        return False
    if not path:
        return cell == start
    if cell in path:
        return False
    return is_adjacent(path[-1], cell)


def try_append(
    path: tuple[Coord, ...], cell: Coord, grid: Grid, start: Coord, end: Coord
) -> tuple[Coord, ...]:
    """Return the grown path, or ``path`` itself when the append is rejected."""
    if not can_append(path, cell, grid, start, end):
        return path
    return path + (cell,)
