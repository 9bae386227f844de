"""Grid-based shortest paths (Dijkstra) with a replayable trace."""

from __future__ import annotations

import heapq
import logging
import math
from dataclasses import dataclass

from gridracer.engine.contracts import Coord, Grid, TraceStepRecord
from gridracer.engine.cost_model import DEFAULT_COST_MODEL, CostModel

logger = logging.getLogger(__name__)

DistanceRow = tuple[int | None, ...]
VisitedRow = tuple[bool, ...]


@dataclass(frozen=True)
class TraceStep:
    """Solver state right after one cell was settled.

    ``distances`` and ``visited`` are row tuples; ``None`` stands for an
    unreached cell. Rows untouched by a round are shared with the
    previous step.
    """

    index: int
    settled: Coord
    distance: int
    candidates: tuple[Coord, ...]
    visited: tuple[VisitedRow, ...]
    distances: tuple[DistanceRow, ...]
    best_path: tuple[Coord, ...]

    def is_visited(self, coord: Coord) -> bool:
        row, col = coord
        return self.visited[row][col]

    def distance_at(self, coord: Coord) -> float:
        row, col = coord
        value = self.distances[row][col]
        return math.inf if value is None else value

    def frontier(self) -> list[Coord]:
        return [
            (row, col)
            for row, values in enumerate(self.distances)
            for col, value in enumerate(values)
            if value is not None and not self.visited[row][col]
        ]

    def settled_count(self) -> int:
        return sum(sum(1 for flag in row if flag) for row in self.visited)

    def to_record(self) -> TraceStepRecord:
        return TraceStepRecord(
            index=self.index,
            settled=self.settled,
            distance=self.distance,
            candidates=list(self.candidates),
            visited=[list(row) for row in self.visited],
            distances=[list(row) for row in self.distances],
            best_path=list(self.best_path),
        )

    @classmethod
    def from_record(cls, record: TraceStepRecord) -> "TraceStep":
        return cls(
            index=record.index,
            settled=tuple(record.settled),
            distance=record.distance,
            candidates=tuple(tuple(coord) for coord in record.candidates),
            visited=tuple(tuple(row) for row in record.visited),
            distances=tuple(tuple(row) for row in record.distances),
            best_path=tuple(tuple(coord) for coord in record.best_path),
        )


@dataclass(frozen=True)
class SolveResult:
    optimal_path: tuple[Coord, ...]
    trace: tuple[TraceStep, ...]
    distance: int | None = None

    @property
    def reachable(self) -> bool:
        return bool(self.optimal_path)


class PathFinder:
    def __init__(self, grid: Grid, *, cost_model: CostModel | None = None) -> None:
        self._grid = grid
        self._cost_model = cost_model or DEFAULT_COST_MODEL

    def solve(self, start: Coord, end: Coord) -> SolveResult:
        grid = self._grid
        if not grid.in_bounds(start) or not grid.in_bounds(end):
            return SolveResult(optimal_path=(), trace=())
        if not grid.is_passable(start):
            return SolveResult(optimal_path=(), trace=())

        size = grid.size
        distances: list[DistanceRow] = [(None,) * size] * size
        visited: list[VisitedRow] = [(False,) * size] * size
        came_from: dict[Coord, Coord] = {}

        seed = self._cost_model.seed_distance(grid, start)
        _set_cell(distances, start, seed)
        # (distance, row, col): ties settle in row-major order.
        open_set: list[tuple[int, int, int]] = [(seed, start[0], start[1])]
        trace: list[TraceStep] = []

        while open_set:
            current_distance, row, col = heapq.heappop(open_set)
            current = (row, col)
            if visited[row][col] or distances[row][col] != current_distance:
                continue
            _set_cell(visited, current, True)

            candidates: list[Coord] = []
            for neighbor in grid.neighbors(current):
                n_row, n_col = neighbor
                if visited[n_row][n_col]:
                    continue
                candidates.append(neighbor)
                tentative = current_distance + self._cost_model.step_cost(
                    grid, neighbor
                )
                known = distances[n_row][n_col]
                if known is None or tentative < known:
                    _set_cell(distances, neighbor, tentative)
                    came_from[neighbor] = current
                    heapq.heappush(open_set, (tentative, n_row, n_col))

            best_path: tuple[Coord, ...] = ()
            if distances[end[0]][end[1]] is not None:
                best_path = self._reconstruct_path(came_from, start, end)
            trace.append(
                TraceStep(
                    index=len(trace),
                    settled=current,
                    distance=current_distance,
                    candidates=tuple(candidates),
                    visited=tuple(visited),
                    distances=tuple(distances),
                    best_path=best_path,
                )
            )
            if current == end:
                break

        end_distance = distances[end[0]][end[1]]
        if end_distance is None:
            logger.debug(
                "No route from %s to %s after settling %d cells",
                start,
                end,
                len(trace),
            )
            return SolveResult(optimal_path=(), trace=tuple(trace))

        path = self._reconstruct_path(came_from, start, end)
        logger.debug(
            "Solved %s -> %s: cost %d, %d cells, %d settlements",
            start,
            end,
            end_distance,
            len(path),
            len(trace),
        )
        return SolveResult(
            optimal_path=path, trace=tuple(trace), distance=end_distance
        )

    @staticmethod
    def _reconstruct_path(
        came_from: dict[Coord, Coord], start: Coord, end: Coord
    ) -> tuple[Coord, ...]:
        path = [end]
        current = end
        while current != start:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return tuple(path)


def solve(
    grid: Grid,
    start: Coord,
    end: Coord,
    *,
    cost_model: CostModel | None = None,
) -> SolveResult:
    return PathFinder(grid, cost_model=cost_model).solve(start, end)


def _set_cell(table: list[tuple], coord: Coord, value: object) -> None:
    row, col = coord
    values = list(table[row])
    values[col] = value
    table[row] = tuple(values)
