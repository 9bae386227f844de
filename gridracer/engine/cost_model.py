"""Path cost conventions shared by the solver and scoring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from gridracer.engine.contracts import Coord, Grid


@dataclass(frozen=True)
class CostModel:
    """Entering-cost model: moving into a cell costs that cell's weight.

    ``charge_start`` decides whether occupying the start cell is paid for.
    With it on, the start seeds at its own weight and every path cost
    includes it; with it off, the start seeds at 0.
    """

    charge_start: bool = True

    def seed_distance(self, grid: Grid, start: Coord) -> int:
        return grid.weight(start) if self.charge_start else 0

    def step_cost(self, grid: Grid, target: Coord) -> int:
        return grid.weight(target)

    def path_cost(self, grid: Grid, path: Sequence[Coord]) -> int:
        if not path:
            return 0
        total = self.seed_distance(grid, path[0])
        for coord in path[1:]:
            total += self.step_cost(grid, coord)
        return total


DEFAULT_COST_MODEL = CostModel()
