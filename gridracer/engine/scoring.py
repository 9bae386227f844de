"""Path costs, submissions and best-score records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from gridracer.engine.contracts import Coord, Grid
from gridracer.engine.cost_model import DEFAULT_COST_MODEL, CostModel
from gridracer.engine.pathfinding import solve
from gridracer.engine.validation import validate

if TYPE_CHECKING:
    from gridracer.db.score_store import ScoreStore

logger = logging.getLogger(__name__)

SCORE_CEILING = 100


@dataclass(frozen=True)
class SubmissionResult:
    cost: int
    best_cost: int | None
    is_optimal: bool
    new_record: bool
    high_score: int | None

    @property
    def score(self) -> int:
        return display_score(self.cost)


def live_cost(
    path: Sequence[Coord], grid: Grid, *, cost_model: CostModel | None = None
) -> int:
    return (cost_model or DEFAULT_COST_MODEL).path_cost(grid, path)


def best_cost(
    grid: Grid,
    start: Coord,
    end: Coord,
    *,
    cost_model: CostModel | None = None,
) -> int | None:
    result = solve(grid, start, end, cost_model=cost_model)
    if not result.reachable:
        return None
    return live_cost(result.optimal_path, grid, cost_model=cost_model)


def display_score(cost: int) -> int:
    """On-screen score: lower costs score higher."""
    return SCORE_CEILING - cost


def record_high_score(store: ScoreStore, level_id: str, cost: int) -> bool:
    current = store.get(level_id)
    if current is not None and cost >= current:
        return False
    store.set(level_id, cost)
    logger.info("New best for level %s: %d (was %s)", level_id, cost, current)
    return True


def submit_path(
    path: Sequence[Coord],
    grid: Grid,
    start: Coord,
    end: Coord,
    *,
    level_id: str,
    store: ScoreStore,
    cost_model: CostModel | None = None,
    optimal_cost: int | None = None,
) -> SubmissionResult | None:
    """Score a finished path; invalid paths return None and touch nothing."""
    if not validate(path, start, end):
        return None
    cost = live_cost(path, grid, cost_model=cost_model)
    if optimal_cost is None:
        optimal_cost = best_cost(grid, start, end, cost_model=cost_model)
    new_record = record_high_score(store, level_id, cost)
    return SubmissionResult(
        cost=cost,
        best_cost=optimal_cost,
        is_optimal=optimal_cost is not None and cost == optimal_cost,
        new_record=new_record,
        high_score=store.get(level_id),
    )
