"""Pathfinding engine, validation, scoring and the draw state machine."""

from gridracer.engine.contracts import (
    Cell,
    CellType,
    Coord,
    Grid,
    LevelConfig,
    TraceHeader,
    TraceStepRecord,
)
from gridracer.engine.cost_model import DEFAULT_COST_MODEL, CostModel
from gridracer.engine.draw import DrawMachine, DrawState
from gridracer.engine.grids import (
    GridConfigError,
    default_endpoints,
    generate_grid,
    grid_from_lines,
    grid_to_lines,
)
from gridracer.engine.levels import DEFAULT_LEVELS, get_level, level_id, load_levels
from gridracer.engine.pathfinding import PathFinder, SolveResult, TraceStep, solve
from gridracer.engine.scoring import (
    SubmissionResult,
    best_cost,
    display_score,
    live_cost,
    record_high_score,
    submit_path,
)
from gridracer.engine.validation import can_append, try_append, validate

__all__ = [
    "Cell",
    "CellType",
    "Coord",
    "CostModel",
    "DEFAULT_COST_MODEL",
    "DEFAULT_LEVELS",
    "DrawMachine",
    "DrawState",
    "Grid",
    "GridConfigError",
    "LevelConfig",
    "PathFinder",
    "SolveResult",
    "SubmissionResult",
    "TraceHeader",
    "TraceStep",
    "TraceStepRecord",
    "best_cost",
    "can_append",
    "default_endpoints",
    "display_score",
    "generate_grid",
    "get_level",
    "grid_from_lines",
    "grid_to_lines",
    "level_id",
    "live_cost",
    "load_levels",
    "record_high_score",
    "solve",
    "submit_path",
    "try_append",
    "validate",
]
