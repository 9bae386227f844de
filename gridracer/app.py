"""Application entry points: game sessions, logged solves and replays."""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass, field
from pathlib import Path

from rich.console import Console

from gridracer.db.score_store import JsonScoreStore, ScoreStore
from gridracer.db.trace_log import TRACE_LOG_NAME, create_run_folder, write_solve
from gridracer.engine.contracts import Coord, Grid, LevelConfig, TraceHeader
from gridracer.engine.cost_model import CostModel
from gridracer.engine.draw import DrawMachine
from gridracer.engine.grids import (
    default_endpoints,
    generate_grid,
    grid_from_lines,
    grid_to_lines,
)
from gridracer.engine.levels import get_level, level_id, load_levels
from gridracer.engine.pathfinding import SolveResult, solve
from gridracer.engine.scoring import SubmissionResult, live_cost, submit_path
from gridracer.render.trace_reader import load_trace
from gridracer.render.viewer import render_result, render_trace_step

logger = logging.getLogger(__name__)

DEFAULT_SCORES_PATH = Path("data/scores.json")
DEFAULT_RUN_DIR = Path("runs")


@dataclass
class GameSession:
    """One player's session: current level, grid, solve and drawing."""

    levels: tuple[LevelConfig, ...]
    store: ScoreStore
    level_number: int = 1
    cost_model: CostModel = field(default_factory=CostModel)
    force_start_road: bool = False
    rng: random.Random = field(default_factory=random.Random)
    show_best: bool = False
    last_submission: SubmissionResult | None = None
    grid: Grid = field(init=False)
    start: Coord = field(init=False)
    end: Coord = field(init=False)
    result: SolveResult = field(init=False)
    draw: DrawMachine = field(init=False)

    def __post_init__(self) -> None:
        self.new_grid()

    @property
    def level(self) -> LevelConfig:
        return get_level(self.levels, self.level_number)

    @property
    def level_id(self) -> str:
        return level_id(self.level_number)

    @property
    def live_cost(self) -> int:
        return live_cost(self.draw.path, self.grid, cost_model=self.cost_model)

    @property
    def best_cost(self) -> int | None:
        if not self.result.reachable:
            return None
        return live_cost(
            self.result.optimal_path, self.grid, cost_model=self.cost_model
        )

    @property
    def high_score(self) -> int | None:
        return self.store.get(self.level_id)

    def new_grid(self) -> None:
        level = self.level
        grid = generate_grid(
            level.size,
            level.building_density,
            level.weight_range,
            rng=self.rng,
            force_start_road=self.force_start_road,
        )
        self.load_grid(grid)

    def change_level(self, delta: int) -> None:
        number = self.level_number + delta
        if not 1 <= number <= len(self.levels):
            return
        self.level_number = number
        self.new_grid()

    def toggle_best(self) -> None:
        self.show_best = not self.show_best

    def submit(self) -> SubmissionResult | None:
        result = submit_path(
            self.draw.path,
            self.grid,
            self.start,
            self.end,
            level_id=self.level_id,
            store=self.store,
            cost_model=self.cost_model,
            optimal_cost=self.best_cost,
        )
        if result is not None:
            self.last_submission = result
        return result

    def trace_header(self, *, seed: int | None = None) -> TraceHeader:
        return TraceHeader(
            grid=grid_to_lines(self.grid),
            start=self.start,
            end=self.end,
            charge_start=self.cost_model.charge_start,
            level=self.level_number,
            seed=seed,
            optimal_path=list(self.result.optimal_path),
            distance=self.result.distance,
        )

    def load_grid(self, grid: Grid) -> None:
        self.grid = grid
        self.start, self.end = default_endpoints(grid.size)
        self.result = solve(
            grid, self.start, self.end, cost_model=self.cost_model
        )
        self.draw = DrawMachine(grid=grid, start=self.start, end=self.end)
        self.show_best = False
        self.last_submission = None
        logger.debug(
            "Level %d grid ready: best cost %s", self.level_number, self.best_cost
        )


def build_session(
    *,
    level_number: int = 1,
    levels_path: Path | None = None,
    scores_path: Path | None = None,
    seed: int | None = None,
    charge_start: bool = True,
    force_start_road: bool = False,
    store: ScoreStore | None = None,
) -> GameSession:
    levels = load_levels(_resolve_path(levels_path, "GRIDRACER_LEVELS", None))
    if store is None:
        store = JsonScoreStore(
            _resolve_path(scores_path, "GRIDRACER_SCORES", DEFAULT_SCORES_PATH)
        )
    return GameSession(
        levels=levels,
        store=store,
        level_number=level_number,
        cost_model=CostModel(charge_start=charge_start),
        force_start_road=force_start_road,
        rng=random.Random(seed),
    )


def run_solve(
    session: GameSession,
    *,
    run_dir: Path | None = None,
    seed: int | None = None,
    console: Console | None = None,
) -> Path:
    """Log the session's solve to a new run folder and print the result."""
    base_dir = _resolve_path(run_dir, "GRIDRACER_RUN_DIR", DEFAULT_RUN_DIR)
    created_run, log_path = create_run_folder(base_dir)
    write_solve(log_path, session.trace_header(seed=seed), session.result)
    logger.info("Wrote %d trace steps to %s", len(session.result.trace), log_path)
    console = console or Console()
    console.print(
        render_result(
            session.grid,
            session.result,
            start=session.start,
            end=session.end,
            level=session.level_number,
            high_score=session.high_score,
        )
    )
    return created_run


def replay_run(run_folder: Path, *, console: Console | None = None) -> int:
    """Print every step of a logged trace; return the number of steps."""
    header, steps = load_trace(run_folder / TRACE_LOG_NAME)
    if header is None:
        raise ValueError(f"No trace header found in {run_folder}.")
    grid = grid_from_lines(header.grid)
    console = console or Console()
    for step in steps:
        console.print(
            render_trace_step(
                grid, step, start=header.start, end=header.end, total=len(steps)
            )
        )
    replayed = SolveResult(
        optimal_path=tuple(header.optimal_path),
        trace=steps,
        distance=header.distance,
    )
    console.print(
        render_result(
            grid, replayed, start=header.start, end=header.end, level=header.level
        )
    )
    return len(steps)


def run_game(session: GameSession) -> None:
    from gridracer.render.game_screen import run_game_screen

    run_game_screen(session)


def _resolve_path(value: Path | None, env_var: str, default: Path | None) -> Path | None:
    if value is not None:
        return value
    env_value = os.getenv(env_var)
    if env_value:
        return Path(env_value)
    return default
