"""Rich renderables for solve results and individual trace steps."""

from __future__ import annotations

from rich.columns import Columns
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gridracer.engine.contracts import Coord, Grid
from gridracer.engine.pathfinding import SolveResult, TraceStep
from gridracer.engine.scoring import display_score
from gridracer.render.grid_view import render_grid_lines


def render_trace_step(
    grid: Grid,
    step: TraceStep,
    *,
    start: Coord,
    end: Coord,
    total: int | None = None,
) -> RenderableType:
    header = Text(_step_title(step, total), style="bold")
    lines = render_grid_lines(grid, start=start, end=end, step=step)
    board = Panel(Group(*lines), title="Grid", expand=False)
    return Columns([Group(header, board), _render_step_table(step)])


def render_result(
    grid: Grid,
    result: SolveResult,
    *,
    start: Coord,
    end: Coord,
    level: int | None = None,
    high_score: int | None = None,
) -> RenderableType:
    lines = render_grid_lines(
        grid,
        start=start,
        end=end,
        best_path=result.optimal_path,
        show_best=True,
    )
    title = f"Level {level}" if level is not None else "Grid"
    board = Panel(Group(*lines), title=title, expand=False)

    summary = Table(show_header=False, title="Best Path")
    summary.add_column("Field")
    summary.add_column("Value")
    if result.reachable and result.distance is not None:
        summary.add_row("Cost", str(result.distance))
        summary.add_row("Score", str(display_score(result.distance)))
        summary.add_row("Cells", str(len(result.optimal_path)))
    else:
        summary.add_row("Cost", "Unreachable")
    summary.add_row("Settled", str(len(result.trace)))
    summary.add_row("High score", "-" if high_score is None else str(high_score))
    return Columns([board, summary])


def _render_step_table(step: TraceStep) -> RenderableType:
    table = Table(show_header=False, title="Solver State")
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Settled", _format_coord(step.settled))
    table.add_row("Distance", str(step.distance))
    table.add_row(
        "Candidates",
        ", ".join(_format_coord(coord) for coord in step.candidates) or "None",
    )
    table.add_row("Frontier", str(len(step.frontier())))
    table.add_row("Visited", str(step.settled_count()))
    table.add_row(
        "Best so far",
        f"{len(step.best_path)} cells" if step.best_path else "None",
    )
    return table


def _step_title(step: TraceStep, total: int | None) -> str:
    if total is None:
        return f"Step {step.index + 1}"
    return f"Step {step.index + 1}/{total}"


def _format_coord(coord: Coord) -> str:
    return f"({coord[0]}, {coord[1]})"
