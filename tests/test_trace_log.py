import json
from pathlib import Path

from gridracer.db.trace_log import (
    TRACE_LOG_NAME,
    append_trace_step,
    create_run_folder,
    write_header,
    write_solve,
)
from gridracer.engine.contracts import TraceHeader
from gridracer.engine.grids import grid_from_lines, grid_to_lines
from gridracer.engine.pathfinding import solve
from gridracer.render.trace_reader import load_trace, read_trace_header, read_trace_steps

LINES = [
    "1 # 2 1",
    "1 3 1 1",
    "# 1 # 1",
    "1 1 1 1",
]


def test_trace_log_header_and_steps(tmp_path: Path) -> None:
    run_dir, log_path = create_run_folder(tmp_path, run_id="level-1-seed-4")
    grid = grid_from_lines(LINES)
    result = solve(grid, (0, 0), (3, 3))
    write_header(log_path, _header(result))
    append_trace_step(log_path, result.trace[0])

    with log_path.open("r", encoding="utf-8") as handle:
        records = [json.loads(line) for line in handle]

    assert log_path.name == TRACE_LOG_NAME
    assert run_dir.name == "level-1-seed-4"
    assert records[0]["type"] == "header"
    assert records[0]["header"]["grid"] == LINES
    assert records[1]["type"] == "step"
    assert records[1]["step"]["settled"] == [0, 0]
    assert records[1]["step"]["distances"][0][1] is None


def test_trace_round_trips_through_reader(tmp_path: Path) -> None:
    _, log_path = create_run_folder(tmp_path, run_id="level-1-seed-5")
    grid = grid_from_lines(LINES)
    result = solve(grid, (0, 0), (3, 3))
    write_solve(log_path, _header(result), result)

    header, steps = load_trace(log_path)

    assert header is not None
    assert header.start == (0, 0)
    assert header.distance == result.distance
    assert tuple(header.optimal_path) == result.optimal_path
    assert steps == result.trace


def test_reader_skips_malformed_lines(tmp_path: Path) -> None:
    log_path = tmp_path / TRACE_LOG_NAME
    grid = grid_from_lines(LINES)
    result = solve(grid, (0, 0), (3, 3))
    with log_path.open("w", encoding="utf-8") as handle:
        handle.write("not json\n")
        handle.write('{"type": "note"}\n')
        handle.write("[1, 2]\n")
    append_trace_step(log_path, result.trace[0])

    assert read_trace_header(log_path) is None
    steps = list(read_trace_steps(log_path))
    assert steps == [result.trace[0]]


def _header(result) -> TraceHeader:
    return TraceHeader(
        grid=grid_to_lines(grid_from_lines(LINES)),
        start=(0, 0),
        end=(3, 3),
        optimal_path=list(result.optimal_path),
        distance=result.distance,
    )


def test_reader_skips_schema_invalid_records(tmp_path: Path) -> None:
    log_path = tmp_path / TRACE_LOG_NAME
    grid = grid_from_lines(LINES)
    result = solve(grid, (0, 0), (3, 3))
    with log_path.open("w", encoding="utf-8") as handle:
        handle.write('{"type": "header", "header": {"start": [0, 0]}}\n')
        handle.write('{"type": "step", "step": {"index": 0}}\n')
    write_solve(log_path, _header(result), result)

    header, steps = load_trace(log_path)

    assert header is not None
    assert header.end == (3, 3)
    assert steps == result.trace


def test_run_folder_ids_never_clash(tmp_path: Path) -> None:
    first, _ = create_run_folder(tmp_path, run_id="level-2")
    second, second_log = create_run_folder(tmp_path, run_id="level-2")

    assert first.name == "level-2"
    assert second.name == "level-2-2"
    assert second_log.parent == second
    assert not second_log.exists()
