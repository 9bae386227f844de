"""Trace logging helpers (JSONL)."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from gridracer.engine.contracts import TraceHeader
from gridracer.engine.pathfinding import SolveResult, TraceStep

SCHEMA_VERSION = 1
TRACE_LOG_NAME = "trace.jsonl"


def create_run_folder(
    base_dir: Path, *, run_id: str | None = None
) -> tuple[Path, Path]:
    """Make a fresh run folder; a clashing id gets a numeric suffix."""
    if run_id is None:
        run_id = datetime.now(timezone.utc).strftime("solve-%Y%m%d-%H%M%S")
    run_dir = base_dir / run_id
    suffix = 2
    while run_dir.exists():
        run_dir = base_dir / f"{run_id}-{suffix}"
        suffix += 1
    run_dir.mkdir(parents=True)
    return run_dir, run_dir / TRACE_LOG_NAME


def header_record(header: TraceHeader) -> dict[str, Any]:
    return {
        "type": "header",
        "schema_version": SCHEMA_VERSION,
        "header": header.model_dump(mode="json"),
    }


def step_record(step: TraceStep) -> dict[str, Any]:
    return {
        "type": "step",
        "schema_version": SCHEMA_VERSION,
        "step": step.to_record().model_dump(mode="json"),
    }


def write_header(path: Path, header: TraceHeader) -> None:
    _write_lines(path, [header_record(header)])


def append_trace_step(path: Path, step: TraceStep) -> None:
    _write_lines(path, [step_record(step)])


def write_solve(path: Path, header: TraceHeader, result: SolveResult) -> None:
    """Write a whole solve (header, then every step) in one pass."""
    records = [header_record(header)]
    records.extend(step_record(step) for step in result.trace)
    _write_lines(path, records)


def _write_lines(path: Path, records: Iterable[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.writelines(f"{json.dumps(record)}\n" for record in records)
