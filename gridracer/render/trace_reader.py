"""Read trace logs back into headers and TraceSteps."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

from pydantic import ValidationError

from gridracer.engine.contracts import TraceHeader, TraceStepRecord
from gridracer.engine.pathfinding import TraceStep

logger = logging.getLogger(__name__)


def read_trace_header(path: Path) -> TraceHeader | None:
    for record in _iter_records(path, "header"):
        try:
            return TraceHeader.model_validate(record)
        except ValidationError:
            logger.warning("Skipping invalid trace header in %s", path)
    return None


def read_trace_steps(path: Path) -> Iterator[TraceStep]:
    for record in _iter_records(path, "step"):
        try:
            step = TraceStepRecord.model_validate(record)
        except ValidationError:
            logger.warning("Skipping invalid trace step in %s", path)
            continue
        yield TraceStep.from_record(step)


def load_trace(path: Path) -> tuple[TraceHeader | None, tuple[TraceStep, ...]]:
    return read_trace_header(path), tuple(read_trace_steps(path))


def _iter_records(path: Path, kind: str) -> Iterator[dict]:
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            record = _parse_record(line)
            if record and record.get("type") == kind:
                payload = record.get(kind)
                if isinstance(payload, dict):
                    yield payload


def _parse_record(line: str) -> dict | None:
    try:
        record = json.loads(line)
    except json.JSONDecodeError:
        return None
    return record if isinstance(record, dict) else None
