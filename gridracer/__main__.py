"""Module entry point for `python -m gridracer`."""

from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from pydantic import ValidationError
from rich.logging import RichHandler

from gridracer.app import build_session, replay_run, run_game, run_solve
from gridracer.engine.grids import GridConfigError

DEFAULT_LOG_LEVEL = "WARNING"


def main() -> None:
    parser = argparse.ArgumentParser(description="Play GridRacer.")
    parser.add_argument(
        "--level",
        type=int,
        default=1,
        help="Level number to start on (1-based).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for grid generation.",
    )
    parser.add_argument(
        "--solve",
        action="store_true",
        help="Solve one generated grid, log its trace and print the result.",
    )
    parser.add_argument(
        "--replay",
        type=Path,
        default=None,
        help="Print every solver step of a saved run folder.",
    )
    parser.add_argument(
        "--run-dir",
        type=Path,
        default=None,
        help="Base directory for trace run folders.",
    )
    parser.add_argument(
        "--scores",
        type=Path,
        default=None,
        help="JSON file holding best scores per level.",
    )
    parser.add_argument(
        "--levels",
        type=Path,
        default=None,
        help="JSON file overriding the built-in level table.",
    )
    parser.add_argument(
        "--exclusive-start",
        action="store_true",
        help="Do not charge the start cell's weight in path costs.",
    )
    parser.add_argument(
        "--force-start-road",
        action="store_true",
        help="Force the start cell to Road when generating grids.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    args = parser.parse_args()
    _configure_logging(args.log_level)

    if args.replay is not None:
        try:
            replay_run(args.replay)
        except (FileNotFoundError, ValueError) as exc:
            raise SystemExit(str(exc)) from exc
        return

    try:
        session = build_session(
            level_number=args.level,
            levels_path=args.levels,
            scores_path=args.scores,
            seed=args.seed,
            charge_start=not args.exclusive_start,
            force_start_road=args.force_start_road,
        )
    except (GridConfigError, ValidationError, FileNotFoundError, ValueError) as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    if args.solve:
        created_run = run_solve(session, run_dir=args.run_dir, seed=args.seed)
        print(f"Trace saved to {created_run}")
        return

    run_game(session)


def _configure_logging(level: str | None) -> None:
    logging.basicConfig(
        level=_resolve_log_level(level or os.getenv("GRIDRACER_LOG_LEVEL")),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True)],
    )


def _resolve_log_level(name: str | None) -> int:
    level = logging.getLevelName((name or DEFAULT_LOG_LEVEL).upper())
    return level if isinstance(level, int) else logging.WARNING


if __name__ == "__main__":
    main()
