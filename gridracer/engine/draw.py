"""Two-state machine for drawing a path with undo."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from gridracer.engine.contracts import Coord, Grid
from gridracer.engine.validation import try_append, validate


class DrawState(str, Enum):
    IDLE = "idle"
    SELECTING = "selecting"


@dataclass
class DrawMachine:
    grid: Grid
    start: Coord
    end: Coord
    path: tuple[Coord, ...] = ()
    history: list[tuple[Coord, ...]] = field(default_factory=list)
    state: DrawState = DrawState.IDLE

    @property
    def is_selecting(self) -> bool:
        return self.state == DrawState.SELECTING

    @property
    def is_complete(self) -> bool:
        return validate(self.path, self.start, self.end)

    def begin_draw(self, cell: Coord) -> None:
        if self.state != DrawState.IDLE:
            return
        self.history.append(self.path)
        self.state = DrawState.SELECTING
        self._append(cell)

    def enter_cell(self, cell: Coord) -> None:
        if self.state != DrawState.SELECTING:
            return
        self._append(cell)

    def end_draw(self) -> None:
        self.state = DrawState.IDLE

    def undo(self) -> bool:
        if not self.history:
            return False
        self.path = self.history.pop()
        return True

    def clear(self) -> None:
        if not self.path:
            return
        self.history.append(self.path)
        self.path = ()

    def _append(self, cell: Coord) -> None:
        self.path = try_append(self.path, cell, self.grid, self.start, self.end)
