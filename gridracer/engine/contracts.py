"""Core data contracts for grids, levels and trace records."""

from __future__ import annotations

from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

Coord = tuple[int, int]

MIN_GRID_SIZE = 4
MAX_GRID_SIZE = 10

# right, down, left, up
NEIGHBOR_OFFSETS: tuple[Coord, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


class CellType(str, Enum):
    ROAD = "road"
    BUILDING = "building"


class Cell(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    row: int
    col: int
    type: CellType
    weight: int = Field(ge=1)

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)

    @property
    def is_road(self) -> bool:
        return self.type == CellType.ROAD


class Grid(BaseModel):
    """Square grid of typed, weighted cells indexed by (row, col)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    size: int = Field(ge=1)
    cells: list[list[Cell]]

    @model_validator(mode="after")
    def validate_grid(self) -> "Grid":
        if len(self.cells) != self.size:
            raise ValueError("grid must have exactly size rows")
        for row_index, row in enumerate(self.cells):
            if len(row) != self.size:
                raise ValueError(f"row {row_index} must have exactly size cells")
            for col_index, cell in enumerate(row):
                if cell.coord != (row_index, col_index):
                    raise ValueError(
                        f"cell at ({row_index}, {col_index}) reports {cell.coord}"
                    )
        return self

    def in_bounds(self, coord: Coord) -> bool:
        row, col = coord
        return 0 <= row < self.size and 0 <= col < self.size

    def cell(self, coord: Coord) -> Cell:
        row, col = coord
        return self.cells[row][col]

    def weight(self, coord: Coord) -> int:
        return self.cell(coord).weight

    def is_passable(self, coord: Coord) -> bool:
        if not self.in_bounds(coord):
            return False
        return self.cell(coord).is_road

    def neighbors(self, coord: Coord) -> list[Coord]:
        row, col = coord
        candidates = [(row + dr, col + dc) for dr, dc in NEIGHBOR_OFFSETS]
        return [pos for pos in candidates if self.is_passable(pos)]

    def passable_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell.is_road)

    def coords(self) -> list[Coord]:
        return [(row, col) for row in range(self.size) for col in range(self.size)]


class LevelConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    size: int = Field(ge=MIN_GRID_SIZE, le=MAX_GRID_SIZE)
    building_density: float = Field(ge=0.0, lt=1.0)
    weight_range: tuple[int, int] = (1, 5)

    @field_validator("weight_range")
    @classmethod
    def validate_weight_range(cls, value: tuple[int, int]) -> tuple[int, int]:
        lo, hi = value
        if lo < 1:
            raise ValueError("weights must be positive")
        if lo > hi:
            raise ValueError("weight range must satisfy lo <= hi")
        return value


class TraceHeader(BaseModel):
    """Everything needed to redraw a logged solve."""

    model_config = ConfigDict(extra="forbid")

    grid: list[str]
    start: Coord
    end: Coord
    charge_start: bool = True
    level: int | None = None
    seed: int | None = None
    optimal_path: list[Coord] = Field(default_factory=list)
    distance: int | None = None


class TraceStepRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    index: int = Field(ge=0)
    settled: Coord
    distance: int
    candidates: list[Coord] = Field(default_factory=list)
    visited: list[list[bool]]
    distances: list[list[int | None]]
    best_path: list[Coord] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_tables(self) -> "TraceStepRecord":
        if len(self.visited) != len(self.distances):
            raise ValueError("visited and distances tables must match in size")
        return self
