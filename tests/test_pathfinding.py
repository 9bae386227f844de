import math

import pytest

from gridracer.engine.contracts import Coord, Grid
from gridracer.engine.cost_model import CostModel
from gridracer.engine.grids import default_endpoints, generate_grid, grid_from_lines
from gridracer.engine.pathfinding import solve
from gridracer.engine.validation import validate

EXCLUSIVE = CostModel(charge_start=False)


def test_uniform_grid_shortest_path() -> None:
    grid = _uniform_grid()
    result = solve(grid, (0, 0), (3, 3))

    assert len(result.optimal_path) == 7
    assert result.distance == 7
    assert validate(result.optimal_path, (0, 0), (3, 3))


def test_uniform_grid_exclusive_start_cost() -> None:
    grid = _uniform_grid()
    result = solve(grid, (0, 0), (3, 3), cost_model=EXCLUSIVE)

    assert len(result.optimal_path) == 7
    assert result.distance == 6
    assert result.trace[0].distance == 0


def test_settlement_order_breaks_ties_row_major() -> None:
    grid = _uniform_grid()
    result = solve(grid, (0, 0), (3, 3))

    settled = [step.settled for step in result.trace[:6]]
    assert settled == [(0, 0), (0, 1), (1, 0), (0, 2), (1, 1), (2, 0)]
    assert result.optimal_path == (
        (0, 0),
        (0, 1),
        (0, 2),
        (0, 3),
        (1, 3),
        (2, 3),
        (3, 3),
    )


def test_weights_steer_the_route() -> None:
    grid = grid_from_lines(
        [
            "1 9 9 9",
            "1 9 9 9",
            "1 9 9 9",
            "1 1 1 1",
        ]
    )
    result = solve(grid, (0, 0), (3, 3))

    assert result.optimal_path == (
        (0, 0),
        (1, 0),
        (2, 0),
        (3, 0),
        (3, 1),
        (3, 2),
        (3, 3),
    )
    assert result.distance == 7


def test_buildings_are_never_settled() -> None:
    grid = grid_from_lines(
        [
            "1 # 1 1",
            "1 # 1 1",
            "1 # 1 1",
            "1 1 1 1",
        ]
    )
    result = solve(grid, (0, 0), (0, 2))

    settled = {step.settled for step in result.trace}
    assert not settled & {(0, 1), (1, 1), (2, 1)}
    assert result.distance == 9


def test_trace_steps_record_candidates_and_best_path() -> None:
    grid = _uniform_grid()
    result = solve(grid, (0, 0), (3, 3))
    first = result.trace[0]

    assert first.index == 0
    assert first.settled == (0, 0)
    assert first.candidates == ((0, 1), (1, 0))
    assert first.distance_at((0, 1)) == 2
    assert first.distance_at((3, 3)) == math.inf
    assert sorted(first.frontier()) == [(0, 1), (1, 0)]
    assert first.best_path == ()
    assert result.trace[-1].best_path == result.optimal_path


def test_trace_snapshots_do_not_change_after_later_steps() -> None:
    grid = _uniform_grid()
    result = solve(grid, (0, 0), (3, 3))
    first = result.trace[0]

    assert first.settled_count() == 1
    assert not first.is_visited((0, 1))
    assert result.trace[1].is_visited((0, 1))
    assert [step.index for step in result.trace] == list(range(len(result.trace)))


def test_unreachable_end_returns_empty_path() -> None:
    grid = grid_from_lines(
        [
            "1 # 1 1",
            "# 1 1 1",
            "1 1 1 1",
            "1 1 1 1",
        ]
    )
    result = solve(grid, (0, 0), (3, 3))

    assert result.optimal_path == ()
    assert result.distance is None
    assert not result.reachable
    assert len(result.trace) == 1
    assert all(step.settled != (3, 3) for step in result.trace)


def test_building_start_yields_empty_trace() -> None:
    grid = generate_grid(4, 1.0, (1, 5), seed=0)
    start, end = default_endpoints(4)
    result = solve(grid, start, end)

    assert result.optimal_path == ()
    assert result.trace == ()


def test_start_equals_end() -> None:
    grid = _uniform_grid()
    result = solve(grid, (1, 1), (1, 1))

    assert result.optimal_path == ((1, 1),)
    assert result.distance == 1
    assert len(result.trace) == 1


def test_out_of_bounds_endpoints_are_unreachable() -> None:
    grid = _uniform_grid()
    assert solve(grid, (0, 0), (4, 4)).optimal_path == ()
    assert solve(grid, (-1, 0), (3, 3)).trace == ()


@pytest.mark.parametrize("seed", range(30))
def test_solve_is_deterministic(seed: int) -> None:
    grid = generate_grid(8, 0.3, (1, 9), seed=seed)
    start, end = default_endpoints(8)
    assert solve(grid, start, end) == solve(grid, start, end)


@pytest.mark.parametrize("charge_start", [True, False])
@pytest.mark.parametrize("seed", range(30))
def test_solve_matches_relaxation_oracle(seed: int, charge_start: bool) -> None:
    size = 4 + seed % 5
    grid = generate_grid(
        size, 0.3, (1, 9), seed=seed, force_start_road=seed % 2 == 0
    )
    start, end = default_endpoints(size)
    model = CostModel(charge_start=charge_start)
    oracle = _oracle_distances(grid, start, model)

    result = solve(grid, start, end, cost_model=model)

    if end not in oracle:
        assert result.optimal_path == ()
        assert len(result.trace) == len(oracle)
        return

    assert result.distance == oracle[end]
    assert model.path_cost(grid, result.optimal_path) == oracle[end]
    for length in range(1, len(result.optimal_path) + 1):
        prefix = result.optimal_path[:length]
        assert model.path_cost(grid, prefix) == oracle[prefix[-1]]


@pytest.mark.parametrize("seed", range(30))
def test_trace_stops_at_end_settlement(seed: int) -> None:
    grid = generate_grid(7, 0.25, (1, 5), seed=seed, force_start_road=True)
    start, end = default_endpoints(7)
    result = solve(grid, start, end)

    assert len(result.trace) == result.trace[-1].settled_count()
    if result.reachable:
        assert result.trace[-1].settled == end
        assert sum(step.settled == end for step in result.trace) == 1
    else:
        reachable = _oracle_distances(grid, start, CostModel())
        assert len(result.trace) == len(reachable)


@pytest.mark.parametrize("seed", range(10))
def test_settled_distances_never_decrease(seed: int) -> None:
    grid = generate_grid(9, 0.2, (1, 9), seed=seed, force_start_road=True)
    start, end = default_endpoints(9)
    trace = solve(grid, start, end).trace

    distances = [step.distance for step in trace]
    assert distances == sorted(distances)
    for step in trace:
        assert step.distance_at(step.settled) == step.distance


def _uniform_grid(size: int = 4) -> Grid:
    return grid_from_lines([" ".join(["1"] * size)] * size)


def _oracle_distances(grid: Grid, start: Coord, model: CostModel) -> dict[Coord, int]:
    if not grid.is_passable(start):
        return {}
    distances = {start: model.seed_distance(grid, start)}
    changed = True
    while changed:
        changed = False
        for coord, value in list(distances.items()):
            for neighbor in grid.neighbors(coord):
                candidate = value + grid.weight(neighbor)
                if candidate < distances.get(neighbor, math.inf):
                    distances[neighbor] = candidate
                    changed = True
    return distances
