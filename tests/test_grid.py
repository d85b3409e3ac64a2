import pytest

from crucible_path.errors import MalformedGrid, OutOfBounds
from crucible_path.grid import CostGrid
from crucible_path.models import Direction


def test_grid_reports_dimensions_and_costs() -> None:
    grid = CostGrid.from_rows([[1, 2, 3], [4, 5, 6]])

    assert grid.height == 2
    assert grid.width == 3
    assert grid.cost_at((1, 2)) == 6
    assert grid.corner() == (1, 2)


def test_grid_rejects_ragged_rows() -> None:
    with pytest.raises(MalformedGrid):
        CostGrid.from_rows([[1, 2, 3], [4, 5]])


@pytest.mark.parametrize("rows", [[], [[]]])
def test_grid_rejects_empty_input(rows) -> None:
    with pytest.raises(MalformedGrid):
        CostGrid.from_rows(rows)


def test_grid_rejects_negative_costs() -> None:
    with pytest.raises(MalformedGrid):
        CostGrid.from_rows([[1, -1]])


def test_cost_at_outside_grid_raises_out_of_bounds() -> None:
    grid = CostGrid.from_rows([[1, 2], [3, 4]])

    with pytest.raises(OutOfBounds):
        grid.cost_at((2, 0))
    with pytest.raises(IndexError):
        grid.cost_at((0, -1))


def test_grid_is_not_affected_by_later_mutation_of_source_rows() -> None:
    rows = [[1, 2], [3, 4]]
    grid = CostGrid.from_rows(rows)
    rows[0][0] = 9

    assert grid.cost_at((0, 0)) == 1


def test_step_and_neighbors_stay_inside_grid() -> None:
    grid = CostGrid.from_rows([[1, 1, 1], [1, 1, 1]])

    assert grid.step((0, 0), Direction.NORTH) is None
    assert grid.step((0, 0), Direction.WEST) is None
    assert grid.step((0, 0), Direction.SOUTH) == (1, 0)
    assert grid.step((0, 0), Direction.EAST) == (0, 1)
    assert sorted(grid.neighbors4((0, 0))) == [(0, 1), (1, 0)]
    assert len(grid.neighbors4((0, 1))) == 3
