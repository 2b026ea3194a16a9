import json
import logging

import numpy as np
import pytest

from gridpath.adapter import ALGORITHMS, PathResult, find_path_astar, run_algorithm
from gridpath.grid import Grid, GridError
from gridpath.pathfinding import SearchState


def test_find_path_astar_nested_rows():
    grid = [[False] * 5 for _ in range(5)]
    result = find_path_astar(grid, 0, 0, 4, 4)
    assert isinstance(result, PathResult)
    assert result.found
    assert result.path == [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)]
    assert result.execution_time >= 0.0
    assert result.algorithm == "astar"


def test_find_path_astar_numpy_grid():
    cells = np.zeros((3, 3), dtype=bool)
    # Array is indexed [y, x]: this blocks cell (1, 0)
    cells[0, 1] = True
    result = find_path_astar(cells, 0, 0, 1, 1)
    assert result.path == [(0, 0), (0, 1), (1, 1)]


def test_to_dict_uses_wire_shape():
    result = find_path_astar(Grid([[0, 0]]), 0, 0, 1, 0)
    data = result.to_dict()
    assert data["path"] == [{"x": 0, "y": 0}, {"x": 1, "y": 0}]
    assert data["found"] is True
    assert data["executionTime"] == result.execution_time
    # Must survive a JSON round trip unchanged
    assert json.loads(json.dumps(data)) == data


def test_not_found_result_is_empty():
    result = find_path_astar([[False, True], [True, False]], 0, 0, 1, 1)
    assert not result.found
    assert result.to_dict()["path"] == []
    assert result.state is SearchState.EXHAUSTED


def test_invalid_query_logs_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="gridpath.adapter"):
        result = find_path_astar([[False, True]], 0, 0, 1, 0)
    assert not result.found
    assert result.state is SearchState.INVALID
    assert "Rejected astar query" in caplog.text


def test_malformed_grid_raises():
    with pytest.raises(GridError):
        find_path_astar([[False, False], [False]], 0, 0, 1, 0)


@pytest.mark.parametrize("name", sorted(ALGORITHMS))
def test_run_algorithm_registry(name):
    grid = Grid([[0, 0, 0], [0, 1, 0], [0, 0, 0]])
    result = run_algorithm(name, grid, (0, 0), (2, 2))
    assert result.found
    assert result.algorithm == name
    assert result.path[0] == (0, 0) and result.path[-1] == (2, 2)
    assert result.expanded > 0


def test_run_algorithm_unknown_name():
    with pytest.raises(KeyError) as excinfo:
        run_algorithm("greedy", [[False]], (0, 0), (0, 0))
    assert "astar" in str(excinfo.value)


def test_result_repr():
    result = PathResult([(0, 0)], True, 1.23456, algorithm="bfs")
    r = repr(result)
    assert "bfs" in r and "found=True" in r and "1.235ms" in r
