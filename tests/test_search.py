import math
from types import SimpleNamespace

import pytest

from gridpath import search
from gridpath.grid import Grid, load_world
from gridpath.pathfinding import SearchState, find_path, path_cost
from gridpath.search import find_path_bfs, find_path_dijkstra


def grid_with_walls(width, height, walls):
    rows = [[False] * width for _ in range(height)]
    for x, y in walls:
        rows[y][x] = True
    return Grid(rows)


def test_dijkstra_matches_astar_cost_on_default_world():
    grid, start, goal = load_world()
    astar = find_path(grid, start, goal)
    dijkstra = find_path_dijkstra(grid, start, goal)
    assert astar.found and dijkstra.found
    assert path_cost(dijkstra.path) == pytest.approx(path_cost(astar.path))
    # The heuristic prunes the search
    assert dijkstra.expanded >= astar.expanded


def test_dijkstra_open_grid():
    grid = grid_with_walls(4, 4, [])
    outcome = find_path_dijkstra(grid, (0, 0), (3, 3))
    assert outcome.path == [(0, 0), (1, 1), (2, 2), (3, 3)]
    assert path_cost(outcome.path) == pytest.approx(3 * math.sqrt(2))


def test_bfs_fewest_steps():
    grid = grid_with_walls(5, 5, [])
    outcome = find_path_bfs(grid, (0, 0), (4, 2))
    assert outcome.found
    assert outcome.path[0] == (0, 0)
    assert outcome.path[-1] == (4, 2)
    # Four moves is the minimum with diagonals allowed
    assert len(outcome.path) == 5


def test_bfs_respects_corner_rule():
    grid = grid_with_walls(3, 3, [(1, 0), (0, 1)])
    outcome = find_path_bfs(grid, (0, 0), (2, 2))
    assert not outcome.found
    assert outcome.state is SearchState.EXHAUSTED
    assert outcome.path == []


def test_bfs_invalid_endpoints():
    grid = grid_with_walls(3, 3, [(2, 2)])
    assert find_path_bfs(grid, (0, 0), (2, 2)).state is SearchState.INVALID
    assert find_path_bfs(grid, (0, 0), (3, 0)).path == []
    same = find_path_bfs(grid, (1, 1), (1, 1))
    assert same.found and same.path == [(1, 1)]


def test_bfs_timeout(monkeypatch):
    # Each clock reading advances ten seconds
    ticks = iter(range(0, 1000, 10))
    monkeypatch.setattr(
        search, "time", SimpleNamespace(perf_counter=lambda: next(ticks))
    )
    grid = grid_with_walls(10, 10, [])
    outcome = find_path_bfs(grid, (0, 0), (9, 9), timeout=1.0)
    assert not outcome.found
    assert outcome.state is SearchState.TIMEOUT
    assert outcome.path == []


def test_bfs_zero_timeout_disables_limit(monkeypatch):
    ticks = iter(range(0, 100000, 10))
    monkeypatch.setattr(
        search, "time", SimpleNamespace(perf_counter=lambda: next(ticks))
    )
    grid = grid_with_walls(10, 10, [])
    outcome = find_path_bfs(grid, (0, 0), (9, 9), timeout=0)
    assert outcome.found
    assert len(outcome.path) == 10
