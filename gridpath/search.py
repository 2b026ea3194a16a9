"""
Comparison searches sharing the A* grid and movement rules:
Dijkstra's uniform-cost search and breadth-first search.
"""

from __future__ import annotations
import time
import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Set

from .grid import Coord, Grid
from .pathfinding import (
    SearchOutcome,
    SearchState,
    check_endpoints,
    find_path,
    neighbors,
)

logger = logging.getLogger(__name__)


def find_path_dijkstra(grid: Grid, start: Coord, goal: Coord) -> SearchOutcome:
    """
    Uniform-cost search: A* with a zero heuristic.
    Returns a path of the same minimal cost as A*, usually after
    expanding more nodes.
    """
    return find_path(grid, start, goal, weight=0.0)


def _walk_back(parents: Dict[Coord, Optional[Coord]], goal: Coord) -> List[Coord]:
    path = [goal]
    parent = parents[goal]
    while parent is not None:
        path.append(parent)
        parent = parents[parent]
    path.reverse()
    return path


def find_path_bfs(
    grid: Grid,
    start: Coord,
    goal: Coord,
    timeout: float = 0.0,
) -> SearchOutcome:
    """
    Breadth-first search over the 8 grid moves.
    Cells are marked visited when queued, so the returned path has the fewest
    steps, which is not necessarily the cheapest once diagonal costs count.
    timeout: budget in milliseconds; 0 disables it.
    """
    start = (int(start[0]), int(start[1]))
    goal = (int(goal[0]), int(goal[1]))

    early = check_endpoints(grid, start, goal)
    if early is not None:
        return early

    started = time.perf_counter()
    parents: Dict[Coord, Optional[Coord]] = {start: None}
    queue: Deque[Coord] = deque([start])
    # Every queued cell is already visited
    visited: Set[Coord] = {start}
    expanded = 0

    while queue:
        if timeout and (time.perf_counter() - started) * 1000.0 > timeout:
            logger.warning(
                "BFS %s -> %s timed out after %d expansions", start, goal, expanded
            )
            return SearchOutcome([], SearchState.TIMEOUT, expanded)
        current = queue.popleft()
        expanded += 1
        if current == goal:
            return SearchOutcome(_walk_back(parents, goal), SearchState.FOUND, expanded)
        for nx, ny, _ in neighbors(grid, current[0], current[1], visited):
            parents[(nx, ny)] = current
            visited.add((nx, ny))
            queue.append((nx, ny))

    return SearchOutcome([], SearchState.EXHAUSTED, expanded)


__all__ = ["find_path_bfs", "find_path_dijkstra"]
