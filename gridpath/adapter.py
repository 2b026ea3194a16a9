"""
Call boundary for the search engine: coerces the grid, times the call and
packages the result in the {path, found, executionTime} shape.
"""

from __future__ import annotations
import time
import logging
from typing import Any, Callable, Dict, List

from .config import BFS_TIMEOUT_MS
from .grid import Coord, Grid, as_grid
from .pathfinding import SearchOutcome, SearchState, find_path
from .search import find_path_bfs, find_path_dijkstra

logger = logging.getLogger(__name__)


class PathResult:
    """
    Outcome of one timed search call.
    Attributes:
        path: (x, y) cells from start to goal inclusive; empty if not found.
        found: Whether a path was found.
        execution_time: Wall-clock duration of the search in milliseconds.
        algorithm: Registry name of the algorithm that produced the result.
        state: Terminal SearchState reported by the engine.
        expanded: Number of nodes the engine expanded.
    """

    def __init__(
        self,
        path: List[Coord],
        found: bool,
        execution_time: float,
        algorithm: str = "astar",
        state: SearchState = SearchState.EXHAUSTED,
        expanded: int = 0,
    ) -> None:
        self.path = path
        self.found = found
        self.execution_time = execution_time
        self.algorithm = algorithm
        self.state = state
        self.expanded = expanded

    @classmethod
    def from_outcome(
        cls, outcome: SearchOutcome, execution_time: float, algorithm: str
    ) -> PathResult:
        return cls(
            list(outcome.path),
            outcome.found,
            execution_time,
            algorithm=algorithm,
            state=outcome.state,
            expanded=outcome.expanded,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable dict using the wire key names."""
        return {
            "path": [{"x": x, "y": y} for x, y in self.path],
            "found": self.found,
            "executionTime": self.execution_time,
        }

    def __repr__(self) -> str:
        return (
            f"<PathResult {self.algorithm} found={self.found} "
            f"length={len(self.path)} time={self.execution_time:.3f}ms>"
        )


def _bfs(grid: Grid, start: Coord, goal: Coord) -> SearchOutcome:
    return find_path_bfs(grid, start, goal, timeout=BFS_TIMEOUT_MS)


# Registry of available searches by name
ALGORITHMS: Dict[str, Callable[[Grid, Coord, Coord], SearchOutcome]] = {
    "astar": find_path,
    "dijkstra": find_path_dijkstra,
    "bfs": _bfs,
}


def run_algorithm(name: str, grid: Any, start: Coord, goal: Coord) -> PathResult:
    """
    Run the named search on grid and time it.
    grid: Grid, nested rows of booleans (True = blocked) or a 2D numpy array.
    Raises KeyError for an unknown algorithm name and GridError for a
    malformed grid.
    """
    try:
        search = ALGORITHMS[name]
    except KeyError:
        raise KeyError(
            f"Unknown algorithm {name!r}; choose from {sorted(ALGORITHMS)}"
        ) from None
    grid = as_grid(grid)
    started = time.perf_counter()
    outcome = search(grid, start, goal)
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    if outcome.state is SearchState.INVALID:
        logger.warning(
            "Rejected %s query on %r: start %s or goal %s is blocked or out of bounds",
            name,
            grid,
            start,
            goal,
        )
    result = PathResult.from_outcome(outcome, elapsed_ms, name)
    logger.debug("%r", result)
    return result


def find_path_astar(
    grid: Any, start_x: int, start_y: int, end_x: int, end_y: int
) -> PathResult:
    """Run A* from (start_x, start_y) to (end_x, end_y) and return a timed result."""
    return run_algorithm("astar", grid, (start_x, start_y), (end_x, end_y))


__all__ = ["ALGORITHMS", "PathResult", "find_path_astar", "run_algorithm"]
