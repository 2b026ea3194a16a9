"""
Pathfinding utilities: implements 8-directional grid A* search
with corner-cutting prevention.
"""

from __future__ import annotations
import enum
import logging
from typing import Dict, List, Optional, Set, Tuple

from .config import CARDINAL_COST, DIAGONAL_COST
from .grid import Coord, Grid

logger = logging.getLogger(__name__)

# (dx, dy, cost) moves; cardinals first, then diagonals
DIRECTIONS: Tuple[Tuple[int, int, float], ...] = (
    (0, 1, CARDINAL_COST),
    (1, 0, CARDINAL_COST),
    (0, -1, CARDINAL_COST),
    (-1, 0, CARDINAL_COST),
    (1, 1, DIAGONAL_COST),
    (1, -1, DIAGONAL_COST),
    (-1, 1, DIAGONAL_COST),
    (-1, -1, DIAGONAL_COST),
)


class SearchState(enum.Enum):
    """Lifecycle of a single search call."""

    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"
    # Start or goal rejected before the search started
    INVALID = "invalid"
    # Search abandoned after its time budget ran out
    TIMEOUT = "timeout"


class SearchNode:
    """Search state of one grid cell."""

    def __init__(
        self,
        x: int,
        y: int,
        g: float = 0.0,
        h: float = 0.0,
        parent: Optional[Coord] = None,
    ) -> None:
        self.x = x
        self.y = y
        # Best known cost from the start cell
        self.g = g
        # Heuristic estimate to the goal, fixed at discovery
        self.h = h
        # Coordinate key of the predecessor, resolved through the node table
        self.parent = parent
        self.f = g + h

    @property
    def key(self) -> Coord:
        return (self.x, self.y)

    def relax(self, g: float, parent: Coord) -> None:
        """Record a cheaper path to this node and refresh its priority."""
        self.g = g
        self.parent = parent
        self.f = self.g + self.h

    def is_goal(self, end_x: int, end_y: int) -> bool:
        return self.x == end_x and self.y == end_y

    def __repr__(self) -> str:
        return (
            f"<SearchNode ({self.x}, {self.y}) g={self.g:.3f} "
            f"h={self.h:.3f} f={self.f:.3f} parent={self.parent}>"
        )


class SearchOutcome:
    """
    Result of a search call.
    Attributes:
        path: (x, y) cells from start to goal inclusive; empty if not found.
        found: Whether the goal was reached.
        state: Terminal SearchState of the call.
        expanded: Number of nodes popped from the frontier.
    """

    def __init__(
        self,
        path: List[Coord],
        state: SearchState,
        expanded: int = 0,
    ) -> None:
        self.path = path
        self.state = state
        self.found = state is SearchState.FOUND
        self.expanded = expanded

    def __repr__(self) -> str:
        return (
            f"<SearchOutcome state={self.state.value} "
            f"length={len(self.path)} expanded={self.expanded}>"
        )


def heuristic(x: int, y: int, end_x: int, end_y: int) -> float:
    """Chebyshev distance heuristic for 8-directional movement."""
    return float(max(abs(x - end_x), abs(y - end_y)))


def is_diagonal_blocked(grid: Grid, x: int, y: int, dx: int, dy: int) -> bool:
    """
    Return True if a diagonal move from (x, y) by (dx, dy) would cut a corner,
    i.e. either orthogonal cell next to the current cell along the move is
    blocked. Cardinal moves are never blocked by this rule.
    The caller guarantees that (x + dx, y + dy) is inside the grid.
    """
    if dx == 0 or dy == 0:
        return False
    return grid.is_blocked(x, y + dy) or grid.is_blocked(x + dx, y)


def neighbors(grid: Grid, x: int, y: int, closed: Set[Coord]):
    """
    Yield (nx, ny, cost) for every legal move out of (x, y): inside the grid,
    not blocked, not yet closed and not cutting a corner.
    """
    for dx, dy, cost in DIRECTIONS:
        nx, ny = x + dx, y + dy
        if not grid.in_bounds(nx, ny) or grid.is_blocked(nx, ny):
            continue
        if (nx, ny) in closed:
            continue
        if is_diagonal_blocked(grid, x, y, dx, dy):
            continue
        yield nx, ny, cost


def reconstruct_path(nodes: Dict[Coord, SearchNode], goal: Coord) -> List[Coord]:
    """Follow parent keys from goal back to the start and return start->goal cells."""
    path = [goal]
    current = nodes[goal]
    while current.parent is not None:
        current = nodes[current.parent]
        path.append(current.key)
    path.reverse()
    return path


def check_endpoints(grid: Grid, start: Coord, goal: Coord) -> Optional[SearchOutcome]:
    """
    Validate start and goal before searching.
    Returns a terminal outcome when no search is needed (invalid endpoints,
    or start == goal), otherwise None.
    """
    if not grid.is_passable(*start) or not grid.is_passable(*goal):
        return SearchOutcome([], SearchState.INVALID)
    if start == goal:
        return SearchOutcome([start], SearchState.FOUND)
    return None


def _select_lowest_f(open_list: List[Coord], nodes: Dict[Coord, SearchNode]) -> int:
    # Earliest entry wins among equal f values
    best_index = 0
    best_f = nodes[open_list[0]].f
    for i in range(1, len(open_list)):
        f = nodes[open_list[i]].f
        if f < best_f:
            best_index = i
            best_f = f
    return best_index


def find_path(
    grid: Grid,
    start: Coord,
    goal: Coord,
    weight: float = 1.0,
) -> SearchOutcome:
    """
    Find a shortest path on an occupancy grid from start to goal using A*.
    grid: Grid with is_blocked/in_bounds lookups.
    start, goal: (x, y) integer grid coordinates.
    weight: multiplier applied to the heuristic; 0.0 turns the search into
        Dijkstra's uniform-cost search.
    Returns a SearchOutcome whose path runs from start to goal inclusive,
    or is empty if the goal cannot be reached.
    """
    start = (int(start[0]), int(start[1]))
    goal = (int(goal[0]), int(goal[1]))
    end_x, end_y = goal

    early = check_endpoints(grid, start, goal)
    if early is not None:
        logger.debug("Search %s -> %s ended early: %s", start, goal, early)
        return early

    start_node = SearchNode(
        start[0], start[1], h=weight * heuristic(start[0], start[1], end_x, end_y)
    )
    # Node table is the single source of truth for g/parent
    nodes: Dict[Coord, SearchNode] = {start: start_node}
    # Frontier holds coordinate keys in discovery/relaxation order
    open_list: List[Coord] = [start]
    closed: Set[Coord] = set()
    state = SearchState.RUNNING
    expanded = 0
    current = start_node

    while open_list:
        index = _select_lowest_f(open_list, nodes)
        current = nodes[open_list.pop(index)]
        closed.add(current.key)
        expanded += 1

        if current.is_goal(end_x, end_y):
            state = SearchState.FOUND
            break

        for nx, ny, cost in neighbors(grid, current.x, current.y, closed):
            key = (nx, ny)
            tentative_g = current.g + cost
            existing = nodes.get(key)
            if existing is None:
                node = SearchNode(
                    nx,
                    ny,
                    g=tentative_g,
                    h=weight * heuristic(nx, ny, end_x, end_y),
                    parent=current.key,
                )
                nodes[key] = node
                open_list.append(key)
            elif tentative_g < existing.g:
                existing.relax(tentative_g, current.key)
                # Re-inserted at the back; changes tie-break position
                open_list.remove(key)
                open_list.append(key)
    else:
        state = SearchState.EXHAUSTED

    if state is SearchState.FOUND:
        path = reconstruct_path(nodes, current.key)
    else:
        path = []
    outcome = SearchOutcome(path, state, expanded)
    logger.debug("Search %s -> %s: %s", start, goal, outcome)
    return outcome


def path_cost(path: List[Coord]) -> float:
    """Sum of step costs along path (cardinal and diagonal moves)."""
    total = 0.0
    for (x0, y0), (x1, y1) in zip(path, path[1:]):
        if x0 != x1 and y0 != y1:
            total += DIAGONAL_COST
        else:
            total += CARDINAL_COST
    return total


__all__ = [
    "DIRECTIONS",
    "SearchNode",
    "SearchOutcome",
    "SearchState",
    "check_endpoints",
    "find_path",
    "heuristic",
    "is_diagonal_blocked",
    "neighbors",
    "path_cost",
    "reconstruct_path",
]
