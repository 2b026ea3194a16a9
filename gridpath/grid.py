"""
Occupancy grid: an immutable rectangular map of blocked/passable cells.
"""

from __future__ import annotations
import os
import json
import logging
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from .config import DEFAULT_WORLD_FILE

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class GridError(ValueError):
    """Raised when a grid or world file does not describe a valid rectangular map."""


class Grid:
    """
    Rectangular occupancy map indexed by (x, y).

    Cells are stored in a read-only numpy boolean array of shape
    (height, width); True marks a blocked cell.
    """

    def __init__(self, rows: Sequence[Sequence[Any]]) -> None:
        if isinstance(rows, np.ndarray):
            cells = _validated_array(rows)
        else:
            try:
                if len(rows) == 0:
                    raise GridError("grid has no rows")
            except TypeError as e:
                raise GridError("grid must be a sequence of rows") from e
            try:
                lengths = [len(row) for row in rows]
            except TypeError as e:
                raise GridError("grid rows must be sequences of cells") from e
            width = lengths[0]
            if width == 0:
                raise GridError("grid rows are empty")
            for y, length in enumerate(lengths):
                if length != width:
                    raise GridError(
                        f"row {y} has {length} cells, expected {width}"
                    )
            try:
                array = np.array(rows, dtype=bool)
            except ValueError as e:
                raise GridError(f"grid cells must be scalars: {e}") from e
            cells = _validated_array(array)
        # Immutable for the lifetime of the grid
        cells.setflags(write=False)
        self.cells = cells
        self.height, self.width = cells.shape

    @classmethod
    def from_array(cls, array: np.ndarray) -> Grid:
        """Build a grid from a 2D array; non-zero entries are blocked."""
        return cls(np.array(array, dtype=bool))

    @classmethod
    def from_file(cls, path: Optional[str] = None) -> Grid:
        """Load the "map" of a JSON world file."""
        grid, _, _ = load_world(path)
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        """Return True if (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def is_blocked(self, x: int, y: int) -> bool:
        """Return True if the in-bounds cell (x, y) is an obstacle."""
        return bool(self.cells[y, x])

    def is_passable(self, x: int, y: int) -> bool:
        """Return True if (x, y) is inside the grid and not blocked."""
        return self.in_bounds(x, y) and not self.cells[y, x]

    def to_rows(self) -> list:
        """Return the grid as nested lists of booleans."""
        return self.cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return np.array_equal(self.cells, other.cells)

    def __repr__(self) -> str:
        blocked = int(self.cells.sum())
        return f"<Grid {self.width}x{self.height} blocked={blocked}>"


def as_grid(grid: Any) -> Grid:
    """Coerce nested rows or a numpy array to a Grid; Grid instances pass through."""
    if isinstance(grid, Grid):
        return grid
    if isinstance(grid, np.ndarray):
        return Grid.from_array(grid)
    return Grid(grid)


def _validated_array(array: np.ndarray) -> np.ndarray:
    if array.ndim != 2:
        raise GridError(f"grid must be 2-dimensional, got {array.ndim} dimensions")
    if array.shape[0] == 0 or array.shape[1] == 0:
        raise GridError(f"grid must not be empty, got shape {array.shape}")
    return array.astype(bool, copy=True)


def _parse_point(value: Any, name: str) -> Optional[Coord]:
    if value is None:
        return None
    if not (isinstance(value, (list, tuple)) and len(value) == 2):
        raise GridError(f"{name} must be an [x, y] pair, got {value!r}")
    try:
        return (int(value[0]), int(value[1]))
    except (TypeError, ValueError) as e:
        raise GridError(f"{name} must hold integers, got {value!r}") from e


def load_world(
    path: Optional[str] = None,
) -> Tuple[Grid, Optional[Coord], Optional[Coord]]:
    """
    Load a world definition from a JSON file.
    path: file to read; defaults to DEFAULT_WORLD_FILE inside the package.
    Returns (grid, start, goal); start and goal are None when not specified.
    """
    if path is None:
        path = os.path.join(os.path.dirname(__file__), DEFAULT_WORLD_FILE)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise GridError(f"Failed to load world map from {path}: {e}") from e
    if not isinstance(data, dict):
        raise GridError(f"World file {path} must contain a JSON object")
    rows = data.get("map")
    if not isinstance(rows, list):
        raise GridError(f"World file {path} has no \"map\" list")
    grid = Grid(rows)
    start = _parse_point(data.get("start"), "start")
    goal = _parse_point(data.get("goal"), "goal")
    logger.debug("Loaded %r from %s", grid, path)
    return grid, start, goal
