from __future__ import annotations
import logging
import pygame
from typing import Iterable, List, Optional, Set, Tuple

import numpy as np

from .adapter import ALGORITHMS, PathResult, run_algorithm
from .grid import Coord, Grid, load_world
from .input_handler import InputHandler
from .config import (
    DEFAULT_ALGORITHM,
    DEFAULT_GRID_WIDTH,
    DEFAULT_GRID_HEIGHT,
    MIN_GRID_SIZE,
    MAX_GRID_SIZE,
    CELL_SIZE,
    GRID_MARGIN,
    CELL_BORDER,
    FPS,
    WINDOW_TITLE,
    BACKGROUND_COLOR,
    BORDER_COLOR,
    CELL_COLORS,
)

logger = logging.getLogger(__name__)

# Interaction modes, cycled by successive clicks
MODE_START = "start"
MODE_GOAL = "goal"
MODE_OBSTACLE = "obstacle"


class GridEditor:
    """
    Editable grid model behind the demo: start/goal points, obstacles and
    the last computed path. Contains no Pygame calls.
    """

    def __init__(
        self,
        width: int = DEFAULT_GRID_WIDTH,
        height: int = DEFAULT_GRID_HEIGHT,
        obstacles: Optional[Iterable[Coord]] = None,
        start: Optional[Coord] = None,
        goal: Optional[Coord] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.obstacles: Set[Coord] = set(obstacles or ())
        self.start = start
        self.goal = goal
        # Next click places the start, then the goal, then toggles obstacles
        if start is None:
            self.mode = MODE_START
        elif goal is None:
            self.mode = MODE_GOAL
        else:
            self.mode = MODE_OBSTACLE
        self.path: List[Coord] = []
        self.result: Optional[PathResult] = None

    @classmethod
    def from_grid(
        cls,
        grid: Grid,
        start: Optional[Coord] = None,
        goal: Optional[Coord] = None,
    ) -> GridEditor:
        ys, xs = np.nonzero(grid.cells)
        obstacles = [(int(x), int(y)) for x, y in zip(xs, ys)]
        return cls(grid.width, grid.height, obstacles, start, goal)

    @classmethod
    def from_world(cls, path: Optional[str] = None) -> GridEditor:
        """Create an editor from a JSON world file (the packaged default if None)."""
        grid, start, goal = load_world(path)
        return cls.from_grid(grid, start, goal)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def click(self, x: int, y: int) -> None:
        """Apply a click on cell (x, y) according to the current mode."""
        if not self.in_bounds(x, y):
            return
        cell = (x, y)
        self.path = []
        if self.mode == MODE_START:
            if cell == self.goal:
                return
            self.obstacles.discard(cell)
            self.start = cell
            self.mode = MODE_GOAL if self.goal is None else MODE_OBSTACLE
        elif self.mode == MODE_GOAL:
            if cell == self.start:
                return
            self.obstacles.discard(cell)
            self.goal = cell
            self.mode = MODE_OBSTACLE
        else:
            # Start and goal cells cannot become obstacles
            if cell in (self.start, self.goal):
                return
            if cell in self.obstacles:
                self.obstacles.remove(cell)
            else:
                self.obstacles.add(cell)

    def clear(self) -> None:
        """Remove start, goal, obstacles and path; next click sets the start."""
        self.obstacles.clear()
        self.start = None
        self.goal = None
        self.path = []
        self.result = None
        self.mode = MODE_START

    def resize(self, width: int, height: int) -> None:
        """Change the grid size (clamped to the configured limits) and clear it."""
        self.width = max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(width)))
        self.height = max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, int(height)))
        self.clear()

    def to_grid(self) -> Grid:
        """Return the current obstacles as an immutable Grid."""
        cells = np.zeros((self.height, self.width), dtype=bool)
        for x, y in self.obstacles:
            cells[y, x] = True
        return Grid(cells)

    def run(self, algorithm: str = DEFAULT_ALGORITHM) -> Optional[PathResult]:
        """
        Run the named search between start and goal.
        Returns the PathResult, or None if start or goal is not placed yet.
        """
        if self.start is None or self.goal is None:
            logger.info("Place a start and a goal before running a search")
            return None
        result = run_algorithm(algorithm, self.to_grid(), self.start, self.goal)
        self.result = result
        self.path = list(result.path)
        return result

    def cell_kind(self, x: int, y: int) -> str:
        """Return the display kind of (x, y): empty, start, goal, obstacle or path."""
        cell = (x, y)
        if cell == self.start:
            return "start"
        if cell == self.goal:
            return "goal"
        if cell in self.obstacles:
            return "obstacle"
        if cell in self.path:
            return "path"
        return "empty"


class Demo:
    """Pygame front end: draws a GridEditor and maps input to editor actions."""

    def __init__(
        self,
        editor: Optional[GridEditor] = None,
        clock: Optional[pygame.time.Clock] = None,
    ) -> None:
        pygame.init()
        self.editor = editor or GridEditor()
        self.algorithm = DEFAULT_ALGORITHM
        self.screen = pygame.display.set_mode(self.window_size())
        pygame.display.set_caption(self.caption())
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.input = InputHandler()
        self.running = True

    def window_size(self) -> Tuple[int, int]:
        """Return the window size needed to show the whole grid."""
        return (
            self.editor.width * CELL_SIZE + 2 * GRID_MARGIN,
            self.editor.height * CELL_SIZE + 2 * GRID_MARGIN,
        )

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        """Map a screen position to a grid cell, or None if outside the grid."""
        px, py = pos[0] - GRID_MARGIN, pos[1] - GRID_MARGIN
        if px < 0 or py < 0:
            return None
        x, y = px // CELL_SIZE, py // CELL_SIZE
        if not self.editor.in_bounds(x, y):
            return None
        return (x, y)

    def caption(self) -> str:
        """Window caption: selected algorithm, mode and last result summary."""
        text = f"{WINDOW_TITLE} [{self.algorithm}] mode: {self.editor.mode}"
        result = self.editor.result
        if result is not None:
            if result.found:
                text += (
                    f" | {result.algorithm}: {len(result.path)} cells"
                    f" in {result.execution_time:.3f} ms"
                )
            else:
                text += f" | {result.algorithm}: no path ({result.state.value})"
        return text

    def handle_events(self) -> None:
        """Process input via InputHandler and apply it to the editor."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
            return
        algorithm = self.input.selected_algorithm()
        if algorithm in ALGORITHMS:
            self.algorithm = algorithm
        if self.input.clear_pressed():
            self.editor.clear()
        delta = self.input.resize_delta()
        if delta:
            self.editor.resize(self.editor.width + delta, self.editor.height + delta)
            self.screen = pygame.display.set_mode(self.window_size())
        for pos in self.input.get_clicks():
            cell = self.cell_at(pos)
            if cell is not None:
                self.editor.click(*cell)
        if self.input.run_pressed():
            self.editor.run(self.algorithm)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw every grid cell onto surface."""
        surface.fill(BACKGROUND_COLOR)
        for y in range(self.editor.height):
            for x in range(self.editor.width):
                rect = pygame.Rect(
                    GRID_MARGIN + x * CELL_SIZE,
                    GRID_MARGIN + y * CELL_SIZE,
                    CELL_SIZE,
                    CELL_SIZE,
                )
                pygame.draw.rect(surface, CELL_COLORS[self.editor.cell_kind(x, y)], rect)
                pygame.draw.rect(surface, BORDER_COLOR, rect, CELL_BORDER)

    def render(self) -> None:
        self.draw(self.screen)
        pygame.display.set_caption(self.caption())
        pygame.display.flip()

    def run(self) -> None:
        """Main loop: handle events and redraw until quit."""
        while self.running:
            self.clock.tick(self.fps)
            self.handle_events()
            if self.running:
                self.render()
        pygame.quit()
