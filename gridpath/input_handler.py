"""
Input handling abstraction to decouple Pygame input from the demo logic.
"""

from __future__ import annotations
import pygame
from typing import List, Optional, Tuple

# Number keys selecting an algorithm by registry name
ALGORITHM_KEYS = {
    pygame.K_1: "astar",
    pygame.K_2: "dijkstra",
    pygame.K_3: "bfs",
}


class InputHandler:
    """
    Abstraction for gathering input state. Processes Pygame events and
    provides per-frame action queries for the grid demo.
    """

    def __init__(self) -> None:
        self._quit = False
        self._run = False
        self._clear = False
        # Net grid size change requested this frame
        self._resize = 0
        # Algorithm chosen this frame, if any
        self._algorithm: Optional[str] = None
        # Screen positions of left clicks this frame
        self._clicks: List[Tuple[int, int]] = []

    def process_events(self) -> None:
        """
        Poll Pygame events and update internal state for quit, run, clear,
        algorithm selection and mouse clicks.
        """
        self._quit = False
        self._run = False
        self._clear = False
        self._resize = 0
        self._algorithm = None
        self._clicks = []
        for event in pygame.event.get():
            self.handle_event(event)

    def handle_event(self, event: pygame.event.Event) -> None:
        """Update action state from a single Pygame event."""
        if event.type == pygame.QUIT:
            self._quit = True
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                self._quit = True
            elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
                self._run = True
            elif event.key == pygame.K_c:
                self._clear = True
            elif event.key == pygame.K_LEFTBRACKET:
                self._resize -= 1
            elif event.key == pygame.K_RIGHTBRACKET:
                self._resize += 1
            elif event.key in ALGORITHM_KEYS:
                self._algorithm = ALGORITHM_KEYS[event.key]
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._clicks.append(tuple(event.pos))

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def run_pressed(self) -> bool:
        """Return True if Space or Enter was pressed this frame."""
        return self._run

    def clear_pressed(self) -> bool:
        """Return True if C was pressed this frame to reset the grid."""
        return self._clear

    def resize_delta(self) -> int:
        """Return the net grid size change requested with [ and ] this frame."""
        return self._resize

    def selected_algorithm(self) -> Optional[str]:
        """Return the algorithm picked with 1/2/3 this frame, or None."""
        return self._algorithm

    def get_clicks(self) -> List[Tuple[int, int]]:
        """Return screen positions of left clicks since last process_events."""
        return list(self._clicks)
