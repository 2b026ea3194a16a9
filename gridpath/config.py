import math

# Movement costs
# Cost of a horizontal or vertical step between neighbouring cells
CARDINAL_COST = 1.0
# Cost of a diagonal step (length of a unit square's diagonal)
DIAGONAL_COST = math.sqrt(2.0)

# Search settings
# Default timeout for breadth-first search in milliseconds (0 disables it)
BFS_TIMEOUT_MS = 3000.0
# Algorithm used when none is requested explicitly
DEFAULT_ALGORITHM = "astar"

# Demo grid settings
# Grid size used when no world file is available
DEFAULT_GRID_WIDTH = 20
DEFAULT_GRID_HEIGHT = 20
# Size limits for resizing the editable grid
MIN_GRID_SIZE = 2
MAX_GRID_SIZE = 60
# Edge length of a single cell on screen (pixels)
CELL_SIZE = 28
# Gap between the window border and the grid (pixels)
GRID_MARGIN = 10
# Width of the line drawn around each cell (pixels)
CELL_BORDER = 1
FPS = 30
WINDOW_TITLE = "gridpath"

# Colors
BACKGROUND_COLOR = (30, 30, 30)
BORDER_COLOR = (60, 60, 60)
CELL_COLORS = {
    "empty": (220, 220, 220),
    "start": (46, 160, 67),
    "goal": (200, 55, 55),
    "obstacle": (40, 40, 40),
    "path": (66, 135, 245),
}

# World file: JSON definition of the default demo map (located in gridpath/worlds)
DEFAULT_WORLD_FILE = "worlds/default.json"

# Logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
