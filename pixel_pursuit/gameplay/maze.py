"""
Maze generation: preset layouts and recursive-backtracker carving.
NO UI DEPENDENCIES.

Every generated grid has:
- a solid wall border
- the entrance on the left border and the exit on the right border, both on
  the middle row
- a walkable corridor along the whole middle row

Preset file format: each non-empty line is one maze. A line is either
PROCEDURAL_TOKEN or `height` row strings joined by ROW_DELIMITER, where '#'
is a wall and anything else is floor. Border cells are always walls no
matter what the line says.
"""
import logging
import random
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .grid import Grid, Direction
from .constants import (
    MAZE_WIDTH, MAZE_HEIGHT, MIN_MAZE_SIZE,
    PROCEDURAL_TOKEN, ROW_DELIMITER, WALL_CHAR,
    LOOP_ATTEMPT_DIVISOR, LOOP_OPEN_CHANCE,
    SOFTEN_CHANCE_LEFT, SOFTEN_CHANCE_RIGHT,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_preset_lines(path: Optional[PathLike]) -> List[str]:
    """
    Read maze templates from a preset file.
    Returns an empty list if there is no file or it cannot be read.
    """
    if path is None:
        return []

    path = Path(path)
    if not path.is_file():
        logger.debug(f"No preset maze file at {path}")
        return []

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning(f"Could not read preset maze file {path}: {exc}")
        return []

    return [line.strip() for line in text.splitlines() if line.strip()]


def grid_from_ascii(layout: str) -> Grid:
    """
    Build a grid straight from a newline-separated drawing.

    '#' is wall, anything else floor. Unlike presets, the border is taken
    as drawn, which makes this handy for hand-built test layouts.
    """
    rows = [row for row in layout.strip().splitlines()]
    height = len(rows)
    width = max(len(row) for row in rows) if rows else 0
    grid = Grid(width, height)

    for y, row in enumerate(rows):
        for x in range(width):
            char = row[x] if x < len(row) else WALL_CHAR
            grid.cell(x, y).walkable = char != WALL_CHAR
    return grid


class MazeGenerator:
    """
    Builds maze grids.

    Usage:
        generator = MazeGenerator(rng=random.Random(seed), preset_file="mazes.txt")
        grid = generator.generate()

    With a preset file, one line is picked at random; a malformed line, a
    missing file or the procedural token all fall back to carving.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        preset_file: Optional[PathLike] = None,
        presets: Optional[Sequence[str]] = None,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.presets: List[str] = list(presets) if presets is not None else []
        if preset_file is not None:
            self.presets.extend(load_preset_lines(preset_file))

        # What the last generate() call actually used ("preset" or "procedural")
        self.last_source: Optional[str] = None

    # =========================================================================
    # PUBLIC
    # =========================================================================

    def generate(self, width: int = MAZE_WIDTH, height: int = MAZE_HEIGHT) -> Grid:
        """Produce a new grid of the given size."""
        if width < MIN_MAZE_SIZE or height < MIN_MAZE_SIZE:
            raise ValueError(
                f"Maze must be at least {MIN_MAZE_SIZE}x{MIN_MAZE_SIZE}, got {width}x{height}"
            )

        grid = Grid(width, height, walkable=False)

        if self.presets:
            chosen = self.rng.choice(self.presets)
            if chosen != PROCEDURAL_TOKEN and apply_preset(grid, chosen):
                self.last_source = "preset"
                logger.info(f"Loaded preset maze ({width}x{height})")
                return grid

        self.carve(grid)
        self.last_source = "procedural"
        logger.info(f"Generated procedural maze ({width}x{height})")
        return grid

    def carve(self, grid: Grid) -> None:
        """Carve a procedural maze into an existing grid, replacing its layout."""
        for cell in grid.iter_cells():
            cell.walkable = False
            cell.set_gold(0)
            cell.has_diamond = False

        _place_entrance_and_exit(grid)
        grid.entrance_cell.walkable = True
        grid.exit_cell.walkable = True

        self._backtrack(grid, grid.entrance_x + 1, grid.entrance_y)
        self._inject_loops(grid)
        self._soften_walls(grid)

        # Exit's inner neighbour must be open even if the passes above missed it
        grid.cell(grid.exit_x - 1, grid.exit_y).walkable = True
        _open_middle_row(grid)

    # =========================================================================
    # CARVING PASSES
    # =========================================================================

    def _backtrack(self, grid: Grid, start_x: int, start_y: int) -> None:
        """
        Randomized depth-first walk on the 2-cell lattice.

        Each step jumps two cells, opening the destination and the wall
        between. Uses an explicit stack so big grids don't hit the
        recursion limit.
        """
        grid.cell(start_x, start_y).walkable = True
        visited = {(start_x, start_y)}
        stack: List[Tuple[int, int, List[Direction]]] = [
            (start_x, start_y, self._shuffled_directions())
        ]

        while stack:
            x, y, remaining = stack[-1]
            if not remaining:
                stack.pop()
                continue

            dx, dy = remaining.pop().delta()
            nx, ny = x + 2 * dx, y + 2 * dy
            if not _is_interior(grid, nx, ny) or (nx, ny) in visited:
                continue

            visited.add((nx, ny))
            grid.cell(x + dx, y + dy).walkable = True
            grid.cell(nx, ny).walkable = True
            stack.append((nx, ny, self._shuffled_directions()))

    def _inject_loops(self, grid: Grid) -> None:
        """Knock out random walls next to floor so corridors form cycles."""
        attempts = (grid.width * grid.height) // LOOP_ATTEMPT_DIVISOR
        for _ in range(attempts):
            x = self.rng.randint(1, grid.width - 2)
            y = self.rng.randint(1, grid.height - 2)
            cell = grid.cell(x, y)
            if cell.walkable:
                continue
            if _has_walkable_neighbor(grid, x, y) and self.rng.random() < LOOP_OPEN_CHANCE:
                cell.walkable = True

    def _soften_walls(self, grid: Grid) -> None:
        """Open walls with a chance that grows toward the exit side."""
        span = max(1, grid.width - 3)
        for y in range(1, grid.height - 1):
            for x in range(1, grid.width - 1):
                cell = grid.cell(x, y)
                if cell.walkable:
                    continue
                chance = SOFTEN_CHANCE_LEFT + (SOFTEN_CHANCE_RIGHT - SOFTEN_CHANCE_LEFT) * (x - 1) / span
                if _has_walkable_neighbor(grid, x, y) and self.rng.random() < chance:
                    cell.walkable = True

    def _shuffled_directions(self) -> List[Direction]:
        directions = list(Direction)
        self.rng.shuffle(directions)
        return directions


def apply_preset(grid: Grid, line: str) -> bool:
    """
    Apply one preset line to the grid.
    Returns False (leaving the grid to be carved) if the row count is wrong.
    """
    rows = line.split(ROW_DELIMITER)
    if len(rows) != grid.height:
        logger.warning(
            f"Preset row count mismatch: expected {grid.height}, got {len(rows)}"
        )
        return False

    for cell in grid.iter_cells():
        cell.walkable = not grid.is_border(cell.x, cell.y)
        cell.set_gold(0)
        cell.has_diamond = False

    for y in range(1, grid.height - 1):
        row = rows[y]
        for x in range(1, grid.width - 1):
            char = row[x] if x < len(row) else "."
            grid.cell(x, y).walkable = char != WALL_CHAR

    _place_entrance_and_exit(grid)
    _open_middle_row(grid)
    return True


# =============================================================================
# HELPERS
# =============================================================================

def _place_entrance_and_exit(grid: Grid) -> None:
    middle = grid.height // 2
    grid.entrance_x, grid.entrance_y = 0, middle
    grid.exit_x, grid.exit_y = grid.width - 1, middle


def _open_middle_row(grid: Grid) -> None:
    """Entrance, exit and the straight corridor between them are always floor."""
    for x in range(grid.width):
        grid.cell(x, grid.entrance_y).walkable = True


def _is_interior(grid: Grid, x: int, y: int) -> bool:
    return 1 <= x <= grid.width - 2 and 1 <= y <= grid.height - 2


def _has_walkable_neighbor(grid: Grid, x: int, y: int) -> bool:
    return any(True for _ in grid.walkable_neighbors(x, y))
