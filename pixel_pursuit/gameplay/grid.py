"""
Maze grid system.
NO UI DEPENDENCIES.
"""
import weakref
from enum import Enum
from typing import Iterator, List, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .entities import Mover


class Direction(Enum):
    """Cardinal directions. Declaration order is the canonical search order."""
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    def opposite(self) -> 'Direction':
        """Return the opposite direction."""
        dx, dy = self.value
        return Direction((-dx, -dy))

    def delta(self) -> Tuple[int, int]:
        """Return (dx, dy) for this direction."""
        return self.value

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> Optional['Direction']:
        """Map a unit offset back to a direction, or None for anything else."""
        try:
            return cls((dx, dy))
        except ValueError:
            return None


class Cell:
    """
    A single tile in the maze.

    Coordinates are fixed at construction. Occupants are held weakly: a cell
    never keeps a runner or chaser alive.
    """

    __slots__ = ("_x", "_y", "walkable", "_gold", "has_diamond", "_occupants")

    def __init__(self, x: int, y: int, walkable: bool = True):
        self._x = x
        self._y = y
        self.walkable = walkable
        self._gold = 0
        self.has_diamond = False
        self._occupants: 'weakref.WeakSet[Mover]' = weakref.WeakSet()

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    @property
    def is_wall(self) -> bool:
        return not self.walkable

    # --- loot ---

    @property
    def gold(self) -> int:
        return self._gold

    @property
    def has_gold(self) -> bool:
        return self._gold > 0

    @property
    def has_loot(self) -> bool:
        return self._gold > 0 or self.has_diamond

    def set_gold(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Gold amount cannot be negative")
        self._gold = amount

    def take_gold(self) -> int:
        """Remove and return all gold on this cell."""
        amount = self._gold
        self._gold = 0
        return amount

    def take_diamond(self) -> bool:
        """Remove the diamond. Returns True if there was one."""
        had = self.has_diamond
        self.has_diamond = False
        return had

    # --- occupants ---

    @property
    def occupants(self) -> List['Mover']:
        return list(self._occupants)

    def add_occupant(self, mover: 'Mover') -> None:
        self._occupants.add(mover)

    def remove_occupant(self, mover: 'Mover') -> None:
        self._occupants.discard(mover)

    def clear_occupants(self) -> None:
        self._occupants.clear()

    def is_occupied(self) -> bool:
        return len(self._occupants) > 0

    def __repr__(self) -> str:
        kind = "floor" if self.walkable else "wall"
        return f"Cell({self._x}, {self._y}, {kind}, gold={self._gold}, diamond={self.has_diamond})"


class Grid:
    """
    The maze: a fixed-size rectangle of cells.

    Coordinate system:
    - (0, 0) is top-left
    - x increases to the right
    - y increases downward

    Entrance and exit default to the middle row of the left and right
    border; the maze generator sets them for real.
    """

    def __init__(self, width: int, height: int, walkable: bool = True):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid size must be positive, got {width}x{height}")

        self.width = width
        self.height = height
        self._cells: List[List[Cell]] = [
            [Cell(x, y, walkable) for x in range(width)] for y in range(height)
        ]

        self.entrance_x = 0
        self.entrance_y = height // 2
        self.exit_x = width - 1
        self.exit_y = height // 2

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if coordinates are within grid bounds."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        """Get the cell at coordinates. Raises IndexError when out of bounds."""
        if not self.in_bounds(x, y):
            raise IndexError(f"Cell coordinates out of bounds: ({x}, {y})")
        return self._cells[y][x]

    def is_walkable(self, x: int, y: int) -> bool:
        """True for in-bounds floor cells."""
        return self.in_bounds(x, y) and self._cells[y][x].walkable

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.width - 1 or y == self.height - 1

    @property
    def entrance(self) -> Tuple[int, int]:
        return (self.entrance_x, self.entrance_y)

    @property
    def exit(self) -> Tuple[int, int]:
        return (self.exit_x, self.exit_y)

    @property
    def entrance_cell(self) -> Cell:
        return self.cell(self.entrance_x, self.entrance_y)

    @property
    def exit_cell(self) -> Cell:
        return self.cell(self.exit_x, self.exit_y)

    def get_neighbor(self, x: int, y: int, direction: Direction) -> Optional[Cell]:
        """Get the neighboring cell in the given direction, or None at the edge."""
        dx, dy = direction.delta()
        if not self.in_bounds(x + dx, y + dy):
            return None
        return self._cells[y + dy][x + dx]

    def walkable_neighbors(self, x: int, y: int) -> Iterator[Cell]:
        """Yield walkable neighbors in canonical direction order."""
        for direction in Direction:
            neighbor = self.get_neighbor(x, y, direction)
            if neighbor is not None and neighbor.walkable:
                yield neighbor

    def iter_cells(self) -> Iterator[Cell]:
        """Iterate over all cells, row by row."""
        for row in self._cells:
            yield from row

    def clear_entities(self) -> None:
        for cell in self.iter_cells():
            cell.clear_occupants()

    def clear_gold(self) -> None:
        for cell in self.iter_cells():
            cell.set_gold(0)

    def clear_loot(self) -> None:
        """Remove gold and diamonds everywhere."""
        for cell in self.iter_cells():
            cell.set_gold(0)
            cell.has_diamond = False

    def to_ascii(self) -> str:
        """Render walls as '#' and floor as '.', one line per row."""
        return "\n".join(
            "".join("." if c.walkable else "#" for c in row) for row in self._cells
        )

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
