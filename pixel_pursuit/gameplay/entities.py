"""
Things that move on the maze: the Runner and the Chasers.
NO UI DEPENDENCIES.
"""
from enum import Enum, auto
from typing import Optional, Tuple, TYPE_CHECKING

from .grid import Grid, Cell

if TYPE_CHECKING:
    from .pursuit import PursuitStrategy
    from .session import Session


class EntityKind(Enum):
    """Every cell occupant is one of these."""
    RUNNER = auto()
    CHASER = auto()


class Mover:
    """
    Base class for grid occupants.

    A mover registers itself on its cell's occupant set and re-registers on
    every successful step; that bookkeeping is what collision checks read.
    """

    kind: EntityKind

    def __init__(self, grid: Grid, start_x: int, start_y: int):
        if not grid.in_bounds(start_x, start_y):
            raise ValueError(
                f"{type(self).__name__} start out of bounds: ({start_x}, {start_y})"
            )
        if not grid.cell(start_x, start_y).walkable:
            raise ValueError(
                f"{type(self).__name__} start is a wall: ({start_x}, {start_y})"
            )

        self.grid = grid
        self.x = start_x
        self.y = start_y
        grid.cell(start_x, start_y).add_occupant(self)

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def cell(self) -> Cell:
        """The cell currently occupied."""
        return self.grid.cell(self.x, self.y)

    def can_move(self, dx: int, dy: int) -> bool:
        """True if (dx, dy) is a non-zero step into an in-bounds floor cell."""
        if dx == 0 and dy == 0:
            return False
        return self.grid.is_walkable(self.x + dx, self.y + dy)

    def _can_act(self) -> bool:
        return True

    def move_by(self, dx: int, dy: int) -> bool:
        """
        Step by (dx, dy) if the target is in bounds and walkable.
        Returns True if the mover actually moved.
        """
        if not self._can_act():
            return False
        if not self.can_move(dx, dy):
            return False

        self.grid.cell(self.x, self.y).remove_occupant(self)
        self.x += dx
        self.y += dy
        self.grid.cell(self.x, self.y).add_occupant(self)
        return True

    def is_at(self, x: int, y: int) -> bool:
        return self.x == x and self.y == y


class Runner(Mover):
    """
    The player-controlled runner.

    Glide movement: the runner keeps going in its committed direction until
    it hits a wall. Input only sets a desired direction, which is adopted at
    the start of a step if that way is open right now.
    """

    kind = EntityKind.RUNNER

    def __init__(self, grid: Grid, start_x: int, start_y: int):
        super().__init__(grid, start_x, start_y)
        self.alive: bool = True

        # (0, 0) means stopped
        self.dir_x: int = 0
        self.dir_y: int = 0
        self.desired_dir_x: int = 0
        self.desired_dir_y: int = 0

    def _can_act(self) -> bool:
        return self.alive

    @property
    def direction(self) -> Tuple[int, int]:
        return (self.dir_x, self.dir_y)

    def set_direction(self, dx: int, dy: int) -> None:
        """Set the desired glide direction."""
        self.desired_dir_x = dx
        self.desired_dir_y = dy

    def stop(self) -> None:
        """Stop immediately and forget the desired direction."""
        self.dir_x = self.dir_y = 0
        self.desired_dir_x = self.desired_dir_y = 0

    def kill(self) -> None:
        self.alive = False

    def step(self) -> None:
        """Advance one tick: maybe turn, then move one cell or stop at a wall."""
        if not self.alive:
            return

        desired = (self.desired_dir_x, self.desired_dir_y)
        if desired != self.direction and self.can_move(*desired):
            self.dir_x, self.dir_y = desired

        if self.dir_x == 0 and self.dir_y == 0:
            return

        if not self.move_by(self.dir_x, self.dir_y):
            # Ran into a wall
            self.dir_x = self.dir_y = 0

    def __repr__(self) -> str:
        return f"Runner(({self.x}, {self.y}), dir={self.direction}, alive={self.alive})"


class Chaser(Mover):
    """
    A pursuing agent. Has no memory of its own; the strategy decides every
    move. Chasers pass through each other freely.
    """

    kind = EntityKind.CHASER

    def __init__(
        self,
        grid: Grid,
        start_x: int,
        start_y: int,
        strategy: Optional['PursuitStrategy'] = None,
    ):
        super().__init__(grid, start_x, start_y)
        self.strategy = strategy
        self.active: bool = True

    def _can_act(self) -> bool:
        return self.active

    def deactivate(self) -> None:
        """Take this chaser out of play: it stops moving and capturing."""
        self.active = False

    def update(self, session: 'Session') -> None:
        """Let the strategy move this chaser once."""
        if not self.active or self.strategy is None:
            return
        self.strategy.update(self, session)

    def __repr__(self) -> str:
        return f"Chaser(({self.x}, {self.y}), active={self.active})"
