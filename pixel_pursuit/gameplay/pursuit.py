"""
Chaser AI.
NO UI DEPENDENCIES.

A PursuitStrategy turns (chaser position, target position, grid) into a
one-cell offset. Strategies hold no per-chaser state, so one instance can
drive any number of chasers.
"""
import logging
import random
from abc import ABC, abstractmethod
from collections import deque
from typing import Dict, Optional, Tuple, TYPE_CHECKING

from .grid import Grid, Direction

if TYPE_CHECKING:
    from .entities import Chaser
    from .session import Session

logger = logging.getLogger(__name__)

Position = Tuple[int, int]
STAY: Position = (0, 0)


def manhattan(a: Position, b: Position) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _bfs_parents(grid: Grid, start: Position, goal: Position) -> Optional[Dict[Position, Position]]:
    """
    Breadth-first search over walkable cells.
    Returns the parent map if goal was reached, else None.
    """
    parents: Dict[Position, Position] = {start: start}
    frontier = deque([start])

    while frontier:
        current = frontier.popleft()
        if current == goal:
            return parents

        x, y = current
        for direction in Direction:
            dx, dy = direction.delta()
            nxt = (x + dx, y + dy)
            if nxt in parents or not grid.is_walkable(*nxt):
                continue
            parents[nxt] = current
            frontier.append(nxt)

    return None


def find_first_step(grid: Grid, start: Position, goal: Position) -> Optional[Position]:
    """
    First (dx, dy) of a shortest walkable path from start to goal.
    None if goal is unreachable or already reached.
    """
    if start == goal:
        return None

    parents = _bfs_parents(grid, start, goal)
    if parents is None:
        return None

    # Walk back from the goal until the step right after start
    node = goal
    while parents[node] != start:
        node = parents[node]
    return (node[0] - start[0], node[1] - start[1])


def shortest_path_length(grid: Grid, start: Position, goal: Position) -> Optional[int]:
    """Number of steps on a shortest walkable path, or None if unreachable."""
    parents = _bfs_parents(grid, start, goal)
    if parents is None:
        return None

    length = 0
    node = goal
    while node != start:
        node = parents[node]
        length += 1
    return length


class PursuitStrategy(ABC):
    """Decides how a chaser moves each time chasers get to act."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    @abstractmethod
    def decide(self, chaser_pos: Position, target_pos: Position, grid: Grid) -> Position:
        """Return the (dx, dy) to move by; (0, 0) to stay."""
        pass

    def update(self, chaser: 'Chaser', session: 'Session') -> None:
        """Move the chaser toward the session's runner."""
        if not chaser.active:
            return
        dx, dy = self.decide(chaser.position, session.runner.position, session.grid)
        if (dx, dy) != STAY:
            chaser.move_by(dx, dy)

    def wander(self, chaser_pos: Position, grid: Grid) -> Position:
        """First open direction, starting from a random point in the cycle."""
        directions = list(Direction)
        start = self.rng.randrange(len(directions))
        x, y = chaser_pos
        for i in range(len(directions)):
            dx, dy = directions[(start + i) % len(directions)].delta()
            if grid.is_walkable(x + dx, y + dy):
                return (dx, dy)
        return STAY


class WanderStrategy(PursuitStrategy):
    """Ignores the target and drifts around."""

    def decide(self, chaser_pos: Position, target_pos: Position, grid: Grid) -> Position:
        return self.wander(chaser_pos, grid)


class DistanceGatedPursuit(PursuitStrategy):
    """
    Wander while the target is far away; once it is within the detection
    radius (Manhattan), follow a shortest path toward it.
    """

    def __init__(self, detection_radius: int, rng: Optional[random.Random] = None):
        super().__init__(rng)
        if detection_radius < 0:
            raise ValueError("detection_radius cannot be negative")
        self.detection_radius = detection_radius

    def decide(self, chaser_pos: Position, target_pos: Position, grid: Grid) -> Position:
        if chaser_pos == target_pos:
            return STAY

        if manhattan(chaser_pos, target_pos) > self.detection_radius:
            return self.wander(chaser_pos, grid)

        step = find_first_step(grid, chaser_pos, target_pos)
        if step is None:
            logger.debug(f"No path from {chaser_pos} to {target_pos}, wandering")
            return self.wander(chaser_pos, grid)
        return step


class GreedyPursuit(PursuitStrategy):
    """
    Step along the axis with the larger gap to the target; if that is
    blocked, try the other axis. Gets stuck behind walls easily.
    """

    def decide(self, chaser_pos: Position, target_pos: Position, grid: Grid) -> Position:
        cx, cy = chaser_pos
        tx, ty = target_pos
        step_x = (tx > cx) - (tx < cx)
        step_y = (ty > cy) - (ty < cy)

        if abs(tx - cx) >= abs(ty - cy):
            candidates = [(step_x, 0), (0, step_y)]
        else:
            candidates = [(0, step_y), (step_x, 0)]

        for dx, dy in candidates:
            if (dx, dy) != STAY and grid.is_walkable(cx + dx, cy + dy):
                return (dx, dy)
        return STAY
