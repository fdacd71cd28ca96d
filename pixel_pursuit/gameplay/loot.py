"""
Random gold and diamond drops.
NO UI DEPENDENCIES.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional

from .grid import Grid
from .constants import SPAWN_ATTEMPTS, OUTER_MARGIN_X, OUTER_MARGIN_Y, OUTER_RING_BIAS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LootDrop:
    """Where a spawn landed and what it was."""
    x: int
    y: int
    is_diamond: bool


class LootSpawner:
    """
    Places one piece of loot per call using rejection sampling.

    Candidates on the border, on the entrance or exit, on walls, or on cells
    that already hold loot are rejected. Cells away from the outer ring are
    also rejected most of the time, so loot favours the edges of the maze.
    """

    def __init__(
        self,
        grid: Grid,
        diamond_chance: float,
        rng: Optional[random.Random] = None,
        attempts: int = SPAWN_ATTEMPTS,
    ):
        self.grid = grid
        self.diamond_chance = diamond_chance
        self.rng = rng if rng is not None else random.Random()
        self.attempts = attempts

    def is_outer_ring(self, x: int, y: int) -> bool:
        w, h = self.grid.width, self.grid.height
        return (x < OUTER_MARGIN_X or x >= w - OUTER_MARGIN_X or
                y < OUTER_MARGIN_Y or y >= h - OUTER_MARGIN_Y)

    def _is_candidate(self, x: int, y: int) -> bool:
        grid = self.grid
        if grid.is_border(x, y):
            return False
        if (x, y) == grid.entrance or (x, y) == grid.exit:
            return False
        cell = grid.cell(x, y)
        return cell.walkable and not cell.has_loot

    def spawn(self) -> Optional[LootDrop]:
        """
        Try to drop one piece of loot.
        Returns the drop, or None if every attempt was rejected.
        """
        for _ in range(self.attempts):
            x = self.rng.randrange(self.grid.width)
            y = self.rng.randrange(self.grid.height)
            if not self._is_candidate(x, y):
                continue

            if self.rng.random() < OUTER_RING_BIAS and not self.is_outer_ring(x, y):
                continue

            cell = self.grid.cell(x, y)
            is_diamond = self.rng.random() < self.diamond_chance
            if is_diamond:
                cell.has_diamond = True
            else:
                cell.set_gold(1)

            logger.debug(f"Spawned {'diamond' if is_diamond else 'gold'} at ({x}, {y})")
            return LootDrop(x, y, is_diamond)

        logger.debug(f"Loot spawn gave up after {self.attempts} attempts")
        return None
