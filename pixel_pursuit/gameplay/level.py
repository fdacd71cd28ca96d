"""
Level setup - builds a ready-to-play session.
NO UI DEPENDENCIES.
"""
import logging
import random
from typing import List, Optional, Tuple

from .grid import Grid
from .maze import MazeGenerator, PathLike
from .entities import Runner, Chaser
from .pursuit import PursuitStrategy, DistanceGatedPursuit
from .session import Session
from .difficulty import Difficulty, DifficultyProfile, get_profile
from .constants import MAZE_WIDTH, MAZE_HEIGHT, CHASER_SPAWN_OFFSET, CHASER_SPAWN_SPACING

logger = logging.getLogger(__name__)


def chaser_spawn_points(grid: Grid, count: int) -> List[Tuple[int, int]]:
    """
    Spawn cells for `count` chasers, a few columns in from the exit.

    Chasers are spread two rows apart around the exit row (-1, 0, 1 for
    three; 0, 1 for two), clamped inside the border, then nudged upward to
    the first floor cell. If a column has no floor above, the exit row is
    used; it is always open.
    """
    spawn_x = max(1, grid.exit_x - CHASER_SPAWN_OFFSET)
    points = []

    for i in range(count):
        offset = i - (count - 1) // 2
        y = grid.exit_y + CHASER_SPAWN_SPACING * offset
        y = max(1, min(grid.height - 2, y))

        while not grid.cell(spawn_x, y).walkable and y > 1:
            y -= 1
        if not grid.cell(spawn_x, y).walkable:
            y = grid.exit_y

        points.append((spawn_x, y))
    return points


def create_session(
    difficulty: Difficulty = Difficulty.EASY,
    width: int = MAZE_WIDTH,
    height: int = MAZE_HEIGHT,
    seed: Optional[int] = None,
    preset_file: Optional[PathLike] = None,
    profile: Optional[DifficultyProfile] = None,
    strategy: Optional[PursuitStrategy] = None,
) -> Session:
    """
    Generate a maze and populate it: runner on the entrance, chasers near
    the exit sharing one strategy.

    `profile` overrides the difficulty's rule table; `strategy` overrides
    the default distance-gated pursuit.
    """
    profile = profile if profile is not None else get_profile(difficulty)
    rng = random.Random(seed)

    grid = MazeGenerator(rng=rng, preset_file=preset_file).generate(width, height)
    runner = Runner(grid, grid.entrance_x, grid.entrance_y)
    session = Session(grid, runner, profile, rng=rng)

    if strategy is None:
        strategy = DistanceGatedPursuit(profile.detection_radius, rng=rng)

    for x, y in chaser_spawn_points(grid, profile.chaser_count):
        session.add_chaser(Chaser(grid, x, y, strategy))

    logger.info(
        f"Created {difficulty.display_name} session on {grid!r} "
        f"with {profile.chaser_count} chasers"
    )
    return session
