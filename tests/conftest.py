"""
Shared fixtures: small hand-drawn grids and seeded randomness.
"""
import random

import pytest

from pixel_pursuit.gameplay.maze import grid_from_ascii
from pixel_pursuit.gameplay.difficulty import DifficultyProfile


OPEN_7X7 = """
#######
#.....#
#.....#
.......
#.....#
#.....#
#######
"""


@pytest.fixture
def open_grid():
    """7x7 grid: walled border, open interior, entrance/exit on row 3."""
    return grid_from_ascii(OPEN_7X7)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def quiet_profile():
    """
    Rules with survival gold every second and chasers/loot effectively
    switched off, so tests only see what they set up.
    """
    return DifficultyProfile(
        chaser_count=0,
        detection_radius=7,
        chaser_move_interval=1000.0,
        loot_spawn_interval=1000.0,
        diamond_chance=0.0,
        survival_gold_interval=1.0,
        survival_gold_per_tick=1,
        diamond_gold_value=10,
    )
