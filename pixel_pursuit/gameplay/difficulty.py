"""
Difficulty levels and their rule tables.
NO UI DEPENDENCIES.

A DifficultyProfile is a plain value: the UI owns the single mutable
difficulty setting and passes the matching profile down when a session is
built.
"""
from dataclasses import dataclass, replace
from enum import Enum

from .constants import (
    CHASER_MOVE_INTERVAL, LOOT_SPAWN_INTERVAL,
    SURVIVAL_GOLD_INTERVAL, SURVIVAL_GOLD_PER_TICK, DIAMOND_GOLD_VALUE
)


class Difficulty(Enum):
    """Overall difficulty for a run."""
    EASY = "easy"
    HARD = "hard"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    def __str__(self) -> str:
        return self.display_name


@dataclass(frozen=True)
class DifficultyProfile:
    """Rule values that vary with difficulty."""
    chaser_count: int
    detection_radius: int               # Manhattan distance that triggers pursuit
    chaser_move_interval: float = CHASER_MOVE_INTERVAL
    loot_spawn_interval: float = LOOT_SPAWN_INTERVAL
    diamond_chance: float = 0.05
    survival_gold_interval: float = SURVIVAL_GOLD_INTERVAL
    survival_gold_per_tick: int = SURVIVAL_GOLD_PER_TICK
    diamond_gold_value: int = DIAMOND_GOLD_VALUE

    def __post_init__(self):
        if self.chaser_count < 0:
            raise ValueError("chaser_count cannot be negative")
        if self.detection_radius < 0:
            raise ValueError("detection_radius cannot be negative")
        for name in ("chaser_move_interval", "loot_spawn_interval", "survival_gold_interval"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if not 0.0 <= self.diamond_chance <= 1.0:
            raise ValueError("diamond_chance must be between 0 and 1")
        if self.survival_gold_per_tick < 0 or self.diamond_gold_value < 0:
            raise ValueError("gold amounts cannot be negative")

    def with_overrides(self, **changes) -> 'DifficultyProfile':
        """Return a copy with some fields replaced (validated again)."""
        return replace(self, **changes)


PROFILES = {
    Difficulty.EASY: DifficultyProfile(
        chaser_count=2,
        detection_radius=7,
        chaser_move_interval=0.6,
        loot_spawn_interval=1.5,
        diamond_chance=0.05,
    ),
    Difficulty.HARD: DifficultyProfile(
        chaser_count=3,
        detection_radius=11,
        chaser_move_interval=0.45,
        loot_spawn_interval=2.5,
        diamond_chance=0.10,
    ),
}


def get_profile(difficulty: Difficulty) -> DifficultyProfile:
    """Look up the rule table for a difficulty."""
    return PROFILES[difficulty]
