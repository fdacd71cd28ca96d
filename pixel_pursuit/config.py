"""
Configuration management for Pixel Pursuit.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from pixel_pursuit.gameplay.constants import MAZE_WIDTH, MAZE_HEIGHT, MIN_MAZE_SIZE, FRAME_INTERVAL_MS
from pixel_pursuit.gameplay.difficulty import Difficulty

DEFAULT_PRESET_FILE = Path(__file__).parent / "data" / "mazes.txt"


class Settings(BaseSettings):
    """Settings loaded from PIXEL_PURSUIT_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PIXEL_PURSUIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Rules
    difficulty: Difficulty = Field(
        default=Difficulty.EASY,
        description="Difficulty for new runs (easy or hard)"
    )
    seed: Optional[int] = Field(
        default=None,
        description="Seed for maze and AI randomness. Unset means a fresh seed per run"
    )

    # Maze
    maze_width: int = Field(default=MAZE_WIDTH, ge=MIN_MAZE_SIZE)
    maze_height: int = Field(default=MAZE_HEIGHT, ge=MIN_MAZE_SIZE)
    preset_maze_file: Optional[Path] = Field(
        default=None,
        description="Preset maze file. Unset means the bundled presets"
    )

    # Front end
    frame_interval_ms: int = Field(
        default=FRAME_INTERVAL_MS,
        gt=0,
        description="Milliseconds per frame; the runner moves one cell per frame"
    )
    cell_size: int = Field(default=24, gt=0, description="Pixels per maze cell")

    # Logging
    log_level: str = Field(default="INFO")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
