"""
Simulation core: maze, movers, chaser AI and the per-tick session.
NO UI DEPENDENCIES.
"""
from .grid import Grid, Cell, Direction
from .maze import MazeGenerator
from .entities import EntityKind, Runner, Chaser
from .pursuit import PursuitStrategy, DistanceGatedPursuit, WanderStrategy, GreedyPursuit
from .session import Session, SessionState, EndReason
from .difficulty import Difficulty, DifficultyProfile, get_profile
from .level import create_session

__all__ = [
    "Grid", "Cell", "Direction",
    "MazeGenerator",
    "EntityKind", "Runner", "Chaser",
    "PursuitStrategy", "DistanceGatedPursuit", "WanderStrategy", "GreedyPursuit",
    "Session", "SessionState", "EndReason",
    "Difficulty", "DifficultyProfile", "get_profile",
    "create_session",
]
