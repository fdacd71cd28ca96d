"""
Session - one run of the game, from entrance to capture or escape.
NO UI DEPENDENCIES.

The caller owns the clock: once per frame it calls `runner.step()` and
then `session.update(dt)`. The session never notices the runner reaching
the exit by itself; the caller checks `is_runner_at_exit()` and ends the
run.
"""
import logging
import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Sequence

from .grid import Grid
from .entities import EntityKind, Runner, Chaser
from .loot import LootSpawner
from .difficulty import DifficultyProfile, Difficulty, get_profile

logger = logging.getLogger(__name__)


class SessionState(Enum):
    RUNNING = auto()
    ENDED = auto()


class EndReason(Enum):
    CAPTURED = auto()          # a chaser reached the runner
    ENDED_BY_CALLER = auto()   # escape, quit, or anything else outside the core


@dataclass
class SessionEvent:
    """Something that happened during a tick (for the UI to react to)."""
    pass


@dataclass
class SurvivalGoldEvent(SessionEvent):
    amount: int


@dataclass
class GoldCollectedEvent(SessionEvent):
    x: int
    y: int
    amount: int


@dataclass
class DiamondCollectedEvent(SessionEvent):
    x: int
    y: int
    bonus: int


@dataclass
class LootSpawnedEvent(SessionEvent):
    x: int
    y: int
    is_diamond: bool


@dataclass
class SessionEndedEvent(SessionEvent):
    reason: EndReason


class Session:
    """
    Drives one run: timers, economy, chaser pacing, loot and capture.

    Usage:
        session = Session(grid, Runner(grid, *grid.entrance), profile)
        session.add_chaser(Chaser(grid, x, y, strategy))
        while session.running:
            runner.step()
            events = session.update(dt)
    """

    def __init__(
        self,
        grid: Grid,
        runner: Runner,
        profile: Optional[DifficultyProfile] = None,
        rng: Optional[random.Random] = None,
    ):
        if runner.grid is not grid:
            raise ValueError("Runner belongs to a different grid")

        self.grid = grid
        self.runner = runner
        self.profile = profile if profile is not None else get_profile(Difficulty.EASY)
        self.rng = rng if rng is not None else random.Random()
        self._chasers: List[Chaser] = []
        self.spawner = LootSpawner(grid, self.profile.diamond_chance, self.rng)

        self.state = SessionState.RUNNING
        self.end_reason: Optional[EndReason] = None
        self.elapsed_time: float = 0.0

        # Gold breakdown: run_gold == time_gold + pickup_gold
        self.time_gold: int = 0
        self.pickup_gold: int = 0
        self.run_gold: int = 0
        self.pickup_diamonds: int = 0

        # Accumulators (seconds of leftover time)
        self._survival_timer: float = 0.0
        self._chaser_timer: float = 0.0
        self._spawn_timer: float = 0.0

        # Events not yet handed out by update()
        self._pending_events: List[SessionEvent] = []

    # =========================================================================
    # SETUP
    # =========================================================================

    def add_chaser(self, chaser: Chaser) -> None:
        if chaser.grid is not self.grid:
            raise ValueError("Chaser belongs to a different grid")
        self._chasers.append(chaser)

    @property
    def chasers(self) -> Sequence[Chaser]:
        """Read-only view of the chasers."""
        return tuple(self._chasers)

    # =========================================================================
    # STATE QUERIES (for UI to read)
    # =========================================================================

    @property
    def running(self) -> bool:
        return self.state == SessionState.RUNNING

    def is_runner_at_exit(self) -> bool:
        return self.runner.is_at(self.grid.exit_x, self.grid.exit_y)

    def end_session(self, reason: EndReason = EndReason.ENDED_BY_CALLER) -> None:
        """
        End the run. Does nothing if it has already ended.
        Called between ticks, the SessionEndedEvent comes out of the next update().
        """
        if self.state == SessionState.ENDED:
            return
        self.state = SessionState.ENDED
        self.end_reason = reason
        self._pending_events.append(SessionEndedEvent(reason))
        logger.info(
            f"Session ended ({reason.name}) after {self.elapsed_time:.1f}s "
            f"with {self.run_gold} gold and {self.pickup_diamonds} diamonds"
        )

    # =========================================================================
    # UPDATE LOOP
    # =========================================================================

    def update(self, dt: float) -> List[SessionEvent]:
        """
        Advance the run by dt seconds.
        Returns the events that occurred, in order. An ended session does
        nothing; it only hands out a SessionEndedEvent from an
        end_session() call made since the last update.
        """
        if self.state == SessionState.RUNNING:
            self.elapsed_time += dt
            self._award_survival_gold(dt)
            self._collect_loot()
            self._move_chasers(dt)
            self._spawn_loot(dt)
            self._check_capture()

        events, self._pending_events = self._pending_events, []
        return events

    def _award_survival_gold(self, dt: float) -> None:
        interval = self.profile.survival_gold_interval
        self._survival_timer += dt
        if self._survival_timer < interval:
            return

        ticks = int(self._survival_timer // interval)
        self._survival_timer -= ticks * interval

        gained = ticks * self.profile.survival_gold_per_tick
        self.time_gold += gained
        self.run_gold += gained
        self._pending_events.append(SurvivalGoldEvent(gained))

    def _collect_loot(self) -> None:
        cell = self.runner.cell

        if cell.has_gold:
            amount = cell.take_gold()
            self.pickup_gold += amount
            self.run_gold += amount
            self._pending_events.append(GoldCollectedEvent(cell.x, cell.y, amount))

        if cell.take_diamond():
            bonus = self.profile.diamond_gold_value
            self.pickup_diamonds += 1
            self.pickup_gold += bonus
            self.run_gold += bonus
            self._pending_events.append(DiamondCollectedEvent(cell.x, cell.y, bonus))

    def _move_chasers(self, dt: float) -> None:
        interval = self.profile.chaser_move_interval
        self._chaser_timer += dt
        while self._chaser_timer >= interval:
            self._chaser_timer -= interval
            for chaser in self._chasers:
                chaser.update(self)

    def _spawn_loot(self, dt: float) -> None:
        interval = self.profile.loot_spawn_interval
        self._spawn_timer += dt
        while self._spawn_timer >= interval:
            self._spawn_timer -= interval
            drop = self.spawner.spawn()
            if drop is not None:
                self._pending_events.append(LootSpawnedEvent(drop.x, drop.y, drop.is_diamond))

    def _check_capture(self) -> None:
        """Any active chaser sharing the runner's cell catches it."""
        for occupant in self.runner.cell.occupants:
            if occupant.kind != EntityKind.CHASER or occupant not in self._chasers:
                continue
            if occupant.active:
                self.runner.kill()
                self.end_session(EndReason.CAPTURED)
                return

    # =========================================================================
    # CONVENIENCE METHODS FOR TESTING
    # =========================================================================

    def simulate(self, seconds: float, dt: float = 0.1) -> List[SessionEvent]:
        """
        Step the runner and update the session until `seconds` have passed
        or the run ends. Returns all events that occurred.
        """
        all_events: List[SessionEvent] = []
        elapsed = 0.0
        while elapsed < seconds and self.running:
            self.runner.step()
            all_events.extend(self.update(dt))
            elapsed += dt
        return all_events
