"""SimulationEngine — owns one run and drives its timers.

The engine builds the grid, economy, session, and drill from config and
wires three timers onto a single cooperative Scheduler:

1. Fuel decay (periodic): burns idle fuel, ends the run when dry.
2. Gravity (periodic): drops the drill into empty cells below it.
3. Ascend lock (one-shot): re-enables gravity after an upward move.

Ending the session stops the fuel timer.  The other two keep firing but
their handlers do nothing once the session is over.

Input commands and timer callbacks all run on the caller's thread and
each finishes before the next starts, so no locking is needed.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from deepdrill.drill.drill import Direction, Drill
from deepdrill.simulation.config import SimulationConfig
from deepdrill.simulation.economy import Economy
from deepdrill.simulation.scheduler import Scheduler, Timer
from deepdrill.simulation.session import EndReason, Session
from deepdrill.world.grid import Grid

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the run for renderers.

    Attributes:
        tags: Content tag of every cell, indexed ``tags[row][col]``.
        col: Drill column.
        row: Drill row.
        fuel: Remaining fuel.
        storage: Storage units used.
        storage_capacity: Hold size.
        money: Currency earned.
        reason: End reason, or ``None`` while running.
    """

    tags: tuple[tuple[str, ...], ...]
    col: int
    row: int
    fuel: float
    storage: int
    storage_capacity: int
    money: float
    reason: EndReason | None


@dataclass
class SimulationEngine:
    """Drives a single drilling session.

    Attributes:
        config: Loaded simulation configuration.
        clock: Monotonic time source for the scheduler.
        rng: Seeded random generator used for grid generation.
        grid: The tile grid.
        economy: Fuel, storage, and money.
        session: Running/ended status.
        drill: The player-controlled agent.
        scheduler: Timer set driving fuel decay, gravity, and the ascend lock.
    """

    config: SimulationConfig
    clock: Callable[[], float] = time.monotonic
    rng: Generator = field(init=False)
    grid: Grid = field(init=False)
    economy: Economy = field(init=False)
    session: Session = field(init=False)
    drill: Drill = field(init=False)
    scheduler: Scheduler = field(init=False)
    fuel_timer: Timer = field(init=False, repr=False)
    gravity_timer: Timer = field(init=False, repr=False)
    ascend_timer: Timer = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Build the run from config and start the periodic timers."""
        cfg = self.config
        self.rng = np.random.default_rng(cfg.seed)
        self.grid = Grid(size=cfg.grid_size)
        self.grid.generate(self.rng)
        self.economy = Economy(
            fuel=cfg.initial_fuel,
            storage_capacity=cfg.storage_capacity,
            rewards=cfg.reward_table(),
        )
        self.session = Session()
        self.drill = Drill(
            grid=self.grid,
            economy=self.economy,
            session=self.session,
            col=cfg.start_col,
            row=cfg.start_row,
        )

        self.scheduler = Scheduler(clock=self.clock)
        self.fuel_timer = self.scheduler.every(
            cfg.fuel_decay_interval,
            self._on_fuel_tick,
            name="fuel-decay",
        )
        self.gravity_timer = self.scheduler.every(
            cfg.gravity_interval,
            self._on_gravity_tick,
            name="gravity",
        )
        self.ascend_timer = self.scheduler.once(
            cfg.ascend_lock_delay,
            self._on_ascend_lock_release,
            name="ascend-lock",
        )
        self.drill.ascend_lock = self.ascend_timer
        self.session.on_end(self._on_session_end)

        self.fuel_timer.start()
        self.gravity_timer.start()
        logger.info(
            "session started: %dx%d grid, seed=%s",
            cfg.grid_size,
            cfg.grid_size,
            cfg.seed,
        )

    @property
    def ended(self) -> bool:
        """Return True once the session is over."""
        return self.session.ended

    def command(self, direction: Direction) -> bool:
        """Apply a player move command.

        Args:
            direction: Which way to move.

        Returns:
            True if the drill moved.
        """
        return self.drill.move(direction)

    def update(self, now: float | None = None) -> int:
        """Fire every timer due by ``now`` (default: the clock's reading).

        Returns:
            Number of timer callbacks fired.
        """
        return self.scheduler.advance(now)

    def snapshot(self) -> EngineSnapshot:
        """Capture the state a renderer needs for one frame."""
        return EngineSnapshot(
            tags=self.grid.tags(),
            col=self.drill.col,
            row=self.drill.row,
            fuel=self.economy.fuel,
            storage=self.economy.storage,
            storage_capacity=self.economy.storage_capacity,
            money=self.economy.money,
            reason=self.session.reason,
        )

    def _on_fuel_tick(self) -> None:
        self.economy.decay_tick(self.session)

    def _on_gravity_tick(self) -> None:
        if self.session.is_running:
            self.drill.apply_gravity()

    def _on_ascend_lock_release(self) -> None:
        if self.session.is_running:
            self.drill.release_ascend_lock()

    def _on_session_end(self, reason: EndReason) -> None:
        """Halt idle fuel burn; the run is frozen from here on."""
        self.fuel_timer.stop()
        logger.info(
            "final state: reason=%s fuel=%.2f storage=%d/%d money=%.2f",
            reason.name,
            self.economy.fuel,
            self.economy.storage,
            self.economy.storage_capacity,
            self.economy.money,
        )
