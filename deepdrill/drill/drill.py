"""Drill — the player-controlled agent and its movement rules.

Every move follows the same template:

1. Work out the candidate cell one step away.
2. Refuse (silently, at no cost) when the session is over, the tank is
   empty, the hold is full, or the grid says the cell is impassable.
   Asking the grid about a lava cell ends the session.
3. Otherwise step in, burn one unit of fuel, collect whatever the cell
   held, and excavate it.

Moving up is special.  The drill cannot dig upward, so an upward move is
refused when the cell above is soil or a mineral.  A successful upward
move engages the *ascend lock*, which suppresses gravity until the lock
timer releases it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from deepdrill.world.tile import Tile

if TYPE_CHECKING:
    from deepdrill.simulation.economy import Economy
    from deepdrill.simulation.scheduler import Timer
    from deepdrill.simulation.session import Session
    from deepdrill.world.grid import Grid

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Input commands, each one grid step as ``(dcol, drow)``."""

    LEFT = (-1, 0)
    RIGHT = (1, 0)
    UP = (0, -1)
    DOWN = (0, 1)

    @property
    def dcol(self) -> int:
        return self.value[0]

    @property
    def drow(self) -> int:
        return self.value[1]


MoveListener = Callable[[Direction, int, int], None]


@dataclass
class Drill:
    """The mining agent.

    Attributes:
        grid: The shared tile grid.
        economy: Fuel, storage, and money for this run.
        session: Terminal-state tracker; no move is accepted once ended.
        col: Current column.
        row: Current row.
        ascending: True while the ascend lock suppresses gravity.
        ascend_lock: One-shot timer that clears ``ascending``.  Restarted
            on every upward move.
        listeners: Called with ``(direction, col, row)`` after each
            accepted move, e.g. to start an animation.
    """

    grid: Grid
    economy: Economy
    session: Session
    col: int = 0
    row: int = 1
    ascending: bool = False
    ascend_lock: Timer | None = None
    listeners: list[MoveListener] = field(default_factory=list, repr=False)

    @property
    def position(self) -> tuple[int, int]:
        """Return ``(col, row)``."""
        return self.col, self.row

    def on_move(self, listener: MoveListener) -> None:
        """Register a callback fired after every accepted move."""
        self.listeners.append(listener)

    def move(self, direction: Direction) -> bool:
        """Try to move one cell in ``direction``.

        Args:
            direction: Where to go.

        Returns:
            True if the move was accepted, False if it was refused.
        """
        if not self.session.is_running:
            return False

        new_col = self.col + direction.dcol
        new_row = self.row + direction.drow

        if direction is Direction.UP and not self._can_ascend():
            return False
        if not self.economy.can_move:
            return False
        if not self.grid.is_passable(new_row, new_col, self.session):
            return False

        self._commit(direction, new_col, new_row)
        return True

    def move_left(self) -> bool:
        return self.move(Direction.LEFT)

    def move_right(self) -> bool:
        return self.move(Direction.RIGHT)

    def move_up(self) -> bool:
        return self.move(Direction.UP)

    def move_down(self) -> bool:
        return self.move(Direction.DOWN)

    def apply_gravity(self) -> bool:
        """Fall one cell if nothing holds the drill up.

        Gravity only acts when the ascend lock is off and the cell
        directly below is in bounds and already empty.  The fall is an
        ordinary downward move, so it costs fuel like any other.

        Returns:
            True if the drill fell.
        """
        if not self.session.is_running or self.ascending:
            return False
        below = self.row + 1
        if not self.grid.in_bounds(below, self.col):
            return False
        if self.grid.content_at(below, self.col) is not Tile.EMPTY:
            return False
        return self.move(Direction.DOWN)

    def release_ascend_lock(self) -> None:
        """Let gravity act again."""
        self.ascending = False

    def _can_ascend(self) -> bool:
        """Return True if the cell above is open enough to climb into."""
        if self.row == 0:
            return False
        above = self.grid.content_at(self.row - 1, self.col)
        return not above.is_diggable

    def _commit(self, direction: Direction, col: int, row: int) -> None:
        """Step into ``(col, row)`` and settle fuel, minerals, and digging."""
        self.col, self.row = col, row
        if direction is Direction.UP:
            self.ascending = True
            if self.ascend_lock is not None:
                self.ascend_lock.restart()

        self.economy.consume_move_fuel()
        content = self.grid.content_at(row, col)
        self.economy.credit(content, self.session)
        self.grid.excavate(row, col)
        logger.debug("drill moved %s to (%d, %d)", direction.name, col, row)

        for listener in self.listeners:
            listener(direction, col, row)
