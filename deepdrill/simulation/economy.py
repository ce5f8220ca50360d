"""Economy — fuel, storage, and money bookkeeping for the drill.

Exhaustion is never an error here.  Running dry or filling the hold ends
the session instead, via ``Session.end``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from deepdrill.simulation.session import EndReason
from deepdrill.world.tile import Tile

if TYPE_CHECKING:
    from deepdrill.simulation.session import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Reward:
    """What collecting one tile is worth.

    Attributes:
        money: Currency credited.
        storage: Storage units consumed.
    """

    money: float = 0.0
    storage: int = 0


NO_REWARD = Reward()

DEFAULT_REWARDS: dict[Tile, Reward] = {
    Tile.VALUABLE_1: Reward(money=250.0, storage=20),
    Tile.VALUABLE_2: Reward(money=20000.0, storage=80),
    Tile.VALUABLE_3: Reward(money=50000.0, storage=60),
}


@dataclass
class Economy:
    """Resource state owned by the session.

    Attributes:
        fuel: Remaining fuel (never negative).
        storage_capacity: Hold size; reaching it ends the run.
        storage: Storage units currently used.
        money: Currency earned so far.
        rewards: Per-tile reward table.  Tiles not listed are worth nothing.
    """

    fuel: float = 100.0
    storage_capacity: int = 300
    storage: int = 0
    money: float = 0.0
    rewards: dict[Tile, Reward] = field(
        default_factory=lambda: dict(DEFAULT_REWARDS),
    )

    @property
    def can_move(self) -> bool:
        """Return True if there is fuel left and room in the hold."""
        return self.fuel > 0 and self.storage < self.storage_capacity

    @property
    def storage_full(self) -> bool:
        """Return True once the hold is at or past capacity."""
        return self.storage >= self.storage_capacity

    def decay_tick(self, session: Session) -> None:
        """Burn one unit of idle fuel, or end the run if the tank is dry.

        Args:
            session: Ended with ``OUT_OF_FUEL`` when fuel is already zero.
        """
        if not session.is_running:
            return
        if self.fuel > 0:
            self.fuel = max(0.0, self.fuel - 1)
        else:
            session.end(EndReason.OUT_OF_FUEL)

    def consume_move_fuel(self) -> None:
        """Charge one unit of fuel for a move, floored at zero."""
        self.fuel = max(0.0, self.fuel - 1)

    def credit(self, tile: Tile, session: Session) -> Reward:
        """Collect whatever ``tile`` is worth and check the hold.

        Args:
            tile: Content of the cell the drill just entered, read before
                it was excavated.
            session: Ended with ``STORAGE_FULL`` when the hold fills up.

        Returns:
            The reward that was applied (``NO_REWARD`` for plain tiles).
        """
        reward = self.rewards.get(tile, NO_REWARD)
        if reward is not NO_REWARD:
            self.money += reward.money
            self.storage += reward.storage
            logger.debug(
                "collected %s: +%.2f money, +%d storage",
                tile.tag,
                reward.money,
                reward.storage,
            )
        if self.storage_full:
            session.end(EndReason.STORAGE_FULL)
        return reward
