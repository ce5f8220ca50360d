"""Tile — the content kind held by a single grid cell.

The value of each member doubles as the content tag the presentation
layer uses to pick a swatch or image for the cell.
"""

from __future__ import annotations

from enum import Enum


class Tile(Enum):
    """What a grid cell currently contains."""

    EMPTY = "empty"
    SOIL = "soil"
    OBSTACLE = "obstacle"
    VALUABLE_1 = "valuable1"
    VALUABLE_2 = "valuable2"
    VALUABLE_3 = "valuable3"
    LAVA = "lava"

    @property
    def tag(self) -> str:
        """Return the content tag used by renderers."""
        return self.value

    @property
    def tier(self) -> int:
        """Return the mineral tier (1-3), or 0 for non-valuable content."""
        return _TIERS.get(self, 0)

    @property
    def is_valuable(self) -> bool:
        """Return True for any mineral tier."""
        return self.tier > 0

    @property
    def is_diggable(self) -> bool:
        """Return True if the drill has to excavate its way into this tile."""
        return self is Tile.SOIL or self.is_valuable


_TIERS: dict[Tile, int] = {
    Tile.VALUABLE_1: 1,
    Tile.VALUABLE_2: 2,
    Tile.VALUABLE_3: 3,
}
