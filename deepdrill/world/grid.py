"""Grid — the square mine shaft the drill works through.

The Grid owns the tile-content matrix and the generation algorithm, and
answers content and boundary queries for the drill and the economy.
Excavation is the only mutation: a tile can become ``EMPTY`` but is never
refilled.

Layout after generation (``N`` = size)::

    row 0, 1      EMPTY (open sky)
    row 2         SOIL (surface crust)
    row 3..N-2    random draw, OBSTACLE on column 0 and N-1
    row N-1       OBSTACLE (bedrock)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from deepdrill.simulation.session import EndReason
from deepdrill.world.tile import Tile

if TYPE_CHECKING:
    from numpy.random import Generator

    from deepdrill.simulation.session import Session

logger = logging.getLogger(__name__)

# -- Generation thresholds (uniform draw in [0, 100)) ------------------------

_SKY_ROWS = 2
_CRUST_ROW = 2
_SCATTERED_OBSTACLE = (93, 96)
_SOIL_BELOW = 70
_VALUABLE_1_BELOW = 78
_VALUABLE_2_BELOW = 86
_VALUABLE_3_BELOW = 90
# Anything left over is lava: [90, 93) and [96, 100).


def tile_for_draw(element: int) -> Tile:
    """Map a uniform draw in ``[0, 100)`` to an interior tile.

    Args:
        element: The random draw.

    Returns:
        The tile content for a non-boundary cell below the crust.
    """
    lo, hi = _SCATTERED_OBSTACLE
    if lo <= element < hi:
        return Tile.OBSTACLE
    if element < _SOIL_BELOW:
        return Tile.SOIL
    if element < _VALUABLE_1_BELOW:
        return Tile.VALUABLE_1
    if element < _VALUABLE_2_BELOW:
        return Tile.VALUABLE_2
    if element < _VALUABLE_3_BELOW:
        return Tile.VALUABLE_3
    return Tile.LAVA


@dataclass
class Grid:
    """A square grid of tile contents.

    Attributes:
        size: Number of rows and columns.
        tiles: 2D list of Tile values indexed as ``tiles[row][col]``.
    """

    size: int = 15
    tiles: list[list[Tile]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Start with an all-empty grid; ``generate`` fills it in."""
        if self.size < 4:
            msg = f"grid size must be at least 4, got {self.size}"
            raise ValueError(msg)
        self.tiles = [[Tile.EMPTY] * self.size for _ in range(self.size)]

    def is_boundary(self, row: int, col: int) -> bool:
        """Return True for the fixed obstacle frame below the crust."""
        if row <= _CRUST_ROW:
            return False
        return col in (0, self.size - 1) or row == self.size - 1

    def generate(self, rng: Generator) -> None:
        """Fill the grid with sky, crust, and randomly drawn underground.

        One draw is consumed for every cell below the crust, boundary
        cells included, so the seed alone determines the layout.

        Args:
            rng: Seeded random generator.
        """
        for row in range(self.size):
            for col in range(self.size):
                if row < _SKY_ROWS:
                    tile = Tile.EMPTY
                elif row == _CRUST_ROW:
                    tile = Tile.SOIL
                else:
                    element = int(rng.integers(0, 100))
                    if self.is_boundary(row, col):
                        tile = Tile.OBSTACLE
                    else:
                        tile = tile_for_draw(element)
                self.tiles[row][col] = tile
        logger.debug(
            "generated %dx%d grid: %d lava, %d obstacle cells",
            self.size,
            self.size,
            self.count(Tile.LAVA),
            self.count(Tile.OBSTACLE),
        )

    def in_bounds(self, row: int, col: int) -> bool:
        """Return True if ``(row, col)`` lies inside the grid."""
        return 0 <= row < self.size and 0 <= col < self.size

    def content_at(self, row: int, col: int) -> Tile:
        """Return the current content of the cell at ``(row, col)``.

        Args:
            row: Row index.
            col: Column index.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if not self.in_bounds(row, col):
            msg = f"({row}, {col}) out of bounds for {self.size}x{self.size}"
            raise IndexError(msg)
        return self.tiles[row][col]

    def set_content(self, row: int, col: int, tile: Tile) -> None:
        """Overwrite a cell.  Used to build fixed layouts in tests and tools.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        self.content_at(row, col)
        self.tiles[row][col] = tile

    def excavate(self, row: int, col: int) -> bool:
        """Dig out the cell at ``(row, col)``, leaving it ``EMPTY``.

        Returns:
            True if the cell held something, False if it was already empty.

        Raises:
            IndexError: If coordinates are out of bounds.
        """
        if self.content_at(row, col) is Tile.EMPTY:
            return False
        self.tiles[row][col] = Tile.EMPTY
        logger.debug("excavated (%d, %d)", row, col)
        return True

    def is_passable(self, row: int, col: int, session: Session) -> bool:
        """Return True if the drill may enter ``(row, col)``.

        Out-of-bounds cells and obstacles are impassable.  Lava is lethal:
        merely checking a lava cell ends ``session`` with reason ``LAVA``
        and the move is refused, so the drill never actually sits on lava.

        Args:
            row: Row index of the candidate cell.
            col: Column index of the candidate cell.
            session: The session to end if the cell is lava.
        """
        if not self.in_bounds(row, col):
            return False
        content = self.tiles[row][col]
        if content is Tile.LAVA:
            session.end(EndReason.LAVA)
            return False
        return content is not Tile.OBSTACLE

    def tags(self) -> tuple[tuple[str, ...], ...]:
        """Return an immutable matrix of content tags for rendering."""
        return tuple(tuple(tile.tag for tile in row) for row in self.tiles)

    def count(self, tile: Tile) -> int:
        """Return how many cells currently hold ``tile``."""
        return sum(row.count(tile) for row in self.tiles)
