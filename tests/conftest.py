"""Shared fixtures for the Deep Drill test suite."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest
from numpy.random import Generator

from deepdrill.drill.drill import Drill
from deepdrill.simulation.config import SimulationConfig
from deepdrill.simulation.economy import Economy
from deepdrill.simulation.scheduler import Scheduler
from deepdrill.simulation.session import Session
from deepdrill.world.grid import Grid
from deepdrill.world.tile import Tile
from tests.helpers import FakeClock

# One character per cell for hand-drawn layouts
_LEGEND: dict[str, Tile] = {
    ".": Tile.EMPTY,
    "s": Tile.SOIL,
    "X": Tile.OBSTACLE,
    "1": Tile.VALUABLE_1,
    "2": Tile.VALUABLE_2,
    "3": Tile.VALUABLE_3,
    "L": Tile.LAVA,
}


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def fake_clock() -> FakeClock:
    """A clock frozen at t=0 until advanced."""
    return FakeClock()


@pytest.fixture
def grid_from() -> Callable[[list[str]], Grid]:
    """Build a Grid from rows of legend characters (see ``_LEGEND``)."""

    def build(rows: list[str]) -> Grid:
        grid = Grid(size=len(rows))
        for r, line in enumerate(rows):
            assert len(line) == grid.size, f"row {r} is not {grid.size} wide"
            for c, char in enumerate(line):
                grid.set_content(r, c, _LEGEND[char])
        return grid

    return build


@pytest.fixture
def session() -> Session:
    """A fresh running session."""
    return Session()


@pytest.fixture
def economy() -> Economy:
    """Default economy: 100 fuel, 0/300 storage, no money."""
    return Economy()


@pytest.fixture
def shaft(grid_from: Callable[[list[str]], Grid]) -> Grid:
    """A 6x6 hand-drawn mine used by most drill tests.

    Drill starts at (col 1, row 1).  Below it: soil crust, then a
    valuable-2, then an empty pocket above bedrock.
    """
    return grid_from(
        [
            "......",
            "......",
            "ss1sss",
            "X2.LsX",
            "X..3XX",
            "XXXXXX",
        ],
    )


@pytest.fixture
def drill(shaft: Grid, economy: Economy, session: Session) -> Drill:
    """A drill sitting in the sky at (col 1, row 1) over ``shaft``."""
    return Drill(grid=shaft, economy=economy, session=session, col=1, row=1)


@pytest.fixture
def scheduler(fake_clock: FakeClock) -> Scheduler:
    """A scheduler driven by ``fake_clock``."""
    return Scheduler(clock=fake_clock)


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed), fixed seed."""
    return SimulationConfig(seed=42)
