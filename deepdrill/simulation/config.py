"""Config — load simulation parameters from YAML files.

Grid size, starting position, economy limits, timer periods, and the
mineral reward table live in YAML and are parsed into a typed dataclass
here.  Missing keys fall back to the defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from deepdrill.simulation.economy import DEFAULT_REWARDS, Reward
from deepdrill.world.tile import Tile


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for a reproducible grid (``None`` = fresh entropy).
        grid_size: Number of rows and columns.
        start_col: Drill starting column.
        start_row: Drill starting row (must be one of the two sky rows).
        initial_fuel: Fuel in the tank at session start.
        storage_capacity: Hold size; filling it ends the run.
        fuel_decay_interval: Seconds between idle fuel burns.
        gravity_interval: Seconds between gravity checks.
        ascend_lock_delay: Seconds gravity stays off after an upward move.
        rewards: Overrides for the mineral reward table, keyed by content
            tag, e.g. ``{"valuable1": {"money": 250, "storage": 20}}``.
    """

    seed: int | None = None
    grid_size: int = 15
    start_col: int = 0
    start_row: int = 1

    initial_fuel: float = 100.0
    storage_capacity: int = 300

    # Timing (seconds)
    fuel_decay_interval: float = 0.5
    gravity_interval: float = 0.2
    ascend_lock_delay: float = 0.5

    rewards: dict[str, dict[str, float]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Reject layouts the grid generator cannot honour."""
        if self.grid_size < 4:
            msg = f"grid_size must be at least 4, got {self.grid_size}"
            raise ValueError(msg)
        if not (0 <= self.start_col < self.grid_size and 0 <= self.start_row < 2):
            msg = (
                f"start ({self.start_col}, {self.start_row}) must be in the "
                "sky rows of the grid"
            )
            raise ValueError(msg)

    def reward_table(self) -> dict[Tile, Reward]:
        """Return the default reward table with any overrides applied.

        Raises:
            ValueError: If an override names an unknown content tag.
        """
        table = dict(DEFAULT_REWARDS)
        for tag, values in self.rewards.items():
            try:
                tile = Tile(tag)
            except ValueError:
                msg = f"unknown content tag in rewards: {tag!r}"
                raise ValueError(msg) from None
            base = table.get(tile, Reward())
            table[tile] = Reward(
                money=float(values.get("money", base.money)),
                storage=int(values.get("storage", base.storage)),
            )
        return table

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            grid_size=data.get("grid_size", cls.grid_size),
            start_col=data.get("start_col", cls.start_col),
            start_row=data.get("start_row", cls.start_row),
            initial_fuel=data.get("initial_fuel", cls.initial_fuel),
            storage_capacity=data.get(
                "storage_capacity",
                cls.storage_capacity,
            ),
            fuel_decay_interval=data.get(
                "fuel_decay_interval",
                cls.fuel_decay_interval,
            ),
            gravity_interval=data.get(
                "gravity_interval",
                cls.gravity_interval,
            ),
            ascend_lock_delay=data.get(
                "ascend_lock_delay",
                cls.ascend_lock_delay,
            ),
            rewards=data.get("rewards") or {},
        )
