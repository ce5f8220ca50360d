"""Tests for deepdrill.drill - movement rules, gravity, and the ascend lock."""

import pytest

from deepdrill.drill.drill import Direction, Drill
from deepdrill.simulation.economy import Economy
from deepdrill.simulation.scheduler import Scheduler
from deepdrill.simulation.session import EndReason, Session
from deepdrill.world.grid import Grid
from deepdrill.world.tile import Tile
from tests.helpers import FakeClock


class TestDirection:
    """Tests for the Direction enum."""

    def test_deltas(self) -> None:
        assert (Direction.LEFT.dcol, Direction.LEFT.drow) == (-1, 0)
        assert (Direction.RIGHT.dcol, Direction.RIGHT.drow) == (1, 0)
        assert (Direction.UP.dcol, Direction.UP.drow) == (0, -1)
        assert (Direction.DOWN.dcol, Direction.DOWN.drow) == (0, 1)


class TestMoves:
    """Accepted and refused moves in the four directions."""

    def test_sideways_in_sky(self, drill: Drill, economy: Economy) -> None:
        assert drill.move_left()
        assert drill.position == (0, 1)
        assert drill.move_right()
        assert drill.position == (1, 1)
        assert economy.fuel == 98

    def test_off_grid_refused(self, drill: Drill, economy: Economy) -> None:
        drill.col = 0
        assert not drill.move_left()
        assert drill.position == (0, 1)
        assert economy.fuel == 100

    def test_dig_down_through_soil(self, drill: Drill, shaft: Grid) -> None:
        assert drill.move_down()
        assert drill.position == (1, 2)
        assert shaft.content_at(2, 1) is Tile.EMPTY

    def test_valuable_credit(self, drill: Drill, economy: Economy) -> None:
        drill.move_down()
        drill.move_down()
        assert drill.position == (1, 3)
        assert economy.money == 20000
        assert economy.storage == 80
        assert economy.fuel == 98

    def test_revisit_credits_nothing(self, drill: Drill, economy: Economy) -> None:
        drill.move_down()
        drill.move_down()
        drill.move_down()
        drill.move_up()
        assert drill.position == (1, 3)
        assert economy.money == 20000
        assert economy.storage == 80

    def test_obstacle_refused(self, drill: Drill, economy: Economy) -> None:
        drill.col, drill.row = 1, 3
        assert not drill.move_left()
        assert drill.position == (1, 3)
        assert economy.fuel == 100

    def test_lava_ends_session_without_moving(
        self,
        drill: Drill,
        economy: Economy,
        session: Session,
        shaft: Grid,
    ) -> None:
        drill.col, drill.row = 2, 3
        assert not drill.move_right()
        assert drill.position == (2, 3)
        assert session.reason is EndReason.LAVA
        assert economy.fuel == 100
        assert shaft.content_at(3, 3) is Tile.LAVA

    def test_no_moves_after_end(self, drill: Drill, session: Session) -> None:
        session.end(EndReason.OUT_OF_FUEL)
        assert not drill.move_left()
        assert drill.position == (1, 1)

    def test_listeners_notified(self, drill: Drill) -> None:
        seen: list[tuple[Direction, int, int]] = []
        drill.on_move(lambda d, c, r: seen.append((d, c, r)))
        drill.move_down()
        drill.col = 0
        drill.move_left()  # refused, off the grid
        assert seen == [(Direction.DOWN, 1, 2)]


class TestResourceGuards:
    """Moves are refused, at no cost, when fuel or storage runs out."""

    def test_no_fuel(self, drill: Drill, economy: Economy) -> None:
        economy.fuel = 0.0
        assert not drill.move_down()
        assert drill.position == (1, 1)
        assert economy.fuel == 0.0

    def test_storage_full(self, drill: Drill, economy: Economy) -> None:
        economy.storage = 300
        assert not drill.move_right()
        assert drill.position == (1, 1)
        assert economy.fuel == 100

    def test_guard_runs_before_lava_check(
        self,
        drill: Drill,
        economy: Economy,
        session: Session,
    ) -> None:
        drill.col, drill.row = 2, 3
        economy.fuel = 0.0
        assert not drill.move_right()
        assert session.is_running

    def test_last_unit_of_fuel(self, drill: Drill, economy: Economy) -> None:
        economy.fuel = 0.5
        assert drill.move_left()
        assert economy.fuel == 0.0
        assert not drill.move_right()

    def test_filling_hold_ends_session(
        self,
        drill: Drill,
        economy: Economy,
        session: Session,
    ) -> None:
        economy.storage = 230
        drill.move_down()
        drill.move_down()  # valuable2: +80
        assert economy.storage == 310
        assert session.reason is EndReason.STORAGE_FULL
        assert not drill.move_down()
        assert drill.position == (1, 3)


class TestAscend:
    """Upward moves only work through open space."""

    def test_up_from_top_row(self, drill: Drill) -> None:
        drill.row = 0
        assert not drill.move_up()
        assert drill.position == (1, 0)

    def test_up_through_sky(self, drill: Drill) -> None:
        assert drill.move_up()
        assert drill.position == (1, 0)
        assert drill.ascending

    def test_cannot_dig_upward(self, drill: Drill, economy: Economy) -> None:
        drill.col, drill.row = 2, 3  # valuable1 above
        assert not drill.move_up()
        assert drill.position == (2, 3)
        assert not drill.ascending
        assert economy.money == 0

    def test_up_into_excavated_cell(self, drill: Drill, shaft: Grid) -> None:
        drill.col, drill.row = 2, 3
        shaft.excavate(2, 2)
        assert drill.move_up()
        assert drill.position == (2, 2)

    def test_up_into_lava(self, drill: Drill, shaft: Grid, session: Session) -> None:
        shaft.set_content(3, 2, Tile.LAVA)
        drill.col, drill.row = 2, 4
        assert not drill.move_up()
        assert session.reason is EndReason.LAVA

    def test_up_restarts_lock_timer(
        self,
        drill: Drill,
        scheduler: Scheduler,
        fake_clock: FakeClock,
    ) -> None:
        lock = scheduler.once(0.5, drill.release_ascend_lock, name="ascend-lock")
        drill.ascend_lock = lock
        drill.move_up()
        assert lock.due == 0.5
        scheduler.advance(fake_clock.advance(0.3))
        drill.move_down()
        drill.move_up()
        assert lock.due == pytest.approx(0.8)


class TestGravity:
    """Gravity pulls the drill into empty cells below it."""

    def test_falls_into_empty(self, drill: Drill, economy: Economy) -> None:
        drill.col, drill.row = 2, 3
        assert drill.apply_gravity()
        assert drill.position == (2, 4)
        assert economy.fuel == 99

    def test_soil_holds_drill(self, drill: Drill) -> None:
        assert not drill.apply_gravity()
        assert drill.position == (1, 1)

    def test_sky_falls_onto_crust(self, drill: Drill) -> None:
        drill.row = 0
        assert drill.apply_gravity()
        assert drill.position == (1, 1)
        assert not drill.apply_gravity()

    def test_fall_collects_nothing_from_empty(
        self,
        drill: Drill,
        economy: Economy,
    ) -> None:
        drill.col, drill.row = 2, 3
        drill.apply_gravity()
        assert economy.money == 0
        assert economy.storage == 0

    def test_bottom_row_is_safe(self, drill: Drill) -> None:
        drill.col, drill.row = 2, 5
        assert not drill.apply_gravity()

    def test_suppressed_while_ascending(self, drill: Drill) -> None:
        drill.col, drill.row = 2, 4
        assert drill.move_up()
        assert drill.position == (2, 3)
        assert not drill.apply_gravity()
        drill.release_ascend_lock()
        assert drill.apply_gravity()
        assert drill.position == (2, 4)

    def test_no_fall_without_fuel(self, drill: Drill, economy: Economy) -> None:
        drill.col, drill.row = 2, 3
        economy.fuel = 0.0
        assert not drill.apply_gravity()
        assert drill.position == (2, 3)

    def test_no_fall_after_end(self, drill: Drill, session: Session) -> None:
        drill.col, drill.row = 2, 3
        session.end(EndReason.STORAGE_FULL)
        assert not drill.apply_gravity()
        assert drill.position == (2, 3)
