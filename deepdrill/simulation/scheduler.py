"""Scheduler — cooperative timers driven by a monotonic clock.

All simulation timing runs through one Scheduler on one thread.  Each
call to ``advance`` fires every timer that has come due, oldest deadline
first, and each callback runs to completion before the next one starts.
Nothing here sleeps or blocks; the owner (the Pygame loop or a test)
decides when time moves forward.
"""

from __future__ import annotations

import itertools
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Timer:
    """A periodic or one-shot timer owned by a Scheduler.

    Attributes:
        scheduler: The scheduler that fires this timer.
        interval: Period (or delay, for one-shots) in seconds.
        callback: Invoked with no arguments when the timer fires.
        repeat: True for periodic timers, False for one-shots.
        name: Label used in log messages.
        due: Logical time of the next firing, or ``None`` when stopped.
    """

    scheduler: Scheduler
    interval: float
    callback: Callable[[], None]
    repeat: bool = True
    name: str = "timer"
    due: float | None = None
    order: int = field(default=0, repr=False)

    @property
    def active(self) -> bool:
        """Return True while the timer is armed."""
        return self.due is not None

    def start(self) -> None:
        """Arm the timer one interval after the scheduler's current time."""
        self.due = self.scheduler.current_time() + self.interval

    def restart(self) -> None:
        """Re-arm from now, discarding any pending deadline."""
        self.start()

    def stop(self) -> None:
        """Disarm the timer.  Stopping an idle timer is a no-op."""
        if self.due is not None:
            logger.debug("stopped %s", self.name)
        self.due = None


@dataclass
class Scheduler:
    """Owns a set of timers and fires them as the clock advances.

    Attributes:
        clock: Monotonic time source in seconds.
        now: Logical time of the last ``advance`` (or of the firing in
            progress, while callbacks run).
        timers: Every timer created through this scheduler.
    """

    clock: Callable[[], float] = time.monotonic
    now: float = field(init=False)
    timers: list[Timer] = field(init=False, default_factory=list)
    _counter: itertools.count = field(
        init=False,
        repr=False,
        default_factory=itertools.count,
    )
    _in_advance: bool = field(init=False, repr=False, default=False)

    def __post_init__(self) -> None:
        """Pin logical time to the clock's current reading."""
        self.now = self.clock()

    def current_time(self) -> float:
        """Return the time new deadlines are measured from.

        Inside a callback this is the firing time.  Outside ``advance``
        (e.g. an input handler between frames) the clock may have moved
        on since the last advance, so take a fresh reading.
        """
        if self._in_advance:
            return self.now
        return max(self.now, self.clock())

    def every(
        self,
        interval: float,
        callback: Callable[[], None],
        name: str = "periodic",
    ) -> Timer:
        """Create a periodic timer.  Call ``start()`` to arm it.

        Raises:
            ValueError: If ``interval`` is not positive.
        """
        return self._create(interval, callback, repeat=True, name=name)

    def once(
        self,
        delay: float,
        callback: Callable[[], None],
        name: str = "one-shot",
    ) -> Timer:
        """Create a one-shot timer.  Call ``start()`` to arm it.

        Raises:
            ValueError: If ``delay`` is not positive.
        """
        return self._create(delay, callback, repeat=False, name=name)

    def advance(self, now: float | None = None) -> int:
        """Fire every timer due at or before ``now``.

        A periodic timer that fell several periods behind fires once per
        missed period.  Timers re-armed by a callback are measured from
        the moment that callback fired.

        Args:
            now: Target time; defaults to a fresh clock reading.

        Returns:
            Number of callbacks fired.
        """
        target = self.clock() if now is None else now
        fired = 0
        self._in_advance = True
        try:
            while True:
                found = self._next_due(target)
                if found is None:
                    break
                due, timer = found
                self.now = due
                timer.due = due + timer.interval if timer.repeat else None
                timer.callback()
                fired += 1
        finally:
            self._in_advance = False
        self.now = max(self.now, target)
        return fired

    def _create(
        self,
        interval: float,
        callback: Callable[[], None],
        *,
        repeat: bool,
        name: str,
    ) -> Timer:
        if interval <= 0:
            msg = f"timer interval must be positive, got {interval}"
            raise ValueError(msg)
        timer = Timer(
            scheduler=self,
            interval=interval,
            callback=callback,
            repeat=repeat,
            name=name,
            order=next(self._counter),
        )
        self.timers.append(timer)
        return timer

    def _next_due(self, target: float) -> tuple[float, Timer] | None:
        """Return ``(due, timer)`` for the earliest timer due by ``target``."""
        best: tuple[float, int, Timer] | None = None
        for timer in self.timers:
            if timer.due is None or timer.due > target:
                continue
            key = (timer.due, timer.order, timer)
            if best is None or key[:2] < best[:2]:
                best = key
        if best is None:
            return None
        return best[0], best[2]
