"""Session — live/terminal status of one simulation run.

A session starts ``Running`` and moves to ``Ended(reason)`` exactly once.
The first qualifying condition wins; later triggers are ignored so the
reason can never be overwritten and end listeners never run twice.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class EndReason(Enum):
    """Why a session ended."""

    OUT_OF_FUEL = "fuel"
    STORAGE_FULL = "storage"
    LAVA = "lava"


@dataclass
class Session:
    """Terminal-state tracker for a single run.

    Attributes:
        reason: ``None`` while running, otherwise the end reason.
        listeners: Callbacks invoked once, with the reason, on termination.
    """

    reason: EndReason | None = None
    listeners: list[Callable[[EndReason], None]] = field(
        default_factory=list,
        repr=False,
    )

    @property
    def is_running(self) -> bool:
        """Return True until the session has ended."""
        return self.reason is None

    @property
    def ended(self) -> bool:
        """Return True once the session has ended."""
        return self.reason is not None

    def on_end(self, callback: Callable[[EndReason], None]) -> None:
        """Register ``callback`` to run when the session ends."""
        self.listeners.append(callback)

    def end(self, reason: EndReason) -> bool:
        """End the session with ``reason`` if it is still running.

        Args:
            reason: Why the run is over.

        Returns:
            True if this call ended the session, False if it had already
            ended (in which case nothing changes).
        """
        if self.reason is not None:
            logger.debug("ignoring %s, session already ended", reason.name)
            return False
        self.reason = reason
        logger.info("session ended: %s", reason.name)
        for callback in self.listeners:
            callback(reason)
        return True
