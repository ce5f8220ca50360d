"""HUD text and game-over styling.

Pure functions, no Pygame import, so the formatting rules can be tested
without a display.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from deepdrill.simulation.session import EndReason

if TYPE_CHECKING:
    from deepdrill.simulation.engine import EngineSnapshot

Colour = tuple[int, int, int]

EXHAUSTED_THEME: Colour = (0x0B, 0x50, 0x0B)
LAVA_THEME: Colour = (0x7E, 0x09, 0x09)
FALLBACK_THEME: Colour = (0x33, 0x33, 0x33)

_THEMES: dict[object, Colour] = {
    EndReason.OUT_OF_FUEL: EXHAUSTED_THEME,
    EndReason.STORAGE_FULL: EXHAUSTED_THEME,
    EndReason.LAVA: LAVA_THEME,
}


def status_lines(snapshot: EngineSnapshot) -> list[str]:
    """Return the fuel, storage, and money labels."""
    return [
        f"Fuel: {snapshot.fuel:.2f}",
        f"Storage: {snapshot.storage}/{snapshot.storage_capacity}",
        f"Money: ${snapshot.money:.2f}",
    ]


def game_over_lines(reason: object, money: float) -> list[str]:
    """Return the game-over message for ``reason``.

    Exhaustion reasons report the haul; lava does not.  Anything that is
    not a known EndReason gets a generic message.
    """
    if reason in (EndReason.OUT_OF_FUEL, EndReason.STORAGE_FULL):
        return ["GAME OVER", f"Collected Money: {money:.2f}"]
    if reason is EndReason.LAVA:
        return ["GAME OVER"]
    return ["GAME OVER - Unknown Reason"]


def game_over_theme(reason: object) -> Colour:
    """Return the background colour for the game-over screen."""
    return _THEMES.get(reason, FALLBACK_THEME)
