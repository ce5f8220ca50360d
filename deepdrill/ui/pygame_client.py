"""Pygame 2D visualization for Deep Drill.

Draws the grid, the animated drill, and the HUD, maps the arrow keys to
move commands, and shows the game-over screen once the session ends.
All simulation state is read through ``SimulationEngine.snapshot`` and
mutated only through ``command`` and ``update`` on this thread.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import pygame

if TYPE_CHECKING:
    from deepdrill.simulation.engine import EngineSnapshot, SimulationEngine

from deepdrill.drill.drill import Direction
from deepdrill.ui.hud import game_over_lines, game_over_theme, status_lines

# Colour palette
_SKY = (0, 191, 255)
_UNDERGROUND = (188, 143, 143)
_TEXT = (255, 255, 255)

# Swatch per content tag; empty cells show the background through
_TILE_COLOURS: dict[str, tuple[int, int, int]] = {
    "soil": (139, 90, 43),
    "obstacle": (90, 90, 90),
    "valuable1": (218, 165, 32),
    "valuable2": (200, 30, 60),
    "valuable3": (40, 180, 90),
    "lava": (255, 90, 0),
}

_DRILL_BODY = (70, 70, 80)
# Drill bit colour cycles between these while animating
_BIT_LO = np.array([150, 150, 150], dtype=np.float64)
_BIT_HI = np.array([255, 230, 120], dtype=np.float64)

_SKY_ROWS = 2
_FRAME_SECONDS = 0.1

# Animation frame count per direction
_FRAMES: dict[Direction, int] = {
    Direction.LEFT: 8,
    Direction.RIGHT: 6,
    Direction.UP: 1,
    Direction.DOWN: 7,
}

_KEYS: dict[int, Direction] = {
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
}


class PygameRenderer:
    """Renders a SimulationEngine into a Pygame window.

    Attributes:
        engine: The simulation engine to visualise.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    def __init__(self, engine: SimulationEngine, cell_size: int = 50) -> None:
        """Initialise the renderer.

        Args:
            engine: The simulation engine to render.
            cell_size: Pixel width/height per grid cell.
        """
        self.engine = engine
        self.cell_size = cell_size
        self._facing = Direction.DOWN
        self._anim_started = engine.clock()

        side = engine.grid.size * cell_size
        pygame.init()
        self.screen = pygame.display.set_mode((side, side))
        pygame.display.set_caption("Deep Drill")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 16)
        self.big_font = pygame.font.SysFont("monospace", 36, bold=True)
        self.running = True

        engine.drill.on_move(self._on_drill_move)

    def run(self, fps: int = 60) -> None:
        """Main loop: handle input, advance timers, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            self.clock.tick(fps)
            self._handle_events()
            self.engine.update()
            self._draw(self.engine.snapshot())

        pygame.quit()

    def _on_drill_move(self, direction: Direction, col: int, row: int) -> None:
        """Restart the drill animation for the new heading."""
        self._facing = direction
        self._anim_started = self.engine.clock()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key in _KEYS:
                    self.engine.command(_KEYS[event.key])

    def _draw(self, snapshot: EngineSnapshot) -> None:
        """Render one frame."""
        if snapshot.reason is not None:
            self._draw_game_over(snapshot)
        else:
            self._draw_tiles(snapshot)
            self._draw_drill(snapshot)
            self._draw_hud(snapshot)
        pygame.display.flip()

    def _draw_tiles(self, snapshot: EngineSnapshot) -> None:
        """Fill the background, then draw a swatch for every non-empty cell."""
        cs = self.cell_size
        for row, tags in enumerate(snapshot.tags):
            background = _SKY if row < _SKY_ROWS else _UNDERGROUND
            for col, tag in enumerate(tags):
                rect = (col * cs, row * cs, cs, cs)
                pygame.draw.rect(self.screen, background, rect)
                colour = _TILE_COLOURS.get(tag)
                if colour is not None:
                    inset = max(1, cs // 10)
                    pygame.draw.rect(
                        self.screen,
                        colour,
                        (
                            col * cs + inset,
                            row * cs + inset,
                            cs - 2 * inset,
                            cs - 2 * inset,
                        ),
                    )

    def _draw_drill(self, snapshot: EngineSnapshot) -> None:
        """Draw the drill body with its bit pointing the way it last moved."""
        cs = self.cell_size
        x0 = snapshot.col * cs
        y0 = snapshot.row * cs
        pad = cs // 5
        pygame.draw.rect(
            self.screen,
            _DRILL_BODY,
            (x0 + pad, y0 + pad, cs - 2 * pad, cs - 2 * pad),
        )

        frames = _FRAMES[self._facing]
        elapsed = self.engine.clock() - self._anim_started
        frame = int(elapsed / _FRAME_SECONDS) % frames
        t = frame / max(1, frames - 1)
        bit_colour = _BIT_LO + t * (_BIT_HI - _BIT_LO)

        cx, cy = x0 + cs // 2, y0 + cs // 2
        half = cs // 2
        dx, dy = self._facing.dcol, self._facing.drow
        tip = (cx + dx * half, cy + dy * half)
        # Base of the bit sits on the body edge, perpendicular to heading
        base_a = (cx + dx * pad - dy * pad, cy + dy * pad + dx * pad)
        base_b = (cx + dx * pad + dy * pad, cy + dy * pad - dx * pad)
        pygame.draw.polygon(
            self.screen,
            bit_colour.astype(int).tolist(),
            [tip, base_a, base_b],
        )

    def _draw_hud(self, snapshot: EngineSnapshot) -> None:
        """Draw the fuel/storage/money labels in the top-left corner."""
        y = 10
        for line in status_lines(snapshot):
            surf = self.font.render(line, True, _TEXT)
            self.screen.blit(surf, (10, y))
            y += 20

    def _draw_game_over(self, snapshot: EngineSnapshot) -> None:
        """Replace the board with the reason-specific game-over screen."""
        self.screen.fill(game_over_theme(snapshot.reason))
        lines = game_over_lines(snapshot.reason, snapshot.money)
        width, height = self.screen.get_size()
        line_height = self.big_font.get_linesize()
        y = (height - line_height * len(lines)) // 2 - 40
        for line in lines:
            surf = self.big_font.render(line, True, _TEXT)
            self.screen.blit(surf, ((width - surf.get_width()) // 2, y))
            y += line_height
