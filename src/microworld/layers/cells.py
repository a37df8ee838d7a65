"""Cells: pulsing membranes that divide where the user clicks."""

import math

import pygame

from microworld import draw
from microworld.events import ClickEvent
from microworld.layers.base import FrameContext, Layer


class CellLayer(Layer):
    name = "Cells"

    def __init__(self, width, height, rng=None, index=0, count: int = 22, max_cells: int = 600):
        super().__init__(width, height, rng, index)
        self.max_cells = max_cells
        self.cells = [
            self._new_cell(
                self.rng.uniform(0, width),
                self.rng.uniform(0, height),
                radius=(36, 62),
                speed=(0.005, 0.02),
            )
            for _ in range(count)
        ]

    def _new_cell(self, x, y, radius, speed) -> dict:
        return {
            "x": float(x),
            "y": float(y),
            "r": float(self.rng.uniform(*radius)),
            "speed": float(self.rng.uniform(*speed)),
            "phase": float(self.rng.uniform(0, 2 * math.pi)),
        }

    def divide(self, event: ClickEvent) -> bool:
        """Spawn a daughter cell near a click. Returns False once the dish is full."""
        if len(self.cells) >= self.max_cells:
            return False
        self.cells.append(
            self._new_cell(
                event.x + self.rng.uniform(-24, 24),
                event.y + self.rng.uniform(-24, 24),
                radius=(28, 44),
                speed=(0.008, 0.018),
            )
        )
        return True

    def display(self, surface: pygame.Surface, alpha: float, ctx: FrameContext):
        draw.wash(surface, (25, 35, 60), 200 * alpha)

        for c in self.cells:
            pulse = math.sin(ctx.frame * c["speed"] + c["phase"]) * 8
            size = c["r"] + pulse
            center = (c["x"], c["y"])
            draw.disc(surface, (120, 200, 255), 40 * alpha, center, size * 1.6)  # halo
            draw.disc(surface, (120, 210, 255), 180 * alpha, center, size)  # membrane
            draw.disc(surface, (255, 255, 255), 220 * alpha, center, size * 0.35)  # nucleus

        # Mitosis
        for event in self.clicks(ctx):
            self.divide(event)
            ctx.audio.blip("pop", 420, 0.28)

        self.label(surface, alpha)
