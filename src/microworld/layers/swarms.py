"""Molecular swarms: particles on circular orbits, clicks set off pulse rings."""

import math

import numpy as np
import pygame

from microworld import draw
from microworld.layers.base import FrameContext, Layer


class SwarmLayer(Layer):
    name = "Molecular Swarms"

    def __init__(self, width, height, rng=None, index=0, count: int = 220):
        super().__init__(width, height, rng, index)
        self.angles = self.rng.uniform(0, 2 * math.pi, count)
        self.radii = self.rng.uniform(24, 240, count)
        self.speeds = self.rng.uniform(0.004, 0.012, count)

    def positions(self, frame: int, width: int, height: int) -> np.ndarray:
        """(N, 2) particle positions around the canvas centre at `frame`."""
        ang = self.angles + frame * self.speeds
        xs = width / 2 + np.cos(ang) * self.radii
        ys = height / 2 + np.sin(ang) * self.radii
        return np.column_stack((xs, ys))

    def display(self, surface: pygame.Surface, alpha: float, ctx: FrameContext):
        draw.wash(surface, (0, 0, 45), 255 * alpha)

        if draw.alpha_byte(180 * alpha) > 0:
            dots = draw.sheet(surface)
            color = draw.rgba((255, 220, 120), 180 * alpha)
            for x, y in self.positions(ctx.frame, ctx.width, ctx.height):
                pygame.draw.circle(dots, color, (float(x), float(y)), 2.5)
            surface.blit(dots, (0, 0))

        # Local pulse rings
        for event in self.clicks(ctx):
            diameter = 20 + (event.age(ctx.frame) % 60)
            draw.ring(surface, (255, 255, 140), 220 * alpha, (event.x, event.y), diameter, 2)
            ctx.audio.blip("pulse", 220, 0.22)

        self.label(surface, alpha)
