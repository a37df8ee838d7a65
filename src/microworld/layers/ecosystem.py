"""
Abstract ecosystem: coral-like blooms whose position and outline drift with
Perlin noise. Holding the mouse grows a living bloom under the pointer.
"""

import math

import pygame

from microworld import draw
from microworld.layers.base import FrameContext, Layer
from microworld.perlin import noise01

BLOOM_COUNT = 26
BLOOM_VERTICES = 18


class EcosystemLayer(Layer):
    name = "Abstract Ecosystem"

    def bloom_outline(self, i: int, frame: int, width: int, height: int) -> list[tuple[float, float]]:
        x = noise01(i * 0.11, frame * 0.004) * width
        y = noise01(i * 0.17, frame * 0.004 + 99) * height
        points = []
        for k in range(BLOOM_VERTICES):
            ang = k * 2 * math.pi / BLOOM_VERTICES
            # half offset keeps the first axis off the Perlin lattice
            rr = 34 + noise01(i + 0.5, ang, frame * 0.014) * 90
            points.append((x + math.cos(ang) * rr, y + math.sin(ang) * rr))
        return points

    def display(self, surface: pygame.Surface, alpha: float, ctx: FrameContext):
        draw.wash(surface, (44, 16, 28), 255 * alpha)

        if draw.alpha_byte(210 * alpha) > 0:
            for i in range(BLOOM_COUNT):
                outline = self.bloom_outline(i, ctx.frame, ctx.width, ctx.height)
                draw.polygon(surface, (205, 120, 185), 210 * alpha, outline)

        # Drag to grow
        if ctx.mouse_pressed:
            size = 56 + math.sin(ctx.frame * 0.12) * 22
            draw.disc(surface, (160, 255, 210), 190 * alpha, ctx.mouse, size)
            ctx.audio.blip("bloom", 240, 0.12, 0.02, 0.18)

        self.label(surface, alpha)
