"""Cosmic infinity: a noise-drifting starfield with a periodic twinkle tone."""

import pygame

from microworld import draw
from microworld.layers.base import FrameContext, Layer
from microworld.perlin import noise01

STAR_COUNT = 420
TWINKLE_PERIOD = 110


class CosmicLayer(Layer):
    name = "Cosmic Infinity"

    def star_position(self, i: int, frame: int, width: int, height: int) -> tuple[float, float]:
        x = noise01(i * 0.09, frame * 0.0016) * width
        y = noise01(i * 0.12, frame * 0.0016 + 77) * height
        return x, y

    def display(self, surface: pygame.Surface, alpha: float, ctx: FrameContext):
        draw.wash(surface, (0, 0, 0), 255 * alpha)

        if draw.alpha_byte(255 * alpha) > 0:
            stars = draw.sheet(surface)
            color = draw.rgba((255, 255, 255), 255 * alpha)
            for i in range(STAR_COUNT):
                x, y = self.star_position(i, ctx.frame, ctx.width, ctx.height)
                stars.set_at((min(int(x), ctx.width - 1), min(int(y), ctx.height - 1)), color)
            surface.blit(stars, (0, 0))

        if ctx.audio.ready and alpha > 0.5 and ctx.frame % TWINKLE_PERIOD == 0:
            ctx.audio.blip("pulse", 110, 0.06, 0.05, 0.3)

        self.label(surface, alpha)
