"""
Bacteria: rod-shaped swimmers steered by a Perlin flow field.

Each body turns towards the local noise heading, biased by where the mouse
sits on screen, and wraps around the edges. While the layer is on screen it
holds the low hum channel at a level proportional to its opacity.
"""

import math

import pygame

from microworld import draw
from microworld.layers.base import FrameContext, Layer
from microworld.perlin import noise01

HUM_LEVEL = 0.06
HUM_RAMP = 0.2


def _remap(value: float, low: float, high: float, out_low: float, out_high: float) -> float:
    if high == low:
        return out_low
    return out_low + (value - low) / (high - low) * (out_high - out_low)


class BacteriaLayer(Layer):
    name = "Bacteria"

    def __init__(self, width, height, rng=None, index=0, count: int = 48):
        super().__init__(width, height, rng, index)
        self.bacteria = [
            {
                "x": float(self.rng.uniform(0, width)),
                "y": float(self.rng.uniform(0, height)),
                "angle": float(self.rng.uniform(0, 2 * math.pi)),
                "length": float(self.rng.uniform(28, 42)),
                "wobble": float(self.rng.uniform(0.03, 0.06)),
            }
            for _ in range(count)
        ]
        self._humming = False

    def steer(self, ctx: FrameContext):
        """Advance every body one step through the flow field."""
        bias = (
            _remap(ctx.mouse[0], 0, ctx.width, -0.04, 0.04)
            + _remap(ctx.mouse[1], 0, ctx.height, -0.04, 0.04)
        )
        for b in self.bacteria:
            heading = noise01(b["x"] * 0.003, b["y"] * 0.003, ctx.frame * 0.005) * 2 * math.pi
            b["angle"] += (heading - b["angle"]) * 0.06 + bias
            b["x"] = (b["x"] + math.cos(b["angle"]) * 2.0) % ctx.width
            b["y"] = (b["y"] + math.sin(b["angle"]) * 2.0) % ctx.height

    def display(self, surface: pygame.Surface, alpha: float, ctx: FrameContext):
        draw.wash(surface, (12, 50, 28), 220 * alpha)

        self.steer(ctx)
        for b in self.bacteria:
            angle, length = b["angle"], b["length"]
            body = draw.ellipse_points((b["x"], b["y"]), length, 14, angle)
            draw.polygon(surface, (0, 210, 120), 210 * alpha, body)

            offset = -length * 0.35
            tail_center = (
                b["x"] + math.cos(angle) * offset,
                b["y"] + math.sin(angle) * offset,
            )
            tail_len = length * 0.4 + math.sin(ctx.frame * b["wobble"]) * 6
            tail = draw.ellipse_points(tail_center, tail_len, 8, angle, segments=16)
            draw.polygon(surface, (0, 180, 90), 160 * alpha, tail)

        ctx.audio.ramp("hum", alpha * HUM_LEVEL, HUM_RAMP)
        self._humming = True

        self.label(surface, alpha)

    def on_hidden(self, ctx: FrameContext):
        if self._humming:
            ctx.audio.ramp("hum", 0.0, HUM_RAMP)
            self._humming = False
