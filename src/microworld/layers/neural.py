"""Neural webs: a static graph of nearby nodes; clicks fire a glowing neuron."""

import math

import numpy as np
import pygame

from microworld import draw
from microworld.layers.base import FrameContext, Layer

LINK_DISTANCE = 240


class NeuralLayer(Layer):
    name = "Neural Webs"

    def __init__(self, width, height, rng=None, index=0, count: int = 22):
        super().__init__(width, height, rng, index)
        self.nodes = np.column_stack(
            (self.rng.uniform(0, width, count), self.rng.uniform(0, height, count))
        )

    def links(self) -> list[tuple[int, int]]:
        """Index pairs (i < j) of nodes closer than LINK_DISTANCE."""
        diff = self.nodes[:, None, :] - self.nodes[None, :, :]
        dist = np.sqrt((diff ** 2).sum(axis=-1))
        ii, jj = np.nonzero(np.triu(dist < LINK_DISTANCE, k=1))
        return list(zip(ii.tolist(), jj.tolist()))

    def display(self, surface: pygame.Surface, alpha: float, ctx: FrameContext):
        draw.wash(surface, (8, 12, 36), 255 * alpha)

        if draw.alpha_byte(160 * alpha) > 0:
            web = draw.sheet(surface)
            color = draw.rgba((210, 160, 255), 160 * alpha)
            for i, j in self.links():
                pygame.draw.line(web, color, self.nodes[i].tolist(), self.nodes[j].tolist(), 1)
            surface.blit(web, (0, 0))

        for x, y in self.nodes:
            draw.disc(surface, (205, 140, 255), 220 * alpha, (x, y), 12)

        # Fire neuron
        for event in self.clicks(ctx):
            glow = 42 + math.sin(ctx.frame * 0.22) * 16
            draw.disc(surface, (255, 190, 255), 220 * alpha, (event.x, event.y), glow)
            ctx.audio.blip("bloom", 520, 0.22)

        self.label(surface, alpha)
