"""
Layer contract shared by the six scenes.

A layer owns its entities, seeds them at construction and animates them in
display(). The explorer calls display() with the layer's share of the
cross-fade; every fill a layer makes is scaled by that alpha so the two
visible layers fade into each other.
"""

import abc
from dataclasses import dataclass

import numpy as np
import pygame

from microworld import draw
from microworld.audio import AudioBank
from microworld.events import ClickEvent, ClickEventBus

LABEL_SIZE = 30


@dataclass
class FrameContext:
    """Per-frame state handed to every layer."""

    frame: int
    width: int
    height: int
    mouse: tuple[float, float]
    mouse_pressed: bool
    clicks: ClickEventBus
    audio: AudioBank


class Layer(abc.ABC):
    """Abstract base for all scenes."""

    name = ""

    def __init__(
        self,
        width: int,
        height: int,
        rng: np.random.Generator | None = None,
        index: int = 0,
    ):
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()
        self.index = index

    @abc.abstractmethod
    def display(self, surface: pygame.Surface, alpha: float, ctx: FrameContext):
        """Animate and draw one frame at the given opacity (0..1)."""
        pass

    def on_hidden(self, ctx: FrameContext):
        """Called on frames where the layer is not part of the blend pair."""
        pass

    def clicks(self, ctx: FrameContext) -> list[ClickEvent]:
        """Live click events attributed to this layer."""
        return list(ctx.clicks.for_layer(self.index))

    def label(self, surface: pygame.Surface, alpha: float):
        draw.text(
            surface,
            self.name,
            LABEL_SIZE,
            (255, 255, 255),
            240 * alpha,
            (surface.get_width() / 2, 16),
        )
