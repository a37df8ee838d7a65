"""
Looping zoom position and cross-fade pair.

The zoom level is a single float that accumulates wheel and slider input
without bounds. Before every frame it is wrapped into [0, L) and split into
the pair of layers being blended plus the blend factor between them.
"""

import math
from dataclasses import dataclass


def wrap_zoom(value: float, layer_count: int) -> float:
    """
    Wrap a zoom value into [0, layer_count) using true modulo.

    Args:
        value: Any real zoom value, negative or overflowed.
        layer_count: Number of layers (L).

    Returns:
        The equivalent position in [0, L).
    """
    wrapped = value % layer_count
    # -1e-17 % 6 rounds to 6.0
    if wrapped >= layer_count:
        wrapped = 0.0
    return float(wrapped)


def nearest_layer(value: float, layer_count: int) -> int:
    """Layer closest to a zoom value, rounding halves up."""
    return int(math.floor(value + 0.5)) % layer_count


@dataclass(frozen=True)
class BlendPair:
    """The two layers on screen and how far the fade has progressed."""

    index: int
    next_index: int
    blend: float  # 0 inclusive, 1 exclusive

    @property
    def current_weight(self) -> float:
        return 1.0 - self.blend

    @property
    def next_weight(self) -> float:
        return self.blend


def blend_pair(value: float, layer_count: int) -> BlendPair:
    """Split a zoom value into (index, next_index, blend)."""
    wrapped = wrap_zoom(value, layer_count)
    index = int(math.floor(wrapped))
    return BlendPair(
        index=index,
        next_index=(index + 1) % layer_count,
        blend=wrapped - index,
    )


class ZoomController:
    """
    Owns the continuous zoom level.

    Two input sources feed it: the wheel (relative, scaled by a
    sensitivity) and the slider (absolute jump to a fraction of L).
    """

    def __init__(self, layer_count: int, wheel_sensitivity: float = 0.0016):
        if layer_count < 1:
            raise ValueError("layer_count must be at least 1")
        self.layer_count = layer_count
        self.wheel_sensitivity = wheel_sensitivity
        self.level = 0.0

    def scroll(self, delta_y: float):
        """Apply a wheel delta (pixels, positive = scroll down)."""
        self.level += delta_y * -self.wheel_sensitivity

    def jump_to_fraction(self, fraction: float):
        fraction = min(max(fraction, 0.0), 1.0)
        self.level = fraction * self.layer_count

    def advance(self, delta: float):
        self.level += delta

    def normalize(self) -> float:
        self.level = wrap_zoom(self.level, self.layer_count)
        return self.level

    def pair(self) -> BlendPair:
        self.normalize()
        return blend_pair(self.level, self.layer_count)

    def nearest(self) -> int:
        return nearest_layer(self.level, self.layer_count)
