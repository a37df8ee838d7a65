"""
Coherent noise sampling in the 0..1 range.

Thin wrapper over the `noise` package's Perlin functions. Raw Perlin output
is centred on zero; the layer recipes expect values centred on 0.5.
"""

import noise


def noise01(
    x: float,
    y: float = 0.0,
    z: float | None = None,
    octaves: int = 4,
    persistence: float = 0.5,
) -> float:
    """Sample 2D (or 3D when z is given) Perlin noise remapped to [0, 1]."""
    if z is None:
        value = noise.pnoise2(x, y, octaves=octaves, persistence=persistence)
    else:
        value = noise.pnoise3(x, y, z, octaves=octaves, persistence=persistence)
    return min(1.0, max(0.0, (value + 1.0) * 0.5))
