"""
The six scenes of the explorer, in zoom order.
"""

import numpy as np

from microworld.layers.bacteria import BacteriaLayer
from microworld.layers.base import FrameContext, Layer
from microworld.layers.cells import CellLayer
from microworld.layers.cosmic import CosmicLayer
from microworld.layers.ecosystem import EcosystemLayer
from microworld.layers.neural import NeuralLayer
from microworld.layers.swarms import SwarmLayer


def build_layers(
    width: int,
    height: int,
    rng: np.random.Generator | None = None,
    max_cells: int = 600,
) -> list[Layer]:
    """Construct every layer with its index set to its position in the list."""
    rng = rng if rng is not None else np.random.default_rng()
    layers = [
        CellLayer(width, height, rng, max_cells=max_cells),
        BacteriaLayer(width, height, rng),
        SwarmLayer(width, height, rng),
        NeuralLayer(width, height, rng),
        EcosystemLayer(width, height, rng),
        CosmicLayer(width, height, rng),
    ]
    for i, layer in enumerate(layers):
        layer.index = i
    return layers
