"""
Micro-World Explorer.

A looping, cross-fading zoom through six procedural scenes with click
reactions and synthesized tones.
"""

from microworld.app import ExplorerConfig, MicroWorldExplorer
from microworld.zoom import BlendPair, ZoomController

__version__ = "0.1.0"
