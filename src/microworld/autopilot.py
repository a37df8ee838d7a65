"""
Unattended driver for kiosk mode and headless recording.

Drifts the zoom at a constant rate and, optionally, clicks a random spot
every few frames through the explorer's normal input path.
"""

import numpy as np

from microworld.events import ClickEvent


class Autopilot:
    def __init__(
        self,
        drift: float = 0.0,
        click_interval: int = 0,
        fps: int = 60,
        rng: np.random.Generator | None = None,
    ):
        self.drift = drift
        self.click_interval = click_interval
        self.fps = fps
        self.rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def from_config(cls, cfg, rng=None) -> "Autopilot | None":
        """Build from an ExplorerConfig, or None when both features are off."""
        if not cfg.drift and cfg.auto_click_interval <= 0:
            return None
        return cls(cfg.drift, cfg.auto_click_interval, cfg.fps, rng)

    def step(self, explorer) -> ClickEvent | None:
        """Apply one frame of drift and, when due, a synthetic click."""
        if self.drift:
            explorer.zoom.advance(self.drift / self.fps)

        if self.click_interval <= 0 or explorer.frame_count % self.click_interval != 0:
            return None

        # Stay above the slider so a synthetic click never grabs it
        top_of_slider = explorer.slider.y - 20
        x = float(self.rng.uniform(0, explorer.width))
        y = float(self.rng.uniform(0, max(top_of_slider, 1)))
        event = explorer.press(x, y)
        explorer.release()
        return event
