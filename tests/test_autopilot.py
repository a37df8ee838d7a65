"""Tests for the unattended driver."""

import numpy as np
import pytest

from microworld.app import ExplorerConfig, MicroWorldExplorer
from microworld.autopilot import Autopilot


@pytest.fixture
def explorer():
    return MicroWorldExplorer(ExplorerConfig(width=320, height=240, seed=9, audio_enabled=False))


class TestAutopilot:
    def test_from_config_off(self):
        assert Autopilot.from_config(ExplorerConfig()) is None

    def test_from_config_on(self):
        pilot = Autopilot.from_config(ExplorerConfig(drift=0.5, fps=30))
        assert pilot.drift == 0.5
        assert pilot.fps == 30

    def test_drift_per_frame(self, explorer):
        pilot = Autopilot(drift=0.6, fps=60)
        for _ in range(10):
            pilot.step(explorer)
        assert explorer.zoom.level == pytest.approx(0.1)

    def test_no_clicks_by_default(self, explorer):
        pilot = Autopilot(drift=1.0)
        assert pilot.step(explorer) is None
        assert len(explorer.clicks) == 0

    def test_click_interval(self, explorer):
        pilot = Autopilot(click_interval=5, rng=np.random.default_rng(0))
        events = []
        for frame in range(11):
            explorer.frame_count = frame
            event = pilot.step(explorer)
            if event is not None:
                events.append(event)
        assert [e.frame for e in events] == [0, 5, 10]
        assert not explorer.mouse_pressed

    def test_clicks_avoid_slider(self, explorer):
        pilot = Autopilot(click_interval=1, rng=np.random.default_rng(1))
        for frame in range(50):
            explorer.frame_count = frame
            event = pilot.step(explorer)
            assert 0 <= event.x <= explorer.width
            assert event.y <= explorer.slider.y - 20
        assert explorer.zoom.level == 0.0
