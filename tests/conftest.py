"""Pytest configuration and shared fixtures."""

import os

# Headless pygame for every test
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from types import SimpleNamespace

import numpy as np
import pygame
import pytest

from microworld import audio as audio_module
from microworld.audio import AudioBank
from microworld.events import ClickEventBus
from microworld.layers import FrameContext

TEST_WIDTH = 320
TEST_HEIGHT = 240
TEST_SR = 8000


@pytest.fixture(autouse=True)
def pygame_ready():
    pygame.init()
    yield


@pytest.fixture
def surface() -> pygame.Surface:
    return pygame.Surface((TEST_WIDTH, TEST_HEIGHT))


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def armed_audio() -> AudioBank:
    """A tone bank armed for offline rendering (no device)."""
    bank = AudioBank(sample_rate=TEST_SR)
    bank.start(realtime=False)
    return bank


@pytest.fixture
def make_ctx():
    """Factory for FrameContext with sensible test defaults."""

    def _make(frame=1, clicks=None, audio=None, mouse=(160.0, 120.0), pressed=False):
        return FrameContext(
            frame=frame,
            width=TEST_WIDTH,
            height=TEST_HEIGHT,
            mouse=mouse,
            mouse_pressed=pressed,
            clicks=clicks if clicks is not None else ClickEventBus(),
            audio=audio if audio is not None else AudioBank(sample_rate=TEST_SR),
        )

    return _make


class FakePortAudioError(Exception):
    pass


class FakeStream:
    """Stands in for sounddevice.OutputStream."""

    instances: list = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.started = False
        self.closed = False
        FakeStream.instances.append(self)

    def start(self):
        self.started = True

    def stop(self):
        self.started = False

    def close(self):
        self.closed = True


@pytest.fixture
def fake_sounddevice(monkeypatch):
    """Replace the sounddevice module used by the tone bank."""
    FakeStream.instances = []
    fake = SimpleNamespace(OutputStream=FakeStream, PortAudioError=FakePortAudioError)
    monkeypatch.setattr(audio_module, "sd", fake)
    return fake
