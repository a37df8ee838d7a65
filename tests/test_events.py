"""Tests for the click event bus."""

import dataclasses

import pytest

from microworld.events import ClickEvent, ClickEventBus
from microworld.zoom import nearest_layer


class TestClickEventBus:
    def test_record_returns_event(self):
        bus = ClickEventBus()
        event = bus.record(10, 20, 5, 3)
        assert event == ClickEvent(x=10, y=20, frame=5, layer_index=3)
        assert len(bus) == 1

    def test_events_are_immutable(self):
        event = ClickEventBus().record(1, 2, 3, 4)
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.layer_index = 0

    def test_expiry_scenario(self):
        bus = ClickEventBus(lifetime=120)
        event = bus.record(50, 60, 100, nearest_layer(1.9, 6))
        assert event.layer_index == 2

        bus.prune(219)
        assert list(bus) == [event]

        bus.prune(220)
        assert len(bus) == 0

    def test_present_for_whole_window(self):
        bus = ClickEventBus(lifetime=120)
        f = 7
        bus.record(0, 0, f, 1)
        for frame in range(f, f + 120):
            bus.prune(frame)
            assert len(bus) == 1, frame
        bus.prune(f + 120)
        assert len(bus) == 0

    def test_prune_keeps_younger_events(self):
        bus = ClickEventBus(lifetime=10)
        old = bus.record(0, 0, 0, 0)
        young = bus.record(0, 0, 5, 0)
        bus.prune(10)
        assert old not in list(bus)
        assert list(bus) == [young]

    def test_for_layer_filters(self):
        bus = ClickEventBus()
        a = bus.record(0, 0, 1, 0)
        bus.record(0, 0, 1, 2)
        c = bus.record(0, 0, 2, 0)
        assert list(bus.for_layer(0)) == [a, c]
        assert list(bus.for_layer(5)) == []

    def test_age(self):
        event = ClickEvent(x=0, y=0, frame=40, layer_index=0)
        assert event.age(100) == 60

    def test_clear(self):
        bus = ClickEventBus()
        bus.record(0, 0, 0, 0)
        bus.clear()
        assert len(bus) == 0
