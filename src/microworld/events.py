"""
Shared click event bus.

Every pointer press is recorded with the frame it happened on and the layer
nearest to the zoom position at that moment. Layers scan the bus each frame
and react to the events attributed to them for as long as the events live,
so a single click keeps re-triggering its reaction until it expires.
"""

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class ClickEvent:
    x: float
    y: float
    frame: int
    layer_index: int

    def age(self, frame: int) -> int:
        return frame - self.frame


class ClickEventBus:
    """Recent clicks, dropped once they are `lifetime` frames old."""

    def __init__(self, lifetime: int = 120):
        self.lifetime = lifetime
        self._events: list[ClickEvent] = []

    def record(self, x: float, y: float, frame: int, layer_index: int) -> ClickEvent:
        event = ClickEvent(x=x, y=y, frame=frame, layer_index=layer_index)
        self._events.append(event)
        return event

    def prune(self, frame: int):
        """Drop every event whose age has reached the lifetime."""
        self._events = [e for e in self._events if e.age(frame) < self.lifetime]

    def for_layer(self, index: int) -> Iterator[ClickEvent]:
        for event in self._events:
            if event.layer_index == index:
                yield event

    def clear(self):
        self._events.clear()

    def __iter__(self) -> Iterator[ClickEvent]:
        return iter(list(self._events))

    def __len__(self) -> int:
        return len(self._events)
