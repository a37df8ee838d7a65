"""
Zoom slider overlay.

A fixed-size track centred at the bottom of the window. Dragging maps the
pointer's horizontal fraction straight onto [0, L) (absolute positioning);
the knob shows the wrapped zoom level and tick marks name each layer.
"""

import pygame

from microworld import draw
from microworld.zoom import ZoomController

TRACK_COLOR = (90, 90, 90)
KNOB_COLOR = (210, 160, 255)
TICK_COLOR = (150, 150, 150)
TICK_LABEL_COLOR = (180, 180, 180)
CAPTION_SIZE = 20
TICK_LABEL_SIZE = 15


class Slider:
    def __init__(self, width: int = 320, height: int = 12, bottom_offset: int = 44):
        self.width = width
        self.height = height
        self.bottom_offset = bottom_offset
        self.x = 0.0
        self.y = 0.0
        self.dragging = False

    def layout(self, canvas_width: int, canvas_height: int):
        """Re-anchor the track for a new canvas size."""
        self.x = canvas_width / 2 - self.width / 2
        self.y = canvas_height - self.bottom_offset

    def hit(self, mx: float, my: float) -> bool:
        return (
            self.x < mx < self.x + self.width
            and self.y - 10 < my < self.y + 22
        )

    def press(self, mx: float, my: float) -> bool:
        if self.hit(mx, my):
            self.dragging = True
        return self.dragging

    def release(self):
        self.dragging = False

    def fraction_at(self, mx: float) -> float:
        return min(max((mx - self.x) / self.width, 0.0), 1.0)

    def drag(self, mx: float, zoom: ZoomController) -> bool:
        if not self.dragging:
            return False
        zoom.jump_to_fraction(self.fraction_at(mx))
        return True

    def knob_x(self, level: float, layer_count: int) -> float:
        return self.x + (level % layer_count) / layer_count * self.width

    def draw(self, surface: pygame.Surface, level: float, names: list[str]):
        """Draw track, knob, caption and per-layer ticks, fully opaque."""
        count = len(names)
        track = pygame.Rect(round(self.x), round(self.y), self.width, self.height)
        pygame.draw.rect(surface, TRACK_COLOR, track, border_radius=6)

        knob = (self.knob_x(level, count), self.y + self.height / 2)
        pygame.draw.circle(surface, KNOB_COLOR, knob, 9)

        draw.text(
            surface,
            f"Zoom (loops): {level % count:.2f}",
            CAPTION_SIZE,
            (255, 255, 255),
            255,
            (surface.get_width() / 2, self.y - 8),
            anchor="midbottom",
        )

        for i, name in enumerate(names):
            x = self.x + i / count * self.width
            pygame.draw.line(
                surface,
                TICK_COLOR,
                (x, self.y - 6),
                (x, self.y + self.height + 6),
            )
            draw.text(
                surface,
                name,
                TICK_LABEL_SIZE,
                TICK_LABEL_COLOR,
                255,
                (x, self.y + self.height + 10),
            )
