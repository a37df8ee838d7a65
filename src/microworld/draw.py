"""
Alpha-aware drawing helpers for pygame surfaces.

pygame's draw functions write colours straight into the target without
blending. Translucent shapes are therefore drawn onto small SRCALPHA stamps
and blitted, and full-bleed washes use a solid surface with surface alpha.
Alpha arguments are on the 0..255 scale and are clamped.
"""

import math

import pygame

_fonts: dict = {}


def font(size: int) -> pygame.font.Font:
    if not pygame.font.get_init():
        pygame.font.init()
        _fonts.clear()
    if size not in _fonts:
        _fonts[size] = pygame.font.Font(None, size)
    return _fonts[size]


def alpha_byte(alpha: float) -> int:
    return int(max(0.0, min(255.0, alpha)))


def rgba(color: tuple, alpha: float) -> tuple[int, int, int, int]:
    return (int(color[0]), int(color[1]), int(color[2]), alpha_byte(alpha))


def wash(surface: pygame.Surface, color: tuple, alpha: float):
    """Cover the whole surface with a translucent colour."""
    a = alpha_byte(alpha)
    if a == 0:
        return
    if a == 255:
        surface.fill(color)
        return
    overlay = pygame.Surface(surface.get_size())
    overlay.fill(color)
    overlay.set_alpha(a)
    surface.blit(overlay, (0, 0))


def sheet(surface: pygame.Surface) -> pygame.Surface:
    """Transparent surface the size of `surface`, for batching many small shapes."""
    return pygame.Surface(surface.get_size(), pygame.SRCALPHA)


def disc(surface: pygame.Surface, color: tuple, alpha: float, center: tuple, diameter: float):
    a = alpha_byte(alpha)
    radius = diameter / 2
    if a == 0 or radius < 0.5:
        return
    size = int(math.ceil(diameter)) + 2
    stamp = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(stamp, rgba(color, a), (size / 2, size / 2), radius)
    surface.blit(stamp, (round(center[0] - size / 2), round(center[1] - size / 2)))


def ring(
    surface: pygame.Surface,
    color: tuple,
    alpha: float,
    center: tuple,
    diameter: float,
    width: int = 2,
):
    a = alpha_byte(alpha)
    radius = diameter / 2
    if a == 0 or radius < 1:
        return
    size = int(math.ceil(diameter)) + 2 * width + 2
    stamp = pygame.Surface((size, size), pygame.SRCALPHA)
    pygame.draw.circle(stamp, rgba(color, a), (size / 2, size / 2), radius, width)
    surface.blit(stamp, (round(center[0] - size / 2), round(center[1] - size / 2)))


def polygon(surface: pygame.Surface, color: tuple, alpha: float, points: list[tuple[float, float]]):
    a = alpha_byte(alpha)
    if a == 0 or len(points) < 3:
        return
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    left, top = math.floor(min(xs)), math.floor(min(ys))
    w = math.ceil(max(xs)) - left + 2
    h = math.ceil(max(ys)) - top + 2
    stamp = pygame.Surface((w, h), pygame.SRCALPHA)
    pygame.draw.polygon(stamp, rgba(color, a), [(x - left, y - top) for x, y in points])
    surface.blit(stamp, (left, top))


def ellipse_points(
    center: tuple[float, float],
    width: float,
    height: float,
    rotation: float = 0.0,
    segments: int = 24,
) -> list[tuple[float, float]]:
    """Vertices of an ellipse of the given full width/height, rotated about its centre."""
    cx, cy = center
    cos_r, sin_r = math.cos(rotation), math.sin(rotation)
    points = []
    for i in range(segments):
        t = 2 * math.pi * i / segments
        ex = math.cos(t) * width / 2
        ey = math.sin(t) * height / 2
        points.append((cx + ex * cos_r - ey * sin_r, cy + ex * sin_r + ey * cos_r))
    return points


def text(
    surface: pygame.Surface,
    message: str,
    size: int,
    color: tuple,
    alpha: float,
    pos: tuple[float, float],
    anchor: str = "midtop",
):
    """Render a line of text anchored at `pos` (any pygame.Rect attribute name)."""
    a = alpha_byte(alpha)
    if a == 0:
        return
    img = font(size).render(message, True, color)
    if a < 255:
        img.set_alpha(a)
    rect = img.get_rect(**{anchor: (round(pos[0]), round(pos[1]))})
    surface.blit(img, rect)
