"""Point clouds of coloured particles drawn onto pygame surfaces."""

from __future__ import annotations

import math
from typing import Iterable, NamedTuple, Sequence

import pygame

from .colormap import VIRIDIS, Color, sample_colormap
from .vector import Vector2f


class Point(NamedTuple):
    """A particle position with the colour it is drawn in."""

    x: float
    y: float
    color: Color


def _scalar(value: Vector2f | float) -> float:
    return value.magnitude() if isinstance(value, Vector2f) else float(value)


class ParticleLayer:
    """A set of single-pixel particles, recoloured each frame."""

    def __init__(self) -> None:
        self._points: list[Point] = []

    def __len__(self) -> int:
        return len(self._points)

    def update_field(
        self,
        positions: Iterable[Vector2f],
        field: Iterable[Vector2f | float],
        vmin: float,
        vmax: float,
        cmap: Sequence[Color] = VIRIDIS,
    ) -> None:
        """Colour each particle by its field value through ``cmap``.

        Vector field values are coloured by their magnitude.
        """
        positions = list(positions)
        field = list(field)
        if len(positions) != len(field):
            raise ValueError("positions and field must have the same length")
        self._points = [
            Point(p.x, p.y, sample_colormap(_scalar(v), vmin, vmax, cmap))
            for p, v in zip(positions, field)
        ]

    def update_solid(self, positions: Iterable[Vector2f], color: Color) -> None:
        """Give every particle the same colour."""
        color = tuple(color)
        self._points = [Point(p.x, p.y, color) for p in positions]

    @property
    def points(self) -> tuple[Point, ...]:
        """The particles as they will be drawn."""
        return tuple(self._points)

    def draw(self, surface: pygame.Surface) -> None:
        """Plot every particle that falls inside ``surface`` as one pixel."""
        width, height = surface.get_size()
        for point in self._points:
            if not (math.isfinite(point.x) and math.isfinite(point.y)):
                continue
            px, py = math.floor(point.x), math.floor(point.y)
            if 0 <= px < width and 0 <= py < height:
                surface.set_at((px, py), point.color)