"""Rigid boundaries sampled by boundary particles."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from .gridcell import cell_from_point
from .spatial import SpatialHash
from .vector import Vector2f

_MIN_COMPRESSION = 1e-6
_NAN_VECTOR = Vector2f(math.nan, math.nan)


def _spacing(compression: float) -> float:
    """Distance between neighbouring boundary particles for a compression."""
    return math.inf if compression == 0 else 1.0 / compression


class Boundary:
    """A rigid object whose surface is represented by particles.

    A boundary built without a mass is static: it never moves, whatever
    force is applied. With a mass it is pushed along by the forces it
    receives, keeping its orientation.
    """

    def __init__(
        self,
        smoothing_radius: float,
        mass: float | None = None,
        initial_velocity: Vector2f = Vector2f(0.0, 0.0),
    ) -> None:
        self.smoothing_radius = smoothing_radius
        if mass is None:
            self._mass = math.inf
            self._static = True
            self._velocity = Vector2f(0.0, 0.0)
        else:
            self._mass = mass
            self._static = False
            self._velocity = initial_velocity
        self._center = Vector2f(0.0, 0.0)
        self._positions: list[Vector2f] = []
        self._volumes: list[float] = []

    def __repr__(self) -> str:
        return (
            f"Boundary(particles={len(self._positions)}, "
            f"center={self._center!r}, static={self._static})"
        )

    # Shape construction

    def create_polygon(
        self, vertices: Sequence[Vector2f], compression: float = 1.0
    ) -> None:
        """Sample the closed polygon through ``vertices`` with particles.

        The compression is clamped to ``[1e-6, 1]``; a higher compression
        places the particles closer together.
        """
        spacing = 1.0 / min(max(compression, _MIN_COMPRESSION), 1.0)
        vertices = list(vertices)
        if not vertices:
            self._center = _NAN_VECTOR
            return

        total = Vector2f(0.0, 0.0)
        for start, end in zip(vertices, vertices[1:] + vertices[:1]):
            line = end - start
            count = math.floor(line.magnitude() / spacing) + 1
            direction = line.normalize()
            self._positions.extend(
                Vector2f(
                    start.x + spacing * step * direction.x,
                    start.y + spacing * step * direction.y,
                )
                for step in range(count)
            )
            total = total + start
        self._center = total / len(vertices)

    def create_box(
        self, corner1: Vector2f, corner2: Vector2f, compression: float = 1.0
    ) -> None:
        """Sample the axis-aligned rectangle spanned by two opposite corners."""
        spacing = _spacing(compression)
        width = abs(corner2.x - corner1.x)
        height = abs(corner2.y - corner1.y)

        width_count = math.floor(width / spacing) + 1
        height_count = math.floor(height / spacing) + 1

        x_dir = 1.0 if corner1.x < corner2.x else -1.0
        y_dir = 1.0 if corner1.y < corner2.y else -1.0

        for step in range(width_count):
            x = corner1.x + spacing * step * x_dir
            self._positions.append(Vector2f(x, corner1.y))
            self._positions.append(Vector2f(x, corner2.y))

        for step in range(height_count):
            y = corner1.y + spacing * step * y_dir
            self._positions.append(Vector2f(corner1.x, y))
            self._positions.append(Vector2f(corner2.x, y))

        self._center = Vector2f(corner1.x + width / 2.0, corner1.y + height / 2.0)

    def create_circle(
        self, origin: Vector2f, radius: float, compression: float = 1.0
    ) -> None:
        """Sample a circle of ``radius`` around ``origin`` with particles."""
        spacing = _spacing(compression)
        count = math.floor(2.0 * math.pi * radius / spacing)
        for step in range(count):
            angle = math.radians(360.0 * step / count)
            self._positions.append(
                Vector2f(
                    origin.x + radius * math.cos(angle),
                    origin.y + radius * math.sin(angle),
                )
            )
        self._center = origin

    # Simulation support

    def activate(self) -> None:
        """Compute the volume of each boundary particle from its neighbours."""
        neighbors = self._find_neighbors()
        self._volumes = [
            1.0
            / sum(
                self._poly6((position - self._positions[j]).magnitude())
                for j in indices
            )
            for position, indices in zip(self._positions, neighbors)
        ]

    def apply_force(self, force: Vector2f, dt: float) -> None:
        """Accelerate a dynamic boundary by ``force`` and move it for ``dt``."""
        if self._static:
            return
        self._velocity = self._velocity + dt * force / self._mass
        shift = dt * self._velocity
        self._positions = [position + shift for position in self._positions]

    def _build_grid(self) -> SpatialHash:
        grid = SpatialHash()
        for index, position in enumerate(self._positions):
            grid.add(cell_from_point(position, self.smoothing_radius), index)
        return grid

    def _find_neighbors(self) -> list[list[int]]:
        grid = self._build_grid()
        return [
            [
                j
                for j in grid.neighborhood(
                    cell_from_point(position, self.smoothing_radius)
                )
                if (position - self._positions[j]).magnitude()
                <= self.smoothing_radius
            ]
            for position in self._positions
        ]

    def _poly6(self, dist: float) -> float:
        h = self.smoothing_radius
        if dist < 0.0 or dist > h:
            return 0.0
        factor = h * h - dist * dist
        return 4.0 / (math.pi * h**8) * factor * factor * factor

    # Read-only views

    @property
    def is_static(self) -> bool:
        """Whether the boundary ignores applied forces."""
        return self._static

    @property
    def mass(self) -> float:
        """Mass of the boundary; infinite when static."""
        return self._mass

    @property
    def velocity(self) -> Vector2f:
        """Current velocity of the boundary."""
        return self._velocity

    @property
    def num_particles(self) -> int:
        """Number of boundary particles."""
        return len(self._positions)

    @property
    def positions(self) -> tuple[Vector2f, ...]:
        """Positions of the boundary particles."""
        return tuple(self._positions)

    @property
    def volumes(self) -> tuple[float, ...]:
        """Volumes of the boundary particles; empty until activated."""
        return tuple(self._volumes)

    @property
    def center(self) -> Vector2f:
        """Centre of the most recently created shape."""
        return self._center


def combined_positions(boundaries: Iterable[Boundary]) -> list[Vector2f]:
    """Positions of the particles of all ``boundaries``, in order."""
    return [position for boundary in boundaries for position in boundary.positions]