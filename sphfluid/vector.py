"""Immutable two-dimensional vector used throughout the simulation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class Vector2f:
    """A 2D vector of floats.

    Vectors order by magnitude, so ``max(vectors)`` yields the longest one.
    """

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vector2f) -> Vector2f:
        if not isinstance(other, Vector2f):
            return NotImplemented
        return Vector2f(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector2f) -> Vector2f:
        if not isinstance(other, Vector2f):
            return NotImplemented
        return Vector2f(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector2f:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector2f(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector2f:
        if not isinstance(scalar, (int, float)):
            return NotImplemented
        return Vector2f(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector2f:
        return Vector2f(-self.x, -self.y)

    def __lt__(self, other: Vector2f) -> bool:
        if not isinstance(other, Vector2f):
            return NotImplemented
        return self.magnitude() < other.magnitude()

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.x * self.x + self.y * self.y)

    def normalize(self) -> Vector2f:
        """Unit vector in the same direction; NaN components for a zero vector."""
        length = self.magnitude()
        if length == 0.0:
            return Vector2f(math.nan, math.nan)
        return self / length

    def dot(self, other: Vector2f) -> float:
        """Dot product with another vector."""
        return self.x * other.x + self.y * other.y