"""Grid cells for the uniform spatial grid and their Morton (Z-order) codes."""

from __future__ import annotations

from dataclasses import dataclass

from .vector import Vector2f

_HASH_PRIME_X = 73856093
_HASH_PRIME_Y = 19349663

_ORIGIN = Vector2f(0.0, 0.0)


def _spread_bits(value: int) -> int:
    """Insert a zero bit between each of the low 16 bits of ``value``."""
    value = (value | (value << 8)) & 0x00FF00FF
    value = (value | (value << 4)) & 0x0F0F0F0F
    value = (value | (value << 2)) & 0x33333333
    value = (value | (value << 1)) & 0x55555555
    return value


def morton_code(x: int, y: int) -> int:
    """Interleave the low 16 bits of ``x`` and ``y``; ``x`` takes the even bits."""
    return _spread_bits(x) | (_spread_bits(y) << 1)


@dataclass(frozen=True, eq=False)
class GridCell:
    """A cell of the spatial grid, identified by its integer coordinates.

    Two cells are equal when their coordinates match, regardless of cell size.
    Cells order by their Z-order code.
    """

    x: int
    y: int
    cell_size: float = 1.0

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GridCell):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __hash__(self) -> int:
        return (self.x * _HASH_PRIME_X) ^ (self.y * _HASH_PRIME_Y)

    def __lt__(self, other: GridCell) -> bool:
        if not isinstance(other, GridCell):
            return NotImplemented
        return self.z_order < other.z_order

    @property
    def z_order(self) -> int:
        """Morton code of the cell coordinates."""
        return morton_code(self.x, self.y)


def cell_from_point(
    point: Vector2f, cell_size: float, origin: Vector2f = _ORIGIN
) -> GridCell:
    """Cell containing ``point`` for a grid of ``cell_size`` starting at ``origin``."""
    return GridCell(
        int((point.x - origin.x) / cell_size),
        int((point.y - origin.y) / cell_size),
        cell_size,
    )


def cell_from_index(
    ix: int, iy: int, cell_size: float, origin: Vector2f = _ORIGIN
) -> GridCell:
    """Cell with the given integer coordinates, shifted by ``origin``."""
    return GridCell(
        int(float(ix) - origin.x),
        int(float(iy) - origin.y),
        cell_size,
    )