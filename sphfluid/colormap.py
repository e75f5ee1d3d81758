"""Colour maps and the pressure colour gradient used for rendering."""

from __future__ import annotations

from typing import NamedTuple, Sequence

Color = tuple[int, int, int]

WHITE: Color = (255, 255, 255)

VIRIDIS: tuple[Color, ...] = (
    (68, 1, 84),
    (65, 68, 135),
    (42, 120, 142),
    (34, 168, 132),
    (122, 209, 81),
    (253, 231, 37),
)

INFERNO: tuple[Color, ...] = (
    (0, 0, 4),
    (66, 10, 104),
    (147, 38, 103),
    (221, 81, 58),
    (252, 165, 10),
    (252, 255, 164),
)

MAGMA: tuple[Color, ...] = (
    (0, 0, 4),
    (59, 15, 112),
    (140, 41, 129),
    (222, 73, 104),
    (254, 159, 109),
    (252, 253, 191),
)

BLUES: tuple[Color, ...] = (
    (8, 48, 107),
    (23, 100, 171),
    (74, 151, 201),
    (147, 196, 222),
    (207, 225, 242),
    (247, 251, 255),
)

_PRESSURE_LOW: Color = (6, 0, 85)
_PRESSURE_MID: Color = (255, 255, 255)
_PRESSURE_HIGH: Color = (165, 7, 7)


class Vertex(NamedTuple):
    """A coloured vertex of a triangle strip."""

    position: tuple[float, float]
    color: Color


def _channel(value: float) -> int:
    """Truncate a colour channel to an integer in ``[0, 255]``."""
    return min(max(int(value), 0), 255)


def sample_colormap(
    value: float, vmin: float, vmax: float, cmap: Sequence[Color]
) -> Color:
    """Colour for ``value`` by linear interpolation across ``cmap``.

    Values at or below ``vmin`` take the first colour, values at or above
    ``vmax`` the last.
    """
    if not cmap:
        raise ValueError("colour map must hold at least one colour")
    if value <= vmin:
        return tuple(cmap[0])
    if value >= vmax:
        return tuple(cmap[-1])
    if len(cmap) == 1:
        return tuple(cmap[0])

    interval = (vmax - vmin) / (len(cmap) - 1)
    start = min(int(int(value - vmin) / interval), len(cmap) - 2)
    low, high = cmap[start], cmap[start + 1]
    t = (value - vmin - start * interval) / interval
    return tuple(
        _channel((1.0 - t) * a + t * b) for a, b in zip(low, high)
    )


def pressure_color(pressure: float, pmin: float, pmax: float) -> Color:
    """Diverging blue-white-red colour for ``pressure`` within ``[pmin, pmax]``."""
    if pmax == pmin:
        raise ValueError("pressure range must not be empty")
    t = min(max((pressure - pmin) / (pmax - pmin), 0.0), 1.0)
    if t <= 0.5:
        return tuple(
            _channel(mid * t * 2.0 + low * (0.5 - t) * 2.0)
            for low, mid in zip(_PRESSURE_LOW, _PRESSURE_MID)
        )
    return tuple(
        _channel(high * (t - 0.5) * 2.0 + mid * (1.0 - t) * 2.0)
        for mid, high in zip(_PRESSURE_MID, _PRESSURE_HIGH)
    )


def pressure_gradient_strip(
    pressure_grid: Sequence[Sequence[float]],
    width: float,
    height: float,
    grid_size: int,
    pmin: float,
    pmax: float,
) -> list[Vertex]:
    """Triangle strip covering a ``width`` x ``height`` area coloured by pressure.

    ``pressure_grid[x][y]`` gives the pressure of column ``x`` and row ``y``;
    it needs ``grid_size + 1`` columns and ``grid_size`` rows. Rows are joined
    by degenerate white triangles.
    """
    if grid_size <= 0:
        raise ValueError("grid size must be positive")
    cell_w = width / grid_size
    cell_h = height / grid_size
    vertices: list[Vertex] = []
    last = (0.0, 0.0)
    for y in range(grid_size):
        if y > 0:
            vertices.append(Vertex(last, WHITE))
            vertices.append(Vertex((0.0, y * cell_h), WHITE))
        for x in range(grid_size + 1):
            color = pressure_color(pressure_grid[x][y], pmin, pmax)
            vertices.append(Vertex((x * cell_w, y * cell_h), color))
            last = (x * cell_w, (y + 1) * cell_h)
            vertices.append(Vertex(last, color))
    return vertices