"""Spatial hash mapping grid cells to the indices of particles inside them."""

from __future__ import annotations

from typing import Iterable, Iterator

from .gridcell import GridCell, cell_from_index


class SpatialHash:
    """A sparse uniform grid of particle indices keyed by grid cell."""

    def __init__(self) -> None:
        self._cells: dict[GridCell, list[int]] = {}

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self._cells

    def clear(self) -> None:
        """Remove every cell."""
        self._cells.clear()

    def insert(self, cell: GridCell, indices: Iterable[int]) -> None:
        """Set the indices of ``cell``, replacing any it held."""
        self._cells[cell] = list(indices)

    def add(self, cell: GridCell, index: int) -> None:
        """Append ``index`` to ``cell``, creating the cell if needed."""
        self._cells.setdefault(cell, []).append(index)

    def get(self, cell: GridCell) -> tuple[int, ...]:
        """Indices stored in ``cell``; empty when the cell is absent."""
        return tuple(self._cells.get(cell, ()))

    def contains(self, cell: GridCell) -> bool:
        """Whether ``cell`` holds an entry."""
        return cell in self._cells

    def neighborhood(self, cell: GridCell) -> Iterator[int]:
        """Indices in the 3x3 block of cells centred on ``cell``."""
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                neighbor = cell_from_index(cell.x + dx, cell.y + dy, cell.cell_size)
                yield from self._cells.get(neighbor, ())