"""Grid geometry for the snake game."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

import numpy as np


class Position(NamedTuple):
    """An immutable (x, y) cell coordinate. ``y`` grows downward."""

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> Position:
        """Return the position offset by (dx, dy)."""
        return Position(self.x + dx, self.y + dy)


def chebyshev(a: Position, b: Position) -> int:
    """Chebyshev (king-move) distance between two cells."""
    return max(abs(a.x - b.x), abs(a.y - b.y))


class Grid:
    """Square N×N playing field.

    The grid holds no cell state of its own; occupancy is derived from the
    snake on demand as a NumPy mask indexed ``[y, x]``.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size

    def in_bounds(self, pos: Position) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= pos.x < self.size and 0 <= pos.y < self.size

    def occupancy(self, cells: Iterable[Position]) -> np.ndarray:
        """Return a boolean mask with ``True`` for every given cell."""
        mask = np.zeros((self.size, self.size), dtype=bool)
        for x, y in cells:
            if 0 <= x < self.size and 0 <= y < self.size:
                mask[y, x] = True
        return mask

    def free_cells(self, cells: Iterable[Position]) -> list[Position]:
        """Return every cell not covered by *cells*, in row-major order."""
        ys, xs = np.where(~self.occupancy(cells))
        return [
            Position(x, y)
            for y, x in zip(ys.tolist(), xs.tolist(), strict=True)
        ]

    def center(self) -> Position:
        return Position(self.size // 2, self.size // 2)

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"size": self.size}
