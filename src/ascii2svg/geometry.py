"""Mapping from grid cells to output coordinates."""
from __future__ import annotations

import math
from dataclasses import dataclass

# Output units per cell horizontally; cells are ASPECT times taller than wide.
SCALE = 8.0
ASPECT = 2.0

# On-screen angle of a one-cell diagonal step, in degrees from horizontal.
DIAGONAL_ANGLE = math.degrees(math.atan(ASPECT))


@dataclass(frozen=True)
class Vec2:
    x: float
    y: float

    @classmethod
    def from_grid(cls, col: int, row: int) -> "Vec2":
        """Center of cell (col, row), with a one-cell margin on the top and left."""
        return cls((col + 1) * SCALE, (row + 1) * SCALE * ASPECT)

    def offset(self, dx: float, dy: float) -> "Vec2":
        """Move by a fraction of a cell in each direction."""
        return Vec2(self.x + dx * SCALE, self.y + dy * SCALE * ASPECT)

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


def canvas_size(columns: int, rows: int) -> tuple[float, float]:
    return (columns + 1) * SCALE, (rows + 1) * SCALE * ASPECT
