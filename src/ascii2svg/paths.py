"""Recognized line and curve paths."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterator

from .geometry import Vec2

HORIZONTAL = "horizontal"
VERTICAL = "vertical"


def _axis_of(start: Vec2, end: Vec2) -> str | None:
    if start.y == end.y and start.x != end.x:
        return HORIZONTAL
    if start.x == end.x and start.y != end.y:
        return VERTICAL
    return None


@dataclass(frozen=True)
class Path:
    """A straight segment, or a curve with one or two control points.

    Attributes:
        start: First endpoint
        end: Second endpoint
        control1: First control point (None for straight segments)
        control2: Second control point (None for lines and quadratic curves)
        double: Drawn as two parallel strokes
        squiggle: Drawn as a wave
        axis: HORIZONTAL or VERTICAL for straight runs along a row or column,
            also when the run is a single cell
    """

    start: Vec2
    end: Vec2
    control1: Vec2 | None = None
    control2: Vec2 | None = None
    double: bool = False
    squiggle: bool = False
    axis: str | None = None

    @classmethod
    def line(cls, start: Vec2, end: Vec2, axis: str | None = None) -> "Path":
        return cls(start=start, end=end, axis=axis or _axis_of(start, end))

    @classmethod
    def line_from_grid(
        cls,
        col1: int,
        row1: int,
        col2: int,
        row2: int,
        axis: str | None = None,
    ) -> "Path":
        return cls.line(Vec2.from_grid(col1, row1), Vec2.from_grid(col2, row2), axis)

    @classmethod
    def curve(
        cls,
        start: Vec2,
        end: Vec2,
        control1: Vec2,
        control2: Vec2 | None = None,
    ) -> "Path":
        return cls(start=start, end=end, control1=control1, control2=control2)

    def with_double(self, value: bool = True) -> "Path":
        return replace(self, double=value)

    def with_squiggle(self, value: bool = True) -> "Path":
        return replace(self, squiggle=value)

    @property
    def is_curve(self) -> bool:
        return self.control1 is not None

    @property
    def is_horizontal(self) -> bool:
        return not self.is_curve and self.axis == HORIZONTAL

    @property
    def is_vertical(self) -> bool:
        return not self.is_curve and self.axis == VERTICAL

    @property
    def is_diagonal(self) -> bool:
        """Forward diagonal: one end lower-left, the other upper-right."""
        if self.is_curve:
            return False
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        return dx != 0 and dy != 0 and (dx > 0) != (dy > 0)

    @property
    def is_back_diagonal(self) -> bool:
        """Back diagonal: one end upper-left, the other lower-right."""
        if self.is_curve:
            return False
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        return dx != 0 and dy != 0 and (dx > 0) == (dy > 0)

    def left_end(self) -> Vec2:
        return self.start if self.start.x <= self.end.x else self.end

    def right_end(self) -> Vec2:
        return self.end if self.start.x <= self.end.x else self.start

    def top_end(self) -> Vec2:
        return self.start if self.start.y <= self.end.y else self.end

    def bottom_end(self) -> Vec2:
        return self.end if self.start.y <= self.end.y else self.start

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "start": self.start.to_dict(),
            "end": self.end.to_dict(),
        }
        if self.control1 is not None:
            payload["control1"] = self.control1.to_dict()
        if self.control2 is not None:
            payload["control2"] = self.control2.to_dict()
        if self.double:
            payload["double"] = True
        if self.squiggle:
            payload["squiggle"] = True
        return payload


class PathSet:
    """Ordered collection of paths with the cell queries used by decoration scans."""

    def __init__(self) -> None:
        self._paths: list[Path] = []

    def insert(self, path: Path) -> None:
        self._paths.append(path)

    def __iter__(self) -> Iterator[Path]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __getitem__(self, index: int) -> Path:
        return self._paths[index]

    def __bool__(self) -> bool:
        return bool(self._paths)

    def to_list(self) -> list[dict[str, Any]]:
        return [path.to_dict() for path in self._paths]

    def left_end_at(self, col: int, row: int) -> bool:
        """A horizontal line has its left end at the cell."""
        point = Vec2.from_grid(col, row)
        return any(path.is_horizontal and path.left_end() == point for path in self._paths)

    def right_end_at(self, col: int, row: int) -> bool:
        point = Vec2.from_grid(col, row)
        return any(path.is_horizontal and path.right_end() == point for path in self._paths)

    def top_end_at(self, col: int, row: int) -> bool:
        point = Vec2.from_grid(col, row)
        return any(path.is_vertical and path.top_end() == point for path in self._paths)

    def bottom_end_at(self, col: int, row: int) -> bool:
        point = Vec2.from_grid(col, row)
        return any(path.is_vertical and path.bottom_end() == point for path in self._paths)

    def diagonal_top_end_at(self, col: int, row: int) -> bool:
        """A ``/`` line has its upper-right end at the cell."""
        point = Vec2.from_grid(col, row)
        return any(path.is_diagonal and path.top_end() == point for path in self._paths)

    def diagonal_bottom_end_at(self, col: int, row: int) -> bool:
        point = Vec2.from_grid(col, row)
        return any(path.is_diagonal and path.bottom_end() == point for path in self._paths)

    def back_diagonal_top_end_at(self, col: int, row: int) -> bool:
        """A ``\\`` line has its upper-left end at the cell."""
        point = Vec2.from_grid(col, row)
        return any(path.is_back_diagonal and path.top_end() == point for path in self._paths)

    def back_diagonal_bottom_end_at(self, col: int, row: int) -> bool:
        point = Vec2.from_grid(col, row)
        return any(path.is_back_diagonal and path.bottom_end() == point for path in self._paths)

    def horizontal_passes_through(self, col: int, row: int) -> bool:
        """A horizontal line covers the cell without ending on it."""
        point = Vec2.from_grid(col, row)
        for path in self._paths:
            if not path.is_horizontal or path.start.y != point.y:
                continue
            if path.left_end().x < point.x < path.right_end().x:
                return True
        return False

    def vertical_passes_through(self, col: int, row: int) -> bool:
        point = Vec2.from_grid(col, row)
        for path in self._paths:
            if not path.is_vertical or path.start.x != point.x:
                continue
            if path.top_end().y < point.y < path.bottom_end().y:
                return True
        return False
