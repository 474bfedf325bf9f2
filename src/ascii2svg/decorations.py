"""Arrowheads, points, jumps and fills placed on grid cells."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator

from .chars import gray_level, tri_angle
from .geometry import DIAGONAL_ANGLE, Vec2


class DecorationKind(Enum):
    """Types of decorations."""
    ARROW = "arrow"
    CLOSED_POINT = "closed_point"    # * or ●
    OPEN_POINT = "open_point"        # o or ○
    DOTTED_POINT = "dotted_point"    # ◌
    SHADED_POINT = "shaded_point"    # ◍
    XOR_POINT = "xor_point"          # ⊕
    JUMP = "jump"                    # ( or ) bridging a vertical line
    GRAY = "gray"                    # ▁ ▂ ▃ █
    TRIANGLE = "triangle"            # ◢ ◣ ◤ ◥


POINT_KINDS = {
    "*": DecorationKind.CLOSED_POINT,
    "●": DecorationKind.CLOSED_POINT,
    "o": DecorationKind.OPEN_POINT,
    "○": DecorationKind.OPEN_POINT,
    "◌": DecorationKind.DOTTED_POINT,
    "◍": DecorationKind.SHADED_POINT,
    "⊕": DecorationKind.XOR_POINT,
}

# Angles in degrees, 0 pointing right and increasing clockwise.
ARROW_RIGHT = 0.0
ARROW_DOWN = 90.0
ARROW_LEFT = 180.0
ARROW_UP = 270.0
ARROW_UP_RIGHT = 360.0 - DIAGONAL_ANGLE
ARROW_DOWN_RIGHT = DIAGONAL_ANGLE
ARROW_DOWN_LEFT = 180.0 - DIAGONAL_ANGLE
ARROW_UP_LEFT = 180.0 + DIAGONAL_ANGLE


@dataclass(frozen=True)
class Decoration:
    """A decoration read from one grid cell."""
    kind: DecorationKind
    cell: tuple[int, int]          # (col, row) it was read from
    position: Vec2                 # center of that cell
    angle: float = 0.0             # degrees, 0 = right, clockwise
    level: int = 0                 # gray fills only, 0-255
    jump_from: Vec2 | None = None  # jumps only
    jump_to: Vec2 | None = None

    @classmethod
    def arrow(cls, col: int, row: int, angle: float) -> "Decoration":
        return cls(DecorationKind.ARROW, (col, row), Vec2.from_grid(col, row), angle=angle)

    @classmethod
    def point(cls, col: int, row: int, c: str) -> "Decoration":
        return cls(POINT_KINDS[c], (col, row), Vec2.from_grid(col, row))

    @classmethod
    def jump(cls, col: int, row: int, c: str) -> "Decoration":
        # The bridge spans the vertical line from half a cell above to half below.
        center = Vec2.from_grid(col, row)
        return cls(
            DecorationKind.JUMP,
            (col, row),
            center,
            angle=ARROW_LEFT if c == "(" else ARROW_RIGHT,
            jump_from=center.offset(0.0, -0.5),
            jump_to=center.offset(0.0, 0.5),
        )

    @classmethod
    def gray(cls, col: int, row: int, c: str) -> "Decoration":
        return cls(DecorationKind.GRAY, (col, row), Vec2.from_grid(col, row), level=gray_level(c))

    @classmethod
    def triangle(cls, col: int, row: int, c: str) -> "Decoration":
        return cls(DecorationKind.TRIANGLE, (col, row), Vec2.from_grid(col, row), angle=tri_angle(c))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "kind": self.kind.value,
            "cell": list(self.cell),
            "position": self.position.to_dict(),
            "angle": round(self.angle, 3),
        }
        if self.kind is DecorationKind.GRAY:
            payload["level"] = self.level
        if self.jump_from is not None and self.jump_to is not None:
            payload["jump_from"] = self.jump_from.to_dict()
            payload["jump_to"] = self.jump_to.to_dict()
        return payload


class DecorationSet:
    """Ordered collection of decorations."""

    def __init__(self) -> None:
        self._decorations: list[Decoration] = []

    def insert(self, decoration: Decoration) -> None:
        self._decorations.append(decoration)

    def __iter__(self) -> Iterator[Decoration]:
        return iter(self._decorations)

    def __len__(self) -> int:
        return len(self._decorations)

    def __getitem__(self, index: int) -> Decoration:
        return self._decorations[index]

    def __bool__(self) -> bool:
        return bool(self._decorations)

    def of_kind(self, kind: DecorationKind) -> list[Decoration]:
        return [decoration for decoration in self._decorations if decoration.kind is kind]

    def to_list(self) -> list[dict[str, Any]]:
        return [decoration.to_dict() for decoration in self._decorations]
