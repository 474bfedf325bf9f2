"""SVG output for recognized diagrams."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from common.svg_builder import BACKGROUND, FILL, STROKE, SvgBuilder, fmt

from .decorations import Decoration, DecorationKind, DecorationSet
from .finder import recognize
from .geometry import ASPECT, SCALE, Vec2, canvas_size
from .grid import Grid, unhide_markers
from .options import RenderOptions
from .paths import VERTICAL, Path, PathSet

logger = logging.getLogger(__name__)

POINT_RADIUS = SCALE - 2.0
DOUBLE_LINE_GAP = 2.0
SQUIGGLE_AMPLITUDE = SCALE * ASPECT / 4.0
TEXT_BASELINE_OFFSET = 4.0


@dataclass(frozen=True)
class TextRun:
    col: int
    row: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        return {"col": self.col, "row": self.row, "text": self.text}


def find_text_runs(grid: Grid, spaces: int) -> list[TextRun]:
    """Extract (and consume) every text run left on the grid, row by row."""
    runs: list[TextRun] = []
    for row in range(grid.height):
        col = 0
        while True:
            start = grid.find_text_start(col, row)
            if start is None:
                break
            text = grid.extract_text(start, row, spaces)
            runs.append(TextRun(col=start, row=row, text=unhide_markers(text)))
            col = start + max(len(text), 1)
    return runs


def _point(vec: Vec2) -> str:
    return f"{fmt(vec.x)},{fmt(vec.y)}"


def _offset_line(start: Vec2, end: Vec2, distance: float) -> str:
    dx = end.x - start.x
    dy = end.y - start.y
    length = math.hypot(dx, dy) or 1.0
    nx = -dy / length * distance
    ny = dx / length * distance
    return f"M {_point(Vec2(start.x + nx, start.y + ny))} L {_point(Vec2(end.x + nx, end.y + ny))}"


def _double_span(path: Path) -> tuple[Vec2, Vec2]:
    # A single = or ║ cell spans its own cell.
    if path.start != path.end:
        return path.start, path.end
    if path.axis == VERTICAL:
        return path.start.offset(0.0, -0.5), path.end.offset(0.0, 0.5)
    return path.start.offset(-0.5, 0.0), path.end.offset(0.5, 0.0)


def _squiggle_data(path: Path) -> str:
    # One half-wave per cell, alternating above and below the line.
    start, end = path.left_end(), path.right_end()
    steps = max(int(round((end.x - start.x) / SCALE)), 1)
    step = (end.x - start.x) / steps
    commands = [f"M {_point(start)}"]
    for idx in range(steps):
        x0 = start.x + idx * step
        sign = -1.0 if idx % 2 == 0 else 1.0
        control = Vec2(x0 + step / 2.0, start.y + sign * SQUIGGLE_AMPLITUDE)
        commands.append(f"Q {_point(control)} {_point(Vec2(x0 + step, start.y))}")
    return " ".join(commands)


def path_data(path: Path) -> list[str]:
    """SVG path data for one recognized path (two entries for double lines)."""
    if path.squiggle:
        return [_squiggle_data(path)]
    if path.double:
        start, end = _double_span(path)
        return [
            _offset_line(start, end, DOUBLE_LINE_GAP),
            _offset_line(start, end, -DOUBLE_LINE_GAP),
        ]
    if path.control1 is not None and path.control2 is not None:
        return [
            f"M {_point(path.start)} C {_point(path.control1)} "
            f"{_point(path.control2)} {_point(path.end)}"
        ]
    if path.control1 is not None:
        return [f"M {_point(path.start)} Q {_point(path.control1)} {_point(path.end)}"]
    return [f"M {_point(path.start)} L {_point(path.end)}"]


def _transform(position: Vec2, angle: float) -> str:
    return f"translate({fmt(position.x)},{fmt(position.y)}) rotate({fmt(angle)})"


def _add_circle(builder: SvgBuilder, center: Vec2, **extra: Any) -> None:
    builder.add_mark(
        builder.drawing.circle(
            center=(fmt(center.x), fmt(center.y)),
            r=fmt(POINT_RADIUS),
            **extra,
        )
    )


def _add_decoration(builder: SvgBuilder, decoration: Decoration) -> None:
    drawing = builder.drawing
    pos = decoration.position
    kind = decoration.kind
    if kind is DecorationKind.ARROW:
        builder.add_mark(
            drawing.polygon(
                points=[(8, 0), (-4, -3), (-4, 3)],
                fill=FILL,
                transform=_transform(pos, decoration.angle),
            )
        )
    elif kind is DecorationKind.CLOSED_POINT:
        _add_circle(builder, pos, fill=FILL)
    elif kind is DecorationKind.OPEN_POINT:
        _add_circle(builder, pos, fill=BACKGROUND, stroke=STROKE)
    elif kind is DecorationKind.DOTTED_POINT:
        _add_circle(builder, pos, fill=BACKGROUND, stroke=STROKE, stroke_dasharray="2,2")
    elif kind is DecorationKind.SHADED_POINT:
        _add_circle(builder, pos, fill="#888888", stroke=STROKE)
    elif kind is DecorationKind.XOR_POINT:
        _add_circle(builder, pos, fill=BACKGROUND, stroke=STROKE)
        r = POINT_RADIUS
        builder.add_mark(drawing.line(start=(pos.x - r, pos.y), end=(pos.x + r, pos.y), stroke=STROKE))
        builder.add_mark(drawing.line(start=(pos.x, pos.y - r), end=(pos.x, pos.y + r), stroke=STROKE))
    elif kind is DecorationKind.JUMP and decoration.jump_from and decoration.jump_to:
        start, end = decoration.jump_from, decoration.jump_to
        bulge = SCALE if decoration.angle == 0.0 else -SCALE
        mid_y = (start.y + end.y) / 2.0
        arc = (
            f"M {_point(start)} C {fmt(start.x + bulge)},{fmt(mid_y)} "
            f"{fmt(end.x + bulge)},{fmt(mid_y)} {_point(end)}"
        )
        # Blank out the crossed segment, then draw the hop.
        cover = f"M {_point(start)} L {_point(end)}"
        builder.add_mark(drawing.path(d=cover, fill="none", stroke=BACKGROUND, stroke_width=3))
        builder.add_mark(drawing.path(d=arc, fill="none", stroke=STROKE))
    elif kind is DecorationKind.GRAY:
        level = decoration.level
        builder.add_mark(
            drawing.rect(
                insert=(fmt(pos.x - SCALE / 2.0), fmt(pos.y - SCALE * ASPECT / 2.0)),
                size=(fmt(SCALE), fmt(SCALE * ASPECT)),
                fill=f"rgb({level},{level},{level})",
            )
        )
    elif kind is DecorationKind.TRIANGLE:
        half_w = SCALE / 2.0
        half_h = SCALE * ASPECT / 2.0
        builder.add_mark(
            drawing.polygon(
                points=[(half_w, 0), (-half_w, -half_h), (-half_w, half_h)],
                fill=FILL,
                transform=_transform(pos, decoration.angle),
            )
        )


def generate_svg(
    grid: Grid,
    paths: PathSet,
    decorations: DecorationSet,
    options: RenderOptions | None = None,
) -> str:
    """Serialize recognized paths, decorations and the remaining text to SVG.

    Text runs are extracted here, so the grid's remaining cells get consumed.
    """
    options = options or RenderOptions()
    width, height = canvas_size(grid.width, grid.height)
    builder = SvgBuilder.create(width, height)
    if options.backdrop:
        builder.add_backdrop()

    for path in paths:
        for d in path_data(path):
            builder.add_stroke(d)
    for decoration in decorations:
        _add_decoration(builder, decoration)

    runs = find_text_runs(grid, options.spaces)
    if not options.disable_text:
        for run in runs:
            origin = Vec2.from_grid(run.col, run.row)
            builder.add_text(
                run.text,
                origin.x - SCALE / 2.0,
                origin.y + TEXT_BASELINE_OFFSET,
                text_length=len(run.text) * SCALE if options.stretch else None,
            )
    logger.debug(
        "svg %sx%s: %d paths, %d decorations, %d text runs",
        fmt(width),
        fmt(height),
        len(paths),
        len(decorations),
        len(runs),
    )
    return builder.tostring()


def render(text: str, options: RenderOptions | None = None) -> str:
    """Render diagram text straight to an SVG string."""
    diagram = recognize(text)
    return generate_svg(diagram.grid, diagram.paths, diagram.decorations, options)
