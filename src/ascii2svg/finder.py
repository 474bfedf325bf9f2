"""Path and decoration recognition.

Recognition is a fixed sequence of scan passes over one grid. Each pass marks
the cells it turns into a path or decoration as consumed, so the order of the
passes decides who wins an ambiguous glyph: vertical lines before horizontal
ones, straight lines before diagonals, diagonals before corners, and every
path before any decoration. Decoration passes query the finished paths
instead of re-reading raw characters.

Glyphs shared between runs (``+`` and the corner vertices ``. , ' ```) can be
claimed by several paths; every other line glyph belongs to exactly one pass.
A run that turns out too short consumes nothing and stays available as text.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from .chars import (
    is_arrow_head,
    is_bottom_vertex,
    is_gray,
    is_jump,
    is_point,
    is_solid_b_line,
    is_solid_d_line,
    is_solid_h_line,
    is_solid_v_line,
    is_top_vertex,
    is_tri,
    is_vertex,
)
from .decorations import (
    ARROW_DOWN,
    ARROW_DOWN_LEFT,
    ARROW_DOWN_RIGHT,
    ARROW_LEFT,
    ARROW_RIGHT,
    ARROW_UP,
    ARROW_UP_LEFT,
    ARROW_UP_RIGHT,
    Decoration,
    DecorationSet,
)
from .geometry import Vec2
from .grid import Grid
from .paths import HORIZONTAL, VERTICAL, Path, PathSet

logger = logging.getLogger(__name__)

Cell = tuple[int, int]

SOLID_H_RUN_CHARS = "-─"
DOUBLE_H_RUN_CHARS = "=═"
DOUBLE_V_RUN_CHARS = "║"
SQUIGGLE_RUN_CHARS = "~"
UNDERSCORE_RUN_CHARS = "_"
TOP_CURVE_VERTICES = ".,"
BOTTOM_CURVE_VERTICES = "'`"
AMBIGUOUS_POINTS = "*o"
BRIDGED_H_CHARS = "-─+"


@dataclass
class Diagram:
    """Everything recognized in one piece of diagram text."""
    grid: Grid
    paths: PathSet
    decorations: DecorationSet


def _is_bridge(grid: Grid, col: int, row: int) -> bool:
    """A jump glyph where a vertical line crosses a horizontal one."""
    return (
        is_jump(grid.lookup(col, row))
        and is_solid_v_line(grid.lookup(col, row - 1))
        and is_solid_v_line(grid.lookup(col, row + 1))
        and (
            grid.lookup(col - 1, row) in BRIDGED_H_CHARS
            or grid.lookup(col + 1, row) in BRIDGED_H_CHARS
        )
    )


def _walk(
    grid: Grid,
    col: int,
    row: int,
    step: Cell,
    accept: Callable[[Grid, int, int], bool],
) -> list[Cell]:
    """Cells from (col, row) onwards, in direction ``step``, while ``accept`` holds."""
    cells: list[Cell] = []
    while 0 <= col < grid.width and 0 <= row < grid.height and accept(grid, col, row):
        cells.append((col, row))
        col += step[0]
        row += step[1]
    return cells


def _chars(charset: str) -> Callable[[Grid, int, int], bool]:
    def accept(grid: Grid, col: int, row: int) -> bool:
        return grid.lookup(col, row) in charset

    return accept


def _predicate(test: Callable[[str], bool]) -> Callable[[Grid, int, int], bool]:
    def accept(grid: Grid, col: int, row: int) -> bool:
        return test(grid.lookup(col, row))

    return accept


def _consume(grid: Grid, cells: list[Cell]) -> None:
    for col, row in cells:
        grid.mark_consumed(col, row)


def _starts_run(grid: Grid, col: int, row: int, accept: Callable[[Grid, int, int], bool]) -> bool:
    return accept(grid, col, row) and not grid.is_consumed(col, row)


def _continues_solid_v(grid: Grid, col: int, row: int) -> bool:
    return is_solid_v_line(grid.lookup(col, row)) or _is_bridge(grid, col, row)


def _continues_solid_h(grid: Grid, col: int, row: int) -> bool:
    c = grid.lookup(col, row)
    return c in SOLID_H_RUN_CHARS or c == "+" or _is_bridge(grid, col, row)


def _scan_columns(
    grid: Grid,
    start: Callable[[Grid, int, int], bool],
    accept: Callable[[Grid, int, int], bool],
) -> list[list[Cell]]:
    runs: list[list[Cell]] = []
    for col in range(grid.width):
        row = 0
        while row < grid.height:
            if not _starts_run(grid, col, row, start):
                row += 1
                continue
            cells = _walk(grid, col, row, (0, 1), accept)
            runs.append(cells)
            row += len(cells)
    return runs


def _scan_rows(
    grid: Grid,
    start: Callable[[Grid, int, int], bool],
    accept: Callable[[Grid, int, int], bool],
) -> list[list[Cell]]:
    runs: list[list[Cell]] = []
    for row in range(grid.height):
        col = 0
        while col < grid.width:
            if not _starts_run(grid, col, row, start):
                col += 1
                continue
            cells = _walk(grid, col, row, (1, 0), accept)
            runs.append(cells)
            col += len(cells)
    return runs


# Path passes


def find_solid_vertical_lines(grid: Grid, paths: PathSet) -> None:
    for cells in _scan_columns(grid, _predicate(is_solid_v_line), _continues_solid_v):
        col, top = cells[0]
        bottom = cells[-1][1]
        claimed = [cell for cell in cells if not _is_bridge(grid, *cell)]
        if is_top_vertex(grid.lookup(col, top - 1)):
            top -= 1
            claimed.append((col, top))
        if is_bottom_vertex(grid.lookup(col, bottom + 1)):
            bottom += 1
            claimed.append((col, bottom))
        if bottom == top:
            continue
        _consume(grid, claimed)
        paths.insert(Path.line_from_grid(col, top, col, bottom, VERTICAL))


def find_double_vertical_lines(grid: Grid, paths: PathSet) -> None:
    accept = _chars(DOUBLE_V_RUN_CHARS)
    for cells in _scan_columns(grid, accept, accept):
        _consume(grid, cells)
        col, top = cells[0]
        paths.insert(Path.line_from_grid(col, top, col, cells[-1][1], VERTICAL).with_double())


def find_solid_horizontal_lines(grid: Grid, paths: PathSet) -> None:
    for cells in _scan_rows(grid, _chars(SOLID_H_RUN_CHARS), _continues_solid_h):
        left, row = cells[0]
        right = cells[-1][0]
        claimed = [cell for cell in cells if not _is_bridge(grid, *cell)]
        if is_vertex(grid.lookup(left - 1, row)):
            left -= 1
            claimed.append((left, row))
        if is_vertex(grid.lookup(right + 1, row)):
            right += 1
            claimed.append((right, row))
        if right == left:
            continue
        _consume(grid, claimed)
        paths.insert(Path.line_from_grid(left, row, right, row, HORIZONTAL))


def find_squiggle_horizontal_lines(grid: Grid, paths: PathSet) -> None:
    accept = _chars(SQUIGGLE_RUN_CHARS)
    for cells in _scan_rows(grid, accept, accept):
        if len(cells) < 2:
            continue
        _consume(grid, cells)
        (left, row), (right, _) = cells[0], cells[-1]
        paths.insert(Path.line_from_grid(left, row, right, row, HORIZONTAL).with_squiggle())


def find_double_horizontal_lines(grid: Grid, paths: PathSet) -> None:
    accept = _chars(DOUBLE_H_RUN_CHARS)
    for cells in _scan_rows(grid, accept, accept):
        _consume(grid, cells)
        (left, row), (right, _) = cells[0], cells[-1]
        paths.insert(Path.line_from_grid(left, row, right, row, HORIZONTAL).with_double())


def _diagonal_starts(width: int, height: int, from_right: bool) -> list[Cell]:
    """Top-row cells followed by the cells of the left (or right) column."""
    if from_right:
        top = [(width - 1 - offset, 0) for offset in range(width)]
        side = [(width - 1, row) for row in range(1, height)]
    else:
        top = [(col, 0) for col in range(width)]
        side = [(0, row) for row in range(1, height)]
    return top + side


def _scan_diagonals(
    grid: Grid,
    step: Cell,
    accept: Callable[[Grid, int, int], bool],
) -> list[list[Cell]]:
    runs: list[list[Cell]] = []
    for col, row in _diagonal_starts(grid.width, grid.height, from_right=step[0] < 0):
        while 0 <= col < grid.width and row < grid.height:
            if not _starts_run(grid, col, row, accept):
                col += step[0]
                row += step[1]
                continue
            cells = _walk(grid, col, row, step, accept)
            runs.append(cells)
            col += step[0] * len(cells)
            row += step[1] * len(cells)
    return runs


def find_back_diagonals(grid: Grid, paths: PathSet) -> None:
    for cells in _scan_diagonals(grid, (1, 1), _predicate(is_solid_b_line)):
        if len(cells) < 2:
            continue
        _consume(grid, cells)
        (col1, row1), (col2, row2) = cells[0], cells[-1]
        paths.insert(Path.line_from_grid(col1, row1, col2, row2))


def find_forward_diagonals(grid: Grid, paths: PathSet) -> None:
    for cells in _scan_diagonals(grid, (-1, 1), _predicate(is_solid_d_line)):
        if len(cells) < 2:
            continue
        _consume(grid, cells)
        # Scanned top-right first; stored bottom-left to top-right.
        (top_col, top_row), (bottom_col, bottom_row) = cells[0], cells[-1]
        paths.insert(Path.line_from_grid(bottom_col, bottom_row, top_col, top_row))


def _corner(center: Vec2, dx: float, dy: float) -> Path:
    # Quarter-cell rounding: from the horizontal neighbor's edge to the
    # vertical neighbor's edge, both control points on the vertex.
    return Path.curve(center.offset(dx, 0.0), center.offset(0.0, dy), center, center)


def find_curved_corners(grid: Grid, paths: PathSet) -> None:
    for row in range(grid.height):
        for col in range(grid.width):
            c = grid.lookup(col, row)
            if c in TOP_CURVE_VERTICES:
                vertical = is_solid_v_line(grid.lookup(col, row + 1))
                dy = 0.5
            elif c in BOTTOM_CURVE_VERTICES:
                vertical = is_solid_v_line(grid.lookup(col, row - 1))
                dy = -0.5
            else:
                continue
            if not vertical:
                continue
            center = Vec2.from_grid(col, row)
            if is_solid_h_line(grid.lookup(col - 1, row)):
                paths.insert(_corner(center, -0.5, dy))
                grid.mark_consumed(col, row)
            if is_solid_h_line(grid.lookup(col + 1, row)):
                paths.insert(_corner(center, 0.5, dy))
                grid.mark_consumed(col, row)


def find_underscore_lines(grid: Grid, paths: PathSet) -> None:
    accept = _chars(UNDERSCORE_RUN_CHARS)
    for cells in _scan_rows(grid, accept, accept):
        if len(cells) < 2:
            continue
        _consume(grid, cells)
        (left, row), (right, _) = cells[0], cells[-1]
        start = Vec2.from_grid(left, row).offset(0.0, 0.5)
        end = Vec2.from_grid(right, row).offset(0.0, 0.5)
        paths.insert(Path.line(start, end, HORIZONTAL))


# Decoration passes


def _free_cells(grid: Grid, test: Callable[[str], bool]) -> list[tuple[int, int, str]]:
    cells = []
    for row in range(grid.height):
        for col in range(grid.width):
            c = grid.lookup(col, row)
            if test(c) and not grid.is_consumed(col, row):
                cells.append((col, row, c))
    return cells


def _arrow_angle(paths: PathSet, col: int, row: int, c: str) -> float | None:
    if c == ">":
        if paths.right_end_at(col - 1, row) or paths.horizontal_passes_through(col - 1, row):
            return ARROW_RIGHT
        if paths.diagonal_top_end_at(col - 1, row + 1):
            return ARROW_UP_RIGHT
        if paths.back_diagonal_bottom_end_at(col - 1, row - 1):
            return ARROW_DOWN_RIGHT
    elif c == "<":
        if paths.left_end_at(col + 1, row) or paths.horizontal_passes_through(col + 1, row):
            return ARROW_LEFT
        if paths.diagonal_bottom_end_at(col + 1, row - 1):
            return ARROW_DOWN_LEFT
        if paths.back_diagonal_top_end_at(col + 1, row + 1):
            return ARROW_UP_LEFT
    elif c == "^":
        if paths.top_end_at(col, row + 1) or paths.vertical_passes_through(col, row + 1):
            return ARROW_UP
        if paths.diagonal_top_end_at(col - 1, row + 1):
            return ARROW_UP_RIGHT
        if paths.back_diagonal_top_end_at(col + 1, row + 1):
            return ARROW_UP_LEFT
    elif c in "vV":
        if paths.bottom_end_at(col, row - 1) or paths.vertical_passes_through(col, row - 1):
            return ARROW_DOWN
        if paths.diagonal_bottom_end_at(col + 1, row - 1):
            return ARROW_DOWN_LEFT
        if paths.back_diagonal_bottom_end_at(col - 1, row - 1):
            return ARROW_DOWN_RIGHT
    return None


def find_arrow_heads(grid: Grid, paths: PathSet, decorations: DecorationSet) -> None:
    for col, row, c in _free_cells(grid, is_arrow_head):
        angle = _arrow_angle(paths, col, row, c)
        if angle is None:
            continue
        decorations.insert(Decoration.arrow(col, row, angle))
        grid.mark_consumed(col, row)


def _touches_line(grid: Grid, col: int, row: int) -> bool:
    return (
        is_solid_h_line(grid.lookup(col - 1, row))
        or is_solid_h_line(grid.lookup(col + 1, row))
        or is_solid_v_line(grid.lookup(col, row - 1))
        or is_solid_v_line(grid.lookup(col, row + 1))
        or is_solid_d_line(grid.lookup(col - 1, row + 1))
        or is_solid_d_line(grid.lookup(col + 1, row - 1))
        or is_solid_b_line(grid.lookup(col - 1, row - 1))
        or is_solid_b_line(grid.lookup(col + 1, row + 1))
    )


def find_points(grid: Grid, paths: PathSet, decorations: DecorationSet) -> None:
    for col, row, c in _free_cells(grid, is_point):
        if c in AMBIGUOUS_POINTS and not _touches_line(grid, col, row):
            continue
        decorations.insert(Decoration.point(col, row, c))
        grid.mark_consumed(col, row)


def find_jumps(grid: Grid, paths: PathSet, decorations: DecorationSet) -> None:
    for col, row, c in _free_cells(grid, is_jump):
        if not paths.vertical_passes_through(col, row):
            continue
        decorations.insert(Decoration.jump(col, row, c))
        grid.mark_consumed(col, row)


def find_gray_fills(grid: Grid, paths: PathSet, decorations: DecorationSet) -> None:
    for col, row, c in _free_cells(grid, is_gray):
        decorations.insert(Decoration.gray(col, row, c))
        grid.mark_consumed(col, row)


def find_triangles(grid: Grid, paths: PathSet, decorations: DecorationSet) -> None:
    for col, row, c in _free_cells(grid, is_tri):
        decorations.insert(Decoration.triangle(col, row, c))
        grid.mark_consumed(col, row)


PATH_SCANNERS: tuple[Callable[[Grid, PathSet], None], ...] = (
    find_solid_vertical_lines,
    find_double_vertical_lines,
    find_solid_horizontal_lines,
    find_squiggle_horizontal_lines,
    find_double_horizontal_lines,
    find_back_diagonals,
    find_forward_diagonals,
    find_curved_corners,
    find_underscore_lines,
)

DECORATION_SCANNERS: tuple[Callable[[Grid, PathSet, DecorationSet], None], ...] = (
    find_arrow_heads,
    find_points,
    find_jumps,
    find_gray_fills,
    find_triangles,
)


def find_paths(grid: Grid, paths: PathSet | None = None) -> PathSet:
    """Run every path pass, in order, over ``grid``."""
    paths = PathSet() if paths is None else paths
    for scanner in PATH_SCANNERS:
        before = len(paths)
        scanner(grid, paths)
        logger.debug("%s: %d paths", scanner.__name__, len(paths) - before)
    return paths


def find_decorations(
    grid: Grid,
    paths: PathSet,
    decorations: DecorationSet | None = None,
) -> DecorationSet:
    """Run every decoration pass, in order. Call after :func:`find_paths`."""
    decorations = DecorationSet() if decorations is None else decorations
    for scanner in DECORATION_SCANNERS:
        before = len(decorations)
        scanner(grid, paths, decorations)
        logger.debug("%s: %d decorations", scanner.__name__, len(decorations) - before)
    return decorations


def recognize(text: str) -> Diagram:
    """Build a grid from ``text`` and find its paths and decorations."""
    grid = Grid(text)
    paths = find_paths(grid)
    decorations = find_decorations(grid, paths)
    logger.debug(
        "recognized %d paths and %d decorations on a %dx%d grid",
        len(paths),
        len(decorations),
        grid.width,
        grid.height,
    )
    return Diagram(grid=grid, paths=paths, decorations=decorations)
