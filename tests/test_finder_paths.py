from __future__ import annotations

from ascii2svg.finder import find_paths, recognize
from ascii2svg.geometry import SCALE, ASPECT, Vec2
from ascii2svg.grid import Grid
from ascii2svg.renderer import find_text_runs


def _paths(text: str) -> list:
    return list(find_paths(Grid(text)))


def _straight(paths: list) -> list:
    return [path for path in paths if not path.is_curve]


def test_horizontal_line() -> None:
    paths = _paths("---")
    assert len(paths) == 1
    assert paths[0].start == Vec2.from_grid(0, 0) == Vec2(8.0, 16.0)
    assert paths[0].end == Vec2(24.0, 16.0)
    assert paths[0].is_horizontal


def test_vertical_line() -> None:
    paths = _paths("|\n|\n|")
    assert len(paths) == 1
    assert paths[0].is_vertical
    assert paths[0].start == Vec2.from_grid(0, 0)
    assert paths[0].end == Vec2.from_grid(0, 2)


def test_box_with_corners() -> None:
    diagram = recognize("+--+\n|  |\n+--+")
    paths = list(diagram.paths)
    assert len(paths) == 4
    assert paths[0].is_vertical and paths[1].is_vertical
    assert paths[2].is_horizontal and paths[3].is_horizontal
    assert paths[0].start == Vec2.from_grid(0, 0)
    assert paths[0].end == Vec2.from_grid(0, 2)
    assert find_text_runs(diagram.grid, 2) == []


def test_isolated_line_chars_stay_text() -> None:
    for text in ["-", "|", "~", "_", "/", "\\"]:
        diagram = recognize(text)
        assert len(diagram.paths) == 0
        runs = find_text_runs(diagram.grid, 2)
        assert [run.text for run in runs] == [text]


def test_short_runs_inside_text_are_ignored() -> None:
    assert _paths("a - b") == []
    assert _paths("and/or") == []


def test_double_lines_need_only_one_cell() -> None:
    (horizontal,) = _paths("=")
    assert horizontal.double
    assert horizontal.start == horizontal.end
    (vertical,) = _paths("║")
    assert vertical.double
    (long,) = _paths("====")
    assert long.double and long.is_horizontal


def test_vertical_extends_to_vertices() -> None:
    grid = Grid(".\n|\n|")
    (path,) = find_paths(grid)
    assert path.start == Vec2.from_grid(0, 0)
    assert path.end == Vec2.from_grid(0, 2)
    assert grid.is_consumed(0, 0)

    (path,) = _paths("|\n|\n'")
    assert path.end == Vec2.from_grid(0, 2)


def test_single_bar_between_vertices() -> None:
    paths = _paths(".\n|\n'")
    assert len(paths) == 1
    assert paths[0].start == Vec2.from_grid(0, 0)
    assert paths[0].end == Vec2.from_grid(0, 2)


def test_horizontal_runs_through_junction() -> None:
    (path,) = _paths("--+--")
    assert path.start == Vec2.from_grid(0, 0)
    assert path.end == Vec2.from_grid(4, 0)


def test_horizontal_extends_to_left_vertex() -> None:
    grid = Grid("+--")
    (path,) = find_paths(grid)
    assert path.start == Vec2.from_grid(0, 0)
    assert path.end == Vec2.from_grid(2, 0)
    assert grid.is_consumed(0, 0)


def test_squiggle() -> None:
    (path,) = _paths("~~~~")
    assert path.squiggle
    assert path.start == Vec2.from_grid(0, 0)
    assert path.end == Vec2.from_grid(3, 0)


def test_back_diagonal() -> None:
    (path,) = _paths("\\\n \\")
    assert path.is_back_diagonal
    assert path.start == Vec2.from_grid(0, 0)
    assert path.end == Vec2.from_grid(1, 1)


def test_forward_diagonal_runs_bottom_left_to_top_right() -> None:
    (path,) = _paths(" /\n/")
    assert path.is_diagonal
    assert path.start == Vec2.from_grid(0, 1)
    assert path.end == Vec2.from_grid(1, 0)

    (path,) = _paths("  /\n /\n/")
    assert path.start == Vec2.from_grid(0, 2)
    assert path.end == Vec2.from_grid(2, 0)


def test_curved_corner() -> None:
    paths = _paths(".-\n|")
    assert len(_straight(paths)) == 2
    curves = [path for path in paths if path.is_curve]
    assert len(curves) == 1
    corner = curves[0]
    center = Vec2.from_grid(0, 0)
    assert corner.start == Vec2(center.x + SCALE / 2, center.y)
    assert corner.end == Vec2(center.x, center.y + SCALE * ASPECT / 2)
    assert corner.control1 == center
    assert corner.control2 == center


def test_corner_with_lines_on_both_sides() -> None:
    paths = _paths("-.-\n |")
    assert len([path for path in paths if path.is_curve]) == 2


def test_bottom_corner() -> None:
    paths = _paths("|\n'-")
    curves = [path for path in paths if path.is_curve]
    assert len(curves) == 1
    center = Vec2.from_grid(0, 1)
    assert curves[0].end == Vec2(center.x, center.y - SCALE * ASPECT / 2)


def test_underscores_sit_half_a_cell_low() -> None:
    (path,) = _paths("__")
    assert path.start == Vec2(8.0, 16.0 + SCALE * ASPECT / 2)
    assert path.end == Vec2(16.0, 16.0 + SCALE * ASPECT / 2)


def test_crossing_lines_share_the_junction() -> None:
    paths = _paths(" | \n-+-\n | ")
    assert len(paths) == 2
    assert paths[0].is_vertical
    assert paths[1].is_horizontal
    assert paths[1].start == Vec2.from_grid(0, 1)
    assert paths[1].end == Vec2.from_grid(2, 1)


def test_bridge_glyph_is_crossed_by_both_lines() -> None:
    grid = Grid(" |\n-(-\n |")
    paths = list(find_paths(grid))
    assert len(paths) == 2
    assert paths[0].is_vertical
    assert paths[0].start == Vec2.from_grid(1, 0)
    assert paths[0].end == Vec2.from_grid(1, 2)
    assert paths[1].is_horizontal
    assert not grid.is_consumed(1, 1)


def test_paths_only_claim_cells_they_use() -> None:
    grid = Grid("+--+\n|ab|\n+--+")
    find_paths(grid)
    assert not grid.is_consumed(1, 1)
    assert not grid.is_consumed(2, 1)
    assert grid.is_consumed(0, 1)
    assert grid.is_consumed(3, 1)
