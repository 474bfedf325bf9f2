from __future__ import annotations

from ascii2svg.geometry import Vec2
from ascii2svg.paths import HORIZONTAL, VERTICAL, Path, PathSet


def _path_set(*paths: Path) -> PathSet:
    path_set = PathSet()
    for path in paths:
        path_set.insert(path)
    return path_set


def test_insertion_order_is_kept() -> None:
    first = Path.line_from_grid(0, 0, 3, 0)
    second = Path.line_from_grid(0, 0, 0, 3)
    path_set = _path_set(first, second)
    assert list(path_set) == [first, second]
    assert path_set[1] == second
    assert len(path_set) == 2
    assert not PathSet()


def test_horizontal_queries() -> None:
    path_set = _path_set(Path.line_from_grid(3, 0, 0, 0))
    assert path_set.left_end_at(0, 0)
    assert path_set.right_end_at(3, 0)
    assert not path_set.right_end_at(0, 0)
    assert path_set.horizontal_passes_through(1, 0)
    assert path_set.horizontal_passes_through(2, 0)
    assert not path_set.horizontal_passes_through(0, 0)
    assert not path_set.horizontal_passes_through(3, 0)
    assert not path_set.horizontal_passes_through(1, 1)
    assert not path_set.top_end_at(0, 0)


def test_vertical_queries() -> None:
    path_set = _path_set(Path.line_from_grid(2, 1, 2, 4))
    assert path_set.top_end_at(2, 1)
    assert path_set.bottom_end_at(2, 4)
    assert path_set.vertical_passes_through(2, 2)
    assert not path_set.vertical_passes_through(2, 1)
    assert not path_set.vertical_passes_through(1, 2)
    assert not path_set.left_end_at(2, 1)


def test_diagonal_queries() -> None:
    forward = Path.line_from_grid(0, 2, 2, 0)
    back = Path.line_from_grid(4, 0, 6, 2)
    assert forward.is_diagonal and not forward.is_back_diagonal
    assert back.is_back_diagonal and not back.is_diagonal

    path_set = _path_set(forward, back)
    assert path_set.diagonal_top_end_at(2, 0)
    assert path_set.diagonal_bottom_end_at(0, 2)
    assert not path_set.diagonal_top_end_at(4, 0)
    assert path_set.back_diagonal_top_end_at(4, 0)
    assert path_set.back_diagonal_bottom_end_at(6, 2)
    assert not path_set.back_diagonal_top_end_at(2, 0)


def test_curves_answer_no_line_queries() -> None:
    center = Vec2.from_grid(1, 1)
    curve = Path.curve(center.offset(0.5, 0.0), center.offset(0.0, 0.5), center, center)
    assert curve.is_curve
    assert not (curve.is_horizontal or curve.is_vertical or curve.is_diagonal)
    path_set = _path_set(curve)
    assert not path_set.left_end_at(1, 1)
    assert not path_set.top_end_at(1, 1)


def test_to_dict_flags() -> None:
    plain = Path.line_from_grid(0, 0, 1, 0)
    assert plain.to_dict() == {"start": {"x": 8.0, "y": 16.0}, "end": {"x": 16.0, "y": 16.0}}
    assert plain.with_double().to_dict()["double"] is True
    assert plain.with_squiggle().to_dict()["squiggle"] is True


def test_single_cell_runs_keep_their_axis() -> None:
    horizontal = Path.line_from_grid(2, 0, 2, 0, HORIZONTAL)
    vertical = Path.line_from_grid(0, 3, 0, 3, VERTICAL)
    assert horizontal.is_horizontal and not horizontal.is_vertical
    assert vertical.is_vertical and not vertical.is_horizontal
    assert Path.line_from_grid(1, 1, 1, 1).axis is None
    assert Path.line_from_grid(0, 0, 4, 0).axis == HORIZONTAL

    path_set = _path_set(horizontal, vertical)
    assert path_set.left_end_at(2, 0) and path_set.right_end_at(2, 0)
    assert path_set.top_end_at(0, 3) and path_set.bottom_end_at(0, 3)
    assert not path_set.horizontal_passes_through(2, 0)
    assert not path_set.vertical_passes_through(0, 3)
