"""Character classification for ASCII art diagrams.

Each predicate maps a single character to one role (line, vertex, arrow,
point, fill, ...). Roles overlap: ``+`` is a vertex and also continues
horizontal and vertical lines. Every function is total: characters outside
the known sets classify as nothing.
"""
from __future__ import annotations

BLANK = " "

ARROW_HEAD_CHARS = ">v<^V"
POINT_CHARS = "o*◌○◍●⊕"
JUMP_CHARS = "()"
UNDIRECTED_VERTEX_CHARS = "+"
VERTEX_CHARS = "+.',`"
TOP_VERTEX_CHARS = ".,+"
BOTTOM_VERTEX_CHARS = "'`+"
GRAY_CHARS = "▁▂▃█"
TRI_CHARS = "◢◣◤◥"

SOLID_H_CHARS = "-─+()"
SQUIGGLE_H_CHARS = "~+()"
DOUBLE_H_CHARS = "=═+()"
SOLID_V_CHARS = "|│+"
DOUBLE_V_CHARS = "║+"
SOLID_D_CHARS = "/╱"
SOLID_B_CHARS = "\\╲"

GRAY_LEVELS = {
    "▁": 64,
    "▂": 128,
    "▃": 191,
    "█": 255,
}

TRI_ANGLES = {
    "◢": 0.0,
    "◣": 90.0,
    "◤": 180.0,
    "◥": 270.0,
}


def _in(c: str, charset: str) -> bool:
    # `"" in charset` is True for str, so guard against non-characters.
    return len(c) == 1 and c in charset


def is_blank(c: str) -> bool:
    return c == BLANK


# Vertices


def is_vertex(c: str) -> bool:
    return _in(c, VERTEX_CHARS)


def is_undirected_vertex(c: str) -> bool:
    return _in(c, UNDIRECTED_VERTEX_CHARS)


def is_top_vertex(c: str) -> bool:
    """Vertex that a line arriving from below can end on."""
    return _in(c, TOP_VERTEX_CHARS)


def is_bottom_vertex(c: str) -> bool:
    """Vertex that a line arriving from above can end on."""
    return _in(c, BOTTOM_VERTEX_CHARS)


def is_top_vertex_or_decoration(c: str) -> bool:
    return is_top_vertex(c) or c == "^"


def is_bottom_vertex_or_decoration(c: str) -> bool:
    return is_bottom_vertex(c) or _in(c, "vV")


def is_vertex_or_left_decoration(c: str) -> bool:
    return is_vertex(c) or c == "<" or is_point(c)


def is_vertex_or_right_decoration(c: str) -> bool:
    return is_vertex(c) or c == ">" or is_point(c)


# Lines


def is_solid_h_line(c: str) -> bool:
    return _in(c, SOLID_H_CHARS)


def is_squiggle_h_line(c: str) -> bool:
    return _in(c, SQUIGGLE_H_CHARS)


def is_double_h_line(c: str) -> bool:
    return _in(c, DOUBLE_H_CHARS)


def is_any_h_line(c: str) -> bool:
    return is_solid_h_line(c) or is_squiggle_h_line(c) or is_double_h_line(c)


def is_solid_v_line(c: str) -> bool:
    return _in(c, SOLID_V_CHARS)


def is_double_v_line(c: str) -> bool:
    return _in(c, DOUBLE_V_CHARS)


def is_solid_d_line(c: str) -> bool:
    """Forward diagonal, ``/``."""
    return _in(c, SOLID_D_CHARS)


def is_solid_b_line(c: str) -> bool:
    """Back diagonal, ``\\``."""
    return _in(c, SOLID_B_CHARS)


# Decorations


def is_arrow_head(c: str) -> bool:
    return _in(c, ARROW_HEAD_CHARS)


def is_point(c: str) -> bool:
    return _in(c, POINT_CHARS)


def is_jump(c: str) -> bool:
    return _in(c, JUMP_CHARS)


def is_gray(c: str) -> bool:
    return _in(c, GRAY_CHARS)


def is_tri(c: str) -> bool:
    return _in(c, TRI_CHARS)


def is_decoration(c: str) -> bool:
    return is_arrow_head(c) or is_point(c) or is_gray(c) or is_tri(c)


def is_ascii_letter(c: str) -> bool:
    return len(c) == 1 and c.isascii() and c.isalpha()


def gray_level(c: str) -> int:
    """Fill intensity 0-255 for a gray block character, 0 otherwise."""
    return GRAY_LEVELS.get(c, 0)


def tri_angle(c: str) -> float:
    """Rotation in degrees for a triangle character, 0 otherwise."""
    return TRI_ANGLES.get(c, 0.0)
