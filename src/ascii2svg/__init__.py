"""ascii2svg: recognize ASCII and Unicode line art and render it as SVG."""

from .convert import convert_file, diagram_summary
from .decorations import Decoration, DecorationKind, DecorationSet
from .errors import Ascii2SvgError
from .finder import Diagram, find_decorations, find_paths, recognize
from .grid import Grid
from .options import RenderOptions, load_options
from .paths import Path, PathSet
from .renderer import generate_svg, render

__all__ = [
    "Ascii2SvgError",
    "Decoration",
    "DecorationKind",
    "DecorationSet",
    "Diagram",
    "Grid",
    "Path",
    "PathSet",
    "RenderOptions",
    "convert_file",
    "diagram_summary",
    "find_decorations",
    "find_paths",
    "generate_svg",
    "load_options",
    "recognize",
    "render",
]
