from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .errors import E1001_INPUT_MISSING, E1002_INPUT_DECODE, E1003_OUTPUT_WRITE, Ascii2SvgError
from .finder import recognize
from .options import RenderOptions
from .renderer import find_text_runs, generate_svg

logger = logging.getLogger(__name__)


def read_diagram(input_path: Path) -> str:
    if not input_path.exists() or not input_path.is_file():
        raise Ascii2SvgError(
            code=E1001_INPUT_MISSING,
            message=f"Input diagram not found: {input_path}",
            hint="Check the input path, or pass '-' to read from stdin.",
        )
    try:
        return input_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise Ascii2SvgError(
            code=E1002_INPUT_DECODE,
            message=f"Input diagram is not valid UTF-8: {input_path}",
            hint="Save the diagram as UTF-8 text.",
        ) from exc


def _write_text(path: Path, payload: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(payload, encoding="utf-8")
    except OSError as exc:
        raise Ascii2SvgError(
            code=E1003_OUTPUT_WRITE,
            message=f"Failed to write {path}: {exc}",
            hint="Check that the output directory is writable.",
        ) from exc
    logger.info("wrote %s (%d bytes)", path, len(payload.encode("utf-8")))


def diagram_summary(text: str, options: RenderOptions | None = None) -> dict[str, Any]:
    """Recognized paths, decorations and text runs as plain data."""
    options = options or RenderOptions()
    diagram = recognize(text)
    runs = find_text_runs(diagram.grid, options.spaces)
    return {
        "grid": {"width": diagram.grid.width, "height": diagram.grid.height},
        "paths": diagram.paths.to_list(),
        "decorations": diagram.decorations.to_list(),
        "texts": [run.to_dict() for run in runs],
    }


def convert_text(text: str, output_svg: Path, options: RenderOptions | None = None) -> str:
    diagram = recognize(text)
    svg = generate_svg(diagram.grid, diagram.paths, diagram.decorations, options)
    _write_text(output_svg, svg)
    return svg


def convert_file(
    input_path: Path,
    output_svg: Path,
    options: RenderOptions | None = None,
) -> dict[str, Any]:
    """Render a diagram file to an SVG file and report what was written."""
    text = read_diagram(input_path)
    svg = convert_text(text, output_svg, options)
    return {
        "input": str(input_path),
        "output": str(output_svg),
        "bytes": len(svg.encode("utf-8")),
        "options": (options or RenderOptions()).to_dict(),
    }


def write_summary(path: Path, summary: dict[str, Any]) -> None:
    _write_text(path, json.dumps(summary, indent=2, sort_keys=True, ensure_ascii=False))
