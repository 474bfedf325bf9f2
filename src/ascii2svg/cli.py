from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer

from .convert import convert_text, diagram_summary, read_diagram, write_summary
from .errors import E1199_UNEXPECTED, Ascii2SvgError
from .options import RenderOptions, load_options
from .renderer import render

app = typer.Typer(
    add_completion=False,
    help="Render ASCII art diagrams to SVG, or inspect what gets recognized.",
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _fail(exc: Ascii2SvgError) -> None:
    typer.echo(f"ERROR {exc.code}: {exc.message}", err=True)
    typer.echo(f"HINT: {exc.hint}", err=True)
    raise typer.Exit(code=1)


def _unexpected(exc: Exception) -> Ascii2SvgError:
    return Ascii2SvgError(
        code=E1199_UNEXPECTED,
        message=f"{type(exc).__name__}: {exc}",
        hint="Check the input path, the options file and their encodings.",
    )


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return read_diagram(Path(source))


def _resolve_options(
    options_path: Path | None,
    spaces: int | None,
    stretch: bool | None,
    backdrop: bool | None,
    disable_text: bool | None,
) -> RenderOptions:
    base = load_options(options_path) if options_path is not None else RenderOptions()
    return base.with_overrides(
        spaces=spaces,
        stretch=stretch,
        backdrop=backdrop,
        disable_text=disable_text,
    )


@app.command("render")
def render_command(
    source: str = typer.Argument(
        ...,
        help="Diagram text file, or '-' for stdin.",
    ),
    output_svg: Path | None = typer.Option(
        None,
        "--out",
        "-o",
        dir_okay=False,
        help="Output SVG path (default: stdout).",
    ),
    options_path: Path | None = typer.Option(
        None,
        "--options",
        dir_okay=False,
        help="Optional render options YAML.",
    ),
    spaces: int | None = typer.Option(
        None,
        "--spaces",
        help="Consecutive blanks that end a text run (0 = whole row).",
    ),
    stretch: bool | None = typer.Option(
        None,
        "--stretch/--no-stretch",
        help="Stretch text runs to fill their cells.",
    ),
    backdrop: bool | None = typer.Option(
        None,
        "--backdrop/--no-backdrop",
        help="Paint a background rectangle.",
    ),
    disable_text: bool | None = typer.Option(
        None,
        "--disable-text/--enable-text",
        help="Leave text out of the SVG.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each recognition pass to stderr.",
    ),
) -> None:
    """Render a diagram to SVG."""
    _configure_logging(verbose)
    try:
        options = _resolve_options(options_path, spaces, stretch, backdrop, disable_text)
        text = _read_input(source)
        if output_svg is None:
            typer.echo(render(text, options))
            return
        convert_text(text, output_svg, options)
    except Ascii2SvgError as exc:
        _fail(exc)
    except Exception as exc:  # noqa: BLE001
        _fail(_unexpected(exc))


@app.command()
def inspect(
    source: str = typer.Argument(
        ...,
        help="Diagram text file, or '-' for stdin.",
    ),
    out: Path | None = typer.Option(
        None,
        "--out",
        dir_okay=False,
        help="Optional path to write the summary JSON.",
    ),
    spaces: int | None = typer.Option(
        None,
        "--spaces",
        help="Consecutive blanks that end a text run.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log each recognition pass to stderr.",
    ),
) -> None:
    """Print recognized paths, decorations and text runs as JSON."""
    _configure_logging(verbose)
    try:
        options = RenderOptions().with_overrides(spaces=spaces)
        summary = diagram_summary(_read_input(source), options)
        if out is not None:
            write_summary(out, summary)
        typer.echo(json.dumps(summary, indent=2, sort_keys=True, ensure_ascii=False))
    except Ascii2SvgError as exc:
        _fail(exc)
    except Exception as exc:  # noqa: BLE001
        _fail(_unexpected(exc))


def main() -> None:
    app(prog_name="ascii2svg")


if __name__ == "__main__":
    main()
