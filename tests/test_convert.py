from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from ascii2svg import RenderOptions, convert_file, diagram_summary
from ascii2svg.cli import app
from ascii2svg.errors import (
    E1001_INPUT_MISSING,
    E1002_INPUT_DECODE,
    E1003_OUTPUT_WRITE,
    E1103_OPTION_VALUE,
    E1199_UNEXPECTED,
    Ascii2SvgError,
)

ROOT = Path(__file__).resolve().parents[1]
EXAMPLE = ROOT / "tests" / "fixtures" / "example.txt"

runner = CliRunner()


def _write_diagram(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "diagram.txt"
    path.write_text(text, encoding="utf-8")
    return path


def test_convert_file_writes_svg(tmp_path: Path) -> None:
    output_svg = tmp_path / "nested" / "out.svg"
    report = convert_file(EXAMPLE, output_svg, RenderOptions(backdrop=True))
    assert output_svg.exists()
    svg = output_svg.read_text(encoding="utf-8")
    assert svg.startswith("<svg")
    assert report["bytes"] == len(svg.encode("utf-8"))
    assert report["options"]["backdrop"] is True


def test_convert_missing_input(tmp_path: Path) -> None:
    with pytest.raises(Ascii2SvgError) as excinfo:
        convert_file(tmp_path / "missing.txt", tmp_path / "out.svg")
    assert excinfo.value.code == E1001_INPUT_MISSING


def test_convert_rejects_non_utf8(tmp_path: Path) -> None:
    input_path = tmp_path / "diagram.txt"
    input_path.write_bytes(b"\xff\xfe--\xfa")
    with pytest.raises(Ascii2SvgError) as excinfo:
        convert_file(input_path, tmp_path / "out.svg")
    assert excinfo.value.code == E1002_INPUT_DECODE


def test_convert_unwritable_output(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(Ascii2SvgError) as excinfo:
        convert_file(EXAMPLE, blocker / "out.svg")
    assert excinfo.value.code == E1003_OUTPUT_WRITE


def test_diagram_summary() -> None:
    summary = diagram_summary("--> go")
    assert summary["grid"] == {"width": 6, "height": 1}
    assert len(summary["paths"]) == 1
    (arrow,) = summary["decorations"]
    assert arrow["kind"] == "arrow"
    assert arrow["cell"] == [2, 0]
    assert summary["texts"] == [{"col": 4, "row": 0, "text": "go"}]


def test_cli_render_to_file(tmp_path: Path) -> None:
    input_path = _write_diagram(tmp_path, "+--+\n|ok|\n+--+\n")
    output_svg = tmp_path / "out.svg"
    result = runner.invoke(app, ["render", str(input_path), "--out", str(output_svg), "--backdrop"])
    assert result.exit_code == 0, result.output
    svg = output_svg.read_text(encoding="utf-8")
    assert "var(--ascii2svg-bg)" in svg
    assert ">ok</text>" in svg


def test_cli_render_from_stdin() -> None:
    result = runner.invoke(app, ["render", "-", "--disable-text"], input="--> label\n")
    assert result.exit_code == 0, result.output
    assert "<svg" in result.output
    assert "<polygon" in result.output
    assert "label" not in result.output


def test_cli_render_with_options_file(tmp_path: Path) -> None:
    options_path = tmp_path / "options.yaml"
    options_path.write_text("render:\n  stretch: true\n", encoding="utf-8")
    result = runner.invoke(app, ["render", "-", "--options", str(options_path)], input="Hello\n")
    assert result.exit_code == 0, result.output
    assert 'textLength="40"' in result.output

    result = runner.invoke(
        app,
        ["render", "-", "--options", str(options_path), "--no-stretch"],
        input="Hello\n",
    )
    assert result.exit_code == 0, result.output
    assert "textLength" not in result.output


def test_cli_render_missing_input(tmp_path: Path) -> None:
    result = runner.invoke(app, ["render", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1
    assert E1001_INPUT_MISSING in result.output


def test_cli_render_bad_option_value() -> None:
    result = runner.invoke(app, ["render", "-", "--spaces=-2"], input="x\n")
    assert result.exit_code == 1
    assert E1103_OPTION_VALUE in result.output


def test_cli_reports_unexpected_errors(tmp_path: Path) -> None:
    options_path = tmp_path / "options.yaml"
    options_path.write_bytes(b"render:\n  spaces: \xff\n")
    result = runner.invoke(app, ["render", "-", "--options", str(options_path)], input="x\n")
    assert result.exit_code == 1
    assert E1199_UNEXPECTED in result.output
    assert "UnicodeDecodeError" in result.output
    assert "HINT:" in result.output


def test_cli_inspect(tmp_path: Path) -> None:
    summary_path = tmp_path / "summary.json"
    result = runner.invoke(app, ["inspect", "-", "--out", str(summary_path)], input="|\n|\nv\n")
    assert result.exit_code == 0, result.output
    summary = json.loads(result.output)
    assert summary["decorations"][0]["kind"] == "arrow"
    assert summary["decorations"][0]["angle"] == 90.0
    assert summary["texts"] == []
    assert json.loads(summary_path.read_text(encoding="utf-8")) == summary
