from __future__ import annotations

from pathlib import Path

from ascii2svg import convert_file, diagram_summary, render

ROOT = Path(__file__).resolve().parents[1]
EXAMPLE = ROOT / "tests" / "fixtures" / "example.txt"


def test_svg_output_is_deterministic(tmp_path: Path) -> None:
    output_a = tmp_path / "out_a.svg"
    output_b = tmp_path / "out_b.svg"

    convert_file(EXAMPLE, output_a)
    convert_file(EXAMPLE, output_b)

    assert output_a.read_bytes() == output_b.read_bytes()


def test_recognition_is_deterministic() -> None:
    text = EXAMPLE.read_text(encoding="utf-8")
    assert diagram_summary(text) == diagram_summary(text)
    assert render(text) == render(text)
