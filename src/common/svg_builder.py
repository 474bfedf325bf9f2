from __future__ import annotations

import re
from dataclasses import dataclass

import svgwrite

REQUIRED_GROUP_IDS = [
    "diagram_root",
    "g_backdrop",
    "g_paths",
    "g_decorations",
    "g_text",
]

STROKE = "var(--ascii2svg-stroke)"
FILL = "var(--ascii2svg-fill)"
BACKGROUND = "var(--ascii2svg-bg)"
TEXT_FILL = "var(--ascii2svg-text)"

DEFAULT_FONT_FAMILY = "Menlo, Consolas, 'DejaVu Sans Mono', monospace"
DEFAULT_FONT_SIZE = 13
DEFAULT_STROKE_WIDTH = 1.5

STYLE_CSS = """
svg {
  --ascii2svg-stroke: #000000;
  --ascii2svg-fill: #000000;
  --ascii2svg-bg: #ffffff;
  --ascii2svg-text: #000000;
}
@media (prefers-color-scheme: dark) {
  svg {
    --ascii2svg-stroke: #e6e6e6;
    --ascii2svg-fill: #e6e6e6;
    --ascii2svg-bg: #1e1e1e;
    --ascii2svg-text: #e6e6e6;
  }
}
text {
  white-space: pre;
}
"""


# Code points XML 1.0 does not allow in character data.
XML_ILLEGAL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def xml_safe(text: str) -> str:
    """Replace characters an XML parser would reject with U+FFFD."""
    return XML_ILLEGAL_CHARS.sub("\ufffd", text)


def fmt(value: float) -> str:
    """Compact number formatting for path data."""
    return f"{value:.3f}".rstrip("0").rstrip(".")


@dataclass
class SvgBuilder:
    drawing: svgwrite.Drawing
    root: svgwrite.container.Group
    groups: dict[str, svgwrite.container.Group]
    width: float
    height: float

    @classmethod
    def create(cls, width: float, height: float) -> "SvgBuilder":
        # CSS variables are not valid paint values for svgwrite's validator.
        drawing = svgwrite.Drawing(size=(fmt(width), fmt(height)), profile="full", debug=False)
        drawing.viewbox(0, 0, fmt(width), fmt(height))
        drawing.defs.add(drawing.style(STYLE_CSS))
        root = drawing.g(id="diagram_root")
        drawing.add(root)

        groups: dict[str, svgwrite.container.Group] = {}
        for group_id in REQUIRED_GROUP_IDS:
            if group_id == "diagram_root":
                continue
            group = drawing.g(id=group_id)
            root.add(group)
            groups[group_id] = group

        return cls(
            drawing=drawing,
            root=root,
            groups=groups,
            width=float(width),
            height=float(height),
        )

    def add_backdrop(self) -> None:
        self.groups["g_backdrop"].add(
            self.drawing.rect(
                insert=(0, 0),
                size=(fmt(self.width), fmt(self.height)),
                fill=BACKGROUND,
            )
        )

    def add_stroke(self, d: str, stroke: str = STROKE, stroke_width: float = DEFAULT_STROKE_WIDTH) -> None:
        self.groups["g_paths"].add(
            self.drawing.path(d=d, fill="none", stroke=stroke, stroke_width=stroke_width)
        )

    def add_mark(self, element: svgwrite.base.BaseElement) -> None:
        self.groups["g_decorations"].add(element)

    def add_text(
        self,
        content: str,
        x: float,
        y: float,
        text_length: float | None = None,
    ) -> None:
        kwargs = {
            "insert": (fmt(x), fmt(y)),
            "font_family": DEFAULT_FONT_FAMILY,
            "font_size": DEFAULT_FONT_SIZE,
            "fill": TEXT_FILL,
        }
        if text_length is not None:
            kwargs["textLength"] = fmt(text_length)
            kwargs["lengthAdjust"] = "spacingAndGlyphs"
        self.groups["g_text"].add(self.drawing.text(xml_safe(content), **kwargs))

    def tostring(self) -> str:
        return self.drawing.tostring()
