from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import (
    E1101_OPTIONS_INVALID,
    E1102_OPTIONS_TYPE,
    E1103_OPTION_VALUE,
    E1104_OPTIONS_MISSING,
    Ascii2SvgError,
)

DEFAULT_SPACES = 2


@dataclass(frozen=True)
class RenderOptions:
    """Output settings. None of them change what the finder recognizes.

    Attributes:
        spaces: Consecutive blanks that end a text run (0 = only the row end does)
        stretch: Stretch each text run to exactly cover its cells
        backdrop: Paint a background rectangle behind the diagram
        disable_text: Leave text runs out of the output
    """

    spaces: int = DEFAULT_SPACES
    stretch: bool = False
    backdrop: bool = False
    disable_text: bool = False

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "RenderOptions":
        return cls().merge(data)

    def with_overrides(self, **overrides: Any) -> "RenderOptions":
        return self.merge(overrides)

    def merge(self, overrides: dict[Any, Any]) -> "RenderOptions":
        """Copy with the given values replaced; None values and unknown keys are skipped."""
        known = {item.name for item in fields(self)}
        updates: dict[str, Any] = {}
        for key, value in overrides.items():
            name = str(key).replace("-", "_")
            if name not in known or value is None:
                continue
            updates[name] = _coerce_spaces(value) if name == "spaces" else _coerce_flag(name, value)
        return replace(self, **updates)

    def to_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def _coerce_spaces(value: Any) -> int:
    if isinstance(value, bool):
        raise _value_error("spaces", value)
    try:
        spaces = int(value)
    except (TypeError, ValueError) as exc:
        raise _value_error("spaces", value) from exc
    if spaces < 0 or spaces != float(value):
        raise _value_error("spaces", value)
    return spaces


def _coerce_flag(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"on", "true", "1", "yes"}:
            return True
        if lowered in {"off", "false", "0", "no"}:
            return False
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise _value_error(name, value)


def _value_error(name: str, value: Any) -> Ascii2SvgError:
    expected = "a non-negative integer" if name == "spaces" else "a boolean"
    return Ascii2SvgError(
        code=E1103_OPTION_VALUE,
        message=f"Option '{name}' must be {expected}, got {value!r}.",
        hint="Fix the value in the options YAML or on the command line.",
    )


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise Ascii2SvgError(
            code=E1101_OPTIONS_INVALID,
            message=f"Failed to parse options YAML: {exc}",
            hint="Ensure the options file is valid YAML.",
        ) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise Ascii2SvgError(
            code=E1102_OPTIONS_TYPE,
            message=f"Options file must contain a mapping: {path}",
            hint="Write options as 'key: value' lines, optionally under a 'render:' key.",
        )
    return data


def load_options(path: Path, base: RenderOptions | None = None) -> RenderOptions:
    """Read render options from YAML, either flat or nested under ``render``."""
    if not path.exists():
        raise Ascii2SvgError(
            code=E1104_OPTIONS_MISSING,
            message=f"Options file not found: {path}",
            hint="Check the --options path.",
        )
    data = _load_yaml(path)
    section = data.get("render", data)
    if not isinstance(section, dict):
        raise Ascii2SvgError(
            code=E1102_OPTIONS_TYPE,
            message=f"'render' section must be a mapping: {path}",
            hint="Nest option keys under 'render:' or put them at the top level.",
        )
    return (base or RenderOptions()).merge(section)
