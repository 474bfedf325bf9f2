"""Errors raised at the file and configuration boundary.

Recognition itself never fails: unrecognized characters simply stay text.
"""
from __future__ import annotations

from dataclasses import dataclass

E1001_INPUT_MISSING = "E1001_INPUT_MISSING"
E1002_INPUT_DECODE = "E1002_INPUT_DECODE"
E1003_OUTPUT_WRITE = "E1003_OUTPUT_WRITE"
E1101_OPTIONS_INVALID = "E1101_OPTIONS_INVALID"
E1102_OPTIONS_TYPE = "E1102_OPTIONS_TYPE"
E1103_OPTION_VALUE = "E1103_OPTION_VALUE"
E1104_OPTIONS_MISSING = "E1104_OPTIONS_MISSING"
E1199_UNEXPECTED = "E1199_UNEXPECTED"


@dataclass
class Ascii2SvgError(Exception):
    code: str
    message: str
    hint: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"
