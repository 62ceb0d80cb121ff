"""Indentation normalizer behind the editor's format action.

The pass infers the document's own indentation unit (the smallest non-zero
leading run, tabs expanded) and rewrites each line's indentation as a whole
number of canonical units. Only leading whitespace is touched; lines keep their
order and their content.
"""

from __future__ import annotations

import math
from typing import Iterable

DEFAULT_UNIT = 4


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip())]


def measure_indent(line: str, *, tab_width: int = DEFAULT_UNIT) -> int:
    """Width of ``line``'s leading whitespace with tabs counted as ``tab_width``."""

    return len(leading_whitespace(line).replace("\t", " " * tab_width))


def detect_indent_unit(lines: Iterable[str], *, tab_width: int = DEFAULT_UNIT) -> int:
    unit = 0
    for line in lines:
        if not line.strip():
            continue
        width = measure_indent(line, tab_width=tab_width)
        if width and (unit == 0 or width < unit):
            unit = width
    return unit or DEFAULT_UNIT


def indent_level(width: int, unit: int) -> int:
    # Ties go up: 2 spaces against a unit of 4 is level 1.
    return math.floor(width / unit + 0.5)


def normalize_indentation(
    text: str, indent_width: int = DEFAULT_UNIT, *, tab_width: int = DEFAULT_UNIT
) -> str:
    """Rewrite every line's indentation as ``indent_width`` times its level."""

    lines = text.split("\n")
    unit = detect_indent_unit(lines, tab_width=tab_width)
    result: list[str] = []
    for line in lines:
        if not line.strip():
            result.append("")
            continue
        level = indent_level(measure_indent(line, tab_width=tab_width), unit)
        result.append(" " * (indent_width * level) + line.lstrip())
    return "\n".join(result)


__all__ = [
    "detect_indent_unit",
    "indent_level",
    "leading_whitespace",
    "measure_indent",
    "normalize_indentation",
]
