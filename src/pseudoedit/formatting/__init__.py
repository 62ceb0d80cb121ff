"""Document-level formatting passes."""

from .normalizer import (
    detect_indent_unit,
    indent_level,
    leading_whitespace,
    measure_indent,
    normalize_indentation,
)

__all__ = [
    "detect_indent_unit",
    "indent_level",
    "leading_whitespace",
    "measure_indent",
    "normalize_indentation",
]
