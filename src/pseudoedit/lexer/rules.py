"""Token categories, word lists and patterns for the pseudocode dialect."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    COMMENT = "comment"
    OPERATOR = "operator"
    NUMBER = "number"
    FUNCTION = "function"
    BUILTIN = "builtin"
    KEYWORD = "keyword"
    VARIABLE = "variable"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class Token:
    """Classified span of the source; ``end`` is exclusive."""

    start: int
    end: int
    kind: TokenKind
    text: str

    def __post_init__(self) -> None:
        if self.end - self.start != len(self.text):
            raise ValueError("token span does not match its text")


KEYWORDS: frozenset[str] = frozenset(
    {
        "if", "then", "else", "elseif", "for", "to", "downto", "do", "while",
        "repeat", "until", "return", "and", "or", "not", "true", "false", "nil",
        "error", "exchange", "let", "mod", "div",
    }
)

BUILTINS: frozenset[str] = frozenset(
    {"length", "floor", "ceiling", "min", "max", "abs", "sqrt", "log", "print"}
)

# Keywords whose presence at a line end opens a nested block.
BLOCK_OPENERS: tuple[str, ...] = ("do", "then")

COMMENT_MARKER = "//"
ASSIGNMENT_GLYPHS = frozenset("←")
RELATIONAL_GLYPHS = frozenset("≤≥≠")

# Word boundaries follow ASCII rules: ``_`` and digits join identifiers.
NUMBER_RE = re.compile(r"\b\d+\.?\d*\b", re.ASCII)
WORD_RE = re.compile(r"\w+", re.ASCII)
IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*", re.ASCII)
DEFINITION_RE = re.compile(r"([A-Z][A-Z0-9-]*)[^\S\n]*\(")
BLOCK_OPENER_RE = re.compile(
    r"\b(?:%s)\s*$" % "|".join(BLOCK_OPENERS), re.IGNORECASE | re.ASCII
)

OPEN_TO_CLOSE: dict[str, str] = {"(": ")", "[": "]", "{": "}"}


__all__ = [
    "TokenKind",
    "Token",
    "KEYWORDS",
    "BUILTINS",
    "BLOCK_OPENERS",
    "BLOCK_OPENER_RE",
    "OPEN_TO_CLOSE",
]
