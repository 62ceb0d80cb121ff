"""Tokenizer and highlighter for the pseudocode dialect."""

from .render import (
    DEFAULT_THEME,
    escape_markup,
    markup_tokens,
    render_markup,
    render_rich,
)
from .rules import (
    BLOCK_OPENER_RE,
    BLOCK_OPENERS,
    BUILTINS,
    KEYWORDS,
    OPEN_TO_CLOSE,
    Token,
    TokenKind,
)
from .scanner import tokenize, tokenize_line

__all__ = [
    "BLOCK_OPENER_RE",
    "BLOCK_OPENERS",
    "BUILTINS",
    "DEFAULT_THEME",
    "KEYWORDS",
    "OPEN_TO_CLOSE",
    "Token",
    "TokenKind",
    "escape_markup",
    "markup_tokens",
    "render_markup",
    "render_rich",
    "tokenize",
    "tokenize_line",
]
