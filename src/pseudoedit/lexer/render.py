"""Turn token streams into escaped markup or styled ``rich`` text."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from rich.text import Text

from .rules import Token, TokenKind
from .scanner import tokenize

_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#039;"}
)

# Catppuccin Mocha accents.
DEFAULT_THEME: Mapping[TokenKind, str] = {
    TokenKind.COMMENT: "italic #6c7086",
    TokenKind.OPERATOR: "bold #89dceb",
    TokenKind.NUMBER: "#fab387",
    TokenKind.FUNCTION: "bold #89b4fa",
    TokenKind.BUILTIN: "#94e2d5",
    TokenKind.KEYWORD: "bold #cba6f7",
    TokenKind.VARIABLE: "#f9e2af",
    TokenKind.TEXT: "#cdd6f4",
}


def escape_markup(text: str) -> str:
    return text.translate(_ESCAPES)


def markup_tokens(tokens: Iterable[Token]) -> str:
    parts: list[str] = []
    for token in tokens:
        escaped = escape_markup(token.text)
        if token.kind is TokenKind.TEXT:
            parts.append(escaped)
        else:
            parts.append(f'<span class="token {token.kind.value}">{escaped}</span>')
    return "".join(parts)


def render_markup(text: str) -> str:
    """Highlight ``text`` as HTML-safe markup with ``token <kind>`` classes."""

    return markup_tokens(tokenize(text))


def render_rich(text: str, *, theme: Optional[Mapping[TokenKind, str]] = None) -> Text:
    palette = theme or DEFAULT_THEME
    result = Text(no_wrap=True, end="")
    for token in tokenize(text):
        result.append(token.text, style=palette.get(token.kind, ""))
    return result


__all__ = [
    "DEFAULT_THEME",
    "escape_markup",
    "markup_tokens",
    "render_markup",
    "render_rich",
]
