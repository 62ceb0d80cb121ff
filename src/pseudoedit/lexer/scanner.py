"""Single-pass scanner splitting pseudocode into highlight tokens.

Every position is tried against a priority table (comment, operator glyphs,
numbers, definition names, builtins, keywords, indexed variables); the first
category that matches claims the span and scanning resumes after it. Text no
rule claims is gathered into ``TokenKind.TEXT`` runs, so the output always
covers the input exactly once and in order.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from .rules import (
    ASSIGNMENT_GLYPHS,
    BUILTINS,
    COMMENT_MARKER,
    DEFINITION_RE,
    IDENTIFIER_RE,
    KEYWORDS,
    NUMBER_RE,
    RELATIONAL_GLYPHS,
    WORD_RE,
    Token,
    TokenKind,
)

Match = Tuple[TokenKind, int]


def tokenize(text: str) -> List[Token]:
    """Tokenize a whole buffer; newlines land in plain text tokens."""

    tokens: List[Token] = []
    offset = 0
    for index, line in enumerate(text.split("\n")):
        if index:
            tokens.append(Token(offset, offset + 1, TokenKind.TEXT, "\n"))
            offset += 1
        tokens.extend(_scan_line(line, offset))
        offset += len(line)
    return _coalesce(tokens)


def tokenize_line(line: str) -> List[Token]:
    return _coalesce(list(_scan_line(line, 0)))


def _scan_line(line: str, offset: int) -> Iterator[Token]:
    plain_start = 0
    pos = 0
    while pos < len(line):
        match = _classify(line, pos)
        if match is None:
            pos = _advance(line, pos)
            continue
        kind, end = match
        if plain_start < pos:
            yield _token(line, offset, plain_start, pos, TokenKind.TEXT)
        yield _token(line, offset, pos, end, kind)
        pos = plain_start = end
    if plain_start < len(line):
        yield _token(line, offset, plain_start, len(line), TokenKind.TEXT)


def _classify(line: str, pos: int) -> Optional[Match]:
    # Comments and glyphs need no word boundary: ``x←1`` and ``x// note``.
    if line.startswith(COMMENT_MARKER, pos):
        return TokenKind.COMMENT, len(line)

    char = line[pos]
    if char in ASSIGNMENT_GLYPHS or char in RELATIONAL_GLYPHS:
        return TokenKind.OPERATOR, pos + 1

    if _inside_word(line, pos):
        # Only the indexed-variable rule may start inside a word run.
        return _variable_at(line, pos)

    number = NUMBER_RE.match(line, pos)
    if number:
        return TokenKind.NUMBER, number.end()

    if pos == 0:
        definition = DEFINITION_RE.match(line)
        if definition:
            return TokenKind.FUNCTION, definition.end(1)

    word = WORD_RE.match(line, pos)
    if word is None:
        return None
    lowered = word.group().lower()
    following = line[word.end() : word.end() + 1]
    if lowered in BUILTINS and following in ("[", "("):
        return TokenKind.BUILTIN, word.end()
    if lowered in KEYWORDS:
        return TokenKind.KEYWORD, word.end()
    return _variable_at(line, pos)


def _variable_at(line: str, pos: int) -> Optional[Match]:
    ident = IDENTIFIER_RE.match(line, pos)
    if ident and line.startswith("[", ident.end()):
        return TokenKind.VARIABLE, ident.end()
    return None


def _advance(line: str, pos: int) -> int:
    """Skip past text no rule claimed at ``pos``."""

    word = WORD_RE.match(line, pos)
    if word is None:
        return pos + 1
    # ``2abc[`` still highlights ``abc``: stop at the first identifier start.
    if line.startswith("[", word.end()):
        for index in range(pos + 1, word.end()):
            if line[index].isascii() and (line[index].isalpha() or line[index] == "_"):
                return index
    return word.end()


def _inside_word(line: str, pos: int) -> bool:
    return pos > 0 and WORD_RE.match(line, pos - 1, pos) is not None


def _token(line: str, offset: int, start: int, end: int, kind: TokenKind) -> Token:
    return Token(offset + start, offset + end, kind, line[start:end])


def _coalesce(tokens: List[Token]) -> List[Token]:
    merged: List[Token] = []
    for token in tokens:
        previous = merged[-1] if merged else None
        if (
            previous is not None
            and previous.kind is TokenKind.TEXT
            and token.kind is TokenKind.TEXT
        ):
            merged[-1] = Token(
                previous.start, token.end, TokenKind.TEXT, previous.text + token.text
            )
        else:
            merged.append(token)
    return merged


__all__ = ["tokenize", "tokenize_line"]
