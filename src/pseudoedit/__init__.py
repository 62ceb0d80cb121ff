"""Pseudocode editor core: highlighting, auto-indent and reformatting."""

__all__ = [
    "actions",
    "adapters",
    "analysis",
    "buffer",
    "config",
    "editing",
    "formatting",
    "keymaps",
    "lexer",
    "runtime",
    "surface",
]

__version__ = "0.1.0"
