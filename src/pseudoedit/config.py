"""Editor configuration shared by the formatter and the keystroke handler."""

from __future__ import annotations

from dataclasses import dataclass, replace

from pseudoedit.runtime.telemetry import env, env_flag

DEFAULT_INDENT_WIDTH = 4
DEFAULT_TAB_WIDTH = 4
DEFAULT_PLACEHOLDER = "// Write your pseudocode here..."


@dataclass(frozen=True, slots=True)
class EditorConfig:
    """Per-instance settings; never mutated once an editor is built."""

    indent_unit_width: int = DEFAULT_INDENT_WIDTH
    tab_width: int = DEFAULT_TAB_WIDTH
    read_only: bool = False
    placeholder_text: str = DEFAULT_PLACEHOLDER

    def __post_init__(self) -> None:
        if self.indent_unit_width <= 0:
            raise ValueError("indent_unit_width must be positive")
        if self.tab_width <= 0:
            raise ValueError("tab_width must be positive")

    @property
    def indent_unit(self) -> str:
        return " " * self.indent_unit_width

    def evolve(self, **changes: object) -> "EditorConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls, **overrides: object) -> "EditorConfig":
        """Build a config from ``PSEUDOEDIT_*`` variables, then apply overrides."""

        values: dict[str, object] = {
            "indent_unit_width": _env_int("INDENT_WIDTH", DEFAULT_INDENT_WIDTH),
            "tab_width": _env_int("TAB_WIDTH", DEFAULT_TAB_WIDTH),
            "read_only": env_flag("READ_ONLY", False),
            "placeholder_text": env("PLACEHOLDER", DEFAULT_PLACEHOLDER),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]


def _env_int(name: str, fallback: int) -> int:
    raw = env(name)
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


__all__ = ["EditorConfig", "DEFAULT_INDENT_WIDTH", "DEFAULT_TAB_WIDTH"]
