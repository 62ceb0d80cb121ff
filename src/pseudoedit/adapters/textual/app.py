"""Executable Textual app that hosts the pseudocode editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence, Tuple

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Footer, Header, Static

from pseudoedit.buffer import BufferMirror, Caret
from pseudoedit.config import EditorConfig
from pseudoedit.runtime import telemetry
from pseudoedit.surface import EditorSurface

from .controller import TextualEditorAdapter, TextualUIHooks

_NAMED_KEYS = {
    "tab": "TAB",
    "shift+tab": "TAB",
    "enter": "ENTER",
    "return": "ENTER",
    "escape": "ESC",
    "backspace": "BACKSPACE",
    "delete": "DELETE",
    "left": "LEFT",
    "right": "RIGHT",
    "up": "UP",
    "down": "DOWN",
    "home": "HOME",
    "end": "END",
}


@dataclass
class UIState:
    status_text: str = ""
    path: Optional[Path] = None


class ViewportPane(Widget):
    """Widget that shows a scrolled window onto a multi-line rich Text.

    The surface drives ``set_viewport``; the pane only crops what it renders.
    """

    def __init__(self, source: Callable[[], Text], **kwargs) -> None:
        super().__init__(**kwargs)
        self._source = source
        self.top = 0
        self.left = 0

    def set_viewport(self, *, top: int, left: int) -> None:
        self.top = top
        self.left = left
        self.refresh()

    def visible_rows(self) -> int:
        return max(1, self.content_region.height)

    def render(self) -> Text:
        lines = self._source().split("\n")
        window = lines[self.top : self.top + self.visible_rows()]
        if self.left:
            window = [line[self.left :] for line in window]
        return Text("\n").join(window)


class EditorPane(ViewportPane):
    """Focusable pane that receives the editor's keystrokes."""

    can_focus = True

    def __init__(
        self,
        source: Callable[[], Text],
        on_key_event: Callable[[events.Key], bool],
        **kwargs,
    ) -> None:
        super().__init__(source, **kwargs)
        self._on_key_event = on_key_event

    def on_key(self, event: events.Key) -> None:
        if self._on_key_event(event):
            # Keeps focus-cycling bindings away from Tab and Shift+Tab.
            event.prevent_default()
            event.stop()


class PseudoEditApp(App[None]):
    """Minimal Textual UI embedding the editor surface."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-area {
		height: 1fr;
		border: round $accent;
	}

	#gutter {
		width: auto;
		min-width: 3;
		padding: 0 1;
		color: $text-muted;
		background: $surface-darken-1;
	}

	#overlay {
		width: 1fr;
		padding: 0 1;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+s", "save", "Save"),
    ]

    def __init__(
        self,
        *,
        config: Optional[EditorConfig] = None,
        path: Optional[Path] = None,
        text: str = "",
    ) -> None:
        super().__init__()
        self._state = UIState(path=path)
        self.config = config or EditorConfig.from_env()
        self.surface = EditorSurface(
            text, config=self.config, scheduler=self.call_after_refresh
        )
        self.adapter: TextualEditorAdapter | None = None
        self._gutter: ViewportPane | None = None
        self._overlay: EditorPane | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="editor-area"):
            self._gutter = ViewportPane(
                lambda: Text(self.surface.gutter_text()), id="gutter"
            )
            self._overlay = EditorPane(
                self.surface.overlay_text, self._handle_editor_key, id="overlay"
            )
            yield self._gutter
            yield self._overlay
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    def on_mount(self) -> None:
        assert self._gutter is not None and self._overlay is not None
        self.surface.follow_scroll(self._overlay)
        self.surface.follow_scroll(self._gutter, horizontal=False)
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            restore_caret=self._restore_caret,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.surface, hooks)
        self._overlay.focus()
        if self.config.read_only:
            self._update_status("read-only")

    def _handle_editor_key(self, event: events.Key) -> bool:
        if not self.adapter:
            return False
        normalized = self._normalize_key(event)
        if normalized is None:
            return False
        key, text, modifiers = normalized
        result = self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        return result.consumed

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self._scroll_by(1)
        event.stop()

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self._scroll_by(-1)
        event.stop()

    def action_save(self) -> None:
        path = self._state.path
        if path is None:
            self._update_status("no file to save")
            return
        path.write_text(self.surface.get_text(), encoding="utf-8")
        telemetry.record_event("document.saved", data={"path": str(path)})
        self._update_status(f"saved {path.name}")

    def _scroll_by(self, delta: int) -> None:
        state = self.surface.scroll_state
        top = min(max(0, state.top + delta), max(0, self.surface.line_count - 1))
        self.surface.scroll(top=top, left=state.left)

    def _update_buffer(self, mirror: BufferMirror) -> None:
        del mirror
        for pane in (self._gutter, self._overlay):
            if pane is not None:
                pane.refresh(layout=True)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _restore_caret(self, caret: Caret) -> None:
        # Runs after the refresh that drew the new text.
        if self._overlay is None:
            return
        text = self.surface.get_text()
        row = text.count("\n", 0, caret.end)
        column = caret.end - (text.rfind("\n", 0, caret.end) + 1)
        state = self.surface.scroll_state
        rows = self._overlay.visible_rows()
        top = state.top
        if row < top:
            top = row
        elif row >= top + rows:
            top = row - rows + 1
        width = max(1, self._overlay.content_region.width)
        left = state.left
        if column < left:
            left = column
        elif column >= left + width:
            left = column - width + 1
        if (top, left) != (state.top, state.left):
            self.surface.scroll(top=top, left=left)
        else:
            self._overlay.refresh()

    def _log_line(self, line: str) -> None:
        telemetry.record_event("textual.trace", level="debug", data={"line": line})

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        key = event.key
        if key in {"ctrl+c", "ctrl+q", "ctrl+s"}:
            return None
        if key in _NAMED_KEYS:
            modifiers: Tuple[str, ...] = ("SHIFT",) if key == "shift+tab" else ()
            return (_NAMED_KEYS[key], None, modifiers)
        if key.startswith("shift+") and key[6:] in _NAMED_KEYS:
            return (_NAMED_KEYS[key[6:]], None, ("SHIFT",))
        if key.startswith("ctrl+") and len(key) == 6:
            return (key[-1], None, ("CTRL",))
        if event.character and event.is_printable:
            return (event.character, event.character, ())
        return None


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit pseudocode in the terminal.")
    parser.add_argument("path", nargs="?", help="File to open (created on save)")
    parser.add_argument(
        "--indent-width",
        type=int,
        default=None,
        help="Spaces per indent unit (default: $PSEUDOEDIT_INDENT_WIDTH or 4)",
    )
    parser.add_argument(
        "--read-only",
        action="store_true",
        default=None,
        help="Open the document without allowing edits",
    )
    parser.add_argument(
        "--log-preset",
        default="tui",
        choices=("development", "quiet", "tui"),
        help="Telemetry preset (default: tui, which logs to a file only)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset=args.log_preset)
    config = EditorConfig.from_env(
        indent_unit_width=args.indent_width, read_only=args.read_only
    )
    path = Path(args.path) if args.path else None
    text = ""
    if path is not None and path.exists():
        text = path.read_text(encoding="utf-8")
    app = PseudoEditApp(config=config, path=path, text=text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
