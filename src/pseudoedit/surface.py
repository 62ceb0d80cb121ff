"""Editor surface: buffer, keystroke handling, highlighting and scroll sync.

The surface is host-agnostic. A host supplies a ``scheduler`` that runs a
callback after its next refresh (Textual's ``call_after_refresh``); the
surface uses it to move the visible caret only once the replaced text is on
screen. Without a scheduler the callback runs immediately.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Tuple

from rich.text import Text

from pseudoedit.actions import reformat
from pseudoedit.analysis import TranslationOutcome
from pseudoedit.buffer import Buffer, Caret
from pseudoedit.config import EditorConfig
from pseudoedit.editing import EditContext, EventBus, KeyInput, KeyResult
from pseudoedit.editing.handler import KeystrokeHandler
from pseudoedit.lexer import DEFAULT_THEME, render_markup, render_rich
from pseudoedit.runtime import telemetry

Scheduler = Callable[[Callable[[], None]], None]

SELECTION_STYLE = "on #45475a"
CARET_STYLE = "reverse"
PLACEHOLDER_STYLE = "dim italic"


def run_now(callback: Callable[[], None]) -> None:
    callback()


class ScrollFollower(Protocol):
    """Region that mirrors the editable region's scroll offsets."""

    def set_viewport(self, *, top: int, left: int) -> None:
        ...


@dataclass(slots=True)
class ScrollState:
    top: int = 0
    left: int = 0


class EditorSurface:
    def __init__(
        self,
        text: str = "",
        *,
        config: Optional[EditorConfig] = None,
        on_text_changed: Optional[Callable[[str], None]] = None,
        on_caret_moved: Optional[Callable[[Caret], None]] = None,
        scheduler: Optional[Scheduler] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.config = config or EditorConfig()
        self.buffer = Buffer.from_text(text, name="surface")
        self.context = EditContext(
            buffer=self.buffer, config=self.config, bus=bus or EventBus()
        )
        self.handler = KeystrokeHandler(self.context)
        self.on_text_changed = on_text_changed
        self.on_caret_moved = on_caret_moved
        self._schedule = scheduler or run_now
        self._followers: List[Tuple[ScrollFollower, bool]] = []
        self.scroll_state = ScrollState()
        self.display_caret = self.buffer.caret

    @property
    def bus(self) -> EventBus:
        return self.context.bus

    @property
    def read_only(self) -> bool:
        return self.config.read_only

    # -- text access -------------------------------------------------------

    def get_text(self) -> str:
        return self.buffer.text

    def set_text(self, text: str) -> None:
        """Replace the whole buffer from the host side."""

        delta = self.buffer.replace_all(text, label="set_text")
        self._after_change(delta.caret)

    def format(self) -> KeyResult:
        result = reformat(self.context)
        if result.changed:
            self._after_change(result.caret)
        return result

    def handle_key(self, key: KeyInput) -> KeyResult:
        result = self.handler.handle_key(key)
        if result.changed:
            self._after_change(result.caret)
        elif result.caret is not None:
            self._defer_caret(result.caret)
        return result

    def apply_translation(self, outcome: TranslationOutcome) -> bool:
        """Load translated pseudocode into the buffer; failures leave it as is."""

        if outcome.error or outcome.text is None:
            telemetry.record_event(
                "translation.rejected",
                level="warning",
                data={"error": outcome.error or "empty"},
            )
            return False
        self.set_text(outcome.text)
        return True

    # -- derived views -----------------------------------------------------

    @property
    def line_count(self) -> int:
        return self.buffer.line_count

    def line_numbers(self) -> List[int]:
        return list(range(1, self.line_count + 1))

    def gutter_text(self) -> str:
        width = len(str(self.line_count))
        return "\n".join(str(number).rjust(width) for number in self.line_numbers())

    @property
    def placeholder_visible(self) -> bool:
        return not self.buffer.text

    def overlay_markup(self) -> str:
        # The trailing newline gives the last line the same height as an
        # editable line.
        return render_markup(self.buffer.text) + "\n"

    def overlay_text(self) -> Text:
        if self.placeholder_visible:
            overlay = Text(no_wrap=True, end="")
            overlay.append(" ", style=CARET_STYLE)
            overlay.append(self.config.placeholder_text, style=PLACEHOLDER_STYLE)
            return overlay

        overlay = render_rich(self.buffer.text, theme=DEFAULT_THEME)
        start, end = self.display_caret.ordered()
        start = min(start, len(overlay))
        end = min(end, len(overlay))
        if start != end:
            overlay.stylize(SELECTION_STYLE, start, end)
        else:
            overlay = _with_caret(overlay, self.buffer.text, start)
        overlay.append("\n")
        return overlay

    # -- scroll sync -------------------------------------------------------

    def follow_scroll(self, follower: ScrollFollower, *, horizontal: bool = True) -> None:
        """Register a region driven by the editable region's scroll offsets.

        The gutter follows vertically only.
        """

        self._followers.append((follower, horizontal))
        self.sync_scroll()

    def scroll(self, *, top: int, left: int = 0) -> None:
        self.scroll_state = ScrollState(top=max(0, top), left=max(0, left))
        self.sync_scroll()

    def sync_scroll(self) -> None:
        state = self.scroll_state
        for follower, horizontal in self._followers:
            follower.set_viewport(top=state.top, left=state.left if horizontal else 0)

    # -- internals ---------------------------------------------------------

    def _after_change(self, caret: Optional[Caret]) -> None:
        if self.on_text_changed is not None:
            self.on_text_changed(self.buffer.text)
        # Line count may have changed the scrollable height.
        self.sync_scroll()
        self._defer_caret(caret or self.buffer.caret)

    def _defer_caret(self, caret: Caret) -> None:
        self._schedule(lambda: self._restore_caret(caret))

    def _restore_caret(self, caret: Caret) -> None:
        self.display_caret = caret
        if self.on_caret_moved is not None:
            self.on_caret_moved(caret)


def _with_caret(overlay: Text, source: str, offset: int) -> Text:
    if offset < len(source) and source[offset] != "\n":
        overlay.stylize(CARET_STYLE, offset, offset + 1)
        return overlay
    # Caret sits on a line break or the buffer end: draw a block cell.
    head = overlay[:offset]
    head.append(" ", style=CARET_STYLE)
    head.append_text(overlay[offset:])
    return head


__all__ = ["EditorSurface", "ScrollFollower", "ScrollState", "Scheduler", "run_now"]
