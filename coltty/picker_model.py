"""Event handling for the interactive scheme picker."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto

from coltty.picker_state import PickerState

PLACEHOLDER = "type to filter themes"


class Key(Enum):
    UP = auto()
    DOWN = auto()
    ENTER = auto()
    ESC = auto()
    TAB = auto()
    BACKSPACE = auto()
    RUNES = auto()


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    text: str = ""


@dataclass(frozen=True)
class WindowSize:
    width: int
    height: int


@dataclass(frozen=True)
class PreviewSelection:
    scheme_name: str


@dataclass(frozen=True)
class ConfirmSelection:
    scheme_name: str


@dataclass(frozen=True)
class CancelSelection:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Message = KeyEvent | WindowSize | PreviewSelection | ConfirmSelection | CancelSelection | Quit


@dataclass
class PickerEffects:
    """Callbacks run in response to picker intents; they raise on failure."""

    on_preview: Callable[[str], None] | None = None
    on_confirm: Callable[[str], None] | None = None
    on_cancel: Callable[[], None] | None = None
    on_save_favorites: Callable[[list[str]], None] | None = None


def _preview(name: str) -> PreviewSelection | None:
    return PreviewSelection(name) if name else None


class PickerModel:
    """Picker UI state; update() consumes a message and returns the next one, if any."""

    def __init__(self, state: PickerState, error: Exception | str | None = None) -> None:
        self.state = state
        self.width = 0
        self.height = 0
        self.filter_text = ""
        self.status = str(error) if error else ""
        self.effects = PickerEffects()
        self.preview_name = state.selected_name
        self.scroll_offset = 0

    def init(self) -> Message | None:
        """The first message: a preview of the initially selected scheme."""
        return _preview(self.state.selected_name)

    def _run(self, effect: Callable[..., None] | None, *args: object) -> bool:
        if effect is None:
            return True
        try:
            effect(*args)
        except Exception as exc:  # surfaced to the user in the status line
            self.status = str(exc)
            return False
        return True

    def update(self, msg: Message) -> Message | None:
        match msg:
            case WindowSize(width=width, height=height):
                self.width = width
                self.height = height
                self._sync_scroll()
                return None
            case PreviewSelection(scheme_name=name):
                if name:
                    self.preview_name = name
                self._run(self.effects.on_preview, name)
                return None
            case ConfirmSelection(scheme_name=name):
                return Quit() if self._run(self.effects.on_confirm, name) else None
            case CancelSelection():
                return Quit() if self._run(self.effects.on_cancel) else None
            case KeyEvent():
                return self._handle_key(msg)
        self.state.set_query(self.filter_text)
        return None

    def _handle_key(self, event: KeyEvent) -> Message | None:
        state = self.state
        match event.key:
            case Key.UP | Key.DOWN:
                if state.move_selection(-1 if event.key is Key.UP else 1):
                    self._sync_scroll()
                    return _preview(state.selected_name)
                return None
            case Key.ENTER:
                return ConfirmSelection(state.selected_name)
            case Key.ESC:
                if self.filter_text:
                    self.filter_text = ""
                    state.set_query("")
                    return None
                return CancelSelection()
            case Key.TAB:
                state.toggle_view_mode()
                self._sync_scroll()
                return None
            case Key.BACKSPACE:
                return self._edit_filter(self.filter_text[:-1])
            case Key.RUNES:
                if event.text == "f":
                    state.toggle_favorite()
                    self._run(self.effects.on_save_favorites, state.favorite_names())
                    return None
                return self._edit_filter(self.filter_text + event.text)
        return None

    def _edit_filter(self, text: str) -> Message | None:
        before = self.state.selected_name
        self.filter_text = text
        self.state.set_query(text)
        self._sync_scroll()
        selected = self.state.selected_name
        if selected and selected != before:
            return PreviewSelection(selected)
        return None

    def view(self) -> str:
        from coltty.render import render_picker_view

        return render_picker_view(self)

    def selected_scheme_title(self) -> str:
        name = self.state.selected_name
        if name:
            return f"previewing {name}"
        if self.preview_name:
            return f"previewing {self.preview_name}"
        return "no theme selected"

    def _sync_scroll(self) -> None:
        rows = self.list_viewport_height()
        count = len(self.state.filtered)
        if rows <= 0 or count <= rows:
            self.scroll_offset = 0
            return
        selected = self.state.selected
        if selected < self.scroll_offset:
            self.scroll_offset = selected
        if selected >= self.scroll_offset + rows:
            self.scroll_offset = selected - rows + 1
        self.scroll_offset = max(0, min(self.scroll_offset, count - rows))

    def list_viewport_height(self) -> int:
        """Rows available for the scheme list."""
        header_lines = 6 if self.status else 5
        return max(1, self.content_height() - header_lines)

    def content_height(self) -> int:
        """Lines inside each pane, excluding border and padding."""
        if self.height <= 0:
            return 20
        if self.height <= 4:
            return 1
        return self.height - 4