"""Text rendering of the two-pane scheme picker."""

from __future__ import annotations

import copy
import re
import unicodedata
from collections.abc import Iterator

from coltty.config import Scheme
from coltty.picker_model import PLACEHOLDER, PickerModel
from coltty.picker_state import PickerItem, PickerState
from coltty.preview import PreviewStyleRoles, Style

_ANSI = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)")

_FAVORITE_MARKERS = {True: "*", False: " "}


def _char_width(ch: str) -> int:
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _tokens(text: str) -> Iterator[tuple[bool, str]]:
    """Yield (is_escape, chunk) pieces of text."""
    pos = 0
    for match in _ANSI.finditer(text):
        if match.start() > pos:
            yield False, text[pos : match.start()]
        yield True, match.group()
        pos = match.end()
    if pos < len(text):
        yield False, text[pos:]


def visible_width(text: str) -> int:
    """Display width of text, ignoring ANSI escape sequences."""
    return sum(
        _char_width(ch) for is_escape, chunk in _tokens(text) if not is_escape for ch in chunk
    )


def truncate_line(line: str, width: int) -> str:
    """Cut line to width columns, ending in an ellipsis; escapes are kept."""
    if visible_width(line) <= width:
        return line
    tail = "" if width <= 1 else "…"
    limit = max(width - visible_width(tail), 0)
    out: list[str] = []
    used = 0
    cut = False
    for is_escape, chunk in _tokens(line):
        if is_escape:
            out.append(chunk)
            continue
        for ch in chunk:
            if cut:
                continue
            ch_width = _char_width(ch)
            if used + ch_width > limit:
                out.append(tail)
                cut = True
                continue
            out.append(ch)
            used += ch_width
    return "".join(out)


def fit_lines(lines: list[str], height: int, width: int) -> str:
    """Truncate each line to width and pad or cut to exactly height lines."""
    height = max(height, 1)
    width = max(width, 1)
    fitted = [truncate_line(line, width) for line in lines[:height]]
    fitted.extend([""] * (height - len(fitted)))
    return "\n".join(fitted)


def favorite_marker(favorite: bool) -> str:
    """The list marker for an item: a star for favorites, a blank otherwise."""
    return _FAVORITE_MARKERS[bool(favorite)]


def _box(text: str, width: int) -> list[str]:
    """A rounded border around text with one line and two columns of padding."""
    inner = max(width - 4, 0)
    blank = " " * width
    rows = [
        blank,
        *("  " + line + " " * max(inner - visible_width(line), 0) + "  " for line in text.split("\n")),
        blank,
    ]
    return [
        "╭" + "─" * width + "╮",
        *("│" + row + "│" for row in rows),
        "╰" + "─" * width + "╯",
    ]


def _left_pane(model: PickerModel, content_width: int) -> str:
    state = model.state
    lines = [
        "Filter",
        model.filter_text or PLACEHOLDER,
        "",
        f"View: {state.view_mode.value}",
        "Themes",
    ]
    if not state.filtered:
        lines.append("no matches")
    else:
        start = model.scroll_offset
        end = min(len(state.filtered), start + model.list_viewport_height())
        for position in range(start, end):
            item = state.items[state.filtered[position]]
            prefix = "> " if position == state.selected else "  "
            line = f"{prefix}{favorite_marker(item.favorite)} {item.name}"
            if item.usage_count > 0:
                line += f"  used in {item.usage_count} dirs"
            lines.append(line)
    if model.status:
        lines.extend(["", model.status])
    return fit_lines(lines, model.content_height(), content_width)


def _palette_preview(item: PickerItem | None, roles: PreviewStyleRoles) -> list[str]:
    lines = [roles.heading.render("Palette")]
    if item is None or not item.scheme.palette:
        return [*lines, roles.muted.render("(no palette)")]
    chips = [Style(color).render(color) for color in item.scheme.palette[:8]]
    return [*lines, " ".join(chips)]


def _zig_preview(name: str, r: PreviewStyleRoles) -> list[str]:
    return [
        r.muted.render("sample.zig"),
        r.keyword.render("const") + " " + r.function.render("std")
        + r.base.render(" = @import(") + r.string.render('"std"') + r.base.render(");"),
        r.keyword.render("pub fn") + " " + r.function.render("main") + r.base.render("() !void {"),
        "    " + r.keyword.render("const") + " " + r.function.render("theme_name")
        + r.base.render(" = ") + r.string.render(f'"{name}"'),
        "    " + r.keyword.render("const") + " " + r.function.render("sample")
        + r.base.render(" = .{ .ok = true, .depth = 3 };"),
        "    " + r.accent.render("try") + r.base.render(" std.debug.print(")
        + r.string.render('"theme: {s} depth={d}\\n"')
        + r.base.render(", .{ theme_name, sample.depth });"),
        r.base.render("}"),
    ]


def _less_preview(r: PreviewStyleRoles) -> list[str]:
    return [
        r.muted.render("less README.md"),
        r.heading.render("NAME"),
        "  " + r.function.render("coltty set") + r.base.render(" - interactive theme selection"),
        r.heading.render("USAGE"),
        "  " + r.accent.render("$") + r.base.render(" coltty set  ")
        + r.muted.render("# arrows move, Enter saves"),
        r.heading.render("STATUS"),
        "  " + r.bullet.render("preview") + r.base.render(": live, transient, restorable"),
    ]


def _markdown_preview(r: PreviewStyleRoles) -> list[str]:
    return [
        r.muted.render("NOTES.md"),
        r.heading.render("# Preview Behavior"),
        r.bullet.render("-") + r.base.render(" `Enter` saves the selected theme"),
        r.bullet.render("-") + r.base.render(" `Esc` restores the original colors"),
        r.bullet.render("-") + r.base.render(" `f` toggles favorites and `Tab` switches view"),
    ]


def _right_pane(model: PickerModel, content_width: int) -> str:
    item = model.state.selected_item()
    name = (item.name if item is not None else "") or model.preview_name or "none"
    roles = PreviewStyleRoles.from_scheme(item.scheme if item is not None else Scheme())
    lines = [
        roles.heading.render("Preview"),
        roles.base.render(model.selected_scheme_title()),
        "",
        *_palette_preview(item, roles),
        "",
        *_zig_preview(name, roles),
        "",
        *_less_preview(roles),
        "",
        *_markdown_preview(roles),
    ]
    return fit_lines(lines, model.content_height(), content_width)


def render_picker_view(model: PickerModel) -> str:
    """Render the filter/list pane next to the preview pane."""
    model = copy.copy(model)
    if model.width == 0:
        model.width = 100
    if model.height == 0:
        model.height = 24

    left_width = max(28, model.width // 3)
    right_width = max(40, model.width - left_width - 3)
    left = _box(_left_pane(model, max(1, left_width - 6)), left_width)
    right = _box(_right_pane(model, max(1, right_width - 6)), right_width)
    return "\n".join(a + b for a, b in zip(left, right))


def render_picker(state: PickerState, width: int, height: int) -> str:
    """Render a picker for state at the given terminal size."""
    model = PickerModel(state)
    model.width = width
    model.height = height
    return render_picker_view(model)