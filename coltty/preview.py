"""Live preview sessions and the text styles used to preview a scheme."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass

from coltty.config import ResolvedScheme, Scheme

_HEX_COLOR = re.compile(r"#([0-9a-fA-F]{6}|[0-9a-fA-F]{3})")


class PreviewApplier(ABC):
    """Applies a resolved scheme to the terminal."""

    @abstractmethod
    def apply(self, scheme: ResolvedScheme) -> None:
        """Apply the scheme."""


class PreviewSession:
    """Tracks the scheme shown while previewing, so it can be restored."""

    def __init__(self, applier: PreviewApplier, original: ResolvedScheme) -> None:
        self.applier = applier
        self.original = original
        self.current = original

    def apply_selection(self, scheme: ResolvedScheme) -> None:
        self.applier.apply(scheme)
        self.current = scheme

    def cancel(self) -> None:
        """Restore the scheme that was active when the session started."""
        self.apply_selection(self.original)

    def confirm(self, scheme: ResolvedScheme) -> None:
        self.apply_selection(scheme)


def _color_code(color: str) -> str | None:
    match = _HEX_COLOR.fullmatch(color)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        return f"38;2;{r};{g};{b}"
    if color.isdecimal() and int(color) < 256:
        return f"38;5;{int(color)}"
    return None


@dataclass(frozen=True)
class Style:
    """A foreground color and boldness, rendered as ANSI SGR sequences."""

    foreground: str = ""
    bold: bool = False

    def render(self, text: str) -> str:
        codes = []
        if self.bold:
            codes.append("1")
        if color := _color_code(self.foreground):
            codes.append(color)
        if not codes:
            return text
        return f"\x1b[{';'.join(codes)}m{text}\x1b[0m"


def pick_palette_color(palette: list[str], index: int) -> str:
    """The palette entry at index, or "" if out of range."""
    if 0 <= index < len(palette):
        return palette[index]
    return ""


def fallback_color(primary: str, fallback: str) -> str:
    return primary or fallback


@dataclass(frozen=True)
class PreviewStyleRoles:
    """Semantic styles derived from a scheme for the preview pane."""

    base: Style
    muted: Style
    heading: Style
    keyword: Style
    function: Style
    string: Style
    accent: Style
    bullet: Style

    @classmethod
    def from_scheme(cls, scheme: Scheme) -> PreviewStyleRoles:
        palette = scheme.palette
        base = fallback_color(scheme.foreground, "#dddddd")
        muted = fallback_color(
            pick_palette_color(palette, 8), fallback_color(scheme.background, base)
        )

        def slot(index: int) -> str:
            return fallback_color(pick_palette_color(palette, index), base)

        return cls(
            base=Style(base),
            muted=Style(muted),
            heading=Style(slot(4), bold=True),
            keyword=Style(slot(5), bold=True),
            function=Style(slot(6)),
            string=Style(slot(2)),
            accent=Style(slot(3)),
            bullet=Style(slot(1), bold=True),
        )