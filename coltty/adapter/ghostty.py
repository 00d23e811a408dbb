"""Ghostty adapter: writes a config fragment and emits OSC sequences."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from coltty.adapter.base import ResolvedScheme, TerminalAdapter
from coltty.adapter.osc import OSCEmitter


def _default_fragment_path() -> Path:
    return Path.home() / ".config" / "coltty" / "ghostty-colors"


@dataclass
class GhosttyAdapter(TerminalAdapter):
    """Writes colors to a Ghostty config fragment for new windows and updates the current one."""

    fragment_path: Path | str | None = None
    emitter: OSCEmitter = field(default_factory=OSCEmitter)

    name = "ghostty"

    def __post_init__(self) -> None:
        self.fragment_path = (
            Path(self.fragment_path) if self.fragment_path else _default_fragment_path()
        )

    def detect(self) -> bool:
        return os.environ.get("TERM_PROGRAM") == "ghostty"

    def apply(self, scheme: ResolvedScheme) -> None:
        path = Path(self.fragment_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render_fragment(scheme), encoding="utf-8")
        self.emitter.emit(scheme)

    def render_fragment(self, scheme: ResolvedScheme) -> str:
        lines: list[str] = []
        if scheme.foreground:
            lines.append(f"foreground = {scheme.foreground}")
        if scheme.background:
            lines.append(f"background = {scheme.background}")
        if scheme.cursor:
            lines.append(f"cursor-color = {scheme.cursor}")
        lines.extend(
            f"palette = {index}={color}" for index, color in enumerate(scheme.palette)
        )
        return "".join(line + "\n" for line in lines)