"""iTerm2 adapter: standard OSC sequences plus OSC 1337 extensions."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from coltty.adapter.base import ResolvedScheme, TerminalAdapter
from coltty.adapter.osc import OSC_START, ST, OSCEmitter, write_osc

_SET_COLORS_KEYS = (
    ("tab", "tab"),
    ("bold", "bold"),
    ("selection_foreground", "selfg"),
    ("selection_background", "selbg"),
)


def strip_hash(color: str) -> str:
    """Remove a leading '#' from a hex color."""
    return color.removeprefix("#")


@dataclass
class ITermAdapter(TerminalAdapter):
    """Applies colors to iTerm2, including tab, bold, selection and preset."""

    emitter: OSCEmitter = field(default_factory=OSCEmitter)

    name = "iterm2"

    def detect(self) -> bool:
        return os.environ.get("TERM_PROGRAM") == "iTerm.app"

    def apply(self, scheme: ResolvedScheme) -> None:
        self.emitter.emit(scheme)
        self._emit_extras(scheme)

    def _emit_extras(self, scheme: ResolvedScheme) -> None:
        extras = scheme.extras
        if not extras:
            return
        parts = [
            f"{OSC_START}1337;SetColors={code}={strip_hash(extras[key])}{ST}"
            for key, code in _SET_COLORS_KEYS
            if extras.get(key)
        ]
        if preset := extras.get("iterm_preset"):
            parts.append(f"{OSC_START}1337;SetPreset={preset}{ST}")
        write_osc(self.emitter.stream, "".join(parts))