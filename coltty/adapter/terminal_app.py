"""macOS Terminal.app adapter driven by AppleScript profiles."""

from __future__ import annotations

import json
import os
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from coltty.adapter.base import ResolvedScheme, TerminalAdapter
from coltty.adapter.color import hex_to_terminal_app_rgb


def run_applescript(script: str) -> None:
    """Run an AppleScript via osascript, passing it on stdin."""
    subprocess.run(["osascript"], input=script, text=True, check=True)


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _build_script(profile_name: str, scheme: ResolvedScheme, switch_profile: bool) -> str:
    quoted = _quote(profile_name)
    lines = [
        'tell application "Terminal"',
        "\tset profileNames to name of every settings set",
        f"\tif {quoted} is not in profileNames then",
        f"\t\tmake new settings set with properties {{name:{quoted}}}",
        "\tend if",
        f"\tset targetProfile to settings set {quoted}",
    ]
    for prop, hex_color in (
        ("normal text color", scheme.foreground),
        ("background color", scheme.background),
        ("cursor color", scheme.cursor),
    ):
        if not hex_color:
            continue
        try:
            rgb = hex_to_terminal_app_rgb(hex_color)
        except ValueError as exc:
            raise ValueError(f"converting {prop} {hex_color!r}: {exc}") from exc
        lines.append(f"\tset {prop} of targetProfile to {rgb}")
    if switch_profile:
        lines.append("\tset current settings of front window to targetProfile")
    lines.append("end tell")
    return "".join(line + "\n" for line in lines)


def build_apply_script(profile_name: str, scheme: ResolvedScheme) -> str:
    """AppleScript that creates/updates a profile and switches the front window to it."""
    return _build_script(profile_name, scheme, True)


def build_setup_script(profile_name: str, scheme: ResolvedScheme) -> str:
    """AppleScript that creates/updates a profile without switching to it."""
    return _build_script(profile_name, scheme, False)


@dataclass
class TerminalAppAdapter(TerminalAdapter):
    """Applies colors by creating or updating a named Terminal.app profile."""

    runner: Callable[[str], None] | None = None

    name = "terminal.app"

    def detect(self) -> bool:
        return os.environ.get("TERM_PROGRAM") == "Apple_Terminal"

    def apply(self, scheme: ResolvedScheme) -> None:
        profile = scheme.extras.get("terminal_app_profile") or scheme.name
        if not profile:
            raise ValueError(
                "terminal.app adapter requires a scheme name or terminal_app_profile"
            )
        script = build_apply_script(profile, scheme)
        (self.runner or run_applescript)(script)