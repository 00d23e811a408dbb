"""Adapters for terminals driven by standard OSC sequences, and the adapter registry."""

from __future__ import annotations

import os

from coltty.adapter.base import TerminalAdapter
from coltty.adapter.ghostty import GhosttyAdapter
from coltty.adapter.iterm2 import ITermAdapter
from coltty.adapter.osc import OSCAdapter
from coltty.adapter.terminal_app import TerminalAppAdapter


def _env(name: str) -> str:
    return os.environ.get(name, "")


def alacritty_adapter() -> OSCAdapter:
    return OSCAdapter("alacritty", lambda: _env("TERM_PROGRAM") == "Alacritty")


def kitty_adapter() -> OSCAdapter:
    return OSCAdapter("kitty", lambda: _env("TERM_PROGRAM") == "kitty")


def wezterm_adapter() -> OSCAdapter:
    return OSCAdapter("wezterm", lambda: _env("TERM_PROGRAM") == "WezTerm")


def xterm_adapter() -> OSCAdapter:
    return OSCAdapter("xterm", lambda: _env("XTERM_VERSION") != "")


def foot_adapter() -> OSCAdapter:
    return OSCAdapter("foot", lambda: _env("TERM") in ("foot", "foot-extra"))


def konsole_adapter() -> OSCAdapter:
    """Konsole, which also covers Yakuake."""
    return OSCAdapter("konsole", lambda: _env("KONSOLE_DBUS_SESSION") != "")


def hyper_adapter() -> OSCAdapter:
    return OSCAdapter("hyper", lambda: _env("TERM_PROGRAM") == "Hyper")


def tabby_adapter() -> OSCAdapter:
    return OSCAdapter("tabby", lambda: _env("TERM_PROGRAM") == "Tabby")


def st_adapter() -> OSCAdapter:
    """st, the suckless terminal."""
    return OSCAdapter(
        "st",
        lambda: _env("TERM") in ("st-256color", "st", "st-meta-256color", "st-meta"),
    )


def urxvt_adapter() -> OSCAdapter:
    return OSCAdapter("urxvt", lambda: _env("TERM").startswith("rxvt"))


def vte_adapter() -> OSCAdapter:
    """Catch-all for VTE-based terminals; must come last."""
    return OSCAdapter("vte", lambda: _env("VTE_VERSION") != "")


def all_adapters() -> list[TerminalAdapter]:
    """All adapters, most specific first."""
    return [
        GhosttyAdapter(),
        ITermAdapter(),
        TerminalAppAdapter(),
        alacritty_adapter(),
        kitty_adapter(),
        wezterm_adapter(),
        hyper_adapter(),
        tabby_adapter(),
        konsole_adapter(),
        xterm_adapter(),
        foot_adapter(),
        st_adapter(),
        urxvt_adapter(),
        vte_adapter(),
    ]