"""OSC escape sequences for changing terminal colors, with tmux passthrough."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO

from coltty.adapter.base import ResolvedScheme, TerminalAdapter

ESC = "\x1b"
OSC_START = ESC + "]"
ST = ESC + "\\"


def in_tmux() -> bool:
    """Return True if running inside a tmux session."""
    return bool(os.environ.get("TMUX"))


def in_screen() -> bool:
    """Return True if running inside a GNU Screen session."""
    return bool(os.environ.get("STY"))


def split_osc_sequences(s: str) -> list[str]:
    """Split concatenated OSC sequences (ESC ] ... ESC \\) into a list."""
    sequences: list[str] = []
    while s:
        start = s.find(OSC_START)
        if start == -1:
            break
        end = s.find(ST, start + 2)
        if end == -1:
            sequences.append(s[start:])
            break
        seq_end = end + len(ST)
        sequences.append(s[start:seq_end])
        s = s[seq_end:]
    return sequences


def wrap_tmux_passthrough(osc_output: str) -> str:
    """Wrap each OSC sequence in a tmux DCS passthrough, doubling ESC bytes."""
    return "".join(
        f"{ESC}Ptmux;{seq.replace(ESC, ESC + ESC)}{ST}"
        for seq in split_osc_sequences(osc_output)
    )


def write_osc(stream: TextIO, output: str) -> None:
    """Write OSC output, wrapped for tmux when running inside it."""
    if not output:
        return
    if in_tmux():
        output = wrap_tmux_passthrough(output)
    stream.write(output)
    stream.flush()


@dataclass
class OSCEmitter:
    """Builds and writes OSC 10/11/12/4 sequences; writes to stdout by default."""

    writer: TextIO | None = None

    @property
    def stream(self) -> TextIO:
        return sys.stdout if self.writer is None else self.writer

    def emit(self, scheme: ResolvedScheme) -> None:
        parts: list[str] = []
        if scheme.foreground:
            parts.append(f"{OSC_START}10;{scheme.foreground}{ST}")
        if scheme.background:
            parts.append(f"{OSC_START}11;{scheme.background}{ST}")
        if scheme.cursor:
            parts.append(f"{OSC_START}12;{scheme.cursor}{ST}")
        parts.extend(
            f"{OSC_START}4;{index};{color}{ST}"
            for index, color in enumerate(scheme.palette)
        )
        write_osc(self.stream, "".join(parts))


@dataclass
class OSCAdapter(TerminalAdapter):
    """Generic adapter for terminals that need only standard OSC sequences."""

    name: str
    detect_func: Callable[[], bool]
    emitter: OSCEmitter = field(default_factory=OSCEmitter)

    def detect(self) -> bool:
        return self.detect_func()

    def apply(self, scheme: ResolvedScheme) -> None:
        self.emitter.emit(scheme)