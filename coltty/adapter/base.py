"""Core types shared by all terminal adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field


@dataclass
class ResolvedScheme:
    """Final color values to apply to a terminal."""

    foreground: str = ""
    background: str = ""
    cursor: str = ""
    palette: list[str] = field(default_factory=list)
    name: str = ""
    extras: dict[str, str] = field(default_factory=dict)


class TerminalAdapter(ABC):
    """Applies color schemes to one kind of terminal emulator."""

    name: str

    @abstractmethod
    def apply(self, scheme: ResolvedScheme) -> None:
        """Write the resolved scheme to the terminal."""

    @abstractmethod
    def detect(self) -> bool:
        """Return True if this adapter's terminal is active."""


def detect_adapter(adapters: Iterable[TerminalAdapter]) -> TerminalAdapter | None:
    """Return the first adapter whose detect() is true, or None."""
    return next((adapter for adapter in adapters if adapter.detect()), None)