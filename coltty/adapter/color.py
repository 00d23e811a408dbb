"""Color conversions for terminal-specific formats."""

from __future__ import annotations

import re

_HEX6 = re.compile(r"[0-9a-fA-F]{6}")


def hex_to_terminal_app_rgb(hex_color: str) -> str:
    """Convert "#rrggbb" to a Terminal.app 16-bit RGB list like "{r, g, b}".

    Each 8-bit component is scaled by 257 so that 0xff maps to 65535.
    """
    digits = hex_color.removeprefix("#")
    if len(digits) != 6:
        raise ValueError(f"invalid hex color {digits!r}: expected 6 hex digits")
    if not _HEX6.fullmatch(digits):
        raise ValueError(f"invalid hex color {digits!r}: not a hexadecimal value")
    r, g, b = (int(digits[i : i + 2], 16) * 257 for i in (0, 2, 4))
    return f"{{{r}, {g}, {b}}}"