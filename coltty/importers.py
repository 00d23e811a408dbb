"""Import color schemes from Gogh, base16 and iTerm2 theme files."""

from __future__ import annotations

import json
import math
import os
import plistlib
import sys
import tomllib
import xml.parsers.expat
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

import tomli_w
import yaml

from coltty.config import GlobalConfig, Scheme, global_config_path, load_global_config

SUPPORTED_FORMATS = ("gogh", "base16", "iterm2")

_EXTENSION_FORMATS = {
    ".json": "gogh",
    ".yaml": "base16",
    ".yml": "base16",
    ".itermcolors": "iterm2",
}

# base16 slots mapped onto the 16-color ANSI palette.
_BASE16_PALETTE = (
    "base00", "base08", "base0B", "base0A", "base0D", "base0E", "base0C", "base05",
    "base03", "base09", "base0B", "base0A", "base0D", "base0E", "base0C", "base07",
)


class ThemeImportError(ValueError):
    """A theme file could not be read, parsed or imported."""


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def normalize_hex(value: str) -> str:
    """Trim a color, ensure a leading '#' and lower-case it; empty stays empty."""
    value = value.strip()
    if not value:
        return value
    if not value.startswith("#"):
        value = "#" + value
    return value.lower()


def _read_bytes(path: str | Path) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise ThemeImportError(f"reading file: {exc}") from exc


def _string_field(data: Mapping[str, Any], key: str, kind: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ThemeImportError(
            f"parsing {kind}: field {key!r} must be a string, got {type(value).__name__}"
        )
    return value


def import_gogh(path: str | Path) -> tuple[Scheme, str]:
    """Read a Gogh JSON theme; return the scheme and the theme's name."""
    data = _read_bytes(path)
    try:
        theme = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ThemeImportError(f"parsing Gogh JSON: {exc}") from exc
    if theme is None:
        theme = {}
    if not isinstance(theme, dict):
        raise ThemeImportError("parsing Gogh JSON: expected an object at the top level")

    def color(key: str) -> str:
        return normalize_hex(_string_field(theme, key, "Gogh JSON"))

    scheme = Scheme(
        foreground=color("foreground"),
        background=color("background"),
        cursor=color("cursor"),
        palette=[color(f"color_{i:02d}") for i in range(1, 17)],
    )
    return scheme, _string_field(theme, "name", "Gogh JSON")


def import_base16(path: str | Path) -> tuple[Scheme, str]:
    """Read a base16 YAML theme; return the scheme and the theme's name."""
    data = _read_bytes(path)
    try:
        # BaseLoader keeps every scalar as its literal text, so unquoted
        # values such as 272822 stay hex strings.
        theme = yaml.load(data, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise ThemeImportError(f"parsing base16 YAML: {exc}") from exc
    if theme is None:
        theme = {}
    if not isinstance(theme, dict):
        raise ThemeImportError("parsing base16 YAML: expected a mapping at the top level")

    def color(key: str) -> str:
        return normalize_hex(_string_field(theme, key, "base16 YAML"))

    scheme = Scheme(
        foreground=color("base05"),
        background=color("base00"),
        cursor=color("base05"),
        palette=[color(key) for key in _BASE16_PALETTE],
    )
    return scheme, _string_field(theme, "scheme", "base16 YAML")


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _component(entry: Mapping[str, Any], key: str) -> float:
    value = entry.get(key, 0.0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ThemeImportError(f"parsing iTerm2 plist: {key!r} must be a number")
    return float(value)


def _iterm_hex(entry: Mapping[str, Any]) -> str:
    r, g, b = (
        _round_half_away(_component(entry, f"{name} Component") * 255)
        for name in ("Red", "Green", "Blue")
    )
    return f"#{r:02x}{g:02x}{b:02x}"


def import_iterm2(path: str | Path) -> tuple[Scheme, str]:
    """Read an iTerm2 .itermcolors preset; such files carry no name."""
    data = _read_bytes(path)
    try:
        raw = plistlib.loads(data)
    except (ValueError, xml.parsers.expat.ExpatError) as exc:
        raise ThemeImportError(f"parsing iTerm2 plist: {exc}") from exc
    if not isinstance(raw, dict):
        raise ThemeImportError("parsing iTerm2 plist: expected a dictionary at the top level")

    colors: dict[str, str] = {}
    for key, entry in raw.items():
        if not isinstance(entry, dict):
            raise ThemeImportError(f"parsing iTerm2 plist: entry {key!r} is not a color")
        colors[key] = _iterm_hex(entry)

    scheme = Scheme(
        foreground=colors.get("Foreground Color", ""),
        background=colors.get("Background Color", ""),
        cursor=colors.get("Cursor Color", ""),
        palette=[colors.get(f"Ansi {i} Color", "") for i in range(16)],
        bold=colors.get("Bold Color", ""),
        selection_background=colors.get("Selection Color", ""),
        selection_foreground=colors.get("Selected Text Color", ""),
    )
    return scheme, ""


def _extension(path: str | Path) -> str:
    base = os.path.basename(os.fspath(path))
    dot = base.rfind(".")
    return base[dot:] if dot >= 0 else ""


def detect_format(path: str | Path) -> str | None:
    """Guess the theme format from the file extension, or None."""
    return _EXTENSION_FORMATS.get(_extension(path).lower())


_IMPORTERS: dict[str, Callable[[str | Path], tuple[Scheme, str]]] = {
    "gogh": import_gogh,
    "base16": import_base16,
    "iterm2": import_iterm2,
}


def import_file(path: str | Path, fmt: str) -> tuple[Scheme, str]:
    """Import a theme file in the given format."""
    try:
        importer = _IMPORTERS[fmt]
    except KeyError:
        raise ThemeImportError(
            f"unknown format {_quote(fmt)} (supported: {', '.join(SUPPORTED_FORMATS)})"
        ) from None
    return importer(path)


def format_scheme_toml(name: str, scheme: Scheme) -> str:
    """A TOML snippet defining the scheme, ready to paste into config.toml."""
    lines = [
        f"[schemes.{name}]",
        f"foreground = {_quote(scheme.foreground)}",
        f"background = {_quote(scheme.background)}",
        f"cursor = {_quote(scheme.cursor)}",
    ]
    if scheme.palette:
        rows = [scheme.palette[i : i + 4] for i in range(0, len(scheme.palette), 4)]
        lines.append("palette = [")
        lines.append(
            ",\n".join("    " + ", ".join(_quote(c) for c in row) for row in rows)
        )
        lines.append("]")
    for key in ("bold", "selection_foreground", "selection_background", "tab"):
        value = getattr(scheme, key)
        if value:
            lines.append(f"{key} = {_quote(value)}")
    return "".join(line + "\n" for line in lines)


def append_to_global_config(
    name: str, scheme: Scheme, path: str | Path | None = None
) -> Path:
    """Add the scheme to the global config, rewriting the file; return its path."""
    config_path = Path(path) if path is not None else global_config_path()
    try:
        cfg = load_global_config(config_path)
    except (OSError, ValueError, tomllib.TOMLDecodeError) as exc:
        raise ThemeImportError(f"loading global config: {exc}") from exc
    if cfg is None:
        cfg = GlobalConfig()

    if name in cfg.schemes:
        print(
            f"coltty: overwriting existing scheme {_quote(name)} in global config",
            file=sys.stderr,
        )
    cfg.schemes[name] = scheme

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ThemeImportError(f"creating config directory: {exc}") from exc
    try:
        config_path.write_text(tomli_w.dumps(cfg.to_dict()), encoding="utf-8")
    except OSError as exc:
        raise ThemeImportError(f"writing global config: {exc}") from exc

    print(f"coltty: imported scheme {_quote(name)} to {config_path}", file=sys.stderr)
    return config_path