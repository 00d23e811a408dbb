"""Listing, looking up, writing and matching color schemes."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from coltty.adapter.base import ResolvedScheme as AdapterScheme
from coltty.config import (
    GlobalConfig,
    ResolvedScheme,
    Scheme,
    builtin_scheme,
    builtin_schemes,
)

_HEX_PAIR = r"(?:[0-9a-fA-F]{2}|[+-][0-9a-fA-F])"
_HEX_COLOR = re.compile(rf"#({_HEX_PAIR})({_HEX_PAIR})({_HEX_PAIR})")


@dataclass
class AvailableScheme:
    """A scheme available to the user, with a display tag."""

    name: str
    scheme: Scheme
    tag: str = ""


def available_schemes(global_cfg: GlobalConfig | None) -> list[AvailableScheme]:
    """All built-in and user schemes, sorted by name; user schemes replace built-ins."""
    entries = {
        name: AvailableScheme(name, scheme, " (built-in)")
        for name, scheme in builtin_schemes().items()
    }
    if global_cfg is not None:
        for name, scheme in global_cfg.schemes.items():
            tag = " (override)" if name in entries else ""
            entries[name] = AvailableScheme(name, scheme, tag)
    return [entries[name] for name in sorted(entries)]


def lookup_scheme(name: str, global_cfg: GlobalConfig | None) -> Scheme | None:
    """Find a scheme by name, user-defined first, then built-in."""
    if global_cfg is not None and name in global_cfg.schemes:
        return global_cfg.schemes[name]
    return builtin_scheme(name)


def _toml_quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _palette_block(palette: list[str]) -> str:
    if not palette:
        return ""
    rows = [palette[i : i + 4] for i in range(0, len(palette), 4)]
    body = ",\n".join("    " + ", ".join(_toml_quote(c) for c in row) for row in rows)
    return f"palette = [\n{body}\n]\n"


def format_inline_config(scheme_name: str, scheme: Scheme) -> str:
    """A .coltty.toml holding the full colors under [overrides]."""
    return (
        f"# Generated from scheme {_toml_quote(scheme_name)}\n\n[overrides]\n"
        f"foreground = {_toml_quote(scheme.foreground)}\n"
        f"background = {_toml_quote(scheme.background)}\n"
        f"cursor = {_toml_quote(scheme.cursor)}\n"
        + _palette_block(scheme.palette)
    )


def write_dir_scheme_config(
    path: str | Path, scheme_name: str, scheme: Scheme, inline: bool = False
) -> None:
    """Write a directory config naming the scheme, or holding its colors inline."""
    if inline:
        content = format_inline_config(scheme_name, scheme)
    else:
        content = f"scheme = {_toml_quote(scheme_name)}\n"
    Path(path).write_text(content, encoding="utf-8")


def resolved_from_scheme(path: str, scheme_name: str, scheme: Scheme) -> ResolvedScheme:
    """Turn a named scheme into a resolved scheme with the given source."""
    return ResolvedScheme(
        foreground=scheme.foreground,
        background=scheme.background,
        cursor=scheme.cursor,
        palette=list(scheme.palette),
        source=path,
        scheme_name=scheme_name,
        bold=scheme.bold,
        selection_foreground=scheme.selection_foreground,
        selection_background=scheme.selection_background,
        tab=scheme.tab,
        iterm_preset=scheme.iterm_preset,
        terminal_app_profile=scheme.terminal_app_profile,
    )


def to_adapter_scheme(resolved: ResolvedScheme) -> AdapterScheme:
    """Convert a resolved scheme to what terminal adapters consume."""
    extras = {
        key: value
        for key, value in (
            ("bold", resolved.bold),
            ("selection_foreground", resolved.selection_foreground),
            ("selection_background", resolved.selection_background),
            ("tab", resolved.tab),
            ("iterm_preset", resolved.iterm_preset),
            ("terminal_app_profile", resolved.terminal_app_profile),
        )
        if value
    }
    return AdapterScheme(
        foreground=resolved.foreground,
        background=resolved.background,
        cursor=resolved.cursor,
        palette=list(resolved.palette),
        name=resolved.scheme_name,
        extras=extras,
    )


def parse_hex_color(value: str) -> tuple[int, int, int] | None:
    """Parse "#rrggbb" into components, or return None."""
    match = _HEX_COLOR.fullmatch(value)
    if match is None:
        return None
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def color_similarity_score(a: str, b: str) -> int:
    """1000 for equal colors, else 765 minus the RGB distance; 0 if unparsable."""
    if a.lower() == b.lower():
        return 1000
    parsed_a = parse_hex_color(a)
    parsed_b = parse_hex_color(b)
    if parsed_a is None or parsed_b is None:
        return 0
    return 765 - sum(abs(x - y) for x, y in zip(parsed_a, parsed_b))


def scheme_similarity_score(a: Scheme, b: Scheme) -> int:
    """How closely b matches the colors set in a."""
    score = sum(
        color_similarity_score(mine, theirs)
        for mine, theirs in (
            (a.foreground, b.foreground),
            (a.background, b.background),
            (a.cursor, b.cursor),
        )
        if mine
    )
    score += sum(color_similarity_score(x, y) for x, y in zip(a.palette, b.palette))
    return score


def infer_closest_scheme(overrides: Scheme, global_cfg: GlobalConfig | None) -> str | None:
    """Name of the available scheme most similar to overrides, or None."""
    best_name: str | None = None
    best_score = -1
    for candidate in available_schemes(global_cfg):
        score = scheme_similarity_score(overrides, candidate.scheme)
        if score > best_score:
            best_score = score
            best_name = candidate.name
    return best_name or None