"""Configuration files, built-in color schemes and scheme resolution."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import tomli_w

_EXTENDED_FIELDS = (
    "bold",
    "selection_foreground",
    "selection_background",
    "tab",
    "iterm_preset",
    "terminal_app_profile",
)
_STRING_FIELDS = ("foreground", "background", "cursor", *_EXTENDED_FIELDS)

DEFAULT_SCHEME_NAME = "gruvbox"


def _get_str(data: Mapping[str, Any], key: str, where: str = "") -> str:
    value = data.get(key, "")
    if not isinstance(value, str):
        raise ValueError(f"{where}{key}: expected a string, got {type(value).__name__}")
    return value


def _get_table(data: Mapping[str, Any], key: str, where: str = "") -> Mapping[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"{where}{key}: expected a table, got {type(value).__name__}")
    return value


def _get_str_list(data: Mapping[str, Any], key: str, where: str = "") -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"{where}{key}: expected an array of strings")
    return list(value)


def _scheme_from_table(data: Mapping[str, Any], where: str) -> Scheme:
    return Scheme(
        palette=_get_str_list(data, "palette", where),
        **{name: _get_str(data, name, where) for name in _STRING_FIELDS},
    )


@dataclass
class Scheme:
    """A color scheme: foreground, background, cursor, palette and extended colors."""

    foreground: str = ""
    background: str = ""
    cursor: str = ""
    palette: list[str] = field(default_factory=list)
    bold: str = ""
    selection_foreground: str = ""
    selection_background: str = ""
    tab: str = ""
    iterm_preset: str = ""
    terminal_app_profile: str = ""

    def copy(self) -> Scheme:
        return replace(self, palette=list(self.palette))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Scheme:
        """Build a scheme from a parsed TOML table; unknown keys are ignored."""
        return _scheme_from_table(data, "")

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "foreground": self.foreground,
            "background": self.background,
            "cursor": self.cursor,
        }
        if self.palette:
            result["palette"] = list(self.palette)
        result.update({name: getattr(self, name) for name in _EXTENDED_FIELDS})
        return result


@dataclass
class GlobalConfig:
    """The global config at ~/.config/coltty/config.toml."""

    default_scheme: str = ""
    schemes: dict[str, Scheme] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> GlobalConfig:
        default = _get_table(data, "default")
        schemes: dict[str, Scheme] = {}
        for name, table in _get_table(data, "schemes").items():
            if not isinstance(table, Mapping):
                raise ValueError(f"schemes.{name}: expected a table")
            schemes[name] = _scheme_from_table(table, f"schemes.{name}.")
        return cls(
            default_scheme=_get_str(default, "scheme", "default."),
            schemes=schemes,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"default": {"scheme": self.default_scheme}}
        if self.schemes:
            result["schemes"] = {name: s.to_dict() for name, s in self.schemes.items()}
        return result


@dataclass
class FavoritesConfig:
    """The list of favorite scheme names."""

    schemes: list[str] = field(default_factory=list)


@dataclass
class DirConfig:
    """A per-directory .coltty.toml file."""

    scheme: str = ""
    overrides: Scheme = field(default_factory=Scheme)


@dataclass
class ResolvedScheme:
    """The final resolved scheme, ready to apply."""

    foreground: str = ""
    background: str = ""
    cursor: str = ""
    palette: list[str] = field(default_factory=list)
    source: str = ""
    scheme_name: str = ""
    bold: str = ""
    selection_foreground: str = ""
    selection_background: str = ""
    tab: str = ""
    iterm_preset: str = ""
    terminal_app_profile: str = ""


def _builtin(foreground: str, background: str, cursor: str, palette: str) -> Scheme:
    return Scheme(foreground, background, cursor, palette.split())


_BUILTIN_SCHEMES: dict[str, Scheme] = {
    "gruvbox": _builtin(
        "#ebdbb2", "#282828", "#ebdbb2",
        "#282828 #cc241d #98971a #d79921 #458588 #b16286 #689d6a #a89984 "
        "#928374 #fb4934 #b8bb26 #fabd2f #83a598 #d3869b #8ec07c #ebdbb2",
    ),
    "nord": _builtin(
        "#d8dee9", "#2e3440", "#d8dee9",
        "#3b4252 #bf616a #a3be8c #ebcb8b #81a1c1 #b48ead #88c0d0 #e5e9f0 "
        "#4c566a #bf616a #a3be8c #ebcb8b #81a1c1 #b48ead #8fbcbb #eceff4",
    ),
    "dracula": _builtin(
        "#f8f8f2", "#282a36", "#f8f8f2",
        "#21222c #ff5555 #50fa7b #f1fa8c #bd93f9 #ff79c6 #8be9fd #f8f8f2 "
        "#6272a4 #ff6e6e #69ff94 #ffffa5 #d6acff #ff92df #a4ffff #ffffff",
    ),
    "solarized-dark": _builtin(
        "#839496", "#002b36", "#839496",
        "#073642 #dc322f #859900 #b58900 #268bd2 #d33682 #2aa198 #eee8d5 "
        "#002b36 #cb4b16 #586e75 #657b83 #839496 #6c71c4 #93a1a1 #fdf6e3",
    ),
    "catppuccin": _builtin(
        "#cdd6f4", "#1e1e2e", "#f5e0dc",
        "#45475a #f38ba8 #a6e3a1 #f9e2af #89b4fa #f5c2e7 #94e2d5 #bac2de "
        "#585b70 #f38ba8 #a6e3a1 #f9e2af #89b4fa #f5c2e7 #94e2d5 #a6adc8",
    ),
    "one-dark": _builtin(
        "#abb2bf", "#282c34", "#528bff",
        "#282c34 #e06c75 #98c379 #e5c07b #61afef #c678dd #56b6c2 #abb2bf "
        "#545862 #e06c75 #98c379 #e5c07b #61afef #c678dd #56b6c2 #c8ccd4",
    ),
    "rose-pine": _builtin(
        "#e0def4", "#191724", "#524f67",
        "#26233a #eb6f92 #31748f #f6c177 #9ccfd8 #c4a7e7 #ebbcba #e0def4 "
        "#6e6a86 #eb6f92 #31748f #f6c177 #9ccfd8 #c4a7e7 #ebbcba #e0def4",
    ),
    "kanagawa": _builtin(
        "#dcd7ba", "#1f1f28", "#c8c093",
        "#16161d #c34043 #76946a #c0a36e #7e9cd8 #957fb8 #6a9589 #c8c093 "
        "#727169 #e82424 #98bb6c #e6c384 #7fb4ca #938aa9 #7aa89f #dcd7ba",
    ),
}


def builtin_schemes() -> dict[str, Scheme]:
    """Return a copy of all built-in schemes."""
    return {name: scheme.copy() for name, scheme in _BUILTIN_SCHEMES.items()}


def builtin_scheme(name: str) -> Scheme | None:
    """Return a copy of one built-in scheme, or None."""
    scheme = _BUILTIN_SCHEMES.get(name)
    return scheme.copy() if scheme is not None else None


def _config_dir() -> Path:
    return Path.home() / ".config" / "coltty"


def global_config_path() -> Path:
    """Path of the global config file."""
    return _config_dir() / "config.toml"


def favorites_config_path() -> Path:
    """Path of the favorites file."""
    return _config_dir() / "favorites.toml"


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def load_global_config(path: str | Path | None = None) -> GlobalConfig | None:
    """Read the global config; return None if the file does not exist."""
    target = Path(path) if path is not None else global_config_path()
    try:
        data = _read_toml(target)
    except FileNotFoundError:
        return None
    return GlobalConfig.from_mapping(data)


def load_favorites(path: str | Path | None = None) -> FavoritesConfig:
    """Read the favorites file; an absent file means no favorites."""
    target = Path(path) if path is not None else favorites_config_path()
    try:
        data = _read_toml(target)
    except FileNotFoundError:
        return FavoritesConfig()
    return FavoritesConfig(schemes=_get_str_list(data, "schemes"))


def save_favorites(cfg: FavoritesConfig | None = None, path: str | Path | None = None) -> None:
    """Write the favorites file, creating its directory if needed."""
    cfg = cfg or FavoritesConfig()
    target = Path(path) if path is not None else favorites_config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    if cfg.schemes:
        content = tomli_w.dumps({"schemes": list(cfg.schemes)})
    else:
        content = "schemes = []\n"
    target.write_text(content, encoding="utf-8")


def load_dir_config(path: str | Path) -> DirConfig:
    """Read a per-directory .coltty.toml file."""
    data = _read_toml(Path(path))
    return DirConfig(
        scheme=_get_str(data, "scheme"),
        overrides=_scheme_from_table(_get_table(data, "overrides"), "overrides."),
    )


def _default_scheme(global_cfg: GlobalConfig | None) -> Scheme:
    if global_cfg is not None and global_cfg.default_scheme:
        name = global_cfg.default_scheme
        if name in global_cfg.schemes:
            return global_cfg.schemes[name]
        if name in _BUILTIN_SCHEMES:
            return _BUILTIN_SCHEMES[name]
    return _BUILTIN_SCHEMES[DEFAULT_SCHEME_NAME]


def apply_overrides(base: Scheme, overrides: Scheme) -> Scheme:
    """Return base with every non-empty field of overrides applied."""
    changes: dict[str, Any] = {
        name: getattr(overrides, name)
        for name in _STRING_FIELDS
        if getattr(overrides, name)
    }
    if overrides.palette:
        changes["palette"] = list(overrides.palette)
    return replace(base, **changes)


def resolve_scheme(
    dir_cfg: DirConfig | None,
    global_cfg: GlobalConfig | None,
    source: str = "",
) -> ResolvedScheme:
    """Combine a directory config with the global config into a resolved scheme."""
    if dir_cfg is None:
        base = _default_scheme(global_cfg)
        scheme_name = global_cfg.default_scheme if global_cfg is not None else ""
        source = source or "(default)"
    else:
        scheme_name = dir_cfg.scheme
        base = Scheme()
        if dir_cfg.scheme:
            if global_cfg is not None and dir_cfg.scheme in global_cfg.schemes:
                base = global_cfg.schemes[dir_cfg.scheme]
            if not base.foreground and dir_cfg.scheme in _BUILTIN_SCHEMES:
                base = _BUILTIN_SCHEMES[dir_cfg.scheme]
        base = apply_overrides(base, dir_cfg.overrides)

    return ResolvedScheme(
        foreground=base.foreground,
        background=base.background,
        cursor=base.cursor,
        palette=list(base.palette),
        source=source,
        scheme_name=scheme_name,
        bold=base.bold,
        selection_foreground=base.selection_foreground,
        selection_background=base.selection_background,
        tab=base.tab,
        iterm_preset=base.iterm_preset,
        terminal_app_profile=base.terminal_app_profile,
    )