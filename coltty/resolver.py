"""Locate per-directory configs and resolve the active scheme."""

from __future__ import annotations

import os
import sys
import tomllib
from collections import Counter
from pathlib import Path

from coltty.config import (
    DirConfig,
    GlobalConfig,
    ResolvedScheme,
    load_dir_config,
    resolve_scheme,
)

DIR_CONFIG_FILE = ".coltty.toml"


def find_dir_config(start_dir: str | Path) -> tuple[str | None, DirConfig | None]:
    """Walk from start_dir to the root; return the nearest config and its path.

    A config that cannot be parsed is reported on stderr and treated as absent.
    """
    directory = Path(os.path.abspath(start_dir))
    for candidate_dir in (directory, *directory.parents):
        config_path = candidate_dir / DIR_CONFIG_FILE
        if not config_path.exists():
            continue
        try:
            return str(config_path), load_dir_config(config_path)
        except (OSError, ValueError) as exc:
            print(f"coltty: warning: failed to parse {config_path}: {exc}", file=sys.stderr)
            return None, None
    return None, None


def resolve(start_dir: str | Path, global_cfg: GlobalConfig | None) -> ResolvedScheme:
    """Resolve the scheme for start_dir; the nearest .coltty.toml wins."""
    config_path, dir_cfg = find_dir_config(start_dir)
    if dir_cfg is not None:
        return resolve_scheme(dir_cfg, global_cfg, config_path or "")
    return resolve_scheme(None, global_cfg, "")


def scan_theme_usage(root: str | Path) -> dict[str, int]:
    """Count named schemes referenced by .coltty.toml files under root.

    Raises the first error met while walking the tree.
    """
    counts: Counter[str] = Counter()
    errors: list[OSError] = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=errors.append):
        if errors:
            raise errors[0]
        if DIR_CONFIG_FILE not in filenames:
            continue
        try:
            cfg = load_dir_config(Path(dirpath) / DIR_CONFIG_FILE)
        except (OSError, ValueError, tomllib.TOMLDecodeError):
            continue
        if cfg.scheme:
            counts[cfg.scheme] += 1
    if errors:
        raise errors[0]
    return dict(counts)