"""Choosing a directory's color scheme, by name or with the interactive picker."""

from __future__ import annotations

import json
import os
import shutil
import sys
from collections import deque
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from coltty.adapter.base import detect_adapter
from coltty.adapter.terminals import all_adapters
from coltty.config import (
    DirConfig,
    FavoritesConfig,
    GlobalConfig,
    ResolvedScheme,
    load_favorites,
    load_global_config,
    save_favorites,
)
from coltty.picker_model import (
    CancelSelection,
    Key,
    KeyEvent,
    Message,
    PickerEffects,
    PickerModel,
    Quit,
    WindowSize,
)
from coltty.picker_state import PickerItem, PickerState
from coltty.preview import PreviewApplier, PreviewSession
from coltty.resolver import DIR_CONFIG_FILE, find_dir_config, resolve, scan_theme_usage
from coltty.schemes import (
    available_schemes,
    infer_closest_scheme,
    lookup_scheme,
    resolved_from_scheme,
    to_adapter_scheme,
    write_dir_scheme_config,
)

_SIMPLE_KEYS = {
    0x0D: Key.ENTER,
    0x0A: Key.ENTER,
    0x09: Key.TAB,
    0x7F: Key.BACKSPACE,
    0x08: Key.BACKSPACE,
}
_ARROWS = {ord("A"): Key.UP, ord("B"): Key.DOWN}
_ESC_BYTE = 0x1B


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _stdin_is_tty() -> bool:
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError, OSError):
        return False


def _home_dir() -> str:
    return str(Path.home())


class TerminalPreviewApplier(PreviewApplier):
    """Applies a scheme to whichever supported terminal is detected."""

    def apply(self, scheme: ResolvedScheme) -> None:
        adapter = detect_adapter(all_adapters())
        if adapter is None:
            return
        adapter.apply(to_adapter_scheme(scheme))


@dataclass
class PickerRuntime:
    """Everything the interactive picker reads from or acts on."""

    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    stderr: TextIO = field(default_factory=lambda: sys.stderr)
    is_tty: Callable[[], bool] = _stdin_is_tty
    getcwd: Callable[[], str] = os.getcwd
    home_dir: Callable[[], str] = _home_dir
    load_global_config: Callable[[], GlobalConfig | None] = load_global_config
    find_dir_config: Callable[[str], tuple[str | None, DirConfig | None]] = find_dir_config
    resolve_current: Callable[[str, GlobalConfig | None], ResolvedScheme] = resolve
    load_favorites: Callable[[], FavoritesConfig] = load_favorites
    save_favorites: Callable[[FavoritesConfig], None] = save_favorites
    scan_usage: Callable[[str], dict[str, int]] = scan_theme_usage
    applier: PreviewApplier = field(default_factory=TerminalPreviewApplier)
    start_program: Callable[[PickerModel], PickerModel] | None = None


def parse_keys(data: bytes) -> Iterator[KeyEvent]:
    """Decode raw terminal input bytes into key events."""
    pos = 0
    while pos < len(data):
        byte = data[pos]
        pos += 1
        if byte in _SIMPLE_KEYS:
            yield KeyEvent(_SIMPLE_KEYS[byte])
            continue
        if byte == _ESC_BYTE:
            if len(data) - pos >= 2:
                introducer, final = data[pos], data[pos + 1]
                if introducer == ord("["):
                    pos += 2
                    yield KeyEvent(_ARROWS.get(final, Key.ESC))
                    continue
                pos += 1
            yield KeyEvent(Key.ESC)
            continue
        yield KeyEvent(Key.RUNES, chr(byte))


def run_model(model: PickerModel, events: Iterable[Message]) -> PickerModel:
    """Feed events to the model, following up each result, until it quits or input ends."""
    pending: deque[Message] = deque()

    def settle() -> bool:
        while pending:
            msg = pending.popleft()
            if isinstance(msg, Quit):
                return True
            follow_up = model.update(msg)
            if follow_up is not None:
                pending.append(follow_up)
        return False

    first = model.init()
    if first is not None:
        pending.append(first)
    if settle():
        return model
    for event in events:
        pending.append(event)
        if settle():
            break
    return model


def _draw(model: PickerModel, stream: TextIO) -> None:
    stream.write("\x1b[H\x1b[2J" + model.view())
    stream.flush()


def _terminal_events(model: PickerModel, fd: int, stdout: TextIO) -> Iterator[Message]:
    size = None
    while True:
        current = shutil.get_terminal_size()
        if current != size:
            size = current
            yield WindowSize(current.columns, current.lines)
        _draw(model, stdout)
        try:
            chunk = os.read(fd, 1024)
        except KeyboardInterrupt:
            yield CancelSelection()
            continue
        if not chunk:
            return
        yield from parse_keys(chunk)


def _run_terminal(model: PickerModel, stdin: TextIO, stdout: TextIO) -> PickerModel:
    import termios
    import tty

    fd = stdin.fileno()
    try:
        saved = termios.tcgetattr(fd)
    except termios.error as exc:
        raise OSError(f"not a terminal: {exc}") from exc
    stdout.write("\x1b[?1049h\x1b[?25l")
    stdout.flush()
    try:
        tty.setcbreak(fd)
        return run_model(model, _terminal_events(model, fd, stdout))
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)
        stdout.write("\x1b[?25h\x1b[?1049l")
        stdout.flush()


def run_interactive_set(runtime: PickerRuntime | None = None, inline: bool = False) -> None:
    """Let the user pick a scheme with live preview and save it for the current directory."""
    rt = runtime or PickerRuntime()
    if not rt.is_tty():
        raise RuntimeError(
            "interactive picker requires a TTY; use 'coltty set <scheme>' instead"
        )

    try:
        global_cfg = rt.load_global_config()
    except (OSError, ValueError) as exc:
        print(f"coltty: warning: failed to load global config: {exc}", file=rt.stderr)
        global_cfg = None

    cwd = rt.getcwd()
    _, dir_cfg = rt.find_dir_config(cwd)
    original = rt.resolve_current(cwd, global_cfg)

    try:
        favorites = rt.load_favorites()
    except (OSError, ValueError) as exc:
        print(f"coltty: warning: failed to load favorites: {exc}", file=rt.stderr)
        favorites = FavoritesConfig()
    favorite_set = set(favorites.schemes)

    usage: dict[str, int] = {}
    try:
        usage = rt.scan_usage(rt.home_dir())
    except (OSError, RuntimeError):
        pass

    items = [
        PickerItem(
            name=entry.name,
            scheme=entry.scheme,
            tag=entry.tag,
            favorite=entry.name in favorite_set,
            usage_count=usage.get(entry.name, 0),
        )
        for entry in available_schemes(global_cfg)
    ]

    initial_name = original.scheme_name
    if dir_cfg is not None and not dir_cfg.scheme:
        inferred = infer_closest_scheme(dir_cfg.overrides, global_cfg)
        if inferred:
            initial_name = inferred
    if not initial_name and items:
        initial_name = items[0].name

    state = PickerState(items, initial_name)
    preview = PreviewSession(rt.applier, original)

    def on_preview(name: str) -> None:
        item = state.item_by_name(name)
        if item is None:
            return
        preview.apply_selection(resolved_from_scheme("", item.name, item.scheme))

    def on_confirm(name: str) -> None:
        item = state.item_by_name(name)
        if item is None:
            raise ValueError(f"unknown picker selection {_quote(name)}")
        write_dir_scheme_config(DIR_CONFIG_FILE, item.name, item.scheme, inline)
        preview.confirm(resolved_from_scheme(DIR_CONFIG_FILE, item.name, item.scheme))

    def on_save_favorites(names: list[str]) -> None:
        rt.save_favorites(FavoritesConfig(schemes=names))

    model = PickerModel(state)
    model.effects = PickerEffects(
        on_preview=on_preview,
        on_confirm=on_confirm,
        on_cancel=preview.cancel,
        on_save_favorites=on_save_favorites,
    )

    if rt.start_program is not None:
        rt.start_program(model)
        return
    try:
        _run_terminal(model, rt.stdin, rt.stdout)
    except OSError as exc:
        raise RuntimeError(f"starting picker: {exc}") from exc


def run_direct_set(scheme_name: str, inline: bool = False) -> None:
    """Write the named scheme into the current directory's config and apply it."""
    try:
        global_cfg = load_global_config()
    except (OSError, ValueError) as exc:
        print(f"coltty: warning: failed to load global config: {exc}", file=sys.stderr)
        global_cfg = None

    scheme = lookup_scheme(scheme_name, global_cfg)
    if scheme is None:
        raise ValueError(
            f"unknown scheme {_quote(scheme_name)} "
            "(use 'coltty schemes' to list available schemes)"
        )

    config_path = Path(DIR_CONFIG_FILE)
    if config_path.exists():
        print(f"coltty: overwriting existing {DIR_CONFIG_FILE}", file=sys.stderr)
    try:
        write_dir_scheme_config(config_path, scheme_name, scheme, inline)
    except OSError as exc:
        raise OSError(f"writing {DIR_CONFIG_FILE}: {exc}") from exc

    resolved = resolved_from_scheme(str(config_path), scheme_name, scheme)
    adapter = detect_adapter(all_adapters())
    if adapter is not None:
        try:
            adapter.apply(to_adapter_scheme(resolved))
        except Exception as exc:  # applying is best effort; the config is saved
            print(f"coltty: warning: {adapter.name} adapter: {exc}", file=sys.stderr)

    print(f"coltty: set scheme {_quote(scheme_name)} in {DIR_CONFIG_FILE}", file=sys.stderr)