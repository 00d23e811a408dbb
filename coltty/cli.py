"""The coltty command line."""

from __future__ import annotations

import argparse
import json
import os
import sys
from collections.abc import Callable

from coltty.adapter.base import ResolvedScheme as AdapterScheme
from coltty.adapter.base import detect_adapter
from coltty.adapter.osc import in_screen
from coltty.adapter.terminal_app import build_setup_script, run_applescript
from coltty.adapter.terminals import all_adapters
from coltty.config import GlobalConfig, ResolvedScheme, builtin_schemes, load_global_config
from coltty.importers import (
    append_to_global_config,
    detect_format,
    format_scheme_toml,
    import_file,
)
from coltty.picker import run_direct_set, run_interactive_set
from coltty.resolver import resolve
from coltty.schemes import available_schemes, to_adapter_scheme
from coltty.shell import shell_hook

_FORMAT_LINES = (
    "  gogh      Gogh JSON theme files (.json)\n"
    "  base16    base16 YAML theme files (.yaml, .yml)\n"
    "  iterm2    iTerm2 color preset files (.itermcolors)"
)

_IMPORT_DESCRIPTION = f"""Import a color scheme from an external theme file.

Supported formats:
{_FORMAT_LINES}

Format is auto-detected from the file extension, or set explicitly with --format.
Outputs TOML to stdout by default. Use --append to write directly to the global config."""


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _load_global_config_or_warn() -> GlobalConfig | None:
    try:
        return load_global_config()
    except (OSError, ValueError) as exc:
        print(f"coltty: warning: failed to load global config: {exc}", file=sys.stderr)
        return None


def print_scheme(resolved: ResolvedScheme) -> None:
    """Print a resolved scheme in human-readable form."""
    print(f"Source:     {resolved.source}")
    print(f"Foreground: {resolved.foreground}")
    print(f"Background: {resolved.background}")
    print(f"Cursor:     {resolved.cursor}")
    if resolved.palette:
        print(f"Palette:    {', '.join(resolved.palette)}")


def _cmd_init(args: argparse.Namespace) -> None:
    print(shell_hook(args.shell), end="")


def _cmd_apply(args: argparse.Namespace) -> None:
    global_cfg = _load_global_config_or_warn()
    resolved = resolve(os.getcwd(), global_cfg)
    if args.dry_run:
        print_scheme(resolved)
        return

    adapter_scheme = to_adapter_scheme(resolved)
    if in_screen() and not args.quiet:
        print(
            "coltty: warning: GNU Screen does not support dynamic color changes",
            file=sys.stderr,
        )

    adapter = detect_adapter(all_adapters())
    if adapter is None:
        if not args.quiet:
            print("coltty: no supported terminal detected", file=sys.stderr)
        return
    try:
        adapter.apply(adapter_scheme)
    except Exception as exc:  # a failing terminal is reported, never fatal
        if not args.quiet:
            print(f"coltty: warning: {adapter.name} adapter: {exc}", file=sys.stderr)
        return
    if not args.quiet:
        print(
            f"coltty: applied scheme via {adapter.name} (source: {resolved.source})",
            file=sys.stderr,
        )


def _cmd_show(args: argparse.Namespace) -> None:
    print_scheme(resolve(os.getcwd(), _load_global_config_or_warn()))


def _cmd_schemes(args: argparse.Namespace) -> None:
    try:
        global_cfg = load_global_config()
    except (OSError, ValueError) as exc:
        raise RuntimeError(f"loading global config: {exc}") from exc
    default = global_cfg.default_scheme if global_cfg is not None else ""

    schemes = available_schemes(global_cfg)
    if not schemes:
        print("No schemes available.")
        return
    for entry in schemes:
        marker = entry.tag + (" (default)" if entry.name == default else "")
        s = entry.scheme
        print(
            f"{entry.name}{marker}\n"
            f"  fg: {s.foreground}  bg: {s.background}  cursor: {s.cursor}"
        )


def _cmd_set(args: argparse.Namespace) -> None:
    if args.scheme is None:
        run_interactive_set(inline=args.inline)
    else:
        run_direct_set(args.scheme, inline=args.inline)


def _split_extension(path: str) -> tuple[str, str]:
    base = os.path.basename(path)
    dot = base.rfind(".")
    if dot < 0:
        return base, ""
    return base[:dot], base[dot:]


def _cmd_import(args: argparse.Namespace) -> None:
    if args.list_formats:
        print("Supported import formats:")
        print(_FORMAT_LINES)
        return
    if args.file is None:
        raise ValueError(
            "requires a file argument (use --list-formats to see supported formats)"
        )

    stem, extension = _split_extension(args.file)
    fmt = args.format or detect_format(args.file)
    if not fmt:
        raise ValueError(
            f"cannot detect format from file extension {_quote(extension)} "
            "(use --format to specify)"
        )

    scheme, detected_name = import_file(args.file, fmt)
    name = args.name or (detected_name or stem).replace(" ", "-").lower()

    if args.append:
        append_to_global_config(name, scheme)
        return
    print(format_scheme_toml(name, scheme), end="")


def setup_terminal_app(runner: Callable[[str], None] | None = None) -> int:
    """Create or update a Terminal.app profile for every scheme; return how many succeeded."""
    global_cfg = _load_global_config_or_warn()
    schemes = builtin_schemes()
    if global_cfg is not None:
        schemes.update(global_cfg.schemes)
    if not schemes:
        print("coltty: no schemes found", file=sys.stderr)
        return 0

    run = runner or run_applescript
    created = 0
    for name in sorted(schemes):
        s = schemes[name]
        adapter_scheme = AdapterScheme(
            foreground=s.foreground, background=s.background, cursor=s.cursor, name=name
        )
        try:
            run(build_setup_script(name, adapter_scheme))
        except Exception as exc:  # one failing profile does not stop the rest
            print(f"\u2717 {name}: {exc}", file=sys.stderr)
            continue
        print(f"\u2713 {name}", file=sys.stderr)
        created += 1

    print(f"coltty: created/updated {created} Terminal.app profiles", file=sys.stderr)
    return created


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for all coltty commands."""
    parser = argparse.ArgumentParser(
        prog="coltty",
        description=(
            "Coltty is a CLI tool and shell hook that automatically switches terminal "
            "color schemes based on the current directory."
        ),
    )
    commands = parser.add_subparsers(title="commands")

    init = commands.add_parser("init", help="print shell hook code for the given shell")
    init.add_argument("shell")
    init.set_defaults(handler=_cmd_init)

    apply = commands.add_parser("apply", help="apply the color scheme for the current directory")
    apply.add_argument("--quiet", action="store_true", help="suppress output unless there's an error")
    apply.add_argument("--dry-run", action="store_true", help="print the resolved scheme without applying")
    apply.set_defaults(handler=_cmd_apply)

    show = commands.add_parser("show", help="show the resolved color scheme for the current directory")
    show.set_defaults(handler=_cmd_show)

    schemes = commands.add_parser("schemes", help="list all available schemes (built-in and user-defined)")
    schemes.set_defaults(handler=_cmd_schemes)

    set_cmd = commands.add_parser("set", help="set the color scheme for the current directory")
    set_cmd.add_argument("scheme", nargs="?")
    set_cmd.add_argument("--inline", action="store_true", help="write full color values instead of a scheme reference")
    set_cmd.set_defaults(handler=_cmd_set)

    import_cmd = commands.add_parser(
        "import",
        help="import a color scheme from Gogh, base16, or iTerm2 format",
        description=_IMPORT_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    import_cmd.add_argument("file", nargs="?")
    import_cmd.add_argument("--format", help="theme format: gogh, base16, or iterm2 (auto-detected from extension)")
    import_cmd.add_argument("--name", help="scheme name (default: derived from file or theme metadata)")
    import_cmd.add_argument("--append", action="store_true", help="write directly to global config instead of stdout")
    import_cmd.add_argument("--list-formats", action="store_true", help="list supported import formats")
    import_cmd.set_defaults(handler=_cmd_import)

    setup = commands.add_parser("setup", help="one-time setup commands for specific terminals")
    setup.set_defaults(handler=lambda args: setup.print_help())
    setup_commands = setup.add_subparsers(title="targets")
    terminal_app = setup_commands.add_parser(
        "terminal-app", help="create Terminal.app profiles for all known color schemes"
    )
    terminal_app.set_defaults(handler=lambda args: setup_terminal_app())

    return parser


def main(argv: list[str] | None = None) -> int:
    """Run coltty with the given arguments; return the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, "handler", None)
    if handler is None:
        parser.print_help()
        return 0
    try:
        handler(args)
    except (OSError, ValueError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())