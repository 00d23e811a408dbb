import io
import json
import plistlib
import tomllib

import pytest

from coltty.cli import build_parser, main, print_scheme, setup_terminal_app
from coltty.config import builtin_schemes
from coltty.schemes import resolved_from_scheme

_TERMINAL_VARS = (
    "TERM_PROGRAM",
    "TERM",
    "XTERM_VERSION",
    "KONSOLE_DBUS_SESSION",
    "VTE_VERSION",
    "TMUX",
    "STY",
)

DRACULA = builtin_schemes()["dracula"]
GOGH_DRACULA = {
    "name": "Dracula",
    "foreground": "#F8F8F2",
    "background": "#282A36",
    "cursor": "#f8f8f2",
    **{f"color_{i:02d}": c for i, c in enumerate(DRACULA.palette, 1)},
}
BASE16_MONOKAI = """scheme: "Monokai"
author: "Example Author"
base00: "272822"
base01: "383830"
base02: "49483e"
base03: "75715e"
base04: "a59f85"
base05: "f8f8f2"
base06: "f5f4f1"
base07: "f9f8f5"
base08: "f92672"
base09: "fd971f"
base0A: "f4bf75"
base0B: "a6e22e"
base0C: "a1efe4"
base0D: "66d9ef"
base0E: "ae81ff"
base0F: "cc6633"
"""


def _color(r, g, b):
    return {"Red Component": r, "Green Component": g, "Blue Component": b}


@pytest.fixture(autouse=True)
def home(tmp_path, monkeypatch):
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    monkeypatch.setenv("USERPROFILE", str(home_dir))
    for var in _TERMINAL_VARS:
        monkeypatch.delenv(var, raising=False)
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return home_dir


@pytest.fixture
def config_path(home):
    path = home / ".config" / "coltty" / "config.toml"
    path.parent.mkdir(parents=True)
    return path


@pytest.fixture
def themes(tmp_path):
    folder = tmp_path / "themes"
    folder.mkdir()
    (folder / "dracula.json").write_text(json.dumps(GOGH_DRACULA))
    (folder / "monokai.yaml").write_text(BASE16_MONOKAI)
    iterm = {f"Ansi {i} Color": _color(i / 15, 0.5, 1 - i / 15) for i in range(16)}
    iterm.update(
        {
            "Foreground Color": _color(0.51, 0.58, 0.59),
            "Background Color": _color(0.0, 0.17, 0.21),
            "Cursor Color": _color(0.51, 0.58, 0.59),
            "Bold Color": _color(0.58, 0.63, 0.63),
            "Selection Color": _color(0.03, 0.21, 0.26),
            "Selected Text Color": _color(0.58, 0.63, 0.63),
        }
    )
    (folder / "solarized.itermcolors").write_bytes(plistlib.dumps(iterm))
    return folder


def run(capsys, *argv):
    code = main(list(argv))
    out, err = capsys.readouterr()
    return code, out, err


def test_init_zsh(capsys):
    code, out, _ = run(capsys, "init", "zsh")
    assert code == 0
    assert "coltty_chpwd" in out


def test_init_bash(capsys):
    code, out, _ = run(capsys, "init", "bash")
    assert code == 0
    assert "PROMPT_COMMAND" in out


def test_init_unsupported_shell(capsys):
    code, _, err = run(capsys, "init", "fish")
    assert code == 1
    assert "unsupported shell" in err


def test_apply_dry_run(capsys, tmp_path):
    (tmp_path / "work" / ".coltty.toml").write_text('scheme = "test"')
    code, out, _ = run(capsys, "apply", "--dry-run")
    assert code == 0
    assert "Source:" in out
    assert ".coltty.toml" in out


def test_apply_without_terminal(capsys):
    code, _, err = run(capsys, "apply")
    assert code == 0
    assert "no supported terminal detected" in err


def test_apply_quiet_without_terminal_is_silent(capsys):
    code, out, err = run(capsys, "apply", "--quiet")
    assert (code, out, err) == (0, "", "")


def test_apply_to_detected_terminal(capsys, monkeypatch):
    monkeypatch.setenv("TERM_PROGRAM", "Alacritty")
    code, out, err = run(capsys, "apply")
    assert code == 0
    assert "\x1b]11;#282828\x1b\\" in out
    assert "applied scheme via alacritty (source: (default))" in err


def test_show_uses_default(capsys):
    code, out, _ = run(capsys, "show")
    assert code == 0
    assert "Source:" in out
    assert "(default)" in out


def test_print_scheme(capsys):
    print_scheme(resolved_from_scheme("/x/.coltty.toml", "dracula", DRACULA))
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Source:     /x/.coltty.toml"
    assert "Foreground: #f8f8f2" in out
    assert "Palette:    #21222c, #ff5555," in out


def test_schemes_without_config(capsys):
    code, out, _ = run(capsys, "schemes")
    assert code == 0
    assert "gruvbox (built-in)" in out


def test_schemes_with_config(capsys, config_path):
    config_path.write_text(
        '[default]\nscheme = "calm"\n\n'
        '[schemes.calm]\nforeground = "#c0caf5"\nbackground = "#1a1b26"\ncursor = "#c0caf5"\n\n'
        '[schemes.dracula]\nforeground = "#custom"\nbackground = "#override"\ncursor = "#user"\n'
    )
    code, out, _ = run(capsys, "schemes")
    assert code == 0
    assert "calm (default)" in out
    assert "gruvbox" in out
    assert "dracula (override)" in out
    assert "fg: #custom  bg: #override  cursor: #user" in out


def test_set_creates_config(capsys, tmp_path):
    code, _, err = run(capsys, "set", "dracula")
    assert code == 0
    assert 'scheme = "dracula"' in (tmp_path / "work" / ".coltty.toml").read_text()
    assert 'set scheme "dracula"' in err


def test_set_without_args_needs_tty(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO())
    code, _, err = run(capsys, "set")
    assert code == 1
    assert "use 'coltty set <scheme>' instead" in err


def test_set_inline(capsys, tmp_path):
    code, _, _ = run(capsys, "set", "dracula", "--inline")
    assert code == 0
    content = (tmp_path / "work" / ".coltty.toml").read_text()
    assert 'scheme = "dracula"' not in content
    assert "[overrides]" in content
    assert 'foreground = "#f8f8f2"' in content
    assert 'background = "#282a36"' in content
    assert '"#ff5555"' in content


def test_set_rejects_unknown(capsys, tmp_path):
    code, _, err = run(capsys, "set", "nonexistent-scheme")
    assert code == 1
    assert "unknown scheme" in err
    assert not (tmp_path / "work" / ".coltty.toml").exists()


def test_set_overwrites_existing(capsys, tmp_path):
    (tmp_path / "work" / ".coltty.toml").write_text('scheme = "nord"')
    code, _, err = run(capsys, "set", "dracula")
    assert code == 0
    assert "overwriting" in err
    assert 'scheme = "dracula"' in (tmp_path / "work" / ".coltty.toml").read_text()


def test_import_gogh_stdout(capsys, themes):
    code, out, _ = run(capsys, "import", str(themes / "dracula.json"))
    assert code == 0
    assert "[schemes.dracula]" in out
    assert 'foreground = "#f8f8f2"' in out
    assert '"#ff5555"' in out


def test_import_with_name(capsys, themes):
    code, out, _ = run(capsys, "import", str(themes / "dracula.json"), "--name", "my-theme")
    assert code == 0
    assert "[schemes.my-theme]" in out


def test_import_base16(capsys, themes):
    code, out, _ = run(capsys, "import", str(themes / "monokai.yaml"))
    assert code == 0
    assert "[schemes.monokai]" in out
    assert 'background = "#272822"' in out


def test_import_iterm2_uses_file_name(capsys, themes):
    code, out, _ = run(capsys, "import", str(themes / "solarized.itermcolors"))
    assert code == 0
    assert "[schemes.solarized]" in out
    assert "bold = " in out


def test_import_append(capsys, themes, home):
    code, _, err = run(capsys, "import", str(themes / "dracula.json"), "--append")
    assert code == 0
    assert "imported scheme" in err
    written = home / ".config" / "coltty" / "config.toml"
    data = tomllib.loads(written.read_text())
    assert data["schemes"]["dracula"]["foreground"] == "#f8f8f2"


def test_import_list_formats(capsys):
    code, out, _ = run(capsys, "import", "--list-formats")
    assert code == 0
    assert "gogh" in out and "base16" in out and "iterm2" in out


def test_import_unknown_format(capsys, themes):
    code, _, err = run(capsys, "import", str(themes / "dracula.json"), "--format", "badformat")
    assert code == 1
    assert 'unknown format "badformat"' in err


def test_import_requires_file(capsys):
    code, _, err = run(capsys, "import")
    assert code == 1
    assert "requires a file argument" in err


def test_import_undetectable_extension(capsys, tmp_path):
    path = tmp_path / "theme.txt"
    path.write_text("x")
    code, _, err = run(capsys, "import", str(path))
    assert code == 1
    assert 'cannot detect format from file extension ".txt"' in err


def test_setup_terminal_app_builtins(capsys):
    scripts = []
    created = setup_terminal_app(scripts.append)
    err = capsys.readouterr().err
    assert created == len(builtin_schemes()) == len(scripts)
    assert all("is not in profileNames" in script for script in scripts)
    assert not any("set current settings of front window" in script for script in scripts)
    assert "created/updated 8 Terminal.app profiles" in err
    assert all(f"\u2713 {name}" in err for name in builtin_schemes())


def test_setup_terminal_app_with_user_schemes(capsys, config_path):
    config_path.write_text(
        '[schemes.custom-dark]\nforeground = "#d0d0d0"\nbackground = "#1a1a1a"\ncursor = "#ff0000"\n'
    )
    scripts = []
    created = setup_terminal_app(scripts.append)
    err = capsys.readouterr().err
    assert created == len(builtin_schemes()) + 1
    custom = [s for s in scripts if '"custom-dark"' in s]
    assert len(custom) == 1
    assert "{53456, 53456, 53456}" in custom[0]
    assert "{6682, 6682, 6682}" in custom[0]
    assert "{65535, 0, 0}" in custom[0]
    assert "custom-dark" in err


def test_setup_terminal_app_reports_failures(capsys):
    def failing(script):
        raise RuntimeError("osascript failed")

    created = setup_terminal_app(failing)
    err = capsys.readouterr().err
    assert created == 0
    assert "\u2717 dracula: osascript failed" in err
    assert "created/updated 0 Terminal.app profiles" in err


def test_parser_set_flags():
    args = build_parser().parse_args(["set", "nord", "--inline"])
    assert (args.scheme, args.inline) == ("nord", True)
    args = build_parser().parse_args(["apply", "--quiet", "--dry-run"])
    assert (args.quiet, args.dry_run) == (True, True)