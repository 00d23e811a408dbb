import pytest

from coltty.config import GlobalConfig, Scheme, builtin_schemes
from coltty.resolver import DIR_CONFIG_FILE, find_dir_config, resolve, scan_theme_usage


def test_resolve_finds_nearest_config(tmp_path):
    root = tmp_path
    child = root / "child"
    grandchild = child / "grandchild"
    grandchild.mkdir(parents=True)
    (root / ".coltty.toml").write_text('scheme = "calm"')
    (child / ".coltty.toml").write_text('scheme = "danger"')

    global_cfg = GlobalConfig(
        schemes={
            "calm": Scheme(foreground="#aaa", background="#111"),
            "danger": Scheme(foreground="#fff", background="#900"),
        }
    )

    resolved = resolve(grandchild, global_cfg)
    assert resolved.background == "#900"
    assert resolved.source == str(child / ".coltty.toml")

    resolved = resolve(root, global_cfg)
    assert resolved.background == "#111"


def test_resolve_no_config(tmp_path):
    resolved = resolve(tmp_path, None)
    assert resolved.foreground == builtin_schemes()["gruvbox"].foreground
    assert resolved.source == "(default)"


def test_resolve_with_overrides(tmp_path):
    (tmp_path / ".coltty.toml").write_text(
        '\nscheme = "calm"\n\n[overrides]\nbackground = "#222222"\n'
    )
    global_cfg = GlobalConfig(schemes={"calm": Scheme("#c0caf5", "#1a1b26", "#c0caf5")})
    resolved = resolve(tmp_path, global_cfg)
    assert resolved.background == "#222222"
    assert resolved.foreground == "#c0caf5"


def test_find_dir_config_finds_nearest_config(tmp_path):
    child = tmp_path / "child"
    grandchild = child / "grandchild"
    grandchild.mkdir(parents=True)
    want = child / ".coltty.toml"
    want.write_text('scheme = "dracula"')

    path, cfg = find_dir_config(grandchild)
    assert path == str(want)
    assert cfg is not None and cfg.scheme == "dracula"


def test_find_dir_config_parse_error_falls_back(tmp_path, capsys):
    (tmp_path / DIR_CONFIG_FILE).write_text("scheme = [")
    assert find_dir_config(tmp_path) == (None, None)
    assert "failed to parse" in capsys.readouterr().err
    assert resolve(tmp_path, None).source == "(default)"


def test_scan_theme_usage_counts_named_schemes(tmp_path):
    for sub in ("a", "b"):
        (tmp_path / sub).mkdir()
        (tmp_path / sub / ".coltty.toml").write_text('scheme = "dracula"')
    assert scan_theme_usage(tmp_path)["dracula"] == 2


def test_scan_theme_usage_ignores_inline_only_configs(tmp_path):
    (tmp_path / "inline").mkdir()
    (tmp_path / "inline" / ".coltty.toml").write_text(
        '[overrides]\nbackground = "#111111"\n'
    )
    assert scan_theme_usage(tmp_path) == {}


def test_scan_theme_usage_skips_unparsable(tmp_path):
    (tmp_path / "bad").mkdir()
    (tmp_path / "bad" / ".coltty.toml").write_text("scheme = [")
    (tmp_path / ".coltty.toml").write_text('scheme = "nord"')
    assert scan_theme_usage(tmp_path) == {"nord": 1}


def test_scan_theme_usage_missing_root(tmp_path):
    with pytest.raises(FileNotFoundError):
        scan_theme_usage(tmp_path / "missing")