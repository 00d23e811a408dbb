import pytest

from coltty.config import Scheme, builtin_schemes
from coltty.preview import (
    PreviewApplier,
    PreviewSession,
    PreviewStyleRoles,
    Style,
    fallback_color,
    pick_palette_color,
)
from coltty.schemes import resolved_from_scheme


class FakeApplier(PreviewApplier):
    def __init__(self):
        self.applied = []

    def apply(self, scheme):
        self.applied.append(scheme)


class FailingApplier(PreviewApplier):
    def apply(self, scheme):
        raise RuntimeError("boom")


def resolved(name):
    return resolved_from_scheme(".coltty.toml", name, builtin_schemes()[name])


def test_apply_selection_does_not_persist():
    applier = FakeApplier()
    session = PreviewSession(applier, resolved("gruvbox"))
    session.apply_selection(resolved("dracula"))
    assert len(applier.applied) == 1
    assert session.current.scheme_name == "dracula"
    assert session.original.scheme_name == "gruvbox"


def test_cancel_restores_original_scheme():
    applier = FakeApplier()
    session = PreviewSession(applier, resolved("gruvbox"))
    session.apply_selection(resolved("dracula"))
    session.cancel()
    assert applier.applied[-1].scheme_name == "gruvbox"


def test_confirm_applies_final_scheme():
    applier = FakeApplier()
    session = PreviewSession(applier, resolved("gruvbox"))
    session.confirm(resolved("dracula"))
    assert applier.applied[-1].scheme_name == "dracula"


def test_failed_apply_keeps_current():
    session = PreviewSession(FailingApplier(), resolved("gruvbox"))
    with pytest.raises(RuntimeError):
        session.apply_selection(resolved("dracula"))
    assert session.current.scheme_name == "gruvbox"


def test_roles_derive_from_scheme():
    roles = PreviewStyleRoles.from_scheme(builtin_schemes()["dracula"])
    assert roles.keyword.foreground == "#ff79c6"
    assert roles.heading.foreground == "#bd93f9"
    assert roles.heading.bold is True
    assert roles.muted.foreground == "#6272a4"


def test_roles_fallback_without_full_palette():
    roles = PreviewStyleRoles.from_scheme(
        Scheme(foreground="#eeeeee", palette=["#111111", "#222222"])
    )
    assert roles.base.foreground == "#eeeeee"
    assert roles.keyword.foreground == "#eeeeee"
    assert roles.muted.foreground == "#eeeeee"
    assert roles.bullet.foreground == "#222222"


def test_roles_default_base_for_empty_scheme():
    roles = PreviewStyleRoles.from_scheme(Scheme())
    assert roles.base.foreground == "#dddddd"
    assert roles.string.foreground == "#dddddd"


def test_pick_palette_color():
    assert pick_palette_color(["#a", "#b"], 1) == "#b"
    assert pick_palette_color(["#a"], 3) == ""
    assert pick_palette_color(["#a"], -1) == ""


def test_fallback_color():
    assert fallback_color("", "#fff") == "#fff"
    assert fallback_color("#000", "#fff") == "#000"


def test_style_render():
    assert Style("#ff0000", bold=True).render("x") == "\x1b[1;38;2;255;0;0mx\x1b[0m"
    assert Style("#0f0").render("y") == "\x1b[38;2;0;255;0my\x1b[0m"
    assert Style().render("plain") == "plain"