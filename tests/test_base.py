import pytest

from coltty.adapter.base import ResolvedScheme, TerminalAdapter, detect_adapter


class _Stub(TerminalAdapter):
    def __init__(self, name, active):
        self.name = name
        self.active = active
        self.calls = 0

    def detect(self):
        self.calls += 1
        return self.active

    def apply(self, scheme):
        pass


def test_detect_adapter_returns_first_active():
    first = _Stub("a", False)
    second = _Stub("b", True)
    third = _Stub("c", True)
    found = detect_adapter([first, second, third])
    assert found is second
    assert found.name == "b"
    assert third.calls == 0


def test_detect_adapter_none_active():
    stubs = [_Stub("a", False), _Stub("b", False)]
    assert detect_adapter(stubs) is None
    assert [s.calls for s in stubs] == [1, 1]


def test_detect_adapter_empty():
    assert detect_adapter([]) is None


def test_resolved_scheme_defaults_are_independent():
    one = ResolvedScheme()
    two = ResolvedScheme()
    one.palette.append("#000000")
    one.extras["bold"] = "#ffffff"
    assert two.palette == []
    assert two.extras == {}


def test_terminal_adapter_is_abstract():
    with pytest.raises(TypeError):
        TerminalAdapter()