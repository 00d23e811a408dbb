import pytest

from coltty.adapter.color import hex_to_terminal_app_rgb


@pytest.mark.parametrize(
    "hex_color, expected",
    [
        ("#ffffff", "{65535, 65535, 65535}"),
        ("#000000", "{0, 0, 0}"),
        ("#f8f8f2", "{63736, 63736, 62194}"),
        ("#282a36", "{10280, 10794, 13878}"),
        ("#ff0000", "{65535, 0, 0}"),
        ("f8f8f2", "{63736, 63736, 62194}"),
    ],
)
def test_hex_to_terminal_app_rgb(hex_color, expected):
    assert hex_to_terminal_app_rgb(hex_color) == expected


@pytest.mark.parametrize("hex_color", ["#fff", "#gggggg", "", "#ff00ff00"])
def test_hex_to_terminal_app_rgb_invalid(hex_color):
    with pytest.raises(ValueError):
        hex_to_terminal_app_rgb(hex_color)