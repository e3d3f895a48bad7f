import pytest

from printprep.color import Color, parse_color
from printprep.units import ParseError


def test_parse_named_and_hex_colors() -> None:
    assert parse_color("white") == Color(255, 255, 255)
    assert parse_color("#ff0000") == Color(255, 0, 0)
    assert parse_color("#00ff0080") == Color(0, 255, 0, 128)


def test_parse_channel_colors() -> None:
    assert parse_color("128") == Color(128, 128, 128)
    assert parse_color("10/20/30") == Color(10, 20, 30)
    assert parse_color("10/20/30/40") == Color(10, 20, 30, 40)


@pytest.mark.parametrize("text", ["300", "1/2", "1/2/3/4/5", "10/20/x", "notacolor", "-1/0/0"])
def test_parse_color_rejects_invalid_input(text: str) -> None:
    with pytest.raises(ParseError):
        parse_color(text)


def test_color_fill_value_depends_on_mode() -> None:
    color = Color(1, 2, 3, 4)
    assert color.for_mode("RGB") == (1, 2, 3)
    assert color.for_mode("RGBA") == (1, 2, 3, 4)
