"""Colour parsing for backgrounds, borders and cut marks."""

from __future__ import annotations

from dataclasses import dataclass

from PIL import ImageColor

from printprep.units import ParseError

_COLOR_GRAMMAR = "a colour name, `#rrggbb`, `<gray>`, `r/g/b` or `r/g/b/a` with channels 0-255"


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    @property
    def rgb(self) -> tuple[int, int, int]:
        return self.r, self.g, self.b

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        return self.r, self.g, self.b, self.a

    def for_mode(self, mode: str) -> tuple[int, ...]:
        """Fill value for a Pillow image of the given mode."""

        if mode == "RGBA":
            return self.rgba
        return self.rgb

    def __str__(self) -> str:
        return f"{self.r}/{self.g}/{self.b}/{self.a}"


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)


def _channel(text: str, part: str) -> int:
    try:
        value = int(part.strip())
    except ValueError as exc:
        raise ParseError(text, _COLOR_GRAMMAR, f"malformed channel `{part}`") from exc
    if not 0 <= value <= 255:
        raise ParseError(text, _COLOR_GRAMMAR, f"channel `{part}` out of range")
    return value


def parse_color(text: str) -> Color:
    parts = text.split("/")
    if len(parts) == 1 and parts[0].strip().isdigit():
        gray = _channel(text, parts[0])
        return Color(gray, gray, gray)
    if len(parts) == 3:
        return Color(*(_channel(text, part) for part in parts))
    if len(parts) == 4:
        return Color(*(_channel(text, part) for part in parts))
    if len(parts) != 1:
        raise ParseError(text, _COLOR_GRAMMAR, f"found {len(parts)} components")

    try:
        channels = ImageColor.getrgb(text.strip())
    except ValueError as exc:
        raise ParseError(text, _COLOR_GRAMMAR, "unknown colour") from exc
    return Color(*channels)
