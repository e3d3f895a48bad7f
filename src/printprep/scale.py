"""Relative scaling factors."""

from __future__ import annotations

import math
from dataclasses import dataclass

from printprep.units import ParseError, format_number, round_half_up

_SCALE_GRAMMAR = "`scale` or `width/height` as fractions or percentages, e.g. `0.5`, `50%`, `20%/10%`"


@dataclass(frozen=True)
class Scale:
    """Width and height multipliers relative to the source image."""

    width: float
    height: float

    def __post_init__(self) -> None:
        if not (self.width > 0 and self.height > 0):
            raise ParseError(str(self), _SCALE_GRAMMAR, "scale factors must be positive")

    def apply(self, width: int, height: int) -> tuple[int, int]:
        return round_half_up(width * self.width), round_half_up(height * self.height)

    def __str__(self) -> str:
        return f"{format_number(self.width)}/{format_number(self.height)}"


def _parse_factor(text: str, part: str) -> float | None:
    part = part.strip()
    if part == ".":
        return None

    percent = part.endswith("%")
    number = part[:-1] if percent else part
    try:
        value = float(number)
    except ValueError as exc:
        raise ParseError(text, _SCALE_GRAMMAR, f"malformed number `{part}`") from exc

    if not math.isfinite(value):
        raise ParseError(text, _SCALE_GRAMMAR, f"malformed number `{part}`")
    if value <= 0:
        raise ParseError(text, _SCALE_GRAMMAR, "scale factors must be positive")
    return value / 100 if percent else value


def parse_scale(text: str) -> Scale:
    parts = text.split("/")
    if len(parts) > 2:
        raise ParseError(text, _SCALE_GRAMMAR, f"found {len(parts)} components")

    width = _parse_factor(text, parts[0])
    height = _parse_factor(text, parts[1]) if len(parts) == 2 else None
    if width is None and height is None:
        raise ParseError(text, _SCALE_GRAMMAR, "at least one of width or height must be given")

    if width is None:
        width = height
    if height is None:
        height = width
    return Scale(width, height)
