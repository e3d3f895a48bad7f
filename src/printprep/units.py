"""Physical and device length units and conversions."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum

INCH_IN_METERS = 0.0254
DEFAULT_DPI = 300.0

_LENGTH_RE = re.compile(
    r"^\s*(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*(?P<unit>[A-Za-z]*)\s*$"
)


class ParseError(ValueError):
    """Raised when a length, size, border or scale string can't be parsed."""

    def __init__(self, value: str, expected: str, reason: str | None = None) -> None:
        self.value = value
        self.expected = expected
        self.reason = reason
        message = f"Unable to parse '{value}', expects {expected}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class LengthUnit(str, Enum):
    PX = "px"
    MM = "mm"
    CM = "cm"
    INCH = "in"

    def needs_dpi(self) -> bool:
        """Whether converting to or from this unit requires a resolution."""

        return self is not LengthUnit.PX

    def metric_factor(self, dpi: float) -> float:
        """Meters per unit. Pixels depend on the resolution."""

        if self is LengthUnit.PX:
            return INCH_IN_METERS / dpi
        return _METRIC_FACTORS[self]

    def __str__(self) -> str:
        return self.value


_METRIC_FACTORS = {
    LengthUnit.CM: 0.01,
    LengthUnit.MM: 0.001,
    LengthUnit.INCH: INCH_IN_METERS,
}


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Length:
    """A length value tagged with its unit. Pixel lengths are always integral."""

    value: float
    unit: LengthUnit = LengthUnit.PX

    def __post_init__(self) -> None:
        value = float(self.value)
        if self.unit is LengthUnit.PX:
            value = float(round_half_up(value))
        object.__setattr__(self, "value", value)

    @classmethod
    def px(cls, value: float) -> Length:
        return cls(value, LengthUnit.PX)

    @classmethod
    def mm(cls, value: float) -> Length:
        return cls(value, LengthUnit.MM)

    @classmethod
    def cm(cls, value: float) -> Length:
        return cls(value, LengthUnit.CM)

    @classmethod
    def inch(cls, value: float) -> Length:
        return cls(value, LengthUnit.INCH)

    def needs_dpi(self) -> bool:
        return self.unit.needs_dpi()

    def to(self, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> Length:
        """Convert to another unit, rounding only when the target is pixels."""

        if unit is self.unit:
            return self
        _check_dpi(dpi)
        meters = self.value * self.unit.metric_factor(dpi)
        return Length(meters / unit.metric_factor(dpi), unit)

    def to_px(self, dpi: float = DEFAULT_DPI) -> Length:
        return self.to(LengthUnit.PX, dpi)

    def pixels(self, dpi: float = DEFAULT_DPI) -> int:
        """Integral pixel count of this length."""

        return int(self.to_px(dpi).value)

    def __str__(self) -> str:
        return f"{format_number(self.value)}{self.unit}"


def _check_dpi(dpi: float) -> None:
    if not dpi > 0:
        raise ValueError(f"Resolution must be positive, got {dpi} dpi")


def parse_unit(text: str) -> LengthUnit:
    try:
        return LengthUnit(text.strip().lower())
    except ValueError as exc:
        raise ParseError(text, "a length unit, one of `(px|cm|mm|in)`") from exc


def parse_length(text: str) -> Length:
    """Parse a number with an optional unit suffix, e.g. ``1024``, ``5cm``, ``3.5in``."""

    expected = "a number with optional unit `(px|cm|mm|in)`, e.g. `5cm`"
    match = _LENGTH_RE.match(text)
    if match is None:
        raise ParseError(text, expected, "malformed number")

    suffix = match.group("unit")
    if suffix:
        try:
            unit = LengthUnit(suffix.lower())
        except ValueError as exc:
            raise ParseError(text, expected, f"unknown unit `{suffix}`") from exc
    else:
        unit = LengthUnit.PX

    value = float(match.group("number"))
    if not math.isfinite(value):
        raise ParseError(text, expected, "malformed number")
    return Length(value, unit)


def convert_length(length: Length, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> Length:
    return length.to(unit, dpi)
