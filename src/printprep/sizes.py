"""Sizes and borders built from unit-aware lengths."""

from __future__ import annotations

from dataclasses import dataclass

from printprep.units import DEFAULT_DPI, Length, LengthUnit, ParseError, parse_length

_PLACEHOLDER = "."

_SIZE_GRAMMAR = "`width/height`, e.g. `15cm/10cm`, `./512px`"
_FIX_SIZE_GRAMMAR = "`width/height` with both dimensions, e.g. `15cm/10cm`"
_BORDERS_GRAMMAR = "`<all>`, `<top-bottom>/<right-left>` or `<top>/<right>/<bottom>/<left>`"


def _parse_part(text: str, part: str, expected: str) -> Length:
    try:
        return parse_length(part)
    except ParseError as exc:
        raise ParseError(text, expected, exc.reason) from exc


def _parse_optional(text: str, part: str, expected: str) -> Length | None:
    if part.strip() == _PLACEHOLDER:
        return None
    return _parse_part(text, part, expected)


@dataclass(frozen=True)
class Size:
    """Width and height where one of the two may be left open.

    Parsed from ``width/height``; ``.`` marks an omitted dimension that is
    later inferred from an aspect ratio.
    """

    width: Length | None = None
    height: Length | None = None

    def __post_init__(self) -> None:
        if self.width is None and self.height is None:
            raise ParseError(str(self), _SIZE_GRAMMAR, "at least one of width or height must be given")

    def is_complete(self) -> bool:
        return self.width is not None and self.height is not None

    def to(self, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> Size:
        return Size(
            None if self.width is None else self.width.to(unit, dpi),
            None if self.height is None else self.height.to(unit, dpi),
        )

    def rotate_90(self) -> Size:
        """Rotate by 90°, i.e. swap width and height."""

        return Size(self.height, self.width)

    def needs_dpi(self) -> bool:
        return any(length.needs_dpi() for length in (self.width, self.height) if length is not None)

    def to_fix_size(self) -> FixSize:
        if self.width is None or self.height is None:
            raise ParseError(str(self), _FIX_SIZE_GRAMMAR, "missing dimension")
        return FixSize(self.width, self.height)

    def __str__(self) -> str:
        width = _PLACEHOLDER if self.width is None else str(self.width)
        height = _PLACEHOLDER if self.height is None else str(self.height)
        return f"{width}/{height}"


@dataclass(frozen=True)
class FixSize:
    """Width and height, both mandatory."""

    width: Length
    height: Length

    @classmethod
    def px(cls, width: float, height: float) -> FixSize:
        return cls(Length.px(width), Length.px(height))

    def to(self, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> FixSize:
        return FixSize(self.width.to(unit, dpi), self.height.to(unit, dpi))

    def rotate_90(self) -> FixSize:
        return FixSize(self.height, self.width)

    def needs_dpi(self) -> bool:
        return self.width.needs_dpi() or self.height.needs_dpi()

    def is_portrait(self) -> bool:
        return self.height.value > self.width.value

    def pixels(self, dpi: float = DEFAULT_DPI) -> tuple[int, int]:
        return self.width.pixels(dpi), self.height.pixels(dpi)

    def __str__(self) -> str:
        return f"{self.width}/{self.height}"


@dataclass(frozen=True)
class Borders:
    """Four side lengths, clockwise from the top."""

    top: Length
    right: Length
    bottom: Length
    left: Length

    @classmethod
    def all(cls, length: Length) -> Borders:
        return cls(length, length, length, length)

    @classmethod
    def axes(cls, vertical: Length, horizontal: Length) -> Borders:
        return cls(vertical, horizontal, vertical, horizontal)

    @classmethod
    def px(cls, top: float, right: float, bottom: float, left: float) -> Borders:
        return cls(Length.px(top), Length.px(right), Length.px(bottom), Length.px(left))

    def to(self, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> Borders:
        return Borders(
            self.top.to(unit, dpi),
            self.right.to(unit, dpi),
            self.bottom.to(unit, dpi),
            self.left.to(unit, dpi),
        )

    def rotate_90(self) -> Borders:
        """Rotate clockwise by 90°: the left side becomes the top."""

        return Borders(top=self.left, right=self.top, bottom=self.right, left=self.bottom)

    def needs_dpi(self) -> bool:
        return any(side.needs_dpi() for side in (self.top, self.right, self.bottom, self.left))

    def horizontal(self) -> float:
        """Sum of left and right. Both sides must share a unit."""

        return self.left.value + self.right.value

    def vertical(self) -> float:
        return self.top.value + self.bottom.value

    def __str__(self) -> str:
        return f"{self.top}/{self.right}/{self.bottom}/{self.left}"


def parse_size(text: str) -> Size:
    parts = text.split("/")
    if len(parts) != 2:
        raise ParseError(text, _SIZE_GRAMMAR, f"found {len(parts)} component(s)")

    width = _parse_optional(text, parts[0], _SIZE_GRAMMAR)
    height = _parse_optional(text, parts[1], _SIZE_GRAMMAR)
    if width is None and height is None:
        raise ParseError(text, _SIZE_GRAMMAR, "at least one of width or height must be given")
    return Size(width, height)


def parse_fix_size(text: str) -> FixSize:
    parts = text.split("/")
    if len(parts) != 2:
        raise ParseError(text, _FIX_SIZE_GRAMMAR, f"found {len(parts)} component(s)")
    if any(part.strip() == _PLACEHOLDER for part in parts):
        raise ParseError(text, _FIX_SIZE_GRAMMAR, "placeholder `.` is not allowed")

    return FixSize(
        _parse_part(text, parts[0], _FIX_SIZE_GRAMMAR),
        _parse_part(text, parts[1], _FIX_SIZE_GRAMMAR),
    )


def parse_borders(text: str) -> Borders:
    parts = [_parse_part(text, part, _BORDERS_GRAMMAR) for part in text.split("/")]
    if len(parts) == 1:
        return Borders.all(parts[0])
    if len(parts) == 2:
        return Borders.axes(parts[0], parts[1])
    if len(parts) == 4:
        return Borders(*parts)
    raise ParseError(text, _BORDERS_GRAMMAR, f"found {len(parts)} component(s)")


def convert_size(size: Size, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> Size:
    return size.to(unit, dpi)


def convert_fix_size(size: FixSize, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> FixSize:
    return size.to(unit, dpi)


def convert_borders(borders: Borders, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> Borders:
    return borders.to(unit, dpi)
