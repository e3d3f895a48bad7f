"""Box-model solver placing a photo, its padding and margins on a print canvas.

A print is described by nested rectangles: the canvas, the framed area
(photo plus padding) and the photo itself. Per axis,
``canvas = margins + framed`` and ``framed = padding + image``, so two
constraints are enough: one of image size or framed size, and one of
padding or margins. Framed size together with margins is not accepted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from printprep.sizes import Borders, FixSize
from printprep.units import DEFAULT_DPI, LengthUnit, round_half_up

logger = logging.getLogger(__name__)

IMAGE_SIZE_OPTION = "--image-size"
FRAMED_SIZE_OPTION = "--framed-size"
PADDING_OPTION = "--padding"
MARGINS_OPTION = "--margins"


class LayoutError(ValueError):
    """Raised when the layout constraints can't be solved."""


@dataclass(frozen=True)
class LayoutConstraints:
    """The user-supplied subset of image size, framed size, padding and margins."""

    image_size: FixSize | None = None
    framed_size: FixSize | None = None
    padding: Borders | None = None
    margins: Borders | None = None

    def given(self) -> list[str]:
        options = {
            IMAGE_SIZE_OPTION: self.image_size,
            FRAMED_SIZE_OPTION: self.framed_size,
            PADDING_OPTION: self.padding,
            MARGINS_OPTION: self.margins,
        }
        return [name for name, value in options.items() if value is not None]

    def check(self) -> None:
        sizes = (self.image_size is not None) + (self.framed_size is not None)
        borders = (self.padding is not None) + (self.margins is not None)
        forbidden = self.framed_size is not None and self.margins is not None
        if sizes != 1 or borders != 1 or forbidden:
            given = ", ".join(f"`{name}`" for name in self.given()) or "none"
            raise LayoutError(
                "Print format is over- or under-determined. Requires exactly one of "
                f"`{IMAGE_SIZE_OPTION}` and `{FRAMED_SIZE_OPTION}`, and exactly one of "
                f"`{PADDING_OPTION}` and `{MARGINS_OPTION}`; `{FRAMED_SIZE_OPTION}` can't be "
                f"combined with `{MARGINS_OPTION}`. Given: {given}"
            )

    def needs_dpi(self) -> bool:
        return any(value.needs_dpi() for value in self._values() if value is not None)

    def to(self, unit: LengthUnit, dpi: float = DEFAULT_DPI) -> LayoutConstraints:
        return LayoutConstraints(*(None if value is None else value.to(unit, dpi) for value in self._values()))

    def rotate_90(self) -> LayoutConstraints:
        return LayoutConstraints(*(None if value is None else value.rotate_90() for value in self._values()))

    def _values(self) -> tuple[FixSize | Borders | None, ...]:
        return self.image_size, self.framed_size, self.padding, self.margins


@dataclass(frozen=True)
class LayoutResult:
    """Solved layout, all values in pixels.

    ``canvas`` is the output canvas after a possible rotation; ``image`` is
    the final photo size after the aspect-preserving fit.
    """

    canvas: FixSize
    image: FixSize
    framed: FixSize
    padding: Borders
    margins: Borders
    rotated: bool = False

    def framed_box(self) -> tuple[int, int, int, int]:
        left = int(self.margins.left.value)
        top = int(self.margins.top.value)
        width, height = self.framed.pixels()
        return left, top, left + width, top + height

    def image_box(self) -> tuple[int, int, int, int]:
        left, top, _, _ = self.framed_box()
        left += int(self.padding.left.value)
        top += int(self.padding.top.value)
        width, height = self.image.pixels()
        return left, top, left + width, top + height


def _split(total: int, skew: int = 0) -> tuple[int, int]:
    """Split ``total`` into a start and end part whose difference approximates ``skew``."""

    start = round_half_up((total + skew) / 2)
    return start, total - start


def fit_size(native: tuple[int, int], box: tuple[int, int]) -> tuple[int, int]:
    """Largest size with the native aspect ratio that fits into ``box``."""

    native_width, native_height = native
    box_width, box_height = box
    if native_width * box_height >= native_height * box_width:
        return box_width, round_half_up(box_width * native_height / native_width)
    return round_half_up(box_height * native_width / native_height), box_height


def _ints(borders: Borders) -> tuple[int, int, int, int]:
    return int(borders.top.value), int(borders.right.value), int(borders.bottom.value), int(borders.left.value)


def solve_layout(
    canvas: FixSize,
    image_size: tuple[int, int],
    constraints: LayoutConstraints,
    *,
    no_rotation: bool = False,
    dpi: float = DEFAULT_DPI,
) -> LayoutResult:
    """Solve image size, framed size, padding and margins for one photo.

    ``canvas`` and the constraints may use any unit; they are converted to
    pixels at ``dpi``. ``image_size`` is the photo's native pixel size and
    decides both the aspect ratio and whether the canvas is rotated.
    """

    constraints.check()

    native_width, native_height = image_size
    if native_width <= 0 or native_height <= 0:
        raise LayoutError(f"Invalid image size {native_width}x{native_height}px")

    canvas = canvas.to(LengthUnit.PX, dpi)
    constraints = constraints.to(LengthUnit.PX, dpi)

    image_portrait = native_height > native_width
    rotated = not no_rotation and image_portrait != canvas.is_portrait()
    if rotated:
        canvas = canvas.rotate_90()
        constraints = constraints.rotate_90()

    canvas_width, canvas_height = canvas.pixels()
    padding = constraints.padding
    margins = constraints.margins

    # Upper bound of photo plus padding.
    if constraints.framed_size is not None:
        framed_width, framed_height = constraints.framed_size.pixels()
    elif margins is not None:
        framed_width = canvas_width - int(margins.horizontal())
        framed_height = canvas_height - int(margins.vertical())
    else:
        image_width, image_height = constraints.image_size.pixels()
        framed_width = image_width + int(padding.horizontal())
        framed_height = image_height + int(padding.vertical())

    # Upper bound of the photo.
    if constraints.image_size is not None:
        max_width, max_height = constraints.image_size.pixels()
    else:
        max_width = framed_width - int(padding.horizontal())
        max_height = framed_height - int(padding.vertical())

    if padding is None:
        pad_top, pad_bottom = _split(framed_height - max_height)
        pad_left, pad_right = _split(framed_width - max_width)
        padding = Borders.px(pad_top, pad_right, pad_bottom, pad_left)

    width, height = fit_size((native_width, native_height), (max_width, max_height))
    pad_top, pad_right, pad_bottom, pad_left = _ints(padding)
    framed_width = width + pad_left + pad_right
    framed_height = height + pad_top + pad_bottom

    if margins is not None:
        req_top, req_right, req_bottom, req_left = _ints(margins)
        top, bottom = _split(canvas_height - framed_height, req_top - req_bottom)
        left, right = _split(canvas_width - framed_width, req_left - req_right)
    else:
        top, bottom = _split(canvas_height - framed_height)
        left, right = _split(canvas_width - framed_width)

    result = LayoutResult(
        canvas=FixSize.px(canvas_width, canvas_height),
        image=FixSize.px(width, height),
        framed=FixSize.px(framed_width, framed_height),
        padding=padding,
        margins=Borders.px(top, right, bottom, left),
        rotated=rotated,
    )
    logger.debug(
        "Layout for %dx%d px photo: canvas %s, image %s, framed %s, padding %s, margins %s, rotated=%s",
        native_width,
        native_height,
        result.canvas,
        result.image,
        result.framed,
        result.padding,
        result.margins,
        rotated,
    )
    return result

