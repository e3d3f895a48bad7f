"""Pillow-based scaling, print composition and image I/O."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageDraw, ImageOps

from printprep.color import BLACK, WHITE, Color
from printprep.config import Resampling, ScaleMode
from printprep.layout import LayoutResult, fit_size
from printprep.sizes import Borders

logger = logging.getLogger(__name__)

_JPEG_SUFFIXES = {".jpg", ".jpeg"}

_RESAMPLING = {
    Resampling.NEAREST: Image.Resampling.NEAREST,
    Resampling.LINEAR: Image.Resampling.BILINEAR,
    Resampling.CUBIC: Image.Resampling.BICUBIC,
    Resampling.LANCZOS: Image.Resampling.LANCZOS,
    Resampling.BOX: Image.Resampling.BOX,
    Resampling.HAMMING: Image.Resampling.HAMMING,
    # Catmull-Rom, the bicubic kernel Pillow uses.
    Resampling.GAUSS: Image.Resampling.BICUBIC,
}


class ImageProcessingError(RuntimeError):
    """Raised when an image can't be read, processed or written."""


def _canvas_mode(image: Image.Image) -> str:
    return "RGBA" if "A" in image.getbands() else "RGB"


def new_canvas(width: int, height: int, color: Color, mode: str = "RGB") -> Image.Image:
    return Image.new(mode, (width, height), color.for_mode(mode))


def scale_to_half(image: Image.Image) -> Image.Image:
    """Halve both dimensions, averaging over 2x2 pixels."""

    return image.reduce(2)


def scale_image(
    image: Image.Image,
    width: int,
    height: int,
    mode: ScaleMode = ScaleMode.KEEP,
    resampling: Resampling = Resampling.CUBIC,
    background: Color = WHITE,
    incremental: bool = False,
) -> Image.Image:
    """Scale ``image`` to ``width`` x ``height`` according to ``mode``.

    ``keep`` may return an image smaller than requested on one axis; all other
    modes return exactly the requested size.
    """

    if width <= 0 or height <= 0:
        raise ImageProcessingError(f"Invalid target size {width}x{height}px")

    if incremental:
        while image.width > 3 * width and image.height > 3 * height:
            image = scale_to_half(image)

    method = _RESAMPLING[resampling]
    if mode == ScaleMode.STRETCH:
        return image.resize((width, height), method)
    if mode == ScaleMode.CROP:
        return ImageOps.fit(image, (width, height), method=method)

    contained = image.resize(fit_size(image.size, (width, height)), method)
    if mode == ScaleMode.KEEP:
        return contained

    result = new_canvas(width, height, background, _canvas_mode(contained))
    result.paste(contained, ((width - contained.width) // 2, (height - contained.height) // 2))
    return result


def _fill_rect(draw: ImageDraw.ImageDraw, box: tuple[int, int, int, int], fill: tuple[int, ...]) -> None:
    # box is (left, top, right, bottom) with exclusive right and bottom
    left, top, right, bottom = box
    if right <= left or bottom <= top:
        return
    draw.rectangle((left, top, right - 1, bottom - 1), fill=fill)


def draw_border(image: Image.Image, box: tuple[int, int, int, int], border: Borders, color: Color) -> None:
    """Draw a border stroke inward from the edges of ``box``. Widths in pixels."""

    left, top, right, bottom = box
    fill = color.for_mode(image.mode)
    draw = ImageDraw.Draw(image)
    _fill_rect(draw, (left, top, right, top + int(border.top.value)), fill)
    _fill_rect(draw, (left, bottom - int(border.bottom.value), right, bottom), fill)
    _fill_rect(draw, (left, top, left + int(border.left.value), bottom), fill)
    _fill_rect(draw, (right - int(border.right.value), top, right, bottom), fill)


def draw_cut_marks(
    image: Image.Image,
    box: tuple[int, int, int, int],
    length: int,
    width: int,
    color: Color,
) -> None:
    """Draw cut marks continuing the edges of ``box`` outward into the margins."""

    if length <= 0 or width <= 0:
        return

    left, top, right, bottom = box
    fill = color.for_mode(image.mode)
    draw = ImageDraw.Draw(image)
    for y in (top, bottom - width):
        _fill_rect(draw, (max(left - length, 0), y, left, y + width), fill)
        _fill_rect(draw, (right, y, min(right + length, image.width), y + width), fill)
    for x in (left, right - width):
        _fill_rect(draw, (x, max(top - length, 0), x + width, top), fill)
        _fill_rect(draw, (x, bottom, x + width, min(bottom + length, image.height)), fill)


def compose_print(
    image: Image.Image,
    layout: LayoutResult,
    *,
    background: Color = WHITE,
    border: Borders | None = None,
    border_color: Color = BLACK,
    cut_marks: int | None = None,
    cut_marks_width: int = 1,
    cut_marks_color: Color = BLACK,
    resampling: Resampling = Resampling.CUBIC,
) -> Image.Image:
    """Rasterize a solved layout: background, photo, border and cut marks.

    ``border`` and the cut mark dimensions are expected in pixels.
    """

    canvas_width, canvas_height = layout.canvas.pixels()
    image_box = layout.image_box()
    framed_box = layout.framed_box()
    photo_width, photo_height = layout.image.pixels()

    if photo_width <= 0 or photo_height <= 0 or canvas_width <= 0 or canvas_height <= 0:
        raise ImageProcessingError(
            f"Degenerate layout: image {layout.image} on canvas {layout.canvas}"
        )
    if framed_box[0] < 0 or framed_box[1] < 0 or framed_box[2] > canvas_width or framed_box[3] > canvas_height:
        raise ImageProcessingError(
            f"Framed size {layout.framed} does not fit on canvas {layout.canvas} with margins {layout.margins}"
        )
    borders = (layout.padding, layout.margins)
    if any(side.value < 0 for b in borders for side in (b.top, b.right, b.bottom, b.left)):
        raise ImageProcessingError(
            f"Image size {layout.image} does not fit into framed size {layout.framed} "
            f"(padding {layout.padding}, margins {layout.margins})"
        )

    mode = _canvas_mode(image)
    result = new_canvas(canvas_width, canvas_height, background, mode)

    photo = image.convert(mode).resize((photo_width, photo_height), _RESAMPLING[resampling])
    result.paste(photo, image_box[:2])

    if border is not None:
        draw_border(result, framed_box, border, border_color)
    if cut_marks:
        draw_cut_marks(result, framed_box, cut_marks, cut_marks_width, cut_marks_color)

    return result


def load_image(path: Path) -> Image.Image:
    """Open an image and apply its EXIF orientation."""

    with Image.open(path) as image:
        return ImageOps.exif_transpose(image)


def save_image(image: Image.Image, path: Path, quality: int = 95, dpi: float | None = None) -> None:
    """Save ``image``; the format follows the file extension."""

    suffix = path.suffix.lower()
    if not suffix:
        raise ImageProcessingError(f"Expects an extension for output file to determine image format: {path}")

    path.parent.mkdir(parents=True, exist_ok=True)

    params: dict[str, object] = {}
    if dpi is not None:
        params["dpi"] = (dpi, dpi)
    if suffix in _JPEG_SUFFIXES:
        params["quality"] = quality
        if image.mode != "RGB":
            image = image.convert("RGB")

    logger.debug("Saving %dx%d image to %s", image.width, image.height, path)
    image.save(path, **params)
