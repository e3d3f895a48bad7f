"""Per-image operations: print preparation and scaling."""

from __future__ import annotations

from PIL import Image

from printprep.config import PrepareConfig, ScaleConfig, ScaleMode
from printprep.imaging import compose_print, scale_image
from printprep.layout import LayoutResult, solve_layout
from printprep.units import LengthUnit, round_half_up


def layout_for(image_size: tuple[int, int], config: PrepareConfig) -> LayoutResult:
    return solve_layout(
        config.canvas(),
        image_size,
        config.constraints(),
        no_rotation=config.no_rotation,
        dpi=config.dpi,
    )


def prepare_image(image: Image.Image, config: PrepareConfig) -> Image.Image:
    """Place ``image`` on a print canvas as described by ``config``."""

    layout = layout_for(image.size, config)

    border = None
    if config.border is not None:
        border = config.border.to(LengthUnit.PX, config.dpi)
        if layout.rotated:
            border = border.rotate_90()

    cut_marks = None
    if config.cut_marks is not None:
        cut_marks = config.cut_marks.pixels(config.dpi)

    return compose_print(
        image,
        layout,
        background=config.background,
        border=border,
        border_color=config.border_color,
        cut_marks=cut_marks,
        cut_marks_width=config.cut_marks_width.pixels(config.dpi),
        cut_marks_color=config.cut_marks_color,
        resampling=config.resampling,
    )


def target_size(image_size: tuple[int, int], config: ScaleConfig) -> tuple[int, int, ScaleMode]:
    """Resolve the pixel size to scale to. An open dimension forces ``keep`` mode."""

    image_width, image_height = image_size
    if config.scale is not None:
        width, height = config.scale.apply(image_width, image_height)
        return width, height, config.mode

    size = config.size.to(LengthUnit.PX, config.dpi)
    if size.width is None:
        height = int(size.height.value)
        return round_half_up(height / image_height * image_width), height, ScaleMode.KEEP
    if size.height is None:
        width = int(size.width.value)
        return width, round_half_up(width / image_width * image_height), ScaleMode.KEEP
    return int(size.width.value), int(size.height.value), config.mode


def rescale_image(image: Image.Image, config: ScaleConfig) -> Image.Image:
    width, height, mode = target_size(image.size, config)
    return scale_image(
        image,
        width,
        height,
        mode=mode,
        resampling=config.resampling,
        background=config.background,
        incremental=config.incremental,
    )
