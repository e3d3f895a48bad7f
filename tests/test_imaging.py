from pathlib import Path

import pytest
from PIL import Image

from printprep.color import Color
from printprep.config import Resampling, ScaleMode
from printprep.imaging import (
    ImageProcessingError,
    compose_print,
    load_image,
    save_image,
    scale_image,
    scale_to_half,
)
from printprep.layout import LayoutConstraints, LayoutResult, solve_layout
from printprep.sizes import Borders, FixSize, parse_borders, parse_fix_size

RED = (255, 0, 0)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)


def _layout() -> LayoutResult:
    constraints = LayoutConstraints(image_size=parse_fix_size("1200px/800px"), padding=parse_borders("20px"))
    return solve_layout(FixSize.px(1800, 1200), (400, 300), constraints)


def test_scale_image_keep_preserves_aspect_ratio() -> None:
    assert scale_image(Image.new("RGB", (256, 256)), 32, 32).size == (32, 32)
    assert scale_image(Image.new("RGB", (400, 200)), 100, 100).size == (100, 50)


def test_scale_image_fill_pads_with_background() -> None:
    image = Image.new("RGB", (400, 200), BLACK)
    result = scale_image(image, 100, 100, mode=ScaleMode.FILL, background=Color(255, 255, 255))

    assert result.size == (100, 100)
    assert result.getpixel((50, 5)) == WHITE
    assert result.getpixel((50, 50)) == BLACK


def test_scale_image_crop_and_stretch_return_exact_size() -> None:
    image = Image.new("RGB", (400, 200))
    assert scale_image(image, 100, 100, mode=ScaleMode.CROP).size == (100, 100)
    assert scale_image(image, 100, 30, mode=ScaleMode.STRETCH).size == (100, 30)


def test_scale_image_incremental() -> None:
    image = Image.new("RGB", (256, 256))
    assert scale_image(image, 32, 32, incremental=True).size == (32, 32)
    assert scale_to_half(Image.new("RGB", (64, 64))).size == (32, 32)


def test_scale_image_rejects_empty_target() -> None:
    with pytest.raises(ImageProcessingError):
        scale_image(Image.new("RGB", (10, 10)), 0, 10)


def test_compose_print_places_photo() -> None:
    result = compose_print(Image.new("RGB", (400, 300), RED), _layout())

    assert result.size == (1800, 1200)
    assert result.mode == "RGB"
    assert result.getpixel((900, 600)) == RED
    assert result.getpixel((10, 10)) == WHITE
    # padding stays background
    assert result.getpixel((357, 190)) == WHITE


def test_compose_print_draws_border_and_cut_marks() -> None:
    result = compose_print(
        Image.new("RGB", (400, 300), RED),
        _layout(),
        border=Borders.px(5, 5, 5, 5),
        cut_marks=30,
        cut_marks_width=2,
    )

    # framed box is (347, 180, 1454, 1020)
    assert result.getpixel((349, 182)) == BLACK
    assert result.getpixel((1451, 1017)) == BLACK
    assert result.getpixel((357, 190)) == WHITE
    assert result.getpixel((337, 180)) == BLACK
    assert result.getpixel((347, 170)) == BLACK
    assert result.getpixel((1460, 1019)) == BLACK
    assert result.getpixel((300, 180)) == WHITE
    assert result.getpixel((10, 10)) == WHITE


def test_compose_print_keeps_alpha() -> None:
    result = compose_print(Image.new("RGBA", (400, 300), (255, 0, 0, 128)), _layout())
    assert result.mode == "RGBA"
    assert result.getpixel((10, 10)) == (255, 255, 255, 255)


def test_compose_print_rejects_degenerate_layout() -> None:
    layout = LayoutResult(
        canvas=FixSize.px(100, 100),
        image=FixSize.px(0, 50),
        framed=FixSize.px(0, 50),
        padding=Borders.px(0, 0, 0, 0),
        margins=Borders.px(25, 50, 25, 50),
    )
    with pytest.raises(ImageProcessingError, match="Degenerate"):
        compose_print(Image.new("RGB", (10, 10)), layout)


def test_compose_print_rejects_layout_larger_than_canvas() -> None:
    constraints = LayoutConstraints(image_size=parse_fix_size("300px/300px"), padding=parse_borders("10px"))
    layout = solve_layout(FixSize.px(200, 200), (100, 100), constraints)
    with pytest.raises(ImageProcessingError, match="does not fit"):
        compose_print(Image.new("RGB", (100, 100)), layout)



def test_compose_print_rejects_image_larger_than_frame() -> None:
    constraints = LayoutConstraints(image_size=parse_fix_size("2000px/1000px"), margins=parse_borders("100px"))
    layout = solve_layout(FixSize.px(1800, 1200), (4000, 3000), constraints)

    assert layout.padding == Borders.px(0, -200, 0, -200)
    with pytest.raises(ImageProcessingError, match="does not fit into framed size"):
        compose_print(Image.new("RGB", (40, 30)), layout)


def test_scale_image_accepts_gauss_filter() -> None:
    result = scale_image(Image.new("RGB", (400, 200), RED), 100, 100, resampling=Resampling.GAUSS)
    assert result.size == (100, 50)

def test_save_image_writes_jpeg_with_dpi(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "out.jpg"
    save_image(Image.new("RGBA", (40, 20), (255, 0, 0, 255)), path, quality=90, dpi=300)

    with Image.open(path) as saved:
        assert saved.format == "JPEG"
        assert saved.size == (40, 20)
        assert tuple(round(value) for value in saved.info["dpi"]) == (300, 300)


def test_save_image_requires_extension(tmp_path: Path) -> None:
    with pytest.raises(ImageProcessingError, match="extension"):
        save_image(Image.new("RGB", (4, 4)), tmp_path / "out")


def test_load_image_applies_exif_orientation(tmp_path: Path) -> None:
    path = tmp_path / "rotated.jpg"
    exif = Image.Exif()
    exif[0x0112] = 6
    Image.new("RGB", (40, 20)).save(path, exif=exif)

    assert load_image(path).size == (20, 40)
