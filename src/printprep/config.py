"""Configuration models and enums for printprep."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from printprep.color import BLACK, WHITE, Color, parse_color
from printprep.formats import PrintFormatError, to_print_format
from printprep.layout import LayoutConstraints
from printprep.scale import Scale, parse_scale
from printprep.sizes import Borders, FixSize, Size, parse_borders, parse_fix_size, parse_size
from printprep.units import DEFAULT_DPI, Length, LengthUnit, parse_length


class ScaleMode(str, Enum):
    KEEP = "keep"
    FILL = "fill"
    CROP = "crop"
    STRETCH = "stretch"


class Resampling(str, Enum):
    NEAREST = "nearest"
    LINEAR = "linear"
    CUBIC = "cubic"
    LANCZOS = "lanczos"
    BOX = "box"
    HAMMING = "hamming"
    GAUSS = "gauss"


def _parse_with(parser, value):
    if isinstance(value, str):
        return parser(value)
    return value


class OutputConfig(BaseModel):
    """Settings shared by all operations that write one image per input."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True, extra="forbid")

    output: str
    quality: int = Field(default=95, ge=1, le=100)
    dpi: float = Field(default=DEFAULT_DPI, gt=0)
    threads: int | None = Field(default=None, ge=1)
    continue_on_error: bool = False
    resampling: Resampling = Resampling.CUBIC

    @field_validator("output")
    @classmethod
    def validate_output(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("output path must not be empty")
        return value


class PrepareConfig(OutputConfig):
    """Print layout settings: format, layout constraints and decorations."""

    format: Size
    image_size: FixSize | None = None
    framed_size: FixSize | None = None
    padding: Borders | None = None
    margins: Borders | None = None
    border: Borders | None = None
    border_color: Color = BLACK
    background: Color = WHITE
    cut_marks: Length | None = None
    cut_marks_width: Length = Length.px(1)
    cut_marks_color: Color = BLACK
    no_rotation: bool = False

    @field_validator("format", mode="before")
    @classmethod
    def parse_format(cls, value):
        return _parse_with(parse_size, value)

    @field_validator("image_size", "framed_size", mode="before")
    @classmethod
    def parse_fix_sizes(cls, value):
        return _parse_with(parse_fix_size, value)

    @field_validator("padding", "margins", "border", mode="before")
    @classmethod
    def parse_border_values(cls, value):
        return _parse_with(parse_borders, value)

    @field_validator("border_color", "background", "cut_marks_color", mode="before")
    @classmethod
    def parse_colors(cls, value):
        return _parse_with(parse_color, value)

    @field_validator("cut_marks", "cut_marks_width", mode="before")
    @classmethod
    def parse_lengths(cls, value):
        return _parse_with(parse_length, value)

    @model_validator(mode="after")
    def validate_layout(self) -> "PrepareConfig":
        if not self.format.is_complete():
            raise PrintFormatError(f"Missing dimension in print format {self.format}")
        self.constraints().check()
        return self

    def constraints(self) -> LayoutConstraints:
        return LayoutConstraints(
            image_size=self.image_size,
            framed_size=self.framed_size,
            padding=self.padding,
            margins=self.margins,
        )

    def canvas(self) -> FixSize:
        """Print format resolved to exact print sizes, in pixels."""

        return to_print_format(self.format).to_fix_size().to(LengthUnit.PX, self.dpi)


class ScaleConfig(OutputConfig):
    """Absolute or relative scaling settings."""

    size: Size | None = None
    scale: Scale | None = None
    mode: ScaleMode = ScaleMode.KEEP
    incremental: bool = False
    background: Color = WHITE

    @field_validator("size", mode="before")
    @classmethod
    def parse_size_value(cls, value):
        return _parse_with(parse_size, value)

    @field_validator("scale", mode="before")
    @classmethod
    def parse_scale_value(cls, value):
        return _parse_with(parse_scale, value)

    @field_validator("background", mode="before")
    @classmethod
    def parse_background(cls, value):
        return _parse_with(parse_color, value)

    @model_validator(mode="after")
    def validate_size_or_scale(self) -> "ScaleConfig":
        if (self.size is None) == (self.scale is None):
            raise ValueError("Exactly one of `--size` and `--scale` must be given")
        return self
