"""Typer CLI entrypoint for printprep."""

from __future__ import annotations

import logging
import shlex
import sys
from pathlib import Path

import typer
from pydantic import ValidationError

from printprep.batch import Operation, process_images
from printprep.config import OutputConfig, PrepareConfig, Resampling, ScaleConfig, ScaleMode
from printprep.operations import prepare_image, rescale_image
from printprep.paths import describe_path, expand_inputs

app = typer.Typer(
    help="Prepare photos for printing, and other bulk image operations.",
    no_args_is_help=True,
)

_INPUT_HELP = 'Input files or glob patterns. Quote patterns, e.g. --input "photos/*.jpg".'
_OUTPUT_HELP = 'Output path. `*` is replaced by the input file name, e.g. "out/*-print.jpg".'


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging.")) -> None:
    """printprep command group."""

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _build_config(config_type: type[OutputConfig], **values: object) -> OutputConfig:
    try:
        return config_type(**{key: value for key, value in values.items() if value is not None})
    except ValidationError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc


def _input_files(patterns: list[str]) -> list[Path]:
    try:
        return expand_inputs(patterns)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc


def _run(patterns: list[str], config: OutputConfig, operation: Operation, name: str) -> None:
    files = _input_files(patterns)

    try:
        with typer.progressbar(length=len(files), label="Processing") as progress:
            report = process_images(files, config, operation, on_progress=lambda _: progress.update(1))
    except Exception as exc:
        typer.echo(f"{name} failed: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(f"Processed {report.total} file(s): {report.succeeded} succeeded, {report.failed} failed.")
    for path in report.outputs:
        typer.echo(f"Output: {path}")

    if report.failures:
        typer.echo("Failures:", err=True)
        for failure in report.failures:
            typer.echo(f"- {failure}", err=True)


@app.command()
def prep(
    input: list[str] = typer.Option(..., "--input", "-i", help=_INPUT_HELP),
    output: str = typer.Option(..., "--output", "-o", help=_OUTPUT_HELP),
    format: str = typer.Option(
        ...,
        help="Print format `width/height`, e.g. `15cm/10cm`, `6in/4in`. "
        "Nominal cm formats are replaced by exact print formats in inches.",
    ),
    image_size: str | None = typer.Option(None, help="Maximum image size `width/height`."),
    framed_size: str | None = typer.Option(None, help="Maximum size of image plus padding `width/height`."),
    padding: str | None = typer.Option(None, help="Padding around the image, e.g. `5mm` or `1cm/5mm`."),
    margins: str | None = typer.Option(None, help="Minimum margins, e.g. `1cm` or `1cm/1cm/2cm/1cm`."),
    border: str | None = typer.Option(None, help="Border stroke width(s) inside the padding."),
    border_color: str | None = typer.Option(None, help="Border colour. Default `black`."),
    bg: str | None = typer.Option(None, "--bg", help="Background colour. Default `white`."),
    cut_marks: str | None = typer.Option(None, help="Length of cut marks at the framed corners."),
    cut_marks_width: str | None = typer.Option(None, help="Line width of cut marks. Default `1px`."),
    cut_marks_color: str | None = typer.Option(None, help="Cut mark colour. Default `black`."),
    no_rotation: bool = typer.Option(False, "--no-rotation", help="Never rotate the print format to the image."),
    dpi: float | None = typer.Option(None, "--dpi", "-d", help="Print resolution. Default 300."),
    quality: int | None = typer.Option(None, "--quality", "-q", help="JPEG quality in percent. Default 95."),
    filter: Resampling = typer.Option(Resampling.CUBIC, "--filter", "-f", help="Resampling filter."),
    threads: int | None = typer.Option(None, "--threads", "-t", min=1, help="Worker threads. Default: CPU count."),
    continue_on_error: bool = typer.Option(False, help="Keep processing after a file fails."),
) -> None:
    """Prepare images for printing."""

    config = _build_config(
        PrepareConfig,
        output=output,
        format=format,
        image_size=image_size,
        framed_size=framed_size,
        padding=padding,
        margins=margins,
        border=border,
        border_color=border_color,
        background=bg,
        cut_marks=cut_marks,
        cut_marks_width=cut_marks_width,
        cut_marks_color=cut_marks_color,
        no_rotation=no_rotation,
        dpi=dpi,
        quality=quality,
        resampling=filter,
        threads=threads,
        continue_on_error=continue_on_error,
    )
    _run(input, config, prepare_image, "Preparation")


@app.command()
def scale(
    input: list[str] = typer.Option(..., "--input", "-i", help=_INPUT_HELP),
    output: str = typer.Option(..., "--output", "-o", help=_OUTPUT_HELP),
    size: str | None = typer.Option(None, help="Output size, e.g. `100px/.`, `./15cm`, `8in/6in`."),
    scale: str | None = typer.Option(None, help="Output scale, e.g. `0.5`, `50%`, `20%/10%`."),
    mode: ScaleMode = typer.Option(ScaleMode.KEEP, "--mode", "-m", help="Scaling mode for `--size` with both dimensions."),
    incremental: bool = typer.Option(False, help="Halve the image in steps before scaling to small sizes."),
    bg: str | None = typer.Option(None, "--bg", help="Background colour for `--mode fill`. Default `white`."),
    dpi: float | None = typer.Option(None, "--dpi", "-d", help="Resolution for sizes not in px. Default 300."),
    quality: int | None = typer.Option(None, "--quality", "-q", help="JPEG quality in percent. Default 95."),
    filter: Resampling = typer.Option(Resampling.CUBIC, "--filter", "-f", help="Resampling filter."),
    threads: int | None = typer.Option(None, "--threads", "-t", min=1, help="Worker threads. Default: CPU count."),
    continue_on_error: bool = typer.Option(False, help="Keep processing after a file fails."),
) -> None:
    """Scale images to an absolute size or a relative scale."""

    config = _build_config(
        ScaleConfig,
        output=output,
        size=size,
        scale=scale,
        mode=mode,
        incremental=incremental,
        background=bg,
        dpi=dpi,
        quality=quality,
        resampling=filter,
        threads=threads,
        continue_on_error=continue_on_error,
    )
    _run(input, config, rescale_image, "Scaling")


@app.command("list")
def list_files(
    input: list[str] = typer.Option(..., "--input", "-i", help=_INPUT_HELP),
    path: bool = typer.Option(False, "--path", "-p", help="Print the path as matched."),
    absolute: bool = typer.Option(False, "--absolute", "-a", help="Print the absolute path."),
) -> None:
    """List files found by the input patterns."""

    for file in _input_files(input):
        typer.echo(describe_path(file, full=path, absolute=absolute))


def expand_args_file(args: list[str]) -> list[str]:
    """Read the command line from a file when it is the only argument."""

    if len(args) == 1 and not args[0].startswith("-") and Path(args[0]).is_file():
        return shlex.split(Path(args[0]).read_text(encoding="utf-8"))
    return args


def run() -> None:
    app(args=expand_args_file(sys.argv[1:]))
