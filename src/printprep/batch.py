"""Concurrent batch processing of image files."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from PIL import Image

from printprep.config import OutputConfig
from printprep.imaging import ImageProcessingError, load_image, save_image
from printprep.models import BatchReport
from printprep.paths import check_output_pattern, output_path

logger = logging.getLogger(__name__)

Operation = Callable[[Image.Image, Any], Image.Image]


def process_file(file: Path, config: OutputConfig, operation: Operation) -> Path:
    """Load ``file``, apply ``operation`` and save the result. Returns the output path."""

    out_path = output_path(file, config.output)

    try:
        image = load_image(file)
    except (OSError, Image.DecompressionBombError) as exc:
        raise ImageProcessingError(f"Unable to read image {file}: {exc}") from exc

    try:
        result = operation(image, config)
    except ValueError as exc:
        raise ImageProcessingError(f"Unable to process image {file}: {exc}") from exc

    try:
        save_image(result, out_path, quality=config.quality, dpi=config.dpi)
    except (OSError, ValueError) as exc:
        raise ImageProcessingError(f"Unable to save image to {out_path}: {exc}") from exc

    logger.info("%s -> %s", file, out_path)
    return out_path


def process_images(
    files: list[Path],
    config: OutputConfig,
    operation: Operation,
    *,
    on_progress: Callable[[Path], None] | None = None,
) -> BatchReport:
    """Apply ``operation`` to every file using a pool of worker threads."""

    check_output_pattern(config.output, files)

    workers = config.threads or os.cpu_count() or 1
    report = BatchReport(total=len(files))
    outputs: dict[Path, Path] = {}

    logger.debug("Processing %d file(s) with %d worker(s)", len(files), workers)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {pool.submit(process_file, file, config, operation): file for file in files}
        for future in as_completed(futures):
            file = futures[future]
            if on_progress is not None:
                on_progress(file)

            try:
                outputs[file] = future.result()
            except ImageProcessingError as exc:
                if not config.continue_on_error:
                    for pending in futures:
                        pending.cancel()
                    raise
                logger.warning("%s", exc)
                report.failures.append(str(exc))

    report.outputs = [outputs[file] for file in files if file in outputs]
    report.succeeded = len(report.outputs)
    report.failed = len(report.failures)
    return report
