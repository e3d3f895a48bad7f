"""Input pattern expansion and output path templating."""

from __future__ import annotations

import glob
from pathlib import Path

PLACEHOLDER = "*"


def expand_inputs(patterns: list[str]) -> list[Path]:
    """Expand glob patterns to existing files, keeping order and dropping duplicates."""

    seen: set[Path] = set()
    files: list[Path] = []

    for pattern in patterns:
        matches = sorted(glob.glob(pattern, recursive=True)) if glob.has_magic(pattern) else [pattern]
        for match in matches:
            path = Path(match)
            if not path.is_file():
                continue
            key = path.resolve()
            if key in seen:
                continue
            seen.add(key)
            files.append(path)

    if not files:
        raise ValueError(f"No input files found for {', '.join(patterns) or 'empty pattern list'}")

    return files


def output_path(file: Path, pattern: str) -> Path:
    """Build the output path for ``file``; ``*`` is replaced by its base name."""

    return Path(pattern.replace(PLACEHOLDER, file.stem))


def check_output_pattern(pattern: str, files: list[Path]) -> None:
    if len(files) > 1 and PLACEHOLDER not in pattern:
        raise ValueError(
            f"Output '{pattern}' has no `{PLACEHOLDER}` placeholder but {len(files)} input files were given"
        )
    if not Path(pattern).suffix:
        raise ValueError(f"Output '{pattern}' needs an extension to determine the image format")

    targets: dict[Path, Path] = {}
    for file in files:
        target = output_path(file, pattern)
        other = targets.setdefault(target, file)
        if other != file:
            raise ValueError(f"Inputs {other} and {file} would both be written to {target}")


def describe_path(path: Path, *, full: bool = False, absolute: bool = False) -> str:
    """Render a path for listing: file name, the path as given, or the absolute path."""

    if absolute:
        return str(path.absolute())
    if full:
        return str(path)
    return path.name
