"""Result models used by printprep."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class BatchReport(BaseModel):
    """Final batch summary returned by process_images."""

    total: int
    succeeded: int = 0
    failed: int = 0
    outputs: list[Path] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list)
