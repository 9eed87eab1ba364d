"""Application ports for clean architecture boundaries."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from image_optimizer.application.results import BatchSummary


class ImageConverter(Protocol):
    """Convert one input file into one output file."""

    def convert(self, source_path: Path, destination_path: Path) -> int:
        """Convert file and return the produced size in bytes."""


class AvailabilityCheck(Protocol):
    """Verify an external dependency is invocable before batch work."""

    executable: str
    detail: str | None
    installed: bool

    def check_tool_available(self) -> bool:
        """Return ``True`` when the tool can be launched."""


class ProgressReporter(Protocol):
    """Receive progress updates and batch-level messages."""

    def report(
        self,
        display_name: str,
        percent: float,
        original_size: int,
        current_size: int,
    ) -> None:
        """Post the latest progress state of one in-flight task."""

    def finish(self, display_name: str) -> None:
        """Drop the progress line of a completed task."""

    def message(self, text: str) -> None:
        """Emit a one-off line above the progress display."""

    def summary(self, summary: BatchSummary) -> None:
        """Emit the final batch report."""
