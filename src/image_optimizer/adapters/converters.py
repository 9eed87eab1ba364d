"""Image converters implementing application ports."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from image_optimizer.application.options import GifsicleOptions, WebpOptions
from image_optimizer.errors import (
    EncodingFailedError,
    FilesystemError,
    ToolFailureError,
    ToolUnavailableError,
)

logger = logging.getLogger(__name__)


def produced_size(destination_path: Path) -> int:
    """Return the size of a freshly written output file.

    Raises
    ------
    FilesystemError
        If the converter reported success but left no output behind.
    """
    try:
        return destination_path.stat().st_size
    except OSError as exc:
        raise FilesystemError(
            f"Converter reported success but {destination_path} is unreadable: {exc}"
        ) from exc


class GifsicleConverter:
    """Optimize GIF files with an external ``gifsicle`` process."""

    def __init__(self, options: GifsicleOptions | None = None) -> None:
        self.options = options or GifsicleOptions()

    def command(self, source_path: Path, destination_path: Path) -> list[str]:
        """Build the gifsicle argument vector for one file."""
        opts = self.options
        return [
            opts.executable,
            f"--optimize={opts.optimize_level}",
            f"--lossy={opts.lossy}",
            f"--colors={opts.colors}",
            "-o",
            str(destination_path),
            str(source_path),
        ]

    def convert(self, source_path: Path, destination_path: Path) -> int:
        """Optimize ``source_path`` into ``destination_path``.

        Parameters
        ----------
        source_path : Path
            GIF to optimize.
        destination_path : Path
            Where gifsicle writes its output.

        Returns
        -------
        int
            Size of the produced file in bytes.

        Raises
        ------
        ToolUnavailableError
            If the executable cannot be launched.
        ToolFailureError
            If gifsicle exits with a non-zero status.
        """
        args = self.command(source_path, destination_path)
        logger.debug("running %s", " ".join(args))
        try:
            completed = subprocess.run(args, capture_output=True, text=True, check=False)
        except OSError as exc:
            raise ToolUnavailableError(self.options.executable, str(exc)) from exc
        if completed.returncode != 0:
            raise ToolFailureError(
                self.options.executable, completed.returncode, completed.stderr
            )
        return produced_size(destination_path)


class WebpConverter:
    """Re-encode JPG/PNG images as WebP with Pillow, in process."""

    def __init__(self, options: WebpOptions | None = None) -> None:
        self.options = options or WebpOptions()

    def convert(self, source_path: Path, destination_path: Path) -> int:
        """Encode ``source_path`` as WebP at ``destination_path``."""
        from PIL import Image

        try:
            with Image.open(source_path) as image:
                image.save(destination_path, "WEBP", quality=self.options.quality)
        except Exception as exc:
            raise EncodingFailedError(
                f"Error converting {source_path.name}: {exc}"
            ) from exc
        return produced_size(destination_path)
