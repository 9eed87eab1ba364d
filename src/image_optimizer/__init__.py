"""Batch GIF optimization and WebP conversion with bounded concurrency."""

from __future__ import annotations

from pathlib import Path

from image_optimizer.application.results import BatchSummary

__version__ = "0.1.0"


def optimize_gifs(
    input_dir: str | Path,
    output_dir: str | Path,
    *,
    jobs: int = 4,
    lossy: int = 40,
    colors: int = 140,
) -> BatchSummary:
    """Optimize all GIFs of ``input_dir`` into ``output_dir``.

    Parameters
    ----------
    input_dir : str | Path
        Directory containing ``.gif`` files.
    output_dir : str | Path
        Directory receiving optimized files (created if missing).
    jobs : int, default=4
        Maximum number of concurrent gifsicle processes.
    lossy : int, default=40
        gifsicle ``--lossy`` level.
    colors : int, default=140
        gifsicle palette size cap.

    Returns
    -------
    BatchSummary
        Per-file outcomes and aggregate counts.
    """
    from .api import optimize_gif_directory as _impl

    return _impl(
        input_dir=Path(input_dir),
        output_dir=Path(output_dir),
        jobs=jobs,
        lossy=lossy,
        colors=colors,
    )


def convert_to_webp(
    input_dir: str | Path,
    output_dir: str | Path,
    *,
    jobs: int = 4,
    quality: int = 80,
) -> BatchSummary:
    """Convert all JPG/PNG images of ``input_dir`` to WebP in ``output_dir``.

    Parameters
    ----------
    input_dir : str | Path
        Directory containing ``.jpg``, ``.jpeg`` or ``.png`` files.
    output_dir : str | Path
        Directory receiving ``.webp`` files (created if missing).
    jobs : int, default=4
        Maximum number of concurrent conversions.
    quality : int, default=80
        WebP encoder quality.
    """
    from .api import convert_directory_to_webp as _impl

    return _impl(
        input_dir=Path(input_dir),
        output_dir=Path(output_dir),
        jobs=jobs,
        quality=quality,
    )


__all__ = [
    "BatchSummary",
    "optimize_gifs",
    "convert_to_webp",
]
