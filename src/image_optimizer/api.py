"""Public directory-based API (delegates to application use-cases)."""

from __future__ import annotations

from pathlib import Path

from image_optimizer.application import run_gif_batch, run_webp_batch
from image_optimizer.application.options import BatchOptions
from image_optimizer.application.ports import ProgressReporter
from image_optimizer.application.results import BatchSummary
from image_optimizer.application.use_cases import build_gif_options, build_webp_options


def optimize_gif_directory(
    input_dir: Path,
    output_dir: Path,
    jobs: int = 4,
    executable: str = "gifsicle",
    optimize_level: int = 3,
    lossy: int = 40,
    colors: int = 140,
    reporter: ProgressReporter | None = None,
) -> BatchSummary:
    """Optimize every GIF in ``input_dir`` with gifsicle."""
    gifsicle = build_gif_options(
        executable=executable,
        optimize_level=optimize_level,
        lossy=lossy,
        colors=colors,
    )
    return run_gif_batch(
        input_dir=input_dir,
        output_dir=output_dir,
        options=BatchOptions(pool_size=jobs),
        gifsicle=gifsicle,
        reporter=reporter,
    )


def convert_directory_to_webp(
    input_dir: Path,
    output_dir: Path,
    jobs: int = 4,
    quality: int = 80,
    reporter: ProgressReporter | None = None,
) -> BatchSummary:
    """Convert every JPG/PNG in ``input_dir`` to WebP."""
    return run_webp_batch(
        input_dir=input_dir,
        output_dir=output_dir,
        options=BatchOptions(pool_size=jobs),
        webp=build_webp_options(quality=quality),
        reporter=reporter,
    )
