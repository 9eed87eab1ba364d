"""Application-layer use-cases and option objects."""

from __future__ import annotations

from pathlib import Path

from image_optimizer.application.options import (
    BatchOptions,
    GifsicleOptions,
    WebpOptions,
)
from image_optimizer.application.ports import (
    AvailabilityCheck,
    ImageConverter,
    ProgressReporter,
)
from image_optimizer.application.results import (
    BatchSummary,
    ConversionOutcome,
    ConversionTask,
    Failed,
    Succeeded,
    SucceededViaFallback,
)


def run_gif_batch(
    *,
    input_dir: Path,
    output_dir: Path,
    options: BatchOptions | None = None,
    gifsicle: GifsicleOptions | None = None,
    converter: ImageConverter | None = None,
    precheck: AvailabilityCheck | None = None,
    reporter: ProgressReporter | None = None,
) -> BatchSummary:
    """Optimize a directory of GIFs via lazy use-case import."""
    from image_optimizer.application.use_cases import run_batch
    from image_optimizer.variants import GIF_VARIANT, default_converter, default_precheck

    return run_batch(
        input_dir=input_dir,
        output_dir=output_dir,
        variant=GIF_VARIANT,
        options=options,
        converter=converter or default_converter(GIF_VARIANT, gifsicle=gifsicle),
        precheck=precheck or default_precheck(GIF_VARIANT, gifsicle=gifsicle),
        reporter=reporter,
    )


def run_webp_batch(
    *,
    input_dir: Path,
    output_dir: Path,
    options: BatchOptions | None = None,
    webp: WebpOptions | None = None,
    converter: ImageConverter | None = None,
    precheck: AvailabilityCheck | None = None,
    reporter: ProgressReporter | None = None,
) -> BatchSummary:
    """Convert a directory of JPG/PNG images to WebP via lazy use-case import."""
    from image_optimizer.application.use_cases import run_batch
    from image_optimizer.variants import WEBP_VARIANT, default_converter

    return run_batch(
        input_dir=input_dir,
        output_dir=output_dir,
        variant=WEBP_VARIANT,
        options=options,
        converter=converter or default_converter(WEBP_VARIANT, webp=webp),
        precheck=precheck,
        reporter=reporter,
    )


__all__ = [
    "BatchOptions",
    "GifsicleOptions",
    "WebpOptions",
    "BatchSummary",
    "ConversionOutcome",
    "ConversionTask",
    "Failed",
    "Succeeded",
    "SucceededViaFallback",
    "run_gif_batch",
    "run_webp_batch",
]
