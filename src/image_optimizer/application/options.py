"""Typed option objects shared across batch use-cases."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_POOL_SIZE = 4
DEFAULT_PROGRESS_INTERVAL = 0.2


@dataclass(frozen=True)
class GifsicleOptions:
    """Fixed quality parameters passed to gifsicle."""

    executable: str = "gifsicle"
    optimize_level: int = 3
    lossy: int = 40
    colors: int = 140


@dataclass(frozen=True)
class WebpOptions:
    """Encoder parameters for the WebP conversion path."""

    quality: int = 80


@dataclass(frozen=True)
class BatchOptions:
    """Scheduling and reporting options for a batch run."""

    pool_size: int = DEFAULT_POOL_SIZE
    progress_interval: float = DEFAULT_PROGRESS_INTERVAL
