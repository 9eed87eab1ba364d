"""Keep-or-fallback decision for optimizer output."""

from __future__ import annotations

import enum
import logging
import shutil
from pathlib import Path

from image_optimizer.errors import FilesystemError

logger = logging.getLogger(__name__)


class Decision(enum.Enum):
    """Result of comparing original and produced sizes."""

    KEEP_PRODUCED = "keep_produced"
    FALLBACK_TO_ORIGINAL = "fallback_to_original"


def decide(original_size: int, produced_size: int) -> Decision:
    """Decide whether optimized output is worth keeping.

    Parameters
    ----------
    original_size : int
        Size of the source file in bytes.
    produced_size : int
        Size of the optimizer output in bytes.

    Returns
    -------
    Decision
        ``FALLBACK_TO_ORIGINAL`` when the output is not strictly smaller,
        otherwise ``KEEP_PRODUCED``.
    """
    if produced_size >= original_size:
        return Decision.FALLBACK_TO_ORIGINAL
    return Decision.KEEP_PRODUCED


def restore_original(source_path: Path, destination_path: Path) -> None:
    """Overwrite the produced file with a verbatim copy of the source."""
    logger.info(
        "%s: skipping optimization as it results in a larger file",
        source_path.name,
    )
    try:
        shutil.copyfile(source_path, destination_path)
    except OSError as exc:
        raise FilesystemError(
            f"Could not copy original {source_path} to {destination_path}: {exc}"
        ) from exc
