"""Application use-cases orchestrating batch conversion workflows."""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial
from pathlib import Path

from pydantic import ValidationError

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
from image_optimizer.errors import (
    ConfigurationError,
    ConversionError,
    DirectoryAccessError,
    DirectoryNotFoundError,
    FilesystemError,
    ToolUnavailableError,
)
from image_optimizer.limiter import ConcurrencyLimiter
from image_optimizer.policy import Decision, decide, restore_original
from image_optimizer.progress import NullProgressReporter, SimulatedProgress
from image_optimizer.schemas import BatchConfig, GifsicleConfig, WebpConfig
from image_optimizer.variants import (
    BatchVariant,
    default_converter,
    default_precheck,
)

logger = logging.getLogger(__name__)


def discover_tasks(
    input_dir: Path,
    output_dir: Path,
    variant: BatchVariant,
) -> list[ConversionTask]:
    """List matching files directly under ``input_dir`` as tasks.

    Entries are filtered by the variant's extension allow-list
    (case-insensitive) and ordered by file name, so repeated runs over the
    same directory produce the same task list. When two sources map to
    the same output name, later ones keep their full source name as the
    output stem so every task writes a distinct destination.
    """
    try:
        entries = list(input_dir.iterdir())
    except OSError as exc:
        raise DirectoryAccessError(input_dir, exc.strerror or exc) from exc
    sources = sorted(
        (p for p in entries if p.is_file() and variant.matches(p)),
        key=lambda p: p.name,
    )
    tasks: list[ConversionTask] = []
    taken: set[str] = set()
    for source in sources:
        name = variant.output_name(source)
        if name in taken:
            name = variant.output_name(source.with_name(f"{source.name}{source.suffix}"))
        taken.add(name)
        tasks.append(
            ConversionTask(
                source_path=source,
                destination_path=output_dir / name,
                display_name=source.name,
            )
        )
    return tasks


def _reject_in_place_overwrites(
    input_dir: Path,
    output_dir: Path,
    tasks: list[ConversionTask],
) -> None:
    """Refuse runs whose outputs would be written over their own sources."""
    if output_dir.resolve() != input_dir.resolve():
        return
    clashing = [t.display_name for t in tasks if t.destination_path.name == t.source_path.name]
    if clashing:
        raise ConfigurationError(
            f"The output directory \"{output_dir}\" is the input directory, so "
            f"{', '.join(clashing)} would be overwritten in place. "
            "Choose a different output directory."
        )


def process_task(
    task: ConversionTask,
    *,
    converter: ImageConverter,
    reporter: ProgressReporter,
    apply_fallback: bool,
    progress_interval: float = 0.2,
) -> ConversionOutcome:
    """Run one task end to end and record its outcome.

    Every error is caught here, logged with the file name and turned into
    a :class:`Failed` outcome; nothing propagates to sibling tasks.
    """
    try:
        original_size = task.source_path.stat().st_size
    except OSError as exc:
        error = FilesystemError(f"Cannot read {task.source_path}: {exc}")
        logger.error("%s: %s", task.display_name, error)
        return Failed(task=task, reason=str(error))

    ticker = SimulatedProgress(
        reporter,
        task.display_name,
        task.destination_path,
        original_size,
        interval=progress_interval,
    )
    try:
        with ticker:
            produced = converter.convert(task.source_path, task.destination_path)
        if apply_fallback and decide(original_size, produced) is Decision.FALLBACK_TO_ORIGINAL:
            restore_original(task.source_path, task.destination_path)
            ticker.complete(original_size)
            reporter.message(
                f"❌ {task.display_name}: Skipping optimization as it results in a larger file."
            )
            return SucceededViaFallback(task=task, original_size=original_size)
        ticker.complete(produced)
        return Succeeded(task=task, original_size=original_size, final_size=produced)
    except ConversionError as exc:
        logger.error("%s: %s", task.display_name, exc)
        return Failed(task=task, reason=str(exc))
    except Exception as exc:
        logger.exception("unexpected error while processing %s", task.display_name)
        return Failed(task=task, reason=f"{type(exc).__name__}: {exc}")
    finally:
        reporter.finish(task.display_name)


def run_batch(
    *,
    input_dir: Path,
    output_dir: Path,
    variant: BatchVariant,
    options: BatchOptions | None = None,
    converter: ImageConverter | None = None,
    precheck: AvailabilityCheck | None = None,
    reporter: ProgressReporter | None = None,
    limiter_factory: Callable[[int], ConcurrencyLimiter] = ConcurrencyLimiter,
) -> BatchSummary:
    """Use-case: convert every matching file of ``input_dir`` into ``output_dir``.

    Parameters
    ----------
    input_dir : Path
        Directory scanned (non-recursively) for candidate files.
    output_dir : Path
        Destination directory, created when missing.
    variant : BatchVariant
        Selects the allow-list, output naming and fallback behavior.
    options : BatchOptions | None, default=None
        Pool size and progress settings.
    converter, precheck, reporter : optional
        Collaborators; the variant's stock implementations are used when
        omitted.
    limiter_factory : Callable[[int], ConcurrencyLimiter]
        Builds the limiter for the configured pool size.

    Returns
    -------
    BatchSummary
        One outcome per discovered file, in discovery order.

    Raises
    ------
    ConfigurationError
        If the options fail validation or the outputs would overwrite
        their sources (``output_dir`` resolving to ``input_dir`` for GIFs).
    DirectoryNotFoundError
        If ``input_dir`` does not exist.
    DirectoryAccessError
        If ``input_dir`` cannot be listed.
    ToolUnavailableError
        If the availability precheck fails. No file is touched.
    """
    options = options or BatchOptions()
    try:
        config = BatchConfig(
            input_dir=input_dir,
            output_dir=output_dir,
            pool_size=options.pool_size,
            progress_interval=options.progress_interval,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid batch parameters: {exc}") from exc

    if not config.input_dir.is_dir():
        raise DirectoryNotFoundError(config.input_dir)

    tasks = discover_tasks(config.input_dir, config.output_dir, variant)
    _reject_in_place_overwrites(config.input_dir, config.output_dir, tasks)

    precheck = precheck or default_precheck(variant)
    if not precheck.check_tool_available():
        raise ToolUnavailableError(
            precheck.executable, precheck.detail, installed=precheck.installed
        )

    config.output_dir.mkdir(parents=True, exist_ok=True)
    converter = converter or default_converter(variant)
    reporter = reporter or NullProgressReporter()

    if not tasks:
        extensions = "/".join(sorted(variant.extensions))
        reporter.message(f"🪣 No {extensions} files found in the input directory.")
        logger.info("no matching files in %s", config.input_dir)
        return BatchSummary()

    reporter.message(
        f"Found {len(tasks)} {variant.noun} file(s). Starting {variant.verb}..."
    )
    work = partial(
        process_task,
        converter=converter,
        reporter=reporter,
        apply_fallback=variant.apply_fallback,
        progress_interval=config.progress_interval,
    )
    with limiter_factory(config.pool_size) as limiter:
        futures = [limiter.schedule(task, work) for task in tasks]
    summary = BatchSummary(outcomes=tuple(future.result() for future in futures))
    logger.info(
        "batch finished: %d succeeded, %d fallback, %d failed",
        summary.succeeded,
        summary.fallback,
        summary.failed,
    )
    reporter.summary(summary)
    return summary


def build_gif_options(
    *,
    executable: str = "gifsicle",
    optimize_level: int = 3,
    lossy: int = 40,
    colors: int = 140,
) -> GifsicleOptions:
    """Build validated gifsicle options from command/API params."""
    try:
        config = GifsicleConfig(
            executable=executable,
            optimize_level=optimize_level,
            lossy=lossy,
            colors=colors,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid gifsicle parameters: {exc}") from exc
    return GifsicleOptions(**config.model_dump())


def build_webp_options(*, quality: int = 80) -> WebpOptions:
    """Build validated WebP options from command/API params."""
    try:
        config = WebpConfig(quality=quality)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid WebP parameters: {exc}") from exc
    return WebpOptions(**config.model_dump())
