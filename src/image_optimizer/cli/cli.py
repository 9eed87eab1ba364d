#!/usr/bin/env python3
"""
image_optimizer.cli.cli

Typer-based CLI for batch GIF optimization and WebP conversion.

Examples
--------
Optimize every GIF of ``./input`` into ``./output`` with gifsicle:

    image-optimizer gif

Convert JPG/PNG images to WebP, two at a time:

    image-optimizer webp photos/ photos-webp/ --jobs 2
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from image_optimizer.errors import OptimizerError
from image_optimizer.progress import ConsoleProgressReporter
from image_optimizer.variants import GIF_VARIANT, WEBP_VARIANT

app = typer.Typer(
    name="image-optimizer",
    help="Optimize GIFs with gifsicle or convert JPG/PNG images to WebP, in batches.",
    no_args_is_help=True,
)

JOBS_HELP = "Maximum number of files processed concurrently (1 = sequential)."
NO_PROGRESS_HELP = "Disable live progress lines."


def _stderr_console() -> Console:
    return Console(stderr=True)


def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised by the batch run.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    console = _stderr_console()
    console.print(f"[red]🔴 {type(exc).__name__}:[/red] {escape(str(exc))}")
    if debug:
        console.print("\n[dim]Traceback:[/dim]")
        console.print(
            escape("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
        )
    if isinstance(exc, OptimizerError):
        return exc.exit_code
    return 1


def _configure_logging(verbose: bool, debug: bool) -> None:
    """Route log records through rich on stderr."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=_stderr_console(), show_path=False)],
        force=True,
    )


def _make_reporter(no_progress: bool) -> ConsoleProgressReporter:
    console = Console()
    return ConsoleProgressReporter(
        console=console,
        show_progress=not no_progress and console.is_terminal,
    )


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show debug logs and full tracebacks."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show informational logs."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug logging and traceback output.
    verbose : bool, default=False
        Whether to enable info-level logging.
    """
    _configure_logging(verbose=verbose, debug=debug)
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("gif")
def gif_cmd(
    ctx: typer.Context,
    input_dir: Path = typer.Argument(
        Path(GIF_VARIANT.default_input_dir), help="Directory containing .gif files."
    ),
    output_dir: Path = typer.Argument(
        Path(GIF_VARIANT.default_output_dir), help="Where optimized GIFs are written."
    ),
    jobs: int = typer.Option(4, "--jobs", "-j", min=1, help=JOBS_HELP),
    lossy: int = typer.Option(40, "--lossy", help="gifsicle lossy compression level."),
    colors: int = typer.Option(140, "--colors", help="Maximum palette size."),
    optimize_level: int = typer.Option(3, "--optimize-level", help="gifsicle optimization level (1-3)."),
    executable: str = typer.Option("gifsicle", "--executable", help="gifsicle executable name or path."),
    no_progress: bool = typer.Option(False, "--no-progress", help=NO_PROGRESS_HELP),
) -> None:
    """Optimize every GIF of INPUT_DIR with gifsicle.

    Outputs that end up larger than their source are replaced by a verbatim
    copy of the original. Exits non-zero if any file failed.
    """
    debug: bool = bool(ctx.obj.get("debug", False))
    reporter = _make_reporter(no_progress)

    try:
        from image_optimizer.api import optimize_gif_directory

        with reporter:
            summary = optimize_gif_directory(
                input_dir=input_dir,
                output_dir=output_dir,
                jobs=jobs,
                executable=executable,
                optimize_level=optimize_level,
                lossy=lossy,
                colors=colors,
                reporter=reporter,
            )
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    raise typer.Exit(code=summary.exit_code)


@app.command("webp")
def webp_cmd(
    ctx: typer.Context,
    input_dir: Path = typer.Argument(
        Path(WEBP_VARIANT.default_input_dir), help="Directory containing JPG/PNG files."
    ),
    output_dir: Path = typer.Argument(
        Path(WEBP_VARIANT.default_output_dir), help="Where .webp files are written."
    ),
    jobs: int = typer.Option(4, "--jobs", "-j", min=1, help=JOBS_HELP),
    quality: int = typer.Option(80, "--quality", "-q", help="WebP quality (0-100)."),
    no_progress: bool = typer.Option(False, "--no-progress", help=NO_PROGRESS_HELP),
) -> None:
    """Convert every JPG/PNG image of INPUT_DIR to WebP."""
    debug: bool = bool(ctx.obj.get("debug", False))
    reporter = _make_reporter(no_progress)

    try:
        from image_optimizer.api import convert_directory_to_webp

        with reporter:
            summary = convert_directory_to_webp(
                input_dir=input_dir,
                output_dir=output_dir,
                jobs=jobs,
                quality=quality,
                reporter=reporter,
            )
    except Exception as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    raise typer.Exit(code=summary.exit_code)


@app.command("doctor")
def doctor_cmd(
    executable: str = typer.Option("gifsicle", "--executable", help="gifsicle executable name or path."),
) -> None:
    """Print installed toolchain versions and tool availability."""
    import importlib.metadata as metadata

    from image_optimizer.adapters.toolchain import ExecutablePrecheck, PillowWebpPrecheck

    typer.echo(f"Python: {sys.version.split()[0]}")
    for module in ("pillow", "pydantic", "rich", "typer"):
        try:
            version = metadata.version(module)
            typer.echo(f"{module}: {version}")
        except metadata.PackageNotFoundError:
            typer.echo(f"{module}: <not installed>")

    for check in (ExecutablePrecheck(executable), PillowWebpPrecheck()):
        if check.check_tool_available():
            typer.echo(f"{check.executable}: available")
        else:
            typer.echo(f"{check.executable}: unavailable ({check.detail})")


if __name__ == "__main__":
    app()
