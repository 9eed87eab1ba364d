"""Per-task progress rendering.

Worker threads never write to the terminal. They post :class:`ProgressState`
updates into a lock-guarded board and a single rich ``Live`` display renders
one line per in-flight task from that board.

The percentage is simulated: the external tools expose no progress, so each
tick advances it by a random step. Only the observed output size is real,
and even that is advisory until the tool has finished writing.
"""

from __future__ import annotations

import random
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from types import TracebackType
from typing import Self

from rich.console import Console, Group
from rich.live import Live
from rich.markup import escape
from rich.text import Text

from image_optimizer.application.ports import ProgressReporter
from image_optimizer.application.results import BatchSummary
from image_optimizer.formatting import format_file_size, format_size_delta

MIN_BAR_WIDTH = 10
_LAYOUT_PADDING = 10
_MAX_STEP = 10.0


@dataclass(frozen=True)
class ProgressState:
    """Latest progress snapshot of one in-flight task."""

    display_name: str
    percent_complete: float
    original_size: int
    current_size: int


def render_progress_line(state: ProgressState, width: int) -> str:
    """Render a single progress line sized to ``width`` columns.

    Parameters
    ----------
    state : ProgressState
        Snapshot to render.
    width : int
        Available terminal width.

    Returns
    -------
    str
        ``"name: [####------] 40.0% (1.0 KB -> 512 B)"``.
    """
    percent = min(max(state.percent_complete, 0.0), 100.0)
    label = f"{state.display_name}:"
    percentage = f"{percent:.1f}%"
    size_info = (
        f"({format_file_size(state.original_size)} -> "
        f"{format_file_size(state.current_size)})"
    )
    available = width - len(label) - len(percentage) - len(size_info) - _LAYOUT_PADDING
    bar_width = max(available, MIN_BAR_WIDTH)
    completed = round(percent / 100 * bar_width)
    bar = f"[{'#' * completed}{'-' * (bar_width - completed)}]"
    return f"{label} {bar} {percentage} {size_info}"


class NullProgressReporter:
    """Reporter that discards everything."""

    def report(
        self,
        display_name: str,
        percent: float,
        original_size: int,
        current_size: int,
    ) -> None:
        pass

    def finish(self, display_name: str) -> None:
        pass

    def message(self, text: str) -> None:
        pass

    def summary(self, summary: BatchSummary) -> None:
        pass


class ConsoleProgressReporter:
    """Single-writer terminal reporter backed by ``rich``.

    Parameters
    ----------
    console : Console | None, default=None
        Target console; a new stdout console is created when omitted.
    show_progress : bool, default=True
        Render live progress lines. Messages and the summary are printed
        either way.
    """

    def __init__(
        self,
        console: Console | None = None,
        show_progress: bool = True,
    ) -> None:
        self.console = console or Console()
        self.show_progress = show_progress
        self._lock = threading.Lock()
        self._board: dict[str, ProgressState] = {}
        self._live: Live | None = None

    def __enter__(self) -> Self:
        if self.show_progress:
            self._live = Live(
                get_renderable=self._render,
                console=self.console,
                refresh_per_second=10,
                transient=True,
            )
            self._live.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._live is not None:
            self._live.stop()
            self._live = None

    def _render(self) -> Group:
        with self._lock:
            states = list(self._board.values())
        width = self.console.width
        return Group(*(Text(render_progress_line(s, width)) for s in states))

    def report(
        self,
        display_name: str,
        percent: float,
        original_size: int,
        current_size: int,
    ) -> None:
        state = ProgressState(
            display_name=display_name,
            percent_complete=min(percent, 100.0),
            original_size=original_size,
            current_size=current_size,
        )
        with self._lock:
            self._board[display_name] = state

    def finish(self, display_name: str) -> None:
        with self._lock:
            state = self._board.pop(display_name, None)
        if state is None or not self.show_progress:
            return
        # Tasks that never reached 100% failed; the summary lists them.
        if state.percent_complete >= 100.0:
            self.console.print(
                Text(render_progress_line(state, self.console.width))
            )

    def message(self, text: str) -> None:
        self.console.print(escape(text))

    def summary(self, summary: BatchSummary) -> None:
        console = self.console
        if summary.is_empty:
            return
        console.print()
        console.print(
            f"Succeeded: {summary.succeeded}  "
            f"Fallback: {summary.fallback}  "
            f"Failed: {summary.failed}"
        )
        if summary.original_bytes:
            console.print(
                "Total: "
                + escape(format_size_delta(summary.original_bytes, summary.final_bytes))
            )
        if summary.failed:
            console.print(f"[red]🔴 {summary.failed} file(s) failed:[/red]")
            for failure in summary.failures:
                console.print(
                    f"  - {escape(failure.task.display_name)}: {escape(failure.reason)}"
                )
        else:
            console.print("[green]✅ All files processed successfully![/green]")


class SimulatedProgress:
    """Background ticker posting simulated progress for one task.

    Every ``interval`` seconds the percentage grows by a random step of up
    to 10 points (capped at 100) and the destination's current size on disk
    is sampled. The ticker stops when the context exits.
    """

    def __init__(
        self,
        reporter: ProgressReporter,
        display_name: str,
        destination_path: Path,
        original_size: int,
        interval: float = 0.2,
        rng: random.Random | None = None,
    ) -> None:
        self.reporter = reporter
        self.state = ProgressState(
            display_name=display_name,
            percent_complete=0.0,
            original_size=original_size,
            current_size=original_size,
        )
        self.destination_path = destination_path
        self.interval = interval
        self._rng = rng or random.Random()
        self._stop = threading.Event()
        self._thread = threading.Thread(
            target=self._loop, name=f"progress-{display_name}", daemon=True
        )

    def _observed_size(self) -> int:
        try:
            return self.destination_path.stat().st_size
        except OSError:
            return self.state.original_size

    def tick(self) -> ProgressState:
        """Advance the simulated percentage once and post it."""
        percent = min(
            self.state.percent_complete + self._rng.random() * _MAX_STEP, 100.0
        )
        self.state = replace(
            self.state,
            percent_complete=percent,
            current_size=self._observed_size(),
        )
        self._post()
        return self.state

    def complete(self, final_size: int) -> None:
        """Post the 100% state with the final output size."""
        self.state = replace(self.state, percent_complete=100.0, current_size=final_size)
        self._post()

    def _post(self) -> None:
        s = self.state
        self.reporter.report(
            s.display_name, s.percent_complete, s.original_size, s.current_size
        )

    def _loop(self) -> None:
        while not self._stop.wait(self.interval):
            self.tick()

    def __enter__(self) -> Self:
        self._thread.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._stop.set()
        self._thread.join()
