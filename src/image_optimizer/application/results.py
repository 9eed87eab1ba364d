"""Application-layer task, outcome and summary objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeAlias


@dataclass(frozen=True)
class ConversionTask:
    """One file's conversion attempt, created at discovery time."""

    source_path: Path
    destination_path: Path
    display_name: str


@dataclass(frozen=True)
class Succeeded:
    """The converted output was kept."""

    task: ConversionTask
    original_size: int
    final_size: int


@dataclass(frozen=True)
class SucceededViaFallback:
    """The converted output was not smaller; the original was copied instead."""

    task: ConversionTask
    original_size: int

    @property
    def final_size(self) -> int:
        return self.original_size


@dataclass(frozen=True)
class Failed:
    """The conversion raised an error."""

    task: ConversionTask
    reason: str


ConversionOutcome: TypeAlias = Succeeded | SucceededViaFallback | Failed


@dataclass(frozen=True)
class BatchSummary:
    """Aggregated outcomes of a batch run, in discovery order."""

    outcomes: tuple[ConversionOutcome, ...] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, Succeeded))

    @property
    def fallback(self) -> int:
        return sum(1 for o in self.outcomes if isinstance(o, SucceededViaFallback))

    @property
    def failed(self) -> int:
        return len(self.failures)

    @property
    def failures(self) -> list[Failed]:
        return [o for o in self.outcomes if isinstance(o, Failed)]

    @property
    def original_bytes(self) -> int:
        """Total input size of tasks that produced an output."""
        return sum(
            o.original_size for o in self.outcomes if not isinstance(o, Failed)
        )

    @property
    def final_bytes(self) -> int:
        """Total output size of tasks that produced an output."""
        return sum(o.final_size for o in self.outcomes if not isinstance(o, Failed))

    @property
    def is_empty(self) -> bool:
        return not self.outcomes

    @property
    def exit_code(self) -> int:
        """Process exit status: non-zero when any task failed."""
        return 1 if self.failed else 0
