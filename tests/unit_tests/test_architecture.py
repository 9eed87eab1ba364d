"""Run the repository architecture boundary script."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "check_architecture.py"


def test_architecture_boundaries_hold() -> None:
    """Application modules stay free of CLI, terminal and codec imports."""
    result = subprocess.run(
        [sys.executable, str(SCRIPT)],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0, result.stdout + result.stderr
    assert "Architecture checks passed." in result.stdout
