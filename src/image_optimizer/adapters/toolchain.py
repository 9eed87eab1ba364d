"""Availability prechecks for external tools."""

from __future__ import annotations

import logging
import subprocess

logger = logging.getLogger(__name__)


class ExecutablePrecheck:
    """Check that an executable launches and answers a no-op flag.

    Parameters
    ----------
    executable : str
        Program name resolved through ``PATH`` (or an explicit path).
    probe_args : tuple[str, ...], default=("--version",)
        Arguments for the harmless probe invocation.
    """

    def __init__(
        self,
        executable: str,
        probe_args: tuple[str, ...] = ("--version",),
    ) -> None:
        self.executable = executable
        self.probe_args = probe_args
        self.detail: str | None = None
        self.installed = False

    def check_tool_available(self) -> bool:
        """Run the probe and report whether it exited successfully."""
        try:
            completed = subprocess.run(
                [self.executable, *self.probe_args],
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as exc:
            self.detail = str(exc)
            logger.debug("%s could not be launched: %s", self.executable, exc)
            return False
        if completed.returncode != 0:
            self.installed = True
            self.detail = f"version check exited with code {completed.returncode}"
            logger.debug("%s: %s", self.executable, self.detail)
            return False
        self.installed = True
        version = completed.stdout.strip().splitlines()
        logger.debug("%s available: %s", self.executable, version[0] if version else "")
        return True


class PillowWebpPrecheck:
    """Check that Pillow is importable and built with WebP support."""

    executable = "Pillow"

    def __init__(self) -> None:
        self.detail: str | None = None
        self.installed = False

    def check_tool_available(self) -> bool:
        try:
            from PIL import features
        except ImportError as exc:
            self.detail = str(exc)
            return False
        self.installed = True
        if not features.check("webp"):
            self.detail = "built without WebP support"
            return False
        return True
