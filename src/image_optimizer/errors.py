"""Exception hierarchy for batch image optimization."""

from __future__ import annotations


class OptimizerError(Exception):
    """Base class for all errors raised by the optimizer."""

    exit_code = 1


class ConfigurationError(OptimizerError):
    """Raised when batch options fail validation."""

    exit_code = 2


class DirectoryNotFoundError(OptimizerError):
    """Raised when the input directory does not exist."""

    exit_code = 2

    def __init__(self, path: object) -> None:
        super().__init__(f'The input directory "{path}" does not exist.')
        self.path = path


class DirectoryAccessError(OptimizerError):
    """Raised when the input directory exists but cannot be listed."""

    exit_code = 2

    def __init__(self, path: object, reason: object) -> None:
        super().__init__(f'Cannot read the input directory "{path}": {reason}')
        self.path = path


class ConversionError(OptimizerError):
    """Base class for failures of a single file conversion."""


class ToolUnavailableError(ConversionError):
    """Raised when the external optimizer cannot be launched."""

    exit_code = 0

    def __init__(
        self,
        executable: str,
        detail: str | None = None,
        *,
        installed: bool = False,
    ) -> None:
        if installed:
            reason = detail or "unknown reason"
            message = f"{executable} is installed but cannot be used: {reason}"
        else:
            message = f"{executable} is not installed. Please install {executable} and try again."
            if detail:
                message = f"{message} ({detail})"
        super().__init__(message)
        self.executable = executable


class ToolFailureError(ConversionError):
    """Raised when the external optimizer exits with a non-zero status."""

    def __init__(self, executable: str, code: int, stderr: str = "") -> None:
        message = f"{executable} failed with exit code {code}"
        if stderr.strip():
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
        self.executable = executable
        self.code = code
        self.stderr = stderr


class EncodingFailedError(ConversionError):
    """Raised when the in-process image encoder fails."""


class FilesystemError(ConversionError):
    """Raised when a source or destination file cannot be accessed."""
