"""Human-readable formatting helpers."""

from __future__ import annotations

_UNITS = ("KB", "MB", "GB")


def format_file_size(size_bytes: int) -> str:
    """Format a byte count using the largest fitting binary unit.

    Parameters
    ----------
    size_bytes : int
        Size in bytes.

    Returns
    -------
    str
        ``"512 B"`` below 1024 bytes, otherwise one decimal place in KB, MB
        or GB (GB is the largest unit).

    Examples
    --------
    >>> format_file_size(1536)
    '1.5 KB'
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    value = size_bytes / 1024
    for unit in _UNITS[:-1]:
        if value < 1024:
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} {_UNITS[-1]}"


def format_size_delta(original_size: int, final_size: int) -> str:
    """Format a ``before -> after`` annotation with the relative change."""
    text = f"{format_file_size(original_size)} -> {format_file_size(final_size)}"
    if original_size > 0:
        change = (final_size - original_size) / original_size * 100
        text = f"{text} ({change:+.1f}%)"
    return text
