"""Unit tests for the gifsicle and WebP converter adapters."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from PIL import Image

from image_optimizer.adapters import converters
from image_optimizer.adapters.converters import GifsicleConverter, WebpConverter
from image_optimizer.application.options import GifsicleOptions, WebpOptions
from image_optimizer.errors import (
    EncodingFailedError,
    FilesystemError,
    ToolFailureError,
    ToolUnavailableError,
)


def test_gifsicle_command_uses_fixed_quality_parameters(tmp_path: Path) -> None:
    """Build the documented argument vector with output before input."""
    args = GifsicleConverter().command(tmp_path / "in.gif", tmp_path / "out.gif")
    assert args == [
        "gifsicle",
        "--optimize=3",
        "--lossy=40",
        "--colors=140",
        "-o",
        str(tmp_path / "out.gif"),
        str(tmp_path / "in.gif"),
    ]


def test_gifsicle_success_returns_produced_size(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Exit code zero yields the size of the written output."""
    destination = tmp_path / "out.gif"

    def fake_run(args: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        Path(args[args.index("-o") + 1]).write_bytes(b"g" * 42)
        return subprocess.CompletedProcess(args, 0, "", "")

    monkeypatch.setattr(converters.subprocess, "run", fake_run)
    assert GifsicleConverter().convert(tmp_path / "in.gif", destination) == 42


def test_gifsicle_nonzero_exit_is_tool_failure(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Non-zero exit codes surface as ToolFailureError carrying the code."""
    monkeypatch.setattr(
        converters.subprocess,
        "run",
        lambda args, **_: subprocess.CompletedProcess(args, 2, "", "bad gif"),
    )
    with pytest.raises(ToolFailureError) as excinfo:
        GifsicleConverter().convert(tmp_path / "in.gif", tmp_path / "out.gif")
    assert excinfo.value.code == 2
    assert "bad gif" in str(excinfo.value)


def test_gifsicle_missing_executable_is_tool_unavailable(tmp_path: Path) -> None:
    """A binary that cannot be launched raises ToolUnavailableError."""
    converter = GifsicleConverter(GifsicleOptions(executable="definitely-missing-gifsicle"))
    with pytest.raises(ToolUnavailableError, match="definitely-missing-gifsicle"):
        converter.convert(tmp_path / "in.gif", tmp_path / "out.gif")


def test_gifsicle_success_without_output_is_filesystem_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A zero exit that leaves no output behind is not a success."""
    monkeypatch.setattr(
        converters.subprocess,
        "run",
        lambda args, **_: subprocess.CompletedProcess(args, 0, "", ""),
    )
    with pytest.raises(FilesystemError):
        GifsicleConverter().convert(tmp_path / "in.gif", tmp_path / "out.gif")


def test_webp_converter_encodes_png(tmp_path: Path) -> None:
    """Re-encode a PNG into a valid WebP file."""
    source = tmp_path / "photo.png"
    Image.new("RGB", (32, 24), (200, 40, 40)).save(source)
    destination = tmp_path / "photo.webp"

    size = WebpConverter(WebpOptions(quality=70)).convert(source, destination)

    assert size == destination.stat().st_size
    with Image.open(destination) as image:
        assert image.format == "WEBP"
        assert image.size == (32, 24)


def test_webp_converter_wraps_decode_errors(tmp_path: Path) -> None:
    """Unreadable input raises EncodingFailedError naming the file."""
    source = tmp_path / "broken.jpg"
    source.write_bytes(b"not an image")
    with pytest.raises(EncodingFailedError, match="broken.jpg"):
        WebpConverter().convert(source, tmp_path / "broken.webp")
