"""Unit tests for CLI command behavior."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image
from typer.testing import CliRunner

from image_optimizer.application.results import (
    BatchSummary,
    ConversionTask,
    Failed,
    Succeeded,
)
from image_optimizer.cli import cli as cli_module
from image_optimizer.errors import DirectoryNotFoundError, ToolUnavailableError

runner = CliRunner()


def _task(name: str) -> ConversionTask:
    return ConversionTask(Path(name), Path("output") / name, name)


def test_help_shows_commands() -> None:
    """Ensure top-level help lists the batch subcommands."""
    result = runner.invoke(cli_module.app, ["--help"])
    assert result.exit_code == 0
    assert "gif" in result.output
    assert "webp" in result.output
    assert "doctor" in result.output


def test_gif_forwards_options_to_api(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """The gif command passes directories and tool settings through."""
    called: dict[str, object] = {}

    def fake_optimize(**kwargs: object) -> BatchSummary:
        called.update(kwargs)
        return BatchSummary(outcomes=(Succeeded(_task("a.gif"), 10, 5),))

    import image_optimizer.api as api_module

    monkeypatch.setattr(api_module, "optimize_gif_directory", fake_optimize)
    result = runner.invoke(
        cli_module.app,
        [
            "gif",
            str(tmp_path / "in"),
            str(tmp_path / "out"),
            "--jobs",
            "2",
            "--lossy",
            "60",
            "--no-progress",
        ],
    )

    assert result.exit_code == 0, result.output
    assert called["input_dir"] == tmp_path / "in"
    assert called["output_dir"] == tmp_path / "out"
    assert called["jobs"] == 2
    assert called["lossy"] == 60
    assert called["colors"] == 140
    assert called["executable"] == "gifsicle"


def test_gif_exit_code_reflects_failed_tasks(monkeypatch: pytest.MonkeyPatch) -> None:
    """Any failed task makes the command exit non-zero."""
    import image_optimizer.api as api_module

    monkeypatch.setattr(
        api_module,
        "optimize_gif_directory",
        lambda **_: BatchSummary(
            outcomes=(Succeeded(_task("a.gif"), 10, 5), Failed(_task("b.gif"), "boom"))
        ),
    )
    result = runner.invoke(cli_module.app, ["gif", "--no-progress"])
    assert result.exit_code == 1


def test_gif_missing_tool_reports_and_exits_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    """An unavailable gifsicle is reported without a failing exit status."""
    import image_optimizer.api as api_module

    def fake_optimize(**_: object) -> BatchSummary:
        raise ToolUnavailableError("gifsicle")

    monkeypatch.setattr(api_module, "optimize_gif_directory", fake_optimize)
    result = runner.invoke(cli_module.app, ["gif", "--no-progress"])

    assert result.exit_code == 0
    assert "ToolUnavailableError" in result.output


def test_gif_missing_input_dir_exits_with_code_two(tmp_path: Path) -> None:
    """A missing input directory is fatal and distinguishable."""
    result = runner.invoke(
        cli_module.app,
        ["gif", str(tmp_path / "missing"), str(tmp_path / "out"), "--no-progress"],
    )
    assert result.exit_code == DirectoryNotFoundError.exit_code == 2
    assert "DirectoryNotFoundError" in result.output


def test_gif_rejects_zero_jobs() -> None:
    """Typer validates the pool size lower bound."""
    result = runner.invoke(cli_module.app, ["gif", "--jobs", "0"])
    assert result.exit_code != 0


def test_gif_debug_prints_traceback(monkeypatch: pytest.MonkeyPatch) -> None:
    """Debug mode includes the traceback of fatal errors."""
    import image_optimizer.api as api_module

    def fake_optimize(**_: object) -> BatchSummary:
        raise RuntimeError("kaboom")

    monkeypatch.setattr(api_module, "optimize_gif_directory", fake_optimize)
    result = runner.invoke(cli_module.app, ["--debug", "gif", "--no-progress"])

    assert result.exit_code == 1
    assert "Traceback" in result.output


def test_webp_converts_real_images(tmp_path: Path) -> None:
    """The webp command converts JPG/PNG files end to end."""
    input_dir = tmp_path / "images"
    input_dir.mkdir()
    Image.new("RGB", (16, 16), (10, 120, 200)).save(input_dir / "a.png")
    Image.new("RGB", (16, 16), (90, 20, 20)).save(input_dir / "b.jpg")
    (input_dir / "notes.txt").write_text("skip me")
    output_dir = tmp_path / "webp-images"

    result = runner.invoke(
        cli_module.app, ["webp", str(input_dir), str(output_dir), "--no-progress"]
    )

    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in output_dir.iterdir()) == ["a.webp", "b.webp"]
    assert "Found 2 image file(s)" in result.output


def test_webp_without_images_reports_nothing_found(tmp_path: Path) -> None:
    """An input directory with no JPG/PNG files is not an error."""
    input_dir = tmp_path / "images"
    input_dir.mkdir()

    result = runner.invoke(
        cli_module.app, ["webp", str(input_dir), str(tmp_path / "out"), "--no-progress"]
    )

    assert result.exit_code == 0
    assert "files found" in result.output


def test_doctor_lists_toolchain() -> None:
    """The doctor command prints versions and tool availability."""
    result = runner.invoke(cli_module.app, ["doctor", "--executable", "missing-gifsicle-x"])
    assert result.exit_code == 0
    assert "Python:" in result.output
    assert "missing-gifsicle-x: unavailable" in result.output


def test_default_directories_come_from_variants(monkeypatch: pytest.MonkeyPatch) -> None:
    """Omitted directories fall back to each variant's defaults."""
    import image_optimizer.api as api_module
    from image_optimizer.variants import GIF_VARIANT, WEBP_VARIANT

    calls: list[tuple[Path, Path]] = []

    def record(**kwargs: object) -> BatchSummary:
        calls.append((kwargs["input_dir"], kwargs["output_dir"]))
        return BatchSummary()

    monkeypatch.setattr(api_module, "optimize_gif_directory", record)
    monkeypatch.setattr(api_module, "convert_directory_to_webp", record)

    assert runner.invoke(cli_module.app, ["gif", "--no-progress"]).exit_code == 0
    assert runner.invoke(cli_module.app, ["webp", "--no-progress"]).exit_code == 0
    assert calls == [
        (Path(GIF_VARIANT.default_input_dir), Path(GIF_VARIANT.default_output_dir)),
        (Path(WEBP_VARIANT.default_input_dir), Path(WEBP_VARIANT.default_output_dir)),
    ]
