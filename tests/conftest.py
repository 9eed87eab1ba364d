"""Shared pytest configuration, markers and fixtures."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from rich.logging import RichHandler

_SUITES = ("e2e_tests", "integration_tests", "unit_tests")


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach a suite marker (e2e, integration, unit) from the test path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        for suite in _SUITES:
            if suite in parts:
                item.add_marker(getattr(pytest.mark, suite.removesuffix("_tests")))
                break


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    """Undo the CLI's ``logging.basicConfig(force=True)`` after each test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.setLevel(level)
