"""Shared type aliases for optimizer modules."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Literal, TypeAlias

VariantName: TypeAlias = Literal["gif", "webp"]
ExtensionSet: TypeAlias = frozenset[str]
OutputNamer: TypeAlias = Callable[[Path], str]
