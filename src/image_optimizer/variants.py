"""Named batch variants: what to pick up, how to convert it, where to write it."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from image_optimizer.adapters.converters import GifsicleConverter, WebpConverter
from image_optimizer.adapters.toolchain import ExecutablePrecheck, PillowWebpPrecheck
from image_optimizer.application.options import GifsicleOptions, WebpOptions
from image_optimizer.application.ports import AvailabilityCheck, ImageConverter
from image_optimizer.types import ExtensionSet, OutputNamer, VariantName


def same_name(source_path: Path) -> str:
    return source_path.name


def webp_name(source_path: Path) -> str:
    return f"{source_path.stem}.webp"


@dataclass(frozen=True)
class BatchVariant:
    """Everything that differs between the GIF and WebP batch runs.

    Parameters
    ----------
    name : {"gif", "webp"}
        Variant identifier used on the command line.
    extensions : frozenset[str]
        Lower-case suffixes (with dot) picked up during discovery.
    output_name : OutputNamer
        Maps a source path to its output file name.
    apply_fallback : bool
        Whether outputs that are not smaller get replaced by the original.
    default_input_dir, default_output_dir : str
        Directories used when none are given.
    noun, verb : str
        Wording for user-facing messages.
    """

    name: VariantName
    extensions: ExtensionSet
    output_name: OutputNamer
    apply_fallback: bool
    default_input_dir: str
    default_output_dir: str
    noun: str
    verb: str

    def matches(self, path: Path) -> bool:
        """Check whether a directory entry belongs to this variant."""
        return path.suffix.lower() in self.extensions


GIF_VARIANT = BatchVariant(
    name="gif",
    extensions=frozenset({".gif"}),
    output_name=same_name,
    apply_fallback=True,
    default_input_dir="input",
    default_output_dir="output",
    noun="GIF",
    verb="optimization",
)

WEBP_VARIANT = BatchVariant(
    name="webp",
    extensions=frozenset({".jpg", ".jpeg", ".png"}),
    output_name=webp_name,
    apply_fallback=False,
    default_input_dir="images",
    default_output_dir="webp-images",
    noun="image",
    verb="conversion",
)

def default_converter(
    variant: BatchVariant,
    gifsicle: GifsicleOptions | None = None,
    webp: WebpOptions | None = None,
) -> ImageConverter:
    """Build the stock converter for a variant."""
    if variant.name == "gif":
        return GifsicleConverter(gifsicle)
    return WebpConverter(webp)


def default_precheck(
    variant: BatchVariant,
    gifsicle: GifsicleOptions | None = None,
) -> AvailabilityCheck:
    """Build the stock availability precheck for a variant."""
    if variant.name == "gif":
        return ExecutablePrecheck((gifsicle or GifsicleOptions()).executable)
    return PillowWebpPrecheck()
