"""Pydantic schemas for runtime validation of batch inputs."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BatchConfig(BaseModel):
    """Validated directories and scheduling parameters for one run."""

    model_config = ConfigDict(extra="forbid")

    input_dir: Path
    output_dir: Path
    pool_size: int = Field(default=4, ge=1)
    progress_interval: float = Field(default=0.2, gt=0.0)

    @field_validator("input_dir", "output_dir")
    @classmethod
    def _validate_dir(cls, value: Path) -> Path:
        if not str(value).strip():
            raise ValueError("directory path cannot be empty.")
        return value


class GifsicleConfig(BaseModel):
    """Validated gifsicle quality parameters."""

    model_config = ConfigDict(extra="forbid")

    executable: str = Field(default="gifsicle", min_length=1)
    optimize_level: int = Field(default=3, ge=1, le=3)
    lossy: int = Field(default=40, ge=0, le=200)
    colors: int = Field(default=140, ge=2, le=256)


class WebpConfig(BaseModel):
    """Validated WebP encoder parameters."""

    model_config = ConfigDict(extra="forbid")

    quality: int = Field(default=80, ge=0, le=100)
