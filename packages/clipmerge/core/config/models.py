"""Configuration models for clipmerge."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log records")


class MergeConfig(BaseModel):
    """Merge pipeline configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)  # Forward compatibility

    frame_rate: float = Field(
        default=60.0, gt=0.0, description="Sampling rate for held extrapolation and resampling"
    )

    apply_extrapolation: bool = Field(
        default=True, description="Fill override gaps from HOLD extrapolation"
    )

    resample: bool = Field(default=False, description="Resample the final channels at frame_rate")

    key_time_tolerance: float = Field(
        default=1e-6, ge=0.0, description="Key times closer than this are the same key"
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def default_path(cls) -> Path:
        return Path("clipmerge.yaml")
