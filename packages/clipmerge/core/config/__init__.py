"""Configuration models and loaders."""

from clipmerge.core.config.loader import (
    configure_logging,
    detect_format,
    load_config,
    load_merge_config,
)
from clipmerge.core.config.models import LoggingConfig, MergeConfig

__all__ = [
    "LoggingConfig",
    "MergeConfig",
    "configure_logging",
    "detect_format",
    "load_config",
    "load_merge_config",
]
