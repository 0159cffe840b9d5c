"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from clipmerge.core.config.models import MergeConfig
from clipmerge.core.utils.json import read_json
from clipmerge.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV_VAR = "CLIPMERGE_LOG_LEVEL"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("clipmerge.json")
        'json'
        >>> detect_format("clipmerge.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            return read_json(path)
        except ValueError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    try:
        with path.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}")
    return content


def load_merge_config(path: str | Path | None = None) -> MergeConfig:
    """Load and validate merge configuration.

    With no path, the default path is used when it exists; otherwise all
    defaults apply. An explicit path must exist. The log level can be
    overridden with the CLIPMERGE_LOG_LEVEL environment variable.

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValidationError: If config is invalid
    """
    if path is None:
        default = MergeConfig.default_path()
        raw_config = load_config(default) if default.exists() else {}
    else:
        raw_config = load_config(path)

    config = MergeConfig.model_validate(raw_config)
    return _apply_env_overrides(config)


def configure_logging(config: MergeConfig | None = None) -> None:
    """Configure Python logging from merge config.

    Args:
        config: MergeConfig instance (loads default if None)
    """
    if config is None:
        config = load_merge_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        structured=config.logging.structured,
    )


def _apply_env_overrides(config: MergeConfig) -> MergeConfig:
    level = os.getenv(LOG_LEVEL_ENV_VAR)
    if not level:
        return config

    logger.debug(f"Loaded {LOG_LEVEL_ENV_VAR} from environment")
    logging_config = config.logging.model_validate(
        {**config.logging.model_dump(), "level": level.upper()}
    )
    return config.model_copy(update={"logging": logging_config})
