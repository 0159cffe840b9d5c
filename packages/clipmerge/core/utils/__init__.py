"""Shared utilities for clipmerge."""

from clipmerge.core.utils.json import read_json
from clipmerge.core.utils.math import quat_multiply, quat_normalize

__all__ = [
    "quat_multiply",
    "quat_normalize",
    "read_json",
]
