"""Keyframe curve models, evaluation and resampling."""

from clipmerge.core.curves.models import Curve, Keyframe
from clipmerge.core.curves.resampling import frame_grid, resample_curve

__all__ = [
    "Curve",
    "Keyframe",
    "frame_grid",
    "resample_curve",
]
