"""Placements, stacks, time remapping and extrapolation."""

from clipmerge.core.timeline.extrapolation import evaluate_extrapolated
from clipmerge.core.timeline.models import ExtrapolationMode, Placement, Stack
from clipmerge.core.timeline.remap import remap_curve
from clipmerge.core.timeline.track_builder import build_track_curves

__all__ = [
    "ExtrapolationMode",
    "Placement",
    "Stack",
    "build_track_curves",
    "evaluate_extrapolated",
    "remap_curve",
]
