"""Priority override, multi-stack merge and the merge pipeline."""

from clipmerge.core.merge.merger import merge_channel_sets, merge_stacks
from clipmerge.core.merge.models import MergeResult
from clipmerge.core.merge.overrider import (
    CurveLayer,
    apply_full_override,
    apply_partial_override,
    apply_partial_override_with_extrapolation,
    combine,
    detect_overlapping_channels,
    is_same_channel,
    merge_layers,
)
from clipmerge.core.merge.pipeline import merge, merge_with_report

__all__ = [
    "CurveLayer",
    "MergeResult",
    "apply_full_override",
    "apply_partial_override",
    "apply_partial_override_with_extrapolation",
    "combine",
    "detect_overlapping_channels",
    "is_same_channel",
    "merge",
    "merge_channel_sets",
    "merge_layers",
    "merge_stacks",
    "merge_with_report",
]
