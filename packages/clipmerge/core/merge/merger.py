"""Fold priority-ordered stacks into one channel set."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from clipmerge.core.channels.models import ChannelKey, ChannelSet
from clipmerge.core.curves.models import Curve
from clipmerge.core.merge.overrider import (
    DEFAULT_FRAME_RATE,
    detect_overlapping_channels,
    override_placements,
    override_windows,
)
from clipmerge.core.timeline.models import Stack
from clipmerge.core.timeline.track_builder import build_track_curves

logger = logging.getLogger(__name__)


def merge_channel_sets(
    lower: ChannelSet,
    higher: ChannelSet,
    higher_stack: Stack,
    *,
    frame_rate: float = DEFAULT_FRAME_RATE,
    apply_extrapolation: bool = True,
    tolerance: float = 0.0,
) -> ChannelSet:
    """Override a lower channel set with one higher-priority stack's curves.

    Channels defined on only one side pass through (copied). Channels on
    both sides are combined, with the higher stack's placements that define
    the channel supplying the override windows.

    Args:
        lower: Accumulated lower-priority channels (global time).
        higher: Track curves of the higher stack (global time).
        higher_stack: The higher stack, for windows and extrapolation.
        frame_rate: Sampling rate for held extrapolation values.
        apply_extrapolation: Use the placements' extrapolation modes.
        tolerance: Time distance under which two keys are the same key.

    Returns:
        New ChannelSet covering the union of both sides' channels.
    """
    overlapping = set(detect_overlapping_channels(lower, higher))
    merged: dict[ChannelKey, Curve] = {}

    for key, curve in lower.items():
        if key not in overlapping:
            merged[key] = curve.model_copy()
            continue

        placements = higher_stack.placements_for(key)
        if apply_extrapolation:
            merged[key] = override_placements(
                key, curve, higher[key], placements, frame_rate, tolerance
            )
        else:
            windows = [p.window for p in placements]
            merged[key] = override_windows(curve, higher[key], windows, tolerance)
        logger.debug(
            f"{key.binding_key}: {len(curve.keys)} + {len(higher[key].keys)} key(s) "
            f"-> {len(merged[key].keys)}"
        )

    for key, curve in higher.items():
        if key not in merged:
            merged[key] = curve.model_copy()

    return ChannelSet(merged)


def merge_stacks(
    stacks: Sequence[Stack | None],
    *,
    frame_rate: float = DEFAULT_FRAME_RATE,
    apply_extrapolation: bool = True,
    tolerance: float = 0.0,
) -> ChannelSet:
    """Merge stacks ordered from lowest to highest priority.

    Each stack is first flattened into track curves, then folded over the
    running result so later stacks override earlier ones.

    Returns:
        New ChannelSet spanning every channel of every stack.
    """
    result = ChannelSet()
    first = True
    for stack in stacks:
        if stack is None:
            continue
        track = build_track_curves(stack, tolerance)
        if first:
            result = track
            first = False
            continue
        result = merge_channel_sets(
            result,
            track,
            stack,
            frame_rate=frame_rate,
            apply_extrapolation=apply_extrapolation,
            tolerance=tolerance,
        )

    logger.info(f"Merged {len(stacks)} stack(s) into {len(result)} channel(s)")
    return result
