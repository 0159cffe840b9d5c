"""Build one curve per channel for a stack of placements."""

from __future__ import annotations

import logging

from clipmerge.core.channels.models import ChannelKey, ChannelSet
from clipmerge.core.curves.models import Curve, Keyframe
from clipmerge.core.timeline.models import Stack
from clipmerge.core.timeline.remap import remap_curve

logger = logging.getLogger(__name__)


def build_track_curves(stack: Stack | None, tolerance: float = 0.0) -> ChannelSet:
    """Flatten a stack's placements into global-timeline curves.

    Each placement's curves are remapped onto the global timeline, then
    keys for the same channel are unioned. When two placements put a key at
    the same global time (within tolerance) the later placement in the stack
    wins. Null placements are skipped and channels whose remapped curve has
    no keys are left out.

    Args:
        stack: Stack to flatten.
        tolerance: Time distance under which two keys are the same key.

    Returns:
        New ChannelSet in global time.
    """
    if stack is None:
        return ChannelSet()

    collected: dict[ChannelKey, list[Keyframe]] = {}
    for placement in stack.active_placements:
        for key, curve in placement.curves.items():
            remapped = remap_curve(curve, placement)
            if remapped is None or remapped.is_empty:
                logger.debug(
                    f"{stack.name}/{placement.label}: {key.binding_key} has no keys in window"
                )
                continue
            collected.setdefault(key, []).extend(remapped.keys)

    result = ChannelSet((key, Curve.from_keys(keys, tolerance)) for key, keys in collected.items())
    logger.debug(
        f"Stack '{stack.name}': {len(stack.active_placements)} placement(s) "
        f"-> {len(result)} channel(s)"
    )
    return result
