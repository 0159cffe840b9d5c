"""Remap authored curves from source time onto the global timeline."""

from __future__ import annotations

import logging

from clipmerge.core.channels.models import ChannelKey
from clipmerge.core.curves.models import Curve, Keyframe
from clipmerge.core.timeline.models import Placement

logger = logging.getLogger(__name__)


def remap_key(key: Keyframe, placement: Placement) -> Keyframe | None:
    """Remap one key, or None when it falls outside the placement's window.

    A key is kept when 0 <= local <= duration (both bounds inclusive).
    Tangents are multiplied by time_scale; the value is never changed.
    """
    local_t = placement.to_local_time(key.time)
    if local_t < 0.0 or local_t > placement.duration:
        return None
    return Keyframe(
        time=placement.start_time + local_t,
        value=key.value,
        in_tangent=key.in_tangent * placement.time_scale,
        out_tangent=key.out_tangent * placement.time_scale,
    )


def remap_curve(curve: Curve | None, placement: Placement | None) -> Curve | None:
    """Convert an authored curve into global-timeline keys for one placement.

    Args:
        curve: Authored curve in source time.
        placement: Placement owning the curve.

    Returns:
        New Curve with at most as many keys as the input, or None when either
        argument is None.

    Example:
        >>> curve = Curve.from_points([(0.0, 1.0), (1.0, 2.0)])
        >>> remap_curve(curve, Placement(start_time=5.0, duration=0.5, time_scale=2.0)).times
        (5.0, 5.5)
    """
    if curve is None or placement is None:
        return None

    remapped: list[Keyframe] = []
    for key in curve.keys:
        new_key = remap_key(key, placement)
        if new_key is not None:
            remapped.append(new_key)

    dropped = len(curve.keys) - len(remapped)
    if dropped:
        logger.debug(f"{placement.label}: {dropped} key(s) outside the active window")

    # Monotonic for time_scale > 0; from_keys only guards float ties
    return Curve.from_keys(remapped)


def remap_channels(placement: Placement) -> dict[ChannelKey, Curve]:
    """Remap every authored curve of a placement, dropping empty results."""
    result: dict[ChannelKey, Curve] = {}
    for key, curve in placement.curves.items():
        remapped = remap_curve(curve, placement)
        if remapped is not None and not remapped.is_empty:
            result[key] = remapped
    return result
