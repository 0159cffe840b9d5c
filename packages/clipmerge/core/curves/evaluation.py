"""Cubic Hermite evaluation of keyframe sequences.

Tangents are slopes (dValue/dTime). Within a segment [k0, k1] the Hermite
basis is applied to k0.out_tangent and k1.in_tangent scaled by the segment
length. An infinite tangent on either side makes the segment stepped (holds
k0's value until k1). Outside the key range the curve is clamped to its
first or last value.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clipmerge.core.curves.models import Keyframe


def _segment_index(times: Sequence[float], t: float) -> int:
    """Index i such that times[i] <= t < times[i + 1] (t strictly inside the range)."""
    return bisect_right(times, t) - 1


def _is_stepped(k0: Keyframe, k1: Keyframe) -> bool:
    return math.isinf(k0.out_tangent) or math.isinf(k1.in_tangent)


def hermite_value(k0: Keyframe, k1: Keyframe, t: float) -> float:
    """Evaluate the Hermite segment between k0 and k1 at time t."""
    dt = k1.time - k0.time
    if dt <= 0.0 or _is_stepped(k0, k1):
        return k0.value

    s = (t - k0.time) / dt
    s2 = s * s
    s3 = s2 * s

    m0 = k0.out_tangent * dt
    m1 = k1.in_tangent * dt

    h00 = 2.0 * s3 - 3.0 * s2 + 1.0
    h10 = s3 - 2.0 * s2 + s
    h01 = -2.0 * s3 + 3.0 * s2
    h11 = s3 - s2

    return h00 * k0.value + h10 * m0 + h01 * k1.value + h11 * m1


def hermite_slope(k0: Keyframe, k1: Keyframe, t: float) -> float:
    """First derivative (dValue/dTime) of the Hermite segment at time t."""
    dt = k1.time - k0.time
    if dt <= 0.0 or _is_stepped(k0, k1):
        return 0.0

    s = (t - k0.time) / dt
    s2 = s * s

    m0 = k0.out_tangent * dt
    m1 = k1.in_tangent * dt

    d00 = 6.0 * s2 - 6.0 * s
    d10 = 3.0 * s2 - 4.0 * s + 1.0
    d01 = -6.0 * s2 + 6.0 * s
    d11 = 3.0 * s2 - 2.0 * s

    return (d00 * k0.value + d10 * m0 + d01 * k1.value + d11 * m1) / dt


def evaluate_keys(keys: Sequence[Keyframe], times: Sequence[float], t: float) -> float:
    """Evaluate a time-sorted key sequence at t, clamping outside its range.

    Args:
        keys: Keyframes with strictly increasing time.
        times: The key times, parallel to keys (for bisection).
        t: Query time.

    Returns:
        Interpolated value.

    Raises:
        ValueError: If keys is empty.
    """
    if not keys:
        raise ValueError("cannot evaluate a curve with no keys")

    if t <= times[0]:
        return keys[0].value
    if t >= times[-1]:
        return keys[-1].value

    i = _segment_index(times, t)
    return hermite_value(keys[i], keys[i + 1], t)


def slope_keys(keys: Sequence[Keyframe], times: Sequence[float], t: float) -> tuple[float, float]:
    """Incoming and outgoing slope of a key sequence at t.

    At an existing key this is the key's own (in, out) tangent pair. Between
    keys both values are the segment derivative. Outside the key range the
    curve is clamped, so the slope is zero.
    """
    if not keys:
        raise ValueError("cannot evaluate a curve with no keys")

    if t < times[0] or t > times[-1]:
        return 0.0, 0.0

    i = _segment_index(times, t)
    if i >= 0 and times[i] == t:
        return keys[i].in_tangent, keys[i].out_tangent

    slope = hermite_slope(keys[i], keys[i + 1], t)
    return slope, slope
