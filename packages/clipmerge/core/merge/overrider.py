"""Priority override of two curves for one channel.

A higher-priority curve replaces a lower-priority curve across the higher
side's active window(s):

- Full override: every lower key lies inside a window, so the result is the
  higher curve.
- Partial override: lower keys outside the windows survive and are unioned
  with all higher keys. On a shared key time the higher key wins.
- Extrapolation-aware override: outside its windows a higher placement with
  HOLD extrapolation keeps overriding the lower curve with its held value,
  sampled at a fixed frame rate. With NONE the lower curve shows through.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from clipmerge.core.channels.models import ChannelKey, ChannelSet
from clipmerge.core.curves.models import Curve, Keyframe
from clipmerge.core.timeline.extrapolation import (
    hold_value_after,
    hold_value_before,
    yields_after,
    yields_before,
)
from clipmerge.core.timeline.models import Placement

logger = logging.getLogger(__name__)

DEFAULT_FRAME_RATE = 60.0

Window = tuple[float, float]


@dataclass(frozen=True)
class CurveLayer:
    """One priority layer of a single channel: a curve and its override window."""

    curve: Curve
    start_time: float
    end_time: float


@dataclass(frozen=True)
class HeldRegion:
    """Time range where a placement's held value replaces the lower curve."""

    start: float
    end: float
    value: float
    include_start: bool
    include_end: bool

    def contains(self, t: float) -> bool:
        return self.start <= t <= self.end


def is_same_channel(a: ChannelKey, b: ChannelKey) -> bool:
    """Channels match only when path, kind and property all match."""
    return a == b


def detect_overlapping_channels(lower: ChannelSet, higher: ChannelSet) -> list[ChannelKey]:
    """Channel keys present in both sets, in lower-set order."""
    return [key for key in lower if key in higher]


def _in_any_window(t: float, windows: Sequence[Window]) -> bool:
    return any(start <= t <= end for start, end in windows)


def _is_fully_covered(lower: Curve, windows: Sequence[Window]) -> bool:
    return all(_in_any_window(t, windows) for t in lower.times)


def apply_full_override(lower: Curve | None, higher: Curve) -> Curve:
    """Result of a full override: the higher curve's keys exactly."""
    return higher.model_copy()


def apply_partial_override(
    lower: Curve,
    higher: Curve,
    override_start: float,
    override_end: float,
    tolerance: float = 0.0,
) -> Curve:
    """Union of lower keys outside [override_start, override_end] and all higher keys.

    Example:
        >>> lower = Curve.from_points([(0, 0), (3, 3)])
        >>> higher = Curve.from_points([(1, 100), (2, 200)])
        >>> apply_partial_override(lower, higher, 1, 2).times
        (0.0, 1.0, 2.0, 3.0)
    """
    return override_windows(lower, higher, [(override_start, override_end)], tolerance)


def combine(
    lower: Curve | None,
    higher: Curve | None,
    override_start: float,
    override_end: float,
    tolerance: float = 0.0,
) -> Curve:
    """Combine a lower and a higher priority curve for one channel.

    Args:
        lower: Lower priority curve.
        higher: Higher priority curve.
        override_start: Start of the higher side's active window.
        override_end: End of the higher side's active window.
        tolerance: Time distance under which two keys are the same key.

    Returns:
        New Curve. If one side is missing or empty the other is returned
        (copied); if both are, an empty curve.
    """
    return override_windows(lower, higher, [(override_start, override_end)], tolerance)


def override_windows(
    lower: Curve | None,
    higher: Curve | None,
    windows: Iterable[Window],
    tolerance: float = 0.0,
) -> Curve:
    """Combine two curves where the higher side is active over several windows."""
    if lower is None or lower.is_empty:
        return higher.model_copy() if higher is not None else Curve()
    if higher is None or higher.is_empty:
        return lower.model_copy()

    windows = list(windows)
    if _is_fully_covered(lower, windows):
        return apply_full_override(lower, higher)

    survivors = [k for k in lower.keys if not _in_any_window(k.time, windows)]
    # Higher keys last so they win a shared time
    return Curve.from_keys([*survivors, *higher.keys], tolerance)


def held_regions(
    key: ChannelKey,
    placements: Sequence[Placement],
    lower_start: float,
    lower_end: float,
) -> list[HeldRegion]:
    """Regions of [lower_start, lower_end] covered by held extrapolation.

    Before the first window the first placement's pre mode applies, after
    the last window the last placement's post mode. A gap between two windows
    belongs to the earlier placement's post mode when it holds, otherwise to
    the later placement's pre mode.
    """
    ordered = sorted(
        (p for p in placements if key in p.curves and not p.curves[key].is_empty),
        key=lambda p: p.start_time,
    )
    if not ordered:
        return []

    # (open start, open end, placement, use_pre)
    candidates: list[tuple[float, float, Placement, bool]] = []
    first = ordered[0]
    if yields_before(first):
        candidates.append((-math.inf, first.start_time, first, True))

    reach = first
    for nxt in ordered[1:]:
        if nxt.start_time > reach.end_time:
            if yields_after(reach):
                candidates.append((reach.end_time, nxt.start_time, reach, False))
            elif yields_before(nxt):
                candidates.append((reach.end_time, nxt.start_time, nxt, True))
        if nxt.end_time > reach.end_time:
            reach = nxt

    if yields_after(reach):
        candidates.append((reach.end_time, math.inf, reach, False))

    regions: list[HeldRegion] = []
    for open_start, open_end, placement, use_pre in candidates:
        start = max(open_start, lower_start)
        end = min(open_end, lower_end)
        if start > end:
            continue
        source = placement.curves[key]
        value = (
            hold_value_before(source, placement) if use_pre else hold_value_after(source, placement)
        )
        regions.append(
            HeldRegion(
                start=start,
                end=end,
                value=value,
                include_start=lower_start > open_start,
                include_end=lower_end < open_end,
            )
        )
    return regions


def sample_region(region: HeldRegion, frame_rate: float, tolerance: float = 1e-4) -> list[Keyframe]:
    """Flat keys at the held value every 1 / frame_rate across a region."""
    interval = 1.0 / frame_rate
    times: list[float] = []
    if region.include_start:
        times.append(region.start)

    step = 1
    t = region.start + interval
    while t < region.end - tolerance:
        times.append(t)
        step += 1
        t = region.start + step * interval

    if region.include_end and (not times or region.end - times[-1] > tolerance):
        times.append(region.end)
    return [Keyframe(time=t, value=region.value) for t in times]


def override_placements(
    key: ChannelKey,
    lower: Curve | None,
    higher: Curve | None,
    placements: Sequence[Placement],
    frame_rate: float = DEFAULT_FRAME_RATE,
    tolerance: float = 0.0,
) -> Curve:
    """Extrapolation-aware override against the placements of a higher stack.

    Args:
        key: Channel being combined.
        lower: Lower priority curve (global time).
        higher: Higher priority curve (global time).
        placements: Higher-stack placements, each with its authored curves.
        frame_rate: Sampling rate for held values.
        tolerance: Time distance under which two keys are the same key.

    Returns:
        New Curve.
    """
    windows = [p.window for p in placements if key in p.curves]
    if lower is None or lower.is_empty or higher is None or higher.is_empty:
        return override_windows(lower, higher, windows, tolerance)
    if _is_fully_covered(lower, windows):
        return apply_full_override(lower, higher)

    regions = held_regions(key, placements, lower.start_time, lower.end_time)
    survivors = [
        k
        for k in lower.keys
        if not _in_any_window(k.time, windows) and not any(r.contains(k.time) for r in regions)
    ]
    held: list[Keyframe] = []
    for region in regions:
        held.extend(sample_region(region, frame_rate))

    if held:
        logger.debug(f"{key.binding_key}: {len(held)} held key(s) across {len(regions)} region(s)")

    return Curve.from_keys([*survivors, *held, *higher.keys], tolerance)


def apply_partial_override_with_extrapolation(
    lower: Curve | None,
    higher: Curve | None,
    key: ChannelKey,
    placement: Placement,
    frame_rate: float = DEFAULT_FRAME_RATE,
    tolerance: float = 0.0,
) -> Curve:
    """Partial override where the higher placement's extrapolation fills gaps.

    With HOLD on a side, the held value replaces the lower curve from the
    window edge out to the end of the lower curve on that side. With NONE the
    lower curve shows through right up to the window edge.
    """
    return override_placements(key, lower, higher, [placement], frame_rate, tolerance)


def merge_layers(layers: Sequence[CurveLayer], tolerance: float = 0.0) -> Curve:
    """Fold partial overrides across layers ordered low to high priority."""
    if not layers:
        return Curve()
    result = layers[0].curve.model_copy()
    for layer in layers[1:]:
        result = combine(result, layer.curve, layer.start_time, layer.end_time, tolerance)
    return result
