"""Curve resampling to a fixed frame rate.

Baked output is easier to consume when every channel has one key per frame
regardless of the frame rate of the source placements. Resampling snaps a
curve's key span outward to frame boundaries and emits one key per frame.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from clipmerge.core.curves.models import Curve, Keyframe

logger = logging.getLogger(__name__)


def frame_grid(start: float, end: float, frame_rate: float) -> np.ndarray:
    """Frame-aligned sample times covering [start, end].

    The start is floored and the end is ceiled to the nearest frame boundary.

    Args:
        start: First time to cover.
        end: Last time to cover.
        frame_rate: Frames per second. Must be > 0.

    Returns:
        1-D array of sample times.

    Raises:
        ValueError: If frame_rate <= 0 or end < start.

    Example:
        >>> frame_grid(0.0, 0.1, 30.0).tolist()
        [0.0, 0.03333333333333333, 0.06666666666666667, 0.1]
    """
    if frame_rate <= 0:
        raise ValueError("frame_rate must be > 0")
    if end < start:
        raise ValueError("end must be >= start")

    # Rounding guards against 0.1 * 30 landing a hair past a frame boundary
    first_frame = math.floor(round(start * frame_rate, 9))
    last_frame = math.ceil(round(end * frame_rate, 9))
    frames = np.arange(first_frame, last_frame + 1, dtype=float)
    return frames / frame_rate


def resample_curve(curve: Curve, frame_rate: float) -> Curve:
    """Resample a curve to one key per frame.

    Values come from Hermite evaluation of the source curve; tangents are the
    source curve's slope at each sample, so the resampled curve keeps the
    source's shape between frames.

    An empty curve, or a non-positive frame rate, returns a copy of the input.

    Args:
        curve: Curve to resample.
        frame_rate: Target frames per second.

    Returns:
        New, resampled Curve.
    """
    if curve.is_empty or frame_rate <= 0:
        return curve.model_copy()

    assert curve.start_time is not None and curve.end_time is not None
    keys: list[Keyframe] = []
    for t in frame_grid(curve.start_time, curve.end_time, frame_rate):
        t = float(t)
        in_tangent, out_tangent = curve.tangents_at(t)
        keys.append(
            Keyframe(
                time=t,
                value=curve.evaluate(t),
                in_tangent=in_tangent,
                out_tangent=out_tangent,
            )
        )

    return Curve.from_keys(keys)
