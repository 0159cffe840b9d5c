"""Extrapolation evaluation for placements.

Answers "what value, if any, does this placement contribute at a global
time". Inside the active window the authored curve is evaluated at the
matching source time. Outside it the placement's pre/post extrapolation mode
decides. Only NONE and HOLD have defined behavior; LOOP, PING_PONG and
CONTINUE are evaluated as NONE.
"""

from __future__ import annotations

import logging

from clipmerge.core.curves.models import Curve
from clipmerge.core.timeline.models import ExtrapolationMode, Placement

logger = logging.getLogger(__name__)


def effective_mode(mode: ExtrapolationMode) -> ExtrapolationMode:
    """Mode actually evaluated: unsupported modes fall back to NONE."""
    if mode.is_supported:
        return mode
    logger.debug(f"Extrapolation mode '{mode.value}' is not supported, using 'none'")
    return ExtrapolationMode.NONE


def unsupported_modes(placement: Placement) -> list[ExtrapolationMode]:
    """Extrapolation modes of a placement that fall back to NONE."""
    modes = [placement.pre_extrapolation, placement.post_extrapolation]
    return [m for m in dict.fromkeys(modes) if not m.is_supported]


def hold_value_before(curve: Curve, placement: Placement) -> float:
    """Value held before the window: the curve at source time clip_in."""
    return curve.evaluate(placement.clip_in)


def hold_value_after(curve: Curve, placement: Placement) -> float:
    """Value held after the window: the curve at the source time playing at end_time."""
    return curve.evaluate(placement.source_end)


def evaluate_extrapolated(
    curve: Curve | None, placement: Placement | None, t: float
) -> float | None:
    """Value a placement contributes at global time t.

    Args:
        curve: Authored curve (source time).
        placement: Placement owning the curve.
        t: Global query time.

    Returns:
        The value, or None when it is unknown (outside the window with
        extrapolation NONE or an unsupported mode, or no usable curve).

    Example:
        >>> curve = Curve.from_points([(0.0, 100.0), (1.0, 200.0)])
        >>> placement = Placement(start_time=1.0, duration=1.0, post_extrapolation="hold")
        >>> evaluate_extrapolated(curve, placement, 4.0)
        200.0
    """
    if curve is None or placement is None or curve.is_empty:
        return None

    if placement.contains(t):
        return curve.evaluate(placement.to_source_time(t))

    if t < placement.start_time:
        if effective_mode(placement.pre_extrapolation) == ExtrapolationMode.HOLD:
            return hold_value_before(curve, placement)
        return None

    if effective_mode(placement.post_extrapolation) == ExtrapolationMode.HOLD:
        return hold_value_after(curve, placement)
    return None


def yields_before(placement: Placement) -> bool:
    """True if the placement contributes values before its window."""
    return effective_mode(placement.pre_extrapolation) == ExtrapolationMode.HOLD


def yields_after(placement: Placement) -> bool:
    """True if the placement contributes values after its window."""
    return effective_mode(placement.post_extrapolation) == ExtrapolationMode.HOLD
