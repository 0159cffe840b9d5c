"""Channel-set level resampling."""

from __future__ import annotations

import logging

from clipmerge.core.channels.models import ChannelSet
from clipmerge.core.curves.resampling import resample_curve

logger = logging.getLogger(__name__)


def resample_channels(channels: ChannelSet, frame_rate: float) -> ChannelSet:
    """Resample every curve in a channel set to one key per frame.

    A non-positive frame rate leaves the values untouched (curves are still
    copied into a new set).

    Args:
        channels: Channels to resample.
        frame_rate: Target frames per second.

    Returns:
        New ChannelSet.
    """
    if frame_rate <= 0:
        logger.warning(f"Skipping resample: frame_rate must be > 0, got {frame_rate}")
        return channels.copy()

    logger.debug(f"Resampling {len(channels)} channels at {frame_rate} fps")
    return channels.map_curves(lambda _key, curve: resample_curve(curve, frame_rate))
