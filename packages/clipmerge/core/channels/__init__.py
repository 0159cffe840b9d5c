"""Channel keys, kinds and channel sets."""

from clipmerge.core.channels.detection import (
    blend_shape_name,
    detect_blend_shape_channels,
    detect_root_motion_channels,
    infer_channel_kind,
    make_channel_key,
)
from clipmerge.core.channels.models import ChannelKey, ChannelKind, ChannelSet
from clipmerge.core.channels.resampling import resample_channels

__all__ = [
    "ChannelKey",
    "ChannelKind",
    "ChannelSet",
    "blend_shape_name",
    "detect_blend_shape_channels",
    "detect_root_motion_channels",
    "infer_channel_kind",
    "make_channel_key",
    "resample_channels",
]
