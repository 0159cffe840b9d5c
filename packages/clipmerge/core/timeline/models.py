"""Timeline models: placements, stacks and extrapolation modes.

A Placement positions one authored channel set on the global timeline with
trim (clip_in), speed (time_scale) and extrapolation parameters. A Stack is an
ordered list of placements sharing one priority rank. Stacks are passed to the
merger ordered from lowest to highest priority.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clipmerge.core.channels.models import ChannelKey, ChannelSet


class ExtrapolationMode(str, Enum):
    """What a placement contributes outside its active window."""

    NONE = "none"
    HOLD = "hold"
    LOOP = "loop"  # Not supported, evaluated as NONE
    PING_PONG = "ping_pong"  # Not supported, evaluated as NONE
    CONTINUE = "continue"  # Not supported, evaluated as NONE

    @property
    def is_supported(self) -> bool:
        return self in (ExtrapolationMode.NONE, ExtrapolationMode.HOLD)


class Placement(BaseModel):
    """One authored channel set positioned on the global timeline.

    Source time t maps to local time (t - clip_in) / time_scale, and local
    time maps to global time start_time + local.

    Attributes:
        curves: Authored curves in source time.
        name: Optional display name used in logs.
        start_time: Global start of the active window.
        clip_in: Trim offset into the source time axis.
        duration: Length of the active window on the global timeline.
        time_scale: Playback speed multiplier (> 0).
        pre_extrapolation: Behavior before start_time.
        post_extrapolation: Behavior after end_time.

    Example:
        >>> placement = Placement(start_time=5.0, duration=0.5, time_scale=2.0)
        >>> placement.window
        (5.0, 5.5)
    """

    model_config = ConfigDict(extra="forbid", frozen=True, arbitrary_types_allowed=True)

    curves: ChannelSet = Field(default_factory=ChannelSet)
    name: str = ""
    start_time: float = 0.0
    clip_in: float = 0.0
    duration: float = Field(default=0.0, ge=0.0)
    time_scale: float = Field(default=1.0, gt=0.0)
    pre_extrapolation: ExtrapolationMode = ExtrapolationMode.NONE
    post_extrapolation: ExtrapolationMode = ExtrapolationMode.NONE

    @field_validator("curves", mode="before")
    @classmethod
    def _coerce_curves(cls, value: Any) -> ChannelSet:
        return ChannelSet.coerce(value)

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    @property
    def window(self) -> tuple[float, float]:
        """Active window [start_time, end_time] in global time."""
        return (self.start_time, self.end_time)

    @property
    def source_end(self) -> float:
        """Source time played at the end of the active window."""
        return self.clip_in + self.duration * self.time_scale

    def to_local_time(self, source_time: float) -> float:
        """Source time to local (window-relative) time."""
        return (source_time - self.clip_in) / self.time_scale

    def to_global_time(self, source_time: float) -> float:
        """Source time to global time."""
        return self.start_time + self.to_local_time(source_time)

    def to_source_time(self, global_time: float) -> float:
        """Global time to source time."""
        return (global_time - self.start_time) * self.time_scale + self.clip_in

    def contains(self, global_time: float) -> bool:
        """True if global_time lies inside the active window (inclusive)."""
        return self.start_time <= global_time <= self.end_time

    def defines(self, key: ChannelKey) -> bool:
        return key in self.curves

    @property
    def label(self) -> str:
        return self.name or f"placement@{self.start_time:g}"


class Stack(BaseModel):
    """Ordered placements sharing one priority rank.

    Null entries are allowed and skipped everywhere.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = ""
    placements: tuple[Placement | None, ...] = Field(default_factory=tuple)

    @property
    def active_placements(self) -> tuple[Placement, ...]:
        """Non-null placements in stack order."""
        return tuple(p for p in self.placements if p is not None)

    @property
    def window(self) -> tuple[float, float] | None:
        """(min start, max end) over all placements, None for an empty stack."""
        placements = self.active_placements
        if not placements:
            return None
        return (
            min(p.start_time for p in placements),
            max(p.end_time for p in placements),
        )

    def placements_for(self, key: ChannelKey) -> tuple[Placement, ...]:
        """Placements that define the channel, in stack order."""
        return tuple(p for p in self.active_placements if p.defines(key))

    def channel_keys(self) -> list[ChannelKey]:
        """Union of channel keys across placements, first-seen order."""
        seen: dict[ChannelKey, None] = {}
        for placement in self.active_placements:
            for key in placement.curves:
                seen.setdefault(key, None)
        return list(seen)
