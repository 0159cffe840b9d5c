"""Keyframe curve models.

This module defines the curve primitives used throughout the merge pipeline:
- Keyframe: one (time, value, in_tangent, out_tangent) sample
- Curve: an immutable, strictly time-ordered sequence of keyframes

All models are frozen. Every operation that changes a curve returns a new
Curve; nothing here mutates an existing instance.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

from clipmerge.core.curves.evaluation import evaluate_keys, slope_keys


class Keyframe(BaseModel):
    """A single keyframe on a curve.

    Tangents are slopes in value units per second. A tangent of +/-inf
    marks a stepped segment.

    Attributes:
        time: Key time in seconds.
        value: Key value.
        in_tangent: Incoming slope.
        out_tangent: Outgoing slope.

    Example:
        >>> key = Keyframe(time=1.0, value=0.5)
        >>> key.in_tangent
        0.0
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    time: float
    value: float
    in_tangent: float = 0.0
    out_tangent: float = 0.0

    def shifted(self, time: float, value: float | None = None) -> Keyframe:
        """Copy of this key moved to a new time (and optionally a new value)."""
        return self.model_copy(
            update={"time": time, "value": self.value if value is None else value}
        )


class Curve(BaseModel):
    """Immutable keyframe curve.

    Keys must have strictly increasing time. Use ``Curve.from_keys`` to build
    a curve from unsorted keys or keys that may share a time.

    Example:
        >>> curve = Curve.from_points([(0.0, 0.0), (1.0, 10.0)])
        >>> curve.evaluate(0.5)
        5.0
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    keys: tuple[Keyframe, ...] = Field(default_factory=tuple)

    _times: tuple[float, ...] = PrivateAttr(default=())

    @model_validator(mode="after")
    def _validate_increasing_time(self) -> Curve:
        """Validate that keys have strictly increasing time."""
        last_t: float | None = None
        for key in self.keys:
            if last_t is not None and key.time <= last_t:
                raise ValueError("Curve.keys must have strictly increasing time")
            last_t = key.time
        return self

    def model_post_init(self, __context: object) -> None:
        self._times = tuple(k.time for k in self.keys)

    @classmethod
    def from_keys(cls, keys: Iterable[Keyframe], tolerance: float = 0.0) -> Curve:
        """Build a curve from keys in any order.

        Keys are sorted by time. Keys whose times fall within ``tolerance``
        of each other collapse to one; the key that came later in ``keys``
        wins.

        Args:
            keys: Keyframes in any order.
            tolerance: Time distance under which two keys are the same key.

        Returns:
            New Curve.
        """
        indexed = sorted(enumerate(keys), key=lambda item: item[1].time)

        merged: list[tuple[int, Keyframe]] = []
        for index, key in indexed:
            if merged and key.time - merged[-1][1].time <= tolerance:
                if index > merged[-1][0]:
                    merged[-1] = (index, key)
                continue
            merged.append((index, key))

        return cls(keys=tuple(key for _, key in merged))

    @classmethod
    def from_points(cls, points: Iterable[tuple[float, float]]) -> Curve:
        """Build a curve from (time, value) pairs with flat tangents."""
        return cls.from_keys(Keyframe(time=t, value=v) for t, v in points)

    @property
    def times(self) -> tuple[float, ...]:
        """Key times in order."""
        return self._times

    @property
    def values(self) -> tuple[float, ...]:
        """Key values in time order."""
        return tuple(k.value for k in self.keys)

    @property
    def is_empty(self) -> bool:
        return not self.keys

    @property
    def start_time(self) -> float | None:
        """Time of the first key, or None for an empty curve."""
        return self._times[0] if self._times else None

    @property
    def end_time(self) -> float | None:
        """Time of the last key, or None for an empty curve."""
        return self._times[-1] if self._times else None

    def evaluate(self, t: float) -> float:
        """Evaluate the curve at time t (clamped outside the key range).

        Raises:
            ValueError: If the curve has no keys.
        """
        return evaluate_keys(self.keys, self._times, t)

    def tangents_at(self, t: float) -> tuple[float, float]:
        """Incoming and outgoing slope at time t.

        Raises:
            ValueError: If the curve has no keys.
        """
        return slope_keys(self.keys, self._times, t)

    def key_at(self, t: float, tolerance: float = 0.0) -> Keyframe | None:
        """Key whose time is within tolerance of t, if any."""
        for key in self.keys:
            if abs(key.time - t) <= tolerance:
                return key
        return None

    def keys_between(self, start: float, end: float) -> tuple[Keyframe, ...]:
        """Keys with start <= time <= end."""
        return tuple(k for k in self.keys if start <= k.time <= end)
