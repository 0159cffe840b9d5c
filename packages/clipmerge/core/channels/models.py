"""Channel identity and channel set models.

A channel is one scalar animatable value, identified by the node path it is
bound to, the kind of binding, and the property name. A ChannelSet maps
channel keys to curves and is the unit every merge stage consumes and
produces.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from clipmerge.core.curves.models import Curve


class ChannelKind(str, Enum):
    """Binding kind of a channel.

    Decides eligibility for path correction and root offset grouping.
    """

    OBJECT = "object"  # Transform / material style property on a scene node
    BLEND_SHAPE = "blend_shape"  # Deformer blend weight
    ROOT_MOTION = "root_motion"  # Recorded against the rig root, path is irrelevant
    OTHER = "other"  # Unrecognized binding, passed through untouched

    @property
    def is_path_correctable(self) -> bool:
        """True for kinds whose path may be rewritten against a hierarchy."""
        return self in (ChannelKind.OBJECT, ChannelKind.BLEND_SHAPE)


class ChannelKey(BaseModel):
    """Structural identity of one channel.

    Two keys are the same channel only if path, kind and property all match.

    Example:
        >>> key = ChannelKey(path="Hips", property_name="m_LocalPosition.x")
        >>> key.binding_key
        'Hips|object|m_LocalPosition.x'
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    path: str = Field(default="", description="Root-relative node path, '' for the root")
    kind: ChannelKind = ChannelKind.OBJECT
    property_name: str = Field(..., min_length=1)

    @property
    def binding_key(self) -> str:
        """Stable string form, used in logs and diagnostics."""
        return f"{self.path}|{self.kind.value}|{self.property_name}"

    @property
    def leaf_name(self) -> str:
        """Final path segment ('' for the root)."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def depth(self) -> int:
        """Number of path segments (0 for the root)."""
        return len(self.path.split("/")) if self.path else 0

    def with_path(self, path: str) -> ChannelKey:
        return self.model_copy(update={"path": path})


class ChannelSet(Mapping[ChannelKey, Curve]):
    """Immutable mapping of channel key to curve.

    Insertion order is preserved. No method mutates the set; every
    transformation returns a new ChannelSet.
    """

    __slots__ = ("_curves",)

    def __init__(
        self,
        curves: Mapping[ChannelKey, Curve] | Iterable[tuple[ChannelKey, Curve]] | None = None,
    ) -> None:
        self._curves: dict[ChannelKey, Curve] = dict(curves or {})
        for key, curve in self._curves.items():
            if not isinstance(key, ChannelKey):
                raise TypeError(f"ChannelSet keys must be ChannelKey, got {type(key).__name__}")
            if not isinstance(curve, Curve):
                raise TypeError(f"ChannelSet values must be Curve, got {type(curve).__name__}")

    @classmethod
    def coerce(cls, value: object) -> ChannelSet:
        """Accept a ChannelSet, a mapping or None (pydantic field coercion)."""
        if isinstance(value, ChannelSet):
            return value
        if value is None:
            return cls()
        if isinstance(value, Mapping):
            return cls(value)
        raise TypeError(f"Cannot build ChannelSet from {type(value).__name__}")

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[ChannelKey, Curve]]) -> ChannelSet:
        """Build from (key, curve) pairs; a repeated key keeps the last curve."""
        return cls(list(pairs))

    def __getitem__(self, key: ChannelKey) -> Curve:
        return self._curves[key]

    def __iter__(self) -> Iterator[ChannelKey]:
        return iter(self._curves)

    def __len__(self) -> int:
        return len(self._curves)

    def __repr__(self) -> str:
        return f"ChannelSet({len(self._curves)} channels)"

    @property
    def is_empty(self) -> bool:
        return not self._curves

    def with_curve(self, key: ChannelKey, curve: Curve) -> ChannelSet:
        """New set with key bound to curve (added or replaced)."""
        curves = dict(self._curves)
        curves[key] = curve
        return ChannelSet(curves)

    def without(self, key: ChannelKey) -> ChannelSet:
        """New set without key (unchanged copy if absent)."""
        return ChannelSet((k, c) for k, c in self._curves.items() if k != key)

    def map_curves(self, func: Callable[[ChannelKey, Curve], Curve]) -> ChannelSet:
        """New set with func applied to every (key, curve)."""
        return ChannelSet((k, func(k, c)) for k, c in self._curves.items())

    def copy(self) -> ChannelSet:
        """New set holding new (value-equal) curve objects."""
        return self.map_curves(lambda _key, curve: curve.model_copy())

    def keys_by_path(self) -> dict[str, list[ChannelKey]]:
        """Group channel keys by node path, in insertion order."""
        grouped: dict[str, list[ChannelKey]] = {}
        for key in self._curves:
            grouped.setdefault(key.path, []).append(key)
        return grouped
