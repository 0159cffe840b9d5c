"""Inject a rigid position/rotation offset into root channels.

The offset is applied to the root group: channels on the empty path (and
root-motion channels, whatever their path). When the root has no complete
position triple or rotation quadruple, the shallowest path that has one is
used instead, for rigs authored without a literal root node. Position and
rotation fall back independently.
"""

from __future__ import annotations

import logging

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, field_validator

from clipmerge.core.channels.models import ChannelKey, ChannelKind, ChannelSet
from clipmerge.core.curves.models import Curve, Keyframe
from clipmerge.core.diagnostics import Diagnostic, DiagnosticCode, DiagnosticLevel
from clipmerge.core.utils.math import (
    IDENTITY_QUATERNION,
    is_identity_quaternion,
    quat_multiply,
    quat_normalize,
)

logger = logging.getLogger(__name__)

POSITION_PROPERTY_SETS: tuple[tuple[str, str, str], ...] = (
    ("m_LocalPosition.x", "m_LocalPosition.y", "m_LocalPosition.z"),
    ("RootT.x", "RootT.y", "RootT.z"),
)

ROTATION_PROPERTY_SETS: tuple[tuple[str, str, str, str], ...] = (
    ("m_LocalRotation.x", "m_LocalRotation.y", "m_LocalRotation.z", "m_LocalRotation.w"),
    ("RootQ.x", "RootQ.y", "RootQ.z", "RootQ.w"),
)

ROOT_GROUP = ""


class RootOffset(BaseModel):
    """Rigid offset applied to the root channels.

    Attributes:
        position: Translation (x, y, z) added to position values.
        rotation: Unit quaternion (x, y, z, w) left-multiplied onto rotations.
            Non-unit input is normalized; a zero quaternion is rejected.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    position: tuple[float, float, float] = Field(default=(0.0, 0.0, 0.0))
    rotation: tuple[float, float, float, float] = Field(default=IDENTITY_QUATERNION)

    @field_validator("rotation")
    @classmethod
    def _normalize_rotation(
        cls, value: tuple[float, float, float, float]
    ) -> tuple[float, float, float, float]:
        if is_identity_quaternion(value):
            return value
        q = quat_normalize(np.asarray(value, dtype=float))
        return tuple(float(c) for c in q)

    @property
    def has_translation(self) -> bool:
        return any(c != 0.0 for c in self.position)

    @property
    def has_rotation(self) -> bool:
        return not is_identity_quaternion(self.rotation)

    @property
    def is_identity(self) -> bool:
        return not self.has_translation and not self.has_rotation


class RootOffsetResult(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    channels: ChannelSet
    position_path: str | None = None
    rotation_path: str | None = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)


def _group_of(key: ChannelKey) -> str:
    return ROOT_GROUP if key.kind == ChannelKind.ROOT_MOTION else key.path


def _group_keys(channels: ChannelSet) -> dict[str, dict[str, ChannelKey]]:
    """group -> property name -> key, for eligible channels."""
    groups: dict[str, dict[str, ChannelKey]] = {}
    for key in channels:
        if key.kind not in (ChannelKind.OBJECT, ChannelKind.ROOT_MOTION):
            continue
        groups.setdefault(_group_of(key), {}).setdefault(key.property_name, key)
    return groups


def _complete_sets(
    properties: dict[str, ChannelKey], property_sets: tuple[tuple[str, ...], ...]
) -> list[tuple[ChannelKey, ...]]:
    return [
        tuple(properties[name] for name in names)
        for names in property_sets
        if all(name in properties for name in names)
    ]


def _is_partial(
    properties: dict[str, ChannelKey], property_sets: tuple[tuple[str, ...], ...]
) -> bool:
    return any(
        0 < sum(name in properties for name in names) < len(names) for names in property_sets
    )


def _select_group(
    groups: dict[str, dict[str, ChannelKey]], property_sets: tuple[tuple[str, ...], ...]
) -> tuple[str | None, list[tuple[ChannelKey, ...]]]:
    """Root group if it is complete, else the shallowest complete path."""
    root = groups.get(ROOT_GROUP)
    if root is not None:
        found = _complete_sets(root, property_sets)
        if found:
            return ROOT_GROUP, found

    candidates = sorted(
        (path for path in groups if path != ROOT_GROUP),
        key=lambda p: len(p.split("/")),
    )
    for path in candidates:
        found = _complete_sets(groups[path], property_sets)
        if found:
            return path, found
    return None, []


def offset_position_curve(curve: Curve, delta: float) -> Curve:
    """Add delta to every key value; tangents are untouched."""
    return Curve(keys=tuple(k.model_copy(update={"value": k.value + delta}) for k in curve.keys))


def _rotate_tangents(offset: np.ndarray, tangents: np.ndarray) -> np.ndarray:
    """Rotate tangent quaternions; a row with any infinite (stepped) tangent stays stepped."""
    stepped = ~np.isfinite(tangents).all(axis=1)
    rotated = quat_multiply(offset, np.where(np.isfinite(tangents), tangents, 0.0))
    rotated[stepped] = np.inf
    return rotated


def offset_rotation_curves(
    curves: tuple[Curve, Curve, Curve, Curve], rotation: tuple[float, float, float, float]
) -> tuple[Curve, Curve, Curve, Curve]:
    """Left-multiply a rotation onto a quaternion split over four curves.

    The four curves are sampled at the union of their key times. Tangents
    are rotated the same way, which is exact because q -> r * q is linear.
    """
    if any(c.is_empty for c in curves):
        return tuple(c.model_copy() for c in curves)
    times = sorted({t for curve in curves for t in curve.times})

    values = np.array([[c.evaluate(t) for c in curves] for t in times], dtype=float)
    tangents = [[c.tangents_at(t) for c in curves] for t in times]
    in_tangents = np.array([[pair[0] for pair in row] for row in tangents], dtype=float)
    out_tangents = np.array([[pair[1] for pair in row] for row in tangents], dtype=float)

    offset = np.asarray(rotation, dtype=float)
    new_values = quat_multiply(offset, values)
    new_in = _rotate_tangents(offset, in_tangents)
    new_out = _rotate_tangents(offset, out_tangents)

    result = []
    for component in range(4):
        keys = tuple(
            Keyframe(
                time=t,
                value=float(new_values[i, component]),
                in_tangent=float(new_in[i, component]),
                out_tangent=float(new_out[i, component]),
            )
            for i, t in enumerate(times)
        )
        result.append(Curve(keys=keys))
    return tuple(result)


def _group_diagnostic(code: DiagnosticCode, message: str) -> Diagnostic:
    level = DiagnosticLevel.WARNING
    if code == DiagnosticCode.NO_ROOT_CHANNELS:
        level = DiagnosticLevel.INFO
    return Diagnostic(level=level, code=code, message=message)


def apply_root_offset(channels: ChannelSet, offset: RootOffset | None) -> RootOffsetResult:
    """Apply a rigid offset to the root position/rotation channels.

    Args:
        channels: Channels to offset.
        offset: Offset to apply; None or the identity offset leaves every
            value unchanged.

    Returns:
        RootOffsetResult with a new ChannelSet.
    """
    if offset is None or offset.is_identity:
        return RootOffsetResult(channels=channels.copy())

    groups = _group_keys(channels)
    diagnostics: list[Diagnostic] = []
    updated: dict[ChannelKey, Curve] = {}

    root = groups.get(ROOT_GROUP, {})
    position_path: str | None = None
    rotation_path: str | None = None

    if offset.has_translation:
        position_path, triples = _select_group(groups, POSITION_PROPERTY_SETS)
        for triple in triples:
            for key, delta in zip(triple, offset.position):
                # A zero component leaves that axis untouched
                if delta != 0.0:
                    updated[key] = offset_position_curve(channels[key], delta)
        if position_path is None:
            code = (
                DiagnosticCode.INCOMPLETE_POSITION
                if _is_partial(root, POSITION_PROPERTY_SETS)
                else DiagnosticCode.NO_ROOT_CHANNELS
            )
            diagnostics.append(_group_diagnostic(code, "No complete position triple to offset"))
            logger.warning("Root offset: no complete position triple found")

    if offset.has_rotation:
        rotation_path, quads = _select_group(groups, ROTATION_PROPERTY_SETS)
        for quad in quads:
            rotated = offset_rotation_curves(tuple(channels[k] for k in quad), offset.rotation)
            updated.update(zip(quad, rotated))
        if rotation_path is None:
            code = (
                DiagnosticCode.INCOMPLETE_ROTATION
                if _is_partial(root, ROTATION_PROPERTY_SETS)
                else DiagnosticCode.NO_ROOT_CHANNELS
            )
            diagnostics.append(
                _group_diagnostic(code, "No complete rotation quadruple (x, y, z, w) to offset")
            )
            logger.warning("Root offset: no complete rotation quadruple found")

    logger.info(
        f"Root offset applied to {len(updated)} channel(s) "
        f"(position: {position_path!r}, rotation: {rotation_path!r})"
    )
    result = ChannelSet(
        (k, updated[k] if k in updated else c.model_copy()) for k, c in channels.items()
    )
    return RootOffsetResult(
        channels=result,
        position_path=position_path,
        rotation_path=rotation_path,
        diagnostics=diagnostics,
    )
