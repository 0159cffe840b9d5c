"""Shared pytest fixtures for clipmerge tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from clipmerge.core.channels.models import ChannelKey, ChannelKind, ChannelSet
from clipmerge.core.curves.models import Curve, Keyframe
from clipmerge.core.rig.hierarchy import HierarchyNode
from clipmerge.core.timeline.models import ExtrapolationMode, Placement, Stack

# ============================================================================
# Path Fixtures
# ============================================================================


@pytest.fixture
def project_root() -> Path:
    """Get project root directory."""
    return Path(__file__).parent.parent


# ============================================================================
# Channel Fixtures
# ============================================================================


@pytest.fixture
def hips_x() -> ChannelKey:
    """Object channel for the hips X position."""
    return ChannelKey(path="Hips", property_name="m_LocalPosition.x")


@pytest.fixture
def smile_key() -> ChannelKey:
    """Blend-shape channel on the face mesh."""
    return ChannelKey(
        path="FaceMesh", kind=ChannelKind.BLEND_SHAPE, property_name="blendShape.Smile"
    )


@pytest.fixture
def root_position_keys() -> tuple[ChannelKey, ChannelKey, ChannelKey]:
    """Root-level position triple."""
    return tuple(  # type: ignore[return-value]
        ChannelKey(path="", property_name=f"m_LocalPosition.{axis}") for axis in "xyz"
    )


@pytest.fixture
def root_rotation_keys() -> tuple[ChannelKey, ChannelKey, ChannelKey, ChannelKey]:
    """Root-level rotation quadruple."""
    return tuple(  # type: ignore[return-value]
        ChannelKey(path="", property_name=f"m_LocalRotation.{axis}") for axis in "xyzw"
    )


# ============================================================================
# Curve Fixtures
# ============================================================================


@pytest.fixture
def ramp_curve() -> Curve:
    """Linear ramp 0 -> 10 over one second with matching tangents."""
    return Curve.from_keys(
        [
            Keyframe(time=0.0, value=0.0, in_tangent=10.0, out_tangent=10.0),
            Keyframe(time=1.0, value=10.0, in_tangent=10.0, out_tangent=10.0),
        ]
    )


@pytest.fixture
def flat_lower_curve() -> Curve:
    """Lower-priority curve {(0, 0), (3, 3)}."""
    return Curve.from_points([(0.0, 0.0), (3.0, 3.0)])


@pytest.fixture
def higher_curve() -> Curve:
    """Higher-priority curve {(1, 100), (2, 200)}."""
    return Curve.from_points([(1.0, 100.0), (2.0, 200.0)])


# ============================================================================
# Timeline Fixtures
# ============================================================================


@pytest.fixture
def base_stack(hips_x: ChannelKey) -> Stack:
    """Low-priority stack: one placement over [0, 4] keyed every second."""
    curve = Curve.from_points([(float(t), float(t)) for t in range(5)])
    placement = Placement(curves={hips_x: curve}, name="base", start_time=0.0, duration=4.0)
    return Stack(name="base", placements=(placement,))


@pytest.fixture
def overlay_stack(hips_x: ChannelKey) -> Stack:
    """High-priority stack: one placement over [1, 2] with held post extrapolation."""
    curve = Curve.from_points([(0.0, 100.0), (1.0, 200.0)])
    placement = Placement(
        curves={hips_x: curve},
        name="overlay",
        start_time=1.0,
        duration=1.0,
        post_extrapolation=ExtrapolationMode.HOLD,
    )
    return Stack(name="overlay", placements=(placement,))


# ============================================================================
# Hierarchy Fixtures
# ============================================================================


@pytest.fixture
def face_rig() -> HierarchyNode:
    """Rig with a unique FaceMesh and two nodes named Mesh."""
    return HierarchyNode.from_paths(
        [
            "Hips/Spine/Head",
            "Face/FaceMesh",
            "Body/Mesh",
            "Props/Hat/Mesh",
        ],
        root_name="Character",
    )


@pytest.fixture
def empty_channels() -> ChannelSet:
    return ChannelSet()
