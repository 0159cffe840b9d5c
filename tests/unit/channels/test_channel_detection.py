"""Tests for channel kind detection."""

from __future__ import annotations

from clipmerge.core.channels.detection import (
    blend_shape_name,
    detect_blend_shape_channels,
    detect_root_motion_channels,
    has_root_motion,
    infer_channel_kind,
    is_blend_shape_property,
    is_root_motion_property,
    is_root_position_property,
    is_root_rotation_property,
    make_channel_key,
)
from clipmerge.core.channels.models import ChannelKey, ChannelKind, ChannelSet
from clipmerge.core.curves.models import Curve


class TestRootMotionDetection:
    """Tests for root-motion property detection."""

    def test_root_position(self) -> None:
        """RootT.* on the root path is root position."""
        assert is_root_position_property("", "RootT.x")
        assert not is_root_rotation_property("", "RootT.x")

    def test_root_rotation(self) -> None:
        """RootQ.* on the root path is root rotation."""
        assert is_root_rotation_property("", "RootQ.w")
        assert is_root_motion_property("", "RootQ.w")

    def test_non_root_path_is_not_root_motion(self) -> None:
        """RootT on a child path is not root motion."""
        assert not is_root_motion_property("Hips", "RootT.x")

    def test_empty_property(self) -> None:
        """An empty property is never root motion."""
        assert not is_root_motion_property("", "")


class TestBlendShapeDetection:
    """Tests for blend-shape property detection."""

    def test_blend_shape_on_skinned_mesh(self) -> None:
        """blendShape.* on a skinned mesh renderer is a blend shape."""
        assert is_blend_shape_property("blendShape.Smile", "SkinnedMeshRenderer")

    def test_blend_shape_on_other_component(self) -> None:
        """blendShape.* on another component is not a blend shape."""
        assert not is_blend_shape_property("blendShape.Smile", "Transform")

    def test_blend_shape_name(self, smile_key: ChannelKey, hips_x: ChannelKey) -> None:
        """blend_shape_name strips the prefix, None for other channels."""
        assert blend_shape_name(smile_key) == "Smile"
        assert blend_shape_name(hips_x) is None


class TestInferChannelKind:
    """Tests for infer_channel_kind function."""

    def test_root_motion(self) -> None:
        """Root motion wins over the component."""
        assert infer_channel_kind("", "RootT.x", "Animator") == ChannelKind.ROOT_MOTION

    def test_blend_shape(self) -> None:
        """Blend-shape property on a skinned mesh."""
        kind = infer_channel_kind("Body", "blendShape.Blink", "SkinnedMeshRenderer")
        assert kind == ChannelKind.BLEND_SHAPE

    def test_transform_is_object(self) -> None:
        """Transform properties are object channels."""
        assert infer_channel_kind("Hips", "m_LocalPosition.x") == ChannelKind.OBJECT

    def test_unknown_component_is_other(self) -> None:
        """Unrecognized components are OTHER."""
        assert infer_channel_kind("Hips", "m_Weight", "MyScript") == ChannelKind.OTHER

    def test_make_channel_key(self) -> None:
        """make_channel_key fills in the inferred kind."""
        key = make_channel_key("", "RootQ.x", "Animator")
        assert key == ChannelKey(path="", kind=ChannelKind.ROOT_MOTION, property_name="RootQ.x")


class TestChannelSetDetection:
    """Tests for channel-set level detectors."""

    def test_detect_subsets(self, smile_key: ChannelKey, hips_x: ChannelKey) -> None:
        """Detectors pick out root-motion and blend-shape channels."""
        root_t = make_channel_key("", "RootT.x", "Animator")
        channels = ChannelSet({hips_x: Curve(), smile_key: Curve(), root_t: Curve()})

        assert list(detect_root_motion_channels(channels)) == [root_t]
        assert list(detect_blend_shape_channels(channels)) == [smile_key]
        assert has_root_motion(channels)
        assert not has_root_motion(channels.without(root_t))
