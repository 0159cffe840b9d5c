"""Channel kind detection from authored binding names.

Authoring tools record bindings as (path, component, property). These helpers
classify them into ChannelKind and pick out root-motion and blend-shape
channels from a ChannelSet.
"""

from __future__ import annotations

from clipmerge.core.channels.models import ChannelKey, ChannelKind, ChannelSet

ROOT_POSITION_PREFIX = "RootT"
ROOT_ROTATION_PREFIX = "RootQ"
BLEND_SHAPE_PREFIX = "blendShape."

# Components whose properties are ordinary object channels
OBJECT_COMPONENTS = frozenset(
    {
        "Transform",
        "RectTransform",
        "MeshRenderer",
        "SkinnedMeshRenderer",
        "SpriteRenderer",
        "Material",
        "Light",
        "Camera",
        "GameObject",
    }
)

BLEND_SHAPE_COMPONENTS = frozenset({"SkinnedMeshRenderer"})


def is_root_position_property(path: str, property_name: str) -> bool:
    """True for a root-motion translation property (RootT.*) on the root."""
    return not path and property_name.startswith(ROOT_POSITION_PREFIX)


def is_root_rotation_property(path: str, property_name: str) -> bool:
    """True for a root-motion rotation property (RootQ.*) on the root."""
    return not path and property_name.startswith(ROOT_ROTATION_PREFIX)


def is_root_motion_property(path: str, property_name: str) -> bool:
    if not property_name:
        return False
    return is_root_position_property(path, property_name) or is_root_rotation_property(
        path, property_name
    )


def is_blend_shape_property(property_name: str, component: str = "SkinnedMeshRenderer") -> bool:
    """True for a 'blendShape.<name>' property on a mesh deformer component."""
    if not property_name or component not in BLEND_SHAPE_COMPONENTS:
        return False
    return property_name.startswith(BLEND_SHAPE_PREFIX)


def blend_shape_name(key: ChannelKey) -> str | None:
    """Blend shape name of a blend-shape channel, None for any other channel."""
    if key.kind != ChannelKind.BLEND_SHAPE or not key.property_name.startswith(BLEND_SHAPE_PREFIX):
        return None
    return key.property_name[len(BLEND_SHAPE_PREFIX) :]


def infer_channel_kind(path: str, property_name: str, component: str = "Transform") -> ChannelKind:
    """Classify an authored binding.

    Args:
        path: Root-relative node path ('' for the root).
        property_name: Authored property name.
        component: Name of the component type owning the property.

    Returns:
        The channel kind.

    Example:
        >>> infer_channel_kind("", "RootT.x", "Animator")
        <ChannelKind.ROOT_MOTION: 'root_motion'>
        >>> infer_channel_kind("Body", "blendShape.Smile", "SkinnedMeshRenderer")
        <ChannelKind.BLEND_SHAPE: 'blend_shape'>
    """
    if is_root_motion_property(path, property_name):
        return ChannelKind.ROOT_MOTION
    if is_blend_shape_property(property_name, component):
        return ChannelKind.BLEND_SHAPE
    if component in OBJECT_COMPONENTS:
        return ChannelKind.OBJECT
    return ChannelKind.OTHER


def make_channel_key(path: str, property_name: str, component: str = "Transform") -> ChannelKey:
    """Build a ChannelKey, inferring its kind from the authored binding."""
    return ChannelKey(
        path=path,
        kind=infer_channel_kind(path, property_name, component),
        property_name=property_name,
    )


def detect_root_motion_channels(channels: ChannelSet) -> ChannelSet:
    """Subset of channels bound to root motion."""
    return ChannelSet((k, c) for k, c in channels.items() if k.kind == ChannelKind.ROOT_MOTION)


def detect_blend_shape_channels(channels: ChannelSet) -> ChannelSet:
    """Subset of channels driving blend-shape weights."""
    return ChannelSet((k, c) for k, c in channels.items() if k.kind == ChannelKind.BLEND_SHAPE)


def has_root_motion(channels: ChannelSet) -> bool:
    return any(k.kind == ChannelKind.ROOT_MOTION for k in channels)
