"""Rewrite unresolved channel paths against a target hierarchy.

A channel authored against one rig often names nodes by a path that does not
exist in the target rig. When the final path segment names exactly one node
anywhere under the target root, the path is rewritten to that node's full
root-relative path. Root-motion and unrecognized channels are never touched.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from clipmerge.core.channels.models import ChannelKey, ChannelSet
from clipmerge.core.curves.models import Curve
from clipmerge.core.diagnostics import Diagnostic, DiagnosticCode
from clipmerge.core.rig.hierarchy import HierarchyNode

logger = logging.getLogger(__name__)


class PathStatus(str, Enum):
    """Outcome of resolving one authored path."""

    RESOLVED = "resolved"  # Already valid
    CORRECTED = "corrected"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"
    SKIPPED = "skipped"  # Empty path


class PathResolution(BaseModel):
    """Cached result for one raw authored path."""

    model_config = ConfigDict(frozen=True)

    status: PathStatus
    path: str
    matches: tuple[str, ...] = Field(default_factory=tuple)


class PathCorrectionResult(BaseModel):
    """Corrected channels plus what happened along the way."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    channels: ChannelSet
    corrected_count: int = 0
    not_found_count: int = 0
    ambiguous_count: int = 0
    collision_count: int = 0
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def unresolved_count(self) -> int:
        return self.not_found_count + self.ambiguous_count


class PathResolver:
    """Leaf-name path resolver for one hierarchy.

    The leaf-name index is built once and results are cached per raw path,
    so each distinct path is searched at most once. Create one resolver per
    correction call.
    """

    def __init__(self, root: HierarchyNode):
        self.root = root
        self._index: dict[str, list[str]] | None = None
        self._cache: dict[str, PathResolution] = {}

    def _leaf_index(self) -> dict[str, list[str]]:
        if self._index is None:
            index: dict[str, list[str]] = {}
            for path, node in self.root.iter_descendants():
                index.setdefault(node.name, []).append(path)
            self._index = index
        return self._index

    def resolve(self, path: str) -> PathResolution:
        """Resolve an authored path (cached)."""
        cached = self._cache.get(path)
        if cached is not None:
            return cached

        if not path:
            resolution = PathResolution(status=PathStatus.SKIPPED, path=path)
        elif self.root.resolve(path) is not None:
            resolution = PathResolution(status=PathStatus.RESOLVED, path=path)
        else:
            leaf = path.rsplit("/", 1)[-1]
            matches = tuple(self._leaf_index().get(leaf, ()))
            if len(matches) == 1:
                resolution = PathResolution(
                    status=PathStatus.CORRECTED, path=matches[0], matches=matches
                )
            elif not matches:
                resolution = PathResolution(status=PathStatus.NOT_FOUND, path=path)
            else:
                resolution = PathResolution(status=PathStatus.AMBIGUOUS, path=path, matches=matches)

        self._cache[path] = resolution
        return resolution


def correct_paths(channels: ChannelSet, root: HierarchyNode | None) -> PathCorrectionResult:
    """Rewrite unresolved paths of path-correctable channels.

    Args:
        channels: Channels to correct.
        root: Target hierarchy root; None disables correction.

    Returns:
        PathCorrectionResult with a new ChannelSet. Curves, kinds and
        property names are preserved exactly; only paths change.

    Example:
        >>> root = HierarchyNode.from_paths(["Face/FaceMesh"])
        >>> key = ChannelKey(path="FaceMesh", property_name="m_IsActive")
        >>> result = correct_paths(ChannelSet({key: Curve()}), root)
        >>> next(iter(result.channels)).path
        'Face/FaceMesh'
    """
    if root is None:
        return PathCorrectionResult(channels=channels.copy())

    resolver = PathResolver(root)
    reported: set[str] = set()
    diagnostics: list[Diagnostic] = []
    counts = {"corrected": 0, "not_found": 0, "ambiguous": 0, "collision": 0}
    claimed: set[ChannelKey] = set(channels)
    output: dict[ChannelKey, Curve] = {}

    for key, curve in channels.items():
        new_key = key
        if key.kind.is_path_correctable:
            resolution = resolver.resolve(key.path)
            if resolution.status == PathStatus.CORRECTED:
                candidate = key.with_path(resolution.path)
                if candidate in claimed or candidate in output:
                    counts["collision"] += 1
                    diagnostics.append(
                        Diagnostic(
                            code=DiagnosticCode.PATH_COLLISION,
                            message=(
                                f"'{key.path}' -> '{resolution.path}' "
                                "collides with an existing channel"
                            ),
                            channel=key.binding_key,
                        )
                    )
                    logger.warning(
                        f"Path rewrite collision for {key.binding_key}, keeping original path"
                    )
                else:
                    new_key = candidate
                    counts["corrected"] += 1
                    logger.debug(f"Corrected {key.binding_key} -> '{resolution.path}'")
            elif resolution.status == PathStatus.NOT_FOUND:
                counts["not_found"] += 1
                if key.path not in reported:
                    reported.add(key.path)
                    diagnostics.append(
                        Diagnostic(
                            code=DiagnosticCode.PATH_NOT_FOUND,
                            message=f"No node named '{key.leaf_name}' under '{root.name}'",
                            channel=key.binding_key,
                        )
                    )
                    logger.warning(f"Path not found: '{key.path}'")
            elif resolution.status == PathStatus.AMBIGUOUS:
                counts["ambiguous"] += 1
                if key.path not in reported:
                    reported.add(key.path)
                    diagnostics.append(
                        Diagnostic(
                            code=DiagnosticCode.PATH_AMBIGUOUS,
                            message=(
                                f"'{key.leaf_name}' matches {len(resolution.matches)} nodes: "
                                f"{', '.join(resolution.matches)}"
                            ),
                            channel=key.binding_key,
                        )
                    )
                    logger.warning(f"Ambiguous path '{key.path}': {list(resolution.matches)}")

        output[new_key] = curve.model_copy()

    logger.info(
        f"Path correction: {counts['corrected']} corrected, {counts['not_found']} not found, "
        f"{counts['ambiguous']} ambiguous"
    )
    return PathCorrectionResult(
        channels=ChannelSet(output),
        corrected_count=counts["corrected"],
        not_found_count=counts["not_found"],
        ambiguous_count=counts["ambiguous"],
        collision_count=counts["collision"],
        diagnostics=diagnostics,
    )
