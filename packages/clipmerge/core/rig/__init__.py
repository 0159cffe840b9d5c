"""Target hierarchy, path correction and root offset injection."""

from clipmerge.core.rig.hierarchy import HierarchyNode
from clipmerge.core.rig.path_corrector import PathCorrectionResult, correct_paths
from clipmerge.core.rig.root_offset import RootOffset, RootOffsetResult, apply_root_offset

__all__ = [
    "HierarchyNode",
    "PathCorrectionResult",
    "RootOffset",
    "RootOffsetResult",
    "apply_root_offset",
    "correct_paths",
]
