"""Merge pipeline entry points.

Stage order:
1. Track curve building per stack
2. Multi-stack merge (low to high priority)
3. Path correction (when a hierarchy root is given)
4. Root offset injection (when an offset is given)
5. Resampling (when enabled in config)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from clipmerge.core.channels.models import ChannelSet
from clipmerge.core.channels.resampling import resample_channels
from clipmerge.core.config.models import MergeConfig
from clipmerge.core.diagnostics import Diagnostic, DiagnosticCode, DiagnosticLevel
from clipmerge.core.merge.merger import merge_stacks
from clipmerge.core.merge.models import MergeResult
from clipmerge.core.rig.hierarchy import HierarchyNode
from clipmerge.core.rig.path_corrector import correct_paths
from clipmerge.core.rig.root_offset import RootOffset, apply_root_offset
from clipmerge.core.timeline.extrapolation import unsupported_modes
from clipmerge.core.timeline.models import Stack
from clipmerge.core.utils.logging import get_logger, log_performance

logger = logging.getLogger(__name__)


def _check_stacks(stacks: Sequence[Stack | None]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for stack in stacks:
        if stack is None:
            continue
        if not stack.active_placements:
            diagnostics.append(
                Diagnostic(
                    level=DiagnosticLevel.INFO,
                    code=DiagnosticCode.EMPTY_STACK,
                    message=f"Stack '{stack.name}' has no placements",
                )
            )
        stack_logger = get_logger(__name__, stack=stack.name)
        for placement in stack.active_placements:
            for mode in unsupported_modes(placement):
                stack_logger.warning(
                    f"{stack.name}/{placement.label}: extrapolation '{mode.value}' "
                    "is not supported, treated as 'none'"
                )
                diagnostics.append(
                    Diagnostic(
                        code=DiagnosticCode.UNSUPPORTED_EXTRAPOLATION,
                        message=(
                            f"Placement '{placement.label}' in stack '{stack.name}' uses "
                            f"'{mode.value}' extrapolation, treated as 'none'"
                        ),
                    )
                )
    return diagnostics


@log_performance
def merge_with_report(
    stacks: Sequence[Stack | None],
    hierarchy_root: HierarchyNode | None = None,
    root_offset: RootOffset | None = None,
    *,
    config: MergeConfig | None = None,
) -> MergeResult:
    """Merge stacks into one channel set and report what happened.

    Args:
        stacks: Stacks ordered from lowest to highest priority.
        hierarchy_root: Target hierarchy for path correction, or None to skip.
        root_offset: Rigid root offset, or None to skip.
        config: Pipeline configuration (defaults when None).

    Returns:
        MergeResult with the final channels and collected diagnostics.
    """
    config = config or MergeConfig()
    stacks = list(stacks)
    diagnostics = _check_stacks(stacks)

    channels = merge_stacks(
        stacks,
        frame_rate=config.frame_rate,
        apply_extrapolation=config.apply_extrapolation,
        tolerance=config.key_time_tolerance,
    )

    corrected = 0
    unresolved = 0
    if hierarchy_root is not None:
        correction = correct_paths(channels, hierarchy_root)
        channels = correction.channels
        corrected = correction.corrected_count
        unresolved = correction.unresolved_count
        diagnostics.extend(correction.diagnostics)

    if root_offset is not None:
        offset_result = apply_root_offset(channels, root_offset)
        channels = offset_result.channels
        diagnostics.extend(offset_result.diagnostics)

    if config.resample:
        channels = resample_channels(channels, config.frame_rate)

    if channels.is_empty:
        logger.warning("Merge produced no channels")
        diagnostics.append(
            Diagnostic(code=DiagnosticCode.EMPTY_RESULT, message="Merge produced no channels")
        )

    logger.info(
        f"Merge complete: {len(channels)} channel(s), {len(diagnostics)} diagnostic(s)"
    )
    return MergeResult(
        channels=channels,
        diagnostics=diagnostics,
        stack_count=sum(1 for s in stacks if s is not None),
        corrected_paths=corrected,
        unresolved_paths=unresolved,
    )


def merge(
    stacks: Sequence[Stack | None],
    hierarchy_root: HierarchyNode | None = None,
    root_offset: RootOffset | None = None,
    *,
    config: MergeConfig | None = None,
) -> ChannelSet:
    """Merge stacks into one channel set.

    Example:
        >>> channels = merge([base_stack, face_stack], hierarchy_root=rig)
    """
    return merge_with_report(stacks, hierarchy_root, root_offset, config=config).channels
