"""Tests for the merge pipeline entry points."""

from __future__ import annotations

import logging

import pytest

from clipmerge.core.channels.models import ChannelKey, ChannelKind
from clipmerge.core.config.models import MergeConfig
from clipmerge.core.curves.models import Curve
from clipmerge.core.diagnostics import DiagnosticCode, DiagnosticLevel
from clipmerge.core.merge.pipeline import merge, merge_with_report
from clipmerge.core.rig.hierarchy import HierarchyNode
from clipmerge.core.rig.root_offset import RootOffset
from clipmerge.core.timeline.models import ExtrapolationMode, Placement, Stack


class TestMerge:
    """Tests for merge function."""

    def test_empty_input(self) -> None:
        """No stacks give an empty set."""
        assert merge([]).is_empty

    def test_optional_stages_skipped(self, base_stack: Stack, hips_x: ChannelKey) -> None:
        """Without root or offset the merged channels are returned as built."""
        result = merge([base_stack])
        assert list(result) == [hips_x]
        assert result[hips_x].values == (0.0, 1.0, 2.0, 3.0, 4.0)

    def test_path_correction_stage(self, face_rig: HierarchyNode, smile_key: ChannelKey) -> None:
        """Unresolved paths are rewritten against the hierarchy."""
        curve = Curve.from_points([(0.0, 1.0)])
        stack = Stack(placements=(Placement(curves={smile_key: curve}, duration=1.0),))
        result = merge([stack], hierarchy_root=face_rig)
        assert [k.path for k in result] == ["Face/FaceMesh"]

    def test_root_offset_stage(self, root_position_keys: tuple[ChannelKey, ...]) -> None:
        """Root offset is added to root position channels."""
        curves = {key: Curve.from_points([(0.0, 1.0), (1.0, 2.0)]) for key in root_position_keys}
        stack = Stack(placements=(Placement(curves=curves, duration=1.0),))
        result = merge([stack], root_offset=RootOffset(position=(10.0, 0.0, -1.0)))
        x, y, z = root_position_keys
        assert result[x].values == (11.0, 12.0)
        assert result[y].values == (1.0, 2.0)
        assert result[z].values == (0.0, 1.0)

    def test_resample_stage(self, base_stack: Stack, hips_x: ChannelKey) -> None:
        """Resampling emits one key per frame when enabled."""
        result = merge([base_stack], config=MergeConfig(resample=True, frame_rate=2.0))
        assert len(result[hips_x].keys) == 9


class TestMergeWithReport:
    """Tests for merge_with_report function."""

    def test_success_flag(self, base_stack: Stack) -> None:
        """is_success is true when channels were produced."""
        report = merge_with_report([base_stack])
        assert report.is_success
        assert report.stack_count == 1
        assert report.diagnostics == []

    def test_empty_result_diagnostic(self) -> None:
        """An empty merge reports EMPTY_RESULT and is not a success."""
        report = merge_with_report([Stack(name="muted")])
        assert not report.is_success
        codes = [d.code for d in report.diagnostics]
        assert DiagnosticCode.EMPTY_STACK in codes
        assert DiagnosticCode.EMPTY_RESULT in codes

    def test_unsupported_extrapolation_reported(
        self, hips_x: ChannelKey, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Loop extrapolation is reported once and logged."""
        placement = Placement(
            curves={hips_x: Curve.from_points([(0.0, 1.0)])},
            name="cycle",
            duration=1.0,
            post_extrapolation=ExtrapolationMode.LOOP,
        )
        with caplog.at_level(logging.WARNING):
            report = merge_with_report([Stack(name="s", placements=(placement,))])
        found = report.diagnostics_with(DiagnosticCode.UNSUPPORTED_EXTRAPOLATION)
        assert len(found) == 1
        assert "loop" in found[0].message
        assert "not supported" in caplog.text

    def test_path_diagnostics_collected(self, face_rig: HierarchyNode) -> None:
        """Not-found and ambiguous paths do not stop the merge."""
        missing = ChannelKey(path="Tail", property_name="m_LocalScale.x")
        ambiguous = ChannelKey(
            path="Mesh", kind=ChannelKind.BLEND_SHAPE, property_name="blendShape.A"
        )
        good = ChannelKey(path="Head", property_name="m_LocalScale.x")
        curve = Curve.from_points([(0.0, 1.0)])
        stack = Stack(
            placements=(
                Placement(curves={missing: curve, ambiguous: curve, good: curve}, duration=1.0),
            )
        )
        report = merge_with_report([stack], hierarchy_root=face_rig)
        assert len(report.channels) == 3
        assert report.corrected_paths == 1
        assert report.unresolved_paths == 2
        assert {d.code for d in report.diagnostics} == {
            DiagnosticCode.PATH_NOT_FOUND,
            DiagnosticCode.PATH_AMBIGUOUS,
        }
        assert all(d.level == DiagnosticLevel.WARNING for d in report.diagnostics)
