"""Tests for multi-stack merging."""

from __future__ import annotations

import pytest

from clipmerge.core.channels.models import ChannelKey, ChannelSet
from clipmerge.core.curves.models import Curve
from clipmerge.core.merge.merger import merge_channel_sets, merge_stacks
from clipmerge.core.timeline.models import Placement, Stack
from clipmerge.core.timeline.track_builder import build_track_curves


class TestMergeStacks:
    """Tests for merge_stacks function."""

    def test_no_stacks(self) -> None:
        """No stacks merge into an empty set."""
        assert merge_stacks([]).is_empty

    def test_single_stack_is_its_track(self, base_stack: Stack, hips_x: ChannelKey) -> None:
        """One stack merges into its own track curves."""
        result = merge_stacks([base_stack])
        assert result == build_track_curves(base_stack)

    def test_higher_overrides_inside_window(
        self, base_stack: Stack, overlay_stack: Stack, hips_x: ChannelKey
    ) -> None:
        """Higher stack replaces the lower inside its window, lower shows before it."""
        result = merge_stacks([base_stack, overlay_stack], apply_extrapolation=False)
        curve = result[hips_x]
        assert curve.times == (0.0, 1.0, 2.0, 3.0, 4.0)
        assert curve.values == (0.0, 100.0, 200.0, 3.0, 4.0)

    def test_post_hold_extends_override(
        self, base_stack: Stack, overlay_stack: Stack, hips_x: ChannelKey
    ) -> None:
        """With extrapolation the held value replaces the lower after the window."""
        result = merge_stacks([base_stack, overlay_stack], frame_rate=2.0)
        curve = result[hips_x]
        assert curve.times == (0.0, 1.0, 2.0, 2.5, 3.0, 3.5, 4.0)
        assert curve.evaluate(0.0) == 0.0
        assert curve.evaluate(4.0) == pytest.approx(200.0)
        assert curve.evaluate(3.2) == pytest.approx(200.0)

    def test_disjoint_channels_unioned(
        self, base_stack: Stack, hips_x: ChannelKey, smile_key: ChannelKey
    ) -> None:
        """Channels present in only one stack pass through."""
        face = Stack(
            name="face",
            placements=(
                Placement(
                    curves={smile_key: Curve.from_points([(0.0, 0.0), (1.0, 1.0)])},
                    duration=1.0,
                ),
            ),
        )
        result = merge_stacks([base_stack, face])
        assert list(result) == [hips_x, smile_key]
        assert result[hips_x] == build_track_curves(base_stack)[hips_x]

    def test_null_stacks_skipped(self, base_stack: Stack) -> None:
        """None stacks are ignored."""
        assert merge_stacks([None, base_stack, None]) == merge_stacks([base_stack])

    def test_priority_is_list_order(self, hips_x: ChannelKey) -> None:
        """The later stack wins regardless of names."""

        def stack(name: str, value: float) -> Stack:
            curve = Curve.from_points([(0.0, value), (1.0, value)])
            return Stack(name=name, placements=(Placement(curves={hips_x: curve}, duration=1.0),))

        assert merge_stacks([stack("z", 1.0), stack("a", 2.0)])[hips_x].values == (2.0, 2.0)
        assert merge_stacks([stack("a", 2.0), stack("z", 1.0)])[hips_x].values == (1.0, 1.0)


class TestMergeChannelSets:
    """Tests for merge_channel_sets function."""

    def test_outputs_are_new_objects(
        self, base_stack: Stack, overlay_stack: Stack, hips_x: ChannelKey, smile_key: ChannelKey
    ) -> None:
        """Passed-through curves are copies, not the inputs."""
        lower_curve = Curve.from_points([(0.0, 1.0)])
        lower = ChannelSet({hips_x: build_track_curves(base_stack)[hips_x], smile_key: lower_curve})
        higher = build_track_curves(overlay_stack)
        result = merge_channel_sets(lower, higher, overlay_stack)
        assert result[smile_key] == lower_curve
        assert result[smile_key] is not lower_curve
        assert result[hips_x] is not higher[hips_x]
