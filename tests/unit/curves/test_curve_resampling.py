"""Tests for frame-rate resampling of curves."""

from __future__ import annotations

import pytest

from clipmerge.core.curves.models import Curve
from clipmerge.core.curves.resampling import frame_grid, resample_curve


class TestFrameGrid:
    """Tests for frame_grid function."""

    def test_aligned_range(self) -> None:
        """Aligned bounds produce one sample per frame inclusive."""
        grid = frame_grid(0.0, 1.0, 4.0)
        assert grid.tolist() == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_snaps_outward(self) -> None:
        """Start floors and end ceils to frame boundaries."""
        grid = frame_grid(0.1, 0.6, 4.0)
        assert grid[0] == pytest.approx(0.0)
        assert grid[-1] == pytest.approx(0.75)

    def test_float_noise_does_not_add_frame(self) -> None:
        """0.1 s at 30 fps ends on frame 3."""
        assert len(frame_grid(0.0, 0.1, 30.0)) == 4

    def test_invalid_frame_rate_raises(self) -> None:
        """Non-positive frame rate raises ValueError."""
        with pytest.raises(ValueError, match="frame_rate"):
            frame_grid(0.0, 1.0, 0.0)

    def test_reversed_range_raises(self) -> None:
        """end < start raises ValueError."""
        with pytest.raises(ValueError):
            frame_grid(1.0, 0.0, 30.0)


class TestResampleCurve:
    """Tests for resample_curve function."""

    def test_one_key_per_frame(self, ramp_curve: Curve) -> None:
        """A one second curve at 10 fps has 11 keys."""
        result = resample_curve(ramp_curve, 10.0)
        assert len(result.keys) == 11
        assert result.times[0] == 0.0
        assert result.times[-1] == pytest.approx(1.0)

    def test_values_follow_source(self, ramp_curve: Curve) -> None:
        """Resampled values match the source evaluation."""
        result = resample_curve(ramp_curve, 10.0)
        for key in result.keys:
            assert key.value == pytest.approx(ramp_curve.evaluate(key.time))

    def test_tangents_follow_source_slope(self, ramp_curve: Curve) -> None:
        """Resampled tangents equal the source slope."""
        result = resample_curve(ramp_curve, 10.0)
        assert result.keys[5].out_tangent == pytest.approx(10.0)

    def test_empty_curve_passes_through(self) -> None:
        """Empty curve returns an empty copy."""
        source = Curve()
        result = resample_curve(source, 30.0)
        assert result.is_empty
        assert result is not source

    def test_invalid_frame_rate_passes_through(self, ramp_curve: Curve) -> None:
        """Non-positive frame rate returns an equal copy."""
        result = resample_curve(ramp_curve, 0.0)
        assert result == ramp_curve
        assert result is not ramp_curve
