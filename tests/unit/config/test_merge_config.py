"""Tests for configuration models."""

from __future__ import annotations

from pydantic import ValidationError
import pytest

from clipmerge.core.config.models import LoggingConfig, MergeConfig


class TestMergeConfig:
    """Tests for MergeConfig model."""

    def test_defaults(self) -> None:
        """Defaults match the documented values."""
        config = MergeConfig()
        assert config.frame_rate == 60.0
        assert config.apply_extrapolation is True
        assert config.resample is False
        assert config.key_time_tolerance == pytest.approx(1e-6)
        assert config.logging.level == "INFO"

    @pytest.mark.parametrize("frame_rate", [0.0, -24.0])
    def test_frame_rate_must_be_positive(self, frame_rate: float) -> None:
        """Non-positive frame rates are rejected."""
        with pytest.raises(ValidationError):
            MergeConfig(frame_rate=frame_rate)

    def test_negative_tolerance_rejected(self) -> None:
        """Tolerance cannot be negative."""
        with pytest.raises(ValidationError):
            MergeConfig(key_time_tolerance=-1.0)

    def test_unknown_keys_ignored(self) -> None:
        """Unknown keys are ignored for forward compatibility."""
        config = MergeConfig.model_validate({"frame_rate": 30, "future_option": True})
        assert config.frame_rate == 30.0

    def test_frozen(self) -> None:
        """Configs are immutable."""
        config = MergeConfig()
        with pytest.raises(ValidationError):
            config.frame_rate = 24.0  # type: ignore[misc]


class TestLoggingConfig:
    """Tests for LoggingConfig model."""

    def test_level_pattern(self) -> None:
        """Only standard level names validate."""
        assert LoggingConfig(level="WARNING").level == "WARNING"
        with pytest.raises(ValidationError):
            LoggingConfig(level="verbose")
