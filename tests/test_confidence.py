"""Tests for the confidence gate."""

import pytest

from supportflow.agents.confidence import ConfidenceGate, validate_threshold
from supportflow.exceptions import ConfigurationError


class TestConfidenceGate:
    """Test the manual review decision."""

    @pytest.mark.parametrize("threshold", [0, 50, 70, 100])
    @pytest.mark.parametrize("confidence", [0, 49.9, 50, 69, 70, 70.5, 100])
    def test_review_iff_below_threshold(self, threshold, confidence):
        """Manual review is required exactly when confidence < threshold."""
        gate = ConfidenceGate(threshold)

        assert gate.needs_manual_review(confidence) == (confidence < threshold)

    def test_default_threshold_from_settings(self):
        """Test the configured default is 70."""
        assert ConfidenceGate().threshold == 70

    def test_update_threshold(self):
        """Test a valid update takes effect."""
        gate = ConfidenceGate(70)

        gate.update_threshold(90)

        assert gate.threshold == 90
        assert gate.needs_manual_review(85)

    @pytest.mark.parametrize("threshold", [-10, 110, 100.01])
    def test_out_of_range_update_rejected(self, threshold):
        """Test an invalid update raises and keeps the previous value."""
        gate = ConfidenceGate(70)

        with pytest.raises(ConfigurationError):
            gate.update_threshold(threshold)

        assert gate.threshold == 70

    def test_invalid_initial_threshold(self):
        with pytest.raises(ConfigurationError):
            ConfidenceGate(150)


class TestValidateThreshold:
    """Test threshold validation."""

    @pytest.mark.parametrize("threshold", [0, 0.5, 70, 100])
    def test_accepts_range(self, threshold):
        assert validate_threshold(threshold) == threshold

    @pytest.mark.parametrize("threshold", [True, "70", None])
    def test_rejects_non_numbers(self, threshold):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_threshold(threshold)

        assert exc_info.value.details == {"threshold": threshold}
