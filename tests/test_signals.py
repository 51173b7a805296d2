"""Tests for kinematic signal derivation."""

from __future__ import annotations

import pytest

from dunksense.analysis.signals import (
    SignalDeriver,
    compute_hip_height,
    compute_vertical_velocity,
)
from dunksense.core.config import AnalysisSettings
from dunksense.core.types import DerivedPose, JointName, Keypoint, PoseFrame


def _hips(timestamp: float, y: float, confidence: float = 0.9) -> PoseFrame:
    return PoseFrame(
        timestamp=timestamp,
        joints={
            JointName.LEFT_HIP: Keypoint(0.45, y, confidence),
            JointName.RIGHT_HIP: Keypoint(0.55, y, confidence),
        },
    )


class TestComputeHipHeight:
    """Tests for hip height estimation."""

    def test_height_from_mean_hip_y(self) -> None:
        """Height is (1 - mean hip y) times the calibration scale."""
        frame = PoseFrame(
            timestamp=0.0,
            joints={
                JointName.LEFT_HIP: Keypoint(0.45, 0.4, 0.9),
                JointName.RIGHT_HIP: Keypoint(0.55, 0.6, 0.9),
            },
        )

        assert compute_hip_height(frame, calibration_scale=200.0) == pytest.approx(100.0)
        assert compute_hip_height(frame, calibration_scale=180.0) == pytest.approx(90.0)

    def test_requires_both_hips_above_threshold(self) -> None:
        """A hip at exactly the threshold is not confident enough."""
        assert compute_hip_height(_hips(0.0, 0.5, confidence=0.3)) is None
        assert compute_hip_height(_hips(0.0, 0.5, confidence=0.31)) == pytest.approx(100.0)

    def test_missing_hip_gives_none(self) -> None:
        """Missing joints give no height rather than an error."""
        frame = PoseFrame(
            timestamp=0.0,
            joints={JointName.LEFT_HIP: Keypoint(0.45, 0.5, 0.9)},
        )
        assert compute_hip_height(frame) is None


class TestComputeVerticalVelocity:
    """Tests for finite-difference velocity."""

    def test_velocity_between_defined_heights(self) -> None:
        """Velocity is height change over time change."""
        previous = DerivedPose(frame=PoseFrame(timestamp=1.0), hip_height=100.0)

        assert compute_vertical_velocity(previous, 103.0, 1.1) == pytest.approx(30.0)

    def test_undefined_without_previous_height(self) -> None:
        """No previous frame or previous height means no velocity."""
        assert compute_vertical_velocity(None, 100.0, 1.0) is None

        previous = DerivedPose(frame=PoseFrame(timestamp=1.0), hip_height=None)
        assert compute_vertical_velocity(previous, 100.0, 1.1) is None

    def test_undefined_without_current_height(self) -> None:
        previous = DerivedPose(frame=PoseFrame(timestamp=1.0), hip_height=100.0)
        assert compute_vertical_velocity(previous, None, 1.1) is None

    def test_undefined_when_time_does_not_advance(self) -> None:
        previous = DerivedPose(frame=PoseFrame(timestamp=1.0), hip_height=100.0)
        assert compute_vertical_velocity(previous, 105.0, 1.0) is None


class TestSignalDeriver:
    """Tests for the SignalDeriver class."""

    def test_first_frame_has_no_velocity(self) -> None:
        deriver = SignalDeriver()
        derived = deriver.derive(_hips(0.0, 0.5))

        assert derived.hip_height == pytest.approx(100.0)
        assert derived.vertical_velocity is None

    def test_stationary_hips_give_zero_velocity(self) -> None:
        """Zero motion is a defined zero, not a missing signal."""
        deriver = SignalDeriver()
        deriver.derive(_hips(0.0, 0.5))
        derived = deriver.derive(_hips(0.1, 0.5))

        assert derived.vertical_velocity == 0.0

    def test_low_confidence_frame_breaks_velocity_chain(self) -> None:
        """Velocity needs two consecutive frames with hip height."""
        deriver = SignalDeriver(AnalysisSettings(joint_confidence_threshold=0.3))

        deriver.derive(_hips(0.0, 0.5))
        gap = deriver.derive(_hips(0.1, 0.45, confidence=0.2))
        after_gap = deriver.derive(_hips(0.2, 0.4))
        next_frame = deriver.derive(_hips(0.3, 0.35))

        assert gap.hip_height is None
        assert gap.vertical_velocity is None
        assert after_gap.hip_height == pytest.approx(120.0)
        assert after_gap.vertical_velocity is None
        assert next_frame.vertical_velocity == pytest.approx(100.0)

    def test_uses_calibration_scale(self) -> None:
        deriver = SignalDeriver(AnalysisSettings(height_calibration_scale=100.0))
        assert deriver.derive(_hips(0.0, 0.5)).hip_height == pytest.approx(50.0)

    def test_reset_drops_previous(self) -> None:
        deriver = SignalDeriver()
        deriver.derive(_hips(0.0, 0.5))
        deriver.reset()

        assert deriver.derive(_hips(0.1, 0.4)).vertical_velocity is None
