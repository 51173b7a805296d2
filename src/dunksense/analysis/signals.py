"""Kinematic signal derivation: hip height and vertical velocity.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from dunksense.core.config import AnalysisSettings
from dunksense.core.types import DerivedPose, JointName, PoseFrame


def compute_hip_height(
    frame: PoseFrame,
    calibration_scale: float = 200.0,
    min_confidence: float = 0.3,
) -> float | None:
    """Estimate hip height from the two hip keypoints.

    Image y grows downward, so height is (1 - mean hip y) scaled to the
    assumed full-frame height.

    Args:
        frame: Pose frame
        calibration_scale: Height represented by the full frame (cm)
        min_confidence: Confidence both hips must exceed

    Returns:
        Hip height, or None if either hip is missing or not confident
    """
    left_hip = frame.joint(JointName.LEFT_HIP, min_confidence)
    right_hip = frame.joint(JointName.RIGHT_HIP, min_confidence)
    if left_hip is None or right_hip is None:
        return None

    avg_hip_y = (left_hip.y + right_hip.y) / 2
    return (1.0 - avg_hip_y) * calibration_scale


def compute_vertical_velocity(
    previous: DerivedPose | None,
    hip_height: float | None,
    timestamp: float,
) -> float | None:
    """Finite-difference hip velocity against the previous pose.

    Undefined (None) rather than zero when either height is missing or
    time did not advance, so callers can tell "no signal" from "no motion".
    """
    if previous is None or previous.hip_height is None or hip_height is None:
        return None

    dt = timestamp - previous.timestamp
    if dt <= 0:
        return None

    return (hip_height - previous.hip_height) / dt


class SignalDeriver:
    """Attaches hip height and velocity to each accepted frame.

    Velocity is always taken against the immediately preceding accepted
    frame, so a frame without hips breaks the velocity chain for the
    frame after it.
    """

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        """Initialize deriver with settings.

        Args:
            settings: Analysis parameters (uses defaults if None)
        """
        self.settings = settings or AnalysisSettings()
        self._previous: DerivedPose | None = None

    def reset(self) -> None:
        """Drop the previous-frame reference."""
        self._previous = None

    def derive(self, frame: PoseFrame) -> DerivedPose:
        """Compute signals for a frame and remember it for the next call.

        Args:
            frame: Validated pose frame

        Returns:
            DerivedPose with hip_height/vertical_velocity set when defined
        """
        hip_height = compute_hip_height(
            frame,
            calibration_scale=self.settings.height_calibration_scale,
            min_confidence=self.settings.joint_confidence_threshold,
        )
        velocity = compute_vertical_velocity(self._previous, hip_height, frame.timestamp)

        derived = DerivedPose(frame=frame, hip_height=hip_height, vertical_velocity=velocity)
        self._previous = derived
        return derived
