"""Pytest fixtures for DunkSense tests."""

from __future__ import annotations

import math
from collections.abc import Callable

import pytest

from dunksense.core.config import AnalysisSettings, RecommendationSettings
from dunksense.core.types import JointName, Keypoint, PoseFrame

FPS = 30.0
FrameFactory = Callable[..., PoseFrame]


def _create_frame(
    timestamp: float,
    hip_height_cm: float = 100.0,
    confidence: float = 0.9,
    left_hip_confidence: float | None = None,
    knee_bend: float = 0.15,
    scale: float = 200.0,
) -> PoseFrame:
    """Create a full-body frame with hips at the given calibrated height.

    Left and right joints share the same y, so the frame is perfectly
    symmetric. Knees sit 0.15 below the hips and ankles `knee_bend` below
    the knees.
    """
    hip_y = 1.0 - hip_height_cm / scale
    shoulder_y = hip_y - 0.2
    knee_y = hip_y + 0.15
    ankle_y = knee_y + knee_bend

    def kp(x: float, y: float, conf: float = confidence) -> Keypoint:
        return Keypoint(x=x, y=y, confidence=conf)

    joints = {
        JointName.NOSE: kp(0.5, max(shoulder_y - 0.1, 0.0)),
        JointName.LEFT_SHOULDER: kp(0.4, shoulder_y),
        JointName.RIGHT_SHOULDER: kp(0.6, shoulder_y),
        JointName.LEFT_HIP: kp(
            0.45,
            hip_y,
            confidence if left_hip_confidence is None else left_hip_confidence,
        ),
        JointName.RIGHT_HIP: kp(0.55, hip_y),
        JointName.LEFT_KNEE: kp(0.45, knee_y),
        JointName.RIGHT_KNEE: kp(0.55, knee_y),
        JointName.LEFT_ANKLE: kp(0.45, ankle_y),
        JointName.RIGHT_ANKLE: kp(0.55, ankle_y),
    }
    return PoseFrame(timestamp=timestamp, joints=joints)


def _jump_heights() -> list[float]:
    """Hip heights for a jump: 10 standing, 1s sine rise 100→130→100, 10 standing."""
    heights = [100.0] * 10
    heights += [100.0 + 30.0 * math.sin(math.pi * i / 30) for i in range(31)]
    heights += [100.0] * 10
    return heights


@pytest.fixture
def frame_factory() -> FrameFactory:
    """Factory building full-body frames at a given hip height."""
    return _create_frame


@pytest.fixture
def analysis_settings() -> AnalysisSettings:
    """Create analysis settings with documented defaults."""
    return AnalysisSettings(
        window_capacity=300,
        velocity_threshold=0.15,
        joint_confidence_threshold=0.3,
        height_calibration_scale=200.0,
        velocity_calibration=0.01,
        force_calibration=1000.0,
        optimal_knee_bend=0.15,
        contact_time_s=0.25,
        min_valid_frames=10,
    )


@pytest.fixture
def recommendation_settings() -> RecommendationSettings:
    """Create recommendation thresholds for testing."""
    return RecommendationSettings(min_height_cm=30.0, min_symmetry=0.7, min_technique=0.7)


@pytest.fixture
def standing_frames() -> list[PoseFrame]:
    """Five frames with constant hip height (no jump)."""
    return [_create_frame(i / FPS, 100.0) for i in range(5)]


@pytest.fixture
def jump_frames() -> list[PoseFrame]:
    """A complete single jump at 30 fps.

    Takeoff triggers on the first rising frame (t=11/30), flight on the
    first frame past the apex (t=26/30) and landing on the first
    standing frame after touchdown (t=41/30).
    """
    return [_create_frame(i / FPS, h) for i, h in enumerate(_jump_heights())]


@pytest.fixture
def low_hip_confidence_frames() -> list[PoseFrame]:
    """Jump frames whose left hip is never confident enough."""
    return [
        _create_frame(i / FPS, h, left_hip_confidence=0.1)
        for i, h in enumerate(_jump_heights())
    ]
