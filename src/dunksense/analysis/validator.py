"""Frame validation and joint availability checks.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from typing import Any

from dunksense.core.config import AnalysisSettings
from dunksense.core.exceptions import FrameValidationError
from dunksense.core.types import (
    HIP_JOINTS,
    SYMMETRY_JOINTS,
    TECHNIQUE_JOINTS,
    JointName,
    Keypoint,
    PoseFrame,
)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _in_unit_interval(value: Any) -> bool:
    return _is_number(value) and math.isfinite(value) and 0.0 <= value <= 1.0


class FrameValidator:
    """Rejects malformed frames and enforces increasing timestamps.

    A frame that passes validation is accepted into the session even if
    none of its joints are confident; joint availability only decides
    which derived signals the frame contributes.
    """

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        """Initialize validator with settings.

        Args:
            settings: Analysis parameters (uses defaults if None)
        """
        self.settings = settings or AnalysisSettings()
        self._last_timestamp: float | None = None

    @property
    def last_timestamp(self) -> float | None:
        """Timestamp of the most recently accepted frame."""
        return self._last_timestamp

    def reset(self) -> None:
        """Forget the last accepted timestamp."""
        self._last_timestamp = None

    def validate(self, frame: PoseFrame | Mapping[str, Any]) -> PoseFrame:
        """Validate a frame and mark its timestamp as accepted.

        Args:
            frame: Pose frame, or its recorded dict form

        Returns:
            The accepted frame

        Raises:
            FrameValidationError: If the frame is malformed or not newer
                than the last accepted frame
        """
        if isinstance(frame, Mapping):
            frame = PoseFrame.from_dict(frame)
        if not isinstance(frame, PoseFrame):
            raise FrameValidationError(f"Expected PoseFrame, got {type(frame).__name__}")

        timestamp = frame.timestamp
        if not _is_number(timestamp) or not math.isfinite(timestamp):
            raise FrameValidationError(f"Invalid timestamp: {timestamp!r}")

        self._check_joints(frame)

        if self._last_timestamp is not None and timestamp <= self._last_timestamp:
            raise FrameValidationError(
                f"Non-monotonic timestamp {timestamp:.4f} "
                f"(last accepted {self._last_timestamp:.4f})"
            )

        self._last_timestamp = float(timestamp)
        return frame

    def _check_joints(self, frame: PoseFrame) -> None:
        if not isinstance(frame.joints, Mapping):
            raise FrameValidationError("Joints must be a mapping")

        for name, keypoint in frame.joints.items():
            try:
                JointName(name)
            except ValueError as e:
                raise FrameValidationError(f"Unknown joint: {name!r}") from e

            if not isinstance(keypoint, Keypoint):
                raise FrameValidationError(f"Joint {name!r} is not a Keypoint")

            if not (
                _in_unit_interval(keypoint.x)
                and _in_unit_interval(keypoint.y)
                and _in_unit_interval(keypoint.confidence)
            ):
                raise FrameValidationError(f"Joint {name!r} has values outside [0, 1]")

    def supports_hip_height(self, frame: PoseFrame) -> bool:
        """Both hips confident enough to derive hip height."""
        return frame.has_joints(HIP_JOINTS, self.settings.joint_confidence_threshold)

    def supports_symmetry(self, frame: PoseFrame) -> bool:
        """Shoulders, hips and knees confident enough for symmetry scoring."""
        return frame.has_joints(SYMMETRY_JOINTS, self.settings.joint_confidence_threshold)

    def supports_technique(self, frame: PoseFrame) -> bool:
        """Knees and ankles confident enough for technique scoring."""
        return frame.has_joints(TECHNIQUE_JOINTS, self.settings.joint_confidence_threshold)
