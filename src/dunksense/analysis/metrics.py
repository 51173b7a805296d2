"""Jump metric calculation over a finished session window.

This module is pure logic with NO I/O. Every calculator reads the
window buffer, partitioned by the phase tag each pose carries.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from dunksense.analysis.buffer import WindowBuffer, hip_height_of, velocity_of
from dunksense.analysis.phases import PhaseTransition
from dunksense.core.config import AnalysisSettings
from dunksense.core.exceptions import NoJumpDetectedError
from dunksense.core.types import (
    SYMMETRY_JOINTS,
    TECHNIQUE_JOINTS,
    JointName,
    JumpPhase,
    PhaseName,
    PoseFrame,
)

NEUTRAL_SCORE = 0.5

_SYMMETRY_PAIRS = (
    (JointName.LEFT_SHOULDER, JointName.RIGHT_SHOULDER),
    (JointName.LEFT_HIP, JointName.RIGHT_HIP),
    (JointName.LEFT_KNEE, JointName.RIGHT_KNEE),
)


def frame_symmetry(frame: PoseFrame, min_confidence: float = 0.3) -> float | None:
    """Left/right vertical balance of shoulders, hips and knees.

    Returns:
        Mean of (1 - |left.y - right.y|) over the three pairs, or None
        if any of the six joints is not confident
    """
    if not frame.has_joints(SYMMETRY_JOINTS, min_confidence):
        return None

    pair_scores = [
        1.0 - abs(frame.joints[left].y - frame.joints[right].y)
        for left, right in _SYMMETRY_PAIRS
    ]
    return sum(pair_scores) / len(pair_scores)


def frame_technique(
    frame: PoseFrame,
    optimal_bend: float = 0.15,
    min_confidence: float = 0.3,
) -> float | None:
    """Knee bend proximity to the optimum, clamped to [0, 1].

    Knee bend is approximated by the mean vertical knee-to-ankle distance
    in normalized units.

    Returns:
        Technique score, or None if knees/ankles are not confident
    """
    if not frame.has_joints(TECHNIQUE_JOINTS, min_confidence):
        return None

    joints = frame.joints
    left_bend = abs(joints[JointName.LEFT_KNEE].y - joints[JointName.LEFT_ANKLE].y)
    right_bend = abs(joints[JointName.RIGHT_KNEE].y - joints[JointName.RIGHT_ANKLE].y)
    knee_bend = (left_bend + right_bend) / 2.0

    score = 1.0 - abs(knee_bend - optimal_bend) / optimal_bend
    return float(np.clip(score, 0.0, 1.0))


def _mean_score(scores: list[float]) -> float:
    if not scores:
        return NEUTRAL_SCORE
    return float(np.clip(np.mean(scores), 0.0, 1.0))


class MetricsCalculator:
    """Computes height, timing, velocity, force and form scores.

    Conversions rely on configured calibration constants, so velocity and
    especially force values are estimates rather than measurements.
    """

    def __init__(self, settings: AnalysisSettings | None = None) -> None:
        """Initialize calculator with settings.

        Args:
            settings: Analysis parameters (uses defaults if None)
        """
        self.settings = settings or AnalysisSettings()

    def max_height_cm(self, buffer: WindowBuffer) -> float:
        """Range of hip height over the window (0.0 if never defined)."""
        heights = buffer.values(hip_height_of)
        if not heights:
            return 0.0
        return max(heights) - min(heights)

    def landing_timestamp(
        self,
        buffer: WindowBuffer,
        transitions: Sequence[PhaseTransition],
    ) -> float | None:
        """When the athlete landed.

        LANDING entry if it happened, otherwise the last clearly
        descending frame in the window, otherwise None.
        """
        for transition in transitions:
            if transition.phase is PhaseName.LANDING:
                return transition.timestamp

        threshold = self.settings.velocity_threshold
        descending = [
            pose.timestamp
            for pose in buffer
            if pose.vertical_velocity is not None and pose.vertical_velocity < -threshold
        ]
        return descending[-1] if descending else None

    def flight_time_s(
        self,
        buffer: WindowBuffer,
        transitions: Sequence[PhaseTransition],
        jump_start_time: float | None,
    ) -> float:
        """Time from takeoff to landing.

        Raises:
            NoJumpDetectedError: If takeoff never happened
        """
        if jump_start_time is None:
            raise NoJumpDetectedError("Flight time undefined: no takeoff detected")

        landing_time = self.landing_timestamp(buffer, transitions)
        if landing_time is None or landing_time < jump_start_time:
            return 0.0
        return landing_time - jump_start_time

    def contact_time_s(self) -> float:
        """Ground contact time.

        A fixed placeholder: measuring it needs a ground-contact sensor.
        """
        return self.settings.contact_time_s

    def takeoff_velocity_mps(self, buffer: WindowBuffer) -> float:
        """Peak velocity during takeoff, converted to m/s."""
        velocities = buffer.values(velocity_of, PhaseName.TAKEOFF)
        if not velocities:
            return 0.0
        return max(velocities) * self.settings.velocity_calibration

    def landing_force_n(self, buffer: WindowBuffer) -> float:
        """Impact estimate from the most negative landing velocity.

        Not a physical force: real force needs body mass or a force plate.
        """
        velocities = buffer.values(velocity_of, PhaseName.LANDING)
        if not velocities:
            return 0.0
        return abs(min(velocities)) * self.settings.force_calibration

    def symmetry_score(self, buffer: WindowBuffer) -> float:
        """Mean per-frame symmetry; neutral 0.5 if no frame qualifies."""
        threshold = self.settings.joint_confidence_threshold
        scores = [
            score
            for score in (frame_symmetry(pose.frame, threshold) for pose in buffer)
            if score is not None
        ]
        return _mean_score(scores)

    def technique_score(self, buffer: WindowBuffer) -> float:
        """Mean per-frame technique; neutral 0.5 if no frame qualifies."""
        threshold = self.settings.joint_confidence_threshold
        optimal = self.settings.optimal_knee_bend
        scores = [
            score
            for score in (frame_technique(pose.frame, optimal, threshold) for pose in buffer)
            if score is not None
        ]
        return _mean_score(scores)

    def build_phases(
        self,
        buffer: WindowBuffer,
        transitions: Sequence[PhaseTransition],
    ) -> list[JumpPhase]:
        """Summarize each entered phase with its time span and key metrics.

        Args:
            buffer: Session window
            transitions: Phase entries in order

        Returns:
            One JumpPhase per entered phase, in order
        """
        latest = buffer.latest
        phases: list[JumpPhase] = []

        for i, transition in enumerate(transitions):
            if i + 1 < len(transitions):
                end = transitions[i + 1].timestamp
            elif latest is not None:
                end = max(latest.timestamp, transition.timestamp)
            else:
                end = transition.timestamp

            duration = end - transition.timestamp
            phases.append(
                JumpPhase(
                    name=transition.phase,
                    start_timestamp=transition.timestamp,
                    end_timestamp=end,
                    key_metrics=self._phase_metrics(buffer, transition.phase, duration),
                )
            )

        return phases

    def _phase_metrics(
        self,
        buffer: WindowBuffer,
        phase: PhaseName,
        duration: float,
    ) -> dict[str, float]:
        heights = buffer.values(hip_height_of, phase)
        velocities = buffer.values(velocity_of, phase)
        metrics: dict[str, float] = {}

        if phase is PhaseName.PREPARATION:
            if heights:
                metrics["avgHeight"] = float(np.mean(heights))

        elif phase is PhaseName.TAKEOFF:
            if velocities:
                metrics["maxVelocity"] = max(velocities)
                metrics["avgVelocity"] = float(np.mean(velocities))

        elif phase is PhaseName.FLIGHT:
            if heights:
                metrics["maxHeight"] = max(heights)
            metrics["duration"] = duration

        elif phase is PhaseName.LANDING:
            if velocities:
                min_velocity = min(velocities)
                metrics["minVelocity"] = min_velocity
                metrics["impactForce"] = abs(min_velocity) * self.settings.force_calibration

        return metrics
