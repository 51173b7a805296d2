"""Core data types and structures."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from dunksense.core.exceptions import FrameValidationError


class JointName(str, Enum):
    """Body joints a pose source may report."""

    NOSE = "nose"
    LEFT_EYE = "left_eye"
    RIGHT_EYE = "right_eye"
    LEFT_EAR = "left_ear"
    RIGHT_EAR = "right_ear"
    LEFT_SHOULDER = "left_shoulder"
    RIGHT_SHOULDER = "right_shoulder"
    LEFT_ELBOW = "left_elbow"
    RIGHT_ELBOW = "right_elbow"
    LEFT_WRIST = "left_wrist"
    RIGHT_WRIST = "right_wrist"
    LEFT_HIP = "left_hip"
    RIGHT_HIP = "right_hip"
    LEFT_KNEE = "left_knee"
    RIGHT_KNEE = "right_knee"
    LEFT_ANKLE = "left_ankle"
    RIGHT_ANKLE = "right_ankle"


HIP_JOINTS = (JointName.LEFT_HIP, JointName.RIGHT_HIP)
SYMMETRY_JOINTS = (
    JointName.LEFT_SHOULDER,
    JointName.RIGHT_SHOULDER,
    JointName.LEFT_HIP,
    JointName.RIGHT_HIP,
    JointName.LEFT_KNEE,
    JointName.RIGHT_KNEE,
)
TECHNIQUE_JOINTS = (
    JointName.LEFT_KNEE,
    JointName.RIGHT_KNEE,
    JointName.LEFT_ANKLE,
    JointName.RIGHT_ANKLE,
)


@dataclass(frozen=True, slots=True)
class Keypoint:
    """A single joint position with detection confidence.

    Coordinates are normalized [0, 1] relative to frame dimensions,
    with y growing downward.
    """

    x: float
    y: float
    confidence: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y, "confidence": self.confidence}


@dataclass(frozen=True, slots=True)
class PoseFrame:
    """One timestamped set of body keypoints.

    Attributes:
        timestamp: Monotonic capture time in seconds
        joints: Mapping of joint name to keypoint
    """

    timestamp: float
    joints: Mapping[JointName, Keypoint] = field(default_factory=dict)

    def joint(self, name: JointName, min_confidence: float | None = None) -> Keypoint | None:
        """Look up a joint, gated on confidence.

        Args:
            name: Joint to fetch
            min_confidence: Confidence the keypoint must strictly exceed
                (no gating if None)

        Returns:
            The keypoint, or None if missing or not confident enough
        """
        keypoint = self.joints.get(name)
        if keypoint is None:
            return None
        if min_confidence is not None and keypoint.confidence <= min_confidence:
            return None
        return keypoint

    def has_joints(self, names: Iterable[JointName], min_confidence: float) -> bool:
        """Check that every named joint is present above the confidence floor."""
        return all(self.joint(name, min_confidence) is not None for name in names)

    def visible_keypoints(self, min_confidence: float = 0.3) -> dict[JointName, Keypoint]:
        """All keypoints whose confidence exceeds the floor."""
        return {
            name: keypoint
            for name, keypoint in self.joints.items()
            if keypoint.confidence > min_confidence
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "joints": {name.value: kp.to_dict() for name, kp in self.joints.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PoseFrame:
        """Build a frame from its recorded JSON form.

        Raises:
            FrameValidationError: If the structure or joint names are invalid
        """
        try:
            joints = {
                JointName(name): Keypoint(
                    x=float(kp["x"]),
                    y=float(kp["y"]),
                    confidence=float(kp["confidence"]),
                )
                for name, kp in data.get("joints", {}).items()
            }
            return cls(timestamp=float(data["timestamp"]), joints=joints)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise FrameValidationError(f"Malformed pose frame: {e}") from e


class PhaseName(Enum):
    """States in the jump phase state machine, in the only allowed order."""

    PREPARATION = "Preparation"
    TAKEOFF = "Takeoff"
    FLIGHT = "Flight"
    LANDING = "Landing"

    @property
    def order(self) -> int:
        """Position of this phase in the forward sequence."""
        return _PHASE_ORDER.index(self)


_PHASE_ORDER = list(PhaseName)


@dataclass(slots=True)
class DerivedPose:
    """A buffered frame with kinematic signals attached.

    Attributes:
        frame: The accepted pose frame
        hip_height: Hip height in calibrated units, None if hips not confident
        vertical_velocity: Hip height rate of change, None if undefined
        phase: Phase the state machine was in after this frame
    """

    frame: PoseFrame
    hip_height: float | None = None
    vertical_velocity: float | None = None
    phase: PhaseName = PhaseName.PREPARATION

    @property
    def timestamp(self) -> float:
        return self.frame.timestamp


@dataclass(frozen=True, slots=True)
class JumpPhase:
    """A contiguous phase of the analyzed jump.

    Attributes:
        name: Which phase this is
        start_timestamp: When the phase was entered
        end_timestamp: When the next phase was entered (or the last frame)
        key_metrics: Phase-specific summary values
    """

    name: PhaseName
    start_timestamp: float
    end_timestamp: float
    key_metrics: dict[str, float] = field(default_factory=dict)

    @property
    def duration(self) -> float:
        return self.end_timestamp - self.start_timestamp

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name.value,
            "startTimestamp": self.start_timestamp,
            "endTimestamp": self.end_timestamp,
            "keyMetrics": dict(self.key_metrics),
        }


class JumpGrade(Enum):
    """Letter-style grade derived from the overall score."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    BELOW_AVERAGE = "Below Average"
    POOR = "Needs Work"

    @classmethod
    def from_score(cls, score: float) -> JumpGrade:
        if score >= 0.9:
            return cls.EXCELLENT
        if score >= 0.8:
            return cls.GOOD
        if score >= 0.7:
            return cls.AVERAGE
        if score >= 0.6:
            return cls.BELOW_AVERAGE
        return cls.POOR


@dataclass(frozen=True, slots=True)
class JumpAnalysisResult:
    """Final metrics for one analyzed jump.

    Height, velocity and force values rest on uncalibrated scale
    assumptions and are estimates, not measurements.

    Attributes:
        max_height_cm: Hip height range over the window
        contact_time_s: Ground contact time
        flight_time_s: Takeoff to landing time
        takeoff_velocity_mps: Peak takeoff velocity
        landing_force_n: Landing impact estimate
        symmetry_score: Left/right balance [0, 1]
        technique_score: Knee-bend quality [0, 1]
        phases: Phases in the order they were entered
        recommendations: Coaching tips
    """

    max_height_cm: float
    contact_time_s: float
    flight_time_s: float
    takeoff_velocity_mps: float
    landing_force_n: float
    symmetry_score: float
    technique_score: float
    phases: tuple[JumpPhase, ...] = ()
    recommendations: tuple[str, ...] = ()

    @property
    def max_height_inches(self) -> float:
        return self.max_height_cm / 2.54

    @property
    def max_height_feet_display(self) -> str:
        """Height formatted as feet and inches, e.g. 1'2.5"."""
        total_inches = self.max_height_inches
        feet = int(total_inches / 12)
        inches = total_inches % 12
        return f"{feet}'{inches:.1f}\""

    @property
    def power_score(self) -> float:
        """Weighted blend of technique, height (80cm cap) and velocity (4m/s cap)."""
        height_score = min(self.max_height_cm / 80.0, 1.0)
        velocity_score = min(self.takeoff_velocity_mps / 4.0, 1.0)
        return self.technique_score * 0.3 + height_score * 0.4 + velocity_score * 0.3

    @property
    def overall_score(self) -> float:
        return (self.power_score + self.symmetry_score + self.technique_score) / 3.0

    @property
    def grade(self) -> JumpGrade:
        return JumpGrade.from_score(self.overall_score)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase output contract."""
        return {
            "maxHeightCm": self.max_height_cm,
            "contactTimeS": self.contact_time_s,
            "flightTimeS": self.flight_time_s,
            "takeoffVelocityMps": self.takeoff_velocity_mps,
            "landingForceN": self.landing_force_n,
            "symmetryScore": self.symmetry_score,
            "techniqueScore": self.technique_score,
            "phases": [phase.to_dict() for phase in self.phases],
            "recommendations": list(self.recommendations),
        }
