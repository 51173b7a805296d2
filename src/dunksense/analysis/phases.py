"""Jump phase state machine.

This module is pure logic with NO I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from dunksense.core.logging import get_logger
from dunksense.core.types import DerivedPose, PhaseName

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class PhaseTransition:
    """Entry into a phase at a frame timestamp."""

    phase: PhaseName
    timestamp: float


class PhaseStateMachine:
    """Single-jump detector driven by hip vertical velocity.

    Transitions (evaluated once per frame with a defined velocity):
        PREPARATION → TAKEOFF: velocity > +threshold (records jump start)
        TAKEOFF → FLIGHT: velocity < -threshold (apex passed)
        FLIGHT → LANDING: apex passed and |velocity| < threshold

    Transitions only move forward and LANDING is terminal. There is no
    hysteresis, so a bounce after landing is not detected as a second
    jump. The FLIGHT → LANDING rule can fire while still airborne if the
    velocity dips below threshold on the way down.
    """

    def __init__(self, velocity_threshold: float = 0.15) -> None:
        """Initialize in PREPARATION.

        Args:
            velocity_threshold: Hip velocity magnitude that triggers transitions
        """
        self.velocity_threshold = velocity_threshold
        self._phase = PhaseName.PREPARATION
        self._jump_start_time: float | None = None
        self._max_height_reached = False
        self._transitions: list[PhaseTransition] = []

    @property
    def current_phase(self) -> PhaseName:
        return self._phase

    @property
    def jump_start_time(self) -> float | None:
        """Timestamp of the frame that triggered TAKEOFF."""
        return self._jump_start_time

    @property
    def max_height_reached(self) -> bool:
        return self._max_height_reached

    @property
    def transitions(self) -> tuple[PhaseTransition, ...]:
        """Phase entries in order, starting with PREPARATION at the first frame."""
        return tuple(self._transitions)

    @property
    def is_complete(self) -> bool:
        return self._phase is PhaseName.LANDING

    def update(self, pose: DerivedPose) -> PhaseName:
        """Advance the state machine with one derived pose.

        Args:
            pose: Pose whose velocity drives the transition

        Returns:
            Phase after processing the pose
        """
        if not self._transitions:
            self._transitions.append(PhaseTransition(PhaseName.PREPARATION, pose.timestamp))

        velocity = pose.vertical_velocity
        if velocity is None:
            return self._phase

        if self._phase is PhaseName.PREPARATION:
            self._handle_preparation(pose.timestamp, velocity)

        elif self._phase is PhaseName.TAKEOFF:
            self._handle_takeoff(pose.timestamp, velocity)

        elif self._phase is PhaseName.FLIGHT:
            self._handle_flight(pose.timestamp, velocity)

        return self._phase

    def _handle_preparation(self, timestamp: float, velocity: float) -> None:
        """Watch for upward hip velocity."""
        if velocity > self.velocity_threshold:
            self._jump_start_time = timestamp
            self._enter(PhaseName.TAKEOFF, timestamp)

    def _handle_takeoff(self, timestamp: float, velocity: float) -> None:
        """Watch for the hips starting to come down."""
        if velocity < -self.velocity_threshold:
            self._max_height_reached = True
            self._enter(PhaseName.FLIGHT, timestamp)

    def _handle_flight(self, timestamp: float, velocity: float) -> None:
        """Watch for vertical motion settling."""
        if self._max_height_reached and abs(velocity) < self.velocity_threshold:
            self._enter(PhaseName.LANDING, timestamp)

    def _enter(self, phase: PhaseName, timestamp: float) -> None:
        logger.info("Phase %s -> %s at t=%.3f", self._phase.value, phase.value, timestamp)
        self._phase = phase
        self._transitions.append(PhaseTransition(phase, timestamp))
