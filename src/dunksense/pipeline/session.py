"""Jump analysis session orchestration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from dunksense.analysis.buffer import WindowBuffer, hip_height_of
from dunksense.analysis.metrics import MetricsCalculator
from dunksense.analysis.phases import PhaseStateMachine
from dunksense.analysis.recommendations import generate_recommendations
from dunksense.analysis.signals import SignalDeriver
from dunksense.analysis.validator import FrameValidator
from dunksense.core.config import AnalysisSettings, RecommendationSettings
from dunksense.core.exceptions import (
    FrameValidationError,
    InsufficientFramesError,
    NoJumpDetectedError,
    SessionNotActiveError,
)
from dunksense.core.logging import get_logger
from dunksense.core.types import JumpAnalysisResult, PhaseName, PoseFrame

logger = get_logger(__name__)


@dataclass
class AnalysisSession:
    """Mutable state of one running analysis.

    Owned by exactly one JumpAnalysisSession; never shared.
    """

    buffer: WindowBuffer
    validator: FrameValidator
    deriver: SignalDeriver
    state_machine: PhaseStateMachine
    active: bool = True
    first_timestamp: float | None = None
    dropped_frames: int = 0

    @classmethod
    def create(cls, settings: AnalysisSettings) -> AnalysisSession:
        return cls(
            buffer=WindowBuffer(settings.window_capacity),
            validator=FrameValidator(settings),
            deriver=SignalDeriver(settings),
            state_machine=PhaseStateMachine(settings.velocity_threshold),
        )

    @property
    def current_phase(self) -> PhaseName:
        return self.state_machine.current_phase

    @property
    def jump_start_time(self) -> float | None:
        return self.state_machine.jump_start_time

    @property
    def max_height_reached(self) -> bool:
        return self.state_machine.max_height_reached

    @property
    def elapsed_time(self) -> float:
        """Stream time covered by accepted frames."""
        last = self.validator.last_timestamp
        if self.first_timestamp is None or last is None:
            return 0.0
        return last - self.first_timestamp


class JumpAnalysisSession:
    """Session controller for single-jump analysis.

    Coordinates:
    - Frame validation
    - Hip height and velocity derivation
    - Phase state machine
    - Metric calculation and recommendations

    Not thread-safe: one caller at a time may use start/feed/stop/cancel.
    Use one instance per athlete or connection.
    """

    def __init__(
        self,
        settings: AnalysisSettings | None = None,
        recommendation_settings: RecommendationSettings | None = None,
    ) -> None:
        """Initialize controller with settings.

        Args:
            settings: Analysis parameters (uses defaults if None)
            recommendation_settings: Coaching thresholds (uses defaults if None)
        """
        self.settings = settings or AnalysisSettings()
        self.recommendation_settings = recommendation_settings or RecommendationSettings()
        self._calculator = MetricsCalculator(self.settings)
        self._session: AnalysisSession | None = None

    @property
    def is_active(self) -> bool:
        return self._session is not None and self._session.active

    @property
    def current_phase(self) -> PhaseName | None:
        """Current jump phase, or None when no session is running."""
        return self._session.current_phase if self._session else None

    @property
    def elapsed_time(self) -> float:
        return self._session.elapsed_time if self._session else 0.0

    @property
    def frame_count(self) -> int:
        """Number of frames currently buffered."""
        return len(self._session.buffer) if self._session else 0

    @property
    def buffer(self) -> WindowBuffer | None:
        return self._session.buffer if self._session else None

    def start(self) -> None:
        """Discard any previous state and begin accepting frames."""
        if self._session is not None:
            logger.info("Restarting session; discarding %d buffered frames", self.frame_count)
        self._session = AnalysisSession.create(self.settings)
        logger.info("Analysis session started")

    def feed(self, frame: PoseFrame | Mapping[str, Any]) -> bool:
        """Route one frame through validation, derivation and phase detection.

        Never raises on bad input; rejected frames are logged and dropped.

        Args:
            frame: Pose frame (or its dict form)

        Returns:
            True if the frame was accepted into the window
        """
        session = self._session
        if session is None:
            logger.debug("Frame dropped: no active session")
            return False

        try:
            accepted = session.validator.validate(frame)
        except FrameValidationError as e:
            session.dropped_frames += 1
            logger.warning("Frame dropped: %s", e.message)
            return False

        if session.first_timestamp is None:
            session.first_timestamp = accepted.timestamp

        derived = session.deriver.derive(accepted)
        derived.phase = session.state_machine.update(derived)
        session.buffer.append(derived)
        return True

    def stop(self) -> JumpAnalysisResult:
        """End the session and compute the jump analysis.

        The session is discarded whether or not analysis succeeds.

        Returns:
            Completed analysis result

        Raises:
            SessionNotActiveError: If no session is running
            NoJumpDetectedError: If takeoff was never detected
            InsufficientFramesError: If too few frames had usable hips
        """
        session = self._session
        if session is None:
            raise SessionNotActiveError()

        self._session = None
        session.active = False
        logger.info(
            "Analysis session stopped (%d frames buffered, %d dropped, phase %s)",
            len(session.buffer),
            session.dropped_frames,
            session.current_phase.value,
        )

        return self._analyze(session)

    def cancel(self) -> None:
        """Discard the session without analysis. Safe to call repeatedly."""
        if self._session is None:
            return
        self._session.active = False
        self._session = None
        logger.info("Analysis session cancelled")

    def _analyze(self, session: AnalysisSession) -> JumpAnalysisResult:
        if session.jump_start_time is None:
            raise NoJumpDetectedError()

        valid_frames = session.buffer.count(hip_height_of)
        if valid_frames < self.settings.min_valid_frames:
            raise InsufficientFramesError(valid_frames, self.settings.min_valid_frames)

        buffer = session.buffer
        transitions = session.state_machine.transitions
        calculator = self._calculator

        max_height = calculator.max_height_cm(buffer)
        symmetry = calculator.symmetry_score(buffer)
        technique = calculator.technique_score(buffer)

        result = JumpAnalysisResult(
            max_height_cm=max_height,
            contact_time_s=calculator.contact_time_s(),
            flight_time_s=calculator.flight_time_s(buffer, transitions, session.jump_start_time),
            takeoff_velocity_mps=calculator.takeoff_velocity_mps(buffer),
            landing_force_n=calculator.landing_force_n(buffer),
            symmetry_score=symmetry,
            technique_score=technique,
            phases=tuple(calculator.build_phases(buffer, transitions)),
            recommendations=tuple(
                generate_recommendations(
                    max_height, symmetry, technique, self.recommendation_settings
                )
            ),
        )

        logger.info(
            "Jump analyzed: %.1f cm, flight %.3f s, grade %s",
            result.max_height_cm,
            result.flight_time_s,
            result.grade.value,
        )
        return result

    def __enter__(self) -> JumpAnalysisSession:
        """Context manager entry."""
        self.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Context manager exit: cancel if stop() was never called."""
        self.cancel()
