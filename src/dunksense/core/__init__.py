"""Core infrastructure: config, types, exceptions, and logging."""

from dunksense.core.config import (
    AnalysisSettings,
    RecommendationSettings,
    Settings,
    get_settings,
)
from dunksense.core.exceptions import (
    AnalysisError,
    DunkSenseError,
    FrameValidationError,
    InsufficientFramesError,
    NoJumpDetectedError,
    SessionNotActiveError,
)
from dunksense.core.logging import get_logger, setup_logging
from dunksense.core.types import (
    DerivedPose,
    JointName,
    JumpAnalysisResult,
    JumpGrade,
    JumpPhase,
    Keypoint,
    PhaseName,
    PoseFrame,
)

__all__ = [
    # Config
    "Settings",
    "AnalysisSettings",
    "RecommendationSettings",
    "get_settings",
    # Types
    "JointName",
    "Keypoint",
    "PoseFrame",
    "DerivedPose",
    "PhaseName",
    "JumpPhase",
    "JumpGrade",
    "JumpAnalysisResult",
    # Exceptions
    "DunkSenseError",
    "FrameValidationError",
    "AnalysisError",
    "InsufficientFramesError",
    "NoJumpDetectedError",
    "SessionNotActiveError",
    # Logging
    "setup_logging",
    "get_logger",
]
