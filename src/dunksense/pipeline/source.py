"""Pose source interface and adapters.

The engine never talks to a detector directly; anything that yields
PoseFrame objects in time order can drive a session.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from dunksense.core.config import AnalysisSettings, RecommendationSettings
from dunksense.core.exceptions import FrameValidationError
from dunksense.core.logging import get_logger
from dunksense.core.types import JointName, JumpAnalysisResult, Keypoint, PoseFrame
from dunksense.pipeline.session import JumpAnalysisSession

logger = get_logger(__name__)

# MediaPipe pose landmark indices for the joints we track
MEDIAPIPE_JOINT_INDICES: dict[JointName, int] = {
    JointName.NOSE: 0,
    JointName.LEFT_EYE: 2,
    JointName.RIGHT_EYE: 5,
    JointName.LEFT_EAR: 7,
    JointName.RIGHT_EAR: 8,
    JointName.LEFT_SHOULDER: 11,
    JointName.RIGHT_SHOULDER: 12,
    JointName.LEFT_ELBOW: 13,
    JointName.RIGHT_ELBOW: 14,
    JointName.LEFT_WRIST: 15,
    JointName.RIGHT_WRIST: 16,
    JointName.LEFT_HIP: 23,
    JointName.RIGHT_HIP: 24,
    JointName.LEFT_KNEE: 25,
    JointName.RIGHT_KNEE: 26,
    JointName.LEFT_ANKLE: 27,
    JointName.RIGHT_ANKLE: 28,
}


@runtime_checkable
class PoseSource(Protocol):
    """Anything producing a time-ordered stream of pose frames."""

    def frames(self) -> Iterator[PoseFrame]: ...


class SequencePoseSource:
    """Pose source over an in-memory sequence of frames."""

    def __init__(self, frames: Iterable[PoseFrame]) -> None:
        self._frames = list(frames)

    def __len__(self) -> int:
        return len(self._frames)

    def frames(self) -> Iterator[PoseFrame]:
        return iter(self._frames)


class JsonLinesPoseSource:
    """Pose source reading a recording with one JSON frame per line.

    Lines that are not valid frames are logged and skipped.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def frames(self) -> Iterator[PoseFrame]:
        with open(self.path, encoding="utf-8") as f:
            for line_no, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield PoseFrame.from_dict(json.loads(line))
                except (json.JSONDecodeError, FrameValidationError) as e:
                    logger.warning("Skipping %s:%d: %s", self.path.name, line_no, e)


def write_json_lines(frames: Iterable[PoseFrame], path: Path | str) -> int:
    """Record frames in the format JsonLinesPoseSource reads.

    Returns:
        Number of frames written
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with open(out_path, "w", encoding="utf-8") as f:
        for frame in frames:
            f.write(json.dumps(frame.to_dict()) + "\n")
            count += 1
    return count


def frame_from_mediapipe(landmarks: Sequence[Any], timestamp: float) -> PoseFrame:
    """Convert a MediaPipe pose landmark list into a PoseFrame.

    Landmark visibility is used as confidence. Coordinates are clamped
    to [0, 1] since MediaPipe reports off-screen joints outside it.

    Args:
        landmarks: The 33 landmarks of one detected pose
        timestamp: Frame timestamp in seconds
    """
    joints: dict[JointName, Keypoint] = {}

    for name, idx in MEDIAPIPE_JOINT_INDICES.items():
        if idx >= len(landmarks):
            continue
        lm = landmarks[idx]
        visibility = getattr(lm, "visibility", 1.0)
        if visibility is None:
            visibility = 1.0
        joints[name] = Keypoint(
            x=min(max(float(lm.x), 0.0), 1.0),
            y=min(max(float(lm.y), 0.0), 1.0),
            confidence=min(max(float(visibility), 0.0), 1.0),
        )

    return PoseFrame(timestamp=timestamp, joints=joints)


def analyze_source(
    source: PoseSource,
    settings: AnalysisSettings | None = None,
    recommendation_settings: RecommendationSettings | None = None,
) -> JumpAnalysisResult:
    """Run a full session over every frame a source produces.

    Args:
        source: Pose frame producer
        settings: Analysis parameters
        recommendation_settings: Coaching thresholds

    Returns:
        Analysis result

    Raises:
        AnalysisError: If the stream holds no analyzable jump
    """
    session = JumpAnalysisSession(settings, recommendation_settings)
    session.start()

    try:
        for frame in source.frames():
            session.feed(frame)
    except BaseException:
        session.cancel()
        raise

    return session.stop()
