"""Session orchestration and pose source adapters."""

from dunksense.pipeline.session import AnalysisSession, JumpAnalysisSession
from dunksense.pipeline.source import (
    JsonLinesPoseSource,
    PoseSource,
    SequencePoseSource,
    analyze_source,
    frame_from_mediapipe,
    write_json_lines,
)

__all__ = [
    "AnalysisSession",
    "JumpAnalysisSession",
    "PoseSource",
    "SequencePoseSource",
    "JsonLinesPoseSource",
    "frame_from_mediapipe",
    "write_json_lines",
    "analyze_source",
]
