"""DunkSense: vertical jump analysis from streams of body-pose keypoints."""

from dunksense.core.types import JumpAnalysisResult, PoseFrame
from dunksense.pipeline.session import JumpAnalysisSession

__version__ = "0.1.0"

__all__ = ["JumpAnalysisSession", "JumpAnalysisResult", "PoseFrame", "__version__"]
