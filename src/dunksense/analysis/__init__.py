"""Pure analysis logic: validation, signals, phase detection, and metrics.

This package contains NO I/O operations.
All functions operate on typed dataclasses and return results.
"""

from dunksense.analysis.buffer import WindowBuffer
from dunksense.analysis.metrics import MetricsCalculator
from dunksense.analysis.phases import PhaseStateMachine, PhaseTransition
from dunksense.analysis.recommendations import generate_recommendations
from dunksense.analysis.signals import SignalDeriver
from dunksense.analysis.validator import FrameValidator

__all__ = [
    "FrameValidator",
    "WindowBuffer",
    "SignalDeriver",
    "PhaseStateMachine",
    "PhaseTransition",
    "MetricsCalculator",
    "generate_recommendations",
]
