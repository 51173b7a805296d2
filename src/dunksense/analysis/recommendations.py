"""Rule-based coaching recommendations.

Pure functions, no I/O.
"""

from __future__ import annotations

from dunksense.core.config import RecommendationSettings

POWER_TIPS = (
    "Focus on explosive power training to increase jump height",
    "Work on plyometric exercises like box jumps and depth jumps",
)
SYMMETRY_TIPS = (
    "Improve body symmetry with unilateral strength training",
    "Focus on single-leg exercises to balance left-right differences",
)
TECHNIQUE_TIPS = (
    "Work on jump technique - focus on proper knee bend and arm swing",
    "Practice landing mechanics to improve efficiency",
)
POSITIVE_TIPS = (
    "Great technique! Continue with your current training program",
    "Consider increasing training intensity for further improvements",
)


def generate_recommendations(
    max_height_cm: float,
    symmetry_score: float,
    technique_score: float,
    settings: RecommendationSettings | None = None,
) -> list[str]:
    """Map jump scores to coaching tips.

    Tips are emitted in a fixed order: power, symmetry, technique.
    Positive reinforcement is given only when no other rule fires.

    Args:
        max_height_cm: Jump height
        symmetry_score: Left/right balance [0, 1]
        technique_score: Knee-bend quality [0, 1]
        settings: Thresholds (uses defaults if None)

    Returns:
        Ordered list of recommendation strings
    """
    settings = settings or RecommendationSettings()
    recommendations: list[str] = []

    if max_height_cm < settings.min_height_cm:
        recommendations.extend(POWER_TIPS)

    if symmetry_score < settings.min_symmetry:
        recommendations.extend(SYMMETRY_TIPS)

    if technique_score < settings.min_technique:
        recommendations.extend(TECHNIQUE_TIPS)

    if not recommendations:
        recommendations.extend(POSITIVE_TIPS)

    return recommendations
