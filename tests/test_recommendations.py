"""Tests for coaching recommendations."""

from __future__ import annotations

from dunksense.analysis.recommendations import (
    POSITIVE_TIPS,
    POWER_TIPS,
    SYMMETRY_TIPS,
    TECHNIQUE_TIPS,
    generate_recommendations,
)
from dunksense.core.config import RecommendationSettings


class TestGenerateRecommendations:
    """Tests for the rule-based recommendation generator."""

    def test_good_jump_gets_positive_reinforcement(
        self, recommendation_settings: RecommendationSettings
    ) -> None:
        tips = generate_recommendations(45.0, 0.9, 0.9, recommendation_settings)
        assert tips == list(POSITIVE_TIPS)

    def test_low_height_gets_power_tips(
        self, recommendation_settings: RecommendationSettings
    ) -> None:
        tips = generate_recommendations(20.0, 0.9, 0.9, recommendation_settings)
        assert tips == list(POWER_TIPS)

    def test_all_weaknesses_in_fixed_order(
        self, recommendation_settings: RecommendationSettings
    ) -> None:
        """Power, symmetry then technique tips; no positive message."""
        tips = generate_recommendations(10.0, 0.5, 0.5, recommendation_settings)

        assert tips == [*POWER_TIPS, *SYMMETRY_TIPS, *TECHNIQUE_TIPS]

    def test_thresholds_are_exclusive(
        self, recommendation_settings: RecommendationSettings
    ) -> None:
        """Scores exactly at threshold count as good enough."""
        tips = generate_recommendations(30.0, 0.7, 0.7, recommendation_settings)
        assert tips == list(POSITIVE_TIPS)

    def test_custom_thresholds(self) -> None:
        settings = RecommendationSettings(min_height_cm=50.0, min_symmetry=0.95)
        tips = generate_recommendations(45.0, 0.9, 0.9, settings)

        assert tips == [*POWER_TIPS, *SYMMETRY_TIPS]

    def test_is_deterministic(self, recommendation_settings: RecommendationSettings) -> None:
        first = generate_recommendations(25.0, 0.6, 0.8, recommendation_settings)
        second = generate_recommendations(25.0, 0.6, 0.8, recommendation_settings)
        assert first == second
