"""Tests for settings loading and validation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dunksense.core.config import AnalysisSettings, RecommendationSettings, Settings


class TestAnalysisSettings:
    """Tests for engine configuration."""

    def test_documented_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("WINDOW_CAPACITY", "VELOCITY_THRESHOLD", "JOINT_CONFIDENCE_THRESHOLD"):
            monkeypatch.delenv(f"ANALYSIS_{key}", raising=False)

        settings = AnalysisSettings()

        assert settings.window_capacity == 300
        assert settings.velocity_threshold == 0.15
        assert settings.joint_confidence_threshold == 0.3
        assert settings.height_calibration_scale == 200.0
        assert settings.min_valid_frames == 10

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ANALYSIS_WINDOW_CAPACITY", "120")
        monkeypatch.setenv("ANALYSIS_VELOCITY_THRESHOLD", "0.5")

        settings = AnalysisSettings()

        assert settings.window_capacity == 120
        assert settings.velocity_threshold == 0.5

    @pytest.mark.parametrize(
        "overrides",
        [
            {"window_capacity": 0},
            {"velocity_threshold": -0.1},
            {"joint_confidence_threshold": 1.5},
            {"optimal_knee_bend": 0.0},
        ],
    )
    def test_rejects_invalid_values(self, overrides: dict[str, float]) -> None:
        with pytest.raises(ValidationError):
            AnalysisSettings(**overrides)


class TestSettings:
    def test_sections(self) -> None:
        settings = Settings()

        assert isinstance(settings.analysis, AnalysisSettings)
        assert isinstance(settings.recommendations, RecommendationSettings)
        assert settings.logging.level

    def test_recommendation_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("COACH_MIN_HEIGHT_CM", "45")
        assert RecommendationSettings().min_height_cm == 45.0
