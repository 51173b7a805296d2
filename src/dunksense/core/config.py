"""Engine configuration via Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisSettings(BaseSettings):
    """Jump analysis engine parameters.

    The calibration values convert normalized image coordinates into
    physical units under an uncalibrated full-frame assumption. Heights,
    velocities and especially forces derived from them are estimates.
    """

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    window_capacity: int = Field(default=300, gt=0)
    velocity_threshold: float = Field(default=0.15, gt=0)
    joint_confidence_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    height_calibration_scale: float = Field(default=200.0, gt=0)
    velocity_calibration: float = Field(default=0.01, gt=0)
    force_calibration: float = Field(default=1000.0, gt=0)
    optimal_knee_bend: float = Field(default=0.15, gt=0)
    contact_time_s: float = Field(default=0.25, ge=0)
    min_valid_frames: int = Field(default=10, ge=1)


class RecommendationSettings(BaseSettings):
    """Score thresholds below which coaching tips are issued."""

    model_config = SettingsConfigDict(env_prefix="COACH_")

    min_height_cm: float = 30.0
    min_symmetry: float = Field(default=0.7, ge=0.0, le=1.0)
    min_technique: float = Field(default=0.7, ge=0.0, le=1.0)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = "INFO"
    file: str | None = None


class Settings(BaseSettings):
    """Root settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)
    recommendations: RecommendationSettings = Field(default_factory=RecommendationSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings instance."""
    return Settings()
