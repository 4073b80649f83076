"""Configuration management for the sonification API service.

This module provides centralized configuration using pydantic-settings,
loading values from environment variables with sensible defaults.

Example:
    >>> from src.api.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.app_name)
    Audiograph Service
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Environment variables use uppercase names matching the attribute names.

    Attributes:
        app_name: Name of the application for OpenAPI docs.
        app_version: API version string.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        sample_rate: Sample rate of rendered sweeps in Hz.
        min_frequency: Default frequency of the lowest value in Hz.
        max_frequency: Default frequency of the highest value in Hz.
        default_playing_duration: Default playing duration policy.
        default_duration_sec: Duration used by the "exactly" policy when
            a request does not give one.
        default_smoothing_method: Default smoothing method.
        default_smoothing_alpha: Default EMA alpha for the "custom" method.
        volume_correction_factor: Default amplitude multiplier (0-2).
        max_points: Maximum number of points accepted per request.
        include_samples_default: Whether to include samples by default.
        include_points_default: Whether to include scaled points by default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = "Audiograph Service"
    app_version: str = "1.0.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Synthesis settings
    sample_rate: int = 44100
    min_frequency: float = 150.0
    max_frequency: float = 2600.0
    volume_correction_factor: float = 1.0

    # Duration defaults
    default_playing_duration: Literal["short", "recommended", "long", "exactly"] = "recommended"
    default_duration_sec: float = 5.0

    # Smoothing defaults
    default_smoothing_method: Literal["none", "default", "custom"] = "default"
    default_smoothing_alpha: float = 0.35

    # Request limits
    max_points: int = 100_000

    # Response defaults
    include_samples_default: bool = False
    include_points_default: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.

    Returns:
        Settings instance with values from environment.
    """
    return Settings()
