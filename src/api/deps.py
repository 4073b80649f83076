"""FastAPI dependencies for the sonification API.

This module turns settings and request overrides into the pipeline
configuration objects.

Example:
    >>> from src.api.deps import build_pipeline_configs
    >>> configs = build_pipeline_configs(get_settings(), SonifyRequest(points=[]))
"""

import logging
from dataclasses import dataclass

from sonify import FrequencyRange, PlayingDuration, SmoothingConfig
from synth import SynthConfig

from .config import Settings, get_settings as _get_settings
from .schemas import SonifyRequest


logger = logging.getLogger(__name__)


# Re-export get_settings for dependency injection
get_settings = _get_settings


@dataclass
class PipelineConfigs:
    """Configuration objects for one sonification request."""

    frequency_range: FrequencyRange
    playing_duration: PlayingDuration
    smoothing_config: SmoothingConfig
    synth_config: SynthConfig
    include_samples: bool
    include_points: bool


def _pick(value, default):
    return default if value is None else value


def get_frequency_range(settings: Settings, request: SonifyRequest | None = None) -> FrequencyRange:
    """Get the frequency band from settings and request overrides."""
    return FrequencyRange(
        min_frequency=_pick(request and request.min_frequency, settings.min_frequency),
        max_frequency=_pick(request and request.max_frequency, settings.max_frequency),
    )


def get_playing_duration(settings: Settings, request: SonifyRequest | None = None) -> PlayingDuration:
    """Get the playing duration policy from settings and request overrides.

    A request giving only `duration_sec` implies the "exactly" policy.
    """
    policy = request.playing_duration if request is not None else None
    duration_sec = request.duration_sec if request is not None else None

    if policy is None:
        policy = "exactly" if duration_sec is not None else settings.default_playing_duration

    if policy != "exactly":
        return PlayingDuration(policy=policy)
    return PlayingDuration.exactly(_pick(duration_sec, settings.default_duration_sec))


def get_smoothing_config(settings: Settings, request: SonifyRequest | None = None) -> SmoothingConfig:
    """Get the smoothing configuration from settings and request overrides."""
    return SmoothingConfig(
        method=_pick(request and request.smoothing_method, settings.default_smoothing_method),
        alpha=_pick(request and request.smoothing_alpha, settings.default_smoothing_alpha),
    )


def get_synth_config(settings: Settings, request: SonifyRequest | None = None) -> SynthConfig:
    """Get the synthesis configuration from settings and request overrides."""
    return SynthConfig(
        sample_rate=settings.sample_rate,
        volume_correction_factor=_pick(
            request and request.volume_correction_factor,
            settings.volume_correction_factor,
        ),
    )


def build_pipeline_configs(
    settings: Settings | None = None,
    request: SonifyRequest | None = None,
) -> PipelineConfigs:
    """Build every pipeline configuration for a request.

    Args:
        settings: Application settings. If None, uses get_settings().
        request: Request with optional overrides.

    Returns:
        PipelineConfigs with settings defaults and request overrides applied.

    Raises:
        SonifyConfigError: If the resulting configuration is invalid.
    """
    if settings is None:
        settings = get_settings()

    configs = PipelineConfigs(
        frequency_range=get_frequency_range(settings, request),
        playing_duration=get_playing_duration(settings, request),
        smoothing_config=get_smoothing_config(settings, request),
        synth_config=get_synth_config(settings, request),
        include_samples=_pick(request and request.include_samples, settings.include_samples_default),
        include_points=_pick(request and request.include_points, settings.include_points_default),
    )

    logger.debug(
        "Pipeline configured: duration=%s smoothing=%s frequencies=%s",
        configs.playing_duration.to_dict(),
        configs.smoothing_config.to_dict(),
        configs.frequency_range.to_dict(),
    )
    return configs
