"""Pydantic schemas for API request/response models.

This module defines all the request and response schemas used by the
API endpoints, ensuring consistent serialization and validation.

Example:
    >>> from src.api.schemas import SonifyRequest
    >>> request = SonifyRequest(points=[{"time": 0, "value": 1}, {"time": 1, "value": 2}])
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


# =============================================================================
# Health Endpoint
# =============================================================================


class HealthResponse(BaseModel):
    """Response schema for /health endpoint."""

    status: str = Field(
        default="ok",
        description="Service status",
        examples=["ok"],
    )
    app_version: str = Field(
        description="Service version",
        examples=["1.0.0"],
    )
    sample_rate: int = Field(
        description="Sample rate of rendered sweeps in Hz",
        examples=[44100],
    )


# =============================================================================
# Sonify Endpoint
# =============================================================================


class PointSchema(BaseModel):
    """Schema for a single chart point."""

    time: float = Field(
        description="Position on the time axis (x), expected to be >= 0",
        examples=[0.0],
    )
    value: float = Field(
        description="Data value (y) mapped onto a frequency",
        examples=[1.5],
    )


class SonifyRequest(BaseModel):
    """Request schema for /sonify endpoint.

    Omitted parameters fall back to the service settings.
    """

    points: list[PointSchema] = Field(
        description="Chart points in chart order",
        examples=[[{"time": 0, "value": 1}, {"time": 5, "value": 2}, {"time": 10, "value": 3}]],
    )
    min_frequency: float | None = Field(
        default=None,
        gt=0.0,
        description="Frequency of the lowest value in Hz",
        examples=[150.0],
    )
    max_frequency: float | None = Field(
        default=None,
        gt=0.0,
        description="Frequency of the highest value in Hz",
        examples=[2600.0],
    )
    playing_duration: Literal["short", "recommended", "long", "exactly"] | None = Field(
        default=None,
        description="Playing duration policy",
        examples=["recommended"],
    )
    duration_sec: float | None = Field(
        default=None,
        gt=0.0,
        description="Duration in seconds for the 'exactly' policy",
        examples=[5.0],
    )
    smoothing_method: Literal["none", "default", "custom"] | None = Field(
        default=None,
        description="Smoothing method: none, default, or custom",
        examples=["default"],
    )
    smoothing_alpha: float | None = Field(
        default=None,
        gt=0.0,
        le=1.0,
        description="EMA alpha for the 'custom' smoothing method",
        examples=[0.35],
    )
    volume_correction_factor: float | None = Field(
        default=None,
        ge=0.0,
        le=2.0,
        description="Amplitude multiplier (0-2)",
        examples=[1.0],
    )
    include_samples: bool | None = Field(
        default=None,
        description="Include the rendered samples in the response",
    )
    include_points: bool | None = Field(
        default=None,
        description="Include the scaled control points in the response",
    )


class ScaledPointSchema(BaseModel):
    """Schema for a scaled control point."""

    time: float = Field(
        ge=0.0,
        description="Playback time in seconds",
        examples=[1.5],
    )
    frequency: float = Field(
        description="Frequency in Hz",
        examples=[440.0],
    )


class SonifyResponse(BaseModel):
    """Response schema for /sonify endpoint."""

    sample_rate: int = Field(
        description="Sample rate of the sweep in Hz",
        examples=[44100],
    )
    duration_sec: float = Field(
        ge=0.0,
        description="Playback duration of the control points in seconds",
        examples=[3.0],
    )
    sample_count: int = Field(
        ge=0,
        description="Number of samples in the rendered buffer",
        examples=[132301],
    )
    input_point_count: int = Field(
        ge=0,
        description="Number of submitted points",
        examples=[3],
    )
    point_count: int = Field(
        ge=0,
        description="Number of control points after decimation",
        examples=[3],
    )
    decimation_count: int = Field(
        ge=0,
        description="How often the point count was halved",
        examples=[0],
    )
    iterations: int = Field(
        ge=0,
        description="Number of duration fitting iterations",
        examples=[1],
    )
    requested_duration_sec: float = Field(
        description="Duration the fitting started from",
        examples=[3.0],
    )
    maximum_duration_sec: float = Field(
        description="Duration the sweep may not exceed",
        examples=[10.0],
    )
    playing_duration: dict[str, Any] = Field(
        description="Playing duration policy applied",
        examples=[{"policy": "recommended"}],
    )
    smoothing: dict[str, Any] = Field(
        description="Smoothing configuration applied",
        examples=[{"method": "default", "alpha": 0.35}],
    )
    frequency_range: dict[str, float] = Field(
        description="Frequency band applied",
        examples=[{"min_frequency": 150.0, "max_frequency": 2600.0}],
    )
    cancelled: bool = Field(
        default=False,
        description="Whether the sweep was cancelled",
    )
    points: list[ScaledPointSchema] | None = Field(
        default=None,
        description="Scaled control points (if include_points=true)",
    )
    samples: list[float] | None = Field(
        default=None,
        description="Rendered samples (if include_samples=true)",
    )


# =============================================================================
# Error Response
# =============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(
        description="Error code for programmatic handling",
        examples=["INVALID_GRAPH", "SYNTHESIS_FAILED"],
    )
    message: str = Field(
        description="Human-readable error message",
        examples=["The input was too short and thus no sound could be produced"],
    )
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional error context",
    )


class ApiErrorResponse(BaseModel):
    """Standard error response wrapper."""

    error: ErrorDetail = Field(
        description="Error details",
    )
