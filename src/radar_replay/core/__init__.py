"""
Core replay modules.

This package contains the coordinate transforms, time series store,
recording ingestion, playback clock and liveness resolution.
"""

from .exceptions import (
    ConfigurationError,
    DegenerateVectorError,
    FormatAssumptionViolated,
    RecordingIOError,
    RecordingParseError,
    ReplayError,
    format_exception_message,
)

__all__ = [
    "ReplayError",
    "RecordingIOError",
    "RecordingParseError",
    "FormatAssumptionViolated",
    "DegenerateVectorError",
    "ConfigurationError",
    "format_exception_message",
]
