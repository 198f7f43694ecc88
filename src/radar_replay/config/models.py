"""
Pydantic Configuration Models for Radar Replay

Type-safe configuration models with validation, range checks,
and descriptive error messages.
"""

import logging
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from radar_replay.core.display import DisplayMode

logger = logging.getLogger(__name__)


class PlaybackParams(BaseModel):
    """Playback clock and liveness settings."""

    model_config = ConfigDict(extra="forbid")

    default_step: float = Field(
        0.01,
        description="Clock advance per tick in recording time units (signed, nonzero)",
    )
    start_paused: bool = Field(
        False,
        description="Start playback paused",
    )
    staleness_tolerance: float = Field(
        0.01,
        gt=0,
        description=(
            "A sample is live only if it is newer than time - tolerance. "
            "Must match the recording step cadence."
        ),
    )
    fine_speed_threshold: float = Field(
        0.01,
        ge=0,
        description="|step| at or below this uses the fine speed increment",
    )
    fine_speed_increment: float = Field(
        0.002,
        gt=0,
        description="Speed change applied near zero speed",
    )
    coarse_speed_increment: float = Field(
        0.01,
        gt=0,
        description="Speed change applied above the fine threshold",
    )

    @field_validator("default_step")
    @classmethod
    def validate_default_step(cls, v: float) -> float:
        """Reject a zero step: the clock would never move."""
        if v == 0:
            raise ValueError("default_step must be nonzero")
        return v

    @model_validator(mode="after")
    def validate_increments(self) -> "PlaybackParams":
        """Fine control should actually be finer than coarse control."""
        if self.fine_speed_increment > self.coarse_speed_increment:
            raise ValueError(
                f"fine_speed_increment ({self.fine_speed_increment}) must be <= "
                f"coarse_speed_increment ({self.coarse_speed_increment})"
            )
        return self


class RecordingParams(BaseModel):
    """Layout assumptions about the recording format."""

    model_config = ConfigDict(extra="forbid")

    beam_count: int = Field(
        4,
        ge=1,
        description="Number of beams every step is required to carry",
    )
    beam_max_range: float = Field(
        200_000.0,
        gt=0,
        description="Range assigned to every beam target",
    )

    @field_validator("beam_count")
    @classmethod
    def validate_beam_count(cls, v: int) -> int:
        """The recording format fixes four beams per step."""
        if v != 4:
            logger.warning("beam_count=%d differs from the recording format's 4 beams", v)
        return v


class DisplayParams(BaseModel):
    """Viewer and geometry settings."""

    model_config = ConfigDict(extra="forbid")

    mode: DisplayMode = Field(
        DisplayMode.CARTESIAN,
        description="Initial display frame ('spherical' or 'cartesian')",
    )
    fov_range: float = Field(200_000.0, gt=0, description="Field-of-view range")
    fov_azimuth: float = Field(
        1.5707963267948966,
        gt=0,
        le=6.283185307179586,
        description="Full azimuth extent of the field of view in radians",
    )
    fov_elevation: float = Field(
        1.5707963267948966,
        gt=0,
        le=3.141592653589793,
        description="Full elevation extent of the field of view in radians",
    )
    arc_steps: int = Field(5, ge=1, le=100, description="Segments per wireframe arc")
    truth_marker_size_cartesian: float = Field(1000.0, gt=0)
    truth_marker_size_spherical: float = Field(0.006, gt=0)
    show_trails: bool = Field(True, description="Draw truth history trails")
    show_tracks: bool = Field(False, description="Draw estimated tracks")
    frame_interval_ms: int = Field(
        16,
        ge=1,
        le=1000,
        description="Viewer tick interval in milliseconds",
    )
    window_width: int = Field(1200, ge=320, le=4096)
    window_height: int = Field(900, ge=240, le=2160)


class AppConfig(BaseModel):
    """
    Root configuration container.

    Combines all configuration subsections.
    """

    model_config = ConfigDict(extra="forbid")

    playback: PlaybackParams
    recording: RecordingParams
    display: DisplayParams

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create configuration from dictionary."""
        return cls.model_validate(data)
