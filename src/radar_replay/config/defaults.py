"""
Default Configuration Factory

Builds the default AppConfig from the values in ``constants``.
"""

from radar_replay.config.constants import Constants
from radar_replay.config.models import (
    AppConfig,
    DisplayParams,
    PlaybackParams,
    RecordingParams,
)
from radar_replay.core.display import DisplayMode


def create_default_app_config() -> AppConfig:
    """
    Create default application configuration.

    Returns:
        AppConfig with default parameters
    """
    playback = PlaybackParams(
        default_step=Constants.DEFAULT_STEP,
        start_paused=False,
        staleness_tolerance=Constants.STALENESS_TOLERANCE,
        fine_speed_threshold=Constants.FINE_SPEED_THRESHOLD,
        fine_speed_increment=Constants.FINE_SPEED_INCREMENT,
        coarse_speed_increment=Constants.COARSE_SPEED_INCREMENT,
    )

    recording = RecordingParams(
        beam_count=Constants.BEAM_COUNT,
        beam_max_range=Constants.BEAM_MAX_RANGE,
    )

    display = DisplayParams(
        mode=DisplayMode.CARTESIAN,
        fov_range=Constants.FOV_RANGE,
        fov_azimuth=Constants.FOV_AZIMUTH,
        fov_elevation=Constants.FOV_ELEVATION,
        arc_steps=Constants.FOV_ARC_STEPS,
        truth_marker_size_cartesian=Constants.TRUTH_MARKER_SIZE_CARTESIAN,
        truth_marker_size_spherical=Constants.TRUTH_MARKER_SIZE_SPHERICAL,
        frame_interval_ms=Constants.FRAME_INTERVAL_MS,
        window_width=Constants.WINDOW_WIDTH,
        window_height=Constants.WINDOW_HEIGHT,
    )

    return AppConfig(playback=playback, recording=recording, display=display)
