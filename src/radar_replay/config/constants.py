"""
System Constants for Radar Replay

Read-only default values for playback, recording layout and display.
These are the single source of truth for ``defaults.create_default_app_config``.

Constant categories:
- Playback: clock step, staleness window, speed control increments
- Recording: beam layout assumptions of the recording format
- Display: field-of-view wireframe, marker sizes, colours, frame rate
"""

import math


class Constants:
    """
    Default constants for playback, recording and display.

    This class contains read-only constants that don't change during execution.
    """

    # ========================================================================
    # PLAYBACK
    # ========================================================================

    DEFAULT_STEP = 0.01  # clock advance per tick (recording time units)

    # A sample counts as "live" only if it is no older than this. Tied to the
    # recording cadence: re-derive if the step interval of recordings changes.
    STALENESS_TOLERANCE = 0.01

    FINE_SPEED_THRESHOLD = 0.01  # |step| at or below this uses the fine increment
    FINE_SPEED_INCREMENT = 0.002
    COARSE_SPEED_INCREMENT = 0.01

    # ========================================================================
    # RECORDING FORMAT
    # ========================================================================

    BEAM_COUNT = 4  # every step carries exactly this many beams
    BEAM_MAX_RANGE = 200_000.0  # beams are drawn out to this range

    # ========================================================================
    # DISPLAY
    # ========================================================================

    FOV_RANGE = 200_000.0
    FOV_AZIMUTH = math.pi / 2  # full azimuth extent (radians)
    FOV_ELEVATION = math.pi / 2  # full elevation extent (radians)
    FOV_ARC_STEPS = 5

    TRUTH_MARKER_SIZE_CARTESIAN = 1000.0
    TRUTH_MARKER_SIZE_SPHERICAL = 0.006

    BEAM_COLORS = ("red", "green", "blue", "orange")
    TRUTH_COLOR = "black"
    TRACK_COLOR = "purple"
    FOV_COLOR = "gray"

    FRAME_INTERVAL_MS = 16  # ~60 Hz tick rate for the viewer
    WINDOW_WIDTH = 1200
    WINDOW_HEIGHT = 900
