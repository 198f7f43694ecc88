"""
Visualization Module

Display geometry and the interactive replay viewer.

Public API:
- ReplayViewer: Matplotlib 3D viewer driven by a ReplaySession
- FieldOfView / fov_wireframe: Sensor coverage wireframe
- beam_glyph / place_position / trail_points: Per-entity drawing inputs
"""

from radar_replay.visualization.geometry import (
    BeamGlyph,
    FieldOfView,
    beam_color,
    beam_glyph,
    circle_polyline,
    fov_wireframe,
    marker_size,
    place_position,
    trail_points,
)
from radar_replay.visualization.replay_viewer import (
    KEY_BINDINGS,
    ReplayViewer,
    command_for_key,
)

__all__ = [
    "ReplayViewer",
    "KEY_BINDINGS",
    "command_for_key",
    "BeamGlyph",
    "FieldOfView",
    "beam_color",
    "beam_glyph",
    "circle_polyline",
    "fov_wireframe",
    "marker_size",
    "place_position",
    "trail_points",
]
