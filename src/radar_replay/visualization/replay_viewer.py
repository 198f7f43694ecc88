"""
Replay Viewer

Matplotlib 3D front end for a ReplaySession: draws the field of view, the
active beams, truth markers and trails, and a small HUD, and maps keyboard
input onto playback commands.

Controls:
    Space        pause / resume
    , or <       slower (or further backwards)
    . or >       faster
    Left/Right   single step
    R            restart from t = 0
    M            switch spherical / Cartesian display
"""

import logging
from typing import Any, Dict, List, Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.animation import FuncAnimation

from radar_replay.config.constants import Constants
from radar_replay.config.replay_config import ReplayConfig
from radar_replay.core.clock import PlaybackCommand
from radar_replay.core.display import DisplayMode
from radar_replay.core.session import ReplaySession
from radar_replay.visualization.geometry import (
    FieldOfView,
    beam_glyph,
    circle_polyline,
    fov_wireframe,
    marker_size,
    place_position,
    trail_points,
)

logger = logging.getLogger(__name__)

KEY_BINDINGS: Dict[str, PlaybackCommand] = {
    " ": PlaybackCommand.TOGGLE_PAUSE,
    ",": PlaybackCommand.SPEED_DOWN,
    "<": PlaybackCommand.SPEED_DOWN,
    ".": PlaybackCommand.SPEED_UP,
    ">": PlaybackCommand.SPEED_UP,
    "left": PlaybackCommand.STEP_BACKWARD,
    "right": PlaybackCommand.STEP_FORWARD,
    "r": PlaybackCommand.RESET,
    "R": PlaybackCommand.RESET,
}
MODE_KEYS = ("m", "M")

HELP_TEXT = "Space: Pause/Resume\n</>: change speed\nLeft/Right: Single step\nR: Restart\nM: Display mode\n"


def command_for_key(key: Optional[str]) -> Optional[PlaybackCommand]:
    """Playback command bound to a matplotlib key name, if any."""
    if key is None:
        return None
    return KEY_BINDINGS.get(key)


class ReplayViewer:
    def __init__(
        self,
        session: ReplaySession,
        config: Optional[ReplayConfig] = None,
        fig: Optional[Any] = None,
    ):
        self.session = session
        self.config = config or ReplayConfig.create_default()
        self.display = self.config.display
        self.fov = FieldOfView.from_params(self.display)

        if fig is None:
            dpi = 100
            fig = plt.figure(
                figsize=(self.display.window_width / dpi, self.display.window_height / dpi),
                dpi=dpi,
            )
        self.fig = fig
        self.ax = self.fig.add_subplot(111, projection="3d")
        self.status_text = self.fig.text(0.01, 0.99, "", va="top", ha="left", family="monospace")
        self.elapsed_text = self.fig.text(0.01, 0.01, "", va="bottom", ha="left")
        self.animation: Optional[FuncAnimation] = None

        self.fig.canvas.mpl_connect("key_press_event", self.on_key)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_key(self, event: Any) -> None:
        key = getattr(event, "key", None)
        if key in MODE_KEYS:
            self.session.toggle_mode()
        else:
            command = command_for_key(key)
            if command is None:
                return
            self.session.apply(command)
            # Steps and resets while paused must still show up on screen
            if self.session.clock.paused:
                self.session.resolve()
        self.draw()

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def animate_frame(self, frame: int) -> List[Any]:
        self.session.update()
        return self.draw()

    def draw(self) -> List[Any]:
        """Redraw the whole scene from the session's current state."""
        ax = self.ax
        ax.cla()
        mode = self.session.mode
        artists: List[Any] = []

        for line in fov_wireframe(self.fov, mode):
            artists.extend(self._plot_polyline(line, Constants.FOV_COLOR, linewidth=0.8))

        for entity in self.session.entities.beams:
            if not entity.active:
                continue
            glyph = beam_glyph(entity.value, mode)
            for line in glyph.polylines():
                artists.extend(self._plot_polyline(line, glyph.color))

        artists.extend(self._draw_positions(self.session.entities.truths, Constants.TRUTH_COLOR))
        if self.display.show_tracks:
            artists.extend(
                self._draw_positions(self.session.entities.tracks, Constants.TRACK_COLOR)
            )

        self._apply_view_limits(mode)
        self.elapsed_text.set_text(self.session.elapsed_text())
        self.status_text.set_text(HELP_TEXT + self.session.status_text())
        artists.extend([self.elapsed_text, self.status_text])
        return artists

    def _draw_positions(self, entities, color: str) -> List[Any]:
        mode = self.session.mode
        size = marker_size(self.display, mode)
        artists: List[Any] = []
        for entity in entities:
            if not entity.active:
                continue
            point = place_position(entity.value.position, mode)
            if point is not None:
                artists.append(
                    self.ax.scatter([point[0]], [point[1]], [point[2]], color=color, s=12.0)
                )
                artists.extend(self._plot_polyline(circle_polyline(point, size), color))
            if self.display.show_trails:
                trail = trail_points(entity.series, self.session.time, mode)
                if len(trail) > 1:
                    artists.extend(self._plot_polyline(trail, color, linewidth=0.8))
        return artists

    def _plot_polyline(self, points: np.ndarray, color: str, linewidth: float = 1.0) -> List[Any]:
        return self.ax.plot(points[:, 0], points[:, 1], points[:, 2], color=color, linewidth=linewidth)

    def _apply_view_limits(self, mode: DisplayMode) -> None:
        ax = self.ax
        if mode is DisplayMode.SPHERICAL:
            half_az, half_el = self.fov.azimuth / 2.0, self.fov.elevation / 2.0
            ax.set_xlim(-half_az, half_az)
            ax.set_ylim(-half_el, half_el)
            ax.set_zlim(0.0, self.fov.range * 1.05)
            ax.set_xlabel("azimuth [rad]")
            ax.set_ylabel("elevation [rad]")
            ax.set_zlabel("range")
        else:
            r = self.fov.range
            ax.set_xlim(-r, r)
            ax.set_ylim(-r, r)
            ax.set_zlim(0.0, r * 1.05)
            ax.set_xlabel("x")
            ax.set_ylabel("y")
            ax.set_zlabel("z")

    # ------------------------------------------------------------------
    # Run loop
    # ------------------------------------------------------------------

    def launch(self) -> None:
        """Open the window and run the tick loop until it is closed."""
        self.session.resolve()
        self.draw()
        self.animation = FuncAnimation(
            self.fig,
            self.animate_frame,
            interval=self.display.frame_interval_ms,
            blit=False,
            cache_frame_data=False,
        )
        logger.info("Viewer started (%s mode)", self.session.mode.value)
        plt.show()
