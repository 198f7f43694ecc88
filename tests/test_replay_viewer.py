"""
Tests for the matplotlib replay viewer (Agg backend, no window).
"""

from types import SimpleNamespace

import matplotlib.pyplot as plt
import pytest

from radar_replay.config.replay_config import ReplayConfig
from radar_replay.core.clock import PlaybackCommand
from radar_replay.core.display import DisplayMode
from radar_replay.core.session import ReplaySession
from radar_replay.visualization.replay_viewer import (
    KEY_BINDINGS,
    ReplayViewer,
    command_for_key,
)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


@pytest.fixture
def viewer(recording_file):
    return ReplayViewer(ReplaySession.from_recording(recording_file))


def _key(name):
    return SimpleNamespace(key=name)


@pytest.mark.unit
class TestKeyBindings:
    @pytest.mark.parametrize(
        "key, command",
        [
            (" ", PlaybackCommand.TOGGLE_PAUSE),
            (",", PlaybackCommand.SPEED_DOWN),
            (".", PlaybackCommand.SPEED_UP),
            ("left", PlaybackCommand.STEP_BACKWARD),
            ("right", PlaybackCommand.STEP_FORWARD),
            ("r", PlaybackCommand.RESET),
        ],
    )
    def test_bound_keys(self, key, command):
        assert command_for_key(key) is command

    def test_unbound_key(self):
        assert command_for_key("q") is None
        assert command_for_key(None) is None

    def test_every_command_has_a_key(self):
        assert set(KEY_BINDINGS.values()) == set(PlaybackCommand)


@pytest.mark.unit
class TestInput:
    def test_space_toggles_pause(self, viewer):
        viewer.on_key(_key(" "))
        assert viewer.session.clock.paused is True

    def test_mode_key(self, viewer):
        viewer.on_key(_key("m"))
        assert viewer.session.mode is DisplayMode.SPHERICAL

    def test_step_while_paused_resolves(self, viewer):
        viewer.on_key(_key(" "))
        viewer.on_key(_key("right"))
        assert viewer.session.time == pytest.approx(0.01)
        assert viewer.session.entities.truths[0].active is True

    def test_speed_keys(self, viewer):
        viewer.on_key(_key("."))
        assert viewer.session.clock.step == pytest.approx(0.012)
        viewer.on_key(_key(","))
        # 0.012 is above the fine threshold, so the way down is coarse
        assert viewer.session.clock.step == pytest.approx(0.002)

    def test_unbound_key_is_ignored(self, viewer):
        viewer.on_key(_key("q"))
        assert viewer.session.time == 0.0
        assert viewer.session.clock.paused is False


@pytest.mark.unit
class TestDrawing:
    def test_animate_frame_advances(self, viewer):
        artists = viewer.animate_frame(0)
        assert viewer.session.time == pytest.approx(0.01)
        assert artists
        assert viewer.elapsed_text.get_text() == "Elapsed: 0.010s"

    def test_draw_both_modes(self, viewer):
        viewer.session.update()
        cartesian = viewer.draw()
        viewer.session.toggle_mode()
        spherical = viewer.draw()
        assert cartesian and spherical
        assert "mode=spherical" in viewer.status_text.get_text()

    def test_view_limits_follow_mode(self, viewer):
        viewer.draw()
        assert viewer.ax.get_xlabel() == "x"
        assert viewer.ax.get_xlim()[1] > 100_000.0
        viewer.session.toggle_mode()
        viewer.draw()
        assert viewer.ax.get_xlabel() == "azimuth [rad]"
        assert viewer.ax.get_xlim()[1] < 1.0

    def test_tracks_drawn_when_enabled(self, make_step, write_recording):
        step = make_step(
            0.01,
            truths={"A": [50_000.0, 0, 0, 0, 0, 0]},
            tracks={"1": {"state": [50_000.0, 0, 10.0, 0, 0, 0]}},
        )
        config = ReplayConfig.create_with_overrides({"display": {"show_tracks": True}})
        session = ReplaySession.from_recording(write_recording([step], "tracks.jsonl"), config)
        viewer = ReplayViewer(session, config)

        plain = ReplaySession.from_recording(write_recording([step], "plain.jsonl"))
        without = len(ReplayViewer(plain).animate_frame(0))
        with_tracks = len(viewer.animate_frame(0))
        assert with_tracks > without
