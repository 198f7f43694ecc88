"""
Pytest configuration and shared fixtures.

This file provides common fixtures and configuration for all tests.
"""

import json
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest  # noqa: E402

# Add src/ to path so tests run without an editable install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from radar_replay.config.replay_config import ReplayConfig  # noqa: E402

# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def default_config():
    """Provide a fresh default ReplayConfig."""
    return ReplayConfig.create_default()


# ============================================================================
# Recording Builders
# ============================================================================


def default_beams(count=4, width=0.05):
    """``count`` beams spread out in azimuth."""
    return [{"width": width, "position": [0.1 * i, -0.05 * i]} for i in range(count)]


def truth_record(x, y, z, vx=0.0, vy=0.0, vz=0.0):
    """Six-number record whose display-axis position is (x, y, z)."""
    return [z, vx, x, vy, y, vz]


@pytest.fixture
def make_step():
    """Build one recording step as a dict."""

    def _make_step(elapsed, truths=None, tracks=None, beams=None):
        return {
            "elapsed": elapsed,
            "truths": truths or {},
            "tracks": tracks or {},
            "beams": default_beams() if beams is None else beams,
        }

    return _make_step


@pytest.fixture
def write_recording(tmp_path):
    """Write steps to a newline-delimited JSON file and return its path."""

    def _write(steps, name="recording.jsonl"):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            for step in steps:
                f.write((step if isinstance(step, str) else json.dumps(step)) + "\n")
        return path

    return _write


@pytest.fixture
def two_truth_steps(make_step):
    """A present at 0.01 and 0.02, B present only at 0.03."""
    return [
        make_step(0.01, truths={"A": truth_record(1000.0, 0.0, 50_000.0)}),
        make_step(0.02, truths={"A": truth_record(1100.0, 0.0, 50_000.0)}),
        make_step(0.03, truths={"B": truth_record(-2000.0, 500.0, 80_000.0)}),
    ]


@pytest.fixture
def recording_file(write_recording, two_truth_steps):
    """Recording file with the two-truth scenario."""
    return write_recording(two_truth_steps)


@pytest.fixture
def pack_truth():
    """The ``truth_record`` packer, for tests that build their own steps."""
    return truth_record
