#!/usr/bin/env python3
"""
Radar Replay Entry Point
Delegates to the CLI interface.
"""
import os
import sys

# Make the src/ package importable without installing
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from radar_replay.cli import app  # noqa: E402

if __name__ == "__main__":
    # "python run_replay.py recording.jsonl" is shorthand for "play recording.jsonl"
    if len(sys.argv) == 2 and not sys.argv[1].startswith("-") and sys.argv[1] not in (
        "play",
        "info",
        "probe",
        "export",
        "init-config",
    ):
        sys.argv.insert(1, "play")

    app()
