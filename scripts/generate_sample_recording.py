#!/usr/bin/env python3
"""
Sample Recording Generator

Writes a synthetic recording for trying out the viewer: two targets flying
straight lines through the field of view, a track following the first one,
and four beams sweeping in azimuth.

Usage:
    python scripts/generate_sample_recording.py sample.jsonl --duration 20
"""

import argparse
import json
import math
from pathlib import Path

import numpy as np

STEP = 0.01


def truth_record(position, velocity):
    """Pack display-axis position/velocity into the recording's six-number layout."""
    x, y, z = position
    vx, vy, vz = velocity
    # position = (r[2], r[4], r[0]), velocity = (r[1], r[3], r[5])
    return [z, vx, x, vy, y, vz]


def generate(duration: float, seed: int = 0):
    rng = np.random.default_rng(seed)
    targets = {
        "T1": (np.array([-40_000.0, 5_000.0, 120_000.0]), np.array([800.0, 0.0, -200.0])),
        "T2": (np.array([30_000.0, -10_000.0, 150_000.0]), np.array([-600.0, 150.0, 0.0])),
    }
    steps = int(round(duration / STEP))

    for i in range(1, steps + 1):
        t = round(i * STEP, 6)
        truths = {}
        for key, (p0, v) in targets.items():
            # T2 leaves the recording for the middle third
            if key == "T2" and steps / 3 < i < 2 * steps / 3:
                continue
            truths[key] = truth_record(p0 + v * t, v)

        p0, v = targets["T1"]
        noisy = p0 + v * t + rng.normal(0.0, 200.0, 3)
        tracks = {"1": {"state": truth_record(noisy, v), "uncertainty": [200.0, 200.0, 200.0]}}

        sweep = math.sin(t * 0.5)
        beams = [
            {"width": 0.05, "position": [0.6 * sweep + 0.1 * k, 0.1 * (k - 1.5)]}
            for k in range(4)
        ]
        yield {"elapsed": t, "truths": truths, "tracks": tracks, "beams": beams}


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("output", type=Path)
    parser.add_argument("--duration", type=float, default=20.0)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    count = 0
    with args.output.open("w", encoding="utf-8") as f:
        for step in generate(args.duration, args.seed):
            f.write(json.dumps(step) + "\n")
            count += 1

    print(f"Wrote {count} steps ({args.duration:.1f}s) to {args.output}")


if __name__ == "__main__":
    main()
