"""Radar Replay: scrub through recorded radar tracking scenarios."""

__version__ = "0.1.0"
