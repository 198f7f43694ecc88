"""Display-frame selector shared by the session, geometry and viewer."""

from enum import Enum


class DisplayMode(str, Enum):
    """
    Which frame the rendering layer places entities in.

    SPHERICAL draws raw (azimuth, elevation, range) via the direct embedding.
    CARTESIAN draws true Cartesian positions.
    """

    SPHERICAL = "spherical"
    CARTESIAN = "cartesian"
