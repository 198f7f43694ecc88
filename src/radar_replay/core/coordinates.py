"""
Coordinate Utilities

Conversions between the radar's spherical frame (range, azimuth, elevation)
and the Cartesian display frame.

Axis convention:
- z is boresight (azimuth = 0, elevation = 0 points along +z)
- x is horizontal, positive azimuth rotates from +z towards +x
- y is up, positive elevation rotates towards +y

Two very different mappings live here:

``spherical_to_cartesian`` / ``cartesian_to_spherical``
    A true coordinate transform pair. Round trip is exact up to floating
    point error for any nonzero vector.

``direct_embedding``
    NOT a coordinate transform. It copies the raw spherical components onto
    display axes (azimuth -> x, elevation -> y, range -> z) without any
    trigonometry, so that the spherical display mode can draw an
    "angle-angle-range" box. It is not the inverse of either function above
    and must never be used to place something in the Cartesian frame.
"""

import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .exceptions import DegenerateVectorError


@dataclass(frozen=True)
class CartesianVector:
    """Cartesian 3-vector in display axes."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @property
    def norm(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)


@dataclass(frozen=True)
class SphericalVector:
    """Radar spherical coordinates; angles in radians."""

    range: float
    azimuth: float
    elevation: float

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.range, self.azimuth, self.elevation)


def cartesian_to_spherical(v: CartesianVector) -> SphericalVector:
    """
    Convert a Cartesian vector to (range, azimuth, elevation).

    Raises:
        DegenerateVectorError: If the vector has zero length. Elevation is
            undefined there, so callers must guard this case themselves.
    """
    r = v.norm
    if r == 0.0:
        raise DegenerateVectorError()
    # Clamp guards asin against |y| / r drifting just past 1.0
    ratio = max(-1.0, min(1.0, v.y / r))
    return SphericalVector(range=r, azimuth=math.atan2(v.x, v.z), elevation=math.asin(ratio))


def spherical_to_cartesian(s: SphericalVector) -> CartesianVector:
    """Convert (range, azimuth, elevation) to a Cartesian vector."""
    r_h = s.range * math.cos(s.elevation)
    return CartesianVector(
        x=r_h * math.sin(s.azimuth),
        y=s.range * math.sin(s.elevation),
        z=r_h * math.cos(s.azimuth),
    )


def direct_embedding(s: SphericalVector) -> CartesianVector:
    """
    Place raw spherical components on display axes: (az, el, range) -> (x, y, z).

    Used only by the spherical display mode. See the module docstring.
    """
    return CartesianVector(x=s.azimuth, y=s.elevation, z=s.range)


# ---------------- Batch helpers ----------------

def spherical_to_cartesian_array(rae: np.ndarray) -> np.ndarray:
    """Vectorized ``spherical_to_cartesian`` for an (N,3) array of [range, az, el]."""
    rae = np.asarray(rae, dtype=np.float64).reshape(-1, 3)
    r, az, el = rae[:, 0], rae[:, 1], rae[:, 2]
    r_h = r * np.cos(el)
    return np.column_stack([r_h * np.sin(az), r * np.sin(el), r_h * np.cos(az)])


def cartesian_to_spherical_array(xyz: np.ndarray) -> np.ndarray:
    """
    Vectorized ``cartesian_to_spherical`` for an (N,3) array of [x, y, z].

    Raises:
        DegenerateVectorError: If any row has zero length.
    """
    xyz = np.asarray(xyz, dtype=np.float64).reshape(-1, 3)
    r = np.linalg.norm(xyz, axis=1)
    if np.any(r == 0.0):
        raise DegenerateVectorError()
    az = np.arctan2(xyz[:, 0], xyz[:, 2])
    el = np.arcsin(np.clip(xyz[:, 1] / r, -1.0, 1.0))
    return np.column_stack([r, az, el])


def direct_embedding_array(rae: np.ndarray) -> np.ndarray:
    """Vectorized ``direct_embedding``: columns [range, az, el] -> [az, el, range]."""
    rae = np.asarray(rae, dtype=np.float64).reshape(-1, 3)
    return rae[:, [1, 2, 0]].copy()
