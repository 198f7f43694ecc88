"""
Display Geometry

Pure geometry for the two display frames. Nothing here draws; every
function returns points or polylines (``(N, 3)`` float arrays) that a
renderer can hand straight to its line/scatter primitives.

Spherical mode places things with ``direct_embedding`` (raw az/el/range on
x/y/z). Cartesian mode uses the true ``spherical_to_cartesian`` transform.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from radar_replay.config.constants import Constants
from radar_replay.core.coordinates import (
    CartesianVector,
    SphericalVector,
    cartesian_to_spherical,
    cartesian_to_spherical_array,
    direct_embedding,
    direct_embedding_array,
    spherical_to_cartesian,
    spherical_to_cartesian_array,
)
from radar_replay.core.display import DisplayMode
from radar_replay.core.entities import BeamState
from radar_replay.core.timeseries import TimeSeries

ORIGIN = np.zeros(3)
CIRCLE_SEGMENTS = 32


# ---------------- Truth markers and trails ----------------

def place_position(position: CartesianVector, mode: DisplayMode) -> Optional[np.ndarray]:
    """
    Display-frame location of a Cartesian position.

    Returns None in spherical mode for a zero-range position, which has no
    azimuth or elevation.
    """
    if mode is DisplayMode.CARTESIAN:
        return position.to_array()
    if position.norm == 0.0:
        return None
    return direct_embedding(cartesian_to_spherical(position)).to_array()


def trail_points(series: TimeSeries, time: float, mode: DisplayMode) -> np.ndarray:
    """
    Display-frame trail of an entity's positions up to ``time``.

    Works for any series whose values have a ``position`` attribute.
    """
    xyz = np.array(
        [value.position.as_tuple() for value in series.trail_before(time)], dtype=float
    ).reshape(-1, 3)
    if mode is DisplayMode.CARTESIAN or xyz.size == 0:
        return xyz
    xyz = xyz[np.linalg.norm(xyz, axis=1) > 0.0]
    if xyz.size == 0:
        return xyz.reshape(0, 3)
    return direct_embedding_array(cartesian_to_spherical_array(xyz))


def marker_size(display, mode: DisplayMode) -> float:
    """Truth marker radius in display units for the given frame."""
    if mode is DisplayMode.SPHERICAL:
        return display.truth_marker_size_spherical
    return display.truth_marker_size_cartesian


# ---------------- Circles ----------------

def circle_polyline(
    center: np.ndarray, radius: float, plane: str = "xy", segments: int = CIRCLE_SEGMENTS
) -> np.ndarray:
    """Closed circle of ``segments`` + 1 points in an axis-aligned plane."""
    theta = np.linspace(0.0, 2.0 * np.pi, segments + 1)
    a, b = radius * np.cos(theta), radius * np.sin(theta)
    zeros = np.zeros_like(theta)
    if plane == "xy":
        offsets = np.column_stack([a, b, zeros])
    elif plane == "yz":
        offsets = np.column_stack([zeros, a, b])
    elif plane == "xz":
        offsets = np.column_stack([a, zeros, b])
    else:
        raise ValueError(f"Unknown plane: {plane!r}")
    return np.asarray(center, dtype=float).reshape(1, 3) + offsets


# ---------------- Beams ----------------

@dataclass
class BeamGlyph:
    """
    Drawable beam.

    Spherical mode: a sphere of radius width/2 at the direct embedding of
    the target. Cartesian mode: a circle at the target facing the sensor,
    with four lines back to the origin forming a cone.
    """

    index: int
    center: np.ndarray
    radius: float
    color: str
    mode: DisplayMode
    cone_lines: List[np.ndarray] = field(default_factory=list)

    def outline(self) -> List[np.ndarray]:
        if self.mode is DisplayMode.SPHERICAL:
            return [circle_polyline(self.center, self.radius, plane) for plane in ("xy", "yz", "xz")]
        return [circle_polyline(self.center, self.radius, "xy")]

    def polylines(self) -> List[np.ndarray]:
        return self.outline() + list(self.cone_lines)


def beam_color(index: int) -> str:
    return Constants.BEAM_COLORS[index % len(Constants.BEAM_COLORS)]


def beam_glyph(beam: BeamState, mode: DisplayMode) -> BeamGlyph:
    color = beam_color(beam.index)
    if mode is DisplayMode.SPHERICAL:
        return BeamGlyph(
            index=beam.index,
            center=direct_embedding(beam.target).to_array(),
            radius=beam.width / 2.0,
            color=color,
            mode=mode,
        )

    center = spherical_to_cartesian(beam.target).to_array()
    radius = beam.target.range * np.sin(beam.width / 2.0)
    cone = [
        np.vstack([ORIGIN, center + radius * axis])
        for axis in (np.array([1.0, 0, 0]), np.array([-1.0, 0, 0]),
                     np.array([0, 1.0, 0]), np.array([0, -1.0, 0]))
    ]
    return BeamGlyph(
        index=beam.index,
        center=center,
        radius=float(radius),
        color=color,
        mode=mode,
        cone_lines=cone,
    )


# ---------------- Field of view ----------------

@dataclass(frozen=True)
class FieldOfView:
    """Sensor coverage: full azimuth/elevation extents at a fixed range."""

    range: float = Constants.FOV_RANGE
    azimuth: float = Constants.FOV_AZIMUTH
    elevation: float = Constants.FOV_ELEVATION
    arc_steps: int = Constants.FOV_ARC_STEPS

    @classmethod
    def from_params(cls, display) -> "FieldOfView":
        return cls(
            range=display.fov_range,
            azimuth=display.fov_azimuth,
            elevation=display.fov_elevation,
            arc_steps=display.arc_steps,
        )


def _arc(fov: FieldOfView, az: np.ndarray, el: np.ndarray) -> np.ndarray:
    rae = np.column_stack([np.full_like(az, fov.range), az, el])
    return spherical_to_cartesian_array(rae)


def fov_wireframe(fov: FieldOfView, mode: DisplayMode) -> List[np.ndarray]:
    """
    Field-of-view wireframe as polylines.

    Spherical mode: one closed rectangle of size (azimuth, elevation)
    centred on the boresight at z = range.

    Cartesian mode: six rays from the origin (four corners, top, bottom)
    and six arcs of ``arc_steps`` segments: the horizontal and vertical
    centre arcs, the top and bottom edges and the left and right edges.
    """
    half_az, half_el = fov.azimuth / 2.0, fov.elevation / 2.0

    if mode is DisplayMode.SPHERICAL:
        corners = np.array(
            [
                [-half_az, -half_el, fov.range],
                [half_az, -half_el, fov.range],
                [half_az, half_el, fov.range],
                [-half_az, half_el, fov.range],
                [-half_az, -half_el, fov.range],
            ]
        )
        return [corners]

    rays = [
        SphericalVector(fov.range, -half_az, half_el),
        SphericalVector(fov.range, half_az, half_el),
        SphericalVector(fov.range, -half_az, -half_el),
        SphericalVector(fov.range, half_az, -half_el),
        SphericalVector(fov.range, 0.0, half_el),
        SphericalVector(fov.range, 0.0, -half_el),
    ]
    lines = [np.vstack([ORIGIN, spherical_to_cartesian(r).to_array()]) for r in rays]

    az_sweep = np.linspace(-half_az, half_az, fov.arc_steps + 1)
    el_sweep = np.linspace(-half_el, half_el, fov.arc_steps + 1)
    const = np.ones(fov.arc_steps + 1)
    lines.extend(
        [
            _arc(fov, az_sweep, 0.0 * const),
            _arc(fov, 0.0 * const, el_sweep),
            _arc(fov, az_sweep, half_el * const),
            _arc(fov, az_sweep, -half_el * const),
            _arc(fov, half_az * const, el_sweep),
            _arc(fov, -half_az * const, el_sweep),
        ]
    )
    return lines
