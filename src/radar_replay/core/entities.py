"""
Entity Value Types

Per-sample values stored in each entity's TimeSeries, and the bundle that
ties a series to its live projection.

Truth and track records arrive as six numbers whose axis order differs from
the display axes. The mapping is fixed:

    position = (r[2], r[4], r[0])
    velocity = (r[1], r[3], r[5])
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Sequence, Tuple, TypeVar

from .coordinates import CartesianVector, SphericalVector
from .timeseries import LiveEntity, TimeSeries

V = TypeVar("V")

POSITION_INDICES = (2, 4, 0)
VELOCITY_INDICES = (1, 3, 5)


def _pick(record: Sequence[float], indices: Tuple[int, int, int]) -> CartesianVector:
    return CartesianVector(*(float(record[i]) for i in indices))


@dataclass(frozen=True)
class TruthState:
    """Ground-truth kinematic state in display axes."""

    position: CartesianVector
    velocity: CartesianVector = field(default_factory=CartesianVector)

    @classmethod
    def from_record(cls, record: Sequence[float]) -> "TruthState":
        return cls(
            position=_pick(record, POSITION_INDICES),
            velocity=_pick(record, VELOCITY_INDICES),
        )


@dataclass(frozen=True)
class TrackState:
    """Estimated track state plus the tracker's raw uncertainty values."""

    position: CartesianVector
    velocity: CartesianVector = field(default_factory=CartesianVector)
    uncertainty: Tuple[float, ...] = ()

    @classmethod
    def from_record(
        cls, state: Sequence[float], uncertainty: Sequence[float] = ()
    ) -> "TrackState":
        return cls(
            position=_pick(state, POSITION_INDICES),
            velocity=_pick(state, VELOCITY_INDICES),
            uncertainty=tuple(float(u) for u in uncertainty),
        )


@dataclass(frozen=True)
class BeamState:
    """
    One sensor beam at one instant.

    Attributes:
        width: Angular width in radians
        target: Beam centre at the fixed maximum range
        index: Position of the beam in every step's beam list (0..3)
    """

    width: float
    target: SphericalVector
    index: int


class EntityKind(str, Enum):
    TRUTH = "truth"
    TRACK = "track"
    BEAM = "beam"


@dataclass
class ReplayEntity(Generic[V]):
    """An entity's immutable history together with its live projection."""

    key: str
    kind: EntityKind
    series: TimeSeries[V]
    live: LiveEntity[V]

    @property
    def value(self) -> V:
        return self.live.value

    @property
    def active(self) -> bool:
        return self.live.active
