"""
Recording Ingestion

Pivots a step-major Recording into entity-major TimeSeries, once, at startup.

Truths and tracks are keyed by identifier. Each identifier's series holds
only the steps where it appears; absent steps are skipped, never filled in.
Those gaps are what later make an entity inactive.

Beams carry no identifier. Series ``i`` is ``beams[i]`` across all steps, so
every step must carry at least ``beam_count`` beams; a short step is fatal.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Tuple, TypeVar

from .coordinates import SphericalVector
from .entities import (
    BeamState,
    EntityKind,
    ReplayEntity,
    TrackState,
    TruthState,
)
from .exceptions import FormatAssumptionViolated
from .recording import Recording, StepRecord
from .timeseries import LiveEntity, TimeSeries

logger = logging.getLogger(__name__)

R = TypeVar("R")
V = TypeVar("V")

BEAM_COUNT = 4
BEAM_MAX_RANGE = 200_000.0


@dataclass
class EntitySet:
    """All entities built from one recording."""

    truths: List[ReplayEntity[TruthState]]
    tracks: List[ReplayEntity[TrackState]]
    beams: List[ReplayEntity[BeamState]]

    def all(self) -> List[ReplayEntity]:
        return [*self.truths, *self.tracks, *self.beams]

    def __len__(self) -> int:
        return len(self.truths) + len(self.tracks) + len(self.beams)


def collect_ids(
    steps: Tuple[StepRecord, ...], field: Callable[[StepRecord], Mapping[str, R]]
) -> List[str]:
    """Union of identifiers across all steps, in order of first appearance."""
    seen: Dict[str, None] = {}
    for step in steps:
        for key in field(step):
            seen.setdefault(key, None)
    return list(seen)


def pivot_keyed(
    steps: Tuple[StepRecord, ...],
    field: Callable[[StepRecord], Mapping[str, R]],
    convert: Callable[[R], V],
) -> Dict[str, TimeSeries[V]]:
    """
    Two-pass pivot: collect identifiers, then build one series per identifier.

    Args:
        steps: Recording steps in file order
        field: Selects the keyed mapping (truths or tracks) from a step
        convert: Turns one raw record into the stored value
    """
    series: Dict[str, TimeSeries[V]] = {}
    for key in collect_ids(steps, field):
        history = [
            (step.elapsed, convert(field(step)[key]))
            for step in steps
            if key in field(step)
        ]
        series[key] = TimeSeries(history)
    return series


def pivot_beams(
    steps: Tuple[StepRecord, ...],
    beam_count: int = BEAM_COUNT,
    max_range: float = BEAM_MAX_RANGE,
) -> List[TimeSeries[BeamState]]:
    """
    Build ``beam_count`` series by beam position within each step.

    Raises:
        FormatAssumptionViolated: A step carries fewer than ``beam_count`` beams,
            or the recording has no steps at all.
    """
    if not steps:
        raise FormatAssumptionViolated("recording contains no steps")

    histories: List[List[Tuple[float, BeamState]]] = [[] for _ in range(beam_count)]
    for step_index, step in enumerate(steps):
        if len(step.beams) < beam_count:
            raise FormatAssumptionViolated(
                f"expected {beam_count} beams, found {len(step.beams)}",
                step_index=step_index,
            )
        for index in range(beam_count):
            beam = step.beams[index]
            target = SphericalVector(max_range, beam.azimuth, beam.elevation)
            histories[index].append(
                (step.elapsed, BeamState(width=beam.width, target=target, index=index))
            )

    return [TimeSeries(history) for history in histories]


def _entities(
    kind: EntityKind, series: Mapping[str, TimeSeries[V]], active: bool
) -> List[ReplayEntity[V]]:
    return [
        ReplayEntity(key=key, kind=kind, series=s, live=LiveEntity(value=s.first, active=active))
        for key, s in series.items()
    ]


def build_entities(
    recording: Recording,
    beam_count: int = BEAM_COUNT,
    beam_max_range: float = BEAM_MAX_RANGE,
) -> EntitySet:
    """
    Pivot a recording into entities with their initial live state.

    Truths and tracks start inactive: nothing has been resolved yet.
    Beams start active since every step carries every beam.
    """
    steps = recording.steps

    truths = pivot_keyed(steps, lambda s: s.truths, TruthState.from_record)
    tracks = pivot_keyed(
        steps,
        lambda s: s.tracks,
        lambda t: TrackState.from_record(t.state, t.uncertainty),
    )
    beams = pivot_beams(steps, beam_count=beam_count, max_range=beam_max_range)

    entity_set = EntitySet(
        truths=_entities(EntityKind.TRUTH, truths, active=False),
        tracks=_entities(EntityKind.TRACK, tracks, active=False),
        beams=_entities(
            EntityKind.BEAM, {f"beam-{i}": s for i, s in enumerate(beams)}, active=True
        ),
    )
    logger.info(
        f"Pivoted {len(steps)} steps into {len(entity_set.truths)} truths, "
        f"{len(entity_set.tracks)} tracks, {len(entity_set.beams)} beams"
    )
    return entity_set
