"""
Entity Liveness Resolver

The only writer of LiveEntity state. One generic routine serves every
entity kind; it needs nothing from the value type beyond storing it.
"""

import logging
from typing import Iterable, TypeVar

from .entities import ReplayEntity
from .timeseries import DEFAULT_STALENESS_TOLERANCE, LiveEntity, TimeSeries

logger = logging.getLogger(__name__)

V = TypeVar("V")


def resolve_liveness(
    series: TimeSeries[V],
    live: LiveEntity[V],
    time: float,
    tolerance: float = DEFAULT_STALENESS_TOLERANCE,
) -> bool:
    """
    Update ``live`` from ``series`` at ``time``.

    A stale entity is marked inactive but keeps its last value.

    Returns:
        The new active flag.
    """
    value = series.value_at_or_before(time, tolerance)
    if value is None:
        live.active = False
    else:
        live.active = True
        live.value = value
    return live.active


def resolve_all(
    entities: Iterable[ReplayEntity],
    time: float,
    tolerance: float = DEFAULT_STALENESS_TOLERANCE,
) -> int:
    """
    Resolve every entity against the same ``time``.

    Returns:
        Number of active entities.
    """
    active = 0
    for entity in entities:
        if resolve_liveness(entity.series, entity.live, time, tolerance):
            active += 1
    logger.debug("Resolved at t=%.3f: %d active", time, active)
    return active
