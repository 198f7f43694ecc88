"""
Time Series Store

Entity-major history of one entity: an ordered list of (timestamp, value)
samples plus the two lookups playback needs.

- ``trail_before(t)`` yields every value recorded at or before ``t``. It is
  used to draw an entity's path and says nothing about liveness.
- ``value_at_or_before(t)`` returns the newest value inside the staleness
  window ``(t - tolerance, t]``. A value older than the window is treated
  as absent even though it is the latest known one; this is what makes an
  entity go inactive when it drops out of the recording.

Samples are kept in the order given. The caller supplies non-decreasing
timestamps; nothing is re-sorted.
"""

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, NamedTuple, Optional, Tuple, TypeVar

import numpy as np

from .exceptions import FormatAssumptionViolated

V = TypeVar("V")

DEFAULT_STALENESS_TOLERANCE = 0.01


class Sample(NamedTuple):
    timestamp: float
    value: Any


class TimeSeries(Generic[V]):
    """
    Immutable per-entity history.

    Args:
        samples: (timestamp, value) pairs in non-decreasing timestamp order.
            Must contain at least one sample.

    Raises:
        FormatAssumptionViolated: If ``samples`` is empty.
    """

    __slots__ = ("_samples", "_timestamps")

    def __init__(self, samples: Iterable[Tuple[float, V]]):
        self._samples: Tuple[Sample, ...] = tuple(
            Sample(float(t), v) for t, v in samples
        )
        if not self._samples:
            raise FormatAssumptionViolated("a time series needs at least one sample")
        self._timestamps = np.fromiter(
            (s.timestamp for s in self._samples), dtype=np.float64, count=len(self._samples)
        )
        self._timestamps.setflags(write=False)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __repr__(self) -> str:
        return (
            f"TimeSeries(samples={len(self)}, "
            f"start={self.start_time:.3f}, end={self.end_time:.3f})"
        )

    @property
    def timestamps(self) -> np.ndarray:
        """Read-only view of sample timestamps."""
        return self._timestamps

    @property
    def first(self) -> V:
        return self._samples[0].value

    @property
    def start_time(self) -> float:
        return self._samples[0].timestamp

    @property
    def end_time(self) -> float:
        return self._samples[-1].timestamp

    def trail_before(self, time: float) -> Iterator[V]:
        """
        Lazily yield every value with timestamp <= ``time``, in recorded order.

        Each call returns a fresh iterator.
        """
        return (s.value for s in self._samples if s.timestamp <= time)

    def value_at_or_before(
        self, time: float, tolerance: float = DEFAULT_STALENESS_TOLERANCE
    ) -> Optional[V]:
        """
        Newest value with ``time - tolerance < timestamp <= time``, else None.

        The window is half-open: a sample exactly ``tolerance`` old is stale.
        """
        ts = self._timestamps
        hits = np.flatnonzero((ts <= time) & (ts > time - tolerance))
        if hits.size == 0:
            return None
        return self._samples[int(hits[-1])].value


@dataclass
class LiveEntity(Generic[V]):
    """
    Current projection of a TimeSeries.

    ``value`` keeps the last resolved value even while ``active`` is False.
    Only the liveness resolver writes these fields.
    """

    value: V
    active: bool = False

