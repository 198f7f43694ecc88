"""
Replay Session

Holds the state of a replay at a given instant: entities, the playback
clock and the display mode. Everything a renderer or input handler needs is
passed through this object; there are no module-level globals.

Per-frame order inside ``update``:
1. advance the clock (or leave it, if paused)
2. resolve every entity against the clock's time

so all entities observe the same cursor within one frame.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

from radar_replay.config.replay_config import ReplayConfig

from .clock import PlaybackClock, PlaybackCommand, SpeedControl
from .display import DisplayMode
from .entities import EntityKind
from .ingestion import EntitySet, build_entities
from .liveness import resolve_all
from .recording import load_recording

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityView:
    """What the rendering layer consumes for one entity."""

    key: str
    kind: EntityKind
    value: Any
    active: bool


@dataclass
class ReplaySession:
    """
    Replay state container.

    Attributes:
        entities: Truths, tracks and beams built from the recording
        clock: The single playback clock
        mode: Current display frame
        tolerance: Staleness window used by every liveness query
    """

    entities: EntitySet
    clock: PlaybackClock = field(default_factory=PlaybackClock)
    mode: DisplayMode = DisplayMode.CARTESIAN
    tolerance: float = 0.01
    frame_count: int = 0

    @classmethod
    def from_entities(
        cls, entities: EntitySet, config: Optional[ReplayConfig] = None
    ) -> "ReplaySession":
        """Create a session with the clock and display settings from ``config``."""
        config = config or ReplayConfig.create_default()
        playback = config.playback
        clock = PlaybackClock(
            time=0.0,
            step=playback.default_step,
            paused=playback.start_paused,
            speed=SpeedControl(
                fine_threshold=playback.fine_speed_threshold,
                fine_increment=playback.fine_speed_increment,
                coarse_increment=playback.coarse_speed_increment,
            ),
        )
        return cls(
            entities=entities,
            clock=clock,
            mode=config.display.mode,
            tolerance=playback.staleness_tolerance,
        )

    @classmethod
    def from_recording(
        cls, path: Union[str, Path], config: Optional[ReplayConfig] = None
    ) -> "ReplaySession":
        """
        Load, pivot and wrap a recording. Any failure here is fatal.

        Raises:
            RecordingIOError, RecordingParseError, FormatAssumptionViolated
        """
        config = config or ReplayConfig.create_default()
        recording = load_recording(path)
        entities = build_entities(
            recording,
            beam_count=config.recording.beam_count,
            beam_max_range=config.recording.beam_max_range,
        )
        return cls.from_entities(entities, config)

    # ------------------------------------------------------------------
    # Per-frame update
    # ------------------------------------------------------------------

    def update(self) -> int:
        """Advance the clock, then resolve liveness. Returns the active count."""
        self.clock.tick()
        self.frame_count += 1
        return self.resolve()

    def resolve(self) -> int:
        """Resolve every entity at the current clock time without advancing."""
        return resolve_all(self.entities.all(), self.clock.time, self.tolerance)

    def apply(self, command: PlaybackCommand) -> None:
        """Apply an operator command to the clock."""
        self.clock.apply(command)

    # ------------------------------------------------------------------
    # Display mode
    # ------------------------------------------------------------------

    def set_mode(self, mode: DisplayMode) -> None:
        if mode is not self.mode:
            logger.info(f"Display mode: {self.mode.value} -> {mode.value}")
        self.mode = mode

    def toggle_mode(self) -> DisplayMode:
        self.set_mode(
            DisplayMode.CARTESIAN if self.mode is DisplayMode.SPHERICAL else DisplayMode.SPHERICAL
        )
        return self.mode

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def time(self) -> float:
        return self.clock.time

    def snapshot(self) -> List[EntityView]:
        return [
            EntityView(key=e.key, kind=e.kind, value=e.value, active=e.active)
            for e in self.entities.all()
        ]

    def time_bounds(self) -> Tuple[float, float]:
        """Earliest and latest sample time across all entities."""
        series = [e.series for e in self.entities.all()]
        return (
            min(s.start_time for s in series),
            max(s.end_time for s in series),
        )

    def elapsed_text(self) -> str:
        return f"Elapsed: {self.clock.time:.3f}s"

    def status_text(self) -> str:
        return (
            f"step={self.clock.step:+.3f} "
            f"{'PAUSED' if self.clock.paused else 'RUNNING'} "
            f"mode={self.mode.value}"
        )
