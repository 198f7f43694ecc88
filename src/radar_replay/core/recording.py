"""
Recording Reader

Reads a step-major simulation recording: newline-delimited JSON, one object
per simulation step:

    {"elapsed": 0.01,
     "truths": {"<id>": [6 numbers], ...},
     "tracks": {"<id>": {"state": [6 numbers], "uncertainty": [...]}, ...},
     "beams": [{"width": w, "position": [az, el]}, ...]}

Parsing is all-or-nothing. A line that is not JSON, or whose structure does
not match the layout above, aborts the whole read. Reading stops at the
first blank line or at end of input.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from pydantic import BaseModel, Field, ValidationError

from .exceptions import RecordingIOError, RecordingParseError

logger = logging.getLogger(__name__)

TruthRecord = Tuple[float, float, float, float, float, float]


class TrackRecord(BaseModel):
    state: TruthRecord
    uncertainty: List[float] = Field(default_factory=list)


class BeamRecord(BaseModel):
    width: float
    position: Tuple[float, float]

    @property
    def azimuth(self) -> float:
        return self.position[0]

    @property
    def elevation(self) -> float:
        return self.position[1]


class StepRecord(BaseModel):
    """One simulation step (one line of the recording)."""

    elapsed: float
    truths: Dict[str, TruthRecord] = Field(default_factory=dict)
    tracks: Dict[str, TrackRecord] = Field(default_factory=dict)
    beams: List[BeamRecord] = Field(default_factory=list)


@dataclass(frozen=True)
class Recording:
    """Parsed steps, in file order. Discarded once pivoted into time series."""

    steps: Tuple[StepRecord, ...]

    def __len__(self) -> int:
        return len(self.steps)

    @property
    def duration(self) -> float:
        if not self.steps:
            return 0.0
        return self.steps[-1].elapsed - self.steps[0].elapsed


def parse_step(line: str, line_number: int) -> StepRecord:
    """Decode a single recording line."""
    try:
        payload = json.loads(line)
    except json.JSONDecodeError as e:
        raise RecordingParseError(line_number, f"invalid JSON ({e.msg})") from e
    try:
        return StepRecord.model_validate(payload)
    except ValidationError as e:
        raise RecordingParseError(line_number, _summarize(e)) from e


def parse_recording(lines: Iterable[str]) -> Recording:
    """
    Parse recording lines into steps.

    Raises:
        RecordingParseError: On the first malformed line.
    """
    steps: List[StepRecord] = []
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            logger.debug("Blank line %d ends the recording", line_number)
            break
        steps.append(parse_step(line, line_number))
    return Recording(steps=tuple(steps))


def load_recording(path: Union[str, Path]) -> Recording:
    """
    Read a recording file in one synchronous pass.

    Raises:
        RecordingIOError: File missing or unreadable
        RecordingParseError: Malformed line
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            recording = parse_recording(f)
    except (OSError, UnicodeDecodeError) as e:
        raise RecordingIOError(path, str(e)) from e

    logger.info(f"Loaded {len(recording)} steps ({recording.duration:.3f}s) from {path}")
    return recording


def _summarize(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "<root>"
    extra = f" (+{error.error_count() - 1} more)" if error.error_count() > 1 else ""
    return f"{location}: {first.get('msg', 'invalid value')}{extra}"
