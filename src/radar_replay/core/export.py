"""
Entity Export

Flattens pivoted entity histories into a tabular, entity-major layout and
writes it to CSV with pandas. Rows are grouped by entity (truths, tracks,
beams in that order) and time-ordered within each entity.

Columns:
    key, kind, time                       always present
    x, y, z, vx, vy, vz                   truths and tracks
    range, azimuth, elevation, width      beams
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

import pandas as pd

from .entities import BeamState, ReplayEntity, TrackState, TruthState
from .exceptions import ReplayError

logger = logging.getLogger(__name__)

COLUMNS = [
    "key",
    "kind",
    "time",
    "x",
    "y",
    "z",
    "vx",
    "vy",
    "vz",
    "range",
    "azimuth",
    "elevation",
    "width",
]


def _value_columns(value: Any) -> Dict[str, float]:
    if isinstance(value, (TruthState, TrackState)):
        p, v = value.position, value.velocity
        return {"x": p.x, "y": p.y, "z": p.z, "vx": v.x, "vy": v.y, "vz": v.z}
    if isinstance(value, BeamState):
        t = value.target
        return {
            "range": t.range,
            "azimuth": t.azimuth,
            "elevation": t.elevation,
            "width": value.width,
        }
    raise TypeError(f"Cannot export value of type {type(value).__name__}")


def entity_rows(entities: Iterable[ReplayEntity]) -> List[Dict[str, Any]]:
    """One row per stored sample."""
    rows: List[Dict[str, Any]] = []
    for entity in entities:
        for sample in entity.series:
            row: Dict[str, Any] = {
                "key": entity.key,
                "kind": entity.kind.value,
                "time": sample.timestamp,
            }
            row.update(_value_columns(sample.value))
            rows.append(row)
    return rows


def entities_to_frame(entities: Iterable[ReplayEntity]) -> pd.DataFrame:
    """DataFrame with the fixed column set; inapplicable cells are NaN."""
    return pd.DataFrame(entity_rows(entities), columns=COLUMNS)


def export_csv(entities: Iterable[ReplayEntity], output: Union[str, Path]) -> Path:
    """
    Write entity histories to ``output`` as CSV.

    Raises:
        ReplayError: The file could not be written
    """
    output = Path(output)
    df = entities_to_frame(entities)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(output, index=False)
    except OSError as e:
        raise ReplayError(f"Cannot write export '{output}': {e}") from e

    logger.info(f"Exported {len(df)} samples to {output}")
    return output
