"""
Unit tests for recording ingestion.

Tests the step-major to entity-major pivot for truths, tracks and beams.
"""

import math

import pytest

from radar_replay.core.entities import EntityKind, TrackState, TruthState
from radar_replay.core.exceptions import FormatAssumptionViolated
from radar_replay.core.ingestion import (
    BEAM_MAX_RANGE,
    build_entities,
    collect_ids,
    pivot_beams,
    pivot_keyed,
)
from radar_replay.core.recording import Recording, StepRecord


def _recording(steps):
    return Recording(steps=tuple(StepRecord.model_validate(s) for s in steps))


@pytest.mark.unit
class TestCollectIds:
    def test_first_appearance_order(self, make_step):
        rec = _recording(
            [
                make_step(0.01, truths={"Z": [0] * 6}),
                make_step(0.02, truths={"A": [0] * 6, "Z": [0] * 6}),
                make_step(0.03, truths={"M": [0] * 6}),
            ]
        )
        assert collect_ids(rec.steps, lambda s: s.truths) == ["Z", "A", "M"]


@pytest.mark.unit
class TestPivotTruths:
    def test_disjoint_histories(self, two_truth_steps):
        rec = _recording(two_truth_steps)
        series = pivot_keyed(rec.steps, lambda s: s.truths, TruthState.from_record)

        assert set(series) == {"A", "B"}
        assert [s.timestamp for s in series["A"]] == [0.01, 0.02]
        assert [s.timestamp for s in series["B"]] == [0.03]

    def test_pivot_is_complete(self, two_truth_steps):
        """Every (identifier, step) occurrence lands in exactly one series."""
        rec = _recording(two_truth_steps)
        series = pivot_keyed(rec.steps, lambda s: s.truths, TruthState.from_record)
        occurrences = sum(len(step.truths) for step in rec.steps)
        assert sum(len(s) for s in series.values()) == occurrences

    def test_axis_permutation(self, make_step):
        rec = _recording([make_step(0.01, truths={"A": [1, 2, 3, 4, 5, 6]})])
        state = pivot_keyed(rec.steps, lambda s: s.truths, TruthState.from_record)["A"].first
        assert state.position.as_tuple() == (3.0, 5.0, 1.0)
        assert state.velocity.as_tuple() == (2.0, 4.0, 6.0)

    def test_no_truths(self, make_step):
        rec = _recording([make_step(0.01)])
        assert pivot_keyed(rec.steps, lambda s: s.truths, TruthState.from_record) == {}


@pytest.mark.unit
class TestPivotBeams:
    def test_four_series_by_index(self, make_step):
        rec = _recording([make_step(0.01), make_step(0.02)])
        beams = pivot_beams(rec.steps)

        assert len(beams) == 4
        for index, series in enumerate(beams):
            assert len(series) == 2
            beam = series.first
            assert beam.index == index
            assert beam.target.range == BEAM_MAX_RANGE
            assert beam.target.azimuth == pytest.approx(0.1 * index)
            assert beam.target.elevation == pytest.approx(-0.05 * index)

    def test_too_few_beams(self, make_step):
        rec = _recording([make_step(0.01), make_step(0.02, beams=[])])
        with pytest.raises(FormatAssumptionViolated) as excinfo:
            pivot_beams(rec.steps)
        assert excinfo.value.step_index == 1

    def test_extra_beams_ignored(self, make_step):
        beams = [{"width": 0.1, "position": [0.0, 0.0]}] * 6
        rec = _recording([make_step(0.01, beams=beams)])
        assert len(pivot_beams(rec.steps)) == 4

    def test_no_steps(self):
        with pytest.raises(FormatAssumptionViolated):
            pivot_beams(())

    def test_custom_range(self, make_step):
        rec = _recording([make_step(0.01)])
        assert pivot_beams(rec.steps, max_range=1234.0)[0].first.target.range == 1234.0


@pytest.mark.unit
class TestBuildEntities:
    def test_groups_and_seeds(self, two_truth_steps):
        entities = build_entities(_recording(two_truth_steps))

        assert [e.key for e in entities.truths] == ["A", "B"]
        assert entities.tracks == []
        assert [e.key for e in entities.beams] == ["beam-0", "beam-1", "beam-2", "beam-3"]
        assert len(entities) == 6

    def test_truths_start_inactive_with_first_sample(self, two_truth_steps):
        entities = build_entities(_recording(two_truth_steps))
        a = entities.truths[0]
        assert a.kind is EntityKind.TRUTH
        assert a.active is False
        assert a.value == a.series.first

    def test_beams_start_active(self, two_truth_steps):
        entities = build_entities(_recording(two_truth_steps))
        assert all(b.active for b in entities.beams)
        assert all(b.kind is EntityKind.BEAM for b in entities.beams)

    def test_tracks_use_truth_permutation(self, make_step):
        step = make_step(
            0.01,
            tracks={"9": {"state": [1, 2, 3, 4, 5, 6], "uncertainty": [7.0]}},
        )
        entities = build_entities(_recording([step]))
        track = entities.tracks[0]
        assert isinstance(track.value, TrackState)
        assert track.value.position.as_tuple() == (3.0, 5.0, 1.0)
        assert track.value.uncertainty == (7.0,)
        assert track.active is False

    def test_empty_recording(self):
        with pytest.raises(FormatAssumptionViolated):
            build_entities(Recording(steps=()))

    def test_beam_width_kept(self, make_step):
        entities = build_entities(_recording([make_step(0.01)]))
        assert entities.beams[0].value.width == pytest.approx(0.05)
        assert not math.isnan(entities.beams[3].value.target.azimuth)
