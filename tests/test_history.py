"""
Unit Tests for the Classification History
=========================================
"""

import pytest

from thinkcontrol.control.history import HistoryBuffer
from thinkcontrol.core.data_types import ClassificationState, HistoryEntry, Label
from thinkcontrol.core.errors import InvalidArgument


@pytest.fixture
def history(rng, manual_clock):
    return HistoryBuffer(rng, manual_clock)


class TestHistoryBuffer:

    def test_record_builds_entry(self, history):
        entry = history.record(ClassificationState(Label.RIGHT, 0.736))

        assert isinstance(entry, HistoryEntry)
        assert entry.timestamp == "14:05"
        assert entry.label is Label.RIGHT
        assert entry.confidence == 74
        assert isinstance(entry.correct, bool)
        assert history.entries == (entry,)

    def test_timestamp_follows_clock(self, history, manual_clock):
        manual_clock.advance(3600 * 10 + 60 * 7)
        entry = history.record(ClassificationState(Label.LEFT, 0.5))

        assert entry.timestamp == "00:12"

    def test_newest_first_and_bounded(self, history):
        for i in range(25):
            history.record(ClassificationState(Label.LEFT, i / 100))
            assert len(history) <= 10

        confidences = [entry.confidence for entry in history.entries]
        assert confidences == list(range(24, 14, -1))

    def test_maybe_record_rate(self, history):
        state = ClassificationState(Label.LEFT, 0.6)
        recorded = sum(history.maybe_record(state) is not None for _ in range(20000))

        assert recorded / 20000 == pytest.approx(0.1, abs=0.01)

    def test_maybe_record_returns_entry_it_stores(self, rng, manual_clock):
        always = HistoryBuffer(rng, manual_clock, record_probability=1.0)
        entry = always.maybe_record(ClassificationState(Label.RIGHT, 0.8))

        assert always.entries[0] is entry

    def test_maybe_record_never(self, rng, manual_clock):
        never = HistoryBuffer(rng, manual_clock, record_probability=0.0)
        state = ClassificationState(Label.RIGHT, 0.8)

        assert all(never.maybe_record(state) is None for _ in range(500))
        assert len(never) == 0

    def test_correct_rate(self, rng, manual_clock):
        history = HistoryBuffer(rng, manual_clock, capacity=5000)
        state = ClassificationState(Label.LEFT, 0.7)
        for _ in range(5000):
            history.record(state)

        share = sum(entry.correct for entry in history.entries) / 5000
        assert share == pytest.approx(0.7, abs=0.03)

    def test_reset(self, history):
        for _ in range(4):
            history.record(ClassificationState(Label.LEFT, 0.7))

        history.reset()

        assert history.entries == ()
        assert len(history) == 0

    @pytest.mark.parametrize("kwargs", [
        {"capacity": 0},
        {"capacity": 3.0},
        {"record_probability": 1.5},
        {"record_probability": float("nan")},
        {"correct_probability": -0.2},
    ])
    def test_invalid_construction(self, rng, kwargs):
        with pytest.raises(InvalidArgument):
            HistoryBuffer(rng, **kwargs)
